"""
Abstraction Service for OntoAbstract.

Builds a graph of one OntoUML diagram and folds parts, subtypes and aspects
into the classes that own them.
"""

from .graph_node import GraphNode
from .model_graph import ModelGraph
from .models import (
    AbstractionIssue, AbstractionOptions, AbstractionResult, AbstractionRule, IssueSeverity,
)
from .rules import AbstractionRules
from .service import Abstractor, abstract

__all__ = [
    "GraphNode",
    "ModelGraph",
    "AbstractionRules",
    "Abstractor",
    "abstract",
    "AbstractionIssue",
    "AbstractionOptions",
    "AbstractionResult",
    "AbstractionRule",
    "IssueSeverity",
]
