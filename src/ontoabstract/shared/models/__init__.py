"""
Shared data models for OntoAbstract.
"""

from .base import BaseModel, OntoumlModel
from .ontouml import (
    AggregationKind, Class, ClassStereotype, ElementReference, Generalization,
    GeneralizationSet, ModelElement, OntoumlElement, OntoumlType, Package, Property,
    Relation, RelationStereotype,
)
from .diagram import (
    ClassView, Diagram, GeneralizationSetView, GeneralizationView, Path, Point,
    Rectangle, RelationView, Text,
)
from .project import Project

__all__ = [
    # Base models
    "BaseModel",
    "OntoumlModel",
    # Semantic elements
    "AggregationKind",
    "Class",
    "ClassStereotype",
    "ElementReference",
    "Generalization",
    "GeneralizationSet",
    "ModelElement",
    "OntoumlElement",
    "OntoumlType",
    "Package",
    "Property",
    "Relation",
    "RelationStereotype",
    # Diagram elements
    "ClassView",
    "Diagram",
    "GeneralizationSetView",
    "GeneralizationView",
    "Path",
    "Point",
    "Rectangle",
    "RelationView",
    "Text",
    # Project
    "Project",
]
