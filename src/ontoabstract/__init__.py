"""
OntoAbstract - abstraction of OntoUML conceptual models.
"""

__version__ = "1.0.0"
__author__ = "OntoAbstract Team"

# Re-export main components for easy access
from .shared.config.settings import get_settings
from .shared.models.project import Project
from .shared.exceptions import OntoAbstractError, AbstractionError, ModelGraphError
from .services.abstraction import (
    Abstractor, abstract, AbstractionIssue, AbstractionOptions, AbstractionResult,
)

__all__ = [
    "get_settings",
    "Project",
    "OntoAbstractError",
    "AbstractionError",
    "ModelGraphError",
    "Abstractor",
    "abstract",
    "AbstractionIssue",
    "AbstractionOptions",
    "AbstractionResult",
]
