"""
Shared components for OntoAbstract.

Contains common models, configuration and infrastructure used by the
abstraction service and the CLI:

- OntoUML model, diagram and project models
- Centralized configuration management
- Shared exception hierarchy
- Logging setup
"""

from .models import *
from .config import *
from .exceptions import *
from .infrastructure import *

__all__ = [
    # From models
    "BaseModel", "OntoumlModel",
    "AggregationKind", "Class", "ClassStereotype", "ElementReference",
    "Generalization", "GeneralizationSet", "ModelElement", "OntoumlElement",
    "OntoumlType", "Package", "Property", "Relation", "RelationStereotype",
    "ClassView", "Diagram", "GeneralizationSetView", "GeneralizationView",
    "Path", "Point", "Rectangle", "RelationView", "Text", "Project",

    # From config
    "Settings", "get_settings",

    # From exceptions
    "OntoAbstractError", "ValidationError",
    "ModelGraphError", "AbstractionError",

    # From infrastructure
    "get_logger", "setup_logging",
]
