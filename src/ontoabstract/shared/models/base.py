"""
Base models for OntoAbstract.
"""

from typing import Any, Dict
from pydantic import BaseModel as PydanticBaseModel
from pydantic.alias_generators import to_camel


class BaseModel(PydanticBaseModel):
    """
    Base model for all OntoAbstract data structures.

    Field names are snake_case in Python and camelCase on the wire, matching
    the OntoUML JSON exchange format.
    """

    class Config:
        # camelCase keys on the wire
        alias_generator = to_camel
        # Allow field population by name or alias
        validate_by_name = True
        # Validate assignments after object creation
        validate_assignment = True
        # Use enum values instead of enum names
        use_enum_values = True
        # OntoUML views carry a "modelElement" key
        protected_namespaces = ()
        extra = "forbid"

    def to_json_dict(self) -> Dict[str, Any]:
        """Dump to a JSON-ready dictionary using wire (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OntoumlModel(BaseModel):
    """
    Base for OntoUML model and diagram elements.

    Keys the engine does not interpret (descriptions, property assignments,
    flags of other tools) are kept so that exported elements round-trip.
    """

    class Config:
        extra = "allow"
