"""
OntoUML semantic elements: classes, relations, generalizations and packages.

Elements reference each other by id through ``ElementReference``, the same way
the OntoUML JSON exchange format does, so a deep copy of a package is fully
detached from the original.
"""

import re
from enum import Enum
from typing import Annotated, Iterator, List, Literal, Optional, Tuple, Union
from pydantic import Field

from .base import OntoumlModel


class OntoumlType(str, Enum):
    """Values of the ``type`` discriminator."""
    PROJECT = "Project"
    PACKAGE = "Package"
    CLASS = "Class"
    RELATION = "Relation"
    GENERALIZATION = "Generalization"
    GENERALIZATION_SET = "GeneralizationSet"
    PROPERTY = "Property"
    DIAGRAM = "Diagram"
    CLASS_VIEW = "ClassView"
    RELATION_VIEW = "RelationView"
    GENERALIZATION_VIEW = "GeneralizationView"
    GENERALIZATION_SET_VIEW = "GeneralizationSetView"


class AggregationKind(str, Enum):
    """Aggregation kind of a relation end."""
    NONE = "NONE"
    SHARED = "SHARED"
    COMPOSITE = "COMPOSITE"


class ClassStereotype(str, Enum):
    """OntoUML class stereotypes."""
    TYPE = "type"
    HISTORICAL_ROLE = "historicalRole"
    HISTORICAL_ROLE_MIXIN = "historicalRoleMixin"
    EVENT = "event"
    SITUATION = "situation"
    CATEGORY = "category"
    MIXIN = "mixin"
    ROLE_MIXIN = "roleMixin"
    PHASE_MIXIN = "phaseMixin"
    KIND = "kind"
    COLLECTIVE = "collective"
    QUANTITY = "quantity"
    RELATOR = "relator"
    QUALITY = "quality"
    MODE = "mode"
    SUBKIND = "subkind"
    ROLE = "role"
    PHASE = "phase"
    ENUMERATION = "enumeration"
    DATATYPE = "datatype"
    ABSTRACT = "abstract"


class RelationStereotype(str, Enum):
    """OntoUML relation stereotypes."""
    MATERIAL = "material"
    DERIVATION = "derivation"
    COMPARATIVE = "comparative"
    MEDIATION = "mediation"
    CHARACTERIZATION = "characterization"
    EXTERNAL_DEPENDENCE = "externalDependence"
    COMPONENT_OF = "componentOf"
    MEMBER_OF = "memberOf"
    SUBCOLLECTION_OF = "subCollectionOf"
    SUBQUANTITY_OF = "subQuantityOf"
    INSTANTIATION = "instantiation"
    TERMINATION = "termination"
    PARTICIPATIONAL = "participational"
    PARTICIPATION = "participation"
    HISTORICAL_DEPENDENCE = "historicalDependence"
    CREATION = "creation"
    MANIFESTATION = "manifestation"
    BRINGS_ABOUT = "bringsAbout"
    TRIGGERS = "triggers"


# Enum members hash by name, so stereotype families are kept as plain strings
MOMENT_ONLY_STEREOTYPES = frozenset(s.value for s in (
    ClassStereotype.RELATOR, ClassStereotype.MODE, ClassStereotype.QUALITY,
))
EVENT_STEREOTYPES = frozenset([ClassStereotype.EVENT.value])
SITUATION_STEREOTYPES = frozenset([ClassStereotype.SITUATION.value])
NON_ABSTRACTABLE_STEREOTYPES = frozenset(s.value for s in (
    ClassStereotype.TYPE, ClassStereotype.EVENT, ClassStereotype.SITUATION,
    ClassStereotype.DATATYPE, ClassStereotype.ENUMERATION, ClassStereotype.ABSTRACT,
))
PART_WHOLE_STEREOTYPES = frozenset(s.value for s in (
    RelationStereotype.COMPONENT_OF, RelationStereotype.SUBCOLLECTION_OF,
    RelationStereotype.SUBQUANTITY_OF, RelationStereotype.PARTICIPATIONAL,
    RelationStereotype.MEMBER_OF,
))

_CARDINALITY = re.compile(r"^\s*(\d+|\*)\s*(?:\.\.\s*(\d+|\*)\s*)?$")
UNBOUNDED = "*"


def parse_cardinality(value: Optional[str]) -> Tuple[str, str]:
    """
    Split a cardinality string into its bounds.

    ``"1..*"`` -> ``("1", "*")``, ``"1"`` -> ``("1", "1")``, ``"*"`` -> ``("0", "*")``.
    Missing or unreadable values are treated as ``0..*``.
    """
    if not value:
        return "0", UNBOUNDED
    match = _CARDINALITY.match(value)
    if not match:
        return "0", UNBOUNDED
    lower, upper = match.group(1), match.group(2)
    if upper is None:
        if lower == UNBOUNDED:
            return "0", UNBOUNDED
        return lower, lower
    if lower == UNBOUNDED:
        lower = "0"
    return lower, upper


def format_cardinality(lower: str, upper: str) -> str:
    if lower == upper:
        return lower
    return f"{lower}..{upper}"


class ElementReference(OntoumlModel):
    """Reference to another element by type and id."""

    type: str = Field(..., description="Type of the referenced element")
    id: str = Field(..., description="Id of the referenced element")

    @classmethod
    def of(cls, element: "OntoumlElement") -> "ElementReference":
        return cls(type=element.type, id=element.id)


class OntoumlElement(OntoumlModel):
    """Common fields of every identified element."""

    id: str = Field(..., description="Element identifier")
    name: Optional[str] = Field(default=None, description="Element name")
    description: Optional[str] = Field(default=None, description="Free-text description")

    def get_name(self) -> str:
        return self.name or ""


class Property(OntoumlElement):
    """A relation end or a class attribute."""

    type: Literal["Property"] = "Property"
    stereotype: Optional[str] = None
    cardinality: Optional[str] = Field(default=None, description="Cardinality such as '1..*'")
    property_type: Optional[ElementReference] = Field(default=None, description="Type of the end")
    aggregation_kind: Optional[AggregationKind] = Field(default=AggregationKind.NONE)
    is_read_only: bool = Field(default=False, description="End is immutable for the owner")

    @property
    def lower_bound(self) -> int:
        lower, _ = parse_cardinality(self.cardinality)
        return int(lower)

    @property
    def upper_bound(self) -> Optional[int]:
        """Upper bound as a number, ``None`` when unbounded."""
        _, upper = parse_cardinality(self.cardinality)
        return None if upper == UNBOUNDED else int(upper)

    def set_lower_bound(self, value: int) -> None:
        _, upper = parse_cardinality(self.cardinality)
        self.cardinality = format_cardinality(str(value), upper)

    def set_upper_bound(self, value: Optional[int]) -> None:
        lower, _ = parse_cardinality(self.cardinality)
        upper = UNBOUNDED if value is None else str(value)
        if upper != UNBOUNDED and int(lower) > int(upper):
            lower = upper
        self.cardinality = format_cardinality(lower, upper)

    def set_zero_to_many(self) -> None:
        self.cardinality = format_cardinality("0", UNBOUNDED)


class Class(OntoumlElement):
    """An OntoUML class."""

    type: Literal["Class"] = "Class"
    stereotype: Optional[str] = None
    properties: Optional[List[Property]] = Field(default=None, description="Attributes")

    def add_attribute(self, attribute: Property) -> None:
        if self.properties is None:
            self.properties = []
        self.properties.append(attribute)

    @property
    def attributes(self) -> List[Property]:
        return list(self.properties or [])


class Relation(OntoumlElement):
    """A binary relation; ``properties[0]`` is the source end."""

    type: Literal["Relation"] = "Relation"
    stereotype: Optional[str] = None
    properties: List[Property] = Field(default_factory=list, description="Relation ends")

    def get_source_end(self) -> Property:
        return self.properties[0]

    def get_target_end(self) -> Property:
        return self.properties[1]

    def is_part_whole(self) -> bool:
        if self.stereotype in PART_WHOLE_STEREOTYPES:
            return True
        return any(end.aggregation_kind == AggregationKind.COMPOSITE for end in self.properties)


class Generalization(OntoumlElement):
    """Subtype relation from ``specific`` to ``general``."""

    type: Literal["Generalization"] = "Generalization"
    general: ElementReference
    specific: ElementReference


class GeneralizationSet(OntoumlElement):
    """Group of generalizations sharing one general class."""

    type: Literal["GeneralizationSet"] = "GeneralizationSet"
    is_disjoint: bool = False
    is_complete: bool = False
    categorizer: Optional[ElementReference] = None
    generalizations: List[ElementReference] = Field(default_factory=list)


ModelElement = Union[Class, Relation, Generalization, GeneralizationSet]


class Package(OntoumlElement):
    """Container of model elements, possibly nested."""

    type: Literal["Package"] = "Package"
    contents: List[Annotated[
        Union[Class, Relation, Generalization, GeneralizationSet, "Package"],
        Field(discriminator="type"),
    ]] = Field(default_factory=list)

    def iter_elements(self) -> Iterator[OntoumlElement]:
        """Yield every element contained in this package and its sub-packages."""
        for element in self.contents:
            yield element
            if isinstance(element, Package):
                yield from element.iter_elements()

    def get_element_by_id(self, element_id: str) -> Optional[OntoumlElement]:
        return next((e for e in self.iter_elements() if e.id == element_id), None)

    def get_classes(self) -> List[Class]:
        return [e for e in self.iter_elements() if isinstance(e, Class)]

    def get_relations(self) -> List[Relation]:
        return [e for e in self.iter_elements() if isinstance(e, Relation)]


Package.model_rebuild()
