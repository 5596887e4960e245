"""
Diagram (visual) elements: views of model elements and their shapes.
"""

from typing import Annotated, Any, List, Literal, Optional, Union
from pydantic import Discriminator, Field, Tag

from .base import OntoumlModel
from .ontouml import ElementReference, OntoumlElement


class Point(OntoumlModel):
    x: int = 0
    y: int = 0


class Rectangle(OntoumlModel):
    """Box shape of a class view."""

    type: Literal["Rectangle"] = "Rectangle"
    id: str
    x: int = 0
    y: int = 0
    width: int = 100
    height: int = 50

    @property
    def bottom_center(self) -> Point:
        return Point(x=self.x + self.width // 2, y=self.y + self.height)


class Text(Rectangle):
    """Text box shape of a generalization set view."""

    type: Literal["Text"] = "Text"


class Path(OntoumlModel):
    """Polyline shape of a relation or generalization view."""

    type: Literal["Path"] = "Path"
    id: str
    points: List[Point] = Field(default_factory=list)


class ClassView(OntoumlModel):
    type: Literal["ClassView"] = "ClassView"
    id: str
    model_element: ElementReference
    shape: Rectangle


class RelationView(OntoumlModel):
    """View of a relation, drawn from the ``source`` class view to ``target``."""

    type: Literal["RelationView"] = "RelationView"
    id: str
    model_element: ElementReference
    shape: Path
    source: ElementReference
    target: ElementReference


class GeneralizationView(OntoumlModel):
    type: Literal["GeneralizationView"] = "GeneralizationView"
    id: str
    model_element: ElementReference
    shape: Path
    source: ElementReference
    target: ElementReference


class GeneralizationSetView(OntoumlModel):
    type: Literal["GeneralizationSetView"] = "GeneralizationSetView"
    id: str
    model_element: ElementReference
    shape: Text


class OtherView(OntoumlModel):
    """
    Any view kind the abstraction does not process (package, note, link, ...).

    Kept as-is when the project is read and written back; never copied into an
    abstracted diagram.
    """

    type: str
    id: str
    model_element: Optional[ElementReference] = None


ABSTRACTED_VIEW_TYPES = frozenset(["ClassView", "RelationView", "GeneralizationView",
                                   "GeneralizationSetView"])


def _view_kind(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in ABSTRACTED_VIEW_TYPES else "other"


DiagramElement = Annotated[
    Union[
        Annotated[ClassView, Tag("ClassView")],
        Annotated[RelationView, Tag("RelationView")],
        Annotated[GeneralizationView, Tag("GeneralizationView")],
        Annotated[GeneralizationSetView, Tag("GeneralizationSetView")],
        Annotated[OtherView, Tag("other")],
    ],
    Discriminator(_view_kind),
]
ConnectorView = Union[RelationView, GeneralizationView]


class Diagram(OntoumlElement):
    """A diagram depicting part of a model."""

    type: Literal["Diagram"] = "Diagram"
    owner: Optional[ElementReference] = None
    contents: List[DiagramElement] = Field(default_factory=list)

    def get_class_views(self) -> List[ClassView]:
        return [e for e in self.contents if isinstance(e, ClassView)]

    def get_connector_views(self) -> List[ConnectorView]:
        return [e for e in self.contents if isinstance(e, (RelationView, GeneralizationView))]

    def get_generalization_set_views(self) -> List[GeneralizationSetView]:
        return [e for e in self.contents if isinstance(e, GeneralizationSetView)]

    def shows(self, element_id: str) -> bool:
        """Whether any view on this diagram depicts the given model element."""
        return any(view.model_element is not None and view.model_element.id == element_id
                   for view in self.contents)
