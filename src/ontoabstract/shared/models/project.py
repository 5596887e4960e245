"""
Project: one model package plus the diagrams drawn from it.
"""

from typing import List, Literal, Optional
from pydantic import Field

from .diagram import Diagram
from .ontouml import OntoumlElement, Package


class Project(OntoumlElement):
    type: Literal["Project"] = "Project"
    model: Package
    diagrams: List[Diagram] = Field(default_factory=list)

    def get_diagram(self, diagram_id: str) -> Optional[Diagram]:
        return next((d for d in self.diagrams if d.id == diagram_id), None)

    def find_diagram_showing(self, element_id: str) -> Optional[Diagram]:
        """First diagram with a view of the element, or the view itself."""
        for diagram in self.diagrams:
            if diagram.shows(element_id) or any(v.id == element_id for v in diagram.contents):
                return diagram
        return None

    def add_diagram(self, diagram: Diagram) -> None:
        self.diagrams.append(diagram)
