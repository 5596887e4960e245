"""
Shared fixtures: small OntoUML projects built the way the JSON exchange
format lays them out.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add the src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from ontoabstract.shared.models.project import Project  # noqa: E402
from ontoabstract.services.abstraction import ModelGraph  # noqa: E402


class ProjectBuilder:
    """Builds a one-diagram project; every element gets one view unless told otherwise."""

    def __init__(self, diagram_name: str = "Diagram"):
        self.diagram_name = diagram_name
        self.contents: List[Dict[str, Any]] = []
        self.views: List[Dict[str, Any]] = []
        self._x = 0

    def cls(self, cid: str, name: str, stereotype: Optional[str] = None, view: bool = True):
        self.contents.append({"type": "Class", "id": cid, "name": name, "stereotype": stereotype})
        if view:
            self.class_view(cid)
        return self

    def class_view(self, cid: str, view_id: Optional[str] = None):
        view_id = view_id or f"v_{cid}"
        self.views.append({
            "type": "ClassView",
            "id": view_id,
            "modelElement": {"type": "Class", "id": cid},
            "shape": {"type": "Rectangle", "id": f"{view_id}_shape",
                      "x": self._x, "y": 0, "width": 100, "height": 50},
        })
        self._x += 150
        return self

    def relation(self, rid: str, source: str, target: str, stereotype: Optional[str] = None,
                 name: Optional[str] = None, source_kind: str = "NONE", target_kind: str = "NONE",
                 source_cardinality: str = "1", target_cardinality: str = "1",
                 source_read_only: bool = False, target_read_only: bool = False,
                 source_role: Optional[str] = None, target_role: Optional[str] = None,
                 view_source: Optional[str] = None, view_target: Optional[str] = None):
        self.contents.append({
            "type": "Relation", "id": rid, "name": name, "stereotype": stereotype,
            "properties": [
                {"type": "Property", "id": f"{rid}_src", "name": source_role,
                 "cardinality": source_cardinality, "aggregationKind": source_kind,
                 "isReadOnly": source_read_only, "propertyType": {"type": "Class", "id": source}},
                {"type": "Property", "id": f"{rid}_tgt", "name": target_role,
                 "cardinality": target_cardinality, "aggregationKind": target_kind,
                 "isReadOnly": target_read_only, "propertyType": {"type": "Class", "id": target}},
            ],
        })
        self.views.append({
            "type": "RelationView",
            "id": f"v_{rid}",
            "modelElement": {"type": "Relation", "id": rid},
            "shape": {"type": "Path", "id": f"v_{rid}_shape",
                      "points": [{"x": 0, "y": 0}, {"x": 10, "y": 10}]},
            "source": {"type": "ClassView", "id": view_source or f"v_{source}"},
            "target": {"type": "ClassView", "id": view_target or f"v_{target}"},
        })
        return self

    def generalization(self, gid: str, specific: str, general: str):
        self.contents.append({
            "type": "Generalization", "id": gid,
            "general": {"type": "Class", "id": general},
            "specific": {"type": "Class", "id": specific},
        })
        self.views.append({
            "type": "GeneralizationView",
            "id": f"v_{gid}",
            "modelElement": {"type": "Generalization", "id": gid},
            "shape": {"type": "Path", "id": f"v_{gid}_shape",
                      "points": [{"x": 0, "y": 0}, {"x": 10, "y": 10}]},
            "source": {"type": "ClassView", "id": f"v_{specific}"},
            "target": {"type": "ClassView", "id": f"v_{general}"},
        })
        return self

    def generalization_set(self, sid: str, generalizations: List[str], name: Optional[str] = None):
        self.contents.append({
            "type": "GeneralizationSet", "id": sid, "name": name,
            "isDisjoint": True, "isComplete": False,
            "generalizations": [{"type": "Generalization", "id": g} for g in generalizations],
        })
        self.views.append({
            "type": "GeneralizationSetView",
            "id": f"v_{sid}",
            "modelElement": {"type": "GeneralizationSet", "id": sid},
            "shape": {"type": "Text", "id": f"v_{sid}_shape", "x": 0, "y": 100,
                      "width": 80, "height": 20},
        })
        return self

    def as_json(self) -> Dict[str, Any]:
        return {
            "type": "Project",
            "id": "p1",
            "name": "Test project",
            "model": {"type": "Package", "id": "m1", "name": "Model", "contents": self.contents},
            "diagrams": [{
                "type": "Diagram", "id": "d1", "name": self.diagram_name,
                "owner": {"type": "Package", "id": "m1"},
                "contents": self.views,
            }],
        }

    def build(self) -> Project:
        return Project.model_validate(self.as_json())


def build_graph(project: Project) -> ModelGraph:
    return ModelGraph(project.model.model_copy(deep=True), project.diagrams[0].model_copy(deep=True))


def by_name(graph: ModelGraph, name: str):
    """Live node (class or relation) with the given name."""
    return next(n for n in graph.iter_nodes() if n.name == name)


@pytest.fixture
def builder():
    return ProjectBuilder()


@pytest.fixture
def car_engine_builder():
    """Car (kind) composed of Engine (subkind), Engine characterized by Temperature (mode)."""
    return (
        ProjectBuilder()
        .cls("c_car", "Car", "kind")
        .cls("c_engine", "Engine", "subkind")
        .cls("c_temperature", "Temperature", "mode")
        .relation("r_component", "c_car", "c_engine", "componentOf",
                  source_kind="COMPOSITE", source_cardinality="1", target_cardinality="1")
        .relation("r_characterization", "c_temperature", "c_engine", "characterization",
                  source_cardinality="1", target_cardinality="1")
    )


@pytest.fixture
def car_engine_project(car_engine_builder):
    return car_engine_builder.build()


@pytest.fixture
def student_person_project():
    """Student specializes Person and works at a Company."""
    return (
        ProjectBuilder()
        .cls("c_person", "Person", "kind")
        .cls("c_student", "Student", "role")
        .cls("c_company", "Company", "kind")
        .generalization("g_student", "c_student", "c_person")
        .relation("r_works", "c_student", "c_company", "material", name="worksAt",
                  source_cardinality="1..*", target_cardinality="1")
        .build()
    )
