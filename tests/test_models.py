"""Tests for the OntoUML element models."""

import pytest

from ontoabstract.shared.models.ontouml import (
    AggregationKind, Package, Property, Relation, parse_cardinality,
)
from ontoabstract.shared.models.diagram import ClassView, OtherView, RelationView
from ontoabstract.shared.models.project import Project


@pytest.mark.parametrize("value,expected", [
    ("1", ("1", "1")),
    ("0..*", ("0", "*")),
    ("1..*", ("1", "*")),
    ("*", ("0", "*")),
    ("2..5", ("2", "5")),
    (None, ("0", "*")),
    ("garbage", ("0", "*")),
])
def test_parse_cardinality(value, expected):
    assert parse_cardinality(value) == expected


def test_property_bounds_are_adjusted_in_place():
    end = Property(id="p", cardinality="1..*")
    assert end.lower_bound == 1
    assert end.upper_bound is None

    end.set_lower_bound(0)
    assert end.cardinality == "0..*"

    end.set_upper_bound(1)
    assert end.cardinality == "0..1"

    end.set_zero_to_many()
    assert end.cardinality == "0..*"


def test_upper_bound_below_lower_bound_drags_lower_bound_down():
    end = Property(id="p", cardinality="3..*")
    end.set_upper_bound(1)
    assert end.cardinality == "1"


def test_project_reads_camel_case_json(car_engine_builder):
    project = Project.model_validate(car_engine_builder.as_json())

    diagram = project.get_diagram("d1")
    assert diagram is not None
    assert len(diagram.get_class_views()) == 3
    assert isinstance(diagram.contents[0], ClassView)
    assert isinstance(diagram.contents[3], RelationView)

    relation = project.model.get_element_by_id("r_component")
    assert isinstance(relation, Relation)
    assert relation.get_source_end().aggregation_kind == AggregationKind.COMPOSITE
    assert relation.is_part_whole()


def test_dump_uses_wire_keys_and_keeps_unknown_fields(car_engine_builder):
    data = car_engine_builder.as_json()
    data["model"]["contents"][0]["isAbstract"] = False
    data["model"]["contents"][0]["propertyAssignments"] = {"color": "red"}

    dumped = Project.model_validate(data).to_json_dict()

    car = dumped["model"]["contents"][0]
    assert car["propertyAssignments"] == {"color": "red"}
    assert car["isAbstract"] is False
    view = dumped["diagrams"][0]["contents"][0]
    assert view["modelElement"] == {"type": "Class", "id": "c_car"}


def test_nested_packages_are_searched():
    package = Package.model_validate({
        "type": "Package", "id": "root",
        "contents": [
            {"type": "Package", "id": "inner", "contents": [
                {"type": "Class", "id": "deep", "name": "Deep", "stereotype": "kind"},
            ]},
        ],
    })

    assert package.get_element_by_id("deep").name == "Deep"
    assert [c.id for c in package.get_classes()] == ["deep"]


def test_find_diagram_showing(car_engine_project):
    assert car_engine_project.find_diagram_showing("c_engine").id == "d1"
    assert car_engine_project.find_diagram_showing("v_c_engine").id == "d1"
    assert car_engine_project.find_diagram_showing("missing") is None


def test_unprocessed_view_kinds_are_kept(car_engine_builder):
    data = car_engine_builder.as_json()
    data["diagrams"][0]["contents"] += [
        {"type": "PackageView", "id": "v_pkg", "modelElement": {"type": "Package", "id": "m1"},
         "shape": {"type": "Rectangle", "id": "v_pkg_shape", "x": 0, "y": 300}},
        {"type": "NoteView", "id": "v_note", "shape": {"type": "Text", "id": "v_note_shape"}},
    ]

    project = Project.model_validate(data)

    diagram = project.get_diagram("d1")
    assert isinstance(diagram.contents[5], OtherView)
    assert diagram.contents[5].model_element.id == "m1"
    assert len(diagram.get_class_views()) == 3
    assert not diagram.shows("missing")
    dumped = project.to_json_dict()["diagrams"][0]["contents"]
    assert dumped[5:] == data["diagrams"][0]["contents"][5:]
