"""Tests for the abstraction service and the command line."""

import json

import pytest

from ontoabstract import AbstractionError, Abstractor, abstract
from ontoabstract.cli import main
from ontoabstract.shared.models.ontouml import Class, Package, Relation
from ontoabstract.shared.models.project import Project


def abstracted_package(project: Project) -> Package:
    return project.model.contents[-1]


class TestAbstractor:

    def test_parthood_is_the_default_rule(self, car_engine_project):
        output = abstract(car_engine_project, {"activeDiagramId": "d1"})

        assert not output.has_issues
        package = abstracted_package(output.result)
        diagram = output.result.diagrams[-1]
        assert package.name == "parthood: Diagram"
        assert diagram.name == "parthood: Diagram"
        assert diagram.owner.id == package.id

        classes = {c.name: c for c in package.get_classes()}
        assert sorted(classes) == ["Car", "Temperature"]
        relations = package.get_relations()
        assert len(relations) == 1
        assert relations[0].stereotype == "characterization"
        assert relations[0].get_target_end().property_type.id == classes["Car"].id
        assert [a.name for a in classes["Car"].attributes] == ["engine"]

    def test_original_model_and_diagram_are_untouched(self, car_engine_builder):
        project = car_engine_builder.build()
        before = project.to_json_dict()

        output = abstract(project, {"activeDiagramId": "d1", "abstractionRule": "aspects"})

        after = output.result.to_json_dict()
        assert after["model"]["contents"][:-1] == before["model"]["contents"]
        assert after["diagrams"][:-1] == before["diagrams"]
        assert len(after["diagrams"]) == 2

    def test_rule_names_are_case_insensitive(self, student_person_project):
        output = abstract(student_person_project, {"activeDiagramId": "d1", "abstractionRule": "HIERARCHY"})

        package = abstracted_package(output.result)
        assert package.name == "hierarchy: Diagram"
        assert sorted(c.name for c in package.get_classes()) == ["Company", "Person"]

    def test_element_mode_finds_the_diagram(self, car_engine_project):
        output = abstract(car_engine_project, {"activeElementId": "c_car"})

        package = abstracted_package(output.result)
        assert package.name == "abstract Car: Diagram"
        assert sorted(c.name for c in package.get_classes()) == ["Car", "Temperature"]

    def test_element_mode_reports_issues(self, builder):
        project = builder.cls("e", "Wedding", "event").build()

        output = abstract(project, {"activeDiagramId": "d1", "activeElementId": "e"})

        assert output.has_issues
        assert output.issues[0].data["source"]["name"] == "Wedding"
        assert output.get_summary()["issue_count"] == 1

    def test_exported_elements_have_fresh_ids(self, car_engine_project):
        output = abstract(car_engine_project, {"activeDiagramId": "d1"})

        original_ids = {e.id for e in car_engine_project.model.contents[:-1]}
        package = abstracted_package(output.result)
        for element in package.contents:
            assert isinstance(element, (Class, Relation))
            assert element.id not in original_ids

    def test_unprocessed_views_stay_on_the_source_diagram_only(self, car_engine_builder):
        data = car_engine_builder.as_json()
        data["diagrams"][0]["contents"].append({
            "type": "PackageView", "id": "v_pkg", "modelElement": {"type": "Package", "id": "m1"},
            "shape": {"type": "Rectangle", "id": "v_pkg_shape"},
        })

        output = abstract(Project.model_validate(data), {"activeDiagramId": "d1"})

        source, abstracted = output.result.diagrams
        assert [v.type for v in source.contents].count("PackageView") == 1
        assert {v.type for v in abstracted.contents} == {"ClassView", "RelationView"}
        assert len(abstracted.contents) == 3

    def test_unknown_element_is_an_error(self, car_engine_project):
        with pytest.raises(AbstractionError):
            abstract(car_engine_project, {"activeDiagramId": "d1", "activeElementId": "missing"})

    def test_unknown_diagram_is_an_error(self, car_engine_project):
        with pytest.raises(AbstractionError):
            Abstractor(car_engine_project, {"activeDiagramId": "nope"})

    def test_options_without_target_are_an_error(self, car_engine_project):
        with pytest.raises(AbstractionError):
            Abstractor(car_engine_project, {})


class TestCommandLine:

    def test_writes_the_abstracted_project(self, tmp_path, car_engine_builder):
        source = tmp_path / "project.json"
        target = tmp_path / "out" / "abstracted.json"
        source.write_text(json.dumps(car_engine_builder.as_json()), encoding="utf-8")

        assert main([str(source), "-d", "d1", "-o", str(target)]) == 0

        written = json.loads(target.read_text(encoding="utf-8"))
        assert written["issues"] == []
        assert written["result"]["diagrams"][-1]["name"] == "parthood: Diagram"

    def test_request_body_options_are_honoured(self, tmp_path, capsys, student_person_project):
        source = tmp_path / "request.json"
        body = {
            "project": student_person_project.to_json_dict(),
            "options": {"activeDiagramId": "d1", "abstractionRule": "hierarchy"},
        }
        source.write_text(json.dumps(body), encoding="utf-8")

        assert main([str(source)]) == 0

        written = json.loads(capsys.readouterr().out)
        assert written["result"]["diagrams"][-1]["name"] == "hierarchy: Diagram"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "OntoAbstract 1.0.0" in capsys.readouterr().out

    def test_invalid_json_exits_with_2(self, tmp_path):
        source = tmp_path / "broken.json"
        source.write_text("{not json", encoding="utf-8")

        assert main([str(source), "-d", "d1"]) == 2

    def test_abstraction_failure_exits_with_1(self, tmp_path, car_engine_builder):
        source = tmp_path / "project.json"
        source.write_text(json.dumps(car_engine_builder.as_json()), encoding="utf-8")

        assert main([str(source), "-d", "d1", "-e", "missing"]) == 1
