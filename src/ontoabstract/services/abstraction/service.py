"""
Abstraction service.

Selects the diagram (and optionally the element) to abstract, builds a fresh
``ModelGraph`` from copies of the project data, drives ``AbstractionRules`` and
appends the abstracted package and diagram to the project.
"""

import time
from typing import Any, Dict, Optional, Union

from ...shared import (
    get_logger, get_settings, AbstractionError, ModelGraphError, Project,
)
from ...shared.models.diagram import Diagram
from .graph_node import GraphNode
from .model_graph import ModelGraph
from .models import AbstractionIssue, AbstractionOptions, AbstractionResult, AbstractionRule
from .rules import AbstractionRules


class Abstractor:
    """
    Service for abstracting one diagram of an OntoUML project.

    The project's existing model elements and diagrams are never modified;
    the result is appended to the project as a new package and a new diagram
    named ``"<mode>: <diagram name>"``.
    """

    def __init__(self, project: Project,
                 options: Union[AbstractionOptions, Dict[str, Any], None] = None):
        self.logger = get_logger(__name__)
        self.settings = get_settings()
        self.project = project
        if isinstance(options, AbstractionOptions):
            self.options = options
        else:
            self.options = AbstractionOptions.model_validate(options or {})

        self.diagram = self._select_diagram()
        self.name = self.diagram.get_name()
        self.graph = ModelGraph(
            self.project.model.model_copy(deep=True),
            self.diagram.model_copy(deep=True),
        )
        self.abstraction = AbstractionRules(self.graph)

    def _select_diagram(self) -> Diagram:
        diagram_id = self.options.active_diagram_id
        if diagram_id:
            diagram = self.project.get_diagram(diagram_id)
            if diagram is None:
                raise AbstractionError(f"Diagram {diagram_id} not found in project {self.project.id}")
            return diagram

        element_id = self.options.active_element_id
        if element_id:
            diagram = self.project.find_diagram_showing(element_id)
            if diagram is None:
                raise AbstractionError(f"Element {element_id} is not shown on any diagram")
            return diagram

        raise AbstractionError("Abstraction options name neither a diagram nor an element")

    def run(self) -> AbstractionResult:
        """
        Run the abstraction and append its outcome to the project.

        Returns:
            The augmented project and the non-fatal issues found

        Raises:
            AbstractionError: unknown element, or an unexpected failure
            ModelGraphError: the diagram is inconsistent with the model
        """
        start_time = time.time()
        try:
            mode, issues = self.build_abstraction()

            name = f"{mode}: {self.name}"
            model = self.graph.export_model(name)
            diagram = self.graph.export_diagram(name, model)
            self.project.model.contents.append(model)
            self.project.add_diagram(diagram)

            self.logger.info(
                f"Abstraction '{name}' finished in {time.time() - start_time:.3f}s: "
                f"{len(self.graph.all_nodes)} classes, {len(self.graph.all_relations)} relations, "
                f"{len(issues)} issues"
            )
            return AbstractionResult(result=self.project, issues=issues)

        except (AbstractionError, ModelGraphError):
            raise
        except Exception as e:
            self.logger.error(f"Abstraction of diagram '{self.name}' failed: {e}")
            raise AbstractionError(f"Abstraction failed: {e}") from e

    def build_abstraction(self):
        """Apply the requested rule; returns the mode label and the issues."""
        if self.options.active_element_id:
            node = self._find_active_node(self.options.active_element_id)
            _, issues = self.abstraction.abstract(node)
            return f"abstract {node.name or node.element.type}", issues

        rule = AbstractionRule(self.options.abstraction_rule or self.settings.default_abstraction_rule)
        self.logger.info(f"Abstraction rule to be applied: {rule.value}")
        if rule == AbstractionRule.PARTHOOD:
            _, issues = self.abstraction.parthood(self.graph.get_part_whole_relations())
        elif rule == AbstractionRule.HIERARCHY:
            _, issues = self.abstraction.hierarchy(
                self.graph.get_generalizations(), self.graph.get_generalization_sets()
            )
        else:
            _, issues = self.abstraction.aspects(self.graph.get_moments())
        return rule.value, issues

    def _find_active_node(self, element_id: str) -> GraphNode:
        node = self.graph.get_node(element_id)
        if node is None:
            raise AbstractionError(
                f"Element {element_id} is not part of diagram '{self.name}' and cannot be abstracted"
            )
        return node


def abstract(project: Project,
             options: Union[AbstractionOptions, Dict[str, Any], None] = None) -> AbstractionResult:
    """Abstract one diagram of ``project`` according to ``options``."""
    return Abstractor(project, options).run()
