"""
Abstraction rules for OntoUML diagrams.

Implements the abstraction approach proposed in:

    Romanenko, E., Calvanese, D. and Guizzardi, G. (2022)
    Ontology-Based Model Abstraction Reviewed.

Every rule folds nodes of a ``ModelGraph`` into a neighbouring node:

- parthood: parts are folded into their wholes (P rules),
- hierarchy: subtypes are folded into their supertypes (H rules),
- aspects: moments are folded into the endurants they qualify (A rules).

Folding is recursive and bottom-up: parts of parts and subtypes of subtypes
are folded before the node that owns them. Rules never raise for nodes they
cannot handle; they record an ``AbstractionIssue`` and carry on.
"""

from typing import List, Optional, Set, Tuple

from ...shared import get_logger, get_settings
from ...shared.models.ontouml import (
    AggregationKind, EVENT_STEREOTYPES, MOMENT_ONLY_STEREOTYPES, NON_ABSTRACTABLE_STEREOTYPES,
    Property, RelationStereotype, SITUATION_STEREOTYPES,
)
from .graph_node import GraphNode
from .model_graph import ModelGraph, new_id
from .models import AbstractionIssue

COMPONENT_OF = RelationStereotype.COMPONENT_OF.value
SUBCOLLECTION_OF = RelationStereotype.SUBCOLLECTION_OF.value
SUBQUANTITY_OF = RelationStereotype.SUBQUANTITY_OF.value
PARTICIPATIONAL = RelationStereotype.PARTICIPATIONAL.value
MEMBER_OF = RelationStereotype.MEMBER_OF.value
TERMINATION = RelationStereotype.TERMINATION.value
MANIFESTATION = RelationStereotype.MANIFESTATION.value
EXTERNAL_DEPENDENCE = RelationStereotype.EXTERNAL_DEPENDENCE.value
ASPECT_BEARER_STEREOTYPES = frozenset([
    RelationStereotype.CHARACTERIZATION.value, RelationStereotype.MEDIATION.value,
])

GraphWithIssues = Tuple[ModelGraph, List[AbstractionIssue]]


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def is_moment(node: GraphNode) -> bool:
    return node.stereotype in MOMENT_ONLY_STEREOTYPES


def is_event(node: GraphNode) -> bool:
    return node.stereotype in EVENT_STEREOTYPES


def is_situation(node: GraphNode) -> bool:
    return node.stereotype in SITUATION_STEREOTYPES


def is_part_whole(node: GraphNode) -> bool:
    return node.is_relation and node.element.is_part_whole()


class AbstractionRules:
    """
    Rule engine operating in place on one ``ModelGraph``.

    A node is folded at most once per engine; ``folded`` remembers the ids of
    nodes already converged so that cycles and nodes reachable along several
    paths are handled once.
    """

    def __init__(self, graph: ModelGraph, attribute_height_increment: Optional[int] = None,
                 max_fold_depth: Optional[int] = None):
        settings = get_settings()
        self.logger = get_logger(__name__)
        self.graph = graph
        self.issues: List[AbstractionIssue] = []
        self.folded: Set[str] = set()
        self.attribute_height_increment = (
            settings.attribute_height_increment if attribute_height_increment is None
            else attribute_height_increment
        )
        self.max_fold_depth = settings.max_fold_depth if max_fold_depth is None else max_fold_depth
        self._depth = 0

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def abstract(self, node: GraphNode) -> GraphWithIssues:
        """Fold everything that can be folded into the given element."""
        self.logger.info(f"Abstracting from {node.element.type} '{node.name}'")
        if node.is_generalization_set:
            for generalization in list(node.ins):
                self._process_generalization_if_present(generalization)
        elif node.is_generalization:
            self.process_generalization(node)
        elif node.is_relation:
            if is_part_whole(node):
                self.process_parthood(node)
            else:
                self.add_issue(node, f"Relation '{node.name}' is neither a part-whole relation "
                                     f"nor a generalization and cannot be abstracted")
        elif is_moment(node):
            self.abstract_aspect(node)
        elif node.stereotype in NON_ABSTRACTABLE_STEREOTYPES and not self._has_foldable_ins(node):
            self.add_issue(node, f"Class '{node.name}' cannot be abstracted")
        else:
            self.fold_node(node)
        return self.graph, self.issues

    def parthood(self, relations: List[GraphNode]) -> GraphWithIssues:
        """Fold the given part-whole relations."""
        self.logger.info(f"Abstracting {len(relations)} part-whole relations")
        for relation in list(relations):
            if self.graph.contains(relation):
                self.process_parthood(relation)
        return self.graph, self.issues

    def hierarchy(self, generalizations: List[GraphNode],
                  sets: Optional[List[GraphNode]] = None) -> GraphWithIssues:
        """Fold the given generalizations, and the members of the given sets, upwards."""
        sets = sets or []
        self.logger.info(f"Abstracting {len(generalizations)} generalizations and {len(sets)} sets")
        for generalization_set in list(sets):
            for generalization in list(generalization_set.ins):
                self._process_generalization_if_present(generalization)
        for generalization in list(generalizations):
            self._process_generalization_if_present(generalization)
        return self.graph, self.issues

    def aspects(self, moments: List[GraphNode]) -> GraphWithIssues:
        """Fold the given moment classes into the endurants they characterize or mediate."""
        self.logger.info(f"Abstracting {len(moments)} aspects")
        for moment in list(moments):
            if not self.graph.contains(moment):
                continue
            if not is_moment(moment):
                self.add_issue(moment, f"Class '{moment.name}' is not an aspect and cannot be abstracted")
                continue
            self.abstract_aspect(moment)
        return self.graph, self.issues

    # ------------------------------------------------------------------
    # Folding
    # ------------------------------------------------------------------

    def fold_node(self, node: GraphNode) -> bool:
        """
        Fold parts and then subtypes into ``node``, recursively.

        Returns False when the depth cap stopped the fold; ``node`` must then
        be left in place.
        """
        if node.id in self.folded or not self.graph.contains(node):
            return True
        if self._depth >= self.max_fold_depth:
            self.add_issue(node, f"Class '{node.name}' is nested too deeply to be abstracted")
            return False
        self.folded.add(node.id)

        self._depth += 1
        try:
            for relation in [r for r in node.ins if is_part_whole(r)]:
                if self.graph.contains(relation):
                    self.process_parthood(relation)
            for relation in [r for r in node.ins if r.is_generalization or r.is_generalization_set]:
                if relation.is_generalization_set:
                    for generalization in list(relation.ins):
                        self._process_generalization_if_present(generalization)
                else:
                    self._process_generalization_if_present(relation)
        finally:
            self._depth -= 1
        return True

    def process_parthood(self, relation: GraphNode) -> None:
        """Fold the part of a part-whole relation into its whole."""
        whole_class = relation.outs[0]
        part_class = relation.ins[0]
        if not self.fold_node(part_class):
            return
        # folding the part may already have consumed this relation (cycles)
        if not (self.graph.contains(relation) and self.graph.contains(part_class)
                and self.graph.contains(whole_class)):
            return
        if part_class is whole_class:
            self.graph.remove_relation(relation)
            return

        stereotype = relation.stereotype
        role_name: Optional[str] = lower_first(part_class.name)
        name_prefix = ""

        if stereotype in (PARTICIPATIONAL, MEMBER_OF):
            if stereotype == PARTICIPATIONAL:
                self.logger.warning(
                    f"No rule for participational relation '{relation.name}' "
                    f"between '{part_class.name}' and '{whole_class.name}', part is kept"
                )
            return

        if stereotype not in (SUBCOLLECTION_OF, SUBQUANTITY_OF):
            # componentOf, or plain composition without a part-whole stereotype
            self._add_part_attribute(whole_class, part_class)
            role_name = None
            name_prefix = f"{whole_class.name}'s {part_class.name} "

        self.logger.debug(f"Folding part '{part_class.name}' into '{whole_class.name}'")
        is_read_only = bool(relation.in_end is not None and relation.in_end.is_read_only)
        self.graph.remove_relation(relation)
        self.process_ins(part_class, whole_class, is_read_only, name_prefix, role_name)
        self.process_outs(part_class, whole_class, is_read_only, name_prefix, role_name)
        self.graph.remove_node(part_class)

    def _add_part_attribute(self, whole_class: GraphNode, part_class: GraphNode) -> None:
        whole_class.element.add_attribute(Property(
            id=new_id(),
            name=lower_first(part_class.name),
            cardinality="1",
        ))
        for view in whole_class.representations:
            view.shape.height += self.attribute_height_increment

    def process_ins(self, part_class: GraphNode, whole_class: GraphNode, is_read_only: bool,
                    name_prefix: str, role_name: Optional[str]) -> None:
        """
        Move every relation arriving at ``part_class`` onto ``whole_class``.

        Each move detaches the relation from ``part_class.ins``, so the list is
        consumed from the front until it is empty.
        """
        while part_class.ins:
            relation = part_class.ins[0]
            if relation.is_generalization_set or relation.is_generalization:
                relation.move_relation_to(whole_class)
                continue
            source = relation.ins[0]
            if is_moment(source):
                relation.move_relation_to(whole_class, role_name, relax_lower_cardinality=True)
            elif is_event(source):
                if relation.stereotype != TERMINATION or is_read_only:
                    relation.move_relation_to(whole_class, role_name, relax_lower_cardinality=True)
                else:
                    # ending an optional part does not end the whole
                    self.graph.remove_relation(relation)
            else:
                self._prefix_name(relation, name_prefix)
                relation.move_relation_to(whole_class, role_name)

    def process_outs(self, part_class: GraphNode, whole_class: GraphNode, is_read_only: bool,
                     name_prefix: str, role_name: Optional[str]) -> None:
        """Mirror of ``process_ins`` for relations leaving ``part_class``."""
        while part_class.outs:
            relation = part_class.outs[0]
            if relation.is_generalization:
                relation.move_relation_from(whole_class)
                continue
            target = relation.outs[0]
            if is_moment(target):
                relation.move_relation_from(whole_class, role_name, set_upper_cardinality=True)
            elif is_event(target):
                if relation.stereotype != TERMINATION or is_read_only:
                    relation.move_relation_from(whole_class, role_name, set_upper_cardinality=True)
                else:
                    self.graph.remove_relation(relation)
            else:
                self._prefix_name(relation, name_prefix)
                relation.move_relation_from(whole_class, role_name)

    @staticmethod
    def _prefix_name(relation: GraphNode, name_prefix: str) -> None:
        if name_prefix and relation.name:
            relation.element.name = name_prefix + relation.name

    def _process_generalization_if_present(self, generalization: GraphNode) -> None:
        if self.graph.contains(generalization) and generalization.is_generalization:
            self.process_generalization(generalization)

    def process_generalization(self, generalization: GraphNode) -> None:
        """Fold the specific class of a generalization into the general class."""
        general_class = generalization.outs[0]
        specific_class = generalization.ins[0]
        if not self.fold_node(specific_class):
            return
        if not (self.graph.contains(generalization) and self.graph.contains(specific_class)
                and self.graph.contains(general_class)):
            return
        if specific_class is general_class:
            self.graph.remove_relation(generalization)
            return

        self.logger.debug(f"Folding subtype '{specific_class.name}' into '{general_class.name}'")
        role_name = specific_class.name

        for relation in [r for r in specific_class.ins if r.is_relation]:
            relation.move_relation_to(general_class, role_name, relax_lower_cardinality=True)
        for relation in [r for r in specific_class.outs if r.is_relation]:
            relation.move_relation_from(general_class, role_name, relax_lower_cardinality=True)

        self.graph.remove_relation(generalization)
        self.graph.remove_node(specific_class)

    def abstract_aspect(self, moment: GraphNode) -> None:
        """
        Fold a moment into the endurants it characterizes or mediates.

        External relations of the moment are copied onto every endurant,
        manifestations become participations of the endurants, and the moment
        is removed together with its remaining relations.
        """
        if not self.fold_node(moment) or not self.graph.contains(moment):
            return

        bearers = [r for r in moment.outs if r.is_relation and r.stereotype in ASPECT_BEARER_STEREOTYPES]
        endurants = []
        for relation in bearers:
            if relation.outs[0] is not moment and relation.outs[0] not in endurants:
                endurants.append(relation.outs[0])

        if endurants:
            self.logger.debug(
                f"Folding aspect '{moment.name}' into {', '.join(e.name for e in endurants)}"
            )
            for relation in list(moment.outs):
                if not relation.is_relation or relation in bearers:
                    continue
                target = relation.outs[0]
                if relation.stereotype == EXTERNAL_DEPENDENCE or is_event(target) or is_situation(target):
                    continue
                for endurant in endurants:
                    self.graph.duplicate_relation(relation, endurant)
            for relation in list(moment.ins):
                if not relation.is_relation or relation.stereotype != MANIFESTATION:
                    continue
                event = relation.ins[0]
                for endurant in endurants:
                    self.graph.duplicate_relation(relation, endurant, event)
        else:
            self.logger.debug(f"Aspect '{moment.name}' qualifies nothing on the diagram, removing it")

        self.graph.remove_node(moment)

    # ------------------------------------------------------------------
    # Issues
    # ------------------------------------------------------------------

    def add_issue(self, node: GraphNode, title: str, description: Optional[str] = None) -> AbstractionIssue:
        self.logger.warning(title)
        issue = AbstractionIssue.for_element(node.element, title, description=description)
        self.issues.append(issue)
        return issue

    @staticmethod
    def _has_foldable_ins(node: GraphNode) -> bool:
        return any(is_part_whole(r) or r.is_generalization or r.is_generalization_set for r in node.ins)
