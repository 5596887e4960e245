"""
In-memory graph of one diagram and the model elements it depicts.

The graph is built from copies of the model and the diagram; every element and
view is re-identified on entry so that nothing in the graph aliases the
caller's project. Rules mutate the graph in place and the result is exported
as a brand-new package and diagram.
"""

import uuid
from typing import Dict, Iterable, List, Optional

import networkx as nx

from ...shared import get_logger, ModelGraphError
from ...shared.models.diagram import (
    ClassView, Diagram, GeneralizationSetView, GeneralizationView, Path, Point, RelationView,
)
from ...shared.models.ontouml import (
    AggregationKind, Class, ElementReference, Generalization, GeneralizationSet,
    MOMENT_ONLY_STEREOTYPES, OntoumlElement, OntoumlType, Package, Relation, RelationStereotype,
)
from .graph_node import DiagramView, GraphNode


def new_id() -> str:
    return uuid.uuid4().hex


class ModelGraph:
    """
    Directed graph of classes and relations built from a model and one diagram.

    Attributes:
        all_nodes: class id -> class node
        all_relations: relation, generalization and generalization set id -> node
        all_views: view id -> view
        all_stereotypes: stereotype -> nodes carrying it
        id_map: original id -> new id, for elements and views
    """

    def __init__(self, model: Package, diagram: Diagram):
        self.logger = get_logger(__name__)
        self.all_nodes: Dict[str, GraphNode] = {}
        self.all_relations: Dict[str, GraphNode] = {}
        self.all_views: Dict[str, DiagramView] = {}
        self.all_stereotypes: Dict[str, List[GraphNode]] = {}
        self.id_map: Dict[str, str] = {}

        self._elements: Dict[str, OntoumlElement] = {e.id: e for e in model.iter_elements()}

        for view in diagram.get_class_views():
            self._include_element(self.all_nodes, view, Class)

        for view in diagram.get_connector_views():
            self._include_connector(view)

        for view in diagram.get_generalization_set_views():
            self._include_generalization_set(view)

        self.logger.debug(
            f"Built graph for diagram '{diagram.get_name()}': {len(self.all_nodes)} classes, "
            f"{len(self.all_relations)} relations, {len(self.all_views)} views"
        )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _lookup(self, view: DiagramView, expected: type) -> OntoumlElement:
        element_id = view.model_element.id
        element = self._elements.get(element_id)
        if element is None:
            raise ModelGraphError(
                f"View {view.id} references element {element_id} which is not in the model"
            )
        if not isinstance(element, expected):
            raise ModelGraphError(
                f"View {view.id} of type {view.type} references {element.type} {element_id}"
            )
        return element

    def _include_element(self, element_map: Dict[str, GraphNode], view: DiagramView,
                         expected: type) -> GraphNode:
        """Add a view, creating the node for its element on first sight."""
        model_id = view.model_element.id
        if model_id in self.id_map:
            node = element_map.get(self.id_map[model_id])
            if node is None:
                raise ModelGraphError(f"View {view.id} references {model_id} as a {view.type}")
            self._reidentify_view(view)
            node.representations.append(view)
        else:
            element = self._lookup(view, expected)
            self._reidentify_element(element)
            self._reidentify_view(view)
            node = GraphNode(element, view)
            element_map[element.id] = node
            self._index_stereotype(node)

        view.model_element = ElementReference.of(node.element)
        self.all_views[view.id] = view
        return node

    def _reidentify_view(self, view: DiagramView) -> None:
        uid = new_id()
        self.id_map[view.id] = uid
        view.id = uid
        view.shape.id = f"{uid}_shape"

    def _reidentify_element(self, element: OntoumlElement) -> None:
        uid = new_id()
        self.id_map[element.id] = uid
        element.id = uid
        if isinstance(element, Relation):
            for index, end in enumerate(element.properties):
                end.id = f"{uid}_prop{index}"
                if end.property_type is not None and end.property_type.id in self.id_map:
                    end.property_type = ElementReference(
                        type=end.property_type.type, id=self.id_map[end.property_type.id]
                    )
        elif isinstance(element, Generalization):
            element.general = self._mapped_reference(element.general)
            element.specific = self._mapped_reference(element.specific)
        elif isinstance(element, Class):
            for attribute in element.properties or []:
                attribute.id = new_id()

    def _mapped_reference(self, reference: ElementReference) -> ElementReference:
        return ElementReference(type=reference.type, id=self.id_map.get(reference.id, reference.id))

    def _class_node_for_view(self, view_reference: Optional[ElementReference]) -> Optional[GraphNode]:
        if view_reference is None or view_reference.id not in self.id_map:
            return None
        class_view = self.all_views.get(self.id_map[view_reference.id])
        if not isinstance(class_view, ClassView):
            return None
        return self.all_nodes.get(class_view.model_element.id)

    def _include_connector(self, view: DiagramView) -> None:
        source = self._class_node_for_view(view.source)
        target = self._class_node_for_view(view.target)
        if source is None or target is None:
            # e.g. anchors of association classes, or ends not drawn on this diagram
            self.logger.debug(f"Skipping view {view.id}: an end is not a class on the diagram")
            return

        is_new = view.model_element.id not in self.id_map
        if isinstance(view, RelationView):
            node = self._include_element(self.all_relations, view, Relation)
        else:
            node = self._include_element(self.all_relations, view, Generalization)
        if not is_new:
            return

        if node.is_relation:
            if len(node.element.properties) != 2:
                raise ModelGraphError(
                    f"Relation {node.name or node.id} has {len(node.element.properties)} ends, expected 2"
                )
            # the whole must end up on the outs[0] side
            if node.element.properties[0].aggregation_kind == AggregationKind.COMPOSITE:
                source, target = target, source
                node.reversed = True
        else:
            general = self.all_nodes.get(node.element.general.id)
            specific = self.all_nodes.get(node.element.specific.id)
            if general is None or specific is None:
                raise ModelGraphError(
                    f"Generalization {node.id} connects classes that are not on the diagram"
                )
            node.reversed = source is general
            source, target = specific, general

        self.create_connection(source, node)
        self.create_connection(node, target)

    def _include_generalization_set(self, view: GeneralizationSetView) -> None:
        model_id = view.model_element.id
        if model_id in self.id_map:
            self._include_element(self.all_relations, view, GeneralizationSet)
            return

        element = self._lookup(view, GeneralizationSet)
        members = [
            self.all_relations[self.id_map[ref.id]]
            for ref in element.generalizations
            if ref.id in self.id_map and self.id_map[ref.id] in self.all_relations
        ]
        if not members:
            self.logger.debug(f"Skipping view {view.id}: no generalization of the set is on the diagram")
            return

        element.generalizations = [ElementReference.of(member.element) for member in members]
        if element.categorizer is not None:
            element.categorizer = self._mapped_reference(element.categorizer)

        node = self._include_element(self.all_relations, view, GeneralizationSet)
        for member in members:
            self.create_connection(member, node)
        self.create_connection(node, members[0].outs[0])

    def _index_stereotype(self, node: GraphNode) -> None:
        stereotype = node.stereotype
        if stereotype:
            self.all_stereotypes.setdefault(stereotype, []).append(node)

    def _unindex_stereotype(self, node: GraphNode) -> None:
        nodes = self.all_stereotypes.get(node.stereotype or "")
        if nodes:
            self.all_stereotypes[node.stereotype] = [n for n in nodes if n is not node]

    @staticmethod
    def create_connection(source: GraphNode, target: GraphNode) -> None:
        source.outs.append(target)
        target.ins.append(source)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, node: GraphNode) -> bool:
        """Whether the node is still part of the graph."""
        return (self.all_nodes.get(node.id) is node) or (self.all_relations.get(node.id) is node)

    def get_node(self, element_id: str) -> Optional[GraphNode]:
        """
        Find a node by element or view id, original or re-identified.
        """
        new = self.id_map.get(element_id, element_id)
        node = self.all_nodes.get(new) or self.all_relations.get(new)
        if node is not None:
            return node
        view = self.all_views.get(new)
        if view is not None:
            model_id = view.model_element.id
            return self.all_nodes.get(model_id) or self.all_relations.get(model_id)
        return None

    def get_by_stereotype(self, *stereotypes: str) -> List[GraphNode]:
        result = []
        for stereotype in stereotypes:
            result.extend(n for n in self.all_stereotypes.get(stereotype, []) if self.contains(n))
        return result

    def get_by_type(self, *types: str) -> List[GraphNode]:
        nodes = list(self.all_nodes.values()) + list(self.all_relations.values())
        return [n for n in nodes if n.element.type in types]

    def get_part_whole_relations(self) -> List[GraphNode]:
        return [n for n in self.all_relations.values() if n.is_relation and n.element.is_part_whole()]

    def get_generalizations(self) -> List[GraphNode]:
        return self.get_by_type(OntoumlType.GENERALIZATION.value)

    def get_generalization_sets(self) -> List[GraphNode]:
        return self.get_by_type(OntoumlType.GENERALIZATION_SET.value)

    def get_moments(self) -> List[GraphNode]:
        return [n for n in self.all_nodes.values() if n.stereotype in MOMENT_ONLY_STEREOTYPES]

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Export the node/edge structure for inspection.

        Every graph node becomes a networkx node keyed by id; every ``outs``
        link becomes an edge.
        """
        graph = nx.MultiDiGraph()
        for node in list(self.all_nodes.values()) + list(self.all_relations.values()):
            graph.add_node(node.id, name=node.name, type=node.element.type,
                           stereotype=node.stereotype)
        for node in list(self.all_nodes.values()) + list(self.all_relations.values()):
            for out in node.outs:
                graph.add_edge(node.id, out.id)
        return graph

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def remove_relation(self, relation: GraphNode) -> None:
        """
        Detach a relation, generalization or generalization set and drop its views.

        Removing a relation twice is a no-op.
        """
        if self.all_relations.get(relation.id) is not relation:
            return

        for node in list(relation.ins):
            node.remove_out_relation(relation)
        emptied_sets = []
        for node in list(relation.outs):
            node.remove_in_relation(relation)
            if node.is_generalization_set:
                node.element.generalizations = [
                    ref for ref in node.element.generalizations if ref.id != relation.id
                ]
                if not node.ins:
                    emptied_sets.append(node)

        for view in relation.representations:
            self.all_views.pop(view.id, None)
        del self.all_relations[relation.id]
        self._unindex_stereotype(relation)

        for generalization_set in emptied_sets:
            self.remove_relation(generalization_set)

    def remove_node(self, node: GraphNode) -> None:
        """Remove a class node together with every relation touching it."""
        # remove_relation mutates ins/outs, so iterate over a snapshot
        for relation in list(node.ins) + list(node.outs):
            self.remove_relation(relation)
        for view in node.representations:
            self.all_views.pop(view.id, None)
        self.all_nodes.pop(node.id, None)
        self._unindex_stereotype(node)

    def duplicate_relation(self, prototype: GraphNode, from_node: GraphNode,
                           to_node: Optional[GraphNode] = None) -> GraphNode:
        """
        Copy a relation so that it starts at ``from_node``.

        Without ``to_node`` the copy keeps the prototype's target, its new
        source end becomes ``0..*`` and it is renamed
        ``"<from>'s <role> <name>"``. With ``to_node`` the copy links
        ``from_node`` to ``to_node`` as a participation.
        """
        original = prototype.element
        element = original.model_copy(deep=True)
        element.id = new_id()
        target = to_node if to_node is not None else prototype.outs[0]

        source_end, target_end = element.properties[0], element.properties[1]
        if prototype.reversed:
            source_end, target_end = target_end, source_end
        for index, end in enumerate(element.properties):
            end.id = f"{element.id}_prop{index}"
        source_end.property_type = ElementReference.of(from_node.element)
        target_end.property_type = ElementReference.of(target.element)

        if to_node is None:
            role = prototype.in_end.name or prototype.ins[0].name
            source_end.set_zero_to_many()
            element.name = " ".join(
                part for part in (f"{from_node.name}'s", role, original.get_name()) if part
            )
        else:
            element.stereotype = RelationStereotype.PARTICIPATION.value

        view = self._clone_relation_view(prototype.representations[0], element, from_node, target,
                                         prototype.reversed)

        node = GraphNode(element, view)
        node.reversed = prototype.reversed
        self.all_relations[element.id] = node
        self.all_views[view.id] = view
        self._index_stereotype(node)
        self.create_connection(from_node, node)
        self.create_connection(node, target)
        return node

    @staticmethod
    def _clone_relation_view(prototype: RelationView, element: Relation, source: GraphNode,
                             target: GraphNode, reversed_: bool) -> RelationView:
        source_view = source.representations[0]
        target_view = target.representations[0]
        if reversed_:
            source_view, target_view = target_view, source_view
        uid = new_id()
        start, end = source_view.shape.bottom_center, target_view.shape.bottom_center
        return RelationView(
            id=uid,
            model_element=ElementReference.of(element),
            shape=Path(id=f"{uid}_shape", points=[Point(x=start.x, y=start.y), Point(x=end.x, y=end.y)]),
            source=ElementReference.of(source_view),
            target=ElementReference.of(target_view),
            **(prototype.model_extra or {}),
        )

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_model(self, name: str) -> Package:
        return Package(
            id=new_id(),
            name=name,
            contents=[node.element for node in self.all_nodes.values()]
            + [node.element for node in self.all_relations.values()],
        )

    def export_diagram(self, name: str, owner: Package) -> Diagram:
        return Diagram(
            id=new_id(),
            name=name,
            owner=ElementReference.of(owner),
            contents=list(self.all_views.values()),
        )

    def iter_nodes(self) -> Iterable[GraphNode]:
        yield from self.all_nodes.values()
        yield from self.all_relations.values()
