"""
Graph node wrapping one model element together with its diagram views.

A class node has relation nodes in ``ins``/``outs``. A relation or
generalization node has its source class in ``ins[0]`` and its target class in
``outs[0]``; for part-whole relations the whole is always ``outs[0]`` and for
generalizations the general class is. A generalization set node collects its
member generalizations in ``ins`` and points at the shared general class.
"""

from typing import List, Optional, Union

from ...shared.models.diagram import ClassView, GeneralizationSetView, GeneralizationView, RelationView
from ...shared.models.ontouml import (
    Class, ElementReference, Generalization, GeneralizationSet, ModelElement,
    Property, Relation,
)

DiagramView = Union[ClassView, RelationView, GeneralizationView, GeneralizationSetView]


class GraphNode:
    """
    Node of a ``ModelGraph``.

    Nodes compare by identity: two nodes are equal only if they are the same
    object, which keeps ``list.remove``/``in`` checks on adjacency exact.

    ``reversed`` is set on relation nodes whose graph direction is opposite to
    their semantic direction (source end drawn as the whole), so that the
    "out" side maps onto ``properties[0]`` and the view source.
    """

    def __init__(self, element: ModelElement, representation: DiagramView):
        self.element = element
        self.representations: List[DiagramView] = [representation]
        self.ins: List["GraphNode"] = []
        self.outs: List["GraphNode"] = []
        self.reversed = False

    def __repr__(self) -> str:
        return f"GraphNode({self.element.type} {self.name!r} id={self.id})"

    @property
    def id(self) -> str:
        return self.element.id

    @property
    def name(self) -> str:
        return self.element.get_name()

    @property
    def stereotype(self) -> Optional[str]:
        return getattr(self.element, "stereotype", None)

    @property
    def is_class(self) -> bool:
        return isinstance(self.element, Class)

    @property
    def is_relation(self) -> bool:
        return isinstance(self.element, Relation)

    @property
    def is_generalization(self) -> bool:
        return isinstance(self.element, Generalization)

    @property
    def is_generalization_set(self) -> bool:
        return isinstance(self.element, GeneralizationSet)

    # ------------------------------------------------------------------
    # Relation ends
    # ------------------------------------------------------------------

    @property
    def in_end(self) -> Optional[Property]:
        """Relation end on the ``ins[0]`` side (the part for part-whole relations)."""
        if not self.is_relation:
            return None
        return self.element.properties[0 if not self.reversed else 1]

    @property
    def out_end(self) -> Optional[Property]:
        """Relation end on the ``outs[0]`` side (the whole for part-whole relations)."""
        if not self.is_relation:
            return None
        return self.element.properties[1 if not self.reversed else 0]

    # ------------------------------------------------------------------
    # Adjacency
    # ------------------------------------------------------------------

    def remove_in_relation(self, relation: "GraphNode") -> None:
        """Deletes incoming edge by reference."""
        for index, node in enumerate(self.ins):
            if node is relation:
                del self.ins[index]
                return

    def remove_out_relation(self, relation: "GraphNode") -> None:
        """Deletes outgoing edge by reference."""
        for index, node in enumerate(self.outs):
            if node is relation:
                del self.outs[index]
                return

    def move_relation_to(
        self,
        new_out: "GraphNode",
        role_name: Optional[str] = None,
        keep_old_role: bool = True,
        reset_cardinality: bool = False,
        set_upper_cardinality: bool = False,
        relax_lower_cardinality: bool = False,
    ) -> None:
        """
        Moves the relation to a new target class, adjusting the moved end.

        Args:
            new_out: new target class
            role_name: role name for the target class
            keep_old_role: keep an existing role name instead of overwriting it
            reset_cardinality: set the moved end to ``0..*``
            set_upper_cardinality: cap the upper bound of the moved end at 1
            relax_lower_cardinality: lower the lower bound of the moved end to 0
        """
        self.outs[0].remove_in_relation(self)
        self.outs[0] = new_out
        new_out.ins.append(self)

        if self.is_relation:
            end = self.out_end
            end.property_type = ElementReference.of(new_out.element)
            self._adjust_end(end, role_name, keep_old_role, reset_cardinality,
                             set_upper_cardinality, relax_lower_cardinality)
        elif self.is_generalization:
            self.element.general = ElementReference.of(new_out.element)

        self._redraw_end(new_out, at_source=self.reversed)

    def move_relation_from(
        self,
        new_in: "GraphNode",
        role_name: Optional[str] = None,
        keep_old_role: bool = True,
        reset_cardinality: bool = False,
        set_upper_cardinality: bool = False,
        relax_lower_cardinality: bool = False,
    ) -> None:
        """
        Moves the relation to a new source class, adjusting the moved end.

        Arguments mirror ``move_relation_to``.
        """
        self.ins[0].remove_out_relation(self)
        self.ins[0] = new_in
        new_in.outs.append(self)

        if self.is_relation:
            end = self.in_end
            end.property_type = ElementReference.of(new_in.element)
            self._adjust_end(end, role_name, keep_old_role, reset_cardinality,
                             set_upper_cardinality, relax_lower_cardinality)
        elif self.is_generalization:
            self.element.specific = ElementReference.of(new_in.element)

        self._redraw_end(new_in, at_source=not self.reversed)

    @staticmethod
    def _adjust_end(
        end: Property,
        role_name: Optional[str],
        keep_old_role: bool,
        reset_cardinality: bool,
        set_upper_cardinality: bool,
        relax_lower_cardinality: bool,
    ) -> None:
        if reset_cardinality:
            end.set_zero_to_many()
        if set_upper_cardinality and (end.upper_bound is None or end.upper_bound > 1):
            end.set_upper_bound(1)
        if relax_lower_cardinality and end.lower_bound > 0:
            end.set_lower_bound(0)
        if role_name is not None:
            if not keep_old_role or not end.name:
                end.name = role_name

    def _redraw_end(self, class_node: "GraphNode", at_source: bool) -> None:
        """Re-attach every view of this relation to the class' first view."""
        class_view = class_node.representations[0]
        anchor = class_view.shape.bottom_center
        for view in self.representations:
            if not isinstance(view, (RelationView, GeneralizationView)):
                continue
            points = list(view.shape.points)
            if at_source:
                view.source = ElementReference.of(class_view)
                view.shape.points = [anchor] + points[1:]
            else:
                view.target = ElementReference.of(class_view)
                view.shape.points = points[:-1] + [anchor]
