"""Graph entities: positioned nodes and the spring relations between them."""

from __future__ import annotations

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator, List, Sequence

from . import forces
from .geometry import Coordinates, Vector2D


class ReadWriteLock:
    """Many concurrent readers or a single writer.

    Waiting writers block new readers so a steady stream of reads cannot
    starve a commit.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


def _resolve(refs: Sequence["weakref.ReferenceType[Relation]"], node: "Node") -> List["Relation"]:
    relations: List[Relation] = []
    for ref in refs:
        relation = ref()
        if relation is None:
            raise ReferenceError(f"relation incident to node {node.id} was released while registered")
        relations.append(relation)
    return relations


class Node:
    """A weighted point of the layout.

    The position is the only state shared between simulation workers. It is
    read under the node's shared lock and replaced under its exclusive lock.
    Incident relations are kept as weak references: the graph's relation
    collection owns them.
    """

    def __init__(self, node_id: int, x: float, y: float, weight: float) -> None:
        self.id = node_id
        self.weight = float(weight)
        self._loc = Coordinates(x, y)
        self._lock = ReadWriteLock()
        self._outgoing: List[weakref.ReferenceType[Relation]] = []
        self._incoming: List[weakref.ReferenceType[Relation]] = []

    def __repr__(self) -> str:
        loc = self.loc
        return f"Node(id={self.id!r}, x={loc.x!r}, y={loc.y!r}, weight={self.weight!r})"

    @property
    def loc(self) -> Coordinates:
        with self._lock.read():
            return self._loc

    def update_coordinates(self, new: Coordinates) -> None:
        with self._lock.write():
            self._loc = new

    @property
    def outgoing(self) -> List["Relation"]:
        """Relations where this node is the source."""

        return _resolve(self._outgoing, self)

    @property
    def incoming(self) -> List["Relation"]:
        """Relations where this node is the target."""

        return _resolve(self._incoming, self)

    def distance_squared(self, other: "Node") -> float:
        return forces.distance_squared(self.loc, other.loc)

    def coulomb_vector(self, other: "Node", scale: float) -> Vector2D:
        return forces.coulomb_vector(self.loc, other.loc, self.weight, other.weight, scale)

    def spring_vector(self, scale: float) -> Vector2D:
        pulls = [relation.hook_vector(scale) for relation in self.outgoing]
        pulls.extend(-relation.hook_vector(scale) for relation in self.incoming)
        return Vector2D.sum(pulls)

    def compound_vector(
        self,
        others: Sequence["Node"],
        spring_scale: float,
        coulomb_scale: float,
    ) -> Vector2D:
        """Net force: repulsion from every other node plus incident springs."""

        position = self.loc
        repulsion = Vector2D.sum(
            forces.coulomb_vector(position, other.loc, self.weight, other.weight, coulomb_scale)
            for other in others
            if other.id != self.id
        )
        return repulsion + self.spring_vector(spring_scale)

    def calc_new_position(
        self,
        others: Sequence["Node"],
        spring_scale: float,
        coulomb_scale: float,
        t: float,
    ) -> Coordinates:
        offset = self.compound_vector(others, spring_scale, coulomb_scale)
        return self.loc + offset.travel(t)


class Relation:
    """Spring between two nodes, stiffness derived from its weight."""

    def __init__(self, weight: float, source: Node, target: Node) -> None:
        weight = float(weight)
        self.weight_squared = weight * weight
        self.source = source
        self.target = target

    def __repr__(self) -> str:
        return (
            f"Relation(source={self.source.id!r}, target={self.target.id!r}, "
            f"weight_squared={self.weight_squared!r})"
        )

    def distance_squared(self) -> float:
        return self.source.distance_squared(self.target)

    def hook_force(self, scale: float) -> float:
        return forces.hook_force(self.weight_squared, self.distance_squared(), scale)

    def hook_vector(self, scale: float) -> Vector2D:
        return forces.hook_vector(self.source.loc, self.target.loc, self.weight_squared, scale)

    def register(self) -> None:
        """Record weak back-references in both endpoints."""

        self.source._outgoing.append(weakref.ref(self))
        self.target._incoming.append(weakref.ref(self))


__all__ = ["Node", "ReadWriteLock", "Relation"]
