"""CSV loading of nodes and relations with seeded initial placement."""

from __future__ import annotations

import csv
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, TextIO, Tuple

import numpy as np

from .logging_utils import debug_log_call
from .model import Node, Relation

logger = logging.getLogger(__name__)

NODE_COLUMNS = ("id", "weight")
RELATION_COLUMNS = ("id", "from", "to", "weight")
PLACEMENT_RANGE = (0.0, 100.0)


class LoadError(ValueError):
    """Raised when node or relation input is malformed or inconsistent."""


def _rows(stream: TextIO, required: Iterable[str], label: str):
    reader = csv.DictReader(stream)
    header = [name.strip() for name in (reader.fieldnames or [])]
    missing = [name for name in required if name not in header]
    if missing:
        raise LoadError(f"{label}: missing column(s) {', '.join(missing)}")
    reader.fieldnames = header
    for row in reader:
        yield reader.line_num, row


def _parse(row: Mapping[str, Optional[str]], key: str, kind, line: int, label: str):
    raw = row.get(key)
    if raw is None or not raw.strip():
        raise LoadError(f"{label} [line {line}]: empty value for {key!r}")
    try:
        return kind(raw.strip())
    except ValueError as exc:
        raise LoadError(f"{label} [line {line}]: invalid {key} {raw!r}") from exc


def generate_coordinate(rng: np.random.Generator) -> float:
    """Draw a placement coordinate, rejecting zero and subnormal values."""

    low, high = PLACEMENT_RANGE
    while True:
        value = float(rng.uniform(low, high))
        if value >= sys.float_info.min:
            return value


def read_nodes(stream: TextIO, rng: np.random.Generator) -> Dict[int, Node]:
    nodes: Dict[int, Node] = {}
    for line, row in _rows(stream, NODE_COLUMNS, "nodes"):
        node_id = _parse(row, "id", int, line, "nodes")
        weight = _parse(row, "weight", float, line, "nodes")
        if node_id in nodes:
            raise LoadError(f"nodes [line {line}]: duplicate node id {node_id}")
        x, y = generate_coordinate(rng), generate_coordinate(rng)
        nodes[node_id] = Node(node_id, x, y, weight)
    logger.info("Loaded %d node(s)", len(nodes))
    return nodes


def read_relations(stream: TextIO, nodes: Mapping[int, Node]) -> Dict[int, Relation]:
    relations: Dict[int, Relation] = {}
    for line, row in _rows(stream, RELATION_COLUMNS, "relations"):
        relation_id = _parse(row, "id", int, line, "relations")
        source_id = _parse(row, "from", int, line, "relations")
        target_id = _parse(row, "to", int, line, "relations")
        weight = _parse(row, "weight", float, line, "relations")
        if relation_id in relations:
            raise LoadError(f"relations [line {line}]: duplicate relation id {relation_id}")
        for endpoint in (source_id, target_id):
            if endpoint not in nodes:
                raise LoadError(
                    f"relations [line {line}]: relation {relation_id} references unknown node {endpoint}"
                )
        relation = Relation(weight, nodes[source_id], nodes[target_id])
        relation.register()
        relations[relation_id] = relation
    logger.info("Loaded %d relation(s)", len(relations))
    return relations


@debug_log_call(logger, name="read_all", log_result=False)
def read_all(
    node_stream: TextIO, relation_stream: TextIO, *, seed: int = 0
) -> Tuple[List[Node], List[Relation]]:
    rng = np.random.default_rng(seed)
    nodes = read_nodes(node_stream, rng)
    relations = read_relations(relation_stream, nodes)
    return list(nodes.values()), list(relations.values())


def load_graph(
    nodes_path: Path, relations_path: Path, *, seed: int = 0
) -> Tuple[List[Node], List[Relation]]:
    logger.info("Reading nodes from %s and relations from %s", nodes_path, relations_path)
    with open(nodes_path, newline="", encoding="utf-8") as node_file, open(
        relations_path, newline="", encoding="utf-8"
    ) as relation_file:
        return read_all(node_file, relation_file, seed=seed)


__all__ = [
    "LoadError",
    "generate_coordinate",
    "load_graph",
    "read_all",
    "read_nodes",
    "read_relations",
]
