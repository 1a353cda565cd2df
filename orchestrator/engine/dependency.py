# ============================================================================
# DEPENDENCY ORDERER
# ============================================================================
# EPOCH: 1 - SCHEMA EVOLUTION
# STATUS: Core - Foreign key dependency resolution
# PURPOSE: Order tables so referenced tables come before their referrers
# CREATED: 19 OCT 2026
# ============================================================================
"""
Dependency Orderer

Foreign key columns embed a directed graph in the flat table list.
This module makes the graph explicit and sorts it.

Features:
- Dependency graph construction from a Schema
- Topological sort (Kahn) with cycle detection
- Ties broken by original table order, never by name

A table referencing itself is not a cycle: it can be created first and
its constraint added afterwards. References to tables outside the
schema are ignored for ordering.
"""

import heapq
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

from core.errors import CyclicDependencyError
from core.models.schema import Schema
from core.models.table import Table

logger = logging.getLogger(__name__)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class DependencyGraph:
    """
    Dependency graph for a schema.

    A -> B means "B depends on A" (B has a foreign key to A, so A must
    be created before B).
    """
    # Table name -> tables that reference it
    forward_edges: Dict[str, List[str]] = field(default_factory=lambda: defaultdict(list))

    # Table name -> tables it references
    backward_edges: Dict[str, List[str]] = field(default_factory=lambda: defaultdict(list))

    # All table names, in schema order
    nodes: List[str] = field(default_factory=list)

    def add_node(self, name: str) -> None:
        if name not in self.nodes:
            self.nodes.append(name)

    def add_edge(self, from_node: str, to_node: str) -> None:
        """Add a dependency edge: to_node depends on from_node."""
        if to_node in self.forward_edges[from_node]:
            return
        self.forward_edges[from_node].append(to_node)
        self.backward_edges[to_node].append(from_node)

    def get_dependencies(self, name: str) -> List[str]:
        """Tables this table references."""
        return self.backward_edges.get(name, [])

    def get_dependents(self, name: str) -> List[str]:
        """Tables that reference this table."""
        return self.forward_edges.get(name, [])


# ============================================================================
# GRAPH BUILDER
# ============================================================================

class GraphBuilder:
    """Builds the dependency graph from a schema's foreign key columns."""

    def build(self, schema: Schema) -> DependencyGraph:
        graph = DependencyGraph()
        known = set(schema.table_names)

        for table in schema.tables:
            graph.add_node(table.name)

        for table in schema.tables:
            for column in table.foreign_key_columns:
                target = column.related_table_name
                if target == table.name or target not in known:
                    continue
                graph.add_edge(target, table.name)

        return graph


# ============================================================================
# TOPOLOGICAL SORT / CYCLE DETECTION
# ============================================================================

class TopologicalSorter:
    """Provides a stable topological ordering of a dependency graph."""

    def sort(self, graph: DependencyGraph) -> List[str]:
        """
        Sort table names parents-first.

        Among tables that are ready at the same time, the one that came
        first in the schema is placed first.

        Raises:
            CyclicDependencyError: if the graph contains a cycle
        """
        position = {name: index for index, name in enumerate(graph.nodes)}
        in_degree = {name: len(graph.get_dependencies(name)) for name in graph.nodes}

        ready = [position[name] for name, degree in in_degree.items() if degree == 0]
        heapq.heapify(ready)
        sorted_nodes = []

        while ready:
            name = graph.nodes[heapq.heappop(ready)]
            sorted_nodes.append(name)

            for dependent in graph.get_dependents(name):
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    heapq.heappush(ready, position[dependent])

        if len(sorted_nodes) != len(graph.nodes):
            placed = set(sorted_nodes)
            remaining = [n for n in graph.nodes if n not in placed]
            logger.warning(f"Cycle detected involving tables: {remaining}")
            raise CyclicDependencyError(remaining)

        return sorted_nodes


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_graph_builder = GraphBuilder()
_sorter = TopologicalSorter()


def build_graph(schema: Schema) -> DependencyGraph:
    return _graph_builder.build(schema)


def order_tables(schema: Schema) -> List[Table]:
    """
    Tables of a schema, every referenced table before its referrers.

    Args:
        schema: Schema to order

    Returns:
        The schema's Table objects in dependency order

    Raises:
        CyclicDependencyError: for foreign key cycles between distinct tables
    """
    names = _sorter.sort(build_graph(schema))
    return [schema.table_for_name(name) for name in names]


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DependencyGraph",
    "GraphBuilder",
    "TopologicalSorter",
    "build_graph",
    "order_tables",
]
