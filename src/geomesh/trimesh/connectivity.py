# -*- coding: utf-8 -*-
"""
Derivation of edges and neighbour tables from cell -> node connectivity.

Meshes created by the structured generator only carry cell -> node
connectivity. `build_edges` fills in the same tables an ICON grid file
provides, so generated and imported meshes can be used interchangeably.
"""

from typing import Dict, List, Tuple

import numpy as np

from .tri_mesh import (
    TriMesh,
    MISSING_INDEX,
    NODES_PER_CELL,
    MAX_CELLS_PER_NODE,
    MAX_EDGES_PER_NODE,
)


def _pad_table(rows: List[List[int]], width: int, what: str) -> np.ndarray:
    """Packs a jagged list into a fixed-width table padded with MISSING_INDEX."""
    table = np.full((len(rows), width), MISSING_INDEX, dtype=int)
    for i, row in enumerate(rows):
        if len(row) > width:
            raise ValueError(
                f"Element {i} has {len(row)} {what}, at most {width} are supported."
            )
        table[i, : len(row)] = row
    return table


def build_edges(mesh: TriMesh) -> None:
    """
    Builds the edges of a triangle mesh and all neighbour tables in place.

    Edge k of a cell joins its local vertices k and (k + 1) % 3. Edges are
    numbered in the order they are first encountered when walking the cells.
    The first cell that references an edge is stored in slot 0 of
    `edge_cell_connectivity`, the second one (if any) in slot 1.

    Raises:
        ValueError: If an edge is shared by more than two cells or a node is
            surrounded by more cells or edges than the tables can hold.
    """
    edge_map: Dict[Tuple[int, int], int] = {}
    edge_nodes: List[Tuple[int, int]] = []
    edge_cells: List[List[int]] = []
    cell_edges = np.empty((mesh.n_cells, NODES_PER_CELL), dtype=int)

    for ci, conn in enumerate(mesh.cell_node_connectivity):
        for k in range(NODES_PER_CELL):
            a, b = int(conn[k]), int(conn[(k + 1) % NODES_PER_CELL])
            key = (a, b) if a < b else (b, a)
            ei = edge_map.get(key)
            if ei is None:
                ei = len(edge_nodes)
                edge_map[key] = ei
                edge_nodes.append((a, b))
                edge_cells.append([])
            elif len(edge_cells[ei]) == 2:
                raise ValueError(f"Edge {key} is shared by more than two cells.")
            edge_cells[ei].append(ci)
            cell_edges[ci, k] = ei

    node_cells: List[List[int]] = [[] for _ in range(mesh.n_nodes)]
    for ci, conn in enumerate(mesh.cell_node_connectivity):
        for n in conn:
            node_cells[int(n)].append(ci)

    node_edges: List[List[int]] = [[] for _ in range(mesh.n_nodes)]
    for ei, (a, b) in enumerate(edge_nodes):
        node_edges[a].append(ei)
        node_edges[b].append(ei)

    mesh.edge_node_connectivity = np.array(edge_nodes, dtype=int).reshape(-1, 2)
    mesh.edge_cell_connectivity = _pad_table(edge_cells, 2, "cells")
    mesh.cell_edge_connectivity = cell_edges
    mesh.node_cell_connectivity = _pad_table(node_cells, MAX_CELLS_PER_NODE, "cells")
    mesh.node_edge_connectivity = _pad_table(node_edges, MAX_EDGES_PER_NODE, "edges")


def boundary_edges(mesh: TriMesh) -> np.ndarray:
    """Returns the indices of edges with only one adjacent cell."""
    if not mesh.has_edges:
        raise RuntimeError("Mesh has no edges. Run build_edges() first.")
    return np.where(mesh.edge_cell_connectivity[:, 1] == MISSING_INDEX)[0]
