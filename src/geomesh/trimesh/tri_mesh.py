# -*- coding: utf-8 -*-
"""
This module defines the TriMesh class, a data-centric container for 2D
unstructured triangle meshes as used by geophysical models.

A TriMesh holds node coordinates and the triangle connectivity, together with
the per-element housekeeping arrays (global index, partition, ghost flag,
remote index) expected by distributed-memory mesh libraries, and optionally
the edge and neighbour tables read from an ICON grid file or derived with
`build_edges`.

Only single-partition meshes are supported: every element belongs to
`DEFAULT_PARTITION` and its remote index equals its global index.
"""

from typing import Tuple

import numpy as np

from ..common.utility import save_mesh_plot
from .reporting import format_mesh_summary

# --- Constants ---
DEFAULT_PARTITION = 0
MISSING_INDEX = -1

NODES_PER_CELL = 3
NODES_PER_EDGE = 2
CELLS_PER_EDGE = 2
EDGES_PER_CELL = 3
MAX_CELLS_PER_NODE = 6  # some ICON vertices only have 5
MAX_EDGES_PER_NODE = 6


def _empty_table(n_cols: int) -> np.ndarray:
    return np.empty((0, n_cols), dtype=int)


class TriMesh:
    """
    A data-centric class for storing 2D unstructured triangle meshes.

    Attributes:
        node_coords (np.ndarray): Node coordinates (x, y), or (lon, lat) in
            degrees for meshes imported from ICON grid files.
            - Shape: `(n_nodes, 2)`
            - `dtype`: `float`
        node_global_index (np.ndarray): Dense global node index, starting at 0.
        node_remote_index (np.ndarray): Index of the node on its owning partition.
        node_partition (np.ndarray): Owning partition of each node.
        node_ghost (np.ndarray): Ghost flag of each node (`bool`).
        node_flags (np.ndarray): Topology bit flags of each node.
        cell_node_connectivity (np.ndarray): Node indices of each triangle.
            - Shape: `(n_cells, 3)`
            - `dtype`: `int`
        cell_global_index (np.ndarray): Dense global cell index, starting at 0.
        cell_partition (np.ndarray): Owning partition of each cell.
        edge_node_connectivity (np.ndarray): The two nodes of each edge.
            - Shape: `(n_edges, 2)`
        edge_cell_connectivity (np.ndarray): The (up to) two cells adjacent to
            each edge, padded with `MISSING_INDEX`.
            - Shape: `(n_edges, 2)`
        node_cell_connectivity (np.ndarray): Cells around each node, padded
            with `MISSING_INDEX`.
            - Shape: `(n_nodes, 6)`
        node_edge_connectivity (np.ndarray): Edges around each node, padded
            with `MISSING_INDEX`.
            - Shape: `(n_nodes, 6)`
        cell_edge_connectivity (np.ndarray): The three edges of each cell.
            - Shape: `(n_cells, 3)`
    """

    def __init__(self) -> None:
        """Initializes the TriMesh instance with empty attributes."""
        # Nodes
        self.node_coords: np.ndarray = np.empty((0, 2), dtype=float)
        self.node_global_index: np.ndarray = np.array([], dtype=int)
        self.node_remote_index: np.ndarray = np.array([], dtype=int)
        self.node_partition: np.ndarray = np.array([], dtype=int)
        self.node_ghost: np.ndarray = np.array([], dtype=bool)
        self.node_flags: np.ndarray = np.array([], dtype=int)

        # Cells
        self.cell_node_connectivity: np.ndarray = _empty_table(NODES_PER_CELL)
        self.cell_global_index: np.ndarray = np.array([], dtype=int)
        self.cell_partition: np.ndarray = np.array([], dtype=int)

        # Edges and neighbour tables (optional)
        self.edge_node_connectivity: np.ndarray = _empty_table(NODES_PER_EDGE)
        self.edge_cell_connectivity: np.ndarray = _empty_table(CELLS_PER_EDGE)
        self.node_cell_connectivity: np.ndarray = _empty_table(MAX_CELLS_PER_NODE)
        self.node_edge_connectivity: np.ndarray = _empty_table(MAX_EDGES_PER_NODE)
        self.cell_edge_connectivity: np.ndarray = _empty_table(EDGES_PER_CELL)

    # =========================================================================
    # Public API
    # =========================================================================

    @classmethod
    def from_arrays(cls, node_coords, cell_node_connectivity) -> "TriMesh":
        """
        Creates a single-partition TriMesh from coordinate and connectivity arrays.

        Global indices are set to 0..n-1, remote indices equal global indices,
        every element is assigned to `DEFAULT_PARTITION`, no node is a ghost
        and all node flags are reset.

        Args:
            node_coords: Array-like of shape (n_nodes, 2).
            cell_node_connectivity: Array-like of shape (n_cells, 3) with 0-based
                node indices.

        Returns:
            A new TriMesh instance.

        Raises:
            ValueError: If the arrays have the wrong shape or a cell references
                a node that does not exist.
        """
        coords = np.array(node_coords, dtype=float)
        cells = np.array(cell_node_connectivity, dtype=int)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError(
                f"node_coords must have shape (n_nodes, 2), got {coords.shape}"
            )
        if cells.size == 0:
            cells = cells.reshape(0, NODES_PER_CELL)
        if cells.ndim != 2 or cells.shape[1] != NODES_PER_CELL:
            raise ValueError(
                f"cell_node_connectivity must have shape (n_cells, 3), got {cells.shape}"
            )
        if cells.size > 0 and (cells.min() < 0 or cells.max() >= coords.shape[0]):
            raise ValueError("Cell connectivity references a non-existent node.")

        mesh = cls()
        mesh.node_coords = coords
        mesh.cell_node_connectivity = cells
        mesh.reset_housekeeping()
        return mesh

    def reset_housekeeping(self) -> None:
        """(Re)initializes global indices, partitions, ghosts and flags."""
        n_nodes, n_cells = self.n_nodes, self.n_cells
        self.node_global_index = np.arange(n_nodes, dtype=int)
        self.node_remote_index = np.arange(n_nodes, dtype=int)
        self.node_partition = np.full(n_nodes, DEFAULT_PARTITION, dtype=int)
        self.node_ghost = np.zeros(n_nodes, dtype=bool)
        self.node_flags = np.zeros(n_nodes, dtype=int)
        self.cell_global_index = np.arange(n_cells, dtype=int)
        self.cell_partition = np.full(n_cells, DEFAULT_PARTITION, dtype=int)

    @property
    def n_nodes(self) -> int:
        return int(self.node_coords.shape[0])

    @property
    def n_cells(self) -> int:
        return int(self.cell_node_connectivity.shape[0])

    @property
    def n_edges(self) -> int:
        return int(self.edge_node_connectivity.shape[0])

    @property
    def has_edges(self) -> bool:
        return self.n_edges > 0

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """
        Computes the axis-aligned bounding box of the node set.

        Returns:
            Tuple[float, float, float, float]: (x_min, y_min, x_max, y_max).
        """
        if self.n_nodes == 0:
            raise RuntimeError("Mesh has no nodes.")
        x_min, y_min = np.min(self.node_coords, axis=0)
        x_max, y_max = np.max(self.node_coords, axis=0)
        return float(x_min), float(y_min), float(x_max), float(y_max)

    def copy(self) -> "TriMesh":
        """Returns a deep copy that shares no array with this mesh."""
        other = TriMesh()
        for name, value in vars(self).items():
            setattr(other, name, value.copy())
        return other

    def print_summary(self) -> None:
        """Prints a formatted summary report of the mesh."""
        print(format_mesh_summary(self))

    def plot(
        self,
        filepath: str = "mesh_plot.png",
        show_cells: bool = False,
        show_nodes: bool = False,
    ) -> None:
        """
        Generates a 2D plot of the mesh and saves it to a file.

        Args:
            filepath (str): The path to save the plot image.
            show_cells (bool): Whether to label cells with their index.
            show_nodes (bool): Whether to label nodes with their index.
        """
        if self.n_cells == 0:
            print("Warning: Mesh has no cells, nothing to plot.")
            return

        save_mesh_plot(
            self.node_coords,
            self.cell_node_connectivity,
            filepath,
            show_nodes=show_nodes,
            show_cells=show_cells,
        )
        print(f"Mesh plot saved to: {filepath}")
