# -*- coding: utf-8 -*-
"""
Import of unstructured triangle meshes from ICON grid files (NetCDF).

Two entry points are provided:

- :py:func:`mesh_from_netcdf_minimal` reads nodes (`vlon`, `vlat`) and the
  cell -> node table (`vertex_of_cell`).
- :py:func:`mesh_from_netcdf_complete` additionally reads the edges and all
  neighbour tables.

Indices in ICON files are 1-based and stored "element-count last", e.g.
`vertex_of_cell` has shape `(3, n_cells)`. They are converted to 0-based
`(n_elements, k)` tables; padding (0 or the fill value) becomes
`MISSING_INDEX`. Coordinates are converted from radians to degrees.

Neither function raises for bad input. Malformed files and IO faults are
printed to the console and returned as a failed :py:class:`ImportResult`.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np
from netCDF4 import Dataset

from ..trimesh.tri_mesh import (
    TriMesh,
    MISSING_INDEX,
    NODES_PER_CELL,
    NODES_PER_EDGE,
    CELLS_PER_EDGE,
    EDGES_PER_CELL,
    MAX_CELLS_PER_NODE,
    MAX_EDGES_PER_NODE,
)

# Variables signalling that edge data is present. Base grids from DWD only
# carry `edge_index`, grids from the web generator only carry `elat`.
EDGE_COUNT_VARIABLES = ("edge_index", "elat")

# signed int, unsigned int, float
NUMERIC_KINDS = "iuf"


class FailureKind(Enum):
    MALFORMED_INPUT = "malformed-input"
    IO_FAULT = "io-fault"


@dataclass(frozen=True)
class ImportFailure:
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class ImportResult:
    """
    Outcome of a mesh import: either a mesh or a structured failure.

    Attributes:
        mesh (TriMesh | None): The imported mesh on success.
        error (ImportFailure | None): What went wrong on failure.
    """

    mesh: Optional[TriMesh] = None
    error: Optional[ImportFailure] = None

    @property
    def ok(self) -> bool:
        return self.mesh is not None

    def __post_init__(self):
        if (self.mesh is None) == (self.error is None):
            raise ValueError("ImportResult needs exactly one of mesh and error.")

    def unwrap(self) -> TriMesh:
        """Returns the mesh, or raises RuntimeError if the import failed."""
        if self.mesh is None:
            raise RuntimeError(f"Mesh import failed: {self.error.message}")
        return self.mesh

    @classmethod
    def success(cls, mesh: TriMesh) -> "ImportResult":
        return cls(mesh=mesh)

    @classmethod
    def failure(cls, kind: FailureKind, message: str) -> "ImportResult":
        print(message)
        return cls(error=ImportFailure(kind, message))


class MalformedGridFile(ValueError):
    """Raised internally when a grid file does not follow the ICON layout."""


def _rad_to_lon(rad: np.ndarray) -> np.ndarray:
    return rad / np.pi * 180.0


def _rad_to_lat(rad: np.ndarray) -> np.ndarray:
    return rad / (0.5 * np.pi) * 90.0


def _check_numeric(var, name: str) -> None:
    # string and compound variables report a python type or a non-numeric kind
    if np.dtype(var.dtype).kind not in NUMERIC_KINDS:
        raise MalformedGridFile(
            f"Variable '{name}' must be numeric, found type {var.dtype}."
        )


def _load_field(dataset: Dataset, name: str) -> Optional[np.ndarray]:
    """Loads a 1D variable, or returns None if the file does not have it."""
    var = dataset.variables.get(name)
    if var is None:
        return None
    _check_numeric(var, name)
    if var.ndim != 1:
        raise MalformedGridFile(
            f"Variable '{name}' must be 1-dimensional, found {var.ndim} dimensions."
        )
    return np.ma.getdata(var[:])


def _load_2d_field(dataset: Dataset, name: str) -> Optional[np.ndarray]:
    """Loads a 2D variable as a masked array, or returns None if it is absent."""
    var = dataset.variables.get(name)
    if var is None:
        return None
    _check_numeric(var, name)
    if var.ndim != 2:
        raise MalformedGridFile(
            f"Variable '{name}' must be 2-dimensional, found {var.ndim} dimensions."
        )
    return np.ma.asarray(var[:])


def _to_zero_based(table: np.ndarray) -> np.ndarray:
    """
    Converts a 1-based ICON index table of shape (k, n) to a 0-based (n, k) one.

    Masked entries and zero padding become MISSING_INDEX.
    """
    zero_based = np.ma.filled(table, 0).astype(int).T - 1
    zero_based[zero_based < 0] = MISSING_INDEX
    return np.ascontiguousarray(zero_based)


def _read_nodes(dataset: Dataset) -> np.ndarray:
    lon = _load_field(dataset, "vlon")
    lat = _load_field(dataset, "vlat")
    if lon is None or lat is None or lon.size == 0 or lat.size == 0:
        raise MalformedGridFile("lat / long variable not found")
    if lon.size != lat.size:
        raise MalformedGridFile("lat / long not of consistent sizes!")
    return np.column_stack([_rad_to_lon(lon), _rad_to_lat(lat)]).astype(float)


def _read_cells(dataset: Dataset, n_nodes: int) -> np.ndarray:
    cell_to_vertex = _load_2d_field(dataset, "vertex_of_cell")
    if cell_to_vertex is None:
        raise MalformedGridFile("vertex_of_cell variable not found")
    if cell_to_vertex.shape[0] != NODES_PER_CELL:
        raise MalformedGridFile("not a triangle mesh")
    cells = _to_zero_based(cell_to_vertex)
    if cells.size > 0 and (cells.min() < 0 or cells.max() >= n_nodes):
        raise MalformedGridFile("vertex_of_cell references a non-existent vertex")
    return cells


def _read_neighbor_table(
    dataset: Dataset, name: str, per_element: int, n_elements: int, n_targets: int
) -> np.ndarray:
    """
    Reads one neighbour table.

    `n_elements` is the number of rows of the table, `n_targets` the size of
    the index space its entries refer to. A table missing from the file is
    returned filled with MISSING_INDEX.
    """
    table = _load_2d_field(dataset, name)
    if table is None:
        warnings.warn(f"Neighbour table '{name}' not found in grid file, left empty.")
        return np.full((n_elements, per_element), MISSING_INDEX, dtype=int)
    if table.shape[0] != per_element:
        raise MalformedGridFile(
            f"number of neighbors per element not as expected for '{name}': "
            f"expected {per_element}, found {table.shape[0]}"
        )
    if table.shape[1] != n_elements:
        raise MalformedGridFile(
            f"'{name}' has {table.shape[1]} entries, expected {n_elements}"
        )
    table = _to_zero_based(table)
    if table.size > 0 and table.max() >= n_targets:
        raise MalformedGridFile(
            f"'{name}' references index {table.max() + 1}, "
            f"only {n_targets} elements exist"
        )
    return table


def _count_edges(dataset: Dataset) -> int:
    counts = [0]
    for name in EDGE_COUNT_VARIABLES:
        field = _load_field(dataset, name)
        if field is not None:
            counts.append(field.size)
    return max(counts)


def mesh_from_netcdf_minimal(filename: str) -> ImportResult:
    """
    Reads nodes and cells of an ICON grid file.

    Args:
        filename (str): Path to the NetCDF file.

    Returns:
        ImportResult: A mesh with node coordinates in degrees (lon, lat) and
        0-based cell -> node connectivity, or the reason the import failed.
    """
    try:
        with Dataset(filename, "r") as dataset:
            node_coords = _read_nodes(dataset)
            cells = _read_cells(dataset, node_coords.shape[0])
    except MalformedGridFile as e:
        return ImportResult.failure(FailureKind.MALFORMED_INPUT, str(e))
    except (OSError, RuntimeError) as e:
        return ImportResult.failure(
            FailureKind.IO_FAULT, f"Could not read '{filename}': {e}"
        )

    return ImportResult.success(TriMesh.from_arrays(node_coords, cells))


def mesh_from_netcdf_complete(filename: str) -> ImportResult:
    """
    Reads nodes, cells, edges and all neighbour tables of an ICON grid file.

    Files without edge data are rejected even though the minimal import of
    the same file succeeds.

    Args:
        filename (str): Path to the NetCDF file.

    Returns:
        ImportResult: The fully connected mesh, or the reason the import failed.
    """
    result = mesh_from_netcdf_minimal(filename)
    if not result.ok:
        return result
    mesh = result.mesh

    try:
        with Dataset(filename, "r") as dataset:
            n_edges = _count_edges(dataset)
            if n_edges == 0:
                raise MalformedGridFile("no edges found in netcdf file!")

            # cell -> node is already set; node -> node, edge -> edge and
            # cell -> cell are not part of ICON grid files
            tables = {
                "edge_cell_connectivity": _read_neighbor_table(
                    dataset,
                    "adjacent_cell_of_edge",
                    CELLS_PER_EDGE,
                    n_edges,
                    mesh.n_cells,
                ),
                "edge_node_connectivity": _read_neighbor_table(
                    dataset, "edge_vertices", NODES_PER_EDGE, n_edges, mesh.n_nodes
                ),
                "node_cell_connectivity": _read_neighbor_table(
                    dataset,
                    "cells_of_vertex",
                    MAX_CELLS_PER_NODE,
                    mesh.n_nodes,
                    mesh.n_cells,
                ),
                "node_edge_connectivity": _read_neighbor_table(
                    dataset, "edges_of_vertex", MAX_EDGES_PER_NODE, mesh.n_nodes, n_edges
                ),
                "cell_edge_connectivity": _read_neighbor_table(
                    dataset, "edge_of_cell", EDGES_PER_CELL, mesh.n_cells, n_edges
                ),
            }
    except MalformedGridFile as e:
        return ImportResult.failure(FailureKind.MALFORMED_INPUT, str(e))
    except (OSError, RuntimeError) as e:
        return ImportResult.failure(
            FailureKind.IO_FAULT, f"Could not read '{filename}': {e}"
        )

    for name, table in tables.items():
        setattr(mesh, name, table)
    return ImportResult.success(mesh)
