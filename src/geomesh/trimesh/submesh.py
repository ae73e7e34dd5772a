# -*- coding: utf-8 -*-
"""
Extraction of sub-meshes induced by a selection of cells.

The extracted mesh contains exactly the selected cells, in the order given,
and exactly the nodes they reference. Both index spaces are renumbered
contiguously from 0; nodes keep their relative order from the parent mesh.
"""

from typing import Dict, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from .tri_mesh import TriMesh


def _initialize_node_maps(
    mesh: TriMesh, cells: npt.NDArray[np.int_]
) -> Tuple[npt.NDArray[np.int_], Dict[int, int]]:
    """
    Initializes new-to-old and old-to-new node maps for the selected cells.

    Args:
        mesh: The parent mesh.
        cells: Indices of the selected cells in the parent mesh.

    Returns:
        A tuple containing:
        - n2o_nodes: An array mapping new node indices to parent node indices.
        - o2n_nodes: A dictionary mapping parent node indices to new node indices.
    """
    n2o_nodes = np.unique(mesh.cell_node_connectivity[cells])
    o2n_nodes = {int(o): n for n, o in enumerate(n2o_nodes)}
    return n2o_nodes, o2n_nodes


def _remap_connectivity(
    connectivity: npt.NDArray[np.int_], o2n_map: Dict[int, int]
) -> npt.NDArray[np.int_]:
    """
    Remaps a connectivity table to a new index space.

    Raises:
        KeyError: If an index in the table is not found in the map.
    """
    try:
        remapped = [[o2n_map[int(o)] for o in row] for row in connectivity]
    except KeyError as e:
        raise KeyError(f"Index {e} not found in the old-to-new map.") from e
    return np.array(remapped, dtype=int).reshape(connectivity.shape)


def extract_submesh(mesh: TriMesh, cell_indices: Sequence[int]) -> TriMesh:
    """
    Builds a new mesh from a subset of the cells of `mesh`.

    Only cell -> node connectivity is carried over; edge and neighbour tables
    of the parent are dropped and can be rebuilt with `build_edges`.

    Args:
        mesh: The parent mesh. It is not modified.
        cell_indices: Parent cell indices to keep. Their order defines the cell
            numbering of the new mesh.

    Returns:
        A new single-partition TriMesh that shares no data with `mesh`.

    Raises:
        ValueError: If no cells are selected.
        IndexError: If a cell index is out of range.
    """
    cells = np.asarray(cell_indices, dtype=int).ravel()
    if cells.size == 0:
        raise ValueError("Cannot extract a sub-mesh from an empty cell selection.")
    if cells.min() < 0 or cells.max() >= mesh.n_cells:
        raise IndexError(
            f"Cell indices must lie in [0, {mesh.n_cells}), "
            f"got range [{cells.min()}, {cells.max()}]."
        )

    n2o_nodes, o2n_nodes = _initialize_node_maps(mesh, cells)
    connectivity = _remap_connectivity(mesh.cell_node_connectivity[cells], o2n_nodes)

    return TriMesh.from_arrays(mesh.node_coords[n2o_nodes].copy(), connectivity)
