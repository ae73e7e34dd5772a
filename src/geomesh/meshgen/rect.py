# -*- coding: utf-8 -*-
"""
Generation of rectangular strips of equilateral triangles.

The strip is built in four stages:

1. a structured lattice of right triangles (`nx = 3 * ny` columns),
2. a shear + vertical scale that turns the lattice into equilateral triangles,
3. clipping to a box roughly twice as wide as the strip is high,
4. re-centering on the bounding-box centre and one uniform rescale so the
   y-extent is exactly `TARGET_HEIGHT` (a lat/lon-like range).

Functions
---------
:py:func:`build_rect_mesh`:
    Builds the normalized strip for a given number of rows.
:py:func:`equilateral_transform`:
    Shears a unit lattice into an equilateral one, in place.
:py:func:`triangle_in_box`:
    Tests whether any vertex of a cell lies strictly inside a box.
:py:func:`normalize_bounding_box`:
    Re-centers a mesh and scales it to a fixed height, in place.
"""

from typing import List, Tuple

import numpy as np

from ..trimesh import TriMesh, extract_submesh
from .structured import LinearSpacing, StructuredGrid, StructuredMeshGenerator

# --- Constants ---
TARGET_HEIGHT = 180.0
# Pad of the clipping box in x, as a fraction of one grid column.
SELECTION_PAD = 0.1
SQRT3_2 = np.sqrt(3.0) / 2.0

Point = Tuple[float, float]


def equilateral_transform(mesh: TriMesh) -> None:
    """
    Maps a unit right-triangle lattice onto a unit equilateral lattice in place.

    Every node is rewritten as `x' = x - 0.5 * y`, `y' = y * sqrt(3) / 2`.
    Topology is unchanged. The result is only equilateral when the nodes are
    the raw integer lattice produced with the "forward" diagonal.
    """
    xy = mesh.node_coords
    xy[:, 0] -= 0.5 * xy[:, 1]
    xy[:, 1] *= SQRT3_2


def triangle_in_box(mesh: TriMesh, cell_idx: int, box_lo: Point, box_hi: Point) -> bool:
    """
    Returns True if any vertex of the cell lies strictly inside the box.

    Triangles straddling the box boundary are kept as long as one vertex is
    interior. `cell_idx` is not range-checked.
    """
    for node_idx in mesh.cell_node_connectivity[cell_idx]:
        x, y = mesh.node_coords[node_idx]
        if box_lo[0] < x < box_hi[0] and box_lo[1] < y < box_hi[1]:
            return True
    return False


def select_cells_in_box(mesh: TriMesh, box_lo: Point, box_hi: Point) -> List[int]:
    """Returns, in ascending order, the cells accepted by `triangle_in_box`."""
    return [
        cell_idx
        for cell_idx in range(mesh.n_cells)
        if triangle_in_box(mesh, cell_idx, box_lo, box_hi)
    ]


def normalize_bounding_box(mesh: TriMesh, target_height: float = TARGET_HEIGHT) -> float:
    """
    Centres the bounding box of the mesh on the origin and scales it in place.

    The same factor `target_height / (y_max - y_min)` is applied to both axes
    so triangle shapes are preserved. The centre is the bounding-box centre,
    not the node centroid.

    Args:
        mesh (TriMesh): The mesh to normalize.
        target_height (float): The y-extent after scaling.

    Returns:
        float: The scale factor that was applied.

    Raises:
        ValueError: If the mesh has zero height.
    """
    x_min, y_min, x_max, y_max = mesh.bounding_box()
    l_x = x_max - x_min
    l_y = y_max - y_min
    if l_y <= 0.0:
        raise ValueError("Cannot normalize a mesh with zero height.")

    xy = mesh.node_coords
    xy[:, 0] -= x_min + l_x / 2
    xy[:, 1] -= y_min + l_y / 2

    scale = target_height / l_y
    xy *= scale
    return scale


def build_rect_mesh(ny: int) -> TriMesh:
    """
    Builds a rectangular strip of equilateral triangles.

    Args:
        ny (int): Number of lattice rows; the strip has `ny - 1` rows of
            triangles and is about twice as wide as it is high.

    Returns:
        TriMesh: A new mesh centred on the origin with a y-extent of exactly
        `TARGET_HEIGHT` and equilateral cells of edge length
        `TARGET_HEIGHT / ((ny - 1) * sqrt(3) / 2)`.

    Raises:
        ValueError: If `ny < 2`.
    """
    if ny < 2:
        raise ValueError(f"ny must be at least 2, got {ny}")
    nx = 3 * ny

    # Plain right triangles; made equilateral by the transform below
    grid = StructuredGrid(
        LinearSpacing(0, nx, nx, endpoint=False),
        LinearSpacing(0, ny, ny, endpoint=False),
    )
    mesh = StructuredMeshGenerator(diagonal="forward").generate(grid)
    equilateral_transform(mesh)

    new_height = (ny - 1) * SQRT3_2
    length = 2 * new_height
    box_lo = (0.0, -np.inf)
    box_hi = (length + length / nx * SELECTION_PAD, np.inf)
    keep = select_cells_in_box(mesh, box_lo, box_hi)

    rect_mesh = extract_submesh(mesh, keep)
    normalize_bounding_box(rect_mesh)
    return rect_mesh
