from .structured import LinearSpacing, StructuredGrid, StructuredMeshGenerator
from .rect import (
    build_rect_mesh,
    equilateral_transform,
    normalize_bounding_box,
    select_cells_in_box,
    triangle_in_box,
)

__all__ = [
    "LinearSpacing",
    "StructuredGrid",
    "StructuredMeshGenerator",
    "build_rect_mesh",
    "equilateral_transform",
    "normalize_bounding_box",
    "select_cells_in_box",
    "triangle_in_box",
]
