# -*- coding: utf-8 -*-
"""
Data structures and topology tools for 2D unstructured triangle meshes.

Key modules:
- tri_mesh:     Defines the TriMesh container (nodes, cells, edges, neighbour tables).
- submesh:      Extracts the sub-mesh induced by a list of cells.
- connectivity: Derives edges and neighbour tables from cell connectivity.
- reporting:    Formats text summaries of a mesh.
"""

from .tri_mesh import TriMesh, DEFAULT_PARTITION, MISSING_INDEX
from .submesh import extract_submesh
from .connectivity import build_edges, boundary_edges

__all__ = [
    "TriMesh",
    "DEFAULT_PARTITION",
    "MISSING_INDEX",
    "extract_submesh",
    "build_edges",
    "boundary_edges",
]
