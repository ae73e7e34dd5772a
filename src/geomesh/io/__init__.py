"""
Mesh file input and output.

Key modules:
- netcdf_reader: Imports ICON grid files into a TriMesh.
- netcdf_writer: Exports a TriMesh in the ICON grid file layout.
- gmsh_io:       Reads and writes Gmsh .msh files.
"""

from .netcdf_reader import (
    FailureKind,
    ImportFailure,
    ImportResult,
    mesh_from_netcdf_complete,
    mesh_from_netcdf_minimal,
)
from .netcdf_writer import write_netcdf
from .gmsh_io import read_gmsh, write_gmsh

__all__ = [
    "FailureKind",
    "ImportFailure",
    "ImportResult",
    "mesh_from_netcdf_complete",
    "mesh_from_netcdf_minimal",
    "write_netcdf",
    "read_gmsh",
    "write_gmsh",
]
