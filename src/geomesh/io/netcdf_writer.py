# -*- coding: utf-8 -*-
"""
Export of triangle meshes to the ICON grid file layout (NetCDF).

The written file can be read back with `mesh_from_netcdf_minimal`, and with
`mesh_from_netcdf_complete` when the mesh carries edges.
"""

import os

import numpy as np
from netCDF4 import Dataset

from ..trimesh.tri_mesh import TriMesh, MISSING_INDEX

# (variable, mesh attribute, neighbour dimension, element dimension)
NEIGHBOR_TABLES = [
    ("adjacent_cell_of_edge", "edge_cell_connectivity", "nc", "edge"),
    ("edge_vertices", "edge_node_connectivity", "nc", "edge"),
    ("cells_of_vertex", "node_cell_connectivity", "ne", "vertex"),
    ("edges_of_vertex", "node_edge_connectivity", "ne", "vertex"),
    ("edge_of_cell", "cell_edge_connectivity", "nv", "cell"),
]


def _to_one_based(table: np.ndarray) -> np.ndarray:
    """Converts a 0-based (n, k) table to a 1-based (k, n) one; missing -> 0."""
    one_based = np.where(table == MISSING_INDEX, 0, table + 1)
    return one_based.T.astype(np.int32)


def write_netcdf(mesh: TriMesh, filename: str) -> None:
    """
    Writes a mesh to an ICON-style grid file.

    Node coordinates are taken as (lon, lat) in degrees and stored in radians.
    Edge data and neighbour tables are only written if the mesh has edges.

    Args:
        mesh (TriMesh): The mesh to write.
        filename (str): The path of the NetCDF file to create.
    """
    output_dir = os.path.dirname(filename)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    with Dataset(filename, "w", format="NETCDF4") as ncfile:
        ncfile.createDimension("vertex", mesh.n_nodes)
        ncfile.createDimension("cell", mesh.n_cells)
        ncfile.createDimension("nv", 3)

        vlon = ncfile.createVariable("vlon", "f8", ("vertex",))
        vlon.units = "radian"
        vlon[:] = mesh.node_coords[:, 0] / 180.0 * np.pi
        vlat = ncfile.createVariable("vlat", "f8", ("vertex",))
        vlat.units = "radian"
        vlat[:] = mesh.node_coords[:, 1] / 90.0 * (0.5 * np.pi)

        vertex_of_cell = ncfile.createVariable("vertex_of_cell", "i4", ("nv", "cell"))
        vertex_of_cell[:] = _to_one_based(mesh.cell_node_connectivity)

        if mesh.has_edges:
            ncfile.createDimension("edge", mesh.n_edges)
            ncfile.createDimension("nc", 2)
            ncfile.createDimension("ne", 6)

            edge_index = ncfile.createVariable("edge_index", "i4", ("edge",))
            edge_index[:] = np.arange(1, mesh.n_edges + 1, dtype=np.int32)

            for var_name, attr, nbh_dim, elem_dim in NEIGHBOR_TABLES:
                table = getattr(mesh, attr)
                if table.shape[0] == 0:
                    continue
                var = ncfile.createVariable(var_name, "i4", (nbh_dim, elem_dim))
                var[:] = _to_one_based(table)

    print(f"Mesh written to: {filename}")
