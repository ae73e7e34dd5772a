# -*- coding: utf-8 -*-
"""
Reading and writing triangle meshes as Gmsh .msh files through the Gmsh API.
"""

import os

import gmsh
import numpy as np

from ..trimesh.tri_mesh import TriMesh

GMSH_TRIANGLE = 2  # Gmsh element type of the 3-node triangle


def write_gmsh(
    mesh: TriMesh, filename: str, model_name: str = "geomesh", gmsh_verbose: int = 0
) -> None:
    """
    Writes the nodes and triangles of a mesh to a Gmsh .msh file.

    The mesh is stored on a single discrete surface with the physical name
    "domain". Gmsh tags are the 0-based mesh indices plus one.

    Args:
        mesh (TriMesh): The mesh to write.
        filename (str): The path of the .msh file to create.
        model_name (str): The name of the Gmsh model.
        gmsh_verbose (int): The verbosity level for the Gmsh API.
    """
    output_dir = os.path.dirname(filename)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    coords = np.zeros((mesh.n_nodes, 3))
    coords[:, :2] = mesh.node_coords

    gmsh.initialize()
    gmsh.option.setNumber("General.Verbosity", gmsh_verbose)
    try:
        gmsh.model.add(model_name)
        surface_tag = gmsh.model.addDiscreteEntity(2)
        gmsh.model.mesh.addNodes(
            2,
            surface_tag,
            np.arange(1, mesh.n_nodes + 1).tolist(),
            coords.ravel().tolist(),
        )
        gmsh.model.mesh.addElementsByType(
            surface_tag,
            GMSH_TRIANGLE,
            np.arange(1, mesh.n_cells + 1).tolist(),
            (mesh.cell_node_connectivity + 1).ravel().tolist(),
        )
        gmsh.model.addPhysicalGroup(2, [surface_tag], name="domain")
        gmsh.write(filename)
    finally:
        gmsh.finalize()
    print(f"Successfully saved mesh to: {filename}")


def read_gmsh(filename: str, gmsh_verbose: int = 0) -> TriMesh:
    """
    Reads the 3-node triangles of a Gmsh .msh file into a TriMesh.

    Nodes are renumbered contiguously in the order Gmsh returns them; the
    z coordinate is dropped.

    Args:
        filename (str): The path to the .msh file.
        gmsh_verbose (int): The verbosity level for the Gmsh API.

    Returns:
        TriMesh: A single-partition mesh.

    Raises:
        ValueError: If the file contains no triangles.
    """
    gmsh.initialize()
    gmsh.option.setNumber("General.Verbosity", gmsh_verbose)
    try:
        gmsh.open(filename)
        raw_tags, raw_coords, _ = gmsh.model.mesh.getNodes()
        _, tri_node_tags = gmsh.model.mesh.getElementsByType(GMSH_TRIANGLE)
    finally:
        gmsh.finalize()

    if len(tri_node_tags) == 0:
        raise ValueError(f"No triangles found in '{filename}'.")

    tag_to_index = {int(t): i for i, t in enumerate(raw_tags)}
    coords = np.array(raw_coords).reshape(-1, 3)[:, :2]
    cells = [
        [tag_to_index[int(t)] for t in tri]
        for tri in np.array(tri_node_tags).reshape(-1, 3)
    ]
    return TriMesh.from_arrays(coords, cells)
