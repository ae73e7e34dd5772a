import os

from geomesh.io import write_gmsh, write_netcdf
from geomesh.meshgen import build_rect_mesh
from geomesh.trimesh import build_edges


def main():
    """Create a rectangular strip of equilateral triangles and save it."""
    ny = 10  # Number of lattice rows
    output_dir = "data"
    os.makedirs(output_dir, exist_ok=True)

    mesh = build_rect_mesh(ny)
    build_edges(mesh)
    mesh.print_summary()

    write_netcdf(mesh, os.path.join(output_dir, f"rect_mesh_ny{ny}.nc"))
    write_gmsh(mesh, os.path.join(output_dir, f"rect_mesh_ny{ny}.msh"))
    mesh.plot(os.path.join(output_dir, f"rect_mesh_ny{ny}.png"), show_cells=True)


if __name__ == "__main__":
    main()
