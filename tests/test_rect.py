import unittest

import numpy as np

from geomesh.common.utility import triangle_edge_lengths
from geomesh.meshgen import (
    build_rect_mesh,
    equilateral_transform,
    normalize_bounding_box,
    select_cells_in_box,
    triangle_in_box,
)
from geomesh.trimesh import TriMesh
from tests.common_meshes import create_lattice_mesh, create_square_mesh

TOL = 1e-9


class TestEquilateralTransform(unittest.TestCase):

    def test_unit_lattice_becomes_equilateral(self):
        """All triangles of the sheared lattice have unit edges."""
        mesh = create_lattice_mesh(5, 4)
        equilateral_transform(mesh)
        lengths = triangle_edge_lengths(mesh.node_coords, mesh.cell_node_connectivity)
        np.testing.assert_allclose(lengths, 1.0, atol=TOL)

    def test_coordinates(self):
        mesh = TriMesh.from_arrays([[2.0, 0.0], [3.0, 2.0], [0.0, 2.0]], [[0, 1, 2]])
        equilateral_transform(mesh)
        np.testing.assert_allclose(
            mesh.node_coords,
            [[2.0, 0.0], [2.0, np.sqrt(3.0)], [-1.0, np.sqrt(3.0)]],
            atol=TOL,
        )


class TestTriangleInBox(unittest.TestCase):

    def setUp(self):
        self.mesh = create_square_mesh()

    def test_any_vertex_inside(self):
        """A single interior vertex is enough to select a triangle."""
        self.assertTrue(triangle_in_box(self.mesh, 0, (0.5, -1.0), (1.5, 0.5)))
        self.assertFalse(triangle_in_box(self.mesh, 1, (0.5, -1.0), (1.5, 0.5)))

    def test_strict_inequalities(self):
        """Vertices on the box boundary are not inside."""
        self.assertFalse(triangle_in_box(self.mesh, 0, (0.0, 0.0), (1.0, 1.0)))
        self.assertTrue(triangle_in_box(self.mesh, 0, (-1e-12, -1e-12), (1.0, 1.0)))

    def test_unbounded_box(self):
        box_lo, box_hi = (-np.inf, -np.inf), (np.inf, np.inf)
        self.assertEqual(select_cells_in_box(self.mesh, box_lo, box_hi), [0, 1])

    def test_shrinking_box_never_adds_cells(self):
        mesh = create_lattice_mesh(8, 6)
        equilateral_transform(mesh)
        previous = set(range(mesh.n_cells))
        for hi_x in np.linspace(7.0, 0.0, 15):
            selected = set(select_cells_in_box(mesh, (0.0, -np.inf), (hi_x, np.inf)))
            self.assertTrue(selected.issubset(previous))
            previous = selected
        self.assertEqual(previous, set())


class TestNormalizeBoundingBox(unittest.TestCase):

    def test_center_and_scale(self):
        mesh = TriMesh.from_arrays([[1.0, 2.0], [5.0, 2.0], [3.0, 4.0]], [[0, 1, 2]])
        scale = normalize_bounding_box(mesh)
        self.assertAlmostEqual(scale, 90.0)
        np.testing.assert_allclose(
            mesh.node_coords, [[-180.0, -90.0], [180.0, -90.0], [0.0, 90.0]], atol=TOL
        )

    def test_idempotent(self):
        """Normalizing twice changes nothing the second time."""
        mesh = create_lattice_mesh(6, 3)
        equilateral_transform(mesh)
        normalize_bounding_box(mesh)
        before = mesh.node_coords.copy()
        scale = normalize_bounding_box(mesh)
        self.assertAlmostEqual(scale, 1.0)
        np.testing.assert_allclose(mesh.node_coords, before, atol=TOL)

    def test_custom_height(self):
        mesh = create_square_mesh()
        normalize_bounding_box(mesh, target_height=2.0)
        self.assertEqual(mesh.bounding_box(), (-1.0, -1.0, 1.0, 1.0))

    def test_zero_height(self):
        mesh = TriMesh.from_arrays([[0.0, 1.0], [1.0, 1.0], [2.0, 1.0]], [[0, 1, 2]])
        with self.assertRaises(ValueError):
            normalize_bounding_box(mesh)


class TestBuildRectMesh(unittest.TestCase):

    def test_extent_and_center(self):
        """The strip is 180 high and centred on the origin."""
        for ny in (2, 3, 5, 8):
            mesh = build_rect_mesh(ny)
            x_min, y_min, x_max, y_max = mesh.bounding_box()
            self.assertAlmostEqual(y_max - y_min, 180.0, places=9)
            self.assertAlmostEqual((x_max + x_min) / 2, 0.0, places=9)
            self.assertAlmostEqual((y_max + y_min) / 2, 0.0, places=9)
            # at least twice as wide as high
            self.assertGreaterEqual(x_max - x_min, 360.0 - TOL)

    def test_equilateral_cells(self):
        """Every cell is equilateral with the edge length set by the row count."""
        for ny in (2, 4, 7):
            mesh = build_rect_mesh(ny)
            expected = 180.0 / ((ny - 1) * np.sqrt(3.0) / 2.0)
            lengths = triangle_edge_lengths(
                mesh.node_coords, mesh.cell_node_connectivity
            )
            np.testing.assert_allclose(lengths, expected, rtol=1e-9)

    def test_all_nodes_referenced(self):
        mesh = build_rect_mesh(6)
        referenced = np.unique(mesh.cell_node_connectivity)
        np.testing.assert_array_equal(referenced, np.arange(mesh.n_nodes))
        np.testing.assert_array_equal(mesh.node_global_index, np.arange(mesh.n_nodes))
        np.testing.assert_array_equal(mesh.cell_global_index, np.arange(mesh.n_cells))

    def test_two_rows(self):
        """ny=2 (nx=6) keeps a single row of five triangles."""
        mesh = build_rect_mesh(2)
        self.assertEqual(mesh.n_cells, 5)
        self.assertEqual(mesh.n_nodes, 7)
        y_values = np.unique(np.round(mesh.node_coords[:, 1], 9))
        np.testing.assert_allclose(y_values, [-90.0, 90.0])

    def test_invalid_rows(self):
        for ny in (-1, 0, 1):
            with self.assertRaises(ValueError):
                build_rect_mesh(ny)


if __name__ == "__main__":
    unittest.main()
