import unittest

import numpy as np

from geomesh.meshgen import LinearSpacing, StructuredGrid, StructuredMeshGenerator


class TestLinearSpacing(unittest.TestCase):

    def test_without_endpoint(self):
        """LinearSpacing(0, n, n, False) yields 0 .. n-1 with step 1."""
        spacing = LinearSpacing(0, 6, 6, endpoint=False)
        self.assertEqual(len(spacing), 6)
        np.testing.assert_allclose(spacing.values, np.arange(6))

    def test_with_endpoint(self):
        spacing = LinearSpacing(0.0, 1.0, 5)
        np.testing.assert_allclose(spacing.values, [0.0, 0.25, 0.5, 0.75, 1.0])

    def test_invalid_count(self):
        with self.assertRaises(ValueError):
            LinearSpacing(0, 1, 0)


class TestStructuredMeshGenerator(unittest.TestCase):

    def setUp(self):
        self.grid = StructuredGrid(
            LinearSpacing(0, 4, 4, endpoint=False),
            LinearSpacing(0, 3, 3, endpoint=False),
        )

    def test_grid_points(self):
        """Test row-major point ordering."""
        points = self.grid.points()
        self.assertEqual(points.shape, (12, 2))
        self.assertEqual(self.grid.index(1, 2), 9)
        np.testing.assert_allclose(points[9], [1.0, 2.0])
        np.testing.assert_allclose(points[3], [3.0, 0.0])

    def test_forward_triangulation(self):
        """Test cell counts, ordering and the forward diagonal."""
        mesh = StructuredMeshGenerator().generate(self.grid)
        self.assertEqual(mesh.n_nodes, 12)
        self.assertEqual(mesh.n_cells, 2 * 3 * 2)
        # first quad: lower triangle, then upper triangle
        np.testing.assert_array_equal(mesh.cell_node_connectivity[0], [0, 1, 5])
        np.testing.assert_array_equal(mesh.cell_node_connectivity[1], [0, 5, 4])
        # second row starts after the 3 quads of the first row
        np.testing.assert_array_equal(mesh.cell_node_connectivity[6], [4, 5, 9])

    def test_backward_triangulation(self):
        mesh = StructuredMeshGenerator(diagonal="backward").generate(self.grid)
        np.testing.assert_array_equal(mesh.cell_node_connectivity[0], [0, 1, 4])
        np.testing.assert_array_equal(mesh.cell_node_connectivity[1], [1, 5, 4])

    def test_alternating_triangulation(self):
        """Test that neighbouring quads use opposite diagonals."""
        mesh = StructuredMeshGenerator(diagonal="alternating").generate(self.grid)
        np.testing.assert_array_equal(mesh.cell_node_connectivity[0], [0, 1, 5])
        np.testing.assert_array_equal(mesh.cell_node_connectivity[2], [1, 2, 5])
        np.testing.assert_array_equal(mesh.cell_node_connectivity[6], [4, 5, 8])

    def test_counter_clockwise(self):
        """Test that every triangle has a positive signed area."""
        for diagonal in ("forward", "backward", "alternating"):
            mesh = StructuredMeshGenerator(diagonal=diagonal).generate(self.grid)
            p = mesh.node_coords[mesh.cell_node_connectivity]
            signed = (p[:, 1, 0] - p[:, 0, 0]) * (p[:, 2, 1] - p[:, 0, 1]) - (
                p[:, 1, 1] - p[:, 0, 1]
            ) * (p[:, 2, 0] - p[:, 0, 0])
            self.assertTrue(np.all(signed > 0), diagonal)

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            StructuredMeshGenerator(diagonal="sideways")
        thin = StructuredGrid(LinearSpacing(0, 4, 4), LinearSpacing(0, 1, 1))
        with self.assertRaises(ValueError):
            StructuredMeshGenerator().generate(thin)


if __name__ == "__main__":
    unittest.main()
