import os
import tempfile
import unittest

import numpy as np

from geomesh.trimesh import TriMesh, DEFAULT_PARTITION
from tests.common_meshes import create_square_mesh, SQUARE_CELLS


class TestTriMesh(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.mesh = create_square_mesh()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_from_arrays(self):
        """Test sizes and single-partition housekeeping arrays."""
        self.assertEqual(self.mesh.n_nodes, 4)
        self.assertEqual(self.mesh.n_cells, 2)
        self.assertEqual(self.mesh.n_edges, 0)
        self.assertFalse(self.mesh.has_edges)
        np.testing.assert_array_equal(self.mesh.cell_node_connectivity, SQUARE_CELLS)

        np.testing.assert_array_equal(self.mesh.node_global_index, np.arange(4))
        np.testing.assert_array_equal(
            self.mesh.node_remote_index, self.mesh.node_global_index
        )
        np.testing.assert_array_equal(self.mesh.cell_global_index, np.arange(2))
        self.assertTrue(np.all(self.mesh.node_partition == DEFAULT_PARTITION))
        self.assertTrue(np.all(self.mesh.cell_partition == DEFAULT_PARTITION))
        self.assertFalse(np.any(self.mesh.node_ghost))
        self.assertTrue(np.all(self.mesh.node_flags == 0))

    def test_from_arrays_rejects_bad_input(self):
        """Test shape and index validation."""
        with self.assertRaises(ValueError):
            TriMesh.from_arrays([[0.0, 0.0, 0.0]], [])
        with self.assertRaises(ValueError):
            TriMesh.from_arrays([[0.0, 0.0], [1.0, 0.0]], [[0, 1]])
        with self.assertRaises(ValueError):
            TriMesh.from_arrays([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]], [[0, 1, 3]])

    def test_bounding_box(self):
        self.assertEqual(self.mesh.bounding_box(), (0.0, 0.0, 1.0, 1.0))
        with self.assertRaises(RuntimeError):
            TriMesh().bounding_box()

    def test_copy_is_independent(self):
        """Test that a copy shares no arrays with the original."""
        other = self.mesh.copy()
        other.node_coords[0] = [5.0, 5.0]
        other.cell_node_connectivity[0, 0] = 3
        self.assertEqual(self.mesh.node_coords[0, 0], 0.0)
        self.assertEqual(self.mesh.cell_node_connectivity[0, 0], 0)

    def test_print_summary(self):
        """Test that the summary report runs on meshes with and without cells."""
        self.mesh.print_summary()
        TriMesh().print_summary()

    def test_plot(self):
        """Test that a plot file is written."""
        filepath = os.path.join(self.tmpdir.name, "square.png")
        self.mesh.plot(filepath, show_cells=True, show_nodes=True)
        self.assertTrue(os.path.exists(filepath))

    def test_plot_empty_mesh(self):
        """Test that nothing is written for a mesh without cells."""
        filepath = os.path.join(self.tmpdir.name, "empty.png")
        TriMesh().plot(filepath)
        self.assertFalse(os.path.exists(filepath))


if __name__ == "__main__":
    unittest.main()
