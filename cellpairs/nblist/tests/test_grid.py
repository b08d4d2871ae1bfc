import itertools
import unittest

import numpy as np

from ...exceptions import ConfigurationError, InternalError
from ...unitcell import Unitcell
from ..grid import FINAL, VoxelGrid, VoxelMap


class VoxelGridTest(unittest.TestCase):

    def test_dimensions(self):
        grid = VoxelGrid(2.0, Unitcell(np.diag([10.0, 9.0, 3.0])))
        self.assertEqual(grid.num_voxels, (2, 2, 1))
        self.assertEqual(grid.num_voxels_total, 4)
        self.assertTrue(np.allclose(grid.voxel_size, [5.0, 4.5, 3.0]))
        self.assertTrue(np.allclose(grid.voxel_size_r, [0.5, 0.5, 1.0]))
        self.assertEqual(grid.d_index, (1, 1, 1))
        self.assertEqual(grid.degenerate_axes, (2,))

    def test_voxel_size_at_least_twice_cutoff(self):
        for length in (4.0, 7.9, 8.0, 23.3, 100.0):
            grid = VoxelGrid(2.0, Unitcell(np.eye(3)*length))
            self.assertTrue(np.all(grid.voxel_size >= 4.0))

    def test_invalid_cutoff(self):
        cell = Unitcell(np.eye(3)*10.0)
        for cutoff in (0.0, -2.0, np.nan, None):
            with self.assertRaises(ConfigurationError):
                VoxelGrid(cutoff, cell)
        for max_voxels in (0, -5, "big", 10.0, True):
            with self.assertRaises(ConfigurationError):
                VoxelGrid(1.0, cell, max_voxels=max_voxels)

    def test_max_voxels(self):
        cell = Unitcell(np.eye(3)*40.0)
        grid = VoxelGrid(1.0, cell, max_voxels=8000)
        self.assertEqual(grid.num_voxels, (20, 20, 20))
        grid = VoxelGrid(1.0, cell, max_voxels=7999)
        self.assertEqual(grid.num_voxels, (10, 10, 10))
        # coarser voxels need no wider search
        self.assertEqual(grid.d_index, (1, 1, 1))

    def test_voxel_coords_periodic(self):
        grid = VoxelGrid(1.0, Unitcell(np.eye(3)*10.0))
        coords = grid.voxel_coords([[0.05, 0.25, 0.95],
                                    [-0.05, 1.25, 2.95],
                                    [-1.0, 0.0, 1.0]])
        self.assertEqual(coords.tolist(), [[0, 1, 4], [4, 1, 4], [0, 0, 0]])
        self.assertEqual(grid.voxel_index([-0.05, 1.25, 2.95]),
                         grid.voxel_id(4, 1, 4))

    def test_flattening_is_collision_free(self):
        # nx*ny != ny*nz: a flattening with the wrong strides collides
        grid = VoxelGrid(1.0, Unitcell(np.diag([2.0, 4.0, 6.0])))
        nx, ny, nz = grid.num_voxels
        self.assertEqual((nx, ny, nz), (1, 2, 3))
        ids = [grid.voxel_id(x, y, z) for x, y, z in itertools.product(
            range(nx), range(ny), range(nz))]
        self.assertEqual(sorted(ids), list(range(nx*ny*nz)))
        with self.assertRaises(InternalError):
            grid.voxel_id(0, 2, 0)
        with self.assertRaises(InternalError):
            grid.voxel_id(0, 0, -1)


class VoxelMapTest(unittest.TestCase):

    def setUp(self):
        rng = np.random.RandomState(42)
        self.frac = rng.uniform(-1.0, 2.0, size=(100, 3))
        self.grid = VoxelGrid(1.0, Unitcell(np.eye(3)*8.0))
        self.voxels = VoxelMap(self.grid, self.frac)

    def test_every_point_in_one_voxel(self):
        self.assertEqual(len(self.voxels), 100)
        members = []
        for vid in self.voxels.occupied():
            contents = self.voxels.contents(vid)
            self.assertTrue(len(contents) > 0)
            for i in contents:
                self.assertEqual(self.voxels.voxel_of(i), vid)
            members += contents
        self.assertEqual(sorted(members), list(range(100)))

    def test_ascending_order(self):
        for vid in self.voxels.occupied():
            contents = self.voxels.contents(vid)
            self.assertEqual(contents, sorted(contents))

    def test_assignment_matches_grid(self):
        for i, s in enumerate(self.frac):
            self.assertEqual(self.voxels.voxel_of(i),
                             self.grid.voxel_index(s))

    def test_empty_voxel(self):
        voxels = VoxelMap(self.grid, np.array([[0.1, 0.1, 0.1]]))
        self.assertEqual(voxels.occupied(), [0])
        self.assertEqual(voxels.contents(1), [])
        self.assertEqual(FINAL, -1)


if __name__ == "__main__":
    unittest.main()
