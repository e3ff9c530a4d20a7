"""
Unit tests for the binary marcher.
"""
import unittest
import numpy as np

from msquares.config import MarchConfig
from msquares.flags import Flags
from msquares.sources import FunctionSource, GrayscaleSource
from msquares.triangulation.binary import BinaryMarcher


def low_corner_source():
    data = np.ones((4, 4), dtype=np.float32)
    data[0, 0] = 0.0
    return GrayscaleSource(data, 4, 4, threshold=0.5)


def march(source, width, height, cellsize, flags=Flags.NONE, callback=None):
    config = MarchConfig(width, height, cellsize, flags)
    marcher = BinaryMarcher(source, config, callback)
    return marcher, marcher.march()


class TestBinaryMarcher(unittest.TestCase):
    """Test cases for binary tessellation."""

    def test_full_grid(self):
        source = FunctionSource(lambda i: True)
        _, meshes = march(source, 4, 4, 2)
        self.assertEqual(len(meshes), 1)
        mesh = meshes[0]
        self.assertEqual(mesh.ntriangles, 8)
        self.assertEqual(mesh.npoints, 9)
        self.assertEqual(mesh.dim, 2)
        self.assertIsNone(mesh.color)
        lo, hi = mesh.get_bounding_box()
        np.testing.assert_allclose(lo, [0, 0])
        np.testing.assert_allclose(hi, [1, 1])

    def test_empty_grid(self):
        _, meshes = march(FunctionSource(lambda i: False), 4, 4, 2)
        self.assertTrue(meshes[0].is_empty)
        self.assertEqual(meshes[0].npoints, 0)

    def test_low_corner(self):
        _, meshes = march(low_corner_source(), 4, 4, 2)
        mesh = meshes[0]
        self.assertEqual(mesh.ntriangles, 9)
        self.assertEqual(mesh.npoints, 10)
        areas = mesh.signed_areas()
        self.assertTrue(np.all(areas > 0))
        self.assertAlmostEqual(float(areas.sum()), 31 / 32, places=6)

    def test_invert(self):
        _, meshes = march(low_corner_source(), 4, 4, 2, Flags.INVERT)
        mesh = meshes[0]
        self.assertEqual(mesh.ntriangles, 1)
        self.assertEqual(mesh.npoints, 3)
        self.assertAlmostEqual(float(mesh.signed_areas().sum()), 1 / 32, places=6)

    def test_points_are_welded(self):
        _, meshes = march(low_corner_source(), 4, 4, 2)
        points = meshes[0].points
        self.assertEqual(len(np.unique(points, axis=0)), len(points))

    def test_midpoint_refinement(self):
        """Edge midpoints move to the first sample that changes class."""
        source = FunctionSource(lambda i: i % 4 == 3)
        _, meshes = march(source, 4, 4, 4)
        xs = sorted(set(np.round(meshes[0].points[:, 0], 6).tolist()))
        self.assertEqual(xs, [0.75, 1.0])

    def test_refinement_takes_crossing_nearest_start(self):
        """An edge that changes class twice keeps the crossing nearest its first corner."""
        # South edge (samples 12..15) reads out, in, out, in; east column is inside.
        source = FunctionSource(lambda i: i in (3, 7, 11, 13, 15))
        _, meshes = march(source, 4, 4, 4)
        points = meshes[0].points
        south = sorted(points[np.isclose(points[:, 1], 1.0), 0].tolist())
        north = sorted(points[np.isclose(points[:, 1], 0.0), 0].tolist())
        self.assertEqual(south, [0.25, 1.0])
        self.assertEqual(north, [0.75, 1.0])

    def test_saddle_limits(self):
        # Only the southwest and northeast corners are inside.
        source = FunctionSource(lambda i: i in (3, 12))
        _, meshes = march(source, 4, 4, 4)
        self.assertEqual(meshes[0].ntriangles, 4)
        self.assertEqual(meshes[0].npoints, 6)

        heights = FunctionSource(lambda i: i in (3, 12), lambda x, y: 1.0)
        _, meshes = march(heights, 4, 4, 4, Flags.HEIGHTS | Flags.CONNECT)
        self.assertEqual(meshes[0].ntriangles, 8)
        self.assertEqual(meshes[0].npoints, 10)

    def test_heights(self):
        source = FunctionSource(lambda i: True, lambda x, y: x + 2 * y)
        _, meshes = march(source, 4, 4, 2, Flags.HEIGHTS)
        points = meshes[0].points
        self.assertEqual(points.shape, (9, 3))
        np.testing.assert_allclose(points[:, 2], points[:, 0] + 2 * points[:, 1], rtol=1e-6)

    def test_connect(self):
        _, meshes = march(low_corner_source(), 4, 4, 2, Flags.HEIGHTS | Flags.CONNECT)
        mesh = meshes[0]
        self.assertEqual(mesh.nconnectors, 2)
        self.assertEqual(mesh.ntriangles, 11)
        self.assertEqual(mesh.npoints, 12)
        self.assertEqual(int(mesh.extruded.sum()), 2)
        # Connectors come after every ordinary triangle.
        self.assertEqual(mesh.connectors.tolist(), [False] * 9 + [True] * 2)

    def test_connect_needs_heights(self):
        _, meshes = march(low_corner_source(), 4, 4, 2, Flags.CONNECT)
        self.assertEqual(meshes[0].nconnectors, 0)
        self.assertEqual(meshes[0].dim, 2)

    def test_statistics_and_progress(self):
        progress = []
        marcher, meshes = march(low_corner_source(), 4, 4, 2, callback=progress.append)
        self.assertEqual(progress, [0.5, 1.0])
        stats = marcher.get_statistics()
        self.assertEqual(stats["cells"], 4)
        self.assertEqual(stats["triangles"], 9)
        self.assertEqual(stats["points"], 10)
        self.assertGreaterEqual(stats["processing_time"], 0.0)


if __name__ == "__main__":
    unittest.main()
