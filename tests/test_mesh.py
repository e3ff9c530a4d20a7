"""
Unit tests for mesh containers.
"""
import unittest
import numpy as np

from msquares.core.mesh import Mesh, MeshBuilder, MeshList
from msquares.exceptions import MeshIndexError, MeshValidationError


def unit_square(dim=2):
    points = [(0, 0), (1, 0), (1, 1), (0, 1)]
    if dim == 3:
        points = [p + (0.5,) for p in points]
    return Mesh(points=points, triangles=[(0, 1, 2), (2, 3, 0)], dim=dim)


class TestMesh(unittest.TestCase):
    """Test cases for Mesh validation and helpers."""

    def test_coercion(self):
        mesh = unit_square()
        self.assertEqual(mesh.points.dtype, np.float32)
        self.assertEqual(mesh.triangles.dtype, np.int32)
        self.assertEqual(mesh.npoints, 4)
        self.assertEqual(mesh.ntriangles, 2)
        self.assertEqual(mesh.nconnectors, 0)
        self.assertFalse(mesh.extruded.any())

    def test_invalid_dimension(self):
        with self.assertRaises(MeshValidationError):
            Mesh(points=np.zeros((0, 4)), triangles=np.zeros((0, 3)), dim=4)

    def test_out_of_range_index(self):
        with self.assertRaises(MeshValidationError):
            Mesh(points=[(0, 0), (1, 0), (1, 1)], triangles=[(0, 1, 3)])

    def test_mask_shape_mismatch(self):
        with self.assertRaises(MeshValidationError):
            Mesh(points=[(0, 0), (1, 0), (1, 1)], triangles=[(0, 1, 2)],
                 connectors=[False, True])

    def test_empty_mesh(self):
        mesh = Mesh(points=np.zeros((0, 2)), triangles=np.zeros((0, 3)))
        self.assertTrue(mesh.is_empty)
        with self.assertRaises(MeshValidationError):
            mesh.get_bounding_box()

    def test_signed_areas(self):
        areas = unit_square().signed_areas()
        np.testing.assert_allclose(areas, [0.5, 0.5])

    def test_bounding_box(self):
        lo, hi = unit_square(dim=3).get_bounding_box()
        np.testing.assert_allclose(lo, [0, 0, 0.5])
        np.testing.assert_allclose(hi, [1, 1, 0.5])

    def test_copy_is_independent(self):
        mesh = unit_square()
        clone = mesh.copy()
        clone.points[0, 0] = 9.0
        self.assertEqual(mesh.points[0, 0], 0.0)


class TestMeshList(unittest.TestCase):
    """Test cases for MeshList access and ownership."""

    def setUp(self):
        self.meshes = MeshList([unit_square(), unit_square(dim=3)])

    def test_count_and_access(self):
        self.assertEqual(self.meshes.count, 2)
        self.assertEqual(len(self.meshes), 2)
        self.assertEqual(self.meshes.get_mesh(1).dim, 3)
        self.assertEqual(self.meshes[0].dim, 2)

    def test_out_of_range(self):
        with self.assertRaises(MeshIndexError):
            self.meshes.get_mesh(2)
        with self.assertRaises(IndexError):
            self.meshes[-1]

    def test_release(self):
        first = self.meshes[0]
        self.meshes.release()
        self.assertEqual(len(self.meshes), 0)
        self.assertEqual(first.npoints, 0)

    def test_take(self):
        taken = self.meshes.take()
        self.assertEqual(len(taken), 2)
        self.assertEqual(len(self.meshes), 0)


class TestMeshBuilder(unittest.TestCase):
    """Test cases for the staging builder."""

    def test_connectors_follow_triangles(self):
        builder = MeshBuilder(3)
        a = builder.add_point((0, 0, 1))
        b = builder.add_point((1, 0, 1))
        c = builder.add_point((0, 1, 1))
        builder.add_triangle(a, b, c)
        ea = builder.extrude(a)
        eb = builder.extrude(b)
        builder.add_connector(a, b, eb)
        builder.add_connector(eb, ea, a)

        mesh = builder.build()
        self.assertEqual(mesh.ntriangles, 3)
        self.assertEqual(mesh.connectors.tolist(), [False, True, True])
        self.assertEqual(mesh.extruded.tolist(), [False, False, False, True, True])

    def test_extrude_is_memoized(self):
        builder = MeshBuilder(3)
        a = builder.add_point((0, 0, 1))
        self.assertEqual(builder.extrude(a), builder.extrude(a))
        self.assertEqual(builder.npoints, 2)

    def test_empty_build(self):
        mesh = MeshBuilder(2, color=7).build()
        self.assertTrue(mesh.is_empty)
        self.assertEqual(mesh.color, 7)
        self.assertEqual(mesh.points.shape, (0, 2))


if __name__ == "__main__":
    unittest.main()
