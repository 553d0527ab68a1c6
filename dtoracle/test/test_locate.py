import random
import unittest

from dtoracle.DCEL.face import OUTER_FACE
from dtoracle.DCEL.geometry import Point, orientation, Orientation
from dtoracle.Triangulation.delaunay import DelaunayTriangulation, build
from dtoracle.Triangulation.locate import locate, scan, OnFace, OnEdge, OnVertex, OutsideHull, NoTriangulation


class TestLocate(unittest.TestCase):

    def setUp(self):
        # 4x4 grid, 18 triangles
        self.mesh = build([(x, y) for y in range(4) for x in range(4)])

    def assertInsideFace(self, face, p):
        a, b, c = (self.mesh.point(v) for v in self.mesh.triangle(face))
        for u, v in ((a, b), (b, c), (c, a)):
            self.assertIs(orientation(u, v, p), Orientation.LEFT)

    def test_empty_mesh(self):
        self.assertIsInstance(locate(DelaunayTriangulation(), Point(0.0, 0.0)), NoTriangulation)

    def test_point_in_face_from_every_start(self):
        p = Point(2.3, 1.6)
        for start in self.mesh.inner_faces():
            position = locate(self.mesh, p, start_face=start)
            self.assertIsInstance(position, OnFace)
            self.assertInsideFace(position.face, p)

    def test_point_on_edge(self):
        position = locate(self.mesh, Point(1.5, 0.0))
        self.assertIsInstance(position, OnEdge)
        ends = {self.mesh.origin(position.edge), self.mesh.destination(position.edge)}
        self.assertEqual(ends, {1, 2})

    def test_point_on_vertex(self):
        for v in (0, 5, 10, 15):
            position = locate(self.mesh, self.mesh.point(v))
            self.assertEqual(position, OnVertex(v))

    def test_point_outside_hull(self):
        p = Point(5.0, 1.5)
        position = locate(self.mesh, p)
        self.assertIsInstance(position, OutsideHull)
        self.assertEqual(self.mesh.face_of(position.edge), OUTER_FACE)
        a, b = self.mesh.point(self.mesh.origin(position.edge)), self.mesh.point(self.mesh.destination(position.edge))
        self.assertIs(orientation(a, b, p), Orientation.LEFT)

    def test_exhausted_walk_falls_back_to_scan(self):
        p = Point(2.9, 2.8)
        target = scan(self.mesh, p)
        start = next(f for f in self.mesh.inner_faces() if f != target.face)
        with self.assertLogs("dtoracle.Triangulation.locate", level="WARNING"):
            position = locate(self.mesh, p, start_face=start, max_steps=1)
        self.assertEqual(position, target)
        self.assertInsideFace(position.face, p)

    def test_walk_agrees_with_scan(self):
        random.seed(5)
        for _ in range(100):
            p = Point(random.uniform(-1, 4), random.uniform(-1, 4))
            walked = locate(self.mesh, p, start_face=random.choice(list(self.mesh.inner_faces())))
            scanned = scan(self.mesh, p)
            self.assertIs(type(walked), type(scanned))
            if isinstance(walked, OnFace):
                self.assertEqual(walked, scanned)


if __name__ == "__main__":
    unittest.main()
