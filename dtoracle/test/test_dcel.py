import unittest

from dtoracle.DCEL.dcel import DCEL
from dtoracle.DCEL.face import OUTER_FACE
from dtoracle.errors import DegenerateInput, FlipRefused


def make_dcel(points):
    dcel = DCEL()
    for x, y in points:
        dcel.add_vertex(float(x), float(y))
    return dcel


def triangles(dcel):
    return sorted(tuple(sorted(dcel.triangle(f))) for f in dcel.inner_faces())


def find_edge(dcel, u, v):
    for h, he in enumerate(dcel.half_edges):
        if he.origin == u and dcel.destination(h) == v:
            return h
    raise KeyError((u, v))


class TestInitialTriangle(unittest.TestCase):

    def test_counter_clockwise_input(self):
        dcel = make_dcel([(0, 0), (1, 0), (0, 1)])
        face = dcel.create_initial_triangle(0, 1, 2)
        self.assertEqual(face, 1)
        self.assertEqual(dcel.triangle(face), (0, 1, 2))
        self.assertEqual(len(dcel.hull_edges()), 3)
        self.assertTrue(dcel.check_invariants())

    def test_clockwise_input_is_reoriented(self):
        dcel = make_dcel([(0, 0), (0, 1), (1, 0)])
        face = dcel.create_initial_triangle(0, 1, 2)
        self.assertEqual(dcel.triangle(face), (0, 2, 1))
        self.assertTrue(dcel.check_invariants())

    def test_outer_face_runs_clockwise(self):
        dcel = make_dcel([(0, 0), (1, 0), (0, 1)])
        dcel.create_initial_triangle(0, 1, 2)
        loop = [dcel.origin(h) for h in dcel.hull_edges()]
        self.assertEqual(loop, [1, 0, 2])
        for h in dcel.hull_edges():
            self.assertEqual(dcel.face_of(h), OUTER_FACE)
            self.assertTrue(dcel.is_hull_edge(h))

    def test_collinear_points_are_rejected(self):
        dcel = make_dcel([(0, 0), (1, 1), (2, 2)])
        with self.assertRaises(DegenerateInput):
            dcel.create_initial_triangle(0, 1, 2)


class TestLocalOperations(unittest.TestCase):

    def setUp(self):
        # big triangle plus spare vertices used by the individual tests
        self.dcel = make_dcel([(0, 0), (4, 0), (0, 4), (1, 1), (2, 0), (2.5, 0.5), (5, 5), (3, -2)])
        self.dcel.create_initial_triangle(0, 1, 2)

    def test_split_face(self):
        opposite = self.dcel.split_face(1, 3)
        self.assertEqual(self.dcel.num_inner_faces, 3)
        self.assertEqual(triangles(self.dcel), [(0, 1, 3), (0, 2, 3), (1, 2, 3)])
        for h in opposite:
            self.assertEqual(self.dcel.opposite_vertex(h), 3)
        self.assertEqual(sorted(self.dcel.neighbours(3)), [0, 1, 2])
        self.assertTrue(self.dcel.check_invariants())

    def test_split_hull_edge(self):
        he = find_edge(self.dcel, 0, 1)
        opposite = self.dcel.split_edge(he, 4)
        self.assertEqual(triangles(self.dcel), [(0, 2, 4), (1, 2, 4)])
        self.assertEqual(len(self.dcel.hull_edges()), 4)
        for h in opposite:
            self.assertEqual(self.dcel.opposite_vertex(h), 4)
        self.assertTrue(self.dcel.check_invariants())

    def test_split_hull_edge_from_outer_side(self):
        he = find_edge(self.dcel, 1, 0)
        self.assertEqual(self.dcel.face_of(he), OUTER_FACE)
        self.dcel.split_edge(he, 4)
        self.assertEqual(triangles(self.dcel), [(0, 2, 4), (1, 2, 4)])
        self.assertTrue(self.dcel.check_invariants())

    def test_split_interior_edge(self):
        self.dcel.split_face(1, 3)
        he = find_edge(self.dcel, 1, 3)
        opposite = self.dcel.split_edge(he, 5)
        self.assertEqual(self.dcel.num_inner_faces, 5)
        self.assertEqual(triangles(self.dcel), [(0, 1, 5), (0, 2, 3), (0, 3, 5), (1, 2, 5), (2, 3, 5)])
        for h in opposite:
            self.assertEqual(self.dcel.opposite_vertex(h), 5)
        self.assertTrue(self.dcel.check_invariants())

    def test_extend_hull(self):
        he = find_edge(self.dcel, 2, 1)
        chain = self.dcel.extend_hull(he, 6)
        self.assertEqual(chain, [he])
        self.assertEqual(triangles(self.dcel), [(0, 1, 2), (1, 2, 6)])
        self.assertEqual(len(self.dcel.hull_edges()), 4)
        self.assertTrue(self.dcel.check_invariants())

    def test_extend_hull_over_several_edges(self):
        he = find_edge(self.dcel, 1, 0)
        self.dcel.split_edge(he, 4)       # hull 0 -> 4 -> 1 along the x axis
        he = find_edge(self.dcel, 4, 0)
        chain = self.dcel.extend_hull(he, 7)
        self.assertEqual(len(chain), 2)
        self.assertEqual(triangles(self.dcel), [(0, 2, 4), (0, 4, 7), (1, 2, 4), (1, 4, 7)])
        self.assertEqual(sorted(self.dcel.origin(h) for h in self.dcel.hull_edges()), [0, 1, 2, 7])
        self.assertTrue(self.dcel.check_invariants())


class TestFlip(unittest.TestCase):

    def setUp(self):
        # convex quadrilateral 0 (0,0), 1 (2,0), 2 (2,2), 3 (0,2) with diagonal 0-2
        self.dcel = make_dcel([(0, 0), (2, 0), (2, 2), (0, 2), (1.5, 0.5)])
        self.dcel.create_initial_triangle(0, 1, 2)
        self.dcel.extend_hull(find_edge(self.dcel, 0, 2), 3)

    def test_flip_swaps_the_diagonal(self):
        self.assertEqual(triangles(self.dcel), [(0, 1, 2), (0, 2, 3)])
        he = find_edge(self.dcel, 0, 2)
        self.dcel.flip_edge(he)
        self.assertEqual(triangles(self.dcel), [(0, 1, 3), (1, 2, 3)])
        self.assertEqual({self.dcel.origin(he), self.dcel.destination(he)}, {1, 3})
        self.assertTrue(self.dcel.check_invariants())

    def test_flip_twice_restores_the_mesh(self):
        he = find_edge(self.dcel, 0, 2)
        self.dcel.flip_edge(he)
        self.dcel.flip_edge(he)
        self.assertEqual(triangles(self.dcel), [(0, 1, 2), (0, 2, 3)])
        self.assertTrue(self.dcel.check_invariants())

    def test_hull_edge_is_not_flipped(self):
        with self.assertRaises(FlipRefused):
            self.dcel.flip_edge(find_edge(self.dcel, 0, 1))

    def test_non_convex_quadrilateral_is_not_flipped(self):
        self.dcel.split_face(self.dcel.face_of(find_edge(self.dcel, 0, 1)), 4)
        # corner 4 of the quadrilateral 0, 1, 4, 2 is reflex
        he = find_edge(self.dcel, 0, 4)
        with self.assertRaises(FlipRefused):
            self.dcel.flip_edge(he)


if __name__ == "__main__":
    unittest.main()
