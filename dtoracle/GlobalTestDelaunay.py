import logging
from fractions import Fraction

from dtoracle.DCEL.geometry import in_circle, Circle
from dtoracle.Triangulation.delaunay import DelaunayTriangulation

logger = logging.getLogger(__name__)


def GlobalTestDelaunay(dcel: DelaunayTriangulation):
    """
    Brute force empty-circle test: no vertex may lie strictly inside the
    circumcircle of any triangle. O(faces * vertices), exact predicates.
    """
    points = dcel.vertices
    for triangle in dcel.inner_faces():
        a, b, c = dcel.triangle(triangle)
        A, B, C = points[a], points[b], points[c]
        for v, point in enumerate(points):
            if v in (a, b, c):
                continue
            if in_circle(A, B, C, point) is Circle.INSIDE:
                logger.warning("Triangle: %d %d %d includes point %d", A.index, B.index, C.index, point.index)
                return False
    return True


def _doubled_area(points):
    total = Fraction(0)
    for k, p in enumerate(points):
        q = points[(k + 1) % len(points)]
        total += Fraction(p.x) * Fraction(q.y) - Fraction(q.x) * Fraction(p.y)
    return total


def GlobalTestCoverage(dcel: DelaunayTriangulation):
    """The triangles' areas add up exactly to the area of the convex hull polygon."""
    hull = [dcel.vertices[v] for v in dcel.convex_hull()]
    triangles = sum((_doubled_area([dcel.vertices[v] for v in dcel.triangle(f)]) for f in dcel.inner_faces()),
                    Fraction(0))
    return triangles == _doubled_area(hull)


def GlobalTestEuler(dcel: DelaunayTriangulation):
    """2n - h - 2 triangles for n vertices of which h are on the hull boundary."""
    expected = 2 * dcel.num_vertices - len(dcel.convex_hull()) - 2
    if dcel.num_inner_faces != expected:
        logger.warning("%d triangles, expected %d", dcel.num_inner_faces, expected)
        return False
    return True
