import logging
from collections import namedtuple

from dtoracle.DCEL.dcel import DCEL
from dtoracle.DCEL.face import OUTER_FACE
from dtoracle.DCEL.geometry import orientation, Orientation
from dtoracle.errors import NumericalInconsistency

logger = logging.getLogger(__name__)

OnFace = namedtuple("OnFace", ["face"])
OnEdge = namedtuple("OnEdge", ["edge"])
OnVertex = namedtuple("OnVertex", ["vertex"])
OutsideHull = namedtuple("OutsideHull", ["edge"])   # an outer-face half-edge the point is left of
NoTriangulation = namedtuple("NoTriangulation", [])


def _classify(dcel: DCEL, face, collinear):
    if not collinear:
        return OnFace(face)
    if len(collinear) == 1:
        return OnEdge(collinear[0])
    if len(collinear) == 2:
        h1, h2 = collinear
        if dcel.next(h1) == h2:
            return OnVertex(dcel.origin(h2))
        return OnVertex(dcel.origin(h1))
    raise NumericalInconsistency(f"point is collinear with all three edges of face {face}")


def _turns(dcel: DCEL, edges, point):
    return [orientation(dcel.point(dcel.origin(h)), dcel.point(dcel.destination(h)), point) for h in edges]


def scan(dcel: DCEL, point):
    """Brute force location over every face; the fallback of the walk."""
    for face in dcel.inner_faces():
        edges = dcel.enumerate_half_edges(face)
        turns = _turns(dcel, edges, point)
        if Orientation.RIGHT not in turns:
            return _classify(dcel, face, [h for h, t in zip(edges, turns) if t is Orientation.COLLINEAR])
    for h in dcel.hull_edges():
        if orientation(dcel.point(dcel.origin(h)), dcel.point(dcel.destination(h)), point) is Orientation.LEFT:
            return OutsideHull(h)
    raise NumericalInconsistency(f"point {point} is neither inside nor outside the hull")


def locate(dcel: DCEL, point, start_face=None, max_steps=None):
    """
    Visibility walk towards ``point``.

    From the current triangle step across the first edge that has the point
    strictly on its right, checking edges from the one after the edge just
    crossed. Stops when no edge does. Leaving through a hull edge means the
    point is outside the convex hull.

    A revisited face, or more than ``max_steps`` steps, switches to a full
    scan so the walk can never cycle.
    """
    if dcel.num_inner_faces == 0:
        return NoTriangulation()

    face = start_face if start_face is not None and 0 < start_face < len(dcel.faces) else 1
    limit = max_steps if max_steps is not None else dcel.num_inner_faces + 1
    entered = None
    visited = set()

    while True:
        if face in visited or len(visited) >= limit:
            logger.warning("walk to %s did not converge after %d faces, scanning", point, len(visited))
            return scan(dcel, point)
        visited.add(face)

        edges = dcel.enumerate_half_edges(face)
        if entered in edges:
            k = edges.index(entered)
            edges = edges[k + 1:] + edges[:k]

        collinear = []
        crossed = None
        for h in edges:
            turn = orientation(dcel.point(dcel.origin(h)), dcel.point(dcel.destination(h)), point)
            if turn is Orientation.RIGHT:
                crossed = dcel.twin(h)
                break
            if turn is Orientation.COLLINEAR:
                collinear.append(h)

        if crossed is None:
            return _classify(dcel, face, collinear)
        if dcel.face_of(crossed) == OUTER_FACE:
            return OutsideHull(crossed)
        face = dcel.face_of(crossed)
        entered = crossed
