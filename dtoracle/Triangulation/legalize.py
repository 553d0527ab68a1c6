import collections
import logging

from dtoracle.DCEL.dcel import DCEL
from dtoracle.DCEL.geometry import in_circle_perturbed, orientation, Orientation
from dtoracle.errors import NumericalInconsistency

logger = logging.getLogger(__name__)


def is_illegal(dcel: DCEL, he: int) -> bool:
    """
    Lawson flip certificate for the edge of ``he`` = a->b.

    With c the vertex opposite ``he`` and d the vertex across it:
    True  -> d lies inside the circumcircle of (a, b, c) and abdc is convex,
             the edge has to be flipped
    False -> the edge is locally Delaunay, or it lies on the convex hull
    Co-circular quadrilaterals are decided by the symbolic perturbation.
    """
    if dcel.is_hull_edge(he):
        return False

    t = dcel.twin(he)
    a = dcel.point(dcel.origin(he))
    b = dcel.point(dcel.origin(t))
    c = dcel.point(dcel.opposite_vertex(he))
    d = dcel.point(dcel.opposite_vertex(t))

    if orientation(c, a, d) is not Orientation.LEFT or orientation(d, b, c) is not Orientation.LEFT:
        return False
    return in_circle_perturbed(a, b, c, d)


def legalize(dcel: DCEL, stack, max_flips=None) -> int:
    """
    Restore the Delaunay property after an insertion.

    ``stack`` holds half-edges whose left triangle contains the new vertex
    opposite them. Each popped illegal edge is flipped and the two edges of the
    new triangles that face the new vertex are pushed back.
    Returns the number of flips.
    """
    edge_stack = collections.deque(stack)
    flips = 0
    while edge_stack:
        he = edge_stack.pop()
        if not is_illegal(dcel, he):
            continue

        t = dcel.twin(he)
        exposed = (dcel.next(t), dcel.prev(t))   # a->d and d->b
        dcel.flip_edge(he)
        flips += 1
        if max_flips is not None and flips > max_flips:
            raise NumericalInconsistency(f"legalization exceeded {max_flips} flips")
        edge_stack.extend(exposed)

    if flips:
        logger.debug("legalized with %d flips", flips)
    return flips
