import math
import numbers
from collections import namedtuple
from enum import IntEnum
from fractions import Fraction

from dtoracle.errors import DegenerateInput, NumericalInconsistency

Point = namedtuple("Point", ["x", "y"])

# Shewchuk's machine epsilon for round-to-nearest doubles and the static
# error bounds of the first (pure floating point) stage of orient2d/incircle.
EPSILON = 2.0 ** -53
CCW_ERRBOUND_A = (3.0 + 16.0 * EPSILON) * EPSILON
ICC_ERRBOUND_A = (10.0 + 96.0 * EPSILON) * EPSILON

# The bounds above assume no product underflows. Nonzero coordinate
# differences below these limits are sent to the exact path, so every product
# of two (orient2d) or four (incircle) differences stays a normal float.
ORIENT_TINY = 2.0 ** -480
ICC_TINY = 2.0 ** -240


class Orientation(IntEnum):
    RIGHT = -1
    COLLINEAR = 0
    LEFT = 1


class Circle(IntEnum):
    OUTSIDE = -1
    ON = 0
    INSIDE = 1


def _sign(value):
    return (value > 0) - (value < 0)


def to_coordinate(value):
    """
    Normalise one input coordinate.

    Floats (including numpy floating scalars) stay floats, so the fast filter
    applies to them. Integers become floats when the conversion is exact and
    Fractions otherwise; rationals become Fractions. Non-finite values,
    strings and complex numbers are rejected as DegenerateInput.
    """
    if isinstance(value, (str, bytes)):
        raise DegenerateInput(f"coordinate must be a number, got {value!r}")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, numbers.Integral):
        value = int(value)
        as_float = float(value)
        return as_float if int(as_float) == value else Fraction(value)
    if isinstance(value, numbers.Rational):
        return Fraction(value.numerator, value.denominator)
    if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
        raise DegenerateInput(f"non-real coordinate {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise DegenerateInput(f"coordinate must be a real number, got {value!r}") from None
    if not math.isfinite(as_float):
        raise DegenerateInput(f"non-finite coordinate {value!r}")
    return as_float


def _all_floats(*values):
    for v in values:
        if type(v) is not float:
            return False
    return True


def _has_tiny(limit, *values):
    for v in values:
        if v != 0.0 and -limit < v < limit:
            return True
    return False


def _orient_exact(ax, ay, bx, by, cx, cy):
    ax, ay, bx, by, cx, cy = (Fraction(v) for v in (ax, ay, bx, by, cx, cy))
    return _sign((ax - cx) * (by - cy) - (ay - cy) * (bx - cx))


def orient2d(ax, ay, bx, by, cx, cy):
    """
    Sign of the doubled signed area of triangle (a, b, c):
        +1 if c lies to the left of the directed line a->b,
        -1 if it lies to the right,
         0 if the three points are collinear.

    The floating point determinant is accepted only when its magnitude exceeds
    Shewchuk's a-priori round-off bound and no product can have underflowed;
    otherwise it is recomputed exactly.
    """
    if not _all_floats(ax, ay, bx, by, cx, cy):
        return _orient_exact(ax, ay, bx, by, cx, cy)

    acx, acy = ax - cx, ay - cy
    bcx, bcy = bx - cx, by - cy
    if _has_tiny(ORIENT_TINY, acx, acy, bcx, bcy):
        return _orient_exact(ax, ay, bx, by, cx, cy)

    detleft = acx * bcy
    detright = acy * bcx
    det = detleft - detright
    if not math.isfinite(det):
        return _orient_exact(ax, ay, bx, by, cx, cy)

    if detleft > 0.0:
        if detright <= 0.0:
            return _sign(det)
        detsum = detleft + detright
    elif detleft < 0.0:
        if detright >= 0.0:
            return _sign(det)
        detsum = -detleft - detright
    else:
        if detright == 0.0:
            # both products vanished; only trust that if the factors did too
            return _orient_exact(ax, ay, bx, by, cx, cy)
        return _sign(det)

    errbound = CCW_ERRBOUND_A * detsum
    if det > errbound or -det > errbound:
        return _sign(det)
    return _orient_exact(ax, ay, bx, by, cx, cy)


def orientation(a, b, c):
    """Orientation of c relative to the directed line a->b."""
    return Orientation(orient2d(a.x, a.y, b.x, b.y, c.x, c.y))


def _incircle_exact(a, b, c, d):
    dx, dy = Fraction(d.x), Fraction(d.y)
    adx, ady = Fraction(a.x) - dx, Fraction(a.y) - dy
    bdx, bdy = Fraction(b.x) - dx, Fraction(b.y) - dy
    cdx, cdy = Fraction(c.x) - dx, Fraction(c.y) - dy
    alift = adx * adx + ady * ady
    blift = bdx * bdx + bdy * bdy
    clift = cdx * cdx + cdy * cdy
    det = (alift * (bdx * cdy - cdx * bdy)
           + blift * (cdx * ady - adx * cdy)
           + clift * (adx * bdy - bdx * ady))
    return _sign(det)


def incircle(a, b, c, d):
    """
    Sign of the in-circle determinant

          | adx  ady  adx^2 + ady^2 |
          | bdx  bdy  bdx^2 + bdy^2 |      (pdx = p.x - d.x, ...)
          | cdx  cdy  cdx^2 + cdy^2 |

    positive when d lies inside the circle through a, b, c given in
    counter-clockwise order.
    """
    if not _all_floats(a.x, a.y, b.x, b.y, c.x, c.y, d.x, d.y):
        return _incircle_exact(a, b, c, d)

    adx, ady = a.x - d.x, a.y - d.y
    bdx, bdy = b.x - d.x, b.y - d.y
    cdx, cdy = c.x - d.x, c.y - d.y
    if _has_tiny(ICC_TINY, adx, ady, bdx, bdy, cdx, cdy):
        return _incircle_exact(a, b, c, d)

    bdxcdy = bdx * cdy
    cdxbdy = cdx * bdy
    alift = adx * adx + ady * ady

    cdxady = cdx * ady
    adxcdy = adx * cdy
    blift = bdx * bdx + bdy * bdy

    adxbdy = adx * bdy
    bdxady = bdx * ady
    clift = cdx * cdx + cdy * cdy

    det = (alift * (bdxcdy - cdxbdy)
           + blift * (cdxady - adxcdy)
           + clift * (adxbdy - bdxady))
    permanent = ((abs(bdxcdy) + abs(cdxbdy)) * alift
                 + (abs(cdxady) + abs(adxcdy)) * blift
                 + (abs(adxbdy) + abs(bdxady)) * clift)
    if not (math.isfinite(det) and math.isfinite(permanent)):
        return _incircle_exact(a, b, c, d)

    errbound = ICC_ERRBOUND_A * permanent
    if det > errbound or -det > errbound:
        return _sign(det)
    return _incircle_exact(a, b, c, d)


def in_circle(a, b, c, d):
    """Where d lies with respect to the circumcircle of counter-clockwise (a, b, c)."""
    return Circle(incircle(a, b, c, d))


def lexicographic_key(p):
    return p.x, p.y


def in_circle_perturbed(a, b, c, d):
    """
    In-circle test with co-circular ties broken by simulation of simplicity.

    Each point p is lifted to x^2 + y^2 + delta_p, where the deltas are
    infinitesimals ordered by the lexicographic rank of (x, y): the smallest
    point gets the dominant one. When d is exactly on the circle the answer is
    decided by the dominant point among the four:

        d dominant        -> d is lifted above the plane: outside
        a (b, c) dominant -> inside iff d lies on the same side of the
                             opposite edge bc (ca, ab) as a (b, c)

    The decision depends on coordinates only, so the resulting triangulation
    does not depend on insertion order.
    """
    circle = in_circle(a, b, c, d)
    if circle is not Circle.ON:
        return circle is Circle.INSIDE

    keys = [lexicographic_key(p) for p in (a, b, c, d)]
    if len(set(keys)) != 4:
        raise NumericalInconsistency(f"co-circular tie between repeated points {keys}")
    dominant = min(range(4), key=keys.__getitem__)

    if dominant == 3:
        return False
    if dominant == 0:
        return orientation(d, b, c) is Orientation.LEFT
    if dominant == 1:
        return orientation(a, d, c) is Orientation.LEFT
    return orientation(a, b, d) is Orientation.LEFT


def circumcenter(a, b, c):
    """
    Circumcenter of triangle abc, in floating point.

    Only used for drawing; raises ValueError for collinear points.
    """
    ax, ay = float(a.x), float(a.y)
    bx, by = float(b.x), float(b.y)
    cx, cy = float(c.x), float(c.y)

    d = 2 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if d == 0.0:
        raise ValueError("Points are colinear; circumcenter is undefined.")

    ax2_ay2 = ax ** 2 + ay ** 2
    bx2_by2 = bx ** 2 + by ** 2
    cx2_cy2 = cx ** 2 + cy ** 2

    ux = (ax2_ay2 * (by - cy) +
          bx2_by2 * (cy - ay) +
          cx2_cy2 * (ay - by)) / d

    uy = (ax2_ay2 * (cx - bx) +
          bx2_by2 * (ax - cx) +
          cx2_cy2 * (bx - ax)) / d

    return ux, uy
