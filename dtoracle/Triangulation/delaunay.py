import logging

import numpy as np
from scipy.spatial import cKDTree

from dtoracle.config import TriangulationSettings
from dtoracle.DCEL.dcel import DCEL
from dtoracle.DCEL.face import OUTER_FACE
from dtoracle.DCEL.geometry import Point, to_coordinate, orientation, Orientation, lexicographic_key
from dtoracle.Triangulation.locate import locate, OnFace, OnEdge, OnVertex, OutsideHull
from dtoracle.Triangulation.legalize import legalize
from dtoracle.errors import DegenerateInput, DuplicatePoint, NumericalInconsistency

logger = logging.getLogger(__name__)


def as_point(point) -> Point:
    """Accept (x, y) sequences, numpy rows and objects with x/y attributes."""
    if hasattr(point, "x") and hasattr(point, "y"):
        x, y = point.x, point.y
    else:
        try:
            x, y = point
        except (TypeError, ValueError):
            raise DegenerateInput(f"not a 2D point: {point!r}") from None
    return Point(to_coordinate(x), to_coordinate(y))


class DelaunayTriangulation(DCEL):
    """
    Incremental Delaunay triangulation (Lawson flips after each insertion).

    Until three non-collinear points have been seen the inserted vertices
    only sit in the vertex arena (the collinear phase). The first point off
    their line builds the initial triangle and the waiting vertices are then
    inserted through the normal path.
    """

    def __init__(self, settings: TriangulationSettings = None):
        super().__init__()
        self.settings = settings if settings is not None else TriangulationSettings()
        self.frozen = False
        self._positions = {}      # exact (x, y) -> vertex handle
        self._pending = []        # vertices of the collinear phase
        self._last_vertex = None  # walk hint
        self._coords = []         # float (x, y) per vertex, for the tolerance checks

    # ------------------------------------------------------------------
    # public API

    def insert(self, point) -> int:
        """
        Insert one point and restore the Delaunay property.

        Returns the vertex handle, which is the point's input index. Raises
        DuplicatePoint, leaving the triangulation untouched, when the point
        coincides with an existing vertex or lies within ``duplicate_tolerance``
        of any of them (the lowest such vertex is reported, as in insert_all).
        """
        return self._insert(as_point(point), check_tolerance=True)

    def _insert(self, p: Point, check_tolerance: bool) -> int:
        if self.frozen:
            raise RuntimeError("triangulation is frozen")
        index = len(self.vertices)

        existing = self._positions.get((p.x, p.y))
        if existing is not None:
            raise DuplicatePoint(index, existing, p)
        if check_tolerance:
            self._check_tolerance(index, p)

        if self.num_inner_faces == 0:
            v = self._new_vertex(p)
            self._pending.append(v)
            if len(self._pending) >= 3:
                first, second = (self.vertices[h] for h in self._pending[:2])
                if orientation(first, second, p) is not Orientation.COLLINEAR:
                    self._bootstrap(v)
            return v

        position = self.locate(p)
        if isinstance(position, OnVertex):
            raise DuplicatePoint(index, position.vertex, p)
        v = self._new_vertex(p)
        self._insert_at(v, position)
        return v

    def insert_all(self, points):
        """
        Insert a batch of points in order and freeze the result.

        All coordinates are validated first. With a positive duplicate
        tolerance every near-coincident pair is found up front with a k-d tree.
        Raises DuplicatePoint, DegenerateInput or NumericalInconsistency;
        nothing is returned on failure.
        """
        parsed = [as_point(p) for p in points]
        if self.settings.duplicate_tolerance > 0.0 and parsed:
            self._precheck_duplicates(parsed)
        # the pre-check already covered every pair
        for p in parsed:
            self._insert(p, check_tolerance=False)
        return self.finalize()

    def finalize(self):
        if self.num_inner_faces == 0:
            raise DegenerateInput(
                f"{self.num_vertices} point(s) given, need at least 3 that are not collinear")
        self.frozen = True
        logger.info("triangulated %d points into %d triangles", self.num_vertices, self.num_inner_faces)
        return self

    def locate(self, point):
        """Position of ``point`` in the current mesh (face, edge, vertex or outside the hull)."""
        p = point if isinstance(point, Point) else as_point(point)
        return locate(self, p, self._hint_face(), self.settings.max_walk_steps)

    @property
    def num_faces(self):
        return self.num_inner_faces

    def vertex_position(self, v: int):
        return self.vertices[v].position

    def convex_hull(self):
        """
        Input indices of the hull vertices in counter-clockwise order, starting
        at the lexicographically smallest one. Collinear boundary points are
        included. Empty while no triangle exists.
        """
        if self.num_inner_faces == 0:
            return []
        cycle = [self.origin(h) for h in reversed(self.hull_edges())]
        start = min(range(len(cycle)), key=lambda k: lexicographic_key(self.vertices[cycle[k]]))
        return [self.vertices[v].index for v in cycle[start:] + cycle[:start]]

    # ------------------------------------------------------------------
    # internals

    def _new_vertex(self, p: Point) -> int:
        v = self.add_vertex(p.x, p.y)
        self._positions[(p.x, p.y)] = v
        self._coords.append((float(p.x), float(p.y)))
        return v

    def _bootstrap(self, v: int):
        first, second = self._pending[0], self._pending[1]
        rest = sorted(self._pending[2:-1], key=lambda h: lexicographic_key(self.vertices[h]))
        self._pending = []
        self.create_initial_triangle(first, second, v)
        self._last_vertex = v
        for w in rest:
            position = self.locate(self.vertices[w])
            if isinstance(position, OnVertex):
                raise NumericalInconsistency(f"vertex {w} located on vertex {position.vertex}")
            self._insert_at(w, position)
        logger.debug("bootstrapped with vertex %d after %d collinear vertices", v, len(rest) + 2)

    def _insert_at(self, v: int, position):
        if isinstance(position, OnFace):
            stack = self.split_face(position.face, v)
        elif isinstance(position, OnEdge):
            stack = self.split_edge(position.edge, v)
        elif isinstance(position, OutsideHull):
            stack = self.extend_hull(position.edge, v)
        else:
            raise NumericalInconsistency(f"cannot insert vertex {v} at {position}")

        flips = legalize(self, stack, self.settings.max_flips_per_insert)
        self._last_vertex = v
        logger.debug("inserted vertex %d (%s), %d flips", v, type(position).__name__, flips)
        if self.settings.check_invariants:
            self.check_invariants()

    def _hint_face(self):
        if self._last_vertex is None:
            return None
        for h in self.outgoing_edges(self._last_vertex):
            face = self.face_of(h)
            if face != OUTER_FACE:
                return face
        return None

    def _check_tolerance(self, index: int, p: Point):
        tolerance = self.settings.duplicate_tolerance
        if tolerance <= 0.0 or not self._coords:
            return
        coords = np.asarray(self._coords)
        distances = np.hypot(coords[:, 0] - float(p.x), coords[:, 1] - float(p.y))
        hits = np.flatnonzero(distances <= tolerance)
        if hits.size:
            raise DuplicatePoint(index, int(hits[0]), p)

    def _precheck_duplicates(self, parsed):
        offset = len(self.vertices)
        coords = np.array(self._coords +
                          [(float(p.x), float(p.y)) for p in parsed]).reshape(-1, 2)
        pairs = cKDTree(coords).query_pairs(r=self.settings.duplicate_tolerance, output_type="ndarray")
        pairs = pairs[pairs[:, 1] >= offset]
        if len(pairs) == 0:
            return
        j = int(pairs[:, 1].min())
        i = int(pairs[pairs[:, 1] == j][:, 0].min())
        raise DuplicatePoint(j, i, parsed[j - offset])


def build(points, settings: TriangulationSettings = None) -> DelaunayTriangulation:
    """Triangulate ``points`` in input order; see DelaunayTriangulation.insert_all."""
    return DelaunayTriangulation(settings).insert_all(points)
