import logging

from dtoracle.DCEL.vertex import Vertex
from dtoracle.DCEL.halfedge import HalfEdge
from dtoracle.DCEL.face import Face, OUTER_FACE
from dtoracle.DCEL.geometry import orientation, Orientation
from dtoracle.errors import DegenerateInput, FlipRefused, MeshInvariantError

logger = logging.getLogger(__name__)


class DCEL:
    """
    Doubly connected edge list stored as three arenas.

    Vertices, half-edges and faces live in plain lists and refer to each other
    by list position (handle). Face 0 is the unbounded outer face; its boundary
    cycle is the convex hull walked clockwise. Every other face is a
    counter-clockwise triangle. Split and flip operations rewrite records in
    place, so a handle never dangles and the lists never shrink.
    """

    def __init__(self):
        self.vertices = []    # all vertices, handle == input index
        self.half_edges = []  # all half-edges
        self.faces = [Face()]  # faces[OUTER_FACE] is the unbounded face

    # ------------------------------------------------------------------
    # arena allocation

    def add_vertex(self, x, y, index=None) -> int:
        handle = len(self.vertices)
        self.vertices.append(Vertex(x, y, handle if index is None else index))
        return handle

    def add_half_edge(self, origin: int) -> int:
        handle = len(self.half_edges)
        self.half_edges.append(HalfEdge(origin))
        if self.vertices[origin].incident_edge is None:
            self.vertices[origin].incident_edge = handle
        return handle

    def add_face(self) -> int:
        self.faces.append(Face())
        return len(self.faces) - 1

    @property
    def num_vertices(self):
        return len(self.vertices)

    @property
    def num_inner_faces(self):
        return len(self.faces) - 1

    @property
    def num_undirected_edges(self):
        return len(self.half_edges) // 2

    def inner_faces(self):
        return range(1, len(self.faces))

    # ------------------------------------------------------------------
    # navigation

    def origin(self, he: int) -> int:
        return self.half_edges[he].origin

    def destination(self, he: int) -> int:
        return self.half_edges[self.half_edges[he].twin].origin

    def twin(self, he: int) -> int:
        return self.half_edges[he].twin

    def next(self, he: int) -> int:
        return self.half_edges[he].next

    def prev(self, he: int) -> int:
        return self.half_edges[he].prev

    def face_of(self, he: int) -> int:
        return self.half_edges[he].incident_face

    def opposite_vertex(self, he: int) -> int:
        """Vertex of the triangle left of ``he`` that is not an endpoint of it."""
        return self.half_edges[self.half_edges[he].prev].origin

    def point(self, v: int) -> Vertex:
        return self.vertices[v]

    def enumerate_half_edges(self, face: int):
        """
        Walk the boundary of ``face`` from its outer_component and return the
        half-edges in order.
        """
        half_edges = []
        start = self.faces[face].outer_component
        if start is None:
            return half_edges
        e = start
        while True:
            half_edges.append(e)
            e = self.half_edges[e].next
            if e == start:
                break
            if len(half_edges) > len(self.half_edges):
                raise MeshInvariantError(f"face {face} boundary does not close")
        return half_edges

    def enumerate_vertices(self, face: int):
        return [self.half_edges[e].origin for e in self.enumerate_half_edges(face)]

    def triangle(self, face: int):
        a, b, c = self.enumerate_vertices(face)
        return a, b, c

    def outgoing_edges(self, v: int):
        """Half-edges leaving ``v``, counter-clockwise."""
        start = self.vertices[v].incident_edge
        if start is None:
            return []
        edges = []
        e = start
        while True:
            edges.append(e)
            e = self.half_edges[self.half_edges[e].prev].twin
            if e == start:
                break
            if len(edges) > len(self.half_edges):
                raise MeshInvariantError(f"edge fan around vertex {v} does not close")
        return edges

    def neighbours(self, v: int):
        return [self.destination(e) for e in self.outgoing_edges(v)]

    def is_hull_edge(self, he: int) -> bool:
        e = self.half_edges[he]
        return e.incident_face == OUTER_FACE or self.half_edges[e.twin].incident_face == OUTER_FACE

    def hull_edges(self):
        """Outer-face half-edges, i.e. the convex hull walked clockwise."""
        return self.enumerate_half_edges(OUTER_FACE)

    # ------------------------------------------------------------------
    # low level linking

    def _link(self, he: int, nxt: int):
        self.half_edges[he].next = nxt
        self.half_edges[nxt].prev = he

    def _pair(self, he: int, other: int):
        self.half_edges[he].twin = other
        self.half_edges[other].twin = he

    def _make_triangle(self, face: int, h0: int, h1: int, h2: int):
        self._link(h0, h1)
        self._link(h1, h2)
        self._link(h2, h0)
        for h in (h0, h1, h2):
            self.half_edges[h].incident_face = face
        self.faces[face].outer_component = h0

    # ------------------------------------------------------------------
    # construction and local modification

    def create_initial_triangle(self, v1: int, v2: int, v3: int) -> int:
        """
        Build the first triangle from three non-collinear vertices, together
        with the outer face loop made of the twin half-edges.
        """
        turn = orientation(self.vertices[v1], self.vertices[v2], self.vertices[v3])
        if turn is Orientation.COLLINEAR:
            raise DegenerateInput(f"initial triangle {v1}, {v2}, {v3} is degenerate")
        if turn is Orientation.RIGHT:
            v2, v3 = v3, v2

        face = self.add_face()

        he1 = self.add_half_edge(v1)
        he2 = self.add_half_edge(v2)
        he3 = self.add_half_edge(v3)
        he1_twin = self.add_half_edge(v2)
        he2_twin = self.add_half_edge(v3)
        he3_twin = self.add_half_edge(v1)

        self._pair(he1, he1_twin)
        self._pair(he2, he2_twin)
        self._pair(he3, he3_twin)

        self._make_triangle(face, he1, he2, he3)

        # the twins run clockwise around the outer face
        self._link(he1_twin, he3_twin)
        self._link(he3_twin, he2_twin)
        self._link(he2_twin, he1_twin)
        for he in (he1_twin, he2_twin, he3_twin):
            self.half_edges[he].incident_face = OUTER_FACE
        self.faces[OUTER_FACE].outer_component = he1_twin

        logger.debug("initial triangle %s", (v1, v2, v3))
        return face

    def split_face(self, face: int, v: int):
        """
        Replace triangle (a, b, c) with (a, b, v), (b, c, v), (c, a, v).

        Returns the three old edges, which are now the edges opposite ``v``.
        """
        hab, hbc, hca = self.enumerate_half_edges(face)
        a, b, c = (self.half_edges[h].origin for h in (hab, hbc, hca))

        hbv = self.add_half_edge(b)
        hva = self.add_half_edge(v)
        hcv = self.add_half_edge(c)
        hvb = self.add_half_edge(v)
        hav = self.add_half_edge(a)
        hvc = self.add_half_edge(v)

        self._pair(hbv, hvb)
        self._pair(hcv, hvc)
        self._pair(hav, hva)

        face_bc = self.add_face()
        face_ca = self.add_face()
        self._make_triangle(face, hab, hbv, hva)
        self._make_triangle(face_bc, hbc, hcv, hvb)
        self._make_triangle(face_ca, hca, hav, hvc)

        self.vertices[v].incident_edge = hva
        return [hab, hbc, hca]

    def split_edge(self, he: int, v: int):
        """
        Insert ``v``, which lies on the open segment of ``he``.

        The two triangles sharing the edge become four. A hull edge has only
        one triangle, which becomes two, and the outer loop gains ``v``.
        Returns the edges opposite ``v``.
        """
        h = he
        if self.half_edges[h].incident_face == OUTER_FACE:
            h = self.half_edges[h].twin
        t = self.half_edges[h].twin
        face = self.half_edges[h].incident_face
        other = self.half_edges[t].incident_face

        hbc = self.half_edges[h].next
        hca = self.half_edges[h].prev
        c = self.half_edges[hca].origin

        # h becomes a->v and t becomes b->v
        hvc = self.add_half_edge(v)
        hvb = self.add_half_edge(v)
        hcv = self.add_half_edge(c)
        hva = self.add_half_edge(v)
        self._pair(h, hva)
        self._pair(t, hvb)
        self._pair(hvc, hcv)

        face_vbc = self.add_face()
        self._make_triangle(face, h, hvc, hca)
        self._make_triangle(face_vbc, hvb, hbc, hcv)
        self.vertices[v].incident_edge = hvc

        if other == OUTER_FACE:
            # outer loop: ... -> b->v (t) -> v->a (hva) -> ...
            after = self.half_edges[t].next
            self._link(t, hva)
            self._link(hva, after)
            self.half_edges[hva].incident_face = OUTER_FACE
            return [hca, hbc]

        tad = self.half_edges[t].next
        tdb = self.half_edges[t].prev
        d = self.half_edges[tdb].origin

        hvd = self.add_half_edge(v)
        hdv = self.add_half_edge(d)
        self._pair(hvd, hdv)

        face_vad = self.add_face()
        self._make_triangle(other, t, hvd, tdb)
        self._make_triangle(face_vad, hva, tad, hdv)
        return [hca, hbc, tdb, tad]

    def extend_hull(self, he: int, v: int):
        """
        Attach ``v``, strictly outside the convex hull, to every hull edge it
        sees. ``he`` is an outer-face half-edge with ``v`` strictly to its left.

        Returns the formerly hull edges, now interior and opposite ``v``.
        """
        p = self.vertices[v]

        def visible(h):
            return orientation(self.vertices[self.origin(h)], self.vertices[self.destination(h)], p) \
                is Orientation.LEFT

        if self.half_edges[he].incident_face != OUTER_FACE or not visible(he):
            raise MeshInvariantError(f"half-edge {he} is not a hull edge visible from vertex {v}")

        hull_size = len(self.hull_edges())
        first = he
        while visible(self.half_edges[first].prev):
            first = self.half_edges[first].prev
            if first == he:
                raise MeshInvariantError(f"vertex {v} sees the whole hull")
        chain = [first]
        while visible(self.half_edges[chain[-1]].next) and len(chain) < hull_size:
            chain.append(self.half_edges[chain[-1]].next)

        before = self.half_edges[chain[0]].prev
        after = self.half_edges[chain[-1]].next

        previous_to_v = None
        for h in chain:
            s = self.half_edges[h].origin
            t = self.destination(h)
            htv = self.add_half_edge(t)
            hvs = self.add_half_edge(v)
            self._make_triangle(self.add_face(), h, htv, hvs)
            if previous_to_v is None:
                hsv = self.add_half_edge(s)
                self._pair(hsv, hvs)
                first_outer = hsv
            else:
                self._pair(previous_to_v, hvs)
            previous_to_v = htv

        last_outer = self.add_half_edge(v)
        self._pair(previous_to_v, last_outer)

        self._link(before, first_outer)
        self._link(first_outer, last_outer)
        self._link(last_outer, after)
        for h in (first_outer, last_outer):
            self.half_edges[h].incident_face = OUTER_FACE
        self.faces[OUTER_FACE].outer_component = first_outer
        self.vertices[v].incident_edge = last_outer
        return chain

    def flip_edge(self, he: int):
        """
        Swap the diagonal of the quadrilateral formed by the two triangles
        sharing ``he``.

                 c                        c
               /   \\                   / | \\
              a --he-> b      =>      a  |  b
               \\   /                   \\ | /
                 d                        d

        ``he`` (a->b) is re-used as d->c and its twin as c->d. Refused for hull
        edges and for quadrilaterals that are not strictly convex.
        Returns the handles (he, twin).
        """
        if self.is_hull_edge(he):
            raise FlipRefused(f"half-edge {he} is on the convex hull")
        e = self.half_edges[he]
        t = e.twin
        face1 = e.incident_face
        face2 = self.half_edges[t].incident_face

        e1 = e.next                       # b->c
        e2 = e.prev                       # c->a
        t1 = self.half_edges[t].next      # a->d
        t2 = self.half_edges[t].prev      # d->b

        a = e.origin
        b = self.half_edges[t].origin
        c = self.half_edges[e2].origin
        d = self.half_edges[t2].origin

        pa, pb, pc, pd = (self.vertices[x] for x in (a, b, c, d))
        if orientation(pc, pa, pd) is not Orientation.LEFT or orientation(pd, pb, pc) is not Orientation.LEFT:
            raise FlipRefused(f"quadrilateral {a}, {d}, {b}, {c} is not strictly convex")

        e.origin = d
        self.half_edges[t].origin = c
        self._make_triangle(face1, he, e2, t1)   # d->c, c->a, a->d
        self._make_triangle(face2, t, t2, e1)    # c->d, d->b, b->c

        self.vertices[a].incident_edge = t1
        self.vertices[b].incident_edge = e1
        return he, t

    # ------------------------------------------------------------------
    # validation

    def check_invariants(self):
        """
        Verify the topological and geometric invariants of the subdivision.
        Raises MeshInvariantError on the first violation.
        """
        for handle, he in enumerate(self.half_edges):
            if he.twin is None or self.half_edges[he.twin].twin != handle:
                raise MeshInvariantError(f"half-edge {handle} has a broken twin")
            if self.half_edges[he.twin].origin == he.origin:
                raise MeshInvariantError(f"half-edge {handle} and its twin share an origin")
            if self.half_edges[he.next].prev != handle or self.half_edges[he.prev].next != handle:
                raise MeshInvariantError(f"next/prev mismatch at half-edge {handle}")
            if self.half_edges[he.next].origin != self.half_edges[he.twin].origin:
                raise MeshInvariantError(f"half-edge {handle} does not end where its successor starts")
            if self.half_edges[he.next].incident_face != he.incident_face:
                raise MeshInvariantError(f"half-edge {handle} and its successor are on different faces")

        for face in self.inner_faces():
            edges = self.enumerate_half_edges(face)
            if len(edges) != 3:
                raise MeshInvariantError(f"face {face} has {len(edges)} edges")
            for h in edges:
                if self.half_edges[h].incident_face != face:
                    raise MeshInvariantError(f"half-edge {h} does not point back to face {face}")
            a, b, c = (self.vertices[self.half_edges[h].origin] for h in edges)
            if orientation(a, b, c) is not Orientation.LEFT:
                raise MeshInvariantError(f"face {face} is not counter-clockwise")

        if self.half_edges:
            for h in self.hull_edges():
                if self.half_edges[h].incident_face != OUTER_FACE:
                    raise MeshInvariantError(f"hull half-edge {h} is not on the outer face")

        for handle, v in enumerate(self.vertices):
            if v.incident_edge is not None and self.half_edges[v.incident_edge].origin != handle:
                raise MeshInvariantError(f"vertex {handle} has a foreign incident edge")
        return True

    def __repr__(self):
        return (f"DCEL(vertices={len(self.vertices)}, half_edges={len(self.half_edges)}, "
                f"faces={len(self.faces) - 1} + outer)")
