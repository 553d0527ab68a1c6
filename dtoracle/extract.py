"""
Canonical mesh output.

A triangle is reported as the ascending triple of its vertices' input
indices and the triangle list is sorted lexicographically, so two
triangulations of the same point set compare equal no matter in which order
the points were inserted or the faces are stored.
"""
import numpy as np

from dtoracle.DCEL.dcel import DCEL


def canonicalize(triangles):
    """Sort every triple and then the list of triples. Idempotent."""
    return sorted(tuple(sorted(int(i) for i in t)) for t in triangles)


def extract(triangulation: DCEL):
    """Canonical triangle list of a finished triangulation; the outer face is skipped."""
    vertices = triangulation.vertices
    return canonicalize(
        [vertices[v].index for v in triangulation.enumerate_vertices(face)]
        for face in triangulation.inner_faces()
    )


def extract_edges(triangulation: DCEL):
    """Sorted undirected edges (i, j), i < j, in input indices."""
    vertices = triangulation.vertices
    edges = set()
    for he in triangulation.half_edges:
        i = vertices[he.origin].index
        j = vertices[triangulation.half_edges[he.twin].origin].index
        edges.add((i, j) if i < j else (j, i))
    return sorted(edges)


def as_array(triangles) -> np.ndarray:
    return np.array(list(triangles), dtype=np.int64).reshape(-1, 3)


def render(triangles):
    """One ``[i, j, k]`` line per triangle."""
    return "\n".join(f"[{i}, {j}, {k}]" for i, j, k in triangles)
