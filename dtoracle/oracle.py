"""
Grid oracle: triangulates the n x n integer grid and prints the canonical
triangle list, one ``[i, j, k]`` per line, with grid indices in row-major
order (index = y * n + x).
"""
import argparse
import logging
import sys

import numpy as np

from dtoracle.config import DEFAULT_DUPLICATE_TOLERANCE, DEFAULT_GRID_SIZE, TriangulationSettings
from dtoracle.errors import TriangulationError
from dtoracle.extract import canonicalize, render
from dtoracle.logging_config import setup_logging
from dtoracle.Triangulation.delaunay import build

logger = logging.getLogger(__name__)


def grid_points(size: int) -> np.ndarray:
    """(size*size, 2) float array, row-major: point y*size+x is (x, y)."""
    ys, xs = np.mgrid[0:size, 0:size]
    return np.column_stack([xs.ravel(), ys.ravel()]).astype(np.float64)


def triangulate_grid(size: int = DEFAULT_GRID_SIZE, seed=None, settings: TriangulationSettings = None):
    """Triangulation of the grid, with the points inserted in a random order when ``seed`` is given."""
    points = grid_points(size)
    if seed is not None:
        points = points[np.random.RandomState(seed).permutation(len(points))]
    return build(points, settings)


def grid_index_triangles(triangulation, size: int):
    """
    Canonical triangles in grid indices. Vertices are mapped back through
    their coordinates, so the result does not depend on the insertion order.
    """
    def grid_index(v):
        x, y = triangulation.vertex_position(v)
        return int(y) * size + int(x)

    return canonicalize(
        [grid_index(v) for v in triangulation.triangle(face)] for face in triangulation.inner_faces()
    )


def grid_triangles(size: int = DEFAULT_GRID_SIZE, seed=None, settings: TriangulationSettings = None):
    """Canonical triangles of the grid in grid indices."""
    return grid_index_triangles(triangulate_grid(size, seed, settings), size)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="dtoracle", description=__doc__.strip().splitlines()[0])
    parser.add_argument("--size", type=int, default=DEFAULT_GRID_SIZE, help="grid side (default: %(default)s)")
    parser.add_argument("--shuffle", type=int, metavar="SEED", default=None,
                        help="insert the grid points in a random order")
    parser.add_argument("--tolerance", type=float, default=DEFAULT_DUPLICATE_TOLERANCE,
                        help="duplicate point tolerance (default: %(default)s)")
    parser.add_argument("--plot", metavar="FILE", default=None, help="also save a picture of the mesh")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        settings = TriangulationSettings(duplicate_tolerance=args.tolerance)
        triangulation = triangulate_grid(args.size, args.shuffle, settings)
        triangles = grid_index_triangles(triangulation, args.size)
    except (TriangulationError, ValueError) as exc:
        logger.error("%s: %s", getattr(exc, "kind", type(exc).__name__), exc)
        return 1

    if args.plot:
        from dtoracle.draw import save_figure
        save_figure(triangulation, args.plot)

    last = args.size * args.size - 1
    print(f"{args.size}x{args.size} grid triangles (indices into 0..{last} in row-major order):")
    if triangles:
        print(render(triangles))
    return 0


if __name__ == "__main__":
    sys.exit(main())
