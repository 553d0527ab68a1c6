from dtoracle.config import TriangulationSettings
from dtoracle.DCEL.geometry import orientation, in_circle, in_circle_perturbed, Orientation, Circle, Point
from dtoracle.errors import (TriangulationError, DuplicatePoint, DegenerateInput, NumericalInconsistency,
                             FlipRefused, MeshInvariantError)
from dtoracle.extract import extract, extract_edges, canonicalize, as_array, render
from dtoracle.Triangulation.delaunay import DelaunayTriangulation, build

__version__ = "0.1.0"
