"""
Exceptions raised by the triangulation engine.

Every error carries a short ``kind`` string so callers that only want to
report the failure (the CLI, an oracle harness) do not need to switch on the
exception class.
"""


class TriangulationError(Exception):
    kind = "TriangulationError"


class DuplicatePoint(TriangulationError):
    """
    An inserted point coincides with an already inserted vertex, either bit for
    bit or within the configured duplicate tolerance.
    """
    kind = "DuplicatePoint"

    def __init__(self, index, existing, point=None):
        self.index = index
        self.existing = existing
        self.point = point
        message = f"point {index} coincides with vertex {existing}"
        if point is not None:
            message += f" at {point}"
        super().__init__(message)


class DegenerateInput(TriangulationError):
    """Fewer than three non-collinear points, or a non-finite coordinate."""
    kind = "DegenerateInput"


class NumericalInconsistency(TriangulationError):
    """A predicate or walk produced an answer that contradicts the mesh. Not recoverable."""
    kind = "NumericalInconsistency"


class FlipRefused(TriangulationError):
    kind = "FlipRefused"


class MeshInvariantError(TriangulationError):
    kind = "MeshInvariantError"
