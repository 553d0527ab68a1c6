class HalfEdge:
    """
    A directed edge of the arena. All links are integer handles into the
    owning DCEL's lists, never object references.
    """

    def __init__(self, origin: int):
        self.origin = origin          # vertex handle
        self.twin = None              # half-edge handle of the opposite direction
        self.next = None              # next half-edge around the same face
        self.prev = None              # previous half-edge around the same face
        self.incident_face = None     # face handle

    def __repr__(self):
        return f"HalfEdge(origin={self.origin}, twin={self.twin}, face={self.incident_face})"
