class Vertex:
    def __init__(self, x, y, index: int):
        self.x = x
        self.y = y
        self.index = index            # position of the point in the input sequence
        self.incident_edge = None     # handle of any half-edge leaving this vertex

    def __repr__(self):
        return f"Vertex({self.index}: {float(self.x):.6g}, {float(self.y):.6g})"

    @property
    def position(self):
        return self.x, self.y
