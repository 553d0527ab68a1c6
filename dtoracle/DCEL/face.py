OUTER_FACE = 0


class Face:
    def __init__(self):
        self.outer_component = None  # handle of any half-edge on the boundary

    def __repr__(self):
        return f"Face(outer_component={self.outer_component})"
