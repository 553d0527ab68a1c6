import matplotlib.pyplot as plt
from matplotlib.lines import Line2D
from matplotlib.patches import Circle as CirclePatch

from dtoracle.DCEL.geometry import circumcenter
from dtoracle.Triangulation.delaunay import DelaunayTriangulation


def draw_science(dcel: DelaunayTriangulation, ax=None, show=True,
                 draw_vertices=True,
                 draw_labels=True,
                 draw_circumcircles=False,
                 only_hull=False):
    """
    Plot the triangulation: triangle edges, vertices labelled with their input
    index and, optionally, the circumcircles or just the convex hull.
    Returns the axes.
    """
    if ax is None:
        plt.figure()
        ax = plt.gca()

    cmap = plt.get_cmap('tab10')
    face_color = cmap(2)
    vertex_color = cmap(0)
    circle_color = cmap(1)

    def xy(v):
        p = dcel.vertices[v]
        return float(p.x), float(p.y)

    # 1) triangle edges (or only the hull), lowest layer
    if only_hull:
        segments = [(dcel.origin(h), dcel.destination(h)) for h in dcel.hull_edges()]
    else:
        segments = [(dcel.origin(h), dcel.destination(h))
                    for h, he in enumerate(dcel.half_edges) if h < he.twin]
    for u, v in segments:
        (x1, y1), (x2, y2) = xy(u), xy(v)
        ax.plot([x1, x2], [y1, y2], color=face_color, linewidth=2, zorder=1)

    # 2) circumcircles
    if draw_circumcircles:
        for face in dcel.inner_faces():
            a, b, c = (dcel.vertices[v] for v in dcel.triangle(face))
            cx, cy = circumcenter(a, b, c)
            radius = ((float(a.x) - cx) ** 2 + (float(a.y) - cy) ** 2) ** 0.5
            ax.add_patch(CirclePatch((cx, cy), radius, fill=False, linestyle='dotted',
                                     edgecolor=circle_color, zorder=0))

    # 3) vertices with their input index, top layer
    if draw_vertices:
        for v, vertex in enumerate(dcel.vertices):
            x, y = xy(v)
            ax.plot(x, y, marker='o', color=vertex_color, zorder=2)
            if draw_labels:
                ax.annotate(str(vertex.index), (x, y), textcoords="offset points", xytext=(4, 4),
                            color='blue', fontsize=10, zorder=3)

    ax.set_aspect('equal')
    ax.set_title(f"Delaunay triangulation ({dcel.num_vertices} vertices, {dcel.num_inner_faces} triangles)")
    legend_handles = [Line2D([0], [0], color=face_color, linewidth=2,
                             label='Convex hull' if only_hull else 'Triangle edge')]
    if draw_vertices:
        legend_handles.append(Line2D([0], [0], marker='o', color=vertex_color, linestyle='None', label='Vertex'))
    ax.legend(handles=legend_handles, loc='best')

    if show:
        plt.show()
    return ax


def save_figure(dcel: DelaunayTriangulation, path, **kwargs):
    fig, ax = plt.subplots()
    draw_science(dcel, ax=ax, show=False, **kwargs)
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    return path
