import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection
from matplotlib.patches import Rectangle

TRIANGLE_COLOR = "#87CEEB"


def triangle_areas(nodes: np.ndarray, cells: np.ndarray) -> np.ndarray:
    """Calculates the (unsigned) area of every triangle with the cross product."""
    p0 = nodes[cells[:, 0]]
    p1 = nodes[cells[:, 1]]
    p2 = nodes[cells[:, 2]]
    cross = (p1[:, 0] - p0[:, 0]) * (p2[:, 1] - p0[:, 1]) - (p1[:, 1] - p0[:, 1]) * (
        p2[:, 0] - p0[:, 0]
    )
    return 0.5 * np.abs(cross)


def triangle_edge_lengths(nodes: np.ndarray, cells: np.ndarray) -> np.ndarray:
    """
    Computes the three edge lengths of every triangle.

    Returns:
        np.ndarray: Array of shape (n_cells, 3); column k is the length of the
        edge from local vertex k to local vertex (k + 1) % 3.
    """
    pts = nodes[cells]
    return np.linalg.norm(pts - np.roll(pts, -1, axis=1), axis=2)


def get_geometry_extent(nodes):
    """Computes the extent of the geometry based on node coordinates."""
    min_coords = np.min(nodes, axis=0)
    max_coords = np.max(nodes, axis=0)
    extent = np.linalg.norm(max_coords - min_coords)
    return extent if extent > 0 else 1.0


def plot_mesh(ax, nodes, cells, show_nodes=False, show_cells=False, title="Mesh"):
    """
    Plots a 2D triangle mesh with optional node and cell labels.

    Args:
        ax: Matplotlib axes object.
        nodes (np.ndarray): Array of node coordinates (num_nodes, 2).
        cells (np.ndarray): Array of shape (num_cells, 3) with the node indices of each triangle.
        show_nodes (bool): Whether to display node labels.
        show_cells (bool): Whether to display cell labels.
        title (str, optional): The title for the plot.
    """
    nodes = np.asarray(nodes)[:, :2]
    cells = np.asarray(cells, dtype=int)
    geometry_extent = get_geometry_extent(nodes)

    collection = PolyCollection(
        nodes[cells], facecolor=TRIANGLE_COLOR, edgecolor="k", alpha=0.7, lw=0.5
    )
    ax.add_collection(collection)

    if show_cells and cells.size > 0:
        areas = triangle_areas(nodes, cells)
        centroids = nodes[cells].mean(axis=1)
        for i, (centroid, area) in enumerate(zip(centroids, areas)):
            # Scale font size based on the element area relative to the geometry extent
            font_scale_factor = np.sqrt(area) / geometry_extent
            cell_fontsize = min(max(2, int(font_scale_factor * 120)), 10)
            ax.text(
                centroid[0],
                centroid[1],
                str(i),
                color="black",
                ha="center",
                va="center",
                fontsize=cell_fontsize,
                weight="bold",
                bbox=dict(
                    facecolor="white",
                    alpha=0.6,
                    edgecolor="none",
                    boxstyle="round,pad=0.2",
                ),
            )

    if show_nodes and cells.size > 0:
        mean_edge = float(np.mean(triangle_edge_lengths(nodes, cells)))
        node_fontsize = min(max(2, int(mean_edge / geometry_extent * 100)), 10)
        for i, (x, y) in enumerate(nodes):
            ax.text(
                x,
                y,
                str(i),
                color="darkred",
                ha="center",
                va="center",
                fontsize=node_fontsize,
                bbox=dict(
                    facecolor="yellow",
                    alpha=0.6,
                    edgecolor="none",
                    boxstyle="round,pad=0.1",
                ),
            )

    ax.set_title(title, fontsize=18, pad=20)
    ax.set_xlabel("X", fontsize=14, labelpad=8)
    ax.set_ylabel("Y", fontsize=14, labelpad=8)
    ax.grid(True, linestyle="--", alpha=0.5)
    ax.set_aspect("equal", adjustable="box")
    ax.tick_params(axis="both", which="major", pad=2, labelsize=12)
    ax.autoscale_view()

    for spine in ax.spines.values():
        spine.set_visible(False)

    ax.legend(
        handles=[
            Rectangle(
                (0, 0), 1, 1, color=TRIANGLE_COLOR, label=f"Triangle (#{len(cells)})"
            )
        ],
        loc="upper left",
        bbox_to_anchor=(1.0, 1.0),
        fontsize=14,
        frameon=False,
        ncol=1,
    )


def save_mesh_plot(nodes, cells, filepath: str, title: str = "Mesh Plot", **kwargs):
    """Plots a mesh into a new figure and saves it to `filepath`."""
    fig, ax = plt.subplots(figsize=(10, 8))
    plot_mesh(ax, nodes, cells, title=title, **kwargs)
    plt.savefig(filepath, dpi=300, bbox_inches="tight")
    plt.close(fig)
