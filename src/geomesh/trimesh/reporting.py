# -*- coding: utf-8 -*-
"""
This module provides reporting functions for triangle mesh summaries.
"""
from __future__ import annotations
from typing import TYPE_CHECKING
import numpy as np

from ..common.utility import triangle_areas, triangle_edge_lengths

if TYPE_CHECKING:
    from .tri_mesh import TriMesh


def format_mesh_summary(mesh: "TriMesh") -> str:
    """
    Formats a summary of a mesh: sizes, bounding box, cell geometry and the
    neighbour tables it carries.
    """
    report = []
    report.append("\n" + "=" * 80)
    report.append(f"{'Mesh Summary':^80}")
    report.append("=" * 80)
    report.append(_format_general_info(mesh))
    if mesh.n_nodes > 0:
        report.append(_format_bounding_box(mesh))
    if mesh.n_cells > 0:
        report.append(_format_cell_geometry(mesh))
    report.append(_format_connectivity_tables(mesh))
    report.append("\n" + "=" * 80)
    return "\n".join(report)


def _format_general_info(mesh: "TriMesh") -> str:
    lines = [f"\n{'--- General Information ---':^80}\n"]
    lines.append(f"  {'Number of Nodes:':<25} {mesh.n_nodes}")
    lines.append(f"  {'Number of Cells:':<25} {mesh.n_cells}")
    lines.append(f"  {'Number of Edges:':<25} {mesh.n_edges}")
    return "\n".join(lines)


def _format_bounding_box(mesh: "TriMesh") -> str:
    x_min, y_min, x_max, y_max = mesh.bounding_box()
    lines = [f"\n{'--- Geometric Bounding Box ---':^80}\n"]
    lines.append(f"  {'X Range:':<25} {x_min:.4f} to {x_max:.4f}")
    lines.append(f"  {'Y Range:':<25} {y_min:.4f} to {y_max:.4f}")
    return "\n".join(lines)


def _format_cell_geometry(mesh: "TriMesh") -> str:
    """Formats the table of cell area and edge length statistics."""
    lines = [f"\n{'--- Cell Geometry ---':^80}\n"]
    lines.append(f"  {'Metric':<25} {'Min':>15} {'Max':>15} {'Average':>15}")
    lines.append(f"  {'-'*24} {'-'*15} {'-'*15} {'-'*15}")
    nodes, cells = mesh.node_coords, mesh.cell_node_connectivity
    lines.append(_format_metric_row("Cell Area", triangle_areas(nodes, cells)))
    lines.append(
        _format_metric_row("Edge Length", triangle_edge_lengths(nodes, cells).ravel())
    )
    return "\n".join(lines)


def _format_metric_row(name: str, values: np.ndarray) -> str:
    """Formats a single row in the metric table."""
    min_val, max_val, mean_val = np.min(values), np.max(values), np.mean(values)
    return f"  {name:<25} {min_val:>15.4e} {max_val:>15.4e} {mean_val:>15.4e}"


def _format_connectivity_tables(mesh: "TriMesh") -> str:
    """Lists which optional neighbour tables are populated."""
    tables = {
        "edge -> node": mesh.edge_node_connectivity,
        "edge -> cell": mesh.edge_cell_connectivity,
        "node -> cell": mesh.node_cell_connectivity,
        "node -> edge": mesh.node_edge_connectivity,
        "cell -> edge": mesh.cell_edge_connectivity,
    }
    lines = [f"\n{'--- Connectivity Tables ---':^80}\n"]
    present = [name for name, table in tables.items() if table.shape[0] > 0]
    if present:
        for name in present:
            lines.append(f"    - {name}")
    else:
        lines.append("  Only cell -> node connectivity present.")
    return "\n".join(lines)
