"""pycutstab.io.visualization"""
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection

from pycutstab.core.dofs import ACTIVE, INACTIVE, CONSTRAINED


_STATUS_COLOR = {
    ACTIVE: (0.2, 0.4, 0.9, 1.0),
    INACTIVE: (0.6, 0.6, 0.6, 0.8),
    CONSTRAINED: (0.9, 0.3, 0.1, 1.0),
}
_LINK_COLOR = (0.9, 0.3, 0.1, 0.35)


def _as_2d(points):
    # 1D meshes are drawn along y = 0
    points = np.asarray(points, dtype=float)
    if points.shape[1] == 1:
        return np.column_stack([points[:, 0], np.zeros(len(points))])
    return points


def plot_dof_status(mesh, field, *, component=0, ax=None, show=False):
    """
    Scatter the DoF positions coloured by the status of one component.

    Constrained DoFs are joined to each of their donors by a thin line, so
    the outcome of a basis stabilisation can be checked at a glance.

    Args:
        mesh (Mesh): Geometry the field lives on.
        field (Field): Field whose DoF states are shown.
        component (int, optional): Component to show. Defaults to 0.
        ax (matplotlib.axes.Axes, optional): An existing axes object to plot on.
        show (bool, optional): If True, calls plt.show() at the end.
    Returns:
        matplotlib.axes.Axes: The axes object containing the plot.
    """
    if not 0 <= component < field.n_components:
        raise ValueError(f"Component {component} out of range for a field with "
                         f"{field.n_components} components.")
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    pts = _as_2d(field.dof_coordinates(mesh))

    # --- element outlines (corner polygon) ---
    segs = []
    for elem in mesh.elements_list:
        c = _as_2d(mesh.nodes_pos[list(elem.corner_nodes)])
        segs.append(np.vstack([c, c[:1]]) if len(c) > 2 else c)
    ax.add_collection(LineCollection(segs, colors="black", linewidths=0.6, zorder=1))

    # --- donor links ---
    links = []
    for dof in field.dofs_list:
        constraint = dof.get_constraint(component)
        if constraint is None:
            continue
        for donor, _ in constraint.donors():
            links.append([pts[dof.id], pts[donor]])
    if links:
        ax.add_collection(LineCollection(links, colors=[_LINK_COLOR], linewidths=0.8, zorder=2))

    # --- DoFs by status ---
    for status, color in _STATUS_COLOR.items():
        ids = [dof.id for dof in field.dofs_list if dof.status(component) == status]
        if ids:
            ax.scatter(pts[ids, 0], pts[ids, 1], s=18, color=color, label=status, zorder=3)

    ax.autoscale_view()
    ax.set_aspect("equal" if mesh.spatial_dim == 2 else "auto")
    ax.legend(loc="best")
    ax.set_title(f"DoF status (component {component})")

    if show:
        plt.show()
    return ax
