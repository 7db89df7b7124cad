"""pycutstab.fem.transform
Reference → physical mapping for isoparametric Lagrange elements.
"""
import numpy as np
from pycutstab.fem.reference import get_reference


def _shape_and_grad(ref, xi):
    N = np.asarray(ref.shape(xi)).ravel()   # (n_loc,)
    dN = np.asarray(ref.grad(xi))           # (n_loc, dim)
    return N, dN


def _element_nodes(mesh, elem_id):
    return mesh.nodes_pos[mesh.elements_connectivity[elem_id]]


def x_mapping(mesh, elem_id, xi):
    """x(ξ) = Σ_a N_a(ξ) X_a."""
    ref = get_reference(mesh.element_type, mesh.poly_order)
    N, _ = _shape_and_grad(ref, xi)
    return N @ _element_nodes(mesh, elem_id)          # (dim,)


def jacobian(mesh, elem_id, xi):
    """J[β, a] = ∂x_β/∂ξ_a, shape (spatial_dim, local_dim)."""
    ref = get_reference(mesh.element_type, mesh.poly_order)
    _, dN = _shape_and_grad(ref, xi)
    return _element_nodes(mesh, elem_id).T @ dN


def det_jacobian(mesh, elem_id, xi):
    return np.linalg.det(jacobian(mesh, elem_id, xi))


def contravariant_basis(mesh, elem_id, xi):
    """G = J^{-T}; its columns are the gradients of the local coordinates."""
    J = jacobian(mesh, elem_id, xi)
    if J.shape[0] == J.shape[1]:
        return np.linalg.inv(J).T
    # embedded elements: Moore-Penrose inverse of the tangent map
    return np.linalg.pinv(J).T

