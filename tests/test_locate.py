import logging

import numpy as np
import pytest

from pycutstab.core import Mesh
from pycutstab.stabilization import locate_point_wrt_element
from pycutstab.utils.meshgen import structured_quad, structured_triangles


def test_extrapolation_on_line(line_problem):
    mesh, _ = line_problem(1.0, 5)
    res = locate_point_wrt_element(np.array([0.2]), mesh, 3)
    assert res.converged and not res.exhausted
    assert np.allclose(res.xi, [-5.0])
    assert np.allclose(mesh.position(3, res.xi), [0.2])


@pytest.mark.parametrize("xi_true", [(0.3, -0.7), (2.5, 1.5), (-3.0, 0.0)])
def test_round_trip_on_distorted_quad(xi_true):
    nodes, elems, corners = structured_quad(1.0, 1.0, nx=1, ny=1, poly_order=1)
    nodes[3].x += 0.2   # top right corner
    nodes[3].y += 0.1
    mesh = Mesh(nodes, elems, corners, element_type="quad", poly_order=1)
    x = mesh.position(0, xi_true)
    res = locate_point_wrt_element(x, mesh, 0, tolerance=1e-12, max_iter=30)
    assert res.converged
    assert np.allclose(res.xi, xi_true, atol=1e-9)
    assert res.residual < 1e-12


def test_round_trip_on_p2_triangle():
    nodes, elems, corners = structured_triangles(2.0, 1.0, nx_quads=1, ny_quads=1, poly_order=2)
    mesh = Mesh(nodes, elems, corners, element_type="tri", poly_order=2)
    x = np.array([2.5, -0.3])
    res = locate_point_wrt_element(x, mesh, 1)
    assert res.converged
    assert np.allclose(mesh.position(1, res.xi), x, atol=1e-8)


def test_converged_point_is_fixed(line_problem):
    mesh, _ = line_problem(1.0, 5)
    first = locate_point_wrt_element([0.2], mesh, 3)
    again = locate_point_wrt_element([0.2], mesh, 3, xi0=first.xi)
    assert again.iterations == 0
    assert np.allclose(again.xi, first.xi)


def test_no_iterations_returns_centroid_with_warning(line_problem, caplog):
    mesh, _ = line_problem(1.0, 5)
    with caplog.at_level(logging.WARNING, logger="pycutstab.stabilization.locate"):
        res = locate_point_wrt_element([0.2], mesh, 3, max_iter=0)
    assert not res.converged
    assert np.allclose(res.xi, [0.0])
    assert np.isclose(res.residual, 0.5)
    assert "Reached maximal number of iterations" in caplog.text
