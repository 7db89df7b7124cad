# conftest.py
import matplotlib
import pytest

from pycutstab.core import Mesh, Field
from pycutstab.utils.meshgen import structured_line


@pytest.fixture(autouse=True)
def mpl_test_backend():
    """Switch to a non-interactive backend for all tests."""
    matplotlib.use('Agg')


@pytest.fixture
def line_problem():
    """Factory: (mesh, field) for a uniform line mesh."""
    def make(L, nx, poly_order=1, n_components=1):
        nodes, elems, corners = structured_line(L, nx=nx, poly_order=poly_order)
        mesh = Mesh(nodes, elems, corners, element_type='line', poly_order=poly_order)
        return mesh, Field.from_mesh(mesh, n_components)
    return make
