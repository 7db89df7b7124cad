import logging

import numpy as np
import pytest

from pycutstab.stabilization import (
    IncidenceIndex, SupportNotFoundError, two_ring_of_dof, three_ring_of_dof,
    find_supporting_element,
)
from pycutstab.stabilization.ring import closest_element


def _deactivate(field, ids):
    for d in ids:
        field.dof(d).deactivate(0)


@pytest.fixture
def eight_cells(line_problem):
    """Unit-length cells, nodes at 0, 1, ..., 8."""
    return line_problem(8.0, 8)


def test_two_ring_filters_to_fully_active(eight_cells):
    mesh, field = eight_cells
    _deactivate(field, range(3, 9))
    inc = IncidenceIndex.build(field)
    assert two_ring_of_dof(field, inc, 3) == [1]
    assert two_ring_of_dof(field, inc, 4) == []
    assert three_ring_of_dof(field, inc, 4) == [1]
    assert three_ring_of_dof(field, inc, 5) == []


def test_rings_do_not_contain_duplicates(eight_cells):
    mesh, field = eight_cells
    _deactivate(field, [4])
    inc = IncidenceIndex.build(field)
    assert two_ring_of_dof(field, inc, 4) == [2, 5]
    assert three_ring_of_dof(field, inc, 4) == [1, 2, 5, 6]


def test_falls_back_to_three_ring(eight_cells, caplog):
    mesh, field = eight_cells
    _deactivate(field, range(3, 9))
    inc = IncidenceIndex.build(field)
    with caplog.at_level(logging.DEBUG, logger="pycutstab.stabilization.ring"):
        assert find_supporting_element(mesh, field, inc, 4, [4.0]) == 1
    assert "three-ring" in caplog.text


def test_no_support_raises(eight_cells, caplog):
    mesh, field = eight_cells
    _deactivate(field, range(3, 9))
    inc = IncidenceIndex.build(field)
    with caplog.at_level(logging.ERROR, logger="pycutstab.stabilization.ring"):
        with pytest.raises(SupportNotFoundError) as excinfo:
            find_supporting_element(mesh, field, inc, 5, [5.0])
    assert excinfo.value.dof_id == 5
    assert isinstance(excinfo.value, RuntimeError)
    assert "Cannot find supporting element" in str(excinfo.value)
    assert caplog.records and caplog.records[-1].levelname == "ERROR"


def test_equidistant_candidates_pick_lowest_id(eight_cells):
    mesh, field = eight_cells
    _deactivate(field, [4])
    inc = IncidenceIndex.build(field)
    # centroids 2.5 and 5.5 are both 1.5 away from x = 4
    assert find_supporting_element(mesh, field, inc, 4, [4.0]) == 2


def test_closest_element(eight_cells):
    mesh, _ = eight_cells
    assert closest_element(mesh, [0, 3, 7], np.array([2.9])) == 3
    assert closest_element(mesh, [], np.array([2.9])) is None
