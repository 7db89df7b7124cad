import numpy as np
import pytest

from pycutstab.core import Field, FieldElement, DegreeOfFreedom, Constraint
from pycutstab.core.dofs import ACTIVE, INACTIVE, CONSTRAINED


class TestDegreeOfFreedom:
    def test_defaults_to_active(self):
        dof = DegreeOfFreedom(3, size=2)
        assert dof.is_active(0) and dof.is_active(1)
        assert dof.get_constraint(0) is None

    def test_make_constraint_is_idempotent(self):
        dof = DegreeOfFreedom(0)
        c = dof.make_constraint(0)
        c.add_weighted_dof(4, 0, 0.5)
        assert dof.make_constraint(0) is c
        assert dof.status(0) == CONSTRAINED
        assert c.donors() == [(4, 0)]

    def test_deactivate_drops_constraint(self):
        dof = DegreeOfFreedom(0)
        dof.make_constraint(0)
        dof.deactivate(0)
        assert dof.status(0) == INACTIVE
        assert dof.get_constraint(0) is None

    def test_constrain_value(self):
        dof = DegreeOfFreedom(0, size=2)
        dof.constrain_value(1, 2.5)
        assert dof.status(0) == ACTIVE
        assert dof.get_constraint(1).value == 2.5
        assert len(dof.get_constraint(1)) == 0

    def test_size_must_be_positive(self):
        with pytest.raises(ValueError):
            DegreeOfFreedom(0, size=0)


def test_constraint_evaluate():
    c = Constraint()
    c.add_weighted_dof(0, 0, 3.0)
    c.add_weighted_dof(1, 0, -2.0)
    values = np.array([[0.6], [0.8]])
    assert np.isclose(c.evaluate(values), 0.2)
    assert np.allclose(c.weights(), [3.0, -2.0])


def test_from_mesh_uses_node_ids(line_problem):
    mesh, field = line_problem(1.0, 3, poly_order=2)
    assert field.n_dofs == 7
    assert field.element(1).dofs == (2, 3, 4)
    assert field.element(1).primary_dofs == (2, 4)
    assert field.element_dof_array().shape == (3, 3)


def test_all_dofs_active(line_problem):
    mesh, field = line_problem(1.0, 2, poly_order=2)
    field.dof(1).deactivate(0)
    assert field.all_dofs_active(0, primary_only=True)
    assert not field.all_dofs_active(0)
    assert field.all_dofs_active(1)


def test_associate_locations_picks_lowest_element(line_problem):
    mesh, field = line_problem(3.0, 3)
    locs = field.associate_locations()
    assert [eid for eid, _ in locs] == [0, 0, 1, 2]
    assert np.allclose(locs[2][1], [1.0])
    assert np.allclose(field.dof_coordinates(mesh)[:, 0], [0.0, 1.0, 2.0, 3.0])


def test_constrain_by_locator(line_problem):
    mesh, field = line_problem(1.0, 4, n_components=2)
    hit = field.constrain_by_locator(mesh, lambda x: np.isclose(x, 0.0), value=lambda x: (1.0, 2.0))
    assert hit == [0]
    assert field.dof(0).get_constraint(1).value == 2.0
    assert field.status_counts() == {ACTIVE: 8, INACTIVE: 0, CONSTRAINED: 2}


def test_field_validation():
    with pytest.raises(ValueError):
        Field([FieldElement(1, [0, 1], (0, 1), 'line', 1)], 2)
    with pytest.raises(ValueError):
        Field([FieldElement(0, [0, 5], (0, 1), 'line', 1)], 2)
