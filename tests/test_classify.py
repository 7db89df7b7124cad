import numpy as np

from pycutstab.core.dofs import ACTIVE, INACTIVE, CONSTRAINED
from pycutstab.stabilization import IncidenceIndex, classify_dofs

TINY = np.finfo(float).tiny
UPPER = 2.0 - np.sqrt(np.finfo(float).eps)


def _classify(field, measures):
    return classify_dofs(field, IncidenceIndex.build(field), measures, TINY, UPPER)


def test_thresholds(line_problem):
    mesh, field = line_problem(1.0, 5)
    degenerate = _classify(field, [0.0, 0.5, 1.0, 4.0, 4.0, 2.0])
    assert [d for d, _ in degenerate] == [1, 2]
    assert all(mask.to_indices().tolist() == [0] for _, mask in degenerate)
    assert [field.dof(i).status(0) for i in range(6)] == [INACTIVE] * 3 + [ACTIVE] * 3


def test_support_at_upper_threshold_is_active(line_problem):
    mesh, field = line_problem(1.0, 2)
    degenerate = _classify(field, [UPPER, 4.0, 2.0])
    assert degenerate == []
    assert field.dof(0).is_active(0)


def test_support_below_lower_threshold_is_not_degenerate(line_problem):
    mesh, field = line_problem(1.0, 2)
    degenerate = classify_dofs(field, IncidenceIndex.build(field), [1e-3, 4.0, 2.0], 1e-2, UPPER)
    assert degenerate == []
    assert field.dof(0).status(0) == INACTIVE


class TestBorrowedActivity:
    def test_midside_dof_borrows_from_active_vertices(self, line_problem):
        mesh, field = line_problem(4.0, 2, poly_order=2)
        degenerate = _classify(field, [2.0, 0.1, 4.0, 4.0, 2.0])
        assert degenerate == []
        assert field.dof(1).is_active(0)

    def test_midside_dof_is_degenerate_next_to_degenerate_vertex(self, line_problem):
        mesh, field = line_problem(4.0, 2, poly_order=2)
        degenerate = _classify(field, [0.5, 0.1, 4.0, 4.0, 2.0])
        # primary DoFs are categorised before the others
        assert [d for d, _ in degenerate] == [0, 1]
        assert field.dof(3).is_active(0)

    def test_midside_dof_with_large_support_is_active(self, line_problem):
        mesh, field = line_problem(4.0, 2, poly_order=2)
        _classify(field, [0.5, 2.0, 4.0, 4.0, 2.0])
        assert field.dof(1).is_active(0)


def test_constrained_components_are_left_alone(line_problem):
    mesh, field = line_problem(1.0, 2, n_components=2)
    field.dof(0).constrain_value(0, 1.0)
    degenerate = _classify(field, [0.5, 4.0, 2.0])
    assert len(degenerate) == 1
    dof_id, mask = degenerate[0]
    assert dof_id == 0 and mask.to_indices().tolist() == [1]
    assert field.dof(0).status(0) == CONSTRAINED
    assert field.dof(0).get_constraint(0).value == 1.0
    assert field.dof(0).status(1) == INACTIVE


def test_every_dof_is_categorised_once(line_problem):
    mesh, field = line_problem(1.0, 6, poly_order=3)
    measures = np.linspace(0.0, 3.0, field.n_dofs)
    degenerate = _classify(field, measures)
    ids = [d for d, _ in degenerate]
    assert len(ids) == len(set(ids))
    for d in ids:
        assert field.dof(d).status(0) == INACTIVE
