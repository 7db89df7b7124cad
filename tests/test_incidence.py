import numpy as np

from pycutstab.core import Field, FieldElement
from pycutstab.stabilization import IncidenceIndex


def test_one_ring_line(line_problem):
    mesh, field = line_problem(1.0, 4)
    inc = IncidenceIndex.build(field)
    assert len(inc) == 5
    assert inc.one_ring(0).tolist() == [0]
    assert inc.one_ring(2).tolist() == [1, 2]
    assert inc.one_ring(4).tolist() == [3]


def test_one_ring_is_sorted_and_complete():
    # element ids deliberately not in DoF order
    elements = [
        FieldElement(0, [3, 4], (0, 1), 'line', 1),
        FieldElement(1, [0, 3], (0, 1), 'line', 1),
        FieldElement(2, [3, 1], (0, 1), 'line', 1),
    ]
    field = Field(elements, 6)
    inc = IncidenceIndex.build(field)
    assert inc.one_ring(3).tolist() == [0, 1, 2]
    assert inc.one_ring(5).size == 0
    for d in range(field.n_dofs):
        expected = [e.id for e in field.elements_list if d in e.dofs]
        assert inc.one_ring(d).tolist() == expected


def test_empty_field():
    inc = IncidenceIndex.build(Field([], 3))
    assert len(inc) == 3
    assert inc.one_ring(1).size == 0
