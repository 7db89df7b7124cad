from pycutstab.utils.bitset import BitSet


def test_bitset():
    a = BitSet([True, False, True])
    b = BitSet([True, True, False])
    assert (a & b).to_indices().tolist() == [0]
    assert (a | b).cardinality() == 3
    assert (a - b).to_indices().tolist() == [2]


def test_empty_and_set():
    s = BitSet.empty(3)
    assert not s.any() and len(s) == 3
    s.set(1)
    assert s.any() and 1 in s and not s[0]
    s.reset(1)
    assert s == BitSet.empty(3)
