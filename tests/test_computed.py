"""
Unit tests for computed vectors and the helpers built on them.
"""

import pytest

from winstats.errors import NotScalar
from winstats.stats.dual import Correlation
from winstats.stats.single import Mean
from winstats.vector.computed import ComputedVector, handle_missing_values, remove_outliers
from winstats.vector.sequence import Vector


@pytest.fixture
def source():
    return Vector([1, 2, 3])


class TestComputedVector:
    """Lazy transform of a source vector."""

    def test_identity_by_default(self, source):
        assert ComputedVector(source).query() == [1, 2, 3]

    def test_transform_applied_lazily(self, source):
        cv = ComputedVector(source, lambda values: [x * 2 for x in values])
        assert cv.recompute_count == 0
        assert cv.query() == [2, 4, 6]
        assert cv.size() == 3
        assert cv.recompute_count == 1

    def test_follows_source(self, source):
        cv = ComputedVector(source, lambda values: [x * 2 for x in values])
        cv.query()
        source.insert(4)
        assert cv.dirty
        assert cv.query() == [2, 4, 6, 8]

    def test_set_filter(self, source):
        cv = ComputedVector(source)
        cv.query()
        cv.set_filter(lambda values: [x for x in values if x > 1])
        assert cv.dirty
        assert cv.query() == [2, 3]

    def test_filter_may_return_generator(self, source):
        cv = ComputedVector(source, lambda values: (x + 1 for x in values))
        assert cv.query() == [2, 3, 4]

    def test_statistics_over_computed(self):
        v = Vector([1, 2, 3, 100])
        cv = ComputedVector(v, lambda values: [x for x in values if x < 50])
        m = Mean(cv)
        assert m is Mean(cv)
        assert m is not Mean(v)
        assert m.query() == 2.0
        v.insert(5)
        assert m.query() == 2.75

    def test_mutation_forwards_to_source(self, source):
        cv = ComputedVector(source)
        assert cv.insert(7) is cv
        assert source.query() == [1, 2, 3, 7]
        cv.append(8)
        cv.set_size(2)
        assert source.query() == [7, 8]
        cv.set_vector([5])
        assert cv.query() == [5]

    def test_set_source(self, source):
        other = Vector([10, 20])
        cv = ComputedVector(source)
        cv.query()
        cv.set_source(other)
        assert cv.source is other
        assert cv.query() == [10, 20]
        source.insert(4)
        assert not cv.dirty

    def test_chained(self, source):
        doubled = ComputedVector(source, lambda values: [x * 2 for x in values])
        shifted = ComputedVector(doubled, lambda values: [x + 1 for x in values])
        assert shifted.query() == [3, 5, 7]
        source.insert(4)
        assert shifted.dirty
        assert shifted.query() == [3, 5, 7, 9]

    def test_copy_is_plain_vector(self, source):
        cv = ComputedVector(source, lambda values: values[1:])
        c = cv.copy()
        assert type(c) is Vector
        assert c.query() == [2, 3]

    def test_not_a_number(self, source):
        with pytest.raises(NotScalar):
            ComputedVector(source).as_number()


class TestHandleMissingValues:
    """Paired alignment of two vectors with gaps."""

    def test_drops_positions_missing_in_either(self):
        a = Vector([1, None, 3, 4])
        b = Vector([1, 2, None, 4])
        ca, cb = handle_missing_values(a, b)
        assert ca.query() == [1, 4]
        assert cb.query() == [1, 4]

    def test_refreshes_when_partner_changes(self):
        a = Vector([1, None, 3, 4])
        b = Vector([1, 2, None, 4])
        ca, cb = handle_missing_values(a, b)
        ca.query()
        b.set_vector([1, 2, 3, 4])
        assert ca.dirty
        assert ca.query() == [1, 3, 4]
        assert cb.query() == [1, 3, 4]

    def test_aligned_correlation(self):
        a = Vector([1, None, 2, 3, 4])
        b = Vector([2, 5, None, 6, 8])
        ca, cb = handle_missing_values(a, b)
        assert Correlation(ca, cb).query() == pytest.approx(1.0)


class TestRemoveOutliers:

    def test_drops_far_values(self):
        v = Vector([10, 11, 9, 10, 12, 8, 10, 100])
        assert remove_outliers(v).query() == [10, 11, 9, 10, 12, 8, 10]

    def test_shares_source_nodes(self):
        v = Vector([1, 2, 3])
        remove_outliers(v)
        assert "mean" in v.registry.kinds()
        assert "stddev" in v.registry.kinds()

    def test_keeps_everything_without_spread(self):
        assert remove_outliers(Vector([])).query() == []
        assert remove_outliers(Vector([5, 5])).query() == [5, 5]
