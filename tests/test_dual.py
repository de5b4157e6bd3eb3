"""
Unit tests for covariance, correlation and the least-squares fit.
"""

import pytest
from hypothesis import HealthCheck, given, settings as hsettings, strategies as st

from winstats.config import configure
from winstats.errors import DegenerateStatistic, DivideByZero, LengthMismatch, NotScalar
from winstats.stats.dual import Correlation, Covariance, LeastSquareFit
from winstats.vector.computed import handle_missing_values
from winstats.vector.sequence import Vector


class TestCovariance:

    def test_population(self):
        assert Covariance([1, 2, 3], [1, 2, 3]).query() == pytest.approx(2 / 3)

    def test_sample(self):
        configure(unbias=True)
        assert Covariance([1, 2, 3], [1, 2, 3]).query() == pytest.approx(1.0)

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatch):
            Covariance([1, 2, 3], [1, 2])
        with pytest.raises(ValueError):
            Correlation([1], [1, 2])

    def test_omitted_sources(self):
        cov = Covariance()
        assert cov.size() == 0
        assert cov.query() is None

    def test_lengths_drifting_apart(self):
        a, b = Vector([1, 2, 3]), Vector([1, 2, 3])
        cov = Covariance(a, b)
        a.append(4)
        assert cov.query() is None
        assert "length" in cov.reason

    def test_insert_pairs(self):
        cov = Covariance(Vector([1, 2, 3], size=3), Vector([3, 2, 1], size=3))
        assert cov.query() == pytest.approx(-2 / 3)
        cov.insert(4, 0)
        assert cov.query_vector1().query() == [2, 3, 4]
        assert cov.query_vector2().query() == [2, 1, 0]
        assert cov.query() == pytest.approx(-2 / 3)


class TestCorrelation:

    def test_identical_data_is_exactly_one(self):
        assert Correlation(list(range(1, 11)), list(range(1, 11))).query() == 1.0

    def test_reversed_data(self):
        assert Correlation([1, 2, 3], [3, 2, 1]).query() == pytest.approx(-1.0)

    def test_within_bounds(self):
        r = Correlation([1, 2, 3, 4], [2, 4, 5, 9]).query()
        assert -1.0 <= r <= 1.0
        assert r == pytest.approx(0.9648, abs=1e-4)

    def test_bias_setting_cancels_out(self):
        a, b = [1, 2, 3, 4], [2, 4, 5, 9]
        population = Correlation(a, b).query()
        configure(unbias=True)
        assert Correlation(a, b).query() == pytest.approx(population)

    def test_zero_spread_is_undefined(self):
        corr = Correlation([1, 2, 3], [5, 5, 5])
        assert corr.query() is None
        with pytest.raises(DegenerateStatistic):
            corr.as_number()

    def test_as_string(self):
        assert Correlation([1, 2, 3], [1, 2, 3]).as_string() == "correlation: 1"


@pytest.fixture
def line():
    """y = 2x + 1."""
    xs = [1, 2, 3, 4, 5]
    return LeastSquareFit(xs, [2 * x + 1 for x in xs])


class TestLeastSquareFit:

    def test_exact_line(self, line):
        alpha, beta = line.query()
        assert alpha == pytest.approx(1.0)
        assert beta == pytest.approx(2.0)
        assert line.y_given_x(10) == pytest.approx(21.0)
        assert line.x_given_y(21) == pytest.approx(10.0)

    def test_not_a_number(self, line):
        with pytest.raises(NotScalar):
            line.as_number()
        with pytest.raises(TypeError):
            line.equals(1.0)

    def test_as_string(self, line):
        assert line.as_string() == "LSF( alpha: 1, beta: 2 )"

    def test_zero_slope(self):
        fit = LeastSquareFit([1, 2, 3], [5, 5, 5])
        assert fit.query() == (pytest.approx(5.0), 0.0)
        assert fit.y_given_x(7) == pytest.approx(5.0)
        with pytest.raises(DivideByZero):
            fit.x_given_y(5)
        with pytest.raises(ZeroDivisionError):
            fit.x_given_y(6)

    def test_undefined_fit(self):
        fit = LeastSquareFit([2, 2, 2], [1, 2, 3])
        assert fit.query() == (None, None)
        with pytest.raises(DegenerateStatistic):
            fit.y_given_x(1)
        with pytest.raises(DegenerateStatistic):
            fit.x_given_y(1)
        assert fit.as_string() == "LSF( alpha: n/a, beta: n/a )"

    def test_follows_window(self):
        fit = LeastSquareFit(Vector([1, 2, 3], size=3), Vector([2, 4, 6], size=3))
        alpha, beta = fit.query()
        assert (alpha, beta) == (pytest.approx(0.0), pytest.approx(2.0))
        fit.insert(4, 9)
        alpha, beta = fit.query()
        assert beta == pytest.approx(2.5)
        assert alpha == pytest.approx(-7 / 6)

    def test_misaligned_gaps_use_paired_values(self):
        fit = LeastSquareFit([1, 2, 3, None, 50], [1, 2, 3, 100, None])
        alpha, beta = fit.query()
        assert beta == pytest.approx(1.0)
        assert alpha == pytest.approx(0.0)
        assert fit.x_given_y(7) == pytest.approx(7.0)

    @hsettings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    @given(st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False))
    def test_round_trip(self, line, x):
        assert line.x_given_y(line.y_given_x(x)) == pytest.approx(x, rel=1e-9, abs=1e-6)


@pytest.fixture
def gappy():
    """Two vectors whose missing entries sit at different positions."""
    return (
        Vector([1, 2, None, 4, 5, 9, None]),
        Vector([2, None, 3, 7, 9, 20, None]),
    )


class TestMissingEntries:
    """Paired results only ever see positions where both vectors have a value."""

    @pytest.mark.parametrize("unbias", [False, True])
    def test_matches_aligned_vectors(self, gappy, unbias):
        configure(unbias=unbias)
        x, y = gappy
        ax, ay = handle_missing_values(x, y)
        assert ax.query() == [1, 4, 5, 9]
        for cls in (Covariance, Correlation):
            assert cls(x, y).query() == pytest.approx(cls(ax, ay).query())
        fit, aligned = LeastSquareFit(x, y).query(), LeastSquareFit(ax, ay).query()
        assert fit == (pytest.approx(aligned[0]), pytest.approx(aligned[1]))

    def test_perfect_line_through_gaps(self):
        x = [1, 2, 3, None, 50]
        y = [1, 2, 3, 100, None]
        assert Covariance(x, y).query() == pytest.approx(2 / 3)
        assert Correlation(x, y).query() == 1.0

    def test_aligned_gaps_match_complete_data(self):
        cov = Covariance([1, None, 3, 5], [2, None, 6, 10])
        assert cov.query() == pytest.approx(Covariance([1, 3, 5], [2, 6, 10]).query())

    def test_follows_gaps_as_they_move(self, gappy):
        x, y = gappy
        corr = Correlation(x, y)
        expected = Correlation(*handle_missing_values(x, y))
        assert corr.query() == pytest.approx(expected.query())
        x.set_vector([1, 2, 3, 4, 5, 9, 8])
        y.set_vector([2, 4, 6, 8, 10, 18, 16])
        assert corr.query() == pytest.approx(1.0)
        assert expected.query() == pytest.approx(1.0)

    def test_too_few_pairs(self):
        configure(unbias=True)
        cov = Covariance([1, None, 3], [None, 2, 4])
        assert cov.query() is None
        assert "paired" in cov.reason
        assert LeastSquareFit([1, None, 3], [None, 2, 4]).query() == (None, None)
