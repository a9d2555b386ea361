"""
Evaluation domain tests: roots of unity, index checks, A(x) helpers.
"""

import pytest
from pcs.errors import IndexOutOfRange
from pcs.kzg.field import FR
from pcs.kzg.polynomial import Polynomial, lagrange_basis
from pcs.asvc.domain import Domain


class TestDomainConstruction:
    def test_roots(self, domain):
        assert domain.size == 8
        assert len(domain.roots) == 8
        assert domain.roots[0] == FR(1)
        assert domain.omega ** 8 == FR(1)
        assert len(set(int(r) for r in domain.roots)) == 8

    @pytest.mark.parametrize("n", [0, 3, 10])
    def test_invalid_size(self, n):
        with pytest.raises(ValueError):
            Domain(n)

    def test_size_one(self):
        d = Domain(1)
        assert d.roots == (FR(1),)

    def test_equality_by_size(self):
        assert Domain(4) == Domain(4)
        assert Domain(4) != Domain(8)
        assert len({Domain(4), Domain(4)}) == 1


class TestIndex:
    """위치 범위 검사."""

    @pytest.mark.parametrize("index", [0, 3, 7])
    def test_point(self, domain, index):
        assert domain.point(index) == domain.omega ** index

    @pytest.mark.parametrize("index", [-1, 8, 100])
    def test_out_of_range(self, domain, index):
        with pytest.raises(IndexOutOfRange):
            domain.point(index)

    @pytest.mark.parametrize("index", [True, "1", 1.0, None])
    def test_non_integer(self, domain, index):
        with pytest.raises(IndexOutOfRange):
            domain.check_index(index)


class TestDomainPolynomials:
    def test_interpolate_then_evaluate(self, domain, vector):
        p = domain.interpolate(vector)
        assert p.degree <= 7
        assert domain.evaluate(p) == [FR(v) for v in vector]

    def test_interpolate_wrong_length(self, domain):
        with pytest.raises(ValueError):
            domain.interpolate([1, 2, 3])

    def test_evaluate_degree_too_high(self):
        with pytest.raises(ValueError):
            Domain(2).evaluate(Polynomial([1, 2, 3]))

    def test_vanishing_polynomial(self, domain):
        A = domain.vanishing_polynomial()
        assert all(A.evaluate(r) == FR(0) for r in domain.roots)

    @pytest.mark.parametrize("index", [0, 5])
    def test_vanishing_quotient(self, domain, index):
        A_i = domain.vanishing_quotient(index)
        assert A_i * Polynomial.linear(domain.point(index)) == domain.vanishing_polynomial()

    @pytest.mark.parametrize("index", [0, 1, 6])
    def test_vanishing_derivative(self, domain, index):
        expected = domain.vanishing_polynomial().derivative().evaluate(domain.point(index))
        assert domain.vanishing_derivative_at(index) == expected

    @pytest.mark.parametrize("index", [0, 2, 7])
    def test_lagrange_basis(self, domain, index):
        L = domain.lagrange_basis(index)
        assert L == lagrange_basis(list(domain.roots), index)
        for j, r in enumerate(domain.roots):
            assert L.evaluate(r) == FR(1 if j == index else 0)
