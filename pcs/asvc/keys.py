"""
aSVC 키 (증명/갱신/검증용 사전 계산)
=====================================

도메인 크기 n과 SRS가 정해지면 벡터 내용과 무관하게 미리 계산해 둘 수 있는
G1 점들을 모은다. 모두 SRS의 공개 점만으로 계산하며 τ는 필요 없다.

  lagrange_g1[i]           = [L_i(τ)]₁                  (커밋 / 커밋 갱신)
  vanishing_quotient_g1[i] = [A_i(τ)]₁                  (다른 위치 증명 갱신)
  update_g1[i]             = [(L_i(τ) - 1)/(τ - ω^i)]₁   (같은 위치 증명 갱신)
  vanishing_g1             = [τ^n - 1]₁                  (n ≤ d 일 때만)

[A_i(τ)]₁ = A'(ω^i)·[L_i(τ)]₁ 이므로 Lagrange 점에서 스칼라곱 한 번으로 얻는다.
"""

import logging

from pcs.kzg.field import FR, ec_mul, ec_sub
from pcs.kzg.kzg import commit
from pcs.kzg.polynomial import divide_by_linear

logger = logging.getLogger(__name__)


class VectorKeys:
    """한 (SRS, Domain) 쌍에 대한 aSVC 사전 계산 결과. 생성 후 수정하지 않는다."""

    __slots__ = ("domain", "lagrange_g1", "vanishing_quotient_g1", "update_g1", "vanishing_g1")

    def __init__(self, domain, lagrange_g1, vanishing_quotient_g1, update_g1, vanishing_g1=None):
        self.domain = domain
        self.lagrange_g1 = tuple(lagrange_g1)
        self.vanishing_quotient_g1 = tuple(vanishing_quotient_g1)
        self.update_g1 = tuple(update_g1)
        self.vanishing_g1 = vanishing_g1

    def __repr__(self):
        return f"VectorKeys(domain={self.domain!r})"

    @classmethod
    def derive(cls, srs, domain):
        """SRS와 도메인으로부터 키를 계산한다.

        Args:
            srs: SRS (max_degree ≥ n - 1)
            domain: Domain

        Returns:
            VectorKeys

        Raises:
            DegreeExceeded: n - 1 > srs.max_degree
        """
        n = domain.size
        lagrange_g1 = srs.lagrange_g1(domain)

        vanishing_quotient_g1 = [
            ec_mul(lagrange_g1[i], domain.vanishing_derivative_at(i)) for i in range(n)
        ]

        update_g1 = []
        for i in range(n):
            numerator = domain.lagrange_basis(i) - FR(1)
            u_i, _ = divide_by_linear(numerator, domain.point(i))
            update_g1.append(commit(srs, u_i))

        vanishing_g1 = None
        if n <= srs.max_degree:
            vanishing_g1 = ec_sub(srs.g1_powers[n], srs.g1_powers[0])

        logger.debug("aSVC 키 계산 완료: n=%d", n)
        return cls(domain, lagrange_g1, vanishing_quotient_g1, update_g1, vanishing_g1)
