"""
KZG 배치 열기 (다중 점, 단일 다항식)
=====================================

한 다항식 p(x)에 대한 k개의 평가 주장 {(sᵢ, yᵢ)}을 증명 π 하나로 묶는다.

**증명 생성**:
  1. 소거 다항식 Z_S(x) = Π (x - sᵢ)
  2. 보간 다항식 I(x): I(sᵢ) = yᵢ
  3. 몫 q(x) = (p(x) - I(x)) / Z_S(x)   (나머지 ≠ 0 이면 주장이 틀림)
  4. π = q(τ)·G1

**검증**:
  e(C - [I(τ)]₁, G2) == e(π, [Z_S(τ)]₂)

  [Z_S(τ)]₂는 SRS의 G2 거듭제곱으로 계산하므로 SRS에 τ^k·G2 까지 있어야 한다.
  k에 관계없이 페어링 검사는 한 번이다. 증명 시점에 보간 한 번과
  나눗셈 한 번을 더 하는 대신 검증 비용이 O(k)에서 O(1)로 줄어든다.

사용 예시:
    >>> proof = open_batch(srs, poly, [FR(1), FR(2), FR(3)])
    >>> verify_batch(srs, commit(srs, poly), proof)  # True
"""

import logging
from dataclasses import dataclass

from pcs.errors import DegreeExceeded, InconsistentClaim, EmptyClaimSet
from pcs.kzg.field import to_fr, ec_sub, ec_neg, pairing_product, is_g1_point
from pcs.kzg.polynomial import poly_div, interpolate, vanishing_polynomial
from pcs.kzg.kzg import commit, commit_g2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchProof:
    """한 다항식에 대한 k개 평가 주장과 그 증명.

    속성:
        points: 서로 다른 평가 점 (FR 튜플)
        values: points와 정렬된 평가값 (FR 튜플)
        witness: 증명 π (G1 점)
    """
    points: tuple
    values: tuple
    witness: tuple


def _has_duplicates(points):
    keys = [int(p) for p in points]
    return len(set(keys)) != len(keys)


def open_batch(srs, poly, points, values=None):
    """여러 점에서의 평가를 하나의 증명으로 연다.

    Args:
        srs: SRS
        poly: 다항식 p(x)
        points: 서로 다른 평가 점 리스트
        values: 선택. 주장하는 평가값 리스트. None이면 p(sᵢ)를 계산해 쓴다.

    Returns:
        BatchProof

    Raises:
        EmptyClaimSet: points가 비었을 때
        InconsistentClaim: 점이 중복되거나, 주장한 값이 실제 평가와 다를 때
        DegreeExceeded: 다항식 차수가 SRS 최대 차수를 초과할 때
    """
    points = [to_fr(p) for p in points]
    if not points:
        raise EmptyClaimSet("배치 열기에 평가 점이 하나도 없습니다")
    if _has_duplicates(points):
        raise InconsistentClaim("배치 열기의 평가 점이 중복됩니다")
    if poly.degree > srs.max_degree:
        raise DegreeExceeded(
            f"다항식 차수 {poly.degree}가 SRS 최대 차수 {srs.max_degree}를 초과합니다"
        )

    if values is None:
        values = [poly.evaluate(p) for p in points]
    else:
        values = [to_fr(v) for v in values]
        if len(values) != len(points):
            raise InconsistentClaim(
                f"평가 점 {len(points)}개와 값 {len(values)}개의 개수가 다릅니다"
            )

    interp = interpolate(points, values)
    z_s = vanishing_polynomial(points)
    quotient, remainder = poly_div(poly - interp, z_s)
    if not remainder.is_zero():
        raise InconsistentClaim("주장한 평가값이 다항식의 실제 평가와 일치하지 않습니다")

    witness = commit(srs, quotient)
    logger.debug("배치 열기 증명 생성: deg=%d, k=%d", poly.degree, len(points))
    return BatchProof(points=tuple(points), values=tuple(values), witness=witness)


def verify_batch(srs, commitment, proof):
    """배치 열기 증명을 검증한다.

    e(C - [I(τ)]₁, G2) · e(-π, [Z_S(τ)]₂) == 1

    Args:
        srs: SRS
        commitment: 다항식 커밋먼트 C
        proof: BatchProof

    Returns:
        bool: 검증 성공 여부. 값이 조작되었거나 점이 중복되거나
        커밋먼트/증인이 곡선 밖의 점이면 False.

    Raises:
        DegreeExceeded: 점 개수가 SRS의 G2 용량(max_batch_size)을 초과할 때
    """
    if not (is_g1_point(commitment) and is_g1_point(proof.witness)):
        return False
    points = [to_fr(p) for p in proof.points]
    values = [to_fr(v) for v in proof.values]
    if not points or len(points) != len(values) or _has_duplicates(points):
        return False
    if len(points) > srs.max_batch_size:
        raise DegreeExceeded(
            f"배치 크기 {len(points)}가 SRS의 G2 용량 {srs.max_batch_size}를 초과합니다"
        )

    interp_g1 = commit(srs, interpolate(points, values))
    z_s_g2 = commit_g2(srs, vanishing_polynomial(points))

    result = pairing_product([
        (ec_sub(commitment, interp_g1), srs.g2_powers[0]),
        (ec_neg(proof.witness), z_s_g2),
    ])
    ok = result == result.one()
    if not ok:
        logger.debug("배치 열기 증명 거부: k=%d", len(points))
    return ok
