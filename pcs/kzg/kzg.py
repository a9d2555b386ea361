"""
KZG 다항식 커밋먼트 스킴
=========================

Kate-Zaverucha-Goldberg (KZG) 커밋먼트: 단일 점 커밋/열기/검증.

**KZG 커밋먼트란?**
  다항식 p(x)에 대한 간결한 "지문"(커밋먼트)을 G1 점 하나로 만든다.
  - 커밋먼트: C = p(τ)·G1 (τ는 SRS의 비밀 값)
  - 바인딩(binding): 이산로그 가정 하에 다른 다항식으로 바꿀 수 없음
  - 하이딩(hiding): 커밋먼트에서 원래 다항식을 복원할 수 없음

**열기 증명 (Opening Proof)**:
  "p(z) = y" 임을 증명하는 방법:
  1. 몫 다항식 q(x) = (p(x) - y) / (x - z) 계산
     (p(z) = y이면 (x-z)가 (p(x)-y)를 나누므로 q(x)는 다항식)
  2. 증명 π = q(τ)·G1
  3. 검증: e(C - y·G1, G2) == e(π, τ·G2 - z·G2)

**검증 실패는 예외가 아니다**:
  verify는 잘못된 증명에 대해 False를 반환한다.
  예외는 요청 자체가 잘못된 경우(차수 초과 등)에만 발생한다.

사용 예시:
    >>> from pcs.kzg.kzg import commit, open_at, verify
    >>> C = commit(srs, poly)
    >>> proof = open_at(srs, poly, FR(7))
    >>> verify(srs, C, proof)  # True
"""

import logging
from dataclasses import dataclass
from functools import partial

from pcs.errors import DegreeExceeded
from pcs.kzg.field import FR, to_fr, ec_mul, ec_sub, ec_neg, msm, pairing_product, is_g1_point
from pcs.kzg.polynomial import divide_by_linear

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OpeningProof:
    """단일 점 평가 주장과 그 증명.

    속성:
        point: 평가 점 z (FR)
        value: 주장하는 평가값 y = p(z) (FR)
        witness: 증명 π = q(τ)·G1 (G1 점)
    """
    point: FR
    value: FR
    witness: tuple


def commit(srs, poly, executor=None):
    """다항식을 KZG 커밋한다.

    C = Σᵢ cᵢ · [τⁱ]₁ = p(τ) · G1

    Args:
        srs: SRS
        poly: 커밋할 다항식 (Polynomial)
        executor: 선택. MSM 항을 병렬로 계산할 Executor

    Returns:
        G1 점: 커밋먼트 C (영 다항식이면 None)

    Raises:
        DegreeExceeded: 다항식 차수가 SRS 최대 차수를 초과할 때
    """
    if poly.degree > srs.max_degree:
        raise DegreeExceeded(
            f"다항식 차수 {poly.degree}가 SRS 최대 차수 {srs.max_degree}를 초과합니다"
        )
    return msm(srs.g1_powers[:len(poly.coeffs)], poly.coeffs, executor=executor)


def commit_g2(srs, poly):
    """다항식을 G2 쪽 거듭제곱으로 커밋한다: p(τ)·G2.

    배치 검증에서 소거 다항식 Z_S(τ)·G2를 만드는 데 쓴다.

    Raises:
        DegreeExceeded: 차수가 G2 거듭제곱 개수를 초과할 때
    """
    if poly.degree > srs.max_batch_size:
        raise DegreeExceeded(
            f"G2 커밋에 필요한 차수 {poly.degree}가 SRS의 G2 용량 {srs.max_batch_size}를 초과합니다"
        )
    return msm(srs.g2_powers[:len(poly.coeffs)], poly.coeffs)


def open_at(srs, poly, point):
    """점 z에서의 열기 증명을 생성한다.

    y = p(z), q(x) = (p(x) - y) / (x - z), π = commit(q).

    p(x) - y는 z를 근으로 가지므로 나머지는 항상 0이다.
    조립제법의 나머지가 바로 p(z)이므로 평가와 나눗셈을 한 번에 끝낸다.

    Args:
        srs: SRS
        poly: 열어볼 다항식 p(x)
        point: 평가 점 z (FR 또는 정수)

    Returns:
        OpeningProof

    Raises:
        DegreeExceeded: 다항식 차수가 SRS 최대 차수를 초과할 때
    """
    point = to_fr(point)
    if poly.degree > srs.max_degree:
        raise DegreeExceeded(
            f"다항식 차수 {poly.degree}가 SRS 최대 차수 {srs.max_degree}를 초과합니다"
        )

    quotient, value = divide_by_linear(poly, point)
    witness = commit(srs, quotient)
    logger.debug("열기 증명 생성: deg=%d, z=%d", poly.degree, int(point))
    return OpeningProof(point=point, value=value, witness=witness)


def open_many(srs, poly, points, executor=None):
    """여러 점에서 독립적인 단일 점 열기 증명을 만든다.

    점마다 작업이 독립이므로 executor가 있으면 병렬로 처리한다.
    결과 순서는 points 순서와 같다.
    """
    if executor is None:
        return [open_at(srs, poly, z) for z in points]
    return list(executor.map(partial(open_at, srs, poly), points))


def verify(srs, commitment, proof):
    """KZG 열기 증명을 검증한다.

    검증 방정식 (페어링):
        e(C - y·G1, G2) == e(π, τ·G2 - z·G2)

    한 번의 페어링 곱 검사로 바꿔 쓴다:
        e(C - y·G1, G2) · e(-π, τ·G2 - z·G2) == 1

    Args:
        srs: SRS
        commitment: 다항식 커밋먼트 C (G1 점)
        proof: OpeningProof

    Returns:
        bool: 검증 성공 여부. 커밋먼트나 증인이 곡선 밖의 점이면 False.
    """
    if not (is_g1_point(commitment) and is_g1_point(proof.witness)):
        logger.debug("열기 증명 거부: 곡선 밖의 점")
        return False

    g1 = srs.g1_powers[0]
    g2 = srs.g2_powers[0]

    # [τ - z]₂
    tau_minus_z_g2 = ec_sub(srs.tau_g2, ec_mul(g2, proof.point))
    # C - y·G1
    c_minus_y = ec_sub(commitment, ec_mul(g1, proof.value))

    result = pairing_product([
        (c_minus_y, g2),
        (ec_neg(proof.witness), tau_minus_z_g2),
    ])
    ok = result == result.one()
    if not ok:
        logger.debug("열기 증명 거부: z=%d", int(proof.point))
    return ok
