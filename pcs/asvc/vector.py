"""
aSVC 벡터 커밋먼트
===================

KZG 위에 구축한 벡터 커밋먼트. 벡터 v를 도메인 위의 평가값으로 보고
보간 다항식 p(ω^i) = vᵢ 를 KZG로 커밋한다.

**연산**:
  - commit_vector: C = commit(p)
  - prove_position: p를 ω^i에서 연 KZG 단일 점 증명
  - verify_position: z = ω^i 로 KZG verify
  - update: C' = C + δ·[L_i(τ)]₁   (전체 MSM 재계산 없음)
  - update_proof: 기존 위치 증명을 같은 δ로 보정
  - prove_subvector / verify_subvector: 여러 위치를 배치 열기로 증명
  - aggregate_subvector: 위치별 증명 πᵢ를 부분벡터 증명 하나로 집계

**갱신과 오래된 증명**:
  vᵢ가 바뀌면 모든 위치의 기존 증명이 새 커밋먼트에 대해 무효가 된다.
  update_proof로 보정하거나 새로 증명해야 한다.

사용 예시:
    >>> domain = Domain(8)
    >>> vc = commit_vector(srs, domain, [1, 2, 3, 4, 5, 6, 7, 8])
    >>> proof = prove_position(srs, domain, vc.values, 3)
    >>> verify_position(srs, domain, vc.commitment, 3, 4, proof)  # True
"""

import logging
from dataclasses import dataclass, replace
from functools import partial

from pcs.errors import DegreeExceeded
from pcs.kzg.field import FR, to_fr, ec_add, ec_mul, ec_sub, ec_sum, msm
from pcs.kzg.kzg import OpeningProof, commit, open_at, verify
from pcs.kzg.batch import BatchProof, open_batch, verify_batch
from pcs.kzg.polynomial import vanishing_polynomial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VectorCommitment:
    """커밋된 벡터와 그 커밋먼트.

    values는 유지 관리자만 update()로 바꾸며, update는 새 인스턴스를 반환한다.
    """
    domain: object
    commitment: tuple
    values: tuple


def _check_capacity(srs, domain):
    if domain.size - 1 > srs.max_degree:
        raise DegreeExceeded(
            f"도메인 크기 {domain.size}에는 {domain.size - 1}차 다항식이 필요하지만 "
            f"SRS 최대 차수는 {srs.max_degree}입니다"
        )


# ─────────────────────────────────────────────────────────────────────
# 커밋
# ─────────────────────────────────────────────────────────────────────

def commit_vector(srs, domain, values):
    """벡터를 커밋한다.

    Args:
        srs: SRS
        domain: Domain (크기 n)
        values: 길이 n의 FR(또는 정수) 리스트

    Returns:
        VectorCommitment

    Raises:
        ValueError: 길이가 n과 다를 때
        DegreeExceeded: n - 1 > SRS 최대 차수
    """
    _check_capacity(srs, domain)
    values = tuple(to_fr(v) for v in values)
    poly = domain.interpolate(values)
    commitment = commit(srs, poly)
    logger.debug("벡터 커밋: n=%d", domain.size)
    return VectorCommitment(domain=domain, commitment=commitment, values=values)


# ─────────────────────────────────────────────────────────────────────
# 위치 증명
# ─────────────────────────────────────────────────────────────────────

def _inner_quotient_evals(domain, values, index):
    """q(x) = (p(x) - vᵢ)/(x - ω^i)를 도메인 위의 평가값으로 계산한다.

    j ≠ i: q(ω^j) = (v_j - v_i) / (ω^j - ω^i)
    j = i: q(ω^i) = p'(ω^i) = -Σ_{j≠i} ω^{j-i}·q(ω^j)
    """
    n = domain.size
    roots = domain.roots
    y = values[index]
    q = [FR(0)] * n
    for j in range(n):
        if j == index:
            continue
        q[j] = (values[j] - y) / (roots[j] - roots[index])
        q[index] = q[index] - roots[(j - index) % n] * q[j]
    return q


def prove_position(srs, domain, values, index, keys=None):
    """위치 index의 값에 대한 증명.

    keys가 있으면 Lagrange 형태 SRS로 몫을 평가값 형태로 바로 커밋한다.
    없으면 다항식을 보간해 open_at을 쓴다. 두 경로의 결과는 같다.

    Args:
        srs: SRS
        domain: Domain
        values: 길이 n 벡터
        index: 위치 i
        keys: 선택. VectorKeys

    Returns:
        OpeningProof (point = ω^i)

    Raises:
        IndexOutOfRange: index ∉ [0, n)
    """
    point = domain.point(index)
    _check_capacity(srs, domain)
    values = [to_fr(v) for v in values]
    if len(values) != domain.size:
        raise ValueError(f"벡터 길이 {len(values)}가 도메인 크기 {domain.size}와 다릅니다")

    if keys is not None:
        q_evals = _inner_quotient_evals(domain, values, index)
        witness = msm(keys.lagrange_g1, q_evals)
        return OpeningProof(point=point, value=values[index], witness=witness)

    return open_at(srs, domain.interpolate(values), point)


def prove_positions(srs, domain, values, indices, keys=None, executor=None):
    """여러 위치의 증명을 독립 작업으로 만든다 (executor가 있으면 병렬)."""
    for index in indices:
        domain.check_index(index)
    work = partial(prove_position, srs, domain, values, keys=keys)
    if executor is None:
        return [work(i) for i in indices]
    return list(executor.map(work, indices))


def verify_position(srs, domain, commitment, index, value, proof):
    """위치 증명을 검증한다: z = ω^i 로 KZG verify.

    Returns:
        bool. 증명의 점이 ω^i가 아니면 False.

    Raises:
        IndexOutOfRange: index ∉ [0, n)
    """
    point = domain.point(index)
    if to_fr(proof.point) != point:
        return False
    claim = OpeningProof(point=point, value=to_fr(value), witness=proof.witness)
    return verify(srs, commitment, claim)


# ─────────────────────────────────────────────────────────────────────
# 갱신
# ─────────────────────────────────────────────────────────────────────

def update(srs, vc, index, new_value, keys=None):
    """vᵢ를 new_value로 바꾼 새 VectorCommitment를 반환한다.

    p'(x) = p(x) + δ·L_i(x) 이므로 C' = C + δ·[L_i(τ)]₁ (δ = new - old).
    [L_i(τ)]₁는 keys에 있으면 그대로 쓰고, 없으면 SRS가 보관하는
    Lagrange 형태 점에서 꺼낸다. 어느 쪽이든 갱신 한 번은 스칼라곱 한 번이다.

    Raises:
        IndexOutOfRange: index ∉ [0, n)
    """
    domain = vc.domain
    domain.check_index(index)
    new_value = to_fr(new_value)
    delta = new_value - vc.values[index]

    if keys is not None:
        lagrange_i = keys.lagrange_g1[index]
    else:
        lagrange_i = srs.lagrange_g1(domain)[index]

    commitment = ec_add(vc.commitment, ec_mul(lagrange_i, delta))
    values = list(vc.values)
    values[index] = new_value
    logger.debug("벡터 갱신: index=%d", index)
    return replace(vc, commitment=commitment, values=tuple(values))


def update_proof(keys, proof, proof_index, changed_index, delta):
    """위치 changed_index가 δ만큼 바뀐 뒤, 위치 proof_index의 증명을 보정한다.

    j = i:  π' = π + δ·[u_i]₁,                         값은 y + δ
    j ≠ i:  π' = π + δ·(ω^i/n)/(ω^i - ω^j)·([A_i]₁ - [A_j]₁), 값은 그대로

    Args:
        keys: VectorKeys
        proof: 위치 proof_index의 기존 OpeningProof
        proof_index: j
        changed_index: i
        delta: new_value - old_value

    Returns:
        OpeningProof
    """
    domain = keys.domain
    domain.check_index(proof_index)
    domain.check_index(changed_index)
    delta = to_fr(delta)

    if proof_index == changed_index:
        witness = ec_add(proof.witness, ec_mul(keys.update_g1[changed_index], delta))
        return OpeningProof(point=proof.point, value=to_fr(proof.value) + delta, witness=witness)

    w_i = domain.point(changed_index)
    w_j = domain.point(proof_index)
    coeff = delta * (w_i / FR(domain.size)) / (w_i - w_j)
    diff = ec_sub(keys.vanishing_quotient_g1[changed_index], keys.vanishing_quotient_g1[proof_index])
    witness = ec_add(proof.witness, ec_mul(diff, coeff))
    return OpeningProof(point=proof.point, value=proof.value, witness=witness)


# ─────────────────────────────────────────────────────────────────────
# 부분벡터 (여러 위치)
# ─────────────────────────────────────────────────────────────────────

def prove_subvector(srs, domain, values, indices):
    """여러 위치 I의 값을 배치 열기 증명 하나로 증명한다.

    Raises:
        IndexOutOfRange, InconsistentClaim (중복 위치), EmptyClaimSet
    """
    points = [domain.point(i) for i in indices]
    _check_capacity(srs, domain)
    values = [to_fr(v) for v in values]
    poly = domain.interpolate(values)
    return open_batch(srs, poly, points, [values[i] for i in indices])


def verify_subvector(srs, domain, commitment, indices, subvector, proof):
    """부분벡터 증명을 검증한다.

    Returns:
        bool. 증명의 점이 {ω^i}와 다르면 False.
    """
    points = tuple(domain.point(i) for i in indices)
    if len(subvector) != len(points) or tuple(to_fr(p) for p in proof.points) != points:
        return False
    claim = BatchProof(points=points, values=tuple(to_fr(v) for v in subvector), witness=proof.witness)
    return verify_batch(srs, commitment, claim)


def subvector_coefficients(domain, indices):
    """집계 계수 cᵢ = 1 / A_I'(ω^i),  A_I(x) = Π_{i∈I} (x - ω^i)."""
    points = [domain.point(i) for i in indices]
    a_prime = vanishing_polynomial(points).derivative()
    return [FR(1) / a_prime.evaluate(p) for p in points]


def aggregate_subvector(domain, indices, witnesses):
    """위치별 증명 πᵢ를 부분벡터 증명 π_I = Σ cᵢ·πᵢ 로 집계한다.

    1/A_I(x) = Σ cᵢ/(x - ω^i) 이므로
    Σ cᵢ·(p(x) - vᵢ)/(x - ω^i) = (p(x) - I(x))/A_I(x) 이고,
    결과는 prove_subvector가 만드는 배치 증명과 같은 점이다.

    Raises:
        ValueError: indices와 witnesses 길이가 다를 때
    """
    if len(indices) != len(witnesses):
        raise ValueError(f"위치 {len(indices)}개와 증명 {len(witnesses)}개의 개수가 다릅니다")
    coeffs = subvector_coefficients(domain, indices)
    return ec_sum([ec_mul(w, c) for w, c in zip(witnesses, coeffs)])
