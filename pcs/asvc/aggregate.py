"""
aSVC 증명 집계 (여러 위치, 여러 커밋먼트)
==========================================

독립적인 위치 증명 m개 {(C_t, i_t, v_t, π_t)}를 증명 하나로 합친다.
증명 크기는 m과 무관하고, 검증은 페어링 곱 검사 한 번이다.

**1단계: 커밋먼트별 부분벡터 집계**
  같은 커밋먼트 C에 대한 위치 집합 I의 증명들을
  π_C = Σ_{i∈I} πᵢ / A_I'(ω^i)  로 합친다.
  π_C는 C를 I에서 연 배치 증명과 같으며 다음을 만족한다.
      e(C - [I_C(τ)]₁, G2) == e(π_C, [A_I(τ)]₂)

**2단계: 커밋먼트 간 무작위 선형결합**
  챌린지 r로 t번째 커밋먼트의 방정식에 r^t를 곱해 더한다.
      e(Σ_t r^t·(C_t - [I_t(τ)]₁), G2) == Π_J e(W_J, [A_J(τ)]₂)
  여기서 W_J = Σ_{t: I_t = J} r^t·π_{C_t} 이다.
  모든 커밋먼트를 같은 위치 집합에서 열면 (벡터가 하나인 경우 포함)
  증인 W는 G1 점 하나뿐이다. 위치 집합이 다르면 집합마다 하나씩 남는다.

**챌린지**:
  r은 검증자가 직접 줄 수도 있고, 주장(커밋먼트, 위치, 값)의
  Fiat-Shamir 해시로 도출할 수도 있다.

**주의**:
  aggregate는 입력 증명을 다시 검증하지 않는다. 신뢰할 수 없는 증명은
  먼저 verify_position으로 확인해야 한다. 집계 검증이 실패해도 어느 주장이
  틀렸는지는 알 수 없다. 필요하면 개별 검증으로 돌아가야 한다.

사용 예시:
    >>> claims = [PositionClaim(vc.commitment, i, vc.values[i], proofs[i]) for i in (1, 4)]
    >>> agg = aggregate(domain, claims)
    >>> verify_aggregated(srs, agg)  # True
"""

import logging
from dataclasses import dataclass

from pcs.asvc.domain import Domain
from pcs.asvc.vector import aggregate_subvector
from pcs.errors import EmptyClaimSet, InconsistentClaim
from pcs.kzg.field import (
    FR, MAX_TWO_ADICITY, to_fr, ec_add, ec_mul, ec_neg, ec_sub, pairing_product, is_g1_point,
)
from pcs.kzg.kzg import commit, commit_g2
from pcs.kzg.polynomial import interpolate, vanishing_polynomial
from pcs.kzg.transcript import Transcript

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Claim:
    """집계 증명이 보증하는 (커밋먼트, 위치, 값) 삼중항."""
    commitment: tuple
    index: int
    value: FR


@dataclass(frozen=True)
class PositionClaim:
    """집계 입력: 삼중항과 그 위치 증명 (OpeningProof 또는 G1 증인)."""
    commitment: tuple
    index: int
    value: object
    proof: object


@dataclass(frozen=True)
class AggregatedProof:
    """집계 증명.

    증인 크기는 주장 개수와 무관하지만, 서로 다른 위치 집합의 개수에는
    비례한다. 모든 커밋먼트를 같은 위치 집합에서 열면 (벡터 하나 포함)
    witnesses는 G1 점 하나이고, 위치 집합이 k가지면 k개가 된다.
    한 점으로 합치면 위치 집합마다 다른 [A_J(τ)]₂ 때문에 검증식을
    세울 수 없다.

    속성:
        claims: 보증하는 Claim 튜플 (커밋먼트 등장 순, 커밋먼트 안에서는 위치 오름차순)
        witnesses: 서로 다른 위치 집합마다 G1 점 하나 (등장 순)
        domain_size: 도메인 크기 n
    """
    claims: tuple
    witnesses: tuple
    domain_size: int


# ─────────────────────────────────────────────────────────────────────
# 공통 헬퍼
# ─────────────────────────────────────────────────────────────────────

def _witness_of(proof):
    return getattr(proof, "witness", proof)


def _group_by_commitment(entries):
    """(commitment, index, value, extra) 목록을 커밋먼트별로 묶는다.

    커밋먼트는 처음 등장한 순서를 유지하고, 묶음 안은 위치 오름차순으로 정렬한다.
    같은 (커밋먼트, 위치)가 같은 값으로 반복되면 하나만 남기고,
    다른 값이면 InconsistentClaim.

    Returns:
        list of (commitment, [(index, value, extra), ...])
    """
    groups = []
    for commitment, index, value, extra in entries:
        for group_commitment, members in groups:
            if group_commitment == commitment:
                break
        else:
            members = {}
            groups.append((commitment, members))
        if index in members:
            if members[index][0] != value:
                raise InconsistentClaim(
                    f"같은 커밋먼트의 위치 {index}에 서로 다른 값이 주장되었습니다"
                )
            continue
        members[index] = (value, extra)

    return [
        (commitment, [(i, members[i][0], members[i][1]) for i in sorted(members)])
        for commitment, members in groups
    ]


def _index_set_slots(groups):
    """커밋먼트 묶음마다 위치 집합 슬롯 번호를 매긴다 (같은 집합 → 같은 슬롯)."""
    index_sets = []
    slots = []
    for _, members in groups:
        key = tuple(i for i, _, _ in members)
        if key not in index_sets:
            index_sets.append(key)
        slots.append(index_sets.index(key))
    return index_sets, slots


def aggregation_challenge(domain_size, claims):
    """주장들로부터 Fiat-Shamir 챌린지 r을 도출한다."""
    transcript = Transcript(b"asvc-aggregate")
    transcript.append_int(b"n", domain_size)
    for claim in claims:
        transcript.append_claim(claim.commitment, claim.index, claim.value)
    return transcript.challenge_scalar(b"r")


# ─────────────────────────────────────────────────────────────────────
# 집계
# ─────────────────────────────────────────────────────────────────────

def aggregate(domain, claims, challenge=None):
    """위치 증명들을 하나의 집계 증명으로 합친다.

    Args:
        domain: 모든 벡터가 공유하는 Domain
        claims: PositionClaim 리스트
        challenge: 선택. 검증자가 준 r. None이면 Fiat-Shamir로 도출한다.

    Returns:
        AggregatedProof

    Raises:
        EmptyClaimSet: claims가 비었을 때
        IndexOutOfRange: 위치가 [0, n)을 벗어날 때
        InconsistentClaim: 같은 (커밋먼트, 위치)에 다른 값이 주장될 때
    """
    claims = list(claims)
    if not claims:
        raise EmptyClaimSet("집계할 주장이 없습니다")

    entries = []
    for claim in claims:
        domain.check_index(claim.index)
        entries.append((claim.commitment, claim.index, to_fr(claim.value), _witness_of(claim.proof)))
    groups = _group_by_commitment(entries)

    canonical = tuple(
        Claim(commitment=commitment, index=i, value=v)
        for commitment, members in groups
        for i, v, _ in members
    )
    r = to_fr(challenge) if challenge is not None else aggregation_challenge(domain.size, canonical)

    index_sets, slots = _index_set_slots(groups)
    witnesses = [None] * len(index_sets)
    weight = FR(1)
    for (commitment, members), slot in zip(groups, slots):
        indices = [i for i, _, _ in members]
        pi_c = aggregate_subvector(domain, indices, [w for _, _, w in members])
        witnesses[slot] = ec_add(witnesses[slot], ec_mul(pi_c, weight))
        weight = weight * r

    logger.debug(
        "증명 집계: 주장 %d개, 커밋먼트 %d개, 증인 %d개",
        len(canonical), len(groups), len(witnesses),
    )
    return AggregatedProof(claims=canonical, witnesses=tuple(witnesses), domain_size=domain.size)


def _valid_domain_size(n):
    return isinstance(n, int) and 1 <= n <= (1 << MAX_TWO_ADICITY) and (n & (n - 1)) == 0


def verify_aggregated(srs, aggregated, challenge=None):
    """집계 증명을 검증한다.

    e(Σ_t r^t·(C_t - [I_t(τ)]₁), G2) · Π_J e(-W_J, [A_J(τ)]₂) == 1

    Args:
        srs: SRS
        aggregated: AggregatedProof
        challenge: 선택. aggregate에 준 것과 같은 r

    Returns:
        bool. 주장 중 하나라도 틀리면 False (어느 것인지는 알 수 없다).
        도메인이 SRS로 커밋할 수 있는 크기보다 크거나, 커밋먼트/증인이
        곡선 밖의 점이어도 False.

    Raises:
        DegreeExceeded: 위치 집합 크기가 SRS의 G2 용량을 초과할 때
    """
    if not aggregated.claims or not _valid_domain_size(aggregated.domain_size):
        return False
    # 이 SRS로 만든 벡터는 n - 1 ≤ d 이다. 큰 n으로 Domain을 만들기 전에 거른다.
    if aggregated.domain_size - 1 > srs.max_degree:
        logger.debug("집계 증명 거부: 도메인 크기 %d > SRS 용량", aggregated.domain_size)
        return False
    if not all(is_g1_point(w) for w in aggregated.witnesses):
        return False
    domain = Domain(aggregated.domain_size)

    entries = []
    for claim in aggregated.claims:
        index = claim.index
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < domain.size:
            return False
        if not is_g1_point(claim.commitment):
            return False
        entries.append((claim.commitment, index, to_fr(claim.value), None))
    try:
        groups = _group_by_commitment(entries)
    except InconsistentClaim:
        return False

    index_sets, slots = _index_set_slots(groups)
    if len(index_sets) != len(aggregated.witnesses):
        return False

    canonical = tuple(
        Claim(commitment=commitment, index=i, value=v)
        for commitment, members in groups
        for i, v, _ in members
    )
    r = to_fr(challenge) if challenge is not None else aggregation_challenge(domain.size, canonical)

    combined = None
    weight = FR(1)
    for commitment, members in groups:
        points = [domain.point(i) for i, _, _ in members]
        interp_g1 = commit(srs, interpolate(points, [v for _, v, _ in members]))
        combined = ec_add(combined, ec_mul(ec_sub(commitment, interp_g1), weight))
        weight = weight * r

    pairs = [(combined, srs.g2_powers[0])]
    for index_set, witness in zip(index_sets, aggregated.witnesses):
        z_g2 = commit_g2(srs, vanishing_polynomial([domain.point(i) for i in index_set]))
        pairs.append((ec_neg(witness), z_g2))

    result = pairing_product(pairs)
    ok = result == result.one()
    if not ok:
        logger.debug("집계 증명 거부: 주장 %d개", len(canonical))
    return ok
