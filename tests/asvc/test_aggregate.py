"""
Cross-position / cross-commitment proof aggregation tests.
"""

import importlib

import pytest
from py_ecc.fields import bn128_FQ as FQ
from pcs.errors import EmptyClaimSet, IndexOutOfRange, InconsistentClaim
from pcs.kzg.field import FR
from pcs.asvc.vector import commit_vector, prove_positions, prove_subvector
from pcs.asvc.aggregate import (
    Claim, PositionClaim, AggregatedProof,
    aggregate, verify_aggregated, aggregation_challenge,
)

# pcs.asvc.aggregate 속성은 aggregate 함수로 덮여 있으므로 모듈은 따로 가져온다.
aggregate_module = importlib.import_module("pcs.asvc.aggregate")


@pytest.fixture(scope="module")
def vc_a(srs, domain, vector):
    return commit_vector(srs, domain, vector)


@pytest.fixture(scope="module")
def vc_b(srs, domain):
    return commit_vector(srs, domain, [10, 20, 30, 40, 50, 60, 70, 80])


@pytest.fixture(scope="module")
def proofs_a(srs, domain, keys, vc_a):
    return prove_positions(srs, domain, vc_a.values, range(8), keys=keys)


@pytest.fixture(scope="module")
def proofs_b(srs, domain, keys, vc_b):
    return prove_positions(srs, domain, vc_b.values, range(8), keys=keys)


def _claims(vc, proofs, indices):
    return [PositionClaim(vc.commitment, i, vc.values[i], proofs[i]) for i in indices]


# ─────────────────────────────────────────────────────────────────────
# 단일 커밋먼트
# ─────────────────────────────────────────────────────────────────────

class TestSingleCommitment:
    """한 벡터의 여러 위치 집계."""

    def test_round_trip(self, srs, domain, vc_a, proofs_a):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [1, 4, 6]))
        assert len(agg.witnesses) == 1
        assert agg.domain_size == 8
        assert verify_aggregated(srs, agg) is True

    def test_witness_equals_subvector_proof(self, srs, domain, vc_a, proofs_a):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [6, 1, 4]))
        assert agg.witnesses[0] == prove_subvector(srs, domain, vc_a.values, [1, 4, 6]).witness

    def test_claims_are_canonical(self, domain, vc_a, proofs_a):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [6, 1, 4]))
        assert [c.index for c in agg.claims] == [1, 4, 6]
        assert agg.claims[0] == Claim(vc_a.commitment, 1, vc_a.values[1])

    def test_accepts_bare_witnesses(self, domain, vc_a, proofs_a):
        with_proofs = aggregate(domain, _claims(vc_a, proofs_a, [2, 3]))
        bare = aggregate(domain, [
            PositionClaim(vc_a.commitment, i, vc_a.values[i], proofs_a[i].witness) for i in (2, 3)
        ])
        assert bare == with_proofs

    def test_repeated_claim_is_merged(self, domain, vc_a, proofs_a):
        once = aggregate(domain, _claims(vc_a, proofs_a, [2, 5]))
        twice = aggregate(domain, _claims(vc_a, proofs_a, [2, 5, 2]))
        assert twice == once

    def test_flipped_value_rejected(self, srs, domain, vc_a, proofs_a):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [1, 4]))
        claims = list(agg.claims)
        claims[1] = Claim(claims[1].commitment, claims[1].index, claims[1].value + 1)
        forged = AggregatedProof(claims=tuple(claims), witnesses=agg.witnesses, domain_size=8)
        assert verify_aggregated(srs, forged) is False

    def test_forged_input_proof_rejected(self, srs, domain, vc_a, proofs_a):
        claims = _claims(vc_a, proofs_a, [1, 4])
        claims[0] = PositionClaim(vc_a.commitment, 1, vc_a.values[1], proofs_a[2])
        assert verify_aggregated(srs, aggregate(domain, claims)) is False


# ─────────────────────────────────────────────────────────────────────
# 여러 커밋먼트
# ─────────────────────────────────────────────────────────────────────

class TestMultipleCommitments:
    """여러 벡터에 걸친 집계."""

    def test_same_index_set_single_witness(self, srs, domain, vc_a, vc_b, proofs_a, proofs_b):
        claims = _claims(vc_a, proofs_a, [0, 3]) + _claims(vc_b, proofs_b, [3, 0])
        agg = aggregate(domain, claims)
        assert len(agg.witnesses) == 1
        assert len(agg.claims) == 4
        assert verify_aggregated(srs, agg) is True

    def test_different_index_sets(self, srs, domain, vc_a, vc_b, proofs_a, proofs_b):
        claims = _claims(vc_a, proofs_a, [2]) + _claims(vc_b, proofs_b, [5, 7])
        agg = aggregate(domain, claims)
        assert len(agg.witnesses) == 2
        assert verify_aggregated(srs, agg) is True

    def test_swapped_values_rejected(self, srs, domain, vc_a, vc_b, proofs_a, proofs_b):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [3]) + _claims(vc_b, proofs_b, [3]))
        a, b = agg.claims
        swapped = (Claim(a.commitment, 3, b.value), Claim(b.commitment, 3, a.value))
        forged = AggregatedProof(claims=swapped, witnesses=agg.witnesses, domain_size=8)
        assert verify_aggregated(srs, forged) is False

    def test_commitment_order_preserved(self, domain, vc_a, vc_b, proofs_a, proofs_b):
        agg = aggregate(domain, _claims(vc_b, proofs_b, [1]) + _claims(vc_a, proofs_a, [1]))
        assert [c.commitment for c in agg.claims] == [vc_b.commitment, vc_a.commitment]


# ─────────────────────────────────────────────────────────────────────
# 챌린지와 오류
# ─────────────────────────────────────────────────────────────────────

class TestChallenge:
    def test_explicit_challenge(self, srs, domain, vc_a, vc_b, proofs_a, proofs_b):
        claims = _claims(vc_a, proofs_a, [4]) + _claims(vc_b, proofs_b, [6])
        agg = aggregate(domain, claims, challenge=12345)
        assert verify_aggregated(srs, agg, challenge=12345) is True
        assert verify_aggregated(srs, agg, challenge=54321) is False

    def test_fiat_shamir_challenge_depends_on_claims(self, vc_a):
        c1 = aggregation_challenge(8, [Claim(vc_a.commitment, 1, FR(2))])
        c2 = aggregation_challenge(8, [Claim(vc_a.commitment, 1, FR(3))])
        c3 = aggregation_challenge(16, [Claim(vc_a.commitment, 1, FR(2))])
        assert len({int(c1), int(c2), int(c3)}) == 3


class TestAggregateErrors:
    """구성 단계 오류와 검증 단계 거부."""

    def test_empty(self, domain):
        with pytest.raises(EmptyClaimSet):
            aggregate(domain, [])

    def test_index_out_of_range(self, domain, vc_a, proofs_a):
        with pytest.raises(IndexOutOfRange):
            aggregate(domain, [PositionClaim(vc_a.commitment, 8, 1, proofs_a[0])])

    def test_conflicting_claims(self, domain, vc_a, proofs_a):
        claims = _claims(vc_a, proofs_a, [2])
        claims.append(PositionClaim(vc_a.commitment, 2, vc_a.values[2] + 1, proofs_a[2]))
        with pytest.raises(InconsistentClaim):
            aggregate(domain, claims)

    def test_verify_empty_claims(self, srs):
        assert verify_aggregated(srs, AggregatedProof(claims=(), witnesses=(), domain_size=8)) is False

    def test_verify_bad_domain_size(self, srs, domain, vc_a, proofs_a):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [1]))
        forged = AggregatedProof(claims=agg.claims, witnesses=agg.witnesses, domain_size=6)
        assert verify_aggregated(srs, forged) is False

    def test_verify_bad_index(self, srs, vc_a):
        forged = AggregatedProof(claims=(Claim(vc_a.commitment, 9, FR(1)),), witnesses=(None,), domain_size=8)
        assert verify_aggregated(srs, forged) is False

    def test_verify_conflicting_claims(self, srs, vc_a):
        claims = (Claim(vc_a.commitment, 1, FR(2)), Claim(vc_a.commitment, 1, FR(3)))
        forged = AggregatedProof(claims=claims, witnesses=(None,), domain_size=8)
        assert verify_aggregated(srs, forged) is False

    def test_verify_witness_count_mismatch(self, srs, domain, vc_a, proofs_a):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [1, 2]))
        forged = AggregatedProof(claims=agg.claims, witnesses=agg.witnesses * 2, domain_size=8)
        assert verify_aggregated(srs, forged) is False

    @pytest.mark.parametrize("domain_size", [32, 1 << 18, 1 << 28])
    def test_verify_domain_larger_than_srs(self, srs, domain_size, monkeypatch):
        """SRS로 커밋할 수 없는 크기의 도메인은 Domain을 만들기 전에 거부한다."""
        def fail(*args, **kwargs):
            raise AssertionError("큰 도메인의 단위근을 계산했습니다")

        monkeypatch.setattr(aggregate_module, "Domain", fail)
        forged = AggregatedProof(claims=(Claim(None, 0, FR(1)),), witnesses=(None,), domain_size=domain_size)
        assert verify_aggregated(srs, forged) is False

    def test_verify_off_curve_witness(self, srs, domain, vc_a, proofs_a):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [1, 2]))
        forged = AggregatedProof(claims=agg.claims, witnesses=((FQ(1), FQ(3)),), domain_size=8)
        assert verify_aggregated(srs, forged) is False

    def test_verify_off_curve_commitment(self, srs, domain, vc_a, proofs_a):
        agg = aggregate(domain, _claims(vc_a, proofs_a, [1]))
        claim = agg.claims[0]
        forged = AggregatedProof(
            claims=(Claim((FQ(1), FQ(3)), claim.index, claim.value),),
            witnesses=agg.witnesses,
            domain_size=8,
        )
        assert verify_aggregated(srs, forged) is False
