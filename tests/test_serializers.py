"""
JSON codec tests for pcs_serializers.
"""

import json

import pytest
from pcs.errors import InvalidPoint
from pcs.kzg.field import FR, G1, G2, ec_mul
from pcs.kzg.polynomial import Polynomial
from pcs.kzg.srs import SRS
from pcs.kzg.kzg import open_at
from pcs.kzg.batch import open_batch
from pcs.asvc.domain import Domain
from pcs.asvc.vector import commit_vector, prove_position
from pcs.asvc.aggregate import PositionClaim, aggregate

from pcs_serializers import (
    serialize_fr, deserialize_fr,
    serialize_g1, deserialize_g1,
    serialize_g2, deserialize_g2,
    serialize_poly,
    serialize_srs, deserialize_srs,
    serialize_opening_proof, deserialize_opening_proof,
    serialize_batch_proof, deserialize_batch_proof,
    serialize_vector_commitment, deserialize_vector_commitment,
    serialize_aggregated_proof, deserialize_aggregated_proof,
    g1_short, fr_short,
)


@pytest.fixture(scope="module")
def small_srs():
    return SRS.generate(max_degree=4, seed=7, g2_degree=2)


def _through_json(data):
    return json.loads(json.dumps(data))


class TestPrimitives:
    def test_fr(self):
        assert serialize_fr(FR(123)) == "123"
        assert deserialize_fr("123") == FR(123)
        assert deserialize_fr(5) == FR(5)

    def test_g1(self):
        P = ec_mul(G1, 9)
        assert deserialize_g1(_through_json(serialize_g1(P))) == P

    def test_g1_identity(self):
        assert serialize_g1(None) is None
        assert deserialize_g1(None) is None

    def test_g2(self):
        Q = ec_mul(G2, 4)
        assert deserialize_g2(_through_json(serialize_g2(Q))) == Q

    def test_g1_off_curve(self):
        with pytest.raises(InvalidPoint):
            deserialize_g1(["1", "3"])

    def test_g2_off_curve(self):
        data = serialize_g2(G2)
        data[1] = data[0]
        with pytest.raises(InvalidPoint):
            deserialize_g2(data)

    def test_opening_proof_off_curve_witness(self):
        with pytest.raises(InvalidPoint):
            deserialize_opening_proof({"point": "1", "value": "2", "witness": ["1", "3"]})

    def test_poly(self):
        p = Polynomial([1, 0, 5])
        assert serialize_poly(p) == ["1", "0", "5"]
        assert serialize_poly(None) is None


class TestStructures:
    """SRS와 증명 객체."""

    def test_srs(self, small_srs):
        loaded = deserialize_srs(_through_json(serialize_srs(small_srs)))
        assert loaded.g1_powers == small_srs.g1_powers
        assert loaded.g2_powers == small_srs.g2_powers
        assert loaded.max_batch_size == 2

    def test_opening_proof(self, small_srs):
        proof = open_at(small_srs, Polynomial([2, 3, 4]), 5)
        assert deserialize_opening_proof(_through_json(serialize_opening_proof(proof))) == proof

    def test_batch_proof(self, small_srs):
        proof = open_batch(small_srs, Polynomial([2, 3, 4]), [1, 2])
        assert deserialize_batch_proof(_through_json(serialize_batch_proof(proof))) == proof

    def test_vector_commitment(self, small_srs):
        vc = commit_vector(small_srs, Domain(4), [9, 8, 7, 6])
        data = _through_json(serialize_vector_commitment(vc))
        assert data["domain_size"] == 4
        assert deserialize_vector_commitment(data) == vc

    def test_aggregated_proof(self, small_srs):
        domain = Domain(4)
        vc = commit_vector(small_srs, domain, [9, 8, 7, 6])
        claims = [
            PositionClaim(vc.commitment, i, vc.values[i], prove_position(small_srs, domain, vc.values, i))
            for i in (0, 2)
        ]
        agg = aggregate(domain, claims)
        assert deserialize_aggregated_proof(_through_json(serialize_aggregated_proof(agg))) == agg


class TestDisplay:
    def test_g1_short(self):
        assert g1_short(None) == "∞"
        assert g1_short(G1) == "(1, 2)"

    def test_fr_short(self):
        assert fr_short(FR(42)) == "42"
        assert fr_short(FR(12345678901234)) == "1234...1234"
        assert fr_short(None) == "None"
