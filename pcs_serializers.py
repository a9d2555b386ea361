"""
KZG / aSVC 데이터 직렬화/역직렬화 헬퍼
========================================

TinyDB와 JSON 응답에 담을 수 있는 형태로 객체를 변환한다.
FR, G1, G2, Polynomial, SRS, OpeningProof, BatchProof,
VectorCommitment, AggregatedProof.
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from pcs.errors import InvalidPoint
from pcs.kzg.field import FR, is_g1_point, is_g2_point
from pcs.kzg.srs import SRS
from pcs.kzg.kzg import OpeningProof
from pcs.kzg.batch import BatchProof
from pcs.asvc.domain import Domain
from pcs.asvc.vector import VectorCommitment
from pcs.asvc.aggregate import Claim, AggregatedProof


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) 또는 int → FR"""
    return FR(int(s))


def serialize_fr_list(lst):
    """list[FR] → list[str]"""
    return [str(int(v)) for v in lst]


def deserialize_fr_list(data):
    """list[str] → list[FR]"""
    return [FR(int(s)) for s in data]


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[str, str] or None → G1 point

    Raises:
        InvalidPoint: 좌표가 G1 곡선 위에 있지 않을 때
    """
    if data is None:
        return None
    point = (FQ(int(data[0])), FQ(int(data[1])))
    if not is_g1_point(point):
        raise InvalidPoint(f"G1 곡선 위의 점이 아닙니다: {g1_short(point)}")
    return point


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    if point is None:
        return None
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))]
    ]


def deserialize_g2(data):
    """[[str,str],[str,str]] or None → G2 point"""
    if data is None:
        return None
    point = (
        bn128.FQ2([int(data[0][0]), int(data[0][1])]),
        bn128.FQ2([int(data[1][0]), int(data[1][1])])
    )
    if not is_g2_point(point):
        raise InvalidPoint("G2 곡선 위의 점이 아닙니다")
    return point


# ─── Polynomial ───

def serialize_poly(poly):
    """Polynomial → list of str (계수, 표시용)"""
    if poly is None:
        return None
    return [str(int(c)) for c in poly.coeffs]


# ─── SRS ───

def serialize_srs(srs):
    """SRS → dict"""
    return {
        "g1_powers": [serialize_g1(p) for p in srs.g1_powers],
        "g2_powers": [serialize_g2(p) for p in srs.g2_powers],
    }


def deserialize_srs(data):
    """dict → SRS (load 경로로 검사한다)"""
    g2_powers = [deserialize_g2(p) for p in data["g2_powers"]]
    return SRS.load(
        [deserialize_g1(p) for p in data["g1_powers"]],
        g2_powers[1] if len(g2_powers) > 1 else None,
        extra_g2=g2_powers[2:],
    )


# ─── 증명 ───

def serialize_opening_proof(proof):
    """OpeningProof → dict"""
    return {
        "point": serialize_fr(proof.point),
        "value": serialize_fr(proof.value),
        "witness": serialize_g1(proof.witness),
    }


def deserialize_opening_proof(data):
    """dict → OpeningProof"""
    return OpeningProof(
        point=deserialize_fr(data["point"]),
        value=deserialize_fr(data["value"]),
        witness=deserialize_g1(data["witness"]),
    )


def serialize_batch_proof(proof):
    """BatchProof → dict"""
    return {
        "points": serialize_fr_list(proof.points),
        "values": serialize_fr_list(proof.values),
        "witness": serialize_g1(proof.witness),
    }


def deserialize_batch_proof(data):
    """dict → BatchProof"""
    return BatchProof(
        points=tuple(deserialize_fr_list(data["points"])),
        values=tuple(deserialize_fr_list(data["values"])),
        witness=deserialize_g1(data["witness"]),
    )


# ─── 벡터 커밋먼트 ───

def serialize_vector_commitment(vc):
    """VectorCommitment → dict"""
    return {
        "domain_size": vc.domain.size,
        "commitment": serialize_g1(vc.commitment),
        "values": serialize_fr_list(vc.values),
    }


def deserialize_vector_commitment(data):
    """dict → VectorCommitment"""
    return VectorCommitment(
        domain=Domain(int(data["domain_size"])),
        commitment=deserialize_g1(data["commitment"]),
        values=tuple(deserialize_fr_list(data["values"])),
    )


# ─── 집계 증명 ───

def serialize_aggregated_proof(agg):
    """AggregatedProof → dict"""
    return {
        "domain_size": agg.domain_size,
        "claims": [
            {
                "commitment": serialize_g1(c.commitment),
                "index": c.index,
                "value": serialize_fr(c.value),
            }
            for c in agg.claims
        ],
        "witnesses": [serialize_g1(w) for w in agg.witnesses],
    }


def deserialize_aggregated_proof(data):
    """dict → AggregatedProof"""
    return AggregatedProof(
        claims=tuple(
            Claim(
                commitment=deserialize_g1(c["commitment"]),
                index=int(c["index"]),
                value=deserialize_fr(c["value"]),
            )
            for c in data["claims"]
        ),
        witnesses=tuple(deserialize_g1(w) for w in data["witnesses"]),
        domain_size=int(data["domain_size"]),
    )


# ─── UI 표시용 축약 ───

def _shorten(s, limit=8):
    if len(s) <= limit:
        return s
    return s[:4] + "..." + s[-4:]


def g1_short(point):
    """G1 point → 축약 문자열"""
    if point is None:
        return "∞"
    return f"({_shorten(str(int(point[0])))}, {_shorten(str(int(point[1])))})"


def fr_short(val):
    """FR → 축약 문자열"""
    if val is None:
        return "None"
    return _shorten(str(int(val)), limit=10)
