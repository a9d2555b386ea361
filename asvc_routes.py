"""
aSVC Flask Blueprint: 벡터 커밋먼트 학습용 JSON 엔드포인트
=============================================================

Setup → Commit → Prove → Verify → Update → Aggregate 흐름을
한 단계씩 호출해 볼 수 있다. 상태(SRS, 벡터)는 TinyDB에 저장한다.

역직렬화한 SRS는 setup마다 새로 붙는 id로 프로세스 안에 보관한다.
SRS가 계산해 둔 Lagrange 형태 점을 다음 요청(/update)이 다시 쓰기 위해서다.
"""

import logging
import secrets

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from pcs.errors import PCSError
from pcs.kzg.srs import SRS
from pcs.asvc.domain import Domain
from pcs.asvc.vector import (
    commit_vector, prove_position, verify_position, update,
    prove_subvector, verify_subvector,
)
from pcs.asvc.aggregate import PositionClaim, aggregate, verify_aggregated

from pcs_serializers import (
    serialize_fr, deserialize_fr, deserialize_fr_list,
    serialize_g1,
    serialize_poly,
    serialize_srs, deserialize_srs,
    serialize_opening_proof, deserialize_opening_proof,
    serialize_batch_proof, deserialize_batch_proof,
    serialize_vector_commitment, deserialize_vector_commitment,
    serialize_aggregated_proof, deserialize_aggregated_proof,
    g1_short, fr_short,
)

logger = logging.getLogger(__name__)

asvc_bp = Blueprint('asvc', __name__, url_prefix='/asvc')

DATA = Query()

# DB는 app.py에서 주입
DB = None

# srs_id → SRS (가장 최근 setup 하나만)
_SRS_CACHE = {}


def init_asvc_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


class MissingState(Exception):
    """필요한 이전 단계(setup/commit)가 실행되지 않음."""


class BadRequest(Exception):
    """요청 본문에 필드가 없거나 형식이 잘못됨."""


def load_srs():
    data = db_get("asvc.srs")
    if data is None:
        raise MissingState("먼저 /asvc/setup 으로 SRS를 생성하세요")
    srs_id = db_get("asvc.srs_id")
    srs = _SRS_CACHE.get(srs_id)
    if srs is None:
        srs = deserialize_srs(data)
        _SRS_CACHE.clear()
        _SRS_CACHE[srs_id] = srs
    return srs


def load_vector():
    data = db_get("asvc.vector")
    if data is None:
        raise MissingState("먼저 /asvc/commit 으로 벡터를 커밋하세요")
    return deserialize_vector_commitment(data)


def require(body, *fields):
    """body에 fields가 모두 있는지 확인한다."""
    missing = [f for f in fields if f not in body]
    if missing:
        raise BadRequest(f"필드가 필요합니다: {', '.join(missing)}")


def decode(fn, data):
    """fn(data)로 역직렬화한다. 형식 오류는 BadRequest로 바꾼다.

    곡선 밖의 점(InvalidPoint) 같은 PCSError는 그대로 올려 보낸다.
    """
    try:
        return fn(data)
    except PCSError:
        raise
    except (LookupError, TypeError, ValueError) as e:
        raise BadRequest(f"잘못된 입력: {e}") from e


# ─── 오류 처리 ───

@asvc_bp.errorhandler(PCSError)
def handle_pcs_error(err):
    return jsonify({"error": type(err).__name__, "message": str(err)}), 400


@asvc_bp.errorhandler(BadRequest)
def handle_bad_request(err):
    return jsonify({"error": "BadRequest", "message": str(err)}), 400


@asvc_bp.errorhandler(MissingState)
def handle_missing_state(err):
    return jsonify({"error": "MissingState", "message": str(err)}), 409


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@asvc_bp.route("/setup", methods=["POST"])
def setup():
    """SRS를 생성해 저장한다. 기존 벡터 상태는 지운다."""
    body = request.get_json(silent=True) or {}
    defaults = current_app.config["PCS"]["srs"]
    max_degree = decode(int, body.get("max_degree", defaults["max_degree"]))
    g2_degree = decode(int, body.get("g2_degree", defaults["g2_degree"]))
    seed = body.get("seed", defaults["seed"])

    srs = SRS.generate(max_degree=max_degree, seed=seed, g2_degree=g2_degree)
    srs_id = secrets.token_hex(8)
    db_remove_prefix("asvc.")
    db_set("asvc.srs", serialize_srs(srs))
    db_set("asvc.srs_id", srs_id)
    _SRS_CACHE.clear()
    _SRS_CACHE[srs_id] = srs
    logger.info("setup: max_degree=%d, g2_degree=%d", max_degree, g2_degree)
    return jsonify({"max_degree": srs.max_degree, "max_batch_size": srs.max_batch_size})


@asvc_bp.route("/reset", methods=["POST"])
def reset():
    db_remove_prefix("asvc.")
    _SRS_CACHE.clear()
    return jsonify({"ok": True})


@asvc_bp.route("/state")
def state():
    """저장된 SRS 요약과 벡터 상태 (계수 형태 다항식 포함)."""
    vector_data = db_get("asvc.vector")
    result = {"srs": None, "vector": vector_data}
    if db_get("asvc.srs") is not None:
        srs = load_srs()
        result["srs"] = {"max_degree": srs.max_degree, "max_batch_size": srs.max_batch_size}
    if vector_data is not None:
        vc = deserialize_vector_commitment(vector_data)
        result["commitment_short"] = g1_short(vc.commitment)
        result["values_short"] = [fr_short(v) for v in vc.values]
        result["polynomial"] = serialize_poly(vc.domain.interpolate(vc.values))
    return jsonify(result)


# ──────────────────────────────────────────────────────────────
# Commit / Prove / Verify
# ──────────────────────────────────────────────────────────────

@asvc_bp.route("/commit", methods=["POST"])
def commit():
    """벡터를 커밋한다. body: {"values": [...]} (길이는 2의 거듭제곱)"""
    body = request.get_json(silent=True) or {}
    values = body.get("values")
    if not values:
        return jsonify({"error": "BadRequest", "message": "values가 필요합니다"}), 400
    try:
        domain = Domain(len(values))
    except ValueError as e:
        return jsonify({"error": "BadRequest", "message": str(e)}), 400

    srs = load_srs()
    vc = commit_vector(srs, domain, decode(deserialize_fr_list, values))
    db_set("asvc.vector", serialize_vector_commitment(vc))
    logger.info("commit: n=%d", domain.size)
    return jsonify(serialize_vector_commitment(vc))


@asvc_bp.route("/prove/<int:index>")
def prove(index):
    srs = load_srs()
    vc = load_vector()
    proof = prove_position(srs, vc.domain, vc.values, index)
    return jsonify(serialize_opening_proof(proof))


@asvc_bp.route("/verify", methods=["POST"])
def verify():
    """body: {"index": i, "value": v, "proof": {...}}"""
    body = request.get_json(silent=True) or {}
    require(body, "index", "value", "proof")
    proof = decode(deserialize_opening_proof, body["proof"])
    index = decode(int, body["index"])
    value = decode(deserialize_fr, body["value"])

    srs = load_srs()
    vc = load_vector()
    ok = verify_position(srs, vc.domain, vc.commitment, index, value, proof)
    return jsonify({"valid": ok})


@asvc_bp.route("/prove_subvector", methods=["POST"])
def prove_positions_batch():
    """body: {"indices": [...]}. 여러 위치를 배치 증명 하나로 연다."""
    body = request.get_json(silent=True) or {}
    require(body, "indices")
    indices = [decode(int, i) for i in body["indices"]]

    srs = load_srs()
    vc = load_vector()
    proof = prove_subvector(srs, vc.domain, vc.values, indices)
    return jsonify(serialize_batch_proof(proof))


@asvc_bp.route("/verify_subvector", methods=["POST"])
def verify_positions_batch():
    """body: {"indices": [...], "values": [...], "proof": {...}}"""
    body = request.get_json(silent=True) or {}
    require(body, "indices", "values", "proof")
    indices = [decode(int, i) for i in body["indices"]]
    values = decode(deserialize_fr_list, body["values"])
    proof = decode(deserialize_batch_proof, body["proof"])

    srs = load_srs()
    vc = load_vector()
    ok = verify_subvector(srs, vc.domain, vc.commitment, indices, values, proof)
    return jsonify({"valid": ok})


@asvc_bp.route("/update", methods=["POST"])
def update_value():
    """body: {"index": i, "value": v}. 커밋먼트를 증분 갱신한다."""
    body = request.get_json(silent=True) or {}
    require(body, "index", "value")
    index = decode(int, body["index"])
    value = decode(deserialize_fr, body["value"])

    srs = load_srs()
    vc = load_vector()
    new_vc = update(srs, vc, index, value)
    db_set("asvc.vector", serialize_vector_commitment(new_vc))
    logger.info("update: index=%d", index)
    return jsonify(serialize_vector_commitment(new_vc))


# ──────────────────────────────────────────────────────────────
# Aggregate
# ──────────────────────────────────────────────────────────────

@asvc_bp.route("/aggregate", methods=["POST"])
def aggregate_positions():
    """body: {"indices": [...]}. 저장된 벡터의 위치 증명을 만들어 집계한다."""
    body = request.get_json(silent=True) or {}
    srs = load_srs()
    vc = load_vector()
    claims = []
    for index in body.get("indices", []):
        index = decode(int, index)
        proof = prove_position(srs, vc.domain, vc.values, index)
        claims.append(PositionClaim(vc.commitment, index, vc.values[index], proof))
    agg = aggregate(vc.domain, claims)
    return jsonify(serialize_aggregated_proof(agg))


@asvc_bp.route("/verify_aggregated", methods=["POST"])
def verify_aggregated_proof():
    """body: {"aggregated": {...}}"""
    body = request.get_json(silent=True) or {}
    require(body, "aggregated")
    agg = decode(deserialize_aggregated_proof, body["aggregated"])

    srs = load_srs()
    return jsonify({
        "valid": verify_aggregated(srs, agg),
        "claims": [
            {"commitment": serialize_g1(c.commitment), "index": c.index, "value": serialize_fr(c.value)}
            for c in agg.claims
        ],
    })
