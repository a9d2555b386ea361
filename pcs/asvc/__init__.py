"""
집계 가능 부분벡터 커밋먼트 (aSVC)
===================================

- domain: 단위근 도메인
- keys: Lagrange / 갱신용 사전 계산 키
- vector: 벡터 커밋, 위치 증명/검증, 갱신, 부분벡터
- aggregate: 여러 위치/커밋먼트 증명 집계
"""

from pcs.asvc.domain import Domain
from pcs.asvc.keys import VectorKeys
from pcs.asvc.vector import (
    VectorCommitment,
    commit_vector,
    prove_position,
    prove_positions,
    verify_position,
    update,
    update_proof,
    prove_subvector,
    verify_subvector,
    aggregate_subvector,
)
from pcs.asvc.aggregate import (
    Claim,
    PositionClaim,
    AggregatedProof,
    aggregate,
    verify_aggregated,
)

__all__ = [
    "Domain", "VectorKeys",
    "VectorCommitment", "commit_vector", "prove_position", "prove_positions",
    "verify_position", "update", "update_proof",
    "prove_subvector", "verify_subvector", "aggregate_subvector",
    "Claim", "PositionClaim", "AggregatedProof", "aggregate", "verify_aggregated",
]
