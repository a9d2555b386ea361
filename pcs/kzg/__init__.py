"""
KZG 다항식 커밋먼트
===================

- field: FR, G1/G2 연산, MSM, 페어링, 단위근
- polynomial: Polynomial, FFT, 나눗셈, 보간
- srs: SRS (load / generate / Lagrange 형태)
- kzg: commit / open_at / verify
- batch: open_batch / verify_batch
- transcript: Fiat-Shamir 트랜스크립트
"""

from pcs.kzg.srs import SRS
from pcs.kzg.kzg import OpeningProof, commit, open_at, open_many, verify
from pcs.kzg.batch import BatchProof, open_batch, verify_batch

__all__ = [
    "SRS",
    "OpeningProof", "commit", "open_at", "open_many", "verify",
    "BatchProof", "open_batch", "verify_batch",
]
