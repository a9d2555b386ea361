import pytest

from pcs.kzg.srs import SRS
from pcs.asvc.domain import Domain
from pcs.asvc.keys import VectorKeys


# ── 테스트 상수 ──
VECTOR = [1, 2, 3, 4, 5, 6, 7, 8]


# 페어링이 순수 파이썬이라 느리므로 SRS와 키는 세션 단위로 한 번만 만든다.

@pytest.fixture(scope="session")
def srs():
    """max_degree=16, G2 쪽 8차까지 (배치 크기 8)."""
    return SRS.generate(max_degree=16, seed=42, g2_degree=8)


@pytest.fixture(scope="session")
def domain():
    return Domain(8)


@pytest.fixture(scope="session")
def keys(srs, domain):
    return VectorKeys.derive(srs, domain)


@pytest.fixture(scope="session")
def vector():
    return list(VECTOR)
