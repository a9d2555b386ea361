"""
KZG Structured Reference String (SRS)
======================================

KZG 커밋먼트와 벡터 커밋먼트가 공유하는 공개 파라미터.

**SRS란?**
  비밀 값 τ ("toxic waste")의 거듭제곱을 곡선 점으로 감춘 것이다.

  SRS = {
      G1 powers: [G1, τ·G1, τ²·G1, ..., τ^d·G1]
      G2 powers: [G2, τ·G2, (τ²·G2, ..., τ^k·G2)]
  }

  G2 쪽 추가 거듭제곱(τ² 이상)은 여러 점을 한 번에 검증할 때
  소거 다항식 Z_S(τ)·G2를 만드는 데만 쓰인다.

**신뢰 가정**:
  load()는 거듭제곱 관계 g1_powers[i] = τ^i·G1 를 검증하지 않는다.
  검증하려면 τ가 필요하고, τ는 설정 이후 어디에도 남아 있으면 안 된다.

**불변성**:
  SRS는 한 번 만들어지면 수정되지 않는다. 프로세스 전체에서 하나의
  인스턴스를 참조로 공유하고, 점 배열을 호출마다 복사하지 않는다.

사용 예시:
    >>> srs = SRS.generate(max_degree=16, seed=42, g2_degree=8)
    >>> len(srs.g1_powers)  # 17
"""

import hashlib
import logging
import secrets

from pcs.errors import InvalidSRS, DegreeExceeded
from pcs.kzg.field import FR, G1, G2, ec_mul, ec_add, ec_neg, CURVE_ORDER

logger = logging.getLogger(__name__)


class SRS:
    """Structured Reference String: KZG 커밋먼트용 공개 파라미터.

    속성:
        g1_powers: (G1, τ·G1, ..., τ^d·G1) 튜플
        g2_powers: (G2, τ·G2, ..., τ^k·G2) 튜플 (k ≥ 1)
        max_degree: 커밋 가능한 최대 다항식 차수 d
        max_batch_size: 한 번에 검증 가능한 최대 점 개수 k
    """

    __slots__ = ("_g1_powers", "_g2_powers", "_lagrange")

    def __init__(self, g1_powers, g2_powers):
        if not g1_powers:
            raise InvalidSRS("SRS의 G1 거듭제곱 리스트가 비어 있습니다")
        if len(g2_powers) < 2 or any(pt is None for pt in g2_powers[:2]):
            raise InvalidSRS("SRS에는 G2와 τ·G2가 모두 필요합니다")
        self._g1_powers = tuple(g1_powers)
        self._g2_powers = tuple(g2_powers)
        # 도메인 크기 n → Lagrange 형태 G1 점 (공개 점에서 유도한 값만 담는다)
        self._lagrange = {}

    @property
    def g1_powers(self):
        return self._g1_powers

    @property
    def g2_powers(self):
        return self._g2_powers

    @property
    def tau_g2(self):
        """τ·G2"""
        return self._g2_powers[1]

    @property
    def max_degree(self):
        return len(self._g1_powers) - 1

    @property
    def max_batch_size(self):
        return len(self._g2_powers) - 1

    def __repr__(self):
        return f"SRS(max_degree={self.max_degree}, max_batch_size={self.max_batch_size})"

    @classmethod
    def load(cls, powers_g1, tau_g2, extra_g2=None):
        """외부 설정 의식(ceremony)이 만든 SRS를 적재한다.

        Args:
            powers_g1: [G1, τ·G1, ..., τ^d·G1] (비어 있으면 안 됨)
            tau_g2: τ·G2
            extra_g2: 선택. [τ²·G2, τ³·G2, ...] (배치 검증용)

        Returns:
            SRS

        Raises:
            InvalidSRS: powers_g1이 비었거나 tau_g2가 없을 때
        """
        if powers_g1 is None or len(powers_g1) == 0:
            raise InvalidSRS("SRS의 G1 거듭제곱 리스트가 비어 있습니다")
        if tau_g2 is None:
            raise InvalidSRS("τ·G2가 주어지지 않았습니다")
        g2_powers = [G2, tau_g2] + list(extra_g2 or [])
        return cls(list(powers_g1), g2_powers)

    @classmethod
    def generate(cls, max_degree, seed=None, g2_degree=1):
        """SRS를 생성한다 (1회성 설정 생산자).

        τ는 이 함수의 지역 변수로만 존재하고 반환 객체에는 남지 않는다.
        seed를 주면 결정론적으로 생성한다 (테스트/학습용).
        실제 시스템에서는 MPC 설정 의식을 거친 SRS를 load()로 적재해야 한다.

        Args:
            max_degree: 지원할 최대 다항식 차수 d
            seed: 결정론적 생성을 위한 시드 (선택)
            g2_degree: G2 쪽 최대 거듭제곱 k (≥ 1). 배치 검증 가능한 최대 점 개수.

        Returns:
            SRS

        예시:
            >>> srs = SRS.generate(max_degree=8, seed=1234, g2_degree=4)
        """
        if max_degree < 0:
            raise InvalidSRS(f"max_degree는 0 이상이어야 합니다: {max_degree}")
        if g2_degree < 1:
            raise InvalidSRS(f"g2_degree는 1 이상이어야 합니다: {g2_degree}")

        if seed is not None:
            h = hashlib.sha256(str(seed).encode()).digest()
            tau = FR(int.from_bytes(h, "big") % CURVE_ORDER)
        else:
            tau = FR(secrets.randbelow(CURVE_ORDER - 1) + 1)

        g1_powers = []
        tau_power = FR(1)
        for _ in range(max_degree + 1):
            g1_powers.append(ec_mul(G1, tau_power))
            tau_power = tau_power * tau

        g2_powers = []
        tau_power = FR(1)
        for _ in range(g2_degree + 1):
            g2_powers.append(ec_mul(G2, tau_power))
            tau_power = tau_power * tau

        logger.info("SRS 생성: max_degree=%d, g2_degree=%d", max_degree, g2_degree)
        return cls(g1_powers, g2_powers)

    def lagrange_g1(self, domain):
        """Lagrange 형태의 G1 점 [L_0(τ)]₁, ..., [L_{n-1}(τ)]₁ 를 계산한다.

        L_i(τ) = (1/n) Σ_k ω^{-ik} τ^k 이므로, 처음 n개의 G1 거듭제곱에
        역 FFT를 그룹 위에서 수행하면 된다 (O(n log n) 스칼라곱).

        결과는 n마다 한 번만 계산해 이 SRS 인스턴스에 보관한다.
        이후 호출(예: 벡터 갱신)은 같은 튜플을 그대로 돌려준다.

        Args:
            domain: Domain (크기 n ≤ d+1)

        Returns:
            tuple: G1 점 n개

        Raises:
            DegreeExceeded: n - 1 > d
        """
        n = domain.size
        if n - 1 > self.max_degree:
            raise DegreeExceeded(
                f"도메인 크기 {n}에는 {n - 1}차 다항식이 필요하지만 SRS 최대 차수는 {self.max_degree}입니다"
            )
        cached = self._lagrange.get(n)
        if cached is not None:
            return cached
        points = _group_fft(list(self._g1_powers[:n]), FR(1) / domain.omega)
        n_inv = FR(1) / FR(n)
        cached = tuple(ec_mul(pt, n_inv) for pt in points)
        self._lagrange[n] = cached
        logger.debug("Lagrange 형태 G1 점 계산: n=%d", n)
        return cached


def _group_fft(points, omega):
    """그룹 원소 위의 radix-2 FFT: out[k] = Σ_j ω^{jk} · points[j]."""
    n = len(points)
    if n == 1:
        return [points[0]]
    even = _group_fft(points[0::2], omega * omega)
    odd = _group_fft(points[1::2], omega * omega)
    result = [None] * n
    omega_k = FR(1)
    half = n // 2
    for k in range(half):
        t = ec_mul(odd[k], omega_k)
        result[k] = ec_add(even[k], t)
        result[k + half] = ec_add(even[k], ec_neg(t))
        omega_k = omega_k * omega
    return result
