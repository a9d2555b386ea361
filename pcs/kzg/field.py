"""
KZG 기반 모듈: 유한체(Finite Field) 및 타원곡선 연산
=====================================================

커밋먼트 엔진 전체에서 사용하는 대수적 도구를 정의한다.
실제 체/곡선 산술과 페어링은 py_ecc의 bn128 구현에 위임하고,
이 모듈은 그 위에 얇은 인터페이스만 제공한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 다항식 계수, 평가 점, 평가값은 모두 FR 원소이다.
  - 위수 p ≈ 2^254, 소수체
  - p - 1 = 2^28 × m (m은 홀수) → 최대 2^28차 단위근을 지원

**타원곡선 연산**:
  G1, G2 점 덧셈/스칼라곱, 다중 스칼라 곱셈(MSM), 페어링.
  항등원(무한원점)은 None으로 표현한다.

**단위근(Roots of Unity)**:
  벡터 커밋먼트의 평가 도메인 {1, ω, ω², ..., ω^(n-1)}을 정의한다.

사용 예시:
    >>> from pcs.kzg.field import FR, G1, ec_mul, msm
    >>> P = ec_mul(G1, 5)                          # 5·G1
    >>> Q = msm([G1, P], [FR(2), FR(3)])           # 2·G1 + 3·(5·G1)
"""

from functools import reduce

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order


def to_fr(value):
    """정수 또는 FR을 FR로 변환한다."""
    if isinstance(value, FR):
        return value
    return FR(int(value) % CURVE_ORDER)


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1
G2 = bn128.G2


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점
        scalar: 정수 또는 FR 원소

    Returns:
        scalar · point (같은 그룹의 점)
    """
    if point is None:
        return None
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원: -point."""
    return bn128.neg(point)


def ec_sub(p1, p2):
    """타원곡선 점 뺄셈: p1 - p2."""
    return bn128.add(p1, bn128.neg(p2))


def ec_sum(points):
    """점 리스트의 합. 빈 리스트는 항등원(None)."""
    return reduce(bn128.add, points, None)


def is_g1_point(point):
    """point가 G1 곡선 위의 점(또는 항등원 None)인지 확인한다.

    외부에서 들어온 증인이나 커밋먼트를 페어링에 넣기 전에 쓴다.
    곡선 밖의 점은 py_ecc 페어링이 ValueError를 던지게 만든다.
    """
    if point is None:
        return True
    if not isinstance(point, tuple) or len(point) != 2:
        return False
    if not all(type(c) is bn128.FQ for c in point):
        return False
    return bn128.is_on_curve(point, bn128.b)


def is_g2_point(point):
    """point가 G2 (twist) 곡선 위의 점(또는 None)인지 확인한다."""
    if point is None:
        return True
    if not isinstance(point, tuple) or len(point) != 2:
        return False
    if not all(isinstance(c, bn128.FQ2) for c in point):
        return False
    return bn128.is_on_curve(point, bn128.b2)


def _msm_term(pair):
    point, scalar = pair
    return ec_mul(point, scalar)


def msm(points, scalars, executor=None):
    """다중 스칼라 곱셈(MSM): Σ scalarᵢ · pointᵢ.

    각 항은 서로 독립이므로 병렬 작업 단위로 나눌 수 있다.
    executor(concurrent.futures의 Executor)를 넘기면 항 계산을 그쪽에
    맡기고, 결과는 순차 계산과 항상 동일하다 (덧셈은 순서대로 누적).

    스칼라가 0인 항은 건너뛴다.

    Args:
        points: G1 또는 G2 점 리스트
        scalars: 정수 또는 FR 원소 리스트 (points와 같은 길이)
        executor: 선택. map(fn, iterable)을 제공하는 Executor

    Returns:
        Σ scalarᵢ · pointᵢ (항등원이면 None)

    Raises:
        ValueError: points와 scalars의 길이가 다를 때
    """
    if len(points) != len(scalars):
        raise ValueError(f"MSM 길이 불일치: 점 {len(points)}개, 스칼라 {len(scalars)}개")

    work = [(pt, s) for pt, s in zip(points, scalars)
            if pt is not None and int(s) % CURVE_ORDER != 0]
    if executor is None:
        terms = map(_msm_term, work)
    else:
        terms = executor.map(_msm_term, work)
    return ec_sum(list(terms))


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
    """
    return bn128.pairing(g2_point, g1_point)


def pairing_product(pairs):
    """페어링 곱 Π e(g1ᵢ, g2ᵢ)를 계산한다.

    Args:
        pairs: (g1_point, g2_point) 튜플의 리스트

    Returns:
        GT 원소
    """
    result = bn128.FQ12.one()
    for g1_point, g2_point in pairs:
        # e(O, Q) = e(P, O) = 1
        if g1_point is None or g2_point is None:
            continue
        result = result * ec_pairing(g2_point, g1_point)
    return result


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

# p - 1 = 2^28 × m
MAX_TWO_ADICITY = 28


def get_root_of_unity(n):
    """n차 원시 단위근 ω를 반환한다.

    생성자 g = FR(5)에서 ω = g^((p-1)/n)으로 계산한다.
    ω^n = 1이고 ω^k ≠ 1 (0 < k < n).

    Args:
        n: 단위근의 차수 (2의 거듭제곱, ≤ 2^28)

    Returns:
        FR: n차 원시 단위근

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^28을 초과할 때
    """
    if n < 1 or (n & (n - 1)) != 0:
        raise ValueError(f"n은 2의 거듭제곱이어야 합니다: {n}")
    if n > (1 << MAX_TWO_ADICITY):
        raise ValueError(f"n은 2^{MAX_TWO_ADICITY} 이하여야 합니다: {n}")
    if n == 1:
        return FR(1)

    g = FR(5)
    exponent = (CURVE_ORDER - 1) // n
    return g ** exponent


def get_roots_of_unity(n):
    """n개의 단위근 리스트 [1, ω, ω², ..., ω^(n-1)]을 반환한다."""
    omega = get_root_of_unity(n)
    roots = []
    current = FR(1)
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots
