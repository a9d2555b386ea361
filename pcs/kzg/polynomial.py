"""
KZG 기반 모듈: 다항식(Polynomial) 클래스 및 FFT
=================================================

커밋먼트 엔진에서 사용하는 모든 다항식 연산을 제공한다.

**Polynomial 클래스**:
  계수(coefficient) 표현 기반 밀집(dense) 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  산술 연산자(+, -, *, 스칼라곱), 평가(Horner), 형식 미분을 지원한다.

**나눗셈**:
  - divide_by_linear: (x - z)로 나누는 조립제법. 단일 점 열기에 사용.
  - poly_div: 일반 긴 나눗셈. 소거 다항식 Z_S(x)로 나누는 배치 열기에 사용.

**보간(Interpolation)**:
  - interpolate: 임의의 점 집합에 대한 Lagrange 보간.
  - Polynomial.from_evaluations: 단위근 도메인 전체에 대한 IFFT 보간.
  두 방법은 같은 다항식을 만든다 (알고리즘 선택은 성능 문제일 뿐이다).

사용 예시:
    >>> from pcs.kzg.polynomial import Polynomial, interpolate
    >>> p = Polynomial([3, 0, 2])   # 3 + 2x²
    >>> p.evaluate(5)               # FR(53)
"""

from itertools import zip_longest

from pcs.kzg.field import FR, to_fr

ZERO = FR(0)


def _as_poly(value):
    if isinstance(value, Polynomial):
        return value
    return Polynomial([value])


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """FR 계수 다항식. coeffs[k]는 x^k의 계수이다.

    최고차 0 계수는 생성할 때 잘라낸다. 영 다항식은 coeffs == [0] 하나로 표현한다.

    예시:
        >>> Polynomial([1, 1]) * Polynomial([-1, 1])   # x² - 1
    """

    def __init__(self, coeffs=None):
        """
        Args:
            coeffs: 정수 또는 FR 리스트 [c₀, c₁, ...]. 비어 있으면 영 다항식.
        """
        self.coeffs = [to_fr(c) for c in coeffs] if coeffs else [FR(0)]
        self._trim()

    def _trim(self):
        coeffs = self.coeffs
        while len(coeffs) > 1 and coeffs[-1] == ZERO:
            del coeffs[-1]

    @property
    def degree(self):
        """차수. 영 다항식도 0을 돌려준다 (is_zero로 구분)."""
        return len(self.coeffs) - 1

    def is_zero(self):
        return self.degree == 0 and self.coeffs[0] == ZERO

    def evaluate(self, point):
        """p(point)를 Horner 방식으로 계산한다."""
        x = to_fr(point)
        acc = FR(0)
        for c in self.coeffs[::-1]:
            acc = acc * x + c
        return acc

    def derivative(self):
        """형식 미분 p'(x) = Σ k·c_k·x^(k-1)."""
        return Polynomial([c * FR(k) for k, c in enumerate(self.coeffs) if k > 0])

    # ── 산술 연산 ──

    def __add__(self, other):
        other = _as_poly(other)
        return Polynomial([a + b for a, b in zip_longest(self.coeffs, other.coeffs, fillvalue=ZERO)])

    __radd__ = __add__

    def __sub__(self, other):
        other = _as_poly(other)
        return Polynomial([a - b for a, b in zip_longest(self.coeffs, other.coeffs, fillvalue=ZERO)])

    def __rsub__(self, other):
        return _as_poly(other) - self

    def __neg__(self):
        return Polynomial([-c for c in self.coeffs])

    def __mul__(self, other):
        """다항식끼리는 O(n·m) 합성곱, 정수/FR과는 스칼라곱."""
        if not isinstance(other, Polynomial):
            k = to_fr(other)
            return Polynomial([c * k for c in self.coeffs])
        out = [FR(0)] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            if a == ZERO:
                continue
            for j, b in enumerate(other.coeffs):
                out[i + j] += a * b
        return Polynomial(out)

    __rmul__ = __mul__

    def __eq__(self, other):
        if isinstance(other, (int, FR)):
            other = Polynomial([other])
        elif not isinstance(other, Polynomial):
            return NotImplemented
        return self.coeffs == other.coeffs

    def __len__(self):
        return len(self.coeffs)

    def __repr__(self):
        terms = []
        for k, c in enumerate(self.coeffs):
            if c == ZERO:
                continue
            if k == 0:
                terms.append(f"{int(c)}")
            else:
                terms.append(f"{int(c)}*x" + (f"^{k}" if k > 1 else ""))
        return f"Poly({' + '.join(terms) or '0'})"

    # ── 자주 쓰는 다항식 ──

    @classmethod
    def zero(cls):
        return cls()

    @classmethod
    def one(cls):
        return cls([1])

    @classmethod
    def linear(cls, root):
        """x - root"""
        return cls([-to_fr(root), 1])

    @classmethod
    def vanishing(cls, n):
        """x^n - 1: n차 단위근 도메인 전체에서 0이 된다."""
        return cls([-1] + [0] * (n - 1) + [1])

    @classmethod
    def from_evaluations(cls, evals, omega):
        """[p(1), p(ω), ..., p(ω^(n-1))] 에서 계수를 복원한다 (IFFT)."""
        return cls(ifft([to_fr(v) for v in evals], omega))


# ─────────────────────────────────────────────────────────────────────
# FFT / IFFT (Number Theoretic Transform)
# ─────────────────────────────────────────────────────────────────────

def _bit_reverse(values):
    n = len(values)
    j = 0
    for i in range(1, n):
        bit = n >> 1
        while j & bit:
            j ^= bit
            bit >>= 1
        j |= bit
        if i < j:
            values[i], values[j] = values[j], values[i]


def fft(coeffs, omega):
    """계수 → 평가값: out[k] = p(ω^k).

    비트 역순 정렬 후 제자리(in-place) 버터플라이를 log n 단계 수행한다.

    Args:
        coeffs: 길이가 2의 거듭제곱인 계수 리스트
        omega: len(coeffs)차 원시 단위근

    Returns:
        list[FR]
    """
    n = len(coeffs)
    values = [to_fr(c) for c in coeffs]
    _bit_reverse(values)

    size = 2
    while size <= n:
        half = size // 2
        step = omega ** (n // size)
        for start in range(0, n, size):
            w = FR(1)
            for k in range(start, start + half):
                t = values[k + half] * w
                values[k + half] = values[k] - t
                values[k] = values[k] + t
                w = w * step
        size *= 2
    return values


def ifft(evals, omega):
    """평가값 → 계수. ω⁻¹로 FFT한 뒤 1/n을 곱한다."""
    n_inv = FR(1) / FR(len(evals))
    return [v * n_inv for v in fft(evals, FR(1) / omega)]


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈
# ─────────────────────────────────────────────────────────────────────

def divide_by_linear(poly, z):
    """조립제법(synthetic division): p(x) = (x - z)·q(x) + r.

    나머지 r은 상수이며 인수정리에 의해 r = p(z)이다.

    Args:
        poly: 피제수 다항식
        z: 근 (FR 원소 또는 정수)

    Returns:
        tuple: (몫 Polynomial, 나머지 FR)

    예시:
        >>> q, r = divide_by_linear(Polynomial([FR(-1), FR(0), FR(1)]), FR(1))
        >>> q  # x + 1
        >>> r  # 0
    """
    z = to_fr(z)
    coeffs = poly.coeffs
    if len(coeffs) == 1:
        return Polynomial.zero(), coeffs[0]

    # 최고차부터 내려오며 누적
    quotient = [FR(0)] * (len(coeffs) - 1)
    carry = FR(0)
    for i in range(len(coeffs) - 1, 0, -1):
        carry = coeffs[i] + carry * z
        quotient[i - 1] = carry
    remainder = coeffs[0] + carry * z
    return Polynomial(quotient), remainder


def poly_div(a, b):
    """긴 나눗셈 a(x) = b(x)·q(x) + r(x),  deg r < deg b.

    배치 열기에서 (p(x) - I(x)) / Z_S(x) 계산에 쓰인다.

    Returns:
        tuple: (q, r) 두 Polynomial

    Raises:
        ValueError: b가 영 다항식일 때
    """
    if b.is_zero():
        raise ValueError("영 다항식으로 나눌 수 없습니다")

    rem = list(a.coeffs)
    divisor = b.coeffs
    shift_max = len(rem) - len(divisor)
    if shift_max < 0:
        return Polynomial.zero(), Polynomial(rem)

    lead_inv = FR(1) / divisor[-1]
    quot = [FR(0)] * (shift_max + 1)
    # 최고차 항부터 하나씩 소거
    for shift in reversed(range(shift_max + 1)):
        top = rem[shift + len(divisor) - 1] * lead_inv
        if top == ZERO:
            continue
        quot[shift] = top
        for k, d in enumerate(divisor):
            rem[shift + k] -= top * d

    return Polynomial(quot), Polynomial(rem[:len(divisor) - 1])


# ─────────────────────────────────────────────────────────────────────
# 소거 다항식 / Lagrange 보간
# ─────────────────────────────────────────────────────────────────────

def vanishing_polynomial(points):
    """점 집합 S의 소거 다항식 Z_S(x) = Π_{s∈S} (x - s).

    S가 비어 있으면 상수 1을 반환한다.
    """
    result = Polynomial.one()
    for s in points:
        result = result * Polynomial.linear(s)
    return result


def _check_distinct(points):
    seen = set()
    for p in points:
        key = int(p)
        if key in seen:
            raise ValueError(f"보간 점이 중복됩니다: {key}")
        seen.add(key)


def interpolate(points, values):
    """Lagrange 보간: p(pointsᵢ) = valuesᵢ를 만족하는 최소 차수 다항식.

    p(x) = Σᵢ yᵢ · Lᵢ(x),   Lᵢ(x) = Π_{j≠i} (x - x_j) / (x_i - x_j)

    분자 Π_{j≠i}(x - x_j)는 Z_S(x) / (x - x_i)로 구해 O(k²)에 끝낸다.

    Args:
        points: 서로 다른 FR 원소 리스트
        values: 같은 길이의 FR 원소 리스트

    Returns:
        Polynomial: (k-1)차 이하 보간 다항식

    Raises:
        ValueError: 길이가 다르거나 점이 중복될 때

    예시:
        >>> p = interpolate([FR(1), FR(2)], [FR(3), FR(5)])  # 1 + 2x
    """
    if len(points) != len(values):
        raise ValueError(f"점 {len(points)}개와 값 {len(values)}개의 개수가 다릅니다")
    points = [to_fr(p) for p in points]
    values = [to_fr(v) for v in values]
    _check_distinct(points)
    if not points:
        return Polynomial.zero()

    z_s = vanishing_polynomial(points)
    result = Polynomial.zero()
    for x_i, y_i in zip(points, values):
        if y_i == FR(0):
            continue
        numerator, _ = divide_by_linear(z_s, x_i)
        denominator = numerator.evaluate(x_i)
        result = result + numerator * (y_i / denominator)
    return result


def lagrange_basis(domain, i):
    """i번째 Lagrange 기저 다항식 L_i(x)를 계수 형태로 반환한다.

    성질: L_i(d_j) = δ_{ij}
    """
    values = [FR(0)] * len(domain)
    values[i] = FR(1)
    return interpolate(domain, values)
