"""
평가 도메인 (Evaluation Domain)
===============================

길이 n 벡터를 다항식으로 표현하기 위한 n차 단위근 집합
H = {ω⁰, ω¹, ..., ω^(n-1)}.

벡터 위치 i ↔ 평가 점 ω^i 로 대응시킨다.
v = [v₀, ..., v_{n-1}]이면 p(ω^i) = vᵢ 인 (n-1)차 이하 다항식 p가 유일하게 존재한다.

**대수적 성질 (벡터 커밋먼트 갱신 공식의 근거)**:
  A(x)   = x^n - 1 = Π (x - ω^i)
  A'(ω^i) = n·ω^{i(n-1)} = n / ω^i
  A_i(x) = A(x) / (x - ω^i)
  L_i(x) = A_i(x) / A'(ω^i) = (ω^i / n) · A_i(x)

n은 (p - 1)을 나누는 2의 거듭제곱이어야 한다 (bn128에서 n ≤ 2^28).
"""

from pcs.errors import IndexOutOfRange
from pcs.kzg.field import FR, to_fr, get_root_of_unity
from pcs.kzg.polynomial import Polynomial, fft, divide_by_linear


class Domain:
    """크기 n의 단위근 도메인.

    속성:
        size: n
        omega: n차 원시 단위근 ω
        roots: (ω⁰, ..., ω^(n-1)) 튜플
    """

    def __init__(self, size):
        # get_root_of_unity가 2의 거듭제곱 / 2^28 제한을 검사한다
        self.omega = get_root_of_unity(size)
        self.size = size
        roots = []
        current = FR(1)
        for _ in range(size):
            roots.append(current)
            current = current * self.omega
        self.roots = tuple(roots)

    def __repr__(self):
        return f"Domain(size={self.size})"

    def __eq__(self, other):
        return isinstance(other, Domain) and other.size == self.size

    def __hash__(self):
        return hash(("Domain", self.size))

    def check_index(self, index):
        """index가 [0, n) 범위인지 확인한다.

        Raises:
            IndexOutOfRange
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < self.size:
            raise IndexOutOfRange(f"위치 {index}가 도메인 범위 [0, {self.size})를 벗어납니다")

    def point(self, index):
        """위치 i에 대응하는 평가 점 ω^i."""
        self.check_index(index)
        return self.roots[index]

    def interpolate(self, values):
        """p(ω^i) = values[i]인 다항식 (IFFT).

        Raises:
            ValueError: 값 개수가 n과 다를 때
        """
        if len(values) != self.size:
            raise ValueError(f"벡터 길이 {len(values)}가 도메인 크기 {self.size}와 다릅니다")
        return Polynomial.from_evaluations([to_fr(v) for v in values], self.omega)

    def evaluate(self, poly):
        """다항식을 도메인 전체에서 평가한다 (FFT)."""
        coeffs = list(poly.coeffs)
        if len(coeffs) > self.size:
            raise ValueError(f"다항식 차수 {poly.degree}가 도메인 크기 {self.size} 이상입니다")
        coeffs = coeffs + [FR(0)] * (self.size - len(coeffs))
        return fft(coeffs, self.omega)

    def vanishing_polynomial(self):
        """A(x) = x^n - 1."""
        return Polynomial.vanishing(self.size)

    def vanishing_quotient(self, index):
        """A_i(x) = (x^n - 1) / (x - ω^i)."""
        quotient, _ = divide_by_linear(self.vanishing_polynomial(), self.point(index))
        return quotient

    def vanishing_derivative_at(self, index):
        """A'(ω^i) = n / ω^i."""
        return FR(self.size) / self.point(index)

    def lagrange_basis(self, index):
        """L_i(x) = (ω^i / n) · A_i(x)."""
        return self.vanishing_quotient(index) * (self.point(index) / FR(self.size))
