"""
커밋먼트 엔진 오류 분류
=======================

구성(construction) 단계의 오류만 예외로 표현한다.
검증 실패는 예외가 아니라 ``False`` 반환값이다.

모든 오류는 ``ValueError``의 하위 클래스이므로,
기존처럼 ``except ValueError``로 잡아도 동작한다.
"""


class PCSError(ValueError):
    """커밋먼트 엔진 오류의 기반 클래스."""


class InvalidSRS(PCSError):
    """SRS 입력이 비었거나 형식이 잘못됨."""


class DegreeExceeded(PCSError):
    """다항식 차수(또는 배치 크기)가 SRS 용량을 초과함."""


class InconsistentClaim(PCSError):
    """주장한 평가값이 실제 다항식 평가와 일치하지 않음 (나머지 ≠ 0)."""


class IndexOutOfRange(PCSError):
    """벡터 위치가 [0, n) 범위를 벗어남."""


class EmptyClaimSet(PCSError):
    """집계할 주장(claim)이 하나도 없음."""


class InvalidPoint(PCSError):
    """직렬화된 좌표가 곡선 위의 점이 아님."""
