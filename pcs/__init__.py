"""
다항식 커밋먼트 스킴 (Polynomial Commitment Schemes)
=====================================================

두 개의 서브패키지로 구성된다.

**pcs.kzg**:
  KZG 다항식 커밋먼트. 한 점 또는 여러 점에서의 열기 증명(opening)을
  상수 크기로 만들고 페어링으로 검증한다.

**pcs.asvc**:
  KZG 위에 구축한 집계 가능 벡터 커밋먼트(aSVC).
  길이 n 벡터를 n차 단위근 도메인 위의 평가값으로 보고 커밋하며,
  여러 위치(또는 여러 벡터)의 증명을 하나로 집계한다.
"""

__version__ = "0.1.0"
