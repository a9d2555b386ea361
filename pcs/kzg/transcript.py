"""
집계 챌린지용 Fiat-Shamir 트랜스크립트
=======================================

증명 집계(aggregation)는 여러 검증 방정식을 계수 r의 거듭제곱으로
선형결합한다. r을 집계하는 쪽이 고를 수 있으면, 틀린 주장 두 개의
오차가 서로 상쇄되도록 r을 맞출 수 있다. 그래서 r은 집계 대상인
주장 목록 전체 (도메인 크기, 그리고 각 (커밋먼트, 위치, 값))의 해시로
정한다. 검증자는 같은 목록으로 같은 r을 다시 계산한다.

**인코딩**:
  레이블은 길이(1바이트)를 앞에 붙여 넣는다. 레이블과 데이터의 경계가
  달라지면 다른 입력이 되므로 (b"ab", b"c") 와 (b"a", b"bc")가 섞이지 않는다.
  - 스칼라: 32바이트 빅엔디안
  - 위치/크기: 8바이트 빅엔디안
  - G1 점: x, y 각 32바이트 (항등원 None은 64바이트의 0)

사용 예시:
    >>> t = Transcript(b"asvc-aggregate")
    >>> t.append_int(b"n", 8)
    >>> t.append_claim(C, 3, FR(4))
    >>> r = t.challenge_scalar(b"r")
"""

import hashlib

from pcs.kzg.field import FR, CURVE_ORDER


class Transcript:
    """SHA-256으로 누적하는 트랜스크립트. 같은 순서로 같은 값을 넣으면 같은 챌린지가 나온다.

    속성:
        state: 지금까지 넣은 바이트열
    """

    def __init__(self, label=b"kzg"):
        self.state = bytearray()
        self._append_label(label)

    def _append_label(self, label):
        self.state.append(len(label))
        self.state.extend(label)

    def append_scalar(self, label, scalar):
        self._append_label(label)
        self.state.extend((int(scalar) % CURVE_ORDER).to_bytes(32, "big"))

    def append_int(self, label, value):
        """도메인 크기, 벡터 위치 같은 음이 아닌 정수."""
        self._append_label(label)
        self.state.extend(int(value).to_bytes(8, "big"))

    def append_point(self, label, point):
        self._append_label(label)
        if point is None:
            self.state.extend(bytes(64))
            return
        x, y = point
        self.state.extend(int(x).to_bytes(32, "big"))
        self.state.extend(int(y).to_bytes(32, "big"))

    def append_claim(self, commitment, index, value):
        """집계 주장 하나 (커밋먼트 C, 위치 i, 값 vᵢ)를 넣는다."""
        self.append_point(b"commitment", commitment)
        self.append_int(b"index", index)
        self.append_scalar(b"value", value)

    def challenge_scalar(self, label):
        """현재 상태의 SHA-256을 FR로 줄인 챌린지.

        해시값은 상태에 다시 이어 붙이므로, 같은 트랜스크립트에서
        연달아 뽑은 챌린지는 서로 다르다.
        """
        self._append_label(label)
        digest = hashlib.sha256(bytes(self.state)).digest()
        self.state.extend(digest)
        return FR(int.from_bytes(digest, "big") % CURVE_ORDER)
