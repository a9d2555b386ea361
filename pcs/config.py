"""
config.py
기본 설정값과 JSON 설정 파일 로더.
"""

import json
from pathlib import Path
from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "db_path": "db.json",         # None이면 TinyDB MemoryStorage 사용
    "secret_key": "key",
    "log_level": "INFO",
    "srs": {
        "max_degree": 16,
        "g2_degree": 8,           # 배치/부분벡터 검증에 필요한 [τ^k]₂ 개수
        "seed": None,             # None이면 secrets로 τ 생성
    },
}


def load_config(path: str, base: Dict[str, Any] = None) -> Dict[str, Any]:
    """
    JSON 설정 파일을 읽어 base에 병합한다 (얕은 병합).

    :param path: JSON 설정 파일 경로
    :param base: 병합 대상 설정 (None이면 DEFAULT_CONFIG)
    :return: 병합된 설정 딕셔너리
    """
    base = dict(base) if base is not None else dict(DEFAULT_CONFIG)
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with p.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    for k, v in data.items():
        base[k] = v
    return base
