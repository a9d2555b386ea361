"""
로거 설정 헬퍼.

라이브러리 모듈은 ``logging.getLogger(__name__)``만 사용하고,
핸들러 설치는 애플리케이션(app.py) 쪽에서 이 함수로 한 번 수행한다.
"""

import logging


def setup_basic_logger(name: str = "pcs", level=logging.INFO) -> logging.Logger:
    """
    StreamHandler와 간단한 포매터를 붙인 로거를 반환한다.
    이미 핸들러가 있으면 그대로 반환한다.
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)
    if logger.handlers:
        return logger
    ch = logging.StreamHandler()
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    ch.setFormatter(fmt)
    logger.addHandler(ch)
    return logger
