# 파일 위치: backend/pomodoro/core/logging.py

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    앱 전체 로거 설정. lifespan 시작 시 1회 호출합니다.
    root에 핸들러가 없을 때만 붙이고, pomodoro.* 로거의 레벨만 조정합니다.
    """
    logging.getLogger("pomodoro").setLevel(level.upper())

    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)
