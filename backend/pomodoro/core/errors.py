# 파일 위치: backend/pomodoro/core/errors.py


class PomodoroError(Exception):
    """도메인 예외의 공통 부모 클래스"""


class IncompleteIntervalError(PomodoroError):
    """
    시작/종료 시각이 없거나 길이가 0 이하인 세션을 기록하려 할 때 발생합니다.
    이 경우 세션 로그에는 아무것도 저장되지 않습니다.
    """


class LogWriteError(PomodoroError):
    """세션 로그 저장소(append) 실패. 원인 예외는 __cause__에 담깁니다."""
