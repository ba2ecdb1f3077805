# backend/pomodoro/api/deps.py
from fastapi import Request

from pomodoro.crud.sessions import SessionLog
from pomodoro.services.progress import ProgressChartService
from pomodoro.services.session_logging import SessionLoggingService
from pomodoro.services.timer import TimerService

# 서비스 객체는 lifespan에서 만들어 app.state에 올려 둡니다. (전역 싱글턴 대신)


def get_session_log(request: Request) -> SessionLog:
    return request.app.state.session_log


def get_session_logging(request: Request) -> SessionLoggingService:
    return request.app.state.session_logging


def get_timer_service(request: Request) -> TimerService:
    return request.app.state.timer_service


def get_progress_service(request: Request) -> ProgressChartService:
    return request.app.state.progress_service
