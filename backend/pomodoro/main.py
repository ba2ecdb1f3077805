# main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pomodoro.api.endpoints import health, progress, sessions, timer
from pomodoro.core.clock import Ticker
from pomodoro.core.config import settings
from pomodoro.core.logging import configure_logging
from pomodoro.crud.sessions import InMemorySessionLog, MongoSessionLog, SessionLog
from pomodoro.db import mongo
from pomodoro.models.timer import PomodoroSettings
from pomodoro.services.progress import ProgressChartService
from pomodoro.services.session_logging import SessionLoggingService
from pomodoro.services.timer import TimerService
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("pomodoro.main")


def default_timer_settings() -> PomodoroSettings:
    return PomodoroSettings(
        work_duration_minutes=settings.WORK_DURATION_MINUTES,
        short_break_duration_minutes=settings.SHORT_BREAK_DURATION_MINUTES,
        long_break_duration_minutes=settings.LONG_BREAK_DURATION_MINUTES,
        long_break_interval=settings.LONG_BREAK_INTERVAL,
    )


def init_services(app: FastAPI, session_log: SessionLog) -> None:
    """세션 로그 위에 서비스들을 조립해서 app.state에 올립니다."""
    session_logging = SessionLoggingService(session_log)
    app.state.session_log = session_log
    app.state.session_logging = session_logging
    app.state.timer_service = TimerService(
        session_logging,
        settings=default_timer_settings(),
        ticker=Ticker(interval=settings.TICK_SECONDS),
    )
    app.state.progress_service = ProgressChartService(session_logging)


# [수명 주기 관리] DB 연결 및 해제
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup 로직
    configure_logging(settings.LOG_LEVEL)
    logger.info("Running in %s mode", settings.ENVIRONMENT)

    if settings.MONGO_URI:
        await mongo.connect_to_mongo()
        session_log = MongoSessionLog(mongo.get_db(), settings.SESSIONS_COLLECTION)
        await session_log.ensure_indexes()
    else:
        logger.warning("MONGO_URI is not set. Using in-memory session log.")
        session_log = InMemorySessionLog()

    init_services(app, session_log)
    yield
    # Shutdown 로직
    await app.state.timer_service.shutdown()
    if settings.MONGO_URI:
        await mongo.close_mongo_connection()

# lifespan 파라미터로 수명 주기 핸들러 등록
app = FastAPI(title="Pomodoro Progress Backend", lifespan=lifespan)

# --- 미들웨어 설정 ---

# CORS: 웹 프론트엔드 접근 허용
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def read_root():
    return {"message": "Backend is running!"}

# 타이머 API
app.include_router(timer.router, prefix="/api/timer", tags=["timer"])
# 세션 기록 / 생산성 차트 API
app.include_router(sessions.router, prefix="/api/sessions", tags=["sessions"])
app.include_router(progress.router, prefix="/api/progress", tags=["progress"])
# 운영
app.include_router(health.router)
