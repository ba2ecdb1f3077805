# backend/pomodoro/api/endpoints/health.py

from fastapi import APIRouter, Depends

from pomodoro.api.deps import get_session_log
from pomodoro.crud.sessions import MongoSessionLog, SessionLog

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(session_log: SessionLog = Depends(get_session_log)):
    """
    [운영] 헬스 체크
    - 서버 생존 여부 + 세션 로그 저장소 연결 여부를 빠르게 확인하기 위한 엔드포인트
    """
    backend = "mongo" if isinstance(session_log, MongoSessionLog) else "memory"
    store_ok = False
    store_error = None

    try:
        store_ok = await session_log.ping()
    except Exception as e:
        store_error = str(e)

    return {
        "status": "ok" if store_ok else "degraded",
        "session_log": backend,
        "session_log_ok": store_ok,
        # 운영에서는 숨겨도 되는데, 지금은 디버깅 편의를 위해 포함
        "session_log_error": store_error,
    }
