# backend/pomodoro/api/endpoints/timer.py
from fastapi import APIRouter, Depends

from pomodoro.api.deps import get_timer_service
from pomodoro.models.timer import PomodoroSettings
from pomodoro.schemas.timer import SettingsUpdate, TimerSessionRead
from pomodoro.services.timer import TimerService

router = APIRouter()


# 현재 상태
@router.get("/status", response_model=TimerSessionRead)
async def get_timer_status(timer: TimerService = Depends(get_timer_service)):
    return TimerSessionRead.from_session(await timer.get_current_session())


@router.post("/start", response_model=TimerSessionRead)
async def start_timer(timer: TimerService = Depends(get_timer_service)):
    return TimerSessionRead.from_session(await timer.start())


@router.post("/pause", response_model=TimerSessionRead)
async def pause_timer(timer: TimerService = Depends(get_timer_service)):
    return TimerSessionRead.from_session(await timer.pause())


@router.post("/stop", response_model=TimerSessionRead)
async def stop_timer(timer: TimerService = Depends(get_timer_service)):
    return TimerSessionRead.from_session(await timer.stop())


# 완료 처리 후 바로 다음 세션으로 전환 (웹 UI의 완료 버튼)
@router.post("/complete", response_model=TimerSessionRead)
async def complete_session(timer: TimerService = Depends(get_timer_service)):
    await timer.complete()
    return TimerSessionRead.from_session(await timer.transition_to_next())


@router.post("/next", response_model=TimerSessionRead)
async def next_session(timer: TimerService = Depends(get_timer_service)):
    return TimerSessionRead.from_session(await timer.transition_to_next())


@router.post("/reset", response_model=TimerSessionRead)
async def reset_session(timer: TimerService = Depends(get_timer_service)):
    return TimerSessionRead.from_session(await timer.reset())


@router.get("/settings", response_model=PomodoroSettings)
async def get_settings(timer: TimerService = Depends(get_timer_service)):
    return await timer.get_settings()


@router.put("/settings", response_model=PomodoroSettings)
async def update_settings(
    payload: SettingsUpdate,
    timer: TimerService = Depends(get_timer_service),
):
    current = await timer.get_settings()
    return await timer.update_settings(payload.apply_to(current))
