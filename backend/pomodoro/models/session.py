# 파일 위치: backend/pomodoro/models/session.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from pomodoro.models.timer import SessionType


class CompletedIntervalInDB(BaseModel):
    """
    MongoDB의 'completed_sessions' 컬렉션에 저장되는 완료된 구간 문서입니다.
    한 번 저장되면 수정하지 않고, id 기준 삭제만 허용합니다.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str = Field(..., alias="_id") # MongoDB의 '_id'를 'id'로 매핑 (uuid 문자열)
    session_type: SessionType
    start_time: datetime
    end_time: datetime
    duration_seconds: int # end_time - start_time (초 단위, 항상 양수)
    created_at: datetime
