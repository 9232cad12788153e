# gemini_relay/schemas/common.py
from datetime import datetime, timezone

from typing import Annotated

from pydantic import AfterValidator, BaseModel


def _as_utc(value: datetime) -> datetime:
    # Stored timestamps are naive UTC
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


def ok(data=None, msg: str = "success") -> dict:
    """Success envelope; errors carry the HTTP status as code"""
    return {"code": 0, "msg": msg, "data": data}


class HealthCheck(BaseModel):
    status: str = "healthy"
    timestamp: float
