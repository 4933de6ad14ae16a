from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .store import ScoreRecord


class ScoreOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    value: int
    created_at: datetime = Field(alias="createdAt")

    @field_serializer("created_at")
    def _utc_millis(self, dt: datetime) -> str:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @classmethod
    def from_record(cls, rec: ScoreRecord) -> "ScoreOut":
        return cls(id=rec.id, value=rec.value, created_at=rec.created_at)


class Message(BaseModel):
    message: str
