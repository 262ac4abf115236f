"""Wire format of the persisted state document."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .models import ActiveState, GlobalState, PausedState, SessionRecord


# Widest paused total that still leaves room for timestamp arithmetic.
MAX_BLANK_MS = (datetime.max - datetime.min) // timedelta(milliseconds=1)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"timestamp {value.isoformat()} is out of range") from exc


class SessionDocument(BaseModel):
    """One entry of the ``sessions`` mapping."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    generated: datetime
    resumed: datetime
    paused: datetime | None = None
    blank: int = Field(
        default=0,
        ge=0,
        le=MAX_BLANK_MS,
        description="Accumulated paused time in milliseconds.",
    )
    last_winded: datetime | None = Field(default=None, alias="lastWinded")

    @field_validator("generated", "resumed", "paused", "last_winded")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    @model_validator(mode="after")
    def _check_ordering(self) -> "SessionDocument":
        if self.resumed < self.generated:
            raise ValueError("resumed must not precede generated")
        return self

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionDocument":
        paused = record.state.paused_at if isinstance(record.state, PausedState) else None
        return cls(
            generated=record.generated_at,
            resumed=record.resumed_at,
            paused=paused,
            blank=min(record.blank // timedelta(milliseconds=1), MAX_BLANK_MS),
            last_winded=record.last_winded_at,
        )

    def to_record(self) -> SessionRecord:
        if self.paused is None:
            state = ActiveState(resumed_at=self.resumed)
        else:
            state = PausedState(resumed_at=self.resumed, paused_at=self.paused)
        return SessionRecord(
            generated_at=self.generated,
            state=state,
            blank=timedelta(milliseconds=self.blank),
            last_winded_at=self.last_winded,
        )


class StateDocument(BaseModel):
    """Top-level document stored on disk."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    last_generated: str | None = Field(default=None, alias="lastGenerated")
    last_run: str | None = Field(default=None, alias="lastRun")
    last_file: str | None = Field(default=None, alias="lastFile")
    generated_count: int = Field(default=0, ge=0, alias="generatedCount")
    run_count: int = Field(default=0, ge=0, alias="runCount")
    sessions: dict[str, SessionDocument] = Field(default_factory=dict)

    @classmethod
    def from_state(cls, state: GlobalState) -> "StateDocument":
        return cls(
            last_generated=state.last_generated,
            last_run=state.last_run,
            last_file=state.last_file,
            generated_count=state.generated_count,
            run_count=state.run_count,
            sessions={
                filename: SessionDocument.from_record(record)
                for filename, record in state.sessions.items()
            },
        )

    def to_state(self) -> GlobalState:
        return GlobalState(
            last_generated=self.last_generated,
            last_run=self.last_run,
            last_file=self.last_file,
            generated_count=self.generated_count,
            run_count=self.run_count,
            sessions={filename: doc.to_record() for filename, doc in self.sessions.items()},
        )


__all__ = ["MAX_BLANK_MS", "SessionDocument", "StateDocument"]
