"""Session Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - focus_minutes >= 1; break_minutes 2-10; long_break_minutes 15-30; cycles >= 1
    - long_break_interval_cycles >= 1 when supplied
    - Note content <= 10000 chars; to-do item text 1-500 chars, stripped
    - Cross-field rules (FIXED needs cycles, FREESTYLE forbids them) are re-checked
      in core/session_settings.py; the schema rejects them early for a field-level error

Design Decisions:
    - to_domain() helpers on request models: routes hand core plain dataclasses,
      never Pydantic objects
    - Responses built from core/session_snapshot.py dicts (single serialization path)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from pomodify.core.domain_types import CyclePhase, SessionStatus, SessionType
from pomodify.core.session_note import NoteInput, TodoItemInput


# --- Notes --------------------------------------------------------------------

class TodoItemRequest(BaseModel):
    """One to-do item in a full note replacement."""
    text: str = Field(min_length=1, max_length=500)
    done: bool = False
    order_index: int | None = Field(None, ge=0)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("text cannot be empty or whitespace")
        return v


class NoteRequest(BaseModel):
    """Full note replacement: content plus the complete item list."""
    content: str | None = Field(None, max_length=10_000)
    items: list[TodoItemRequest] = Field(default_factory=list)

    def to_domain(self) -> NoteInput:
        return NoteInput(
            content=self.content,
            items=tuple(
                TodoItemInput(text=i.text, done=i.done, order_index=i.order_index)
                for i in self.items
            ),
        )


class TodoItemPatch(BaseModel):
    """Partial update of one item; omitted fields are kept."""
    text: str | None = Field(None, min_length=1, max_length=500)
    done: bool | None = None
    order_index: int | None = Field(None, ge=0)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("text cannot be empty or whitespace")
        return v


class TodoItemResponse(BaseModel):
    id: UUID
    text: str
    done: bool
    order_index: int | None = None


class NoteResponse(BaseModel):
    content: str
    items: list[TodoItemResponse]


# --- Session requests ---------------------------------------------------------

class SessionCreate(BaseModel):
    """Session creation — durations in whole minutes."""
    session_type: SessionType
    focus_minutes: int = Field(ge=1)
    break_minutes: int = Field(ge=2, le=10)
    cycles: int | None = Field(None, ge=1)
    enable_long_break: bool = False
    long_break_minutes: int | None = Field(None, ge=15, le=30)
    long_break_interval_cycles: int | None = Field(None, ge=1)
    note: NoteRequest | None = None

    @model_validator(mode="after")
    def validate_cycles_for_type(self):
        if self.session_type == SessionType.FIXED and self.cycles is None:
            raise ValueError("FIXED sessions require cycles")
        if self.session_type == SessionType.FREESTYLE and self.cycles is not None:
            raise ValueError("FREESTYLE sessions cannot set cycles")
        return self


class SessionUpdate(BaseModel):
    """Settings edit before the session starts. Omitted fields are kept."""
    session_type: SessionType | None = None
    focus_minutes: int | None = Field(None, ge=1)
    break_minutes: int | None = Field(None, ge=2, le=10)
    cycles: int | None = Field(None, ge=1)
    enable_long_break: bool | None = None
    long_break_minutes: int | None = Field(None, ge=15, le=30)
    long_break_interval_cycles: int | None = Field(None, ge=1)

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class CommandNoteBody(BaseModel):
    """Optional note payload for pause, complete-phase, stop and finish."""
    note: NoteRequest | None = None


class ResetBody(BaseModel):
    clear_note: bool = False


# --- Session response ---------------------------------------------------------

class SessionResponse(BaseModel):
    """Session response — public-facing view of the aggregate."""
    id: UUID
    activity_id: UUID
    session_type: SessionType
    status: SessionStatus
    current_phase: CyclePhase | None = None
    focus_minutes: int
    break_minutes: int
    long_break_minutes: int | None = None
    long_break_interval_cycles: int | None = None
    cycles: int | None = None
    cycles_completed: int
    focus_since_long_break: int
    note: NoteResponse | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime | None = None
    version: int


class SessionListResponse(BaseModel):
    sessions: list[SessionResponse]
