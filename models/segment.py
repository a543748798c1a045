"""Ergebnis-Modelle: Programmabschnitte und fertiger Plan (Pydantic v2)."""

import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict

from models.constraints import EventConstraints
from models.room import Room


class PhaseKind(str, Enum):
    OPENING = "opening"
    WORK = "work"
    MEAL = "meal"
    CLOSING = "closing"

    @property
    def label(self) -> str:
        """Beschriftung im Ausgabe-CSV ("Work Rooms", "Closing Room", ...)."""
        return _PHASE_LABELS[self]


_PHASE_LABELS = {
    PhaseKind.OPENING: "Opening Room",
    PhaseKind.WORK: "Work Rooms",
    PhaseKind.MEAL: "Meal Rooms",
    PhaseKind.CLOSING: "Closing Room",
}


class ScheduleSegment(BaseModel):
    """Ein zeitlich begrenzter Abschnitt des Plans mit seinen Räumen."""

    model_config = ConfigDict(frozen=True)

    kind: PhaseKind
    start: datetime.datetime
    end: datetime.datetime
    rooms: tuple[Room, ...]

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    @property
    def total_capacity(self) -> int:
        return sum(r.capacity for r in self.rooms)

    @property
    def label(self) -> str:
        """Kopfzeile wie "Work Rooms - 10:00 AM to 04:00 PM"."""
        return (
            f"{self.kind.label} - {self.start.strftime('%I:%M %p')} "
            f"to {self.end.strftime('%I:%M %p')}"
        )


class SchedulePlan(BaseModel):
    """Vollständiger Raumplan eines Veranstaltungstags."""

    model_config = ConfigDict(frozen=True)

    constraints: EventConstraints
    segments: tuple[ScheduleSegment, ...]

    def segments_of(self, kind: PhaseKind) -> list[ScheduleSegment]:
        return [s for s in self.segments if s.kind == kind]

    @property
    def opening(self) -> ScheduleSegment:
        return self.segments_of(PhaseKind.OPENING)[0]

    @property
    def closing(self) -> ScheduleSegment:
        return self.segments_of(PhaseKind.CLOSING)[0]

    @property
    def total_minutes(self) -> int:
        return sum(s.duration_minutes for s in self.segments)
