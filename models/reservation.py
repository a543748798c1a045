"""Datenmodell für eine bestehende Raumreservierung (Pydantic v2)."""

import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def minutes_of_day(t: datetime.time) -> int:
    """Uhrzeit → Minuten seit Mitternacht."""
    return t.hour * 60 + t.minute


class Reservation(BaseModel):
    """Eine Belegung eines Raums an einem Tag."""

    model_config = ConfigDict(frozen=True)

    building: str
    room: str
    date: datetime.date
    start: datetime.time
    duration_minutes: int = Field(ge=0)
    booking_type: str = ""

    @field_validator("room")
    @classmethod
    def check_room_number(cls, v: str) -> str:
        v = v.strip()
        if int(v) <= 0:
            raise ValueError(f"Raumnummer muss > 0 sein (ist {v})")
        return v

    @property
    def key(self) -> tuple[str, str, datetime.date, datetime.time]:
        """Identität einer Reservierung: (Gebäude, Raum, Datum, Beginn)."""
        return (self.building, self.room, self.date, self.start)

    @property
    def room_key(self) -> tuple[str, str]:
        return (self.building, self.room)

    @property
    def start_minute(self) -> int:
        return minutes_of_day(self.start)

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes

    def overlaps(self, window_start: int, window_minutes: int) -> bool:
        """Halboffene Überschneidung von [start, start+dauer) mit der Reservierung."""
        window_end = window_start + window_minutes
        return window_end > self.start_minute and window_start < self.end_minute

    def __str__(self) -> str:
        return (
            f"{self.building},{self.room},{self.date.isoformat()},"
            f"{self.start.strftime('%I:%M %p')},"
            f"{self.duration_minutes // 60:02d}:{self.duration_minutes % 60:02d},"
            f"{self.booking_type}"
        )
