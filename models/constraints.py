"""Vorgaben für einen Planungslauf (Pydantic v2)."""

import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from models.reservation import minutes_of_day

MINUTES_PER_DAY = 24 * 60


class EventConstraints(BaseModel):
    """Datum, Beginn, Gesamtdauer und Teilnehmerzahl einer Veranstaltung.

    Die Veranstaltung muss am selben Tag enden (kein Mehrtagesbetrieb).
    """

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    start: datetime.time
    duration_minutes: int = Field(gt=0)
    attendees: int = Field(gt=0)

    @model_validator(mode='after')
    def check_same_day(self):
        if self.end_minute > MINUTES_PER_DAY:
            raise ValueError(
                f"Veranstaltung endet nach Mitternacht "
                f"(Beginn {self.start.strftime('%H:%M')}, "
                f"Dauer {self.duration_minutes} min)"
            )
        return self

    @property
    def start_minute(self) -> int:
        return minutes_of_day(self.start)

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes

    def at_minute(self, minute: int) -> datetime.datetime:
        """Minuten seit Mitternacht → Zeitpunkt am Veranstaltungstag."""
        midnight = datetime.datetime.combine(self.date, datetime.time())
        return midnight + datetime.timedelta(minutes=minute)

    def describe(self) -> str:
        hours, minutes = divmod(self.duration_minutes, 60)
        return (
            f"{self.date.isoformat()} ab {self.start.strftime('%I:%M %p')}, "
            f"Dauer {hours:02d}:{minutes:02d} h, {self.attendees} Teilnehmende"
        )
