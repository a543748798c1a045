"""Eingabeformate für Datum, Uhrzeit, Dauer und Teilnehmerzahl.

Wird von der interaktiven Eingabe (main.py) und vom CSV-Import verwendet.
Jede Funktion wirft InputFormatError mit dem erwarteten Format im Text.
"""

import datetime
import re

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%I:%M %p"

_DURATION_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class InputFormatError(ValueError):
    """Eingabe entspricht nicht dem erwarteten Format."""

    def __init__(self, message: str, expected: str) -> None:
        super().__init__(message)
        self.expected = expected


def parse_date(raw: str) -> datetime.date:
    """'2024-05-01' → date(2024, 5, 1)."""
    try:
        return datetime.datetime.strptime(raw.strip(), DATE_FORMAT).date()
    except ValueError:
        raise InputFormatError(
            f"Ungültiges Datum '{raw}', Format <yyyy-mm-dd> verwenden", "yyyy-mm-dd"
        )


def parse_time(raw: str) -> datetime.time:
    """'09:00 AM' → time(9, 0)."""
    try:
        return datetime.datetime.strptime(raw.strip().upper(), TIME_FORMAT).time()
    except ValueError:
        raise InputFormatError(
            f"Ungültige Uhrzeit '{raw}', Format <hh:mm AM/PM> verwenden", "hh:mm AM/PM"
        )


def parse_duration(raw: str) -> int:
    """'10:30' → 630 (Minuten). Stunden 0–23, Minuten 0–59."""
    m = _DURATION_RE.match(raw.strip())
    if m:
        hours, minutes = int(m.group(1)), int(m.group(2))
        if hours < 24 and minutes < 60:
            return hours * 60 + minutes
    raise InputFormatError(
        f"Ungültige Dauer '{raw}', Format <hh:mm> verwenden", "hh:mm"
    )


def parse_attendees(raw: str) -> int:
    """Positive Ganzzahl ohne Vorzeichen oder führende Nullen."""
    value = raw.strip()
    if value.isdigit() and str(int(value)) == value and int(value) > 0:
        return int(value)
    raise InputFormatError(
        f"Ungültige Teilnehmerzahl '{raw}', positive Ganzzahl verwenden",
        "positive Ganzzahl",
    )


def format_duration(minutes: int) -> str:
    """630 → '10:30'."""
    hours, rest = divmod(minutes, 60)
    return f"{hours:02d}:{rest:02d}"


def format_time(t: datetime.time) -> str:
    return t.strftime(TIME_FORMAT)


def parse_filename(raw: str) -> str:
    """Dateiname ohne Endung, darf nicht leer sein."""
    value = raw.strip()
    if value and value not in (".", ".."):
        return value
    raise InputFormatError(
        "Dateiname darf nicht leer sein, Format <name> (ohne Endung) verwenden",
        "name",
    )
