"""Gemeinsame Hilfsfunktionen für CSV-, Excel- und Terminal-Ausgabe."""

from datetime import date

from config.defaults import ROOM_COLUMNS
from models.segment import SchedulePlan

REPORT_TITLE = "--- Generated Schedule ---"

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "opening": "B3D4FF",
    "work":    "B3FFB3",
    "meal":    "FFF2B3",
    "closing": "D4B3FF",
    "header":  "4472C4",
}


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def build_report_rows(plan: SchedulePlan) -> list[list[str]]:
    """Zeilen des Ausgabeberichts in fester Reihenfolge.

    Titel, Kopfzeile, Leerzeile; danach pro Abschnitt eine Leerzeile,
    die Abschnittszeile ("Work Rooms - 10:00 AM to 04:00 PM") und je
    Raum eine Zeile mit den neun Raumattributen.
    """
    rows: list[list[str]] = [[REPORT_TITLE], list(ROOM_COLUMNS), []]
    for segment in plan.segments:
        rows.append([])
        rows.append([segment.label])
        for room in segment.rooms:
            rows.append(room.as_row())
    return rows


def is_segment_label(row: list[str]) -> bool:
    """True für Abschnittszeilen (eine Zelle, "<Phase> - … to …")."""
    return len(row) == 1 and " - " in row[0] and " to " in row[0]
