"""Terminal-Darstellung eines Raumplans (Rich)."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.segment import SchedulePlan

_PHASE_NAMES = {
    "opening": "Eröffnung",
    "work": "Arbeitsblock",
    "meal": "Essenspause",
    "closing": "Abschluss",
}


def render_plan_rows(plan: "SchedulePlan") -> list[list[str]]:
    """Gibt Tabellenzeilen für die Planübersicht zurück.

    Jede Zeile: [Abschnitt, Zeit, Räume, Plätze]
    """
    rows: list[list[str]] = []
    for segment in plan.segments:
        rooms = "\n".join(
            f"{r.building} {r.room} ({r.room_type or '—'})" for r in segment.rooms
        )
        rows.append([
            _PHASE_NAMES[segment.kind.value],
            f"{segment.start.strftime('%I:%M %p')}–{segment.end.strftime('%I:%M %p')}",
            rooms,
            str(segment.total_capacity),
        ])
    return rows


def print_plan(plan: "SchedulePlan", title: str = "Raumplan") -> None:
    from rich.console import Console
    from rich.table import Table
    from rich import box

    table = Table(title=f"{title} – {plan.constraints.describe()}",
                  box=box.ROUNDED, show_lines=True)
    table.add_column("Abschnitt", style="bold")
    table.add_column("Zeit")
    table.add_column("Räume")
    table.add_column("Plätze", justify="right")
    for row in render_plan_rows(plan):
        table.add_row(*row)
    Console().print(table)
