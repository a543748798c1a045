"""Machbarkeits-Check vor der Planung (ohne Reservierungen).

Prüft, ob das Inventar die Phasenregeln grundsätzlich erfüllen kann. Ein
bestandener Check garantiert keinen Plan, weil Reservierungen Räume
zeitweise blockieren.
"""

from pydantic import BaseModel

from config.schema import PhaseConfig
from models.constraints import EventConstraints
from models.inventory import RoomInventory


class FeasibilityReport(BaseModel):
    """Ergebnis des Machbarkeits-Checks."""

    is_feasible: bool
    errors: list[str]      # Kritische Probleme (Planung unmöglich)
    warnings: list[str]    # Hinweise (Planung knapp aber möglich)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ PLANBAR[/bold green]"
        else:
            status = "[bold red]✗ NICHT PLANBAR[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (kritisch):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Machbarkeits-Check", border_style="cyan"))


def check_feasibility(
    inventory: RoomInventory, constraints: EventConstraints, phases: PhaseConfig
) -> FeasibilityReport:
    """Prüft Inventar und Vorgaben gegen die Phasenregeln.

    Prüfungen:
    1. Dauer ≥ Eröffnung + Abschluss
    2. Mind. ein Raum für alle Teilnehmenden (kein Computerraum)
    3. Mind. ein qualifizierender Computerraum
    4. Gesamtkapazität und Raumanzahl reichen für die Essenspausen
    """
    errors: list[str] = []
    warnings: list[str] = []
    attendees = constraints.attendees
    rooms = list(inventory)

    # ── 1. Dauer ─────────────────────────────────────────────────────────
    if constraints.duration_minutes < phases.fixed_minutes:
        errors.append(
            f"Dauer {constraints.duration_minutes} min < Eröffnung + Abschluss "
            f"({phases.fixed_minutes} min)."
        )

    # ── 2. Plenarraum ────────────────────────────────────────────────────
    plenary = [
        r for r in rooms
        if r.capacity >= attendees and not r.is_lab(phases.lab_room_type)
    ]
    if not plenary:
        errors.append(
            f"Kein Raum (außer Computerräumen) mit mind. {attendees} Plätzen "
            f"für Eröffnung und Abschluss."
        )
    elif len(plenary) == 1:
        warnings.append(
            f"Nur ein Raum für Eröffnung/Abschluss geeignet "
            f"({plenary[0].building} {plenary[0].room}) – eine Reservierung "
            f"im Abschlussfenster macht die Planung unmöglich."
        )

    # ── 3. Computerraum ──────────────────────────────────────────────────
    labs = [
        r for r in rooms
        if r.is_lab(phases.lab_room_type)
        and r.capacity * phases.lab_capacity_ratio >= attendees
    ]
    if not labs:
        errors.append(
            f"Kein '{phases.lab_room_type}' mit mind. "
            f"{attendees / phases.lab_capacity_ratio:g} Plätzen."
        )

    # ── 4. Essenspausen / Gesamtkapazität ────────────────────────────────
    total = sum(r.capacity for r in rooms)
    if total < attendees:
        errors.append(f"Gesamtkapazität {total} < {attendees} Teilnehmende.")
    elif total < attendees * 1.2:
        warnings.append(
            f"Gesamtkapazität sehr knapp: {total} Plätze für {attendees} Teilnehmende."
        )
    if len(rooms) < phases.min_meal_rooms:
        errors.append(
            f"Nur {len(rooms)} Räume, Essenspausen brauchen mind. "
            f"{phases.min_meal_rooms}."
        )

    return FeasibilityReport(
        is_feasible=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )
