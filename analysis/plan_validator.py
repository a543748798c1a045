"""Nachträgliche Validierung eines fertigen Raumplans.

Prüft den Plan unabhängig vom Scheduler erneut gegen Inventar, Reservierungen
und Phasenregeln.
"""

from typing import Literal, Optional

from pydantic import BaseModel

from config.schema import PhaseConfig
from models.ledger import ReservationLedger
from models.reservation import minutes_of_day
from models.segment import PhaseKind, SchedulePlan
from solver.collision import CollisionChecker


class ValidationViolation(BaseModel):
    """Eine einzelne Regelverletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "room_collision"
    description: str
    entity: str          # Abschnitt oder Raum


class ValidationReport(BaseModel):
    """Ergebnis der Plan-Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        errors = [v for v in self.violations if v.severity == "error"]
        warnings = [v for v in self.violations if v.severity == "warning"]

        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(errors)} | Warnungen: {len(warnings)}"]
        console.print(Panel("\n".join(lines), title="Plan-Validierung", border_style="cyan"))

        if not self.violations:
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Regel", width=24)
        table.add_column("Entität", width=22)
        table.add_column("Beschreibung")
        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


def _minute(segment_time) -> int:
    return minutes_of_day(segment_time.time())


class PlanValidator:
    """Prüft einen SchedulePlan auf Regelverletzungen."""

    def __init__(self, ledger: ReservationLedger, phases: Optional[PhaseConfig] = None):
        self.checker = CollisionChecker(ledger)
        self.phases = phases or PhaseConfig()

    def validate(self, plan: SchedulePlan) -> ValidationReport:
        """Führt alle Checks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_timeline(plan))
        violations.extend(self._check_phase_order(plan))
        violations.extend(self._check_collisions(plan))
        violations.extend(self._check_plenary_rooms(plan))
        violations.extend(self._check_work_rooms(plan))
        violations.extend(self._check_meal_rooms(plan))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_timeline(self, plan: SchedulePlan) -> list[ValidationViolation]:
        """Abschnitte lückenlos, überschneidungsfrei, exakt über die Gesamtdauer."""
        violations: list[ValidationViolation] = []
        c = plan.constraints
        if not plan.segments:
            return [ValidationViolation(
                severity="error", constraint="timeline", entity="Plan",
                description="Plan enthält keine Abschnitte.",
            )]

        expected_start = c.at_minute(c.start_minute)
        expected_end = c.at_minute(c.end_minute)
        if plan.segments[0].start != expected_start:
            violations.append(ValidationViolation(
                severity="error", constraint="timeline", entity=plan.segments[0].label,
                description=f"Plan beginnt nicht um {expected_start:%I:%M %p}.",
            ))
        if plan.segments[-1].end != expected_end:
            violations.append(ValidationViolation(
                severity="error", constraint="timeline", entity=plan.segments[-1].label,
                description=f"Plan endet nicht um {expected_end:%I:%M %p}.",
            ))
        for prev, seg in zip(plan.segments, plan.segments[1:]):
            if seg.start != prev.end:
                violations.append(ValidationViolation(
                    severity="error", constraint="timeline", entity=seg.label,
                    description=f"Schließt nicht an '{prev.label}' an.",
                ))
        for seg in plan.segments:
            if seg.end <= seg.start:
                violations.append(ValidationViolation(
                    severity="error", constraint="timeline", entity=seg.label,
                    description="Abschnitt hat keine positive Dauer.",
                ))
        return violations

    def _check_phase_order(self, plan: SchedulePlan) -> list[ValidationViolation]:
        """Eröffnung zuerst, Abschluss zuletzt, dazwischen Arbeit/Essen im Wechsel."""
        kinds = [s.kind for s in plan.segments]
        problems: list[str] = []
        if not kinds or kinds[0] != PhaseKind.OPENING or kinds.count(PhaseKind.OPENING) != 1:
            problems.append("Genau eine Eröffnung am Anfang erwartet.")
        if not kinds or kinds[-1] != PhaseKind.CLOSING or kinds.count(PhaseKind.CLOSING) != 1:
            problems.append("Genau ein Abschluss am Ende erwartet.")
        middle = kinds[1:-1]
        for a, b in zip(middle, middle[1:]):
            if a == b:
                problems.append(f"Zwei Abschnitte '{a.label}' direkt hintereinander.")
        if middle and middle[0] != PhaseKind.WORK:
            problems.append("Auf die Eröffnung muss ein Arbeitsblock folgen.")
        return [
            ValidationViolation(severity="error", constraint="phase_order",
                                entity="Plan", description=p)
            for p in problems
        ]

    def _check_collisions(self, plan: SchedulePlan) -> list[ValidationViolation]:
        """Kein Raum darf in seinem Abschnitt reserviert sein."""
        violations: list[ValidationViolation] = []
        date = plan.constraints.date
        for seg in plan.segments:
            start = _minute(seg.start)
            for room in seg.rooms:
                if self.checker.has_collision(room, date, start, seg.duration_minutes):
                    violations.append(ValidationViolation(
                        severity="error", constraint="room_collision",
                        entity=f"{room.building} {room.room}",
                        description=f"Im Abschnitt '{seg.label}' bereits reserviert.",
                    ))
        return violations

    def _check_plenary_rooms(self, plan: SchedulePlan) -> list[ValidationViolation]:
        """Eröffnung und Abschluss: genau ein Raum, groß genug, kein Computerraum."""
        violations: list[ValidationViolation] = []
        attendees = plan.constraints.attendees
        lab = self.phases.lab_room_type
        for seg in plan.segments:
            if seg.kind not in (PhaseKind.OPENING, PhaseKind.CLOSING):
                continue
            if len(seg.rooms) != 1:
                violations.append(ValidationViolation(
                    severity="error", constraint="plenary_room", entity=seg.label,
                    description=f"{len(seg.rooms)} Räume statt genau einem.",
                ))
                continue
            room = seg.rooms[0]
            if room.capacity < attendees or room.is_lab(lab):
                violations.append(ValidationViolation(
                    severity="error", constraint="plenary_room",
                    entity=f"{room.building} {room.room}",
                    description=(
                        f"Ungeeignet für '{seg.label}' ({room.capacity} Plätze, "
                        f"Typ '{room.room_type}')."
                    ),
                ))

        openings = plan.segments_of(PhaseKind.OPENING)
        closings = plan.segments_of(PhaseKind.CLOSING)
        if openings and closings and openings[0].rooms and closings[0].rooms:
            opening_room = openings[0].rooms[0]
            closing = closings[0]
            opening_free = not self.checker.has_collision(
                opening_room, plan.constraints.date,
                _minute(closing.start), closing.duration_minutes,
            )
            reused = closing.rooms[0].key == opening_room.key
            if opening_free and not reused:
                violations.append(ValidationViolation(
                    severity="warning", constraint="closing_reuse",
                    entity=f"{opening_room.building} {opening_room.room}",
                    description="Eröffnungsraum wäre für den Abschluss frei gewesen.",
                ))
        return violations

    def _check_work_rooms(self, plan: SchedulePlan) -> list[ValidationViolation]:
        """Jeder Arbeitsblock braucht einen qualifizierenden Computerraum."""
        violations: list[ValidationViolation] = []
        attendees = plan.constraints.attendees
        lab = self.phases.lab_room_type
        ratio = self.phases.lab_capacity_ratio
        for seg in plan.segments_of(PhaseKind.WORK):
            if not any(r.is_lab(lab) and r.capacity * ratio >= attendees for r in seg.rooms):
                violations.append(ValidationViolation(
                    severity="error", constraint="work_lab", entity=seg.label,
                    description="Kein qualifizierender Computerraum.",
                ))
            if seg.total_capacity < attendees:
                violations.append(ValidationViolation(
                    severity="warning", constraint="work_capacity", entity=seg.label,
                    description=(
                        f"Zugewiesene Räume bieten {seg.total_capacity} Plätze "
                        f"für {attendees} Personen."
                    ),
                ))
        return violations

    def _check_meal_rooms(self, plan: SchedulePlan) -> list[ValidationViolation]:
        """Essenspausen: genug Räume und genug Plätze."""
        violations: list[ValidationViolation] = []
        attendees = plan.constraints.attendees
        for seg in plan.segments_of(PhaseKind.MEAL):
            if len(seg.rooms) < self.phases.min_meal_rooms:
                violations.append(ValidationViolation(
                    severity="error", constraint="meal_rooms", entity=seg.label,
                    description=(
                        f"Nur {len(seg.rooms)} Räume "
                        f"(mind. {self.phases.min_meal_rooms})."
                    ),
                ))
            if seg.total_capacity < attendees:
                violations.append(ValidationViolation(
                    severity="error", constraint="meal_capacity", entity=seg.label,
                    description=f"{seg.total_capacity} Plätze für {attendees} Personen.",
                ))
        return violations


def validate_plan(
    plan: SchedulePlan, ledger: ReservationLedger, phases: Optional[PhaseConfig] = None
) -> ValidationReport:
    return PlanValidator(ledger, phases).validate(plan)
