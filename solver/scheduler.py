"""Phasen-Scheduler: Greedy-Raumvergabe für einen Veranstaltungstag.

Architektur:
  - Zustandsautomat OPENING → WORK → MEAL → WORK → … → CLOSING → fertig
  - SchedulerState (Cursor, Fensterlänge, Trace) wird ausschließlich über
    advance() weitergeschaltet, es gibt keinen versteckten Objektzustand
  - Jede Phase durchläuft das komplette Inventar von vorn (First-Fit,
    Gebäude und Räume in Einfügereihenfolge)
  - Findet ein vollständiger Durchlauf keine passende Raumauswahl, wird
    SchedulingInfeasibleError geworfen
  - Zeiten in ganzen Minuten seit Mitternacht
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional

from config.schema import PhaseConfig
from models.constraints import EventConstraints
from models.inventory import RoomInventory
from models.ledger import ReservationLedger
from models.room import Room
from models.segment import PhaseKind, SchedulePlan
from solver.assembly import PhaseRecord, assemble_segments
from solver.collision import CollisionChecker

logger = logging.getLogger(__name__)


class SchedulingInfeasibleError(Exception):
    """Planung mit den gegebenen Vorgaben nicht möglich."""

    def __init__(self, message: str, phase: Optional[PhaseKind] = None) -> None:
        super().__init__(
            f"Planung mit den gegebenen Vorgaben nicht möglich: {message}"
        )
        self.phase = phase


# ─── Zustand ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlanningContext:
    """Unveränderliche Eingaben eines Laufs (Snapshot von Inventar und Ledger)."""

    rooms: tuple[Room, ...]
    checker: CollisionChecker
    constraints: EventConstraints
    phases: PhaseConfig

    @property
    def closing_start(self) -> int:
        """Minute, ab der der Abschluss zwingend beginnt."""
        return self.constraints.end_minute - self.phases.closing_minutes


@dataclass(frozen=True)
class SchedulerState:
    phase: Optional[PhaseKind]   # None = fertig
    cursor: int                  # Minuten seit Mitternacht
    duration: int                # Länge des aktuellen Phasenfensters
    trace: tuple[PhaseRecord, ...] = field(default_factory=tuple)

    @property
    def done(self) -> bool:
        return self.phase is None

    @property
    def opening_room(self) -> Optional[Room]:
        for record in self.trace:
            if record.kind == PhaseKind.OPENING:
                return record.rooms[0]
        return None


# ─── Übergänge ────────────────────────────────────────────────────────────────

def initial_state(ctx: PlanningContext) -> SchedulerState:
    """Startzustand: Eröffnung zum gewünschten Beginn."""
    if ctx.constraints.duration_minutes < ctx.phases.fixed_minutes:
        raise SchedulingInfeasibleError(
            f"Dauer {ctx.constraints.duration_minutes} min ist kürzer als "
            f"Eröffnung + Abschluss ({ctx.phases.fixed_minutes} min)"
        )
    return SchedulerState(
        phase=PhaseKind.OPENING,
        cursor=ctx.constraints.start_minute,
        duration=ctx.phases.opening_minutes,
    )


def advance(ctx: PlanningContext, state: SchedulerState) -> SchedulerState:
    """Vergibt die Räume der aktuellen Phase und schaltet zur nächsten weiter."""
    if state.phase == PhaseKind.OPENING:
        return _opening(ctx, state)
    if state.phase == PhaseKind.WORK:
        return _work(ctx, state)
    if state.phase == PhaseKind.MEAL:
        return _meal(ctx, state)
    if state.phase == PhaseKind.CLOSING:
        return _closing(ctx, state)
    raise ValueError("Planung ist bereits abgeschlossen")


def _free_rooms(ctx: PlanningContext, state: SchedulerState) -> Iterator[Room]:
    """Alle Räume ohne Kollision im aktuellen Fenster, in Inventar-Reihenfolge."""
    for room in ctx.rooms:
        if not ctx.checker.has_collision(
            room, ctx.constraints.date, state.cursor, state.duration
        ):
            yield room


def _fits_plenary(ctx: PlanningContext, room: Room) -> bool:
    """Eröffnung/Abschluss: ein Raum für alle, kein Computerraum."""
    return (
        room.capacity >= ctx.constraints.attendees
        and not room.is_lab(ctx.phases.lab_room_type)
    )


def _is_qualifying_lab(ctx: PlanningContext, room: Room) -> bool:
    return (
        room.is_lab(ctx.phases.lab_room_type)
        and room.capacity * ctx.phases.lab_capacity_ratio >= ctx.constraints.attendees
    )


def _infeasible(ctx: PlanningContext, state: SchedulerState, reason: str):
    start = ctx.constraints.at_minute(state.cursor).strftime("%I:%M %p")
    end = ctx.constraints.at_minute(state.cursor + state.duration).strftime("%I:%M %p")
    return SchedulingInfeasibleError(
        f"{state.phase.label} {start}–{end}: {reason}", phase=state.phase
    )


def _next_phase(
    ctx: PlanningContext,
    cursor: int,
    trace: tuple[PhaseRecord, ...],
    candidate: PhaseKind,
    max_minutes: int,
) -> SchedulerState:
    """Geht in die Kandidaten-Phase über, oder direkt in den Abschluss,
    wenn bis zum Abschlussfenster keine Zeit mehr bleibt."""
    remaining = ctx.closing_start - cursor
    if remaining <= 0:
        return SchedulerState(PhaseKind.CLOSING, cursor,
                              ctx.phases.closing_minutes, trace)
    return SchedulerState(candidate, cursor, min(max_minutes, remaining), trace)


def _opening(ctx: PlanningContext, state: SchedulerState) -> SchedulerState:
    for room in _free_rooms(ctx, state):
        if _fits_plenary(ctx, room):
            break
    else:
        raise _infeasible(
            ctx, state,
            f"kein freier Raum (kein Computerraum) für "
            f"{ctx.constraints.attendees} Personen",
        )

    logger.info(f"Eröffnung: {room.building} {room.room} ({room.capacity} Plätze)")
    record = PhaseRecord(PhaseKind.OPENING, state.cursor, state.duration, (room,))
    return _next_phase(
        ctx, state.cursor + state.duration, state.trace + (record,),
        PhaseKind.WORK, ctx.phases.max_work_minutes,
    )


def _work(ctx: PlanningContext, state: SchedulerState) -> SchedulerState:
    """Arbeitsblock.

    Nicht-Computerräume werden nur aufgenommen, solange die gesammelte
    Kapazität (mit Reservefaktor) unter der Teilnehmerzahl bleibt. Der Rest
    bleibt einem qualifizierenden Computerraum vorbehalten. Die gezählte
    Kapazität umfasst alle kollisionsfreien Räume des Durchlaufs.
    """
    attendees = ctx.constraints.attendees
    headroom = ctx.phases.work_headroom
    capacity_ct = 0
    lab_included = False
    rooms: list[Room] = []

    for room in _free_rooms(ctx, state):
        qualifying_lab = _is_qualifying_lab(ctx, room)
        if qualifying_lab or (
            not room.is_lab(ctx.phases.lab_room_type)
            and capacity_ct + room.capacity * headroom < attendees
        ):
            rooms.append(room)
            lab_included = lab_included or qualifying_lab
        capacity_ct += room.capacity
        if capacity_ct >= attendees and lab_included:
            break
    else:
        if not lab_included:
            reason = (
                f"kein freier Computerraum mit mind. "
                f"{attendees / ctx.phases.lab_capacity_ratio:g} Plätzen"
            )
        else:
            reason = f"freie Kapazität {capacity_ct} < {attendees} Personen"
        raise _infeasible(ctx, state, reason)

    logger.info(
        f"Arbeitsblock ab Minute {state.cursor}: {len(rooms)} Räume, "
        f"{state.duration} min"
    )
    record = PhaseRecord(PhaseKind.WORK, state.cursor, state.duration, tuple(rooms))
    return _next_phase(
        ctx, state.cursor + state.duration, state.trace + (record,),
        PhaseKind.MEAL, ctx.phases.meal_minutes,
    )


def _meal(ctx: PlanningContext, state: SchedulerState) -> SchedulerState:
    attendees = ctx.constraints.attendees
    capacity_ct = 0
    rooms: list[Room] = []

    for room in _free_rooms(ctx, state):
        rooms.append(room)
        capacity_ct += room.capacity
        if capacity_ct >= attendees and len(rooms) >= ctx.phases.min_meal_rooms:
            break
    else:
        raise _infeasible(
            ctx, state,
            f"{len(rooms)} freie Räume mit {capacity_ct} Plätzen, benötigt "
            f"mind. {ctx.phases.min_meal_rooms} Räume für {attendees} Personen",
        )

    logger.info(
        f"Essenspause ab Minute {state.cursor}: {len(rooms)} Räume, "
        f"{capacity_ct} Plätze"
    )
    record = PhaseRecord(PhaseKind.MEAL, state.cursor, state.duration, tuple(rooms))
    return _next_phase(
        ctx, state.cursor + state.duration, state.trace + (record,),
        PhaseKind.WORK, ctx.phases.max_work_minutes,
    )


def _closing(ctx: PlanningContext, state: SchedulerState) -> SchedulerState:
    opening = state.opening_room
    date = ctx.constraints.date
    if opening is not None and not ctx.checker.has_collision(
        opening, date, state.cursor, state.duration
    ):
        room = opening
    else:
        for room in _free_rooms(ctx, state):
            if _fits_plenary(ctx, room):
                break
        else:
            raise _infeasible(
                ctx, state,
                f"kein freier Raum (kein Computerraum) für "
                f"{ctx.constraints.attendees} Personen",
            )

    logger.info(
        f"Abschluss: {room.building} {room.room}"
        + (" (Eröffnungsraum)" if opening is not None and room.key == opening.key else "")
    )
    record = PhaseRecord(PhaseKind.CLOSING, state.cursor, state.duration, (room,))
    return SchedulerState(
        phase=None,
        cursor=state.cursor + state.duration,
        duration=0,
        trace=state.trace + (record,),
    )


# ─── Haupt-Scheduler ──────────────────────────────────────────────────────────

class PhaseScheduler:
    """Greedy-Raumplaner für einen Veranstaltungstag.

    Verwendung:
        scheduler = PhaseScheduler(inventory, ledger)
        plan = scheduler.generate_plan(constraints)
    """

    def __init__(
        self,
        inventory: RoomInventory,
        ledger: ReservationLedger,
        phases: Optional[PhaseConfig] = None,
    ) -> None:
        self.inventory = inventory
        self.ledger = ledger
        self.phases = phases or PhaseConfig()

    def context(self, constraints: EventConstraints) -> PlanningContext:
        """Eingaben eines Laufs auf Basis von Snapshots des aktuellen Stands."""
        return PlanningContext(
            rooms=tuple(self.inventory.snapshot()),
            checker=CollisionChecker(self.ledger.snapshot()),
            constraints=constraints,
            phases=self.phases,
        )

    def run(self, constraints: EventConstraints) -> SchedulerState:
        """Führt den Zustandsautomaten bis zum Ende aus und gibt den Endzustand zurück."""
        ctx = self.context(constraints)
        logger.info(f"Planung gestartet: {constraints.describe()}")
        state = initial_state(ctx)
        while not state.done:
            state = advance(ctx, state)
        return state

    def generate_plan(self, constraints: EventConstraints) -> SchedulePlan:
        """Erzeugt den vollständigen Plan (Eröffnung bis Abschluss)."""
        state = self.run(constraints)
        segments = assemble_segments(state.trace, constraints)
        logger.info(f"Planung abgeschlossen: {len(segments)} Abschnitte")
        return SchedulePlan(constraints=constraints, segments=tuple(segments))
