"""Zusammenbau der Programmabschnitte aus dem Scheduler-Trace."""

from dataclasses import dataclass

from models.constraints import EventConstraints
from models.room import Room
from models.segment import PhaseKind, ScheduleSegment


@dataclass(frozen=True)
class PhaseRecord:
    """Eine abgeschlossene Phase, so wie der Scheduler sie vergeben hat."""

    kind: PhaseKind
    start_minute: int
    duration_minutes: int
    rooms: tuple[Room, ...]


def assemble_segments(
    trace: tuple[PhaseRecord, ...], constraints: EventConstraints
) -> list[ScheduleSegment]:
    """Spielt die Zeitrechnung des Traces nach und erzeugt die Abschnitte.

    Jeder Abschnitt beginnt dort, wo der vorige endet. Passt ein Eintrag
    nicht lückenlos an, ist der Trace inkonsistent (ValueError).
    """
    segments: list[ScheduleSegment] = []
    cursor = constraints.start_minute
    for record in trace:
        if record.start_minute != cursor:
            raise ValueError(
                f"Trace nicht lückenlos: {record.kind.label} beginnt bei Minute "
                f"{record.start_minute}, erwartet {cursor}"
            )
        end = cursor + record.duration_minutes
        segments.append(ScheduleSegment(
            kind=record.kind,
            start=constraints.at_minute(cursor),
            end=constraints.at_minute(end),
            rooms=record.rooms,
        ))
        cursor = end
    return segments
