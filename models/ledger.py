"""ReservationLedger – bestehende Reservierungen, gruppiert nach Datum."""

import datetime
from typing import Iterator, Optional

from models.reservation import Reservation


class ReservationLedger:
    """Verwaltet Reservierungen pro Kalendertag.

    Innerhalb eines Tages ist die Reihenfolge ohne Bedeutung. Leere Tage
    werden entfernt.
    """

    def __init__(self, reservations: Optional[list[Reservation]] = None) -> None:
        self._days: dict[datetime.date, list[Reservation]] = {}
        for reservation in reservations or []:
            self.add(reservation)

    def add(self, reservation: Reservation) -> None:
        self._days.setdefault(reservation.date, []).append(reservation)

    def find(
        self, building: str, room: str, date: datetime.date, start: datetime.time
    ) -> Optional[Reservation]:
        for r in self._days.get(date, []):
            if r.building == building and r.room == room and r.start == start:
                return r
        return None

    def delete(
        self, building: str, room: str, date: datetime.date, start: datetime.time
    ) -> bool:
        """Löscht eine Reservierung. Gibt True zurück wenn etwas gelöscht wurde."""
        found = self.find(building, room, date, start)
        if found is None:
            return False
        self._days[date].remove(found)
        if not self._days[date]:
            del self._days[date]
        return True

    def update(
        self,
        building: str,
        room: str,
        date: datetime.date,
        start: datetime.time,
        new: Reservation,
    ) -> bool:
        """Ersetzt eine Reservierung. Ändert sich das Datum, wandert sie in den neuen Tag."""
        found = self.find(building, room, date, start)
        if found is None:
            return False
        if new.date == date:
            bucket = self._days[date]
            bucket[bucket.index(found)] = new
        else:
            self.delete(building, room, date, start)
            self.add(new)
        return True

    def for_date(self, date: datetime.date) -> list[Reservation]:
        return list(self._days.get(date, []))

    def dates(self) -> list[datetime.date]:
        return list(self._days)

    def snapshot(self) -> "ReservationLedger":
        """Unabhängige Kopie für einen Planungslauf."""
        copy = ReservationLedger()
        copy._days = {d: list(rs) for d, rs in self._days.items()}
        return copy

    def __iter__(self) -> Iterator[Reservation]:
        for reservations in self._days.values():
            yield from reservations

    def __len__(self) -> int:
        return sum(len(rs) for rs in self._days.values())

    def __repr__(self) -> str:
        return f"ReservationLedger({len(self)} Reservierungen, {len(self._days)} Tage)"
