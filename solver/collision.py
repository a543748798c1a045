"""Kollisionsprüfung gegen bestehende Reservierungen."""

import datetime

from models.ledger import ReservationLedger
from models.room import Room


class CollisionChecker:
    """Prüft, ob ein Raum in einem Zeitfenster bereits belegt ist."""

    def __init__(self, ledger: ReservationLedger) -> None:
        self.ledger = ledger

    def has_collision(
        self,
        room: Room,
        date: datetime.date,
        window_start: int,
        window_minutes: int,
    ) -> bool:
        """True wenn eine Reservierung desselben Raums am Tag das Fenster schneidet.

        Fenster und Reservierungen sind halboffen, [start, start+dauer):
        direkt aneinander anschließende Belegungen kollidieren nicht.
        """
        for reservation in self.ledger.for_date(date):
            if reservation.room_key != room.key:
                continue
            if reservation.overlaps(window_start, window_minutes):
                return True
        return False
