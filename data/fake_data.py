"""Testdaten-Generator für den Raumplaner.

Erzeugt einen kleinen Campus (Gebäude mit Hörsälen, Seminarräumen und
Computerräumen) sowie zufällige Reservierungen rund um ein Stichtagsdatum.

Absichtliche Engpässe:
  1. Nur ein Hörsaal pro Gebäude ist groß genug für Eröffnung/Abschluss
  2. Computerräume sind tagsüber teilweise durch Kurse belegt
  3. Der erste Hörsaal ist am Stichtag abends reserviert
"""

import datetime
import random
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich import box

from models.inventory import RoomInventory
from models.ledger import ReservationLedger
from models.reservation import Reservation
from models.room import Room

_BUILDINGS = ["Hauptgebäude", "Informatikum", "Seminarhaus", "Mensa-Trakt"]

_SEATING_TYPES = ["Tables", "Rows", "Movable", "Fixed"]

_BOOKING_TYPES = ["Lecture", "Exam", "Workshop", "Meeting", "Maintenance"]


class FakeDataGenerator:
    """Erzeugt reproduzierbare Räume und Reservierungen."""

    def __init__(self, seed: Optional[int] = None, rooms_per_building: int = 6) -> None:
        self.rng = random.Random(seed)
        self.rooms_per_building = rooms_per_building

    def _make_room(self, building: str, number: int, kind: str) -> Room:
        if kind == "hall":
            capacity = self.rng.choice([150, 200, 250, 300])
            room_type = "Lecture Hall"
        elif kind == "lab":
            capacity = self.rng.choice([20, 24, 30, 40])
            room_type = "Computer Lab"
        else:
            capacity = self.rng.choice([25, 30, 40, 60, 80])
            room_type = "Classroom"
        return Room(
            building=building,
            room=str(number),
            capacity=capacity,
            computers_available="Yes" if kind == "lab" else "No",
            seating_available="Yes",
            seating_type=self.rng.choice(_SEATING_TYPES),
            food_allowed="No" if kind == "lab" else self.rng.choice(["Yes", "No"]),
            priority=str(self.rng.randint(1, 3)),
            room_type=room_type,
        )

    def generate_rooms(self) -> RoomInventory:
        inventory = RoomInventory()
        for b_idx, building in enumerate(_BUILDINGS):
            base = (b_idx + 1) * 100
            inventory.add(self._make_room(building, base + 1, "hall"))
            for i in range(2, self.rooms_per_building + 1):
                kind = "lab" if building == "Informatikum" or i % 3 == 0 else "room"
                inventory.add(self._make_room(building, base + i, kind))
        return inventory

    def generate_reservations(
        self, inventory: RoomInventory, day: datetime.date, count: int = 25
    ) -> ReservationLedger:
        ledger = ReservationLedger()
        rooms = list(inventory)

        # Engpass 3: erster Hörsaal am Stichtag abends belegt
        first_hall = rooms[0]
        ledger.add(Reservation(
            building=first_hall.building, room=first_hall.room, date=day,
            start=datetime.time(19, 0), duration_minutes=120, booking_type="Lecture",
        ))

        for _ in range(count):
            room = self.rng.choice(rooms)
            offset = self.rng.randint(-2, 2)
            start_hour = self.rng.randint(7, 18)
            ledger.add(Reservation(
                building=room.building,
                room=room.room,
                date=day + datetime.timedelta(days=offset),
                start=datetime.time(start_hour, self.rng.choice([0, 30])),
                duration_minutes=self.rng.choice([60, 90, 120, 180]),
                booking_type=self.rng.choice(_BOOKING_TYPES),
            ))
        return ledger

    def generate(
        self, day: datetime.date, reservations: int = 25
    ) -> tuple[RoomInventory, ReservationLedger]:
        inventory = self.generate_rooms()
        return inventory, self.generate_reservations(inventory, day, reservations)

    def print_summary(self, inventory: RoomInventory, ledger: ReservationLedger) -> None:
        table = Table(title="Testdaten", box=box.ROUNDED)
        table.add_column("Gebäude", style="bold")
        table.add_column("Räume", justify="right")
        table.add_column("Plätze", justify="right")
        table.add_column("Computerräume", justify="right")
        for building in inventory.buildings():
            rooms = inventory.rooms_in(building)
            table.add_row(
                building,
                str(len(rooms)),
                str(sum(r.capacity for r in rooms)),
                str(sum(1 for r in rooms if r.is_lab())),
            )
        Console().print(table)
        Console().print(f"[dim]{len(ledger)} Reservierungen an {len(ledger.dates())} Tagen[/dim]")
