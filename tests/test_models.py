"""Tests für die Datenmodelle (Room, Reservation, Inventar, Ledger)."""

import datetime

import pytest
from pydantic import ValidationError

from models.constraints import EventConstraints
from models.inventory import RoomInventory
from models.ledger import ReservationLedger
from models.reservation import Reservation
from models.room import Room


DAY = datetime.date(2024, 5, 1)


def make_room(building: str, room: str, capacity: int, room_type: str = "Classroom") -> Room:
    return Room(building=building, room=room, capacity=capacity, room_type=room_type)


def make_reservation(building: str, room: str, start: datetime.time,
                     minutes: int, day: datetime.date = DAY) -> Reservation:
    return Reservation(building=building, room=room, date=day, start=start,
                       duration_minutes=minutes, booking_type="Lecture")


# ─── ROOM ─────────────────────────────────────────────────────────────────────

class TestRoom:
    def test_valid_room(self):
        room = make_room("B1", "101", 30)
        assert room.key == ("B1", "101")
        assert room.capacity == 30

    def test_room_number_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_room("B1", "0", 30)
        with pytest.raises(ValidationError):
            make_room("B1", "-4", 30)

    def test_room_number_must_be_numeric(self):
        with pytest.raises(ValidationError):
            make_room("B1", "A12", 30)

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_room("B1", "1", 0)

    def test_capacity_from_string(self):
        """CSV-Werte kommen als Text und werden zu int."""
        room = Room(building="B1", room="1", capacity="45")
        assert room.capacity == 45

    def test_capacity_text(self):
        assert Room(building="B1", room="1", capacity="050").as_row()[2] == "050"
        assert Room(building="B1", room="1", capacity=50).as_row()[2] == "50"

    def test_capacity_text_below_one_seat(self):
        with pytest.raises(ValidationError):
            Room(building="B1", room="1", capacity="0.5")

    def test_is_lab(self):
        assert make_room("B1", "1", 10, "Computer Lab").is_lab()
        assert not make_room("B1", "1", 10, "computer lab").is_lab()
        assert make_room("B1", "1", 10, "PC-Pool").is_lab("PC-Pool")

    def test_as_row_order(self):
        room = Room(building="B1", room="7", capacity=25, computers_available="Yes",
                    seating_available="Yes", seating_type="Tables", food_allowed="No",
                    priority="2", room_type="Computer Lab")
        assert room.as_row() == [
            "B1", "7", "25", "Yes", "Yes", "Tables", "No", "2", "Computer Lab",
        ]

    def test_room_is_immutable(self):
        room = make_room("B1", "1", 10)
        with pytest.raises(ValidationError):
            room.capacity = 99


# ─── RESERVATION ──────────────────────────────────────────────────────────────

class TestReservation:
    def test_minutes(self):
        r = make_reservation("B1", "1", datetime.time(13, 30), 90)
        assert r.start_minute == 13 * 60 + 30
        assert r.end_minute == 15 * 60

    def test_overlap_half_open(self):
        """[10:00, 11:00) schneidet [09:00, 10:00) nicht."""
        r = make_reservation("B1", "1", datetime.time(10, 0), 60)
        assert not r.overlaps(9 * 60, 60)
        assert not r.overlaps(11 * 60, 60)
        assert r.overlaps(9 * 60 + 1, 60)
        assert r.overlaps(10 * 60 + 59, 60)

    def test_overlap_enclosing_window(self):
        r = make_reservation("B1", "1", datetime.time(12, 0), 30)
        assert r.overlaps(10 * 60, 6 * 60)

    def test_key(self):
        r = make_reservation("B1", "1", datetime.time(8, 0), 60)
        assert r.key == ("B1", "1", DAY, datetime.time(8, 0))
        assert r.room_key == ("B1", "1")


# ─── EVENT CONSTRAINTS ────────────────────────────────────────────────────────

class TestEventConstraints:
    def test_end_minute(self):
        c = EventConstraints(date=DAY, start=datetime.time(9, 0),
                             duration_minutes=600, attendees=40)
        assert c.start_minute == 540
        assert c.end_minute == 1140
        assert c.at_minute(1140) == datetime.datetime(2024, 5, 1, 19, 0)

    def test_must_end_same_day(self):
        with pytest.raises(ValidationError):
            EventConstraints(date=DAY, start=datetime.time(20, 0),
                             duration_minutes=300, attendees=10)

    def test_attendees_positive(self):
        with pytest.raises(ValidationError):
            EventConstraints(date=DAY, start=datetime.time(9, 0),
                             duration_minutes=300, attendees=0)


# ─── ROOM INVENTORY ───────────────────────────────────────────────────────────

class TestRoomInventory:
    def _inventory(self) -> RoomInventory:
        return RoomInventory([
            make_room("Nord", "1", 10),
            make_room("Süd", "5", 20),
            make_room("Nord", "2", 30),
        ])

    def test_insertion_order(self):
        """Gebäude in Reihenfolge des ersten Auftretens, Räume darin ebenso."""
        inv = self._inventory()
        assert inv.buildings() == ["Nord", "Süd"]
        assert [r.key for r in inv] == [("Nord", "1"), ("Nord", "2"), ("Süd", "5")]
        assert len(inv) == 3

    def test_get(self):
        inv = self._inventory()
        assert inv.get("Süd", "5").capacity == 20
        assert inv.get("Süd", "6") is None

    def test_remove_drops_empty_building(self):
        inv = self._inventory()
        assert inv.remove("Süd", "5")
        assert inv.buildings() == ["Nord"]
        assert not inv.remove("Süd", "5")

    def test_replace_keeps_position(self):
        inv = self._inventory()
        assert inv.replace("Nord", "1", make_room("Nord", "1", 99))
        assert [r.capacity for r in inv] == [99, 30, 20]

    def test_replace_moves_building(self):
        inv = self._inventory()
        assert inv.replace("Nord", "1", make_room("Süd", "1", 10))
        assert [r.key for r in inv] == [("Nord", "2"), ("Süd", "5"), ("Süd", "1")]

    def test_snapshot_is_independent(self):
        inv = self._inventory()
        snap = inv.snapshot()
        inv.add(make_room("West", "9", 5))
        inv.remove("Nord", "1")
        assert len(snap) == 3
        assert snap.get("Nord", "1") is not None


# ─── RESERVATION LEDGER ───────────────────────────────────────────────────────

class TestReservationLedger:
    def test_grouped_by_date(self):
        other = DAY + datetime.timedelta(days=1)
        ledger = ReservationLedger([
            make_reservation("B1", "1", datetime.time(8, 0), 60),
            make_reservation("B1", "2", datetime.time(8, 0), 60, day=other),
        ])
        assert len(ledger.for_date(DAY)) == 1
        assert len(ledger.for_date(other)) == 1
        assert ledger.for_date(datetime.date(2030, 1, 1)) == []

    def test_delete(self):
        ledger = ReservationLedger([make_reservation("B1", "1", datetime.time(8, 0), 60)])
        assert not ledger.delete("B1", "1", DAY, datetime.time(9, 0))
        assert ledger.delete("B1", "1", DAY, datetime.time(8, 0))
        assert len(ledger) == 0
        assert ledger.dates() == []

    def test_update_same_date(self):
        ledger = ReservationLedger([make_reservation("B1", "1", datetime.time(8, 0), 60)])
        new = make_reservation("B1", "1", datetime.time(8, 0), 120)
        assert ledger.update("B1", "1", DAY, datetime.time(8, 0), new)
        assert ledger.for_date(DAY)[0].duration_minutes == 120

    def test_update_moves_between_dates(self):
        other = DAY + datetime.timedelta(days=3)
        ledger = ReservationLedger([make_reservation("B1", "1", datetime.time(8, 0), 60)])
        new = make_reservation("B1", "1", datetime.time(10, 0), 60, day=other)
        assert ledger.update("B1", "1", DAY, datetime.time(8, 0), new)
        assert ledger.dates() == [other]
        assert ledger.find("B1", "1", other, datetime.time(10, 0)) == new

    def test_update_missing(self):
        ledger = ReservationLedger()
        new = make_reservation("B1", "1", datetime.time(10, 0), 60)
        assert not ledger.update("B1", "1", DAY, datetime.time(8, 0), new)

    def test_snapshot_is_independent(self):
        ledger = ReservationLedger([make_reservation("B1", "1", datetime.time(8, 0), 60)])
        snap = ledger.snapshot()
        ledger.delete("B1", "1", DAY, datetime.time(8, 0))
        assert len(snap) == 1
