"""Tests für Eingabeformate, CSV-Import/-Rückschreiben und Testdaten."""

import csv
import datetime

import pytest

from data.csv_import import (
    CsvImportError, load_reservations, load_rooms, save_reservations, save_rooms,
)
from data.fake_data import FakeDataGenerator
from data.parsing import (
    InputFormatError, format_duration, format_time, parse_attendees, parse_date,
    parse_duration, parse_filename, parse_time,
)


ROOM_HEADER = (
    "Building,Room,Capacity,Computers Available,Seating Available,"
    "Seating Type,Food Allowed,Priority,Room Type\n"
)
RESERVATION_HEADER = "Building,Room,Date,Time,Duration,Booking Type\n"


def write(path, text: str):
    path.write_text(text, encoding="utf-8")
    return path


# ─── PARSING ──────────────────────────────────────────────────────────────────

class TestParsing:
    def test_parse_date(self):
        assert parse_date("2024-05-01") == datetime.date(2024, 5, 1)

    @pytest.mark.parametrize("raw", ["01.05.2024", "2024-13-01", "2024-02-30", ""])
    def test_parse_date_invalid(self, raw):
        with pytest.raises(InputFormatError) as exc:
            parse_date(raw)
        assert exc.value.expected == "yyyy-mm-dd"

    def test_parse_time(self):
        assert parse_time("09:00 AM") == datetime.time(9, 0)
        assert parse_time("12:30 PM") == datetime.time(12, 30)
        assert parse_time("12:00 AM") == datetime.time(0, 0)
        assert parse_time("04:15 pm") == datetime.time(16, 15)

    @pytest.mark.parametrize("raw", ["13:00", "13:00 PM", "9 AM", "noon"])
    def test_parse_time_invalid(self, raw):
        with pytest.raises(InputFormatError):
            parse_time(raw)

    def test_parse_duration(self):
        assert parse_duration("10:30") == 630
        assert parse_duration("04:00") == 240
        assert parse_duration("0:45") == 45

    @pytest.mark.parametrize("raw", ["24:00", "10:60", "10", "1:5", "-1:00", "abc"])
    def test_parse_duration_invalid(self, raw):
        with pytest.raises(InputFormatError):
            parse_duration(raw)

    def test_parse_attendees(self):
        assert parse_attendees("40") == 40
        assert parse_attendees(" 7 ") == 7

    @pytest.mark.parametrize("raw", ["0", "-3", "007", "4.5", "+4", "zehn", ""])
    def test_parse_attendees_invalid(self, raw):
        with pytest.raises(InputFormatError):
            parse_attendees(raw)

    def test_parse_filename(self):
        assert parse_filename(" tag1 ") == "tag1"

    @pytest.mark.parametrize("raw", ["", "   ", "."])
    def test_parse_filename_invalid(self, raw):
        with pytest.raises(InputFormatError):
            parse_filename(raw)

    def test_format(self):
        assert format_duration(630) == "10:30"
        assert format_duration(60) == "01:00"
        assert format_time(datetime.time(16, 0)) == "04:00 PM"


# ─── RAUMLISTE ────────────────────────────────────────────────────────────────

class TestLoadRooms:
    def test_valid_rows(self, tmp_path):
        path = write(tmp_path / "rooms.csv", ROOM_HEADER +
                     "B1,1,50,No,Yes,Rows,Yes,1,Lecture Hall\n"
                     "B1,2,10,Yes,Yes,Tables,No,2,Computer Lab\n"
                     "B2,3,20,No,Yes,Tables,Yes,3,Classroom\n")
        inventory, report = load_rooms(path)
        assert len(inventory) == 3
        assert report.loaded == 3
        assert report.skipped_count == 0
        assert inventory.buildings() == ["B1", "B2"]
        assert inventory.get("B1", "2").is_lab()

    def test_invalid_rows_dropped(self, tmp_path):
        """Raumnummer ≤ 0 und Kapazität ≤ 0 werden verworfen."""
        path = write(tmp_path / "rooms.csv", ROOM_HEADER +
                     "B1,0,50,No,Yes,Rows,Yes,1,Lecture Hall\n"
                     "B1,-2,50,No,Yes,Rows,Yes,1,Lecture Hall\n"
                     "B1,4,0,No,Yes,Rows,Yes,1,Lecture Hall\n"
                     "B1,5,viele,No,Yes,Rows,Yes,1,Lecture Hall\n"
                     "B1,6,30,No,Yes,Rows,Yes,1,Classroom\n")
        inventory, report = load_rooms(path)
        assert [r.room for r in inventory] == ["6"]
        assert report.skipped_count == 4
        assert report.skipped[0].startswith("Zeile 2:")

    def test_missing_file(self, tmp_path):
        with pytest.raises(CsvImportError):
            load_rooms(tmp_path / "fehlt.csv")

    def test_utf8_bom_and_whitespace(self, tmp_path):
        path = tmp_path / "rooms.csv"
        path.write_text("\ufeff" + ROOM_HEADER + " B1 , 1 , 50 ,No,Yes,Rows,Yes,1, Classroom \n",
                        encoding="utf-8")
        inventory, _ = load_rooms(path)
        room = inventory.get("B1", "1")
        assert room is not None
        assert room.capacity == 50
        assert room.room_type == "Classroom"

    def test_round_trip_keeps_columns(self, tmp_path):
        row = "B1,1,50,No,Yes,Rows,Yes,1,Lecture Hall"
        path = write(tmp_path / "rooms.csv", ROOM_HEADER + row + "\n")
        inventory, _ = load_rooms(path)
        out = tmp_path / "out.csv"
        save_rooms(inventory, out)
        with open(out, encoding="utf-8", newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == ROOM_HEADER.strip().split(",")
        assert rows[1] == row.split(",")

    @pytest.mark.parametrize("text, seats", [("050", 50), ("50.0", 50), ("24.5", 24)])
    def test_capacity_text_kept_verbatim(self, tmp_path, text, seats):
        """Kapazität wird als Zahl geplant, aber unverändert zurückgeschrieben."""
        row = f"B1,1,{text},No,Yes,Rows,Yes,1,Lecture Hall"
        path = write(tmp_path / "rooms.csv", ROOM_HEADER + row + "\n")
        inventory, report = load_rooms(path)
        assert report.skipped_count == 0
        room = inventory.get("B1", "1")
        assert room.capacity == seats
        assert room.as_row() == row.split(",")

        out = tmp_path / "out.csv"
        save_rooms(inventory, out)
        with open(out, encoding="utf-8", newline="") as f:
            assert list(csv.reader(f))[1] == row.split(",")


# ─── RESERVIERUNGEN ───────────────────────────────────────────────────────────

class TestLoadReservations:
    def test_valid_rows(self, tmp_path):
        path = write(tmp_path / "res.csv", RESERVATION_HEADER +
                     "B1,1,2024-05-01,09:00 AM,01:30,Lecture\n"
                     "B1,2,2024-05-02,01:00 PM,02:00,Exam\n")
        ledger, report = load_reservations(path)
        assert report.loaded == 2
        first = ledger.for_date(datetime.date(2024, 5, 1))[0]
        assert first.start == datetime.time(9, 0)
        assert first.duration_minutes == 90
        assert first.booking_type == "Lecture"

    def test_invalid_rows_dropped(self, tmp_path):
        path = write(tmp_path / "res.csv", RESERVATION_HEADER +
                     "B1,1,01.05.2024,09:00 AM,01:30,Lecture\n"
                     "B1,1,2024-05-01,9 Uhr,01:30,Lecture\n"
                     "B1,1,2024-05-01,09:00 AM,90,Lecture\n"
                     "B1,0,2024-05-01,09:00 AM,01:30,Lecture\n"
                     "B1,1,2024-05-01,09:00 AM,01:30,Lecture\n")
        ledger, report = load_reservations(path)
        assert len(ledger) == 1
        assert report.skipped_count == 4

    def test_save_round_trip(self, tmp_path):
        text = RESERVATION_HEADER + "B1,1,2024-05-01,09:00 AM,01:30,Lecture\n"
        path = write(tmp_path / "res.csv", text)
        ledger, _ = load_reservations(path)
        out = tmp_path / "out.csv"
        save_reservations(ledger, out)
        reloaded, _ = load_reservations(out)
        assert list(reloaded) == list(ledger)


# ─── TESTDATEN ────────────────────────────────────────────────────────────────

class TestFakeData:
    def test_reproducible(self):
        day = datetime.date(2024, 5, 1)
        inv_a, led_a = FakeDataGenerator(seed=7).generate(day, reservations=10)
        inv_b, led_b = FakeDataGenerator(seed=7).generate(day, reservations=10)
        assert list(inv_a) == list(inv_b)
        assert list(led_a) == list(led_b)

    def test_campus_layout(self):
        inventory = FakeDataGenerator(seed=1, rooms_per_building=4).generate_rooms()
        assert len(inventory.buildings()) == 4
        assert len(inventory) == 16
        assert all(r.room_type == "Lecture Hall" for r in
                   (inventory.rooms_in(b)[0] for b in inventory.buildings()))
        assert all(r.is_lab() for r in inventory.rooms_in("Informatikum")[1:])

    def test_first_hall_blocked_in_evening(self):
        day = datetime.date(2024, 5, 1)
        gen = FakeDataGenerator(seed=3)
        inventory = gen.generate_rooms()
        ledger = gen.generate_reservations(inventory, day, count=0)
        assert len(ledger) == 1
        reservation = ledger.for_date(day)[0]
        assert reservation.room_key == list(inventory)[0].key
        assert reservation.start == datetime.time(19, 0)
