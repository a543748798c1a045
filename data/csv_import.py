"""CSV-Import (und Rückschreiben) von Raumliste und Reservierungen.

Ungültige Zeilen werden stillschweigend verworfen: Raumnummer oder
Kapazität nicht positiv, Datum/Uhrzeit/Dauer nicht im erwarteten Format.
Verworfene Zeilen erscheinen nur im Debug-Log und im ImportReport.
"""

import csv
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from config.defaults import RESERVATION_COLUMNS, ROOM_COLUMNS
from data.parsing import (
    InputFormatError, format_duration, format_time, parse_date, parse_duration,
    parse_time,
)
from models.inventory import RoomInventory
from models.ledger import ReservationLedger
from models.reservation import Reservation
from models.room import Room

logger = logging.getLogger(__name__)


class CsvImportError(Exception):
    """Fehler beim CSV-Import (Datei fehlt oder ist nicht lesbar)."""


class ImportReport(BaseModel):
    """Zusammenfassung eines Imports."""

    source: str
    loaded: int = 0
    skipped: list[str] = []   # "Zeile 4: Raumnummer muss > 0 sein"

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


def _read_rows(path: Path) -> list[dict]:
    """CSV → Liste von Dicts (erste Zeile = Header, Werte getrimmt)."""
    path = Path(path)
    if not path.exists():
        raise CsvImportError(f"Datei nicht gefunden: {path}")
    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            return [
                {(k or "").strip(): (v.strip() if v else "") for k, v in row.items()}
                for row in reader
            ]
    except (OSError, csv.Error) as e:
        raise CsvImportError(f"Fehler beim Lesen von {path}: {e}") from e


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    return err.get("msg", str(e))


# ─── Räume ────────────────────────────────────────────────────────────────────

def room_from_row(row: dict) -> Room:
    """Baut einen Room aus einer CSV-Zeile. Wirft ValidationError bei ungültigen Werten."""
    return Room(
        building=row.get("Building", ""),
        room=row.get("Room", ""),
        capacity=row.get("Capacity", ""),
        computers_available=row.get("Computers Available", ""),
        seating_available=row.get("Seating Available", ""),
        seating_type=row.get("Seating Type", ""),
        food_allowed=row.get("Food Allowed", ""),
        priority=row.get("Priority", ""),
        room_type=row.get("Room Type", ""),
    )


def load_rooms(
    path: Path, inventory: Optional[RoomInventory] = None
) -> tuple[RoomInventory, ImportReport]:
    """Liest die Raumliste in ein (neues oder übergebenes) RoomInventory."""
    inventory = inventory if inventory is not None else RoomInventory()
    report = ImportReport(source=str(path))
    for line_no, row in enumerate(_read_rows(path), start=2):
        try:
            room = room_from_row(row)
        except ValidationError as e:
            reason = f"Zeile {line_no}: {_first_error(e)}"
            logger.debug(f"Raum verworfen – {reason}")
            report.skipped.append(reason)
            continue
        inventory.add(room)
        report.loaded += 1
    logger.info(
        f"Räume geladen: {report.loaded} aus {path} "
        f"({report.skipped_count} verworfen)"
    )
    return inventory, report


def save_rooms(inventory: RoomInventory, path: Path) -> None:
    """Schreibt das Inventar im Format der Raumliste zurück."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(ROOM_COLUMNS)
        for room in inventory:
            writer.writerow(room.as_row())


# ─── Reservierungen ───────────────────────────────────────────────────────────

def reservation_from_row(row: dict) -> Reservation:
    """Baut eine Reservation aus einer CSV-Zeile.

    Wirft InputFormatError bei falschem Datums-/Zeitformat und
    ValidationError bei ungültiger Raumnummer.
    """
    return Reservation(
        building=row.get("Building", ""),
        room=row.get("Room", ""),
        date=parse_date(row.get("Date", "")),
        start=parse_time(row.get("Time", "")),
        duration_minutes=parse_duration(row.get("Duration", "")),
        booking_type=row.get("Booking Type", ""),
    )


def load_reservations(
    path: Path, ledger: Optional[ReservationLedger] = None
) -> tuple[ReservationLedger, ImportReport]:
    """Liest die Reservierungsliste in ein (neues oder übergebenes) Ledger."""
    ledger = ledger if ledger is not None else ReservationLedger()
    report = ImportReport(source=str(path))
    for line_no, row in enumerate(_read_rows(path), start=2):
        try:
            reservation = reservation_from_row(row)
        except InputFormatError as e:
            reason = f"Zeile {line_no}: {e}"
        except ValidationError as e:
            reason = f"Zeile {line_no}: {_first_error(e)}"
        else:
            ledger.add(reservation)
            report.loaded += 1
            continue
        logger.debug(f"Reservierung verworfen – {reason}")
        report.skipped.append(reason)
    logger.info(
        f"Reservierungen geladen: {report.loaded} aus {path} "
        f"({report.skipped_count} verworfen)"
    )
    return ledger, report


def reservation_as_row(reservation: Reservation) -> list[str]:
    return [
        reservation.building,
        reservation.room,
        reservation.date.isoformat(),
        format_time(reservation.start),
        format_duration(reservation.duration_minutes),
        reservation.booking_type,
    ]


def save_reservations(ledger: ReservationLedger, path: Path) -> None:
    """Schreibt das Ledger im Format der Reservierungsliste zurück."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(RESERVATION_COLUMNS)
        for reservation in ledger:
            writer.writerow(reservation_as_row(reservation))
