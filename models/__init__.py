from models.room import Room
from models.reservation import Reservation
from models.constraints import EventConstraints
from models.segment import PhaseKind, ScheduleSegment, SchedulePlan
from models.inventory import RoomInventory
from models.ledger import ReservationLedger

__all__ = [
    "Room",
    "Reservation",
    "EventConstraints",
    "PhaseKind",
    "ScheduleSegment",
    "SchedulePlan",
    "RoomInventory",
    "ReservationLedger",
]
