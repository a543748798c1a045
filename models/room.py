"""Datenmodell für einen Raum (Pydantic v2)."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LAB_ROOM_TYPE = "Computer Lab"

_CAPACITY_RE = re.compile(r"^\d+(\.\d+)?$")


class Room(BaseModel):
    """Ein buchbarer Raum aus der Raumliste.

    Alle Attribute werden unverändert als Text gehalten, damit sie 1:1 in
    den Plan zurückgeschrieben werden. ``capacity`` ist zusätzlich als
    Ganzzahl für die Planung verfügbar, der Originaltext steht in
    ``capacity_text``.
    """

    model_config = ConfigDict(frozen=True)

    building: str
    room: str                        # Raumnummer, muss eine positive Ganzzahl sein
    capacity: int = Field(gt=0)
    capacity_text: str = ""          # Kapazität wie eingelesen ("050", "50.0")
    computers_available: str = ""
    seating_available: str = ""
    seating_type: str = ""
    food_allowed: str = ""
    priority: str = ""
    room_type: str = ""              # "Computer Lab" wird gesondert behandelt

    @model_validator(mode='before')
    @classmethod
    def keep_capacity_text(cls, data):
        """Kapazität als Text merken, Dezimalangaben auf ganze Plätze kürzen."""
        if isinstance(data, dict) and isinstance(data.get("capacity"), str):
            text = data["capacity"].strip()
            data = {**data, "capacity_text": text}
            if _CAPACITY_RE.match(text):
                data["capacity"] = int(float(text))
        return data

    @field_validator("room")
    @classmethod
    def check_room_number(cls, v: str) -> str:
        v = v.strip()
        try:
            number = int(v)
        except ValueError:
            raise ValueError(f"Raumnummer '{v}' ist keine Ganzzahl")
        if number <= 0:
            raise ValueError(f"Raumnummer muss > 0 sein (ist {number})")
        return v

    @property
    def key(self) -> tuple[str, str]:
        """Identität eines Raums: (Gebäude, Raumnummer)."""
        return (self.building, self.room)

    def is_lab(self, lab_room_type: str = LAB_ROOM_TYPE) -> bool:
        return self.room_type == lab_room_type

    def as_row(self) -> list[str]:
        """Die neun Raumattribute in Spaltenreihenfolge der Raumliste."""
        return [
            self.building,
            self.room,
            self.capacity_text or str(self.capacity),
            self.computers_available,
            self.seating_available,
            self.seating_type,
            self.food_allowed,
            self.priority,
            self.room_type,
        ]

    def __str__(self) -> str:
        return ",".join(self.as_row())
