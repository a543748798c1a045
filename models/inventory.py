"""RoomInventory – alle Räume, gruppiert nach Gebäude.

Die Reihenfolge ist die Einfügereihenfolge (Gebäude in der Reihenfolge ihres
ersten Auftretens, Räume innerhalb eines Gebäudes ebenso). Die Planung ist
First-Fit und hängt direkt von dieser Reihenfolge ab.
"""

from typing import Iterator, Optional

from models.room import Room


class RoomInventory:
    """Verwaltet die Raumliste."""

    def __init__(self, rooms: Optional[list[Room]] = None) -> None:
        self._buildings: dict[str, list[Room]] = {}
        for room in rooms or []:
            self.add(room)

    def add(self, room: Room) -> None:
        """Hängt einen Raum an sein Gebäude an (Gebäude wird bei Bedarf angelegt)."""
        self._buildings.setdefault(room.building, []).append(room)

    def get(self, building: str, room: str) -> Optional[Room]:
        for r in self._buildings.get(building, []):
            if r.room == room:
                return r
        return None

    def remove(self, building: str, room: str) -> bool:
        """Entfernt einen Raum. Gibt True zurück wenn ein Raum entfernt wurde."""
        rooms = self._buildings.get(building)
        if not rooms:
            return False
        before = len(rooms)
        rooms[:] = [r for r in rooms if r.room != room]
        if not rooms:
            del self._buildings[building]
        return len(rooms) < before

    def replace(self, building: str, room: str, new_room: Room) -> bool:
        """Ersetzt einen Raum an seiner Position.

        Wechselt das Gebäude, wird der Raum ans Ende des neuen Gebäudes gehängt.
        """
        rooms = self._buildings.get(building, [])
        for i, r in enumerate(rooms):
            if r.room != room:
                continue
            if new_room.building == building:
                rooms[i] = new_room
            else:
                self.remove(building, room)
                self.add(new_room)
            return True
        return False

    def buildings(self) -> list[str]:
        return list(self._buildings)

    def rooms_in(self, building: str) -> list[Room]:
        return list(self._buildings.get(building, []))

    def snapshot(self) -> "RoomInventory":
        """Unabhängige Kopie für einen Planungslauf."""
        copy = RoomInventory()
        copy._buildings = {b: list(rooms) for b, rooms in self._buildings.items()}
        return copy

    def __iter__(self) -> Iterator[Room]:
        for rooms in self._buildings.values():
            yield from rooms

    def __len__(self) -> int:
        return sum(len(rooms) for rooms in self._buildings.values())

    def __repr__(self) -> str:
        return f"RoomInventory({len(self)} Räume, {len(self._buildings)} Gebäude)"
