from pydantic import BaseModel, Field, model_validator


# ─── PHASEN (Zeitfenster + Raumregeln) ───

class PhaseConfig(BaseModel):
    """Längen und Raumregeln der einzelnen Programmphasen.

    Alle Zeitangaben in Minuten. Die Planung rechnet ausschließlich
    mit ganzen Minuten, damit Vergleiche wie "Restzeit == Abschluss"
    exakt sind.
    """
    # Dauer der Eröffnung (ein Raum für alle Teilnehmenden)
    opening_minutes: int = Field(60, ge=1,
        description="Dauer der Eröffnung (Minuten)")
    # Maximale Länge eines Arbeitsblocks
    max_work_minutes: int = Field(360, ge=1,
        description="Maximale Länge eines Arbeitsblocks (Minuten)")
    # Nominale Dauer einer Essenspause
    meal_minutes: int = Field(60, ge=1,
        description="Dauer einer Essenspause (Minuten)")
    # Feste Dauer des Abschlusses am Ende des Tages
    closing_minutes: int = Field(180, ge=1,
        description="Dauer des Abschlusses (Minuten)")
    # Mindestanzahl Räume pro Essenspause
    min_meal_rooms: int = Field(2, ge=1,
        description="Mindestanzahl Essensräume")
    # Raumtyp, der als Computerraum gilt
    lab_room_type: str = Field("Computer Lab",
        description="Raumtyp der Computerräume")
    # Ein Computerraum qualifiziert, wenn Kapazität × Faktor ≥ Teilnehmende
    lab_capacity_ratio: int = Field(10, ge=1,
        description="Faktor für qualifizierende Computerräume")
    # Reserve für den Computerraum beim Füllen der Arbeitsräume
    work_headroom: float = Field(10 / 9, ge=1.0,
        description="Kapazitätsreserve für Nicht-Computerräume im Arbeitsblock")

    @property
    def fixed_minutes(self) -> int:
        """Mindestdauer einer Veranstaltung (Eröffnung + Abschluss)."""
        return self.opening_minutes + self.closing_minutes


# ─── DATENQUELLEN ───

class DataConfig(BaseModel):
    """Pfade der CSV-Eingaben und des Ausgabeverzeichnisses."""
    # Raumliste (Building, Room, Capacity, ...)
    rooms_file: str = Field("rooms_list.csv",
        description="CSV-Datei mit allen Räumen")
    # Bestehende Reservierungen (Building, Room, Date, Time, ...)
    reservations_file: str = Field("reserved_rooms.csv",
        description="CSV-Datei mit bestehenden Reservierungen")
    # Zielverzeichnis für erzeugte Pläne
    output_dir: str = Field(".",
        description="Verzeichnis für erzeugte Pläne")


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Raumplaners."""
    # Bezeichnung der Veranstaltung (nur Anzeige)
    event_name: str = Field("Hackathon",
        description="Name der Veranstaltung")
    # Phasenlängen und Raumregeln
    phases: PhaseConfig = Field(default_factory=PhaseConfig)
    # Ein- und Ausgabepfade
    data: DataConfig = Field(default_factory=DataConfig)

    @model_validator(mode='after')
    def validate_day_length(self):
        """Eröffnung und Abschluss müssen zusammen in einen Tag passen."""
        if self.phases.fixed_minutes > 24 * 60:
            raise ValueError(
                f"Eröffnung + Abschluss ({self.phases.fixed_minutes} min) "
                f"passen nicht in einen Tag")
        return self
