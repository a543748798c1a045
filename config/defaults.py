from config.schema import DataConfig, PhaseConfig, PlannerConfig


# Spaltenreihenfolge der Raumliste (Eingabe und Ausgabe)
ROOM_COLUMNS: list[str] = [
    "Building",
    "Room",
    "Capacity",
    "Computers Available",
    "Seating Available",
    "Seating Type",
    "Food Allowed",
    "Priority",
    "Room Type",
]

# Spaltenreihenfolge der Reservierungsliste
RESERVATION_COLUMNS: list[str] = [
    "Building",
    "Room",
    "Date",
    "Time",
    "Duration",
    "Booking Type",
]


def default_phases() -> PhaseConfig:
    """Standard-Tagesablauf eines Hackathons.

    Ablauf:
    Eröffnung      1 h   (ein Raum, alle Teilnehmenden)
    Arbeitsblock   ≤ 6 h (mehrere Räume, mind. ein Computerraum)
    Essenspause    1 h   (mind. 2 Räume)
    ...            Arbeit/Essen wiederholt sich bis zum Abschluss
    Abschluss      3 h   (ein Raum, bevorzugt der Eröffnungsraum)
    """
    return PhaseConfig(
        opening_minutes=60,
        max_work_minutes=360,
        meal_minutes=60,
        closing_minutes=180,
        min_meal_rooms=2,
        lab_room_type="Computer Lab",
        lab_capacity_ratio=10,
        work_headroom=10 / 9,
    )


def default_data() -> DataConfig:
    return DataConfig(
        rooms_file="rooms_list.csv",
        reservations_file="reserved_rooms.csv",
        output_dir=".",
    )


def default_planner_config() -> PlannerConfig:
    """Vollständige Default-Konfiguration."""
    return PlannerConfig(
        event_name="Hackathon",
        phases=default_phases(),
        data=default_data(),
    )
