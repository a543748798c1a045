"""Raumplaner für Veranstaltungstage — Haupt-CLI.

Verwendung:
  python main.py plan                       Raumplan erzeugen (fragt Vorgaben ab)
  python main.py plan --date 2024-05-01 --time "09:00 AM" --duration 10:00 --attendees 40
  python main.py generate                   Testdaten (CSV) erzeugen
  python main.py rooms list                 Räume nach Gebäude auflisten
  python main.py rooms add B1 101 30        Raum anlegen (delete / update analog)
  python main.py events list [--date D]     Reservierungen auflisten
  python main.py events add ...             Reservierung anlegen
  python main.py events delete ...          Reservierung löschen
  python main.py events update ...          Reservierung ändern / verschieben
  python main.py config show                Konfiguration anzeigen
  python main.py config init                Default-Konfiguration anlegen
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich import box

from data.parsing import (
    InputFormatError, format_duration, format_time, parse_attendees, parse_date,
    parse_duration, parse_filename, parse_time,
)

console = Console()


def _load_config(ctx: click.Context):
    from config.manager import ConfigManager
    mgr = ConfigManager(ctx.obj.get("config_path"))
    try:
        return mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


def _ask(question: str, parser: Callable):
    """Fragt so lange nach, bis die Eingabe im erwarteten Format ist."""
    while True:
        raw = Prompt.ask(question)
        try:
            return parser(raw)
        except InputFormatError as e:
            console.print(f"[red]{e}[/red]")


def _option_parser(parser: Callable):
    """click-Callback, der eine Option mit einem Parser aus data.parsing prüft."""
    def callback(ctx, param, value):
        if value is None:
            return None
        try:
            return parser(value)
        except InputFormatError as e:
            raise click.BadParameter(str(e))
    return callback


def _load_inventory(path: Path, required: bool = True):
    from data.csv_import import CsvImportError, load_rooms
    from models.inventory import RoomInventory
    if not Path(path).exists() and not required:
        return RoomInventory()
    try:
        inventory, report = load_rooms(path)
    except CsvImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold] {e}")
        sys.exit(1)
    if report.skipped_count:
        console.print(f"[dim]{report.skipped_count} ungültige Raumzeilen übersprungen.[/dim]")
    return inventory


def _load_ledger(path: Path, required: bool = True):
    from data.csv_import import CsvImportError, load_reservations
    from models.ledger import ReservationLedger
    if not Path(path).exists() and not required:
        return ReservationLedger()
    try:
        ledger, report = load_reservations(path)
    except CsvImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold] {e}")
        sys.exit(1)
    if report.skipped_count:
        console.print(
            f"[dim]{report.skipped_count} ungültige Reservierungszeilen übersprungen.[/dim]"
        )
    return ledger


# ─── PLAN ─────────────────────────────────────────────────────────────────────

@click.command("plan")
@click.option("--date", "event_date", callback=_option_parser(parse_date),
              help="Datum der Veranstaltung (yyyy-mm-dd).")
@click.option("--time", "start_time", callback=_option_parser(parse_time),
              help="Beginn (hh:mm AM/PM).")
@click.option("--duration", callback=_option_parser(parse_duration),
              help="Gesamtdauer (hh:mm).")
@click.option("--attendees", callback=_option_parser(parse_attendees),
              help="Anzahl Teilnehmende.")
@click.option("--output", "-o", default=None, callback=_option_parser(parse_filename),
              help="Dateiname für den Plan (ohne Endung).")
@click.option("--xlsx", is_flag=True, default=False,
              help="Zusätzlich als Excel-Datei speichern.")
@click.option("--rooms", "rooms_file", default=None, help="Raumliste (CSV).")
@click.option("--reservations", "reservations_file", default=None,
              help="Reservierungsliste (CSV).")
@click.pass_context
def cmd_plan(ctx, event_date, start_time, duration, attendees, output, xlsx,
             rooms_file, reservations_file):
    """Erzeugt den Raumplan für einen Veranstaltungstag."""
    from pydantic import ValidationError
    from analysis.feasibility import check_feasibility
    from analysis.plan_validator import validate_plan
    from export.csv_export import CsvScheduleWriter, ScheduleWriteError
    from export.excel_export import ExcelScheduleWriter
    from export.tui_renderer import print_plan
    from models.constraints import EventConstraints
    from solver.scheduler import PhaseScheduler, SchedulingInfeasibleError

    config = _load_config(ctx)
    inventory = _load_inventory(Path(rooms_file or config.data.rooms_file))
    ledger = _load_ledger(Path(reservations_file or config.data.reservations_file),
                          required=False)

    if event_date is None:
        event_date = _ask("Datum der Veranstaltung (yyyy-mm-dd)", parse_date)
    if start_time is None:
        start_time = _ask("Beginn (hh:mm AM/PM)", parse_time)
    if duration is None:
        duration = _ask("Dauer (hh:mm)", parse_duration)
    if attendees is None:
        attendees = _ask("Anzahl Teilnehmende", parse_attendees)

    try:
        constraints = EventConstraints(
            date=event_date, start=start_time,
            duration_minutes=duration, attendees=attendees,
        )
    except ValidationError as e:
        console.print(f"[red]Ungültige Vorgaben:[/red] {e.errors()[0]['msg']}")
        sys.exit(1)

    console.print(
        f"[bold]Plane {config.event_name}:[/bold] {event_date.isoformat()} ab "
        f"{format_time(start_time)}, Dauer {format_duration(duration)} h, "
        f"{attendees} Teilnehmende."
    )
    report = check_feasibility(inventory, constraints, config.phases)
    if report.errors or report.warnings:
        report.print_rich()

    scheduler = PhaseScheduler(inventory, ledger, config.phases)
    try:
        plan = scheduler.generate_plan(constraints)
    except SchedulingInfeasibleError as e:
        console.print(f"[red bold]{e}[/red bold]")
        sys.exit(1)

    print_plan(plan, title=config.event_name)
    validate_plan(plan, ledger, config.phases).print_rich()

    if output is None:
        output = _ask("Dateiname für den Plan (ohne Endung)", parse_filename)
    target = Path(config.data.output_dir) / output
    try:
        written = [CsvScheduleWriter(plan).export(target)]
        if xlsx:
            written.append(ExcelScheduleWriter(plan).export(target))
    except ScheduleWriteError as e:
        console.print(f"[red bold]{e}[/red bold]")
        sys.exit(1)

    for path in written:
        console.print(f"[green]✓[/green] Plan gespeichert: {path}")


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--date", "event_date", callback=_option_parser(parse_date),
              default="2024-05-01", help="Stichtag der Reservierungen (yyyy-mm-dd).")
@click.option("--reservations", "num_reservations", default=25,
              help="Anzahl zufälliger Reservierungen.")
@click.pass_context
def cmd_generate(ctx, seed: int, event_date, num_reservations: int):
    """Erzeugt Testdaten (Raumliste + Reservierungen als CSV)."""
    from data.csv_import import save_reservations, save_rooms
    from data.fake_data import FakeDataGenerator

    config = _load_config(ctx)
    console.print("[bold]Testdaten werden generiert...[/bold]")
    gen = FakeDataGenerator(seed=seed)
    inventory, ledger = gen.generate(event_date, num_reservations)
    gen.print_summary(inventory, ledger)

    rooms_path = Path(config.data.rooms_file)
    reservations_path = Path(config.data.reservations_file)
    save_rooms(inventory, rooms_path)
    save_reservations(ledger, reservations_path)
    console.print(f"[green]✓[/green] Räume gespeichert: {rooms_path}")
    console.print(f"[green]✓[/green] Reservierungen gespeichert: {reservations_path}")


# ─── ROOMS ────────────────────────────────────────────────────────────────────

@click.group("rooms")
@click.option("--rooms", "rooms_file", default=None, help="Raumliste (CSV).")
@click.pass_context
def cmd_rooms(ctx, rooms_file):
    """Raumliste anzeigen und pflegen."""
    config = _load_config(ctx)
    ctx.obj["rooms_path"] = Path(rooms_file or config.data.rooms_file)


@cmd_rooms.command("list")
@click.pass_context
def rooms_list(ctx):
    """Listet alle Räume nach Gebäude auf."""
    inventory = _load_inventory(ctx.obj["rooms_path"])

    for building in inventory.buildings():
        table = Table(title=building, box=box.ROUNDED)
        table.add_column("Raum", style="bold")
        table.add_column("Plätze", justify="right")
        table.add_column("Typ")
        table.add_column("Computer")
        table.add_column("Essen")
        for room in inventory.rooms_in(building):
            table.add_row(room.room, str(room.capacity), room.room_type,
                          room.computers_available, room.food_allowed)
        console.print(table)
    console.print(f"[dim]{len(inventory)} Räume in {len(inventory.buildings())} Gebäuden[/dim]")


_ROOM_ATTRIBUTES = [
    ("--type", "room_type", "Raumtyp (z.B. 'Computer Lab')."),
    ("--computers", "computers_available", "Computer vorhanden."),
    ("--seating", "seating_available", "Sitzplätze vorhanden."),
    ("--seating-type", "seating_type", "Art der Bestuhlung."),
    ("--food", "food_allowed", "Essen erlaubt."),
    ("--priority", "priority", "Priorität."),
]


def _room_attribute_options(func):
    """Hängt die optionalen Raumattribute als Optionen an einen Befehl."""
    for flag, name, help_text in reversed(_ROOM_ATTRIBUTES):
        func = click.option(flag, name, default=None, help=help_text)(func)
    return func


def _build_room(**fields):
    from pydantic import ValidationError
    from models.room import Room
    try:
        return Room(**fields)
    except ValidationError as e:
        raise click.BadParameter(e.errors()[0]["msg"])


@cmd_rooms.command("add")
@click.argument("building")
@click.argument("room")
@click.argument("capacity")
@_room_attribute_options
@click.pass_context
def rooms_add(ctx, building, room, capacity, **attributes):
    """Legt einen Raum an (Gebäude, Raumnummer, Kapazität)."""
    from data.csv_import import save_rooms
    path = ctx.obj["rooms_path"]
    inventory = _load_inventory(path, required=False)
    new = _build_room(
        building=building, room=room, capacity=capacity,
        **{k: v for k, v in attributes.items() if v is not None},
    )
    if inventory.get(new.building, new.room) is not None:
        console.print(f"[yellow]Raum {new.building} {new.room} existiert bereits.[/yellow]")
        sys.exit(1)
    inventory.add(new)
    save_rooms(inventory, path)
    console.print(f"[green]✓[/green] Raum gespeichert: {new}")


@cmd_rooms.command("delete")
@click.argument("building")
@click.argument("room")
@click.pass_context
def rooms_delete(ctx, building, room):
    """Löscht einen Raum (Gebäude, Raumnummer)."""
    from data.csv_import import save_rooms
    path = ctx.obj["rooms_path"]
    inventory = _load_inventory(path)
    if not inventory.remove(building, room):
        console.print("[yellow]Kein passender Raum gefunden.[/yellow]")
        sys.exit(1)
    save_rooms(inventory, path)
    console.print("[green]✓[/green] Raum gelöscht.")


@cmd_rooms.command("update")
@click.argument("building")
@click.argument("room")
@click.option("--new-building", default=None)
@click.option("--new-room", default=None)
@click.option("--capacity", default=None, help="Neue Kapazität.")
@_room_attribute_options
@click.pass_context
def rooms_update(ctx, building, room, new_building, new_room, capacity, **attributes):
    """Ändert einen Raum, bei neuem Gebäude wandert er ans Ende der Gebäudeliste."""
    from data.csv_import import save_rooms
    path = ctx.obj["rooms_path"]
    inventory = _load_inventory(path)
    current = inventory.get(building, room)
    if current is None:
        console.print("[yellow]Kein passender Raum gefunden.[/yellow]")
        sys.exit(1)

    fields = current.model_dump()
    fields.update({k: v for k, v in attributes.items() if v is not None})
    if new_building is not None:
        fields["building"] = new_building
    if new_room is not None:
        fields["room"] = new_room
    if capacity is not None:
        fields["capacity"] = capacity
    new = _build_room(**fields)
    if new.key != current.key and inventory.get(*new.key) is not None:
        console.print(f"[yellow]Raum {new.building} {new.room} existiert bereits.[/yellow]")
        sys.exit(1)

    inventory.replace(building, room, new)
    save_rooms(inventory, path)
    console.print(f"[green]✓[/green] Raum aktualisiert: {new}")


# ─── EVENTS ───────────────────────────────────────────────────────────────────

@click.group("events")
@click.option("--reservations", "reservations_file", default=None,
              help="Reservierungsliste (CSV).")
@click.pass_context
def cmd_events(ctx, reservations_file):
    """Reservierungen anzeigen und pflegen."""
    config = _load_config(ctx)
    ctx.obj["reservations_path"] = Path(reservations_file or config.data.reservations_file)


@cmd_events.command("list")
@click.option("--date", "event_date", callback=_option_parser(parse_date),
              help="Nur Reservierungen an diesem Tag (yyyy-mm-dd).")
@click.pass_context
def events_list(ctx, event_date):
    """Listet Reservierungen nach Datum auf."""
    ledger = _load_ledger(ctx.obj["reservations_path"])
    dates = [event_date] if event_date else sorted(ledger.dates())

    for day in dates:
        table = Table(title=day.isoformat(), box=box.ROUNDED)
        table.add_column("Gebäude", style="bold")
        table.add_column("Raum")
        table.add_column("Beginn")
        table.add_column("Dauer")
        table.add_column("Art")
        for r in sorted(ledger.for_date(day), key=lambda r: r.start):
            table.add_row(r.building, r.room, format_time(r.start),
                          format_duration(r.duration_minutes), r.booking_type)
        console.print(table)
    if not dates:
        console.print("[dim]Keine Reservierungen vorhanden.[/dim]")


def _build_reservation(building, room, event_date, start_time, duration, booking_type):
    from pydantic import ValidationError
    from models.reservation import Reservation
    try:
        return Reservation(
            building=building, room=room, date=event_date, start=start_time,
            duration_minutes=duration, booking_type=booking_type,
        )
    except ValidationError as e:
        raise click.BadParameter(e.errors()[0]["msg"])


@cmd_events.command("add")
@click.argument("building")
@click.argument("room")
@click.argument("event_date", callback=_option_parser(parse_date))
@click.argument("start_time", callback=_option_parser(parse_time))
@click.argument("duration", callback=_option_parser(parse_duration))
@click.option("--type", "booking_type", default="", help="Art der Buchung.")
@click.pass_context
def events_add(ctx, building, room, event_date, start_time, duration, booking_type):
    """Legt eine Reservierung an."""
    from data.csv_import import save_reservations
    path = ctx.obj["reservations_path"]
    ledger = _load_ledger(path, required=False)
    ledger.add(_build_reservation(building, room, event_date, start_time,
                                  duration, booking_type))
    save_reservations(ledger, path)
    console.print(f"[green]✓[/green] Reservierung gespeichert: {path}")


@cmd_events.command("delete")
@click.argument("building")
@click.argument("room")
@click.argument("event_date", callback=_option_parser(parse_date))
@click.argument("start_time", callback=_option_parser(parse_time))
@click.pass_context
def events_delete(ctx, building, room, event_date, start_time):
    """Löscht eine Reservierung (Gebäude, Raum, Datum, Beginn)."""
    from data.csv_import import save_reservations
    path = ctx.obj["reservations_path"]
    ledger = _load_ledger(path)
    if not ledger.delete(building, room, event_date, start_time):
        console.print("[yellow]Keine passende Reservierung gefunden.[/yellow]")
        sys.exit(1)
    save_reservations(ledger, path)
    console.print("[green]✓[/green] Reservierung gelöscht.")


@cmd_events.command("update")
@click.argument("building")
@click.argument("room")
@click.argument("event_date", callback=_option_parser(parse_date))
@click.argument("start_time", callback=_option_parser(parse_time))
@click.option("--new-building", default=None)
@click.option("--new-room", default=None)
@click.option("--new-date", callback=_option_parser(parse_date), default=None)
@click.option("--new-time", callback=_option_parser(parse_time), default=None)
@click.option("--new-duration", callback=_option_parser(parse_duration), default=None)
@click.option("--new-type", default=None)
@click.pass_context
def events_update(ctx, building, room, event_date, start_time, new_building,
                  new_room, new_date, new_time, new_duration, new_type):
    """Ändert eine Reservierung, bei neuem Datum wird sie verschoben."""
    from data.csv_import import save_reservations
    path = ctx.obj["reservations_path"]
    ledger = _load_ledger(path)
    current = ledger.find(building, room, event_date, start_time)
    if current is None:
        console.print("[yellow]Keine passende Reservierung gefunden.[/yellow]")
        sys.exit(1)
    new = _build_reservation(
        new_building or current.building,
        new_room or current.room,
        new_date or current.date,
        new_time or current.start,
        new_duration if new_duration is not None else current.duration_minutes,
        new_type if new_type is not None else current.booking_type,
    )
    ledger.update(building, room, event_date, start_time, new)
    save_reservations(ledger, path)
    console.print(f"[green]✓[/green] Reservierung aktualisiert: {new}")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx):
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config(ctx)
    console.print(Panel(f"[bold]{config.event_name}[/bold]",
                        title="Raumplaner-Konfiguration", border_style="cyan"))

    ph = config.phases
    table = Table(title="Phasen", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Eröffnung", f"{ph.opening_minutes} min")
    table.add_row("Arbeitsblock (max.)", f"{ph.max_work_minutes} min")
    table.add_row("Essenspause", f"{ph.meal_minutes} min")
    table.add_row("Abschluss", f"{ph.closing_minutes} min")
    table.add_row("Essensräume (min.)", str(ph.min_meal_rooms))
    table.add_row("Computerraum-Typ", ph.lab_room_type)
    table.add_row("Computerraum-Faktor", str(ph.lab_capacity_ratio))
    table.add_row("Reservefaktor Arbeitsräume", f"{ph.work_headroom:.3f}")
    console.print(table)

    d = config.data
    console.print(
        f"\n[bold]Räume:[/bold] {d.rooms_file} | "
        f"[bold]Reservierungen:[/bold] {d.reservations_file} | "
        f"[bold]Ausgabe:[/bold] {d.output_dir}"
    )


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
@click.pass_context
def config_init(ctx, force):
    """Legt die Default-Konfiguration als YAML an."""
    from config.defaults import default_planner_config
    from config.manager import ConfigManager

    mgr = ConfigManager(ctx.obj.get("config_path"))
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    mgr.save(default_planner_config())


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur YAML-Konfiguration.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Planungsschritte protokollieren.")
@click.pass_context
def cli(ctx, config_path: Optional[Path], verbose: bool):
    """Raumplaner für Veranstaltungstage (Hackathons).

    Starten Sie mit: python main.py plan
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if verbose:
        from rich.logging import RichHandler
        logging.basicConfig(level=logging.INFO, format="%(message)s",
                            handlers=[RichHandler(console=console, show_path=False)])


# Befehle registrieren
cli.add_command(cmd_plan)
cli.add_command(cmd_generate)
cli.add_command(cmd_rooms)
cli.add_command(cmd_events)
cli.add_command(cmd_config)


if __name__ == "__main__":
    cli()
