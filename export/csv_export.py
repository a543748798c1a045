"""CSV-Export des Raumplans."""

import csv
import logging
from pathlib import Path

from models.segment import SchedulePlan
from export.helpers import build_report_rows

logger = logging.getLogger(__name__)


class ScheduleWriteError(Exception):
    """Plan konnte nicht geschrieben werden."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Plan konnte nicht nach '{path}' geschrieben werden: {reason}")
        self.path = Path(path)


class CsvScheduleWriter:
    """Schreibt einen SchedulePlan als zeilenbasierte CSV-Datei."""

    def __init__(self, plan: SchedulePlan):
        self.plan = plan

    def export(self, output_path: Path) -> Path:
        output_path = Path(output_path)
        if not output_path.name:
            raise ScheduleWriteError(output_path, "leerer Dateiname")
        if output_path.suffix.lower() != ".csv":
            output_path = output_path.with_name(output_path.name + ".csv")
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", encoding="utf-8", newline="") as f:
                writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL)
                writer.writerows(build_report_rows(self.plan))
        except OSError as e:
            raise ScheduleWriteError(output_path, e.strerror or str(e)) from e
        logger.info(f"CSV geschrieben: {output_path}")
        return output_path
