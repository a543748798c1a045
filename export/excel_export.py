"""Excel-Export des Raumplans (openpyxl)."""

from pathlib import Path

from models.segment import SchedulePlan
from export.csv_export import ScheduleWriteError
from export.helpers import COLORS, build_report_rows, is_segment_label, today_str


class ExcelScheduleWriter:
    """Schreibt dieselben Zeilen wie der CSV-Export in ein Tabellenblatt.

    Kopfzeile und Abschnittszeilen werden farbig hervorgehoben.
    """

    # Spaltenbreiten (Excel-Einheiten)
    COL_W = 18
    SHEET_TITLE = "Plan"

    def __init__(self, plan: SchedulePlan):
        self.plan = plan

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        from openpyxl import Workbook
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        output_path = Path(output_path)
        if not output_path.name:
            raise ScheduleWriteError(output_path, "leerer Dateiname")
        if output_path.suffix.lower() != ".xlsx":
            output_path = output_path.with_name(output_path.name + ".xlsx")

        wb = Workbook()
        ws = wb.active
        ws.title = self.SHEET_TITLE

        rows = build_report_rows(self.plan)
        segment_kinds = iter(s.kind.value for s in self.plan.segments)
        border = self._thin_border()

        for r, row in enumerate(rows, 1):
            for c, value in enumerate(row, 1):
                ws.cell(row=r, column=c, value=value)
            if r == 1:
                ws.cell(row=r, column=1).font = Font(bold=True, size=13)
            elif r == 2:
                for c in range(1, len(row) + 1):
                    cell = ws.cell(row=r, column=c)
                    cell.fill = self._fill(COLORS["header"])
                    cell.font = Font(bold=True, color="FFFFFF", size=10)
                    cell.border = border
            elif is_segment_label(row):
                cell = ws.cell(row=r, column=1)
                cell.fill = self._fill(COLORS[next(segment_kinds)])
                cell.font = Font(bold=True)

        for col in range(1, 10):
            ws.column_dimensions[get_column_letter(col)].width = self.COL_W
        ws.cell(row=1, column=3, value=f"Stand: {today_str()}").font = Font(
            italic=True, color="888888", size=8
        )

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            raise ScheduleWriteError(output_path, e.strerror or str(e)) from e
        return output_path
