"""Export-Modul: CSV und Excel (openpyxl) für den Raumplan."""

from export.csv_export import CsvScheduleWriter, ScheduleWriteError
from export.excel_export import ExcelScheduleWriter

__all__ = ["CsvScheduleWriter", "ExcelScheduleWriter", "ScheduleWriteError"]
