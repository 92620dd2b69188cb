from .reader import SheetHeaderError, grid_to_rows, read_workbook, values_to_rows

__all__ = [
    "SheetHeaderError",
    "grid_to_rows",
    "read_workbook",
    "values_to_rows",
]
