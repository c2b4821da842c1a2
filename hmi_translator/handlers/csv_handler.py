"""
CSV handler (CSV Handler)

Sheet port that keeps the rows in memory and writes them out as CSV with pandas.
Used when the run should produce a CSV export instead of a workbook.
"""

import pandas as pd

from .xlsx_handler import XlsxSheet


class CsvSheet:
    """
    In-memory rows saved as CSV.

    Args:
        rows (list): Rows as lists of strings; row 0 is the header
    """

    def __init__(self, rows):
        self.rows = [list(row) for row in rows]

    @classmethod
    def from_xlsx(cls, file_path):
        """Loads the first worksheet of a workbook."""
        return cls(XlsxSheet(file_path).get_rows())

    def get_rows(self):
        return [list(row) for row in self.rows]

    def set_cell(self, row, col, value):
        while len(self.rows) <= row:
            self.rows.append([])
        cells = self.rows[row]
        if len(cells) <= col:
            cells.extend([""] * (col + 1 - len(cells)))
        cells[col] = value

    def save(self, path):
        """
        Writes the rows as UTF-8 CSV with a BOM so Excel detects the encoding.
        """
        width = max((len(row) for row in self.rows), default=0)
        padded = [row + [""] * (width - len(row)) for row in self.rows]
        df = pd.DataFrame(padded)
        df.to_csv(path, index=False, header=False, encoding="utf-8-sig")
