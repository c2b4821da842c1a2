"""
Excel handler (XLSX Handler)

Sheet port backed by openpyxl.
- Reads the first worksheet as rows of strings
- Writes single target cells
- Saves to a new file with retries (the file may be open in Excel)
"""

import time

import openpyxl

# Save retry settings
SAVE_MAX_RETRIES = 3
SAVE_RETRY_DELAY = 2  # seconds

# Excel allows 32,767 characters per cell; keep a safety margin
MAX_CELL_LENGTH = 32000


def cell_to_text(value):
    """
    Converts a cell value to the string the classifier sees.

    Args:
        value: openpyxl cell value

    Returns:
        str: "" for empty cells, "16" for 16.0, str(value) otherwise
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def truncate_cell_value(value):
    """
    Truncates a value that exceeds the Excel cell limit.
    """
    if isinstance(value, str) and len(value) > MAX_CELL_LENGTH:
        return value[:MAX_CELL_LENGTH - 3] + "..."
    return value


def save_workbook(wb, file_path, max_retries=SAVE_MAX_RETRIES, retry_delay=SAVE_RETRY_DELAY):
    """
    Saves a workbook, retrying when the target is locked.

    Args:
        wb: openpyxl Workbook
        file_path (str): Destination path
        max_retries (int): Maximum attempts

    Raises:
        OSError: If every attempt failed
    """
    for attempt in range(1, max_retries + 1):
        try:
            wb.save(file_path)
            return
        except OSError as e:
            print(f"      ⚠️ Save failed (attempt {attempt}/{max_retries}): {str(e)[:80]}")
            if attempt == max_retries:
                raise
            print(f"      ⏳ Retrying in {retry_delay}s...")
            time.sleep(retry_delay)


class XlsxSheet:
    """
    First worksheet of an .xlsx workbook.

    Rows and columns are 0-based here; openpyxl is 1-based.
    """

    def __init__(self, file_path):
        self.file_path = file_path
        self.workbook = openpyxl.load_workbook(file_path)
        self.worksheet = self.workbook.worksheets[0]
        self.sheet_name = self.worksheet.title

    def get_rows(self):
        """
        Returns:
            list: Rows as lists of strings, in sheet order
        """
        return [
            [cell_to_text(value) for value in row]
            for row in self.worksheet.iter_rows(values_only=True)
        ]

    def set_cell(self, row, col, value):
        self.worksheet.cell(row=row + 1, column=col + 1, value=truncate_cell_value(value))

    def save(self, path):
        save_workbook(self.workbook, path)
