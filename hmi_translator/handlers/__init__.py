"""
Handlers package (Handlers Package)

Sheet ports for each output format.
- xlsx_handler: workbook read/write (openpyxl)
- csv_handler: CSV export (pandas)
"""

from .xlsx_handler import XlsxSheet
from .csv_handler import CsvSheet

__all__ = ['XlsxSheet', 'CsvSheet']
