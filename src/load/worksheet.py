"""
Worksheet Backends - Load Layer

Thin wrappers giving the pipeline one interface over a Google Sheets
worksheet (gspread) and a local Excel workbook (openpyxl).
Rows and columns are 1-based everywhere.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging
import os

import gspread
from gspread.utils import rowcol_to_a1
from google.oauth2.service_account import Credentials
from openpyxl import load_workbook

logger = logging.getLogger(__name__)

SHEETS_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]


class Worksheet(ABC):
    """Minimal cell access needed by the sheet writer"""

    @abstractmethod
    def get_column_values(self, column: int) -> List[Any]:
        """Return every cell value of a column, top to bottom"""

    @abstractmethod
    def write_row(self, row: int, column: int, values: List[str]) -> None:
        """Write values into consecutive cells of a row starting at column"""

    def save(self) -> None:
        """Persist pending writes (no-op for backends that write through)"""


class GoogleSheetWorksheet(Worksheet):
    """gspread-backed worksheet; every write goes straight to the API"""

    def __init__(self, worksheet: gspread.Worksheet):
        self.worksheet = worksheet

    @classmethod
    def open(
        cls,
        sheet_id: str,
        credentials_file: str,
        worksheet_name: Optional[str] = None,
    ) -> "GoogleSheetWorksheet":
        """
        Open a worksheet by spreadsheet key

        Args:
            sheet_id: Spreadsheet key from the sheet URL
            credentials_file: Service-account JSON file
            worksheet_name: Worksheet title, first worksheet when None

        Returns:
            GoogleSheetWorksheet
        """
        if not credentials_file:
            raise ValueError(
                "GOOGLE_APPLICATION_CREDENTIALS environment variable is not set"
            )

        creds = Credentials.from_service_account_file(
            credentials_file, scopes=SHEETS_SCOPES
        )
        client = gspread.authorize(creds)
        spreadsheet = client.open_by_key(sheet_id)

        if worksheet_name:
            worksheet = spreadsheet.worksheet(worksheet_name)
        else:
            worksheet = spreadsheet.get_worksheet(0)

        logger.info(f"Opened worksheet '{worksheet.title}' of spreadsheet {sheet_id}")
        return cls(worksheet)

    def get_column_values(self, column: int) -> List[Any]:
        return self.worksheet.col_values(column)

    def write_row(self, row: int, column: int, values: List[str]) -> None:
        start = rowcol_to_a1(row, column)
        self.worksheet.update(
            range_name=start, values=[values], value_input_option="RAW"
        )


class ExcelWorksheet(Worksheet):
    """openpyxl-backed worksheet; call save() to write the file"""

    def __init__(self, path: str, worksheet_name: Optional[str] = None):
        if not os.path.exists(path):
            raise FileNotFoundError(f"Workbook not found: {path}")

        self.path = path
        self.workbook = load_workbook(path)
        self.worksheet = (
            self.workbook[worksheet_name] if worksheet_name else self.workbook.active
        )
        logger.info(f"Opened worksheet '{self.worksheet.title}' of {path}")

    def get_column_values(self, column: int) -> List[Any]:
        return [
            cells[0]
            for cells in self.worksheet.iter_rows(
                min_col=column, max_col=column, values_only=True
            )
        ]

    def write_row(self, row: int, column: int, values: List[str]) -> None:
        for offset, value in enumerate(values):
            self.worksheet.cell(row=row, column=column + offset, value=value)

    def save(self) -> None:
        self.workbook.save(self.path)
        logger.info(f"Saved workbook {self.path}")
