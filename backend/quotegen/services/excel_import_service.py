"""
Bulk import of the rate card and account managers from CSV or Excel uploads.
A file that fails validation writes nothing.
"""

import csv
import io
import logging
import math
import time
import zipfile
from typing import Any, Dict, List, Optional, Sequence, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from quotegen.core.exceptions import ImportValidationError
from quotegen.db.repositories.rate_card_repository import RateCardRepository
from quotegen.db.repositories.account_manager_repository import AccountManagerRepository
from quotegen.schemas.rate_card import RateCardItemResponse, RateCardImportResponse
from quotegen.schemas.account_manager import AccountManagerResponse, AccountManagerImportResponse

logger = logging.getLogger(__name__)


RATE_CARD_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "item_ref_no": ("itemrefno", "item ref no", "item reference number"),
    "category": ("category",),
    "subcategory": ("subcategory", "sub category"),
    "detailed_description": ("detaileddescription", "detailed description", "description"),
    "ops_cost": ("opsbriskcost", "ops brisk cost", "brisk cost", "opscost", "ops cost"),
    "standard_cost": ("standardcost", "standard cost", "cost"),
}

RATE_CARD_EXTENSIONS = ("csv", "xlsx")
ACCOUNT_MANAGER_EXTENSIONS = ("csv", "xlsx", "xls")


def _cell_text(value: Any) -> str:
    """Render a cell as trimmed text; whole floats lose their '.0'."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _find_column(headers: Sequence[str], aliases: Sequence[str]) -> int:
    for idx, header in enumerate(headers):
        if header in aliases:
            return idx
    return -1


def _value_at(row: Sequence[str], idx: int) -> str:
    return row[idx] if 0 <= idx < len(row) else ""


class ExcelImportService:
    """Service for importing rate cards and account managers from uploaded files."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.rate_card_repo = RateCardRepository(session)
        self.account_manager_repo = AccountManagerRepository(session)

    async def import_rate_card(self, filename: str, content: bytes) -> RateCardImportResponse:
        """Parse a rate card upload and replace the whole rate card with it."""
        rows = self.read_rows(filename, content, RATE_CARD_EXTENSIONS)
        records, skipped, warnings = self.parse_rate_card_rows(rows)

        items = await self.rate_card_repo.replace_all(records)
        await self.session.commit()

        logger.info(
            "Rate card imported",
            extra={"file_name": filename, "imported": len(records), "skipped": skipped},
        )
        return RateCardImportResponse(
            imported=len(records),
            skipped=skipped,
            warnings=warnings,
            items=[RateCardItemResponse.model_validate(item) for item in items],
        )

    async def import_account_managers(self, filename: str, content: bytes) -> AccountManagerImportResponse:
        """Parse an account manager upload and replace the whole list with it."""
        rows = self.read_rows(filename, content, ACCOUNT_MANAGER_EXTENSIONS)
        records = self.parse_account_manager_rows(rows)

        managers = await self.account_manager_repo.replace_all(records)
        await self.session.commit()

        logger.info(
            "Account managers imported",
            extra={"file_name": filename, "imported": len(records)},
        )
        return AccountManagerImportResponse(
            imported=len(records),
            items=[AccountManagerResponse.model_validate(m) for m in managers],
        )

    def read_rows(self, filename: str, content: bytes, allowed: Sequence[str]) -> List[List[str]]:
        """
        Read an upload into rows of trimmed text, dropping blank rows.

        Raises:
            ImportValidationError: unsupported extension, unreadable file, or
                fewer than a header row plus one data row.
        """
        extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if extension not in allowed:
            supported = ", ".join(f".{ext}" for ext in allowed)
            raise ImportValidationError(f"Unsupported file format. Please upload one of: {supported}")

        if extension == "csv":
            rows = self._read_csv(content)
        elif extension == "xls":
            raise ImportValidationError(
                "Legacy .xls workbooks are not supported. Please save the file as .xlsx or .csv"
            )
        else:
            rows = self._read_xlsx(content)

        rows = [row for row in rows if any(cell for cell in row)]
        if len(rows) < 2:
            raise ImportValidationError("File must contain at least a header row and one data row")
        return rows

    def parse_rate_card_rows(self, rows: List[List[str]]) -> Tuple[List[dict], int, List[str]]:
        """
        Turn rows into rate card records.

        Returns:
            (records, skipped_count, warnings)
        """
        headers = [h.lower() for h in rows[0]]
        indices = {field: _find_column(headers, aliases) for field, aliases in RATE_CARD_COLUMNS.items()}
        if any(idx == -1 for idx in indices.values()):
            raise ImportValidationError(
                "File must contain columns: itemRefNo, category, subcategory, "
                "detailedDescription, opsBriskCost, standardCost",
                details={"found": rows[0]},
            )

        stamp = int(time.time() * 1000)
        records = []
        warnings = []
        skipped = 0
        for row_number, row in enumerate(rows[1:], start=1):
            item_ref_no = _value_at(row, indices["item_ref_no"])
            ops_cost_text = _value_at(row, indices["ops_cost"])
            standard_cost_text = _value_at(row, indices["standard_cost"])
            if not item_ref_no or not ops_cost_text or not standard_cost_text:
                skipped += 1
                continue

            ops_cost = self._parse_cost(ops_cost_text)
            standard_cost = self._parse_cost(standard_cost_text)
            if ops_cost is None or standard_cost is None:
                skipped += 1
                warnings.append(
                    f'Invalid cost on row {row_number + 1}: '
                    f'opsBriskCost="{ops_cost_text}", standardCost="{standard_cost_text}"'
                )
                continue

            records.append({
                "id": f"item-{stamp}-{row_number}",
                "item_ref_no": item_ref_no,
                "category": _value_at(row, indices["category"]),
                "subcategory": _value_at(row, indices["subcategory"]),
                "detailed_description": _value_at(row, indices["detailed_description"]),
                "ops_cost": ops_cost,
                "standard_cost": standard_cost,
            })

        if not records:
            raise ImportValidationError("No valid items found in the file", details={"warnings": warnings})
        return records, skipped, warnings

    def parse_account_manager_rows(self, rows: List[List[str]]) -> List[dict]:
        """Turn rows into account manager records. A 'name' column is required."""
        headers = [h.lower() for h in rows[0]]
        name_idx = _find_column(headers, ("name",))
        email_idx = _find_column(headers, ("email",))
        if name_idx == -1:
            raise ImportValidationError('File must contain a "Name" column')

        stamp = int(time.time() * 1000)
        records = []
        for row_number, row in enumerate(rows[1:], start=1):
            name = _value_at(row, name_idx)
            if not name:
                continue
            email = _value_at(row, email_idx) if email_idx != -1 else ""
            records.append({
                "id": f"am_{stamp}_{row_number}",
                "name": name,
                "email": email or None,
            })

        if not records:
            raise ImportValidationError("No valid account managers found in the file")
        return records

    @staticmethod
    def _parse_cost(text: str) -> Optional[float]:
        try:
            value = float(text)
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        return value

    @staticmethod
    def _read_csv(content: bytes) -> List[List[str]]:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ImportValidationError(f"Failed to read file: {e}") from e
        reader = csv.reader(io.StringIO(text))
        return [[cell.strip() for cell in row] for row in reader]

    @staticmethod
    def _read_xlsx(content: bytes) -> List[List[str]]:
        try:
            wb = load_workbook(io.BytesIO(content), data_only=True, read_only=True)
        except (InvalidFileException, zipfile.BadZipFile, OSError, KeyError, ValueError) as e:
            # openpyxl surfaces corrupt zips as several exception types
            raise ImportValidationError(f"Failed to parse Excel file: {e}") from e
        try:
            ws = wb.worksheets[0]
            return [[_cell_text(cell) for cell in row] for row in ws.iter_rows(values_only=True)]
        finally:
            wb.close()
