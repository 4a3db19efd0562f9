"""
Conversion of uploaded CSV rows into transactions.

The file must carry a header row. Recognised columns are ``amount``,
``description``, ``date``, ``categoryId`` and ``isIncome`` (snake_case
spellings are accepted too). Any invalid row rejects the whole file.
"""

import csv
import io
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import ValidationError

from smartspend.schemas.transaction_schema import TransactionCreate

COLUMN_ALIASES = {
    "categoryid": "category_id",
    "category_id": "category_id",
    "isincome": "is_income",
    "is_income": "is_income",
    "amount": "amount",
    "description": "description",
    "date": "date",
}

TRUE_VALUES = {"true", "1"}


class CsvImportError(ValueError):
    pass


def _normalise_row(row: Dict[Optional[str], Optional[str]]) -> Dict[str, str]:
    normalised = {}
    for key, value in row.items():
        if key is None:
            continue
        column = COLUMN_ALIASES.get(key.strip().lower())
        if column:
            normalised[column] = (value or "").strip()
    return normalised


def parse_transactions_csv(content: bytes, now: datetime) -> List[TransactionCreate]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise CsvImportError("File is not valid UTF-8 text")

    reader = csv.DictReader(io.StringIO(text), skipinitialspace=True)
    if not reader.fieldnames:
        raise CsvImportError("CSV file has no header row")

    transactions = []
    for row in reader:
        values = _normalise_row(row)
        if not any(values.values()):
            continue

        line = reader.line_num
        try:
            date = datetime.fromisoformat(values["date"]) if values.get("date") else now
        except ValueError:
            raise CsvImportError(f"Line {line}: invalid date '{values['date']}'")

        try:
            transactions.append(
                TransactionCreate(
                    category_id=int(values["category_id"]) if values.get("category_id") else None,
                    amount=float(values.get("amount", "")),
                    description=values.get("description", ""),
                    date=date,
                    is_income=values.get("is_income", "").lower() in TRUE_VALUES,
                )
            )
        except (ValueError, ValidationError) as e:
            raise CsvImportError(f"Line {line}: invalid transaction ({e})")

    return transactions
