from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import pandas as pd

from core.config import DATE_DISPLAY_FORMAT


FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "date": ("Дата", "дата", "Date", "date", "DATE", "day", "Day"),
    "orderSum": ("Сумма заказа", "orderSum", "order_sum", "sum", "сумма заказа"),
    "volume": ("Объём", "volume", "Volume", "объем", "объём"),
    "sales": ("Продажи", "sales", "Sales", "продажи"),
}

NUMERIC_FIELDS = ("orderSum", "volume", "sales")

COMPACT_DATE_RE = re.compile(r"^[0-9]{8}$")
DISPLAY_DATE_FORMATS = ("%d.%m.%Y", "%d/%m/%Y", "%d-%m-%Y")
# Relative keywords pandas resolves against the clock; kept as plain text.
RELATIVE_DATE_WORDS = frozenset({"now", "today"})

Number = Union[int, float]


@dataclass(frozen=True)
class ChartRecord:
    date: str
    order_sum: Number = 0
    volume: Number = 0
    sales: Number = 0

    def as_payload(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "orderSum": self.order_sum,
            "volume": self.volume,
            "sales": self.sales,
        }


def format_date(value: date) -> str:
    return value.strftime(DATE_DISPLAY_FORMAT)


def today_display() -> str:
    return format_date(date.today())


def is_blank(value: Any) -> bool:
    """Falsy in the JSON sense: None, "", 0, False, NaN and NaT."""
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, (str, int, float)):
        return not value
    return False


def parse_compact_date(text: str) -> Optional[date]:
    """Parse DDMMYYYY; None unless the parts form a real calendar date from 1900 on."""
    if not COMPACT_DATE_RE.match(text):
        return None
    day, month, year = int(text[:2]), int(text[2:4]), int(text[4:])
    if not (1 <= day <= 31 and 1 <= month <= 12 and year >= 1900):
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_generic_date(text: str) -> Optional[date]:
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in DISPLAY_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    if text.lower() in RELATIVE_DATE_WORDS:
        return None
    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date()


def normalize_date(value: Any = None) -> str:
    if is_blank(value):
        return today_display()
    if isinstance(value, date):
        return format_date(value)

    text = str(value).strip()
    parsed = parse_compact_date(text) or parse_generic_date(text)
    if parsed is not None:
        return format_date(parsed)
    return text


def _as_number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return value if math.isfinite(value) else None
        except OverflowError:
            return None
    if not isinstance(value, str):
        return None
    cleaned = value.strip().replace(" ", "").replace("\u00a0", "").replace("\u202f", "").replace(",", ".")
    try:
        number = float(pd.to_numeric(cleaned, errors="coerce"))
    except (OverflowError, TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def pick_value(record: Mapping[str, Any], field: str) -> Any:
    """Return the first non-blank value among the aliases of `field`, else None."""
    for alias in FIELD_ALIASES[field]:
        value = record.get(alias)
        if not is_blank(value):
            return value
    return None


def pick_number(record: Mapping[str, Any], field: str) -> Number:
    """First non-negative numeric value among the aliases of `field`, else 0."""
    for alias in FIELD_ALIASES[field]:
        value = record.get(alias)
        if is_blank(value):
            continue
        number = _as_number(value)
        if number is not None and number >= 0:
            return number
    return 0


def _build_record(raw_date: Any, record: Mapping[str, Any]) -> ChartRecord:
    return ChartRecord(
        date=normalize_date(raw_date),
        order_sum=pick_number(record, "orderSum"),
        volume=pick_number(record, "volume"),
        sales=pick_number(record, "sales"),
    )


def normalize_records(raw: Any) -> List[ChartRecord]:
    if isinstance(raw, (list, tuple)):
        records: List[ChartRecord] = []
        for item in raw:
            item = item if isinstance(item, Mapping) else {}
            records.append(_build_record(pick_value(item, "date"), item))
        return records

    if isinstance(raw, Mapping):
        records = []
        for key, value in raw.items():
            value = value if isinstance(value, Mapping) else {}
            embedded = pick_value(value, "date")
            records.append(_build_record(key if embedded is None else embedded, value))
        return records

    return []


def records_payload(records: List[ChartRecord]) -> List[Dict[str, Any]]:
    return [r.as_payload() for r in records]
