import math
from datetime import date, datetime
from typing import Any

EPOCH = date(1970, 1, 1)


def coerce_number(value: Any) -> float:
    """Coerce a spreadsheet cell to a finite number, 0 when it is not one."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if "," in text and "." in text:
            # the rightmost separator is the decimal one
            if text.rfind(",") > text.rfind("."):
                text = text.replace(".", "").replace(",", ".")
            else:
                text = text.replace(",", "")
        elif "," in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def truncate_date(value: Any) -> str:
    """Keep only the date part of a date or timestamp cell."""
    if not value:
        return ""
    return str(value).split("T")[0]


def parse_sort_date(value: Any) -> date:
    """Date used for ordering; anything unparseable counts as the epoch."""
    if not value:
        return EPOCH
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.strptime(text, "%d/%m/%Y").date()
    except ValueError:
        return EPOCH
