"""Amount parsing utilities."""

import math
import re
from typing import Any

CURRENCY_SYMBOLS = re.compile(r"[$€£¥₹]")


def parse_amount(value: Any) -> float:
    """Parse a spreadsheet cell into a float amount.

    Handles various formats:
    - 123.45 (numeric cells)
    - "123.45"
    - "$1,200"
    - "1,234.56"
    - " -50 "

    Anything that is empty or not a number parses as 0.0, so callers can
    treat a blank debit or credit cell as "no amount".

    Args:
        value: Cell value

    Returns:
        Float amount
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        amount = float(value)
        return amount if math.isfinite(amount) else 0.0

    amount_str = CURRENCY_SYMBOLS.sub("", str(value))
    amount_str = amount_str.replace(",", "").replace(" ", "").strip()
    if not amount_str:
        return 0.0

    try:
        amount = float(amount_str)
    except ValueError:
        return 0.0
    return amount if math.isfinite(amount) else 0.0
