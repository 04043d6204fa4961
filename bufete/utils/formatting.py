# bufete/utils/formatting.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}
_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]

def format_currency(amount: Optional[float], currency: str = "USD") -> str:
    """Formato en-US: 125000 -> "$125,000.00"."""
    value = Decimal(str(amount or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper() + " ")
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"

def format_file_size(size: int) -> str:
    if not size or size <= 0:
        return "0 Bytes"
    i = 0
    while size >= 1024 ** (i + 1) and i < len(_SIZE_UNITS) - 1:
        i += 1
    value = round(size / (1024 ** i), 2)
    # 1.50 -> 1.5, 2.00 -> 2
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[i]}"
