# shopfront/utils/money.py

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

Money = Decimal

def D(x) -> Money:
    return x if isinstance(x, Decimal) else Decimal(str(x or "0"))

def round_money(x: Money) -> Money:
    return D(x).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

def parse_money(v):
    """Lenient parse for request bodies; None when not a finite number."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, str) and v.strip() == "":
        return None
    try:
        value = D(v)
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None

def to_float(x) -> float:
    return float(D(x))
