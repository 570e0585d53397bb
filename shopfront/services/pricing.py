# shopfront/services/pricing.py
from collections import namedtuple
from ..utils.money import D, round_money, Money

Quote = namedtuple("Quote", "subtotal discount total")

def quote(product_price, qty, discount=0) -> Quote:
    """
    Price one order line.

    subtotal = product_price * qty
    total    = max(0, subtotal - discount)

    ``discount`` in the result is the amount actually applied, so a voucher
    worth more than the line is capped at the subtotal.
    """
    unit = D(product_price)
    disc = D(discount)
    if unit < 0:
        raise ValueError("price must be >= 0")
    if int(qty) != qty or qty < 0:
        raise ValueError("quantity must be a non-negative integer")
    if disc < 0:
        raise ValueError("discount must be >= 0")

    subtotal = round_money(unit * int(qty))
    applied = min(subtotal, round_money(disc))
    return Quote(subtotal, applied, round_money(subtotal - applied))

def price(product_price, qty, discount=0) -> Money:
    return quote(product_price, qty, discount).total
