# shopfront/services/order_service.py
import secrets
import time
from collections import namedtuple
from flask import current_app
from ..extensions import db
from ..errors import NotFoundError, ValidationError
from ..model import Order, Product
from ..utils.money import D
from . import pricing, voucher_service

OrderResult = namedtuple("OrderResult", "order_code total discount order")

REQUIRED_FIELDS = ("customer_name", "customer_phone", "customer_address", "product_id")
_B36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

def _base36(n: int) -> str:
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = _B36[r] + out
        if not n:
            return out

def gen_order_code() -> str:
    # millisecond timestamp + random tail; the unique column catches the rest
    tail = "".join(secrets.choice(_B36) for _ in range(4))
    return "FS" + _base36(int(time.time() * 1000)) + tail

def _text(data, key):
    v = data.get(key)
    return str(v).strip() if v is not None else ""

def _parse_qty(v) -> int:
    # parseInt-like: "2.5" -> 2, junk -> 1
    if v is None or v == "":
        return 1
    try:
        qty = int(float(v))
    except (TypeError, ValueError, OverflowError):
        return 1
    if qty < 1:
        raise ValidationError("Invalid quantity")
    return qty

def _parse_product_id(v):
    try:
        return int(v)
    except (TypeError, ValueError):
        return None

def create_order(data: dict, now=None) -> OrderResult:
    """
    Place a single-line order, optionally discounted by a voucher.

    Every check runs before the first write. The voucher increment and the
    order insert share one transaction: either both land or neither does.
    """
    data = data if isinstance(data, dict) else {}
    if any(not _text(data, f) for f in REQUIRED_FIELDS):
        raise ValidationError("Missing required fields")
    qty = _parse_qty(data.get("quantity"))

    product_id = _parse_product_id(data.get("product_id"))
    product = None
    if product_id is not None:
        product = Product.query.filter_by(id=product_id, is_active=True).first()
    if product is None:
        raise NotFoundError("Product not found")

    voucher = None
    code = voucher_service.normalize_code(data.get("voucher_code"))
    if code:
        voucher = voucher_service.validate(code, now)

    q = pricing.quote(product.price, qty, voucher.discount_amount if voucher else D(0))

    try:
        if voucher is not None:
            voucher_service.redeem(voucher)

        order = Order(
            order_code=gen_order_code(),
            customer_name=_text(data, "customer_name"),
            customer_phone=_text(data, "customer_phone"),
            customer_address=_text(data, "customer_address"),
            product_id=product.id,
            product_name=product.name,
            product_price=product.price,
            color=_text(data, "color"),
            size=_text(data, "size"),
            quantity=qty,
            voucher_code=voucher.code if voucher else None,
            discount_amount=q.discount,
            total_price=q.total,
            note=_text(data, "note"),
        )
        db.session.add(order)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "order %s placed: product=%s qty=%s voucher=%s total=%s",
        order.order_code, product.id, qty, order.voucher_code or "-", q.total,
    )
    return OrderResult(order.order_code, q.total, q.discount, order)
