# shopfront/services/voucher_service.py
from flask import current_app
from sqlalchemy import or_, update
from sqlalchemy.sql import func
from ..extensions import db
from ..errors import (
    INVALID_VOUCHER, VOUCHER_LIMIT, ConflictError, ValidationError, VoucherError,
)
from ..model import Voucher
from ..utils.money import parse_money, to_float
from ..utils.timeutil import parse_iso8601, utcnow

def normalize_code(code) -> str:
    return str(code).strip().upper() if code is not None else ""

def validate(code, now=None) -> Voucher:
    """
    Look up a redeemable voucher. Pure read: nothing is written here.

    Raises VoucherError(INVALID_VOUCHER) when no active voucher with this code
    covers ``now``, VoucherError(VOUCHER_LIMIT) when its usage cap is reached.
    """
    code = normalize_code(code)
    now = now or utcnow()
    if not code:
        raise VoucherError(INVALID_VOUCHER)

    voucher = (
        Voucher.query
        .filter(
            Voucher.code == code,
            Voucher.is_active.is_(True),
            Voucher.valid_from <= now,
            Voucher.valid_to >= now,
        )
        .first()
    )
    if voucher is None:
        current_app.logger.info("voucher %s rejected: %s", code, INVALID_VOUCHER)
        raise VoucherError(INVALID_VOUCHER)

    if voucher.usage_limit > 0 and voucher.used_count >= voucher.usage_limit:
        current_app.logger.info("voucher %s rejected: %s", code, VOUCHER_LIMIT)
        raise VoucherError(VOUCHER_LIMIT)

    return voucher

def redeem(voucher: Voucher) -> None:
    """
    Count one use of ``voucher`` inside the caller's transaction.

    The increment is conditional on the cap in the same statement, so two
    requests racing for the last use cannot both succeed. Does not commit.
    """
    result = db.session.execute(
        update(Voucher)
        .where(
            Voucher.id == voucher.id,
            or_(Voucher.usage_limit == 0, Voucher.used_count < Voucher.usage_limit),
        )
        .values(used_count=Voucher.used_count + 1, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        current_app.logger.info("voucher %s lost the race for its last use", voucher.code)
        raise VoucherError(VOUCHER_LIMIT)

def summary(voucher: Voucher) -> dict:
    return {
        "code": voucher.code,
        "discount_amount": to_float(voucher.discount_amount),
        "valid_from": voucher.valid_from.isoformat(),
        "valid_to": voucher.valid_to.isoformat(),
        "remaining": voucher.remaining,
    }

# ---------- admin payloads ----------

def _parse_limit(v):
    if v is None or (isinstance(v, str) and v.strip() == ""):
        return 0
    try:
        limit = int(v)
    except (TypeError, ValueError):
        raise ValidationError("usage_limit must be an integer")
    if limit < 0:
        raise ValidationError("usage_limit must be >= 0")
    return limit

def _apply_payload(v: Voucher, data: dict, partial: bool):
    if not partial or "code" in data:
        code = normalize_code(data.get("code"))
        if not code:
            raise ValidationError("code is required")
        clash = Voucher.query.filter(Voucher.code == code, Voucher.id != v.id).first() \
            if v.id else Voucher.query.filter(Voucher.code == code).first()
        if clash:
            raise ConflictError("Voucher code already exists")
        v.code = code

    if not partial or "discount_amount" in data:
        amount = parse_money(data.get("discount_amount"))
        if amount is None or amount <= 0:
            raise ValidationError("discount_amount must be > 0")
        v.discount_amount = amount

    for field in ("valid_from", "valid_to"):
        if not partial or field in data:
            dt = parse_iso8601(data.get(field))
            if dt is None:
                raise ValidationError(f"Invalid datetime format for {field}")
            setattr(v, field, dt)
    if v.valid_from > v.valid_to:
        raise ValidationError("valid_from must be before valid_to")

    if not partial or "usage_limit" in data:
        limit = _parse_limit(data.get("usage_limit"))
        if limit and (v.used_count or 0) > limit:
            raise ValidationError("usage_limit is below used_count")
        v.usage_limit = limit

    if "is_active" in data:
        v.is_active = bool(data.get("is_active"))

def create_voucher_from_payload(data: dict) -> Voucher:
    v = Voucher(used_count=0, is_active=True)
    _apply_payload(v, data, partial=False)
    db.session.add(v)
    db.session.commit()
    current_app.logger.info("voucher %s created", v.code)
    return v

def update_voucher_from_payload(v: Voucher, data: dict) -> Voucher:
    _apply_payload(v, data, partial=True)
    db.session.commit()
    return v
