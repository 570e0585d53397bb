# shopfront/admin/vouchers.py
from flask import request
from ..extensions import db
from ..errors import ShopError
from ..model import Voucher
from ..services import voucher_service
from ..utils.api import ok, err, json_body
from ..utils.decorators import role_at_least, role_required
from . import bp

@bp.get("/vouchers")
@role_at_least("manager")
def list_vouchers():
    q = Voucher.query
    active = request.args.get("active")
    if active is not None:
        q = q.filter(Voucher.is_active == (active.lower() == "true"))
    return ok([v.as_api() for v in q.order_by(Voucher.id.desc()).all()])

@bp.post("/vouchers")
@role_at_least("manager")
def create_voucher():
    data = json_body()
    try:
        v = voucher_service.create_voucher_from_payload(data)
    except ShopError as e:
        db.session.rollback()
        return err(e.message, e.status_code)
    return ok(status_code=201, id=v.id, voucher=v.as_api())

@bp.put("/vouchers/<int:voucher_id>")
@role_at_least("manager")
def update_voucher(voucher_id):
    v = db.session.get(Voucher, voucher_id)
    if not v:
        return err("voucher not found", 404)
    try:
        voucher_service.update_voucher_from_payload(v, json_body())
    except ShopError as e:
        db.session.rollback()
        return err(e.message, e.status_code)
    return ok(voucher=v.as_api())

@bp.patch("/vouchers/<int:voucher_id>/toggle")
@role_at_least("manager")
def toggle_voucher(voucher_id):
    v = db.session.get(Voucher, voucher_id)
    if not v:
        return err("voucher not found", 404)
    v.is_active = not v.is_active
    db.session.commit()
    return ok(is_active=v.is_active)

@bp.delete("/vouchers/<int:voucher_id>")
@role_required("admin")
def delete_voucher(voucher_id):
    v = db.session.get(Voucher, voucher_id)
    if not v:
        return err("voucher not found", 404)
    db.session.delete(v)
    db.session.commit()
    return ok()
