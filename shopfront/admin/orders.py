# shopfront/admin/orders.py
from datetime import date
from flask import request, send_file
from ..extensions import db
from ..model import Order, ORDER_STATUSES
from ..services.export_service import orders_query, orders_xlsx, XLSX_MIMETYPE
from ..utils.api import ok, err, json_body
from ..utils.decorators import role_at_least, role_required
from . import bp

# GET /api/admin/orders?status=pending|confirmed|shipping|done|cancelled|all
@bp.get("/orders")
@role_at_least("manager")
def list_orders():
    status = request.args.get("status")
    return ok([o.as_api() for o in orders_query(status).all()])

# GET /api/admin/orders/export
@bp.get("/orders/export")
@role_at_least("manager")
def export_orders():
    """
    Export orders (optionally filtered by ?status=) as an Excel file.
    """
    orders = orders_query(request.args.get("status")).all()
    return send_file(
        orders_xlsx(orders),
        as_attachment=True,
        download_name=f"orders_{date.today().isoformat()}.xlsx",
        mimetype=XLSX_MIMETYPE,
    )

# PATCH /api/admin/orders/<id>/status
@bp.patch("/orders/<int:order_id>/status")
@role_at_least("manager")
def update_order_status(order_id):
    data = json_body()
    status = (data.get("status") or "").strip().lower()
    if status not in ORDER_STATUSES:
        return err(f"status must be one of: {', '.join(ORDER_STATUSES)}", 400)

    o = db.session.get(Order, order_id)
    if not o:
        return err("order not found", 404)
    o.status = status
    db.session.commit()
    return ok(status=o.status)

# DELETE /api/admin/orders/<id>
@bp.delete("/orders/<int:order_id>")
@role_required("admin")
def delete_order(order_id):
    o = db.session.get(Order, order_id)
    if not o:
        return err("order not found", 404)
    db.session.delete(o)
    db.session.commit()
    return ok()
