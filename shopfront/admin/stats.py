# shopfront/admin/stats.py
from sqlalchemy import func
from ..extensions import db
from ..model import Order, Product
from ..utils.api import ok
from ..utils.decorators import role_at_least
from . import bp

# GET /api/admin/stats
@bp.get("/stats")
@role_at_least("manager")
def stats():
    not_cancelled = Order.status != "cancelled"
    revenue = db.session.query(func.coalesce(func.sum(Order.total_price), 0)).filter(not_cancelled).scalar()
    discounts = db.session.query(func.coalesce(func.sum(Order.discount_amount), 0)).filter(not_cancelled).scalar()
    recent = Order.query.order_by(Order.created_at.desc(), Order.id.desc()).limit(5).all()

    return ok({
        "total_products": Product.query.filter(Product.is_active.is_(True)).count(),
        "total_orders": Order.query.count(),
        "pending_orders": Order.query.filter(Order.status == "pending").count(),
        "revenue": float(revenue or 0),
        "discount_total": float(discounts or 0),
        "recent_orders": [o.as_api() for o in recent],
    })
