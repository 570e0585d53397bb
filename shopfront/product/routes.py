# shopfront/product/routes.py
from flask import request
from ..model import Product
from ..utils.api import ok, err
from . import bp

def _parse_bool(v, default=False):
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "y", "on"}

# GET /api/products
@bp.get("")
def list_products():
    """
    Query params:
      category -> exact category match
      featured -> bool (true/false)
      q        -> substring match on name
    """
    query = Product.query.filter(Product.is_active.is_(True))

    category = (request.args.get("category") or "").strip()
    if category:
        query = query.filter(Product.category == category)

    if request.args.get("featured") is not None:
        query = query.filter(Product.is_featured.is_(_parse_bool(request.args.get("featured"))))

    q = (request.args.get("q") or "").strip()
    if q:
        query = query.filter(Product.name.ilike(f"%{q}%"))

    items = query.order_by(Product.created_at.desc(), Product.id.desc()).all()
    return ok([p.as_api() for p in items])

# GET /api/products/<id>
@bp.get("/<int:pid>")
def get_product(pid):
    product = Product.query.filter_by(id=pid, is_active=True).first()
    if not product:
        return err("Not found", 404)
    return ok(product.as_api())
