# shopfront/admin/products.py
from ..extensions import db
from ..model import Product
from ..utils.api import ok, err, json_body
from ..utils.decorators import role_at_least, role_required
from ..utils.money import parse_money
from . import bp

# ---------- helpers ----------
def _parse_int(v, default=0):
    try:
        return int(v)
    except (TypeError, ValueError):
        return default

def _parse_list(v):
    if v is None:
        return []
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return [str(x) for x in v]

TEXT_FIELDS = ("description", "category", "brand", "material", "thumbnail")
LIST_FIELDS = ("images", "colors", "sizes")

def _apply(p: Product, data: dict):
    """Copy the fields present in ``data`` onto ``p``; returns an error message or None."""
    if "name" in data:
        name = (data.get("name") or "").strip()
        if not name:
            return "name is required"
        p.name = name
    if "price" in data:
        price = parse_money(data.get("price"))
        if price is None or price < 0:
            return "price must be a number >= 0"
        p.price = price
    if "original_price" in data:
        original = parse_money(data.get("original_price"))
        p.original_price = original if original and original > 0 else None
    for field in TEXT_FIELDS:
        if field in data:
            setattr(p, field, (data.get(field) or "").strip())
    if "category" in data and not p.category:
        p.category = "unisex"
    for field in LIST_FIELDS:
        if field in data:
            setattr(p, field, _parse_list(data.get(field)))
    if "stock" in data:
        p.stock = max(_parse_int(data.get("stock")), 0)
    if "is_active" in data:
        p.is_active = bool(data.get("is_active"))
    if "is_featured" in data:
        p.is_featured = bool(data.get("is_featured"))
    return None

# ---------- routes ----------
# GET /api/admin/products
@bp.get("/products")
@role_at_least("manager")
def list_products():
    items = Product.query.order_by(Product.created_at.desc(), Product.id.desc()).all()
    return ok([p.as_api() for p in items])

# POST /api/admin/products
@bp.post("/products")
@role_at_least("manager")
def create_product():
    data = json_body()
    if not (data.get("name") or "").strip() or parse_money(data.get("price")) is None:
        return err("Name and price are required", 400)

    p = Product(category="unisex", images=[], colors=[], sizes=[], stock=0,
                is_active=True, is_featured=False)
    problem = _apply(p, data)
    if problem:
        return err(problem, 400)

    db.session.add(p)
    db.session.commit()
    return ok(status_code=201, id=p.id, product=p.as_api())

# PUT /api/admin/products/<id>
@bp.put("/products/<int:pid>")
@role_at_least("manager")
def update_product(pid):
    p = db.session.get(Product, pid)
    if not p:
        return err("Not found", 404)

    problem = _apply(p, json_body())
    if problem:
        db.session.rollback()
        return err(problem, 400)

    db.session.commit()
    return ok(product=p.as_api())

# DELETE /api/admin/products/<id>
@bp.delete("/products/<int:pid>")
@role_required("admin")
def delete_product(pid):
    p = db.session.get(Product, pid)
    if not p:
        return err("Not found", 404)
    db.session.delete(p)
    db.session.commit()
    return ok()

# PATCH /api/admin/products/<id>/toggle
@bp.patch("/products/<int:pid>/toggle")
@role_at_least("manager")
def toggle_product(pid):
    p = db.session.get(Product, pid)
    if not p:
        return err("Not found", 404)
    p.is_active = not p.is_active
    db.session.commit()
    return ok(is_active=p.is_active)
