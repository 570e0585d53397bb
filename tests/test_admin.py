from decimal import Decimal
from io import BytesIO

import pandas as pd
import pytest
from sqlalchemy.exc import OperationalError

from shopfront.model import Order, Product, Voucher


def test_admin_requires_token(client):
    assert client.get("/api/admin/orders").status_code == 401


def test_manager_cannot_delete(client, manager_headers, make_product):
    p = make_product()
    resp = client.delete(f"/api/admin/products/{p.id}", headers=manager_headers)
    assert resp.status_code == 403


def test_login_rejects_bad_password(client, admin_headers):
    resp = client.post("/api/auth/login", json={"email": "admin@shop.test", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid email or password"


def test_me(client, admin_headers):
    body = client.get("/api/auth/me", headers=admin_headers).get_json()
    assert body["user"]["role"] == "admin"


# ---------- products ----------

def test_product_crud(client, db, admin_headers):
    resp = client.post("/api/admin/products", headers=admin_headers, json={
        "name": "Denim Jacket", "price": "450000", "original_price": "550000",
        "colors": ["Blue", "Black"], "sizes": "S, M, L", "stock": 7, "is_featured": True,
    })
    assert resp.status_code == 201
    pid = resp.get_json()["id"]
    product = resp.get_json()["product"]
    assert product["sizes"] == ["S", "M", "L"]
    assert product["category"] == "unisex"
    assert product["original_price"] == 550000

    resp = client.put(f"/api/admin/products/{pid}", headers=admin_headers, json={"price": 399000, "stock": -3})
    assert resp.status_code == 200
    assert resp.get_json()["product"]["price"] == 399000
    assert resp.get_json()["product"]["stock"] == 0

    resp = client.patch(f"/api/admin/products/{pid}/toggle", headers=admin_headers)
    assert resp.get_json()["is_active"] is False
    assert client.get(f"/api/products/{pid}").status_code == 404

    assert client.delete(f"/api/admin/products/{pid}", headers=admin_headers).status_code == 200
    assert db.session.get(Product, pid) is None


@pytest.mark.parametrize("body", [{"name": "Hat"}, {"price": 10}, {"name": " ", "price": 10}])
def test_product_create_requires_name_and_price(client, admin_headers, body):
    resp = client.post("/api/admin/products", headers=admin_headers, json=body)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Name and price are required"


def test_product_update_rejects_bad_price(client, admin_headers, make_product):
    p = make_product()
    resp = client.put(f"/api/admin/products/{p.id}", headers=admin_headers, json={"price": "free"})
    assert resp.status_code == 400


def test_public_listing_hides_inactive(client, make_product):
    make_product(name="Visible", category="men", is_featured=True)
    make_product(name="Hidden", is_active=False)
    names = [p["name"] for p in client.get("/api/products").get_json()["data"]]
    assert names == ["Visible"]
    assert client.get("/api/products?category=women").get_json()["data"] == []
    assert len(client.get("/api/products?featured=true").get_json()["data"]) == 1


# ---------- vouchers ----------

def test_voucher_crud(client, db, admin_headers):
    payload = {
        "code": "newyear", "discount_amount": 20000,
        "valid_from": "2026-01-01T00:00:00Z", "valid_to": "2026-12-31T23:59:59Z",
        "usage_limit": 100,
    }
    resp = client.post("/api/admin/vouchers", headers=admin_headers, json=payload)
    assert resp.status_code == 201
    vid = resp.get_json()["id"]
    assert resp.get_json()["voucher"]["code"] == "NEWYEAR"

    dup = client.post("/api/admin/vouchers", headers=admin_headers, json={**payload, "code": "NewYear"})
    assert dup.status_code == 409

    resp = client.put(f"/api/admin/vouchers/{vid}", headers=admin_headers, json={"usage_limit": 0})
    assert resp.get_json()["voucher"]["remaining"] is None

    resp = client.put(f"/api/admin/vouchers/{vid}", headers=admin_headers, json={"valid_to": "2025-01-01"})
    assert resp.status_code == 400
    assert db.session.get(Voucher, vid).valid_to.year == 2026

    resp = client.patch(f"/api/admin/vouchers/{vid}/toggle", headers=admin_headers)
    assert resp.get_json()["is_active"] is False

    listed = client.get("/api/admin/vouchers?active=false", headers=admin_headers).get_json()["data"]
    assert [v["id"] for v in listed] == [vid]

    assert client.delete(f"/api/admin/vouchers/{vid}", headers=admin_headers).status_code == 200
    assert db.session.get(Voucher, vid) is None


def test_voucher_limit_cannot_drop_below_usage(client, admin_headers, make_voucher):
    v = make_voucher(usage_limit=5, used_count=3)
    resp = client.put(f"/api/admin/vouchers/{v.id}", headers=admin_headers, json={"usage_limit": 2})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "usage_limit is below used_count"


# ---------- orders ----------

def _place(client, product_id, order_payload, **kw):
    resp = client.post("/api/orders", json=order_payload(product_id, **kw))
    assert resp.status_code == 201
    return resp.get_json()


def test_order_admin_flow(client, db, admin_headers, make_product, make_voucher, order_payload):
    p = make_product(price=Decimal("100000"))
    make_voucher(discount_amount=Decimal("10000"))
    _place(client, p.id, order_payload)
    second = _place(client, p.id, order_payload, quantity=2, voucher_code="SALE50K")

    orders = client.get("/api/admin/orders", headers=admin_headers).get_json()["data"]
    assert len(orders) == 2

    oid = Order.query.filter_by(order_code=second["order_code"]).one().id
    resp = client.patch(f"/api/admin/orders/{oid}/status", headers=admin_headers, json={"status": "shipping"})
    assert resp.get_json()["status"] == "shipping"

    bad = client.patch(f"/api/admin/orders/{oid}/status", headers=admin_headers, json={"status": "lost"})
    assert bad.status_code == 400

    shipping = client.get("/api/admin/orders?status=shipping", headers=admin_headers).get_json()["data"]
    assert [o["order_code"] for o in shipping] == [second["order_code"]]

    stats = client.get("/api/admin/stats", headers=admin_headers).get_json()["data"]
    assert stats["total_orders"] == 2
    assert stats["pending_orders"] == 1
    assert stats["revenue"] == 100000 + 190000
    assert stats["discount_total"] == 10000
    assert stats["total_products"] == 1
    assert len(stats["recent_orders"]) == 2

    assert client.delete(f"/api/admin/orders/{oid}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/admin/orders/{oid}", headers=admin_headers).status_code == 404


def test_stats_exclude_cancelled(client, admin_headers, make_product, order_payload):
    p = make_product(price=Decimal("50000"))
    placed = _place(client, p.id, order_payload)
    oid = Order.query.filter_by(order_code=placed["order_code"]).one().id
    client.patch(f"/api/admin/orders/{oid}/status", headers=admin_headers, json={"status": "cancelled"})
    stats = client.get("/api/admin/stats", headers=admin_headers).get_json()["data"]
    assert stats["revenue"] == 0


def test_export_orders_xlsx(client, admin_headers, make_product, make_voucher, order_payload):
    p = make_product(price=Decimal("200000"))
    make_voucher()
    placed = _place(client, p.id, order_payload, quantity=2, voucher_code="SALE50K", note="gift wrap")

    resp = client.get("/api/admin/orders/export", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "attachment" in resp.headers["Content-Disposition"]

    df = pd.read_excel(BytesIO(resp.data))
    assert len(df) == 1
    row = df.iloc[0]
    assert row["Order Code"] == placed["order_code"]
    assert row["Total"] == 350000
    assert row["Voucher"] == "SALE50K"
    assert row["Status"] == "Pending"


def test_voucher_create_with_numeric_code(client, admin_headers):
    resp = client.post("/api/admin/vouchers", headers=admin_headers, json={
        "code": 777, "discount_amount": 5000,
        "valid_from": "2026-01-01", "valid_to": "2026-12-31",
    })
    assert resp.status_code == 201
    assert resp.get_json()["voucher"]["code"] == "777"


@pytest.mark.parametrize("path, method", [
    ("/api/admin/products", "post"),
    ("/api/admin/vouchers", "post"),
])
def test_admin_non_object_body(client, admin_headers, path, method):
    resp = getattr(client, method)(path, headers=admin_headers, json=[{"name": "x"}])
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_order_status_non_object_body(client, admin_headers, make_product, order_payload):
    p = make_product()
    code = client.post("/api/orders", json=order_payload(p.id)).get_json()["order_code"]
    oid = Order.query.filter_by(order_code=code).one().id
    resp = client.patch(f"/api/admin/orders/{oid}/status", headers=admin_headers, json="done")
    assert resp.status_code == 400


def test_login_non_object_body(client):
    resp = client.post("/api/auth/login", json=["admin@shop.test", "pw"])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Email and password are required"


def _locked(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is locked"))


def test_datastore_error_on_validate_is_json_500(client, monkeypatch):
    from shopfront.services import voucher_service
    monkeypatch.setattr(voucher_service, "validate", _locked)
    resp = client.post("/api/vouchers/validate", json={"code": "SALE50K"})
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "database is locked"}


def test_datastore_error_on_admin_route_is_json_500(client, db, admin_headers, monkeypatch):
    import shopfront.admin.orders as admin_orders
    monkeypatch.setattr(admin_orders, "orders_query", _locked)
    resp = client.get("/api/admin/orders", headers=admin_headers)
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "error": "database is locked"}
    # session is usable again after the rollback
    assert Order.query.count() == 0
