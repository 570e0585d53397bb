from datetime import timedelta
from decimal import Decimal

import pytest

from shopfront import create_app
from shopfront.config import TestConfig
from shopfront.extensions import db as _db
from shopfront.model import Product, User, Voucher
from shopfront.utils.timeutil import utcnow


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {"SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'test.db'}"},
        config_object=TestConfig,
    )
    with app.app_context():
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_product(db):
    def _make(**kw):
        fields = {
            "name": "Linen Shirt",
            "price": Decimal("200000"),
            "stock": 10,
            "is_active": True,
        }
        fields.update(kw)
        p = Product(**fields)
        db.session.add(p)
        db.session.commit()
        return p
    return _make


@pytest.fixture
def make_voucher(db):
    def _make(**kw):
        now = utcnow()
        fields = {
            "code": "SALE50K",
            "discount_amount": Decimal("50000"),
            "valid_from": now - timedelta(days=1),
            "valid_to": now + timedelta(days=1),
            "usage_limit": 0,
            "used_count": 0,
            "is_active": True,
        }
        fields.update(kw)
        v = Voucher(**fields)
        db.session.add(v)
        db.session.commit()
        return v
    return _make


def _login(client, db, email, role):
    u = User(email=email, name=role.title(), role=role)
    u.set_password("secret123")
    db.session.add(u)
    db.session.commit()
    resp = client.post("/api/auth/login", json={"email": email, "password": "secret123"})
    assert resp.status_code == 200, resp.get_json()
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture
def admin_headers(client, db):
    return _login(client, db, "admin@shop.test", "admin")


@pytest.fixture
def manager_headers(client, db):
    return _login(client, db, "manager@shop.test", "manager")


@pytest.fixture
def order_payload():
    def _payload(product_id, **kw):
        body = {
            "customer_name": "Nguyen Van A",
            "customer_phone": "0900000000",
            "customer_address": "12 Le Loi, District 1",
            "product_id": product_id,
        }
        body.update(kw)
        return body
    return _payload
