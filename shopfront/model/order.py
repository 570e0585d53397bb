from ..extensions import db
from sqlalchemy.sql import func

ORDER_STATUSES = ("pending", "confirmed", "shipping", "done", "cancelled")

class Order(db.Model):
    __tablename__ = "orders"

    id = db.Column(db.Integer, primary_key=True)
    order_code = db.Column(db.String(32), unique=True, nullable=False, index=True)  # e.g. "FSMC3K2Q1T7A9X"
    status = db.Column(db.String(20), default="pending", index=True)

    # Customer snapshot
    customer_name = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(50), nullable=False, index=True)
    customer_address = db.Column(db.Text, nullable=False)

    # Product snapshot; product_id is kept for audit even if the product is deleted later
    product_id = db.Column(db.Integer, nullable=False, index=True)
    product_name = db.Column(db.String(255), nullable=False)
    product_price = db.Column(db.Numeric(12, 2), nullable=False)
    color = db.Column(db.String(64), default="")
    size = db.Column(db.String(32), default="")
    quantity = db.Column(db.Integer, nullable=False, default=1)

    # Money snapshot
    voucher_code = db.Column(db.String(64), nullable=True, index=True)
    discount_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    total_price = db.Column(db.Numeric(12, 2), nullable=False)

    note = db.Column(db.Text, default="")

    created_at = db.Column(db.DateTime, server_default=func.now(), index=True)
    updated_at = db.Column(db.DateTime, onupdate=func.now(), server_default=func.now())

    def as_api(self):
        return {
            "id": self.id,
            "order_code": self.order_code,
            "status": self.status,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "customer_address": self.customer_address,
            "product_id": self.product_id,
            "product_name": self.product_name,
            "product_price": float(self.product_price or 0),
            "color": self.color,
            "size": self.size,
            "quantity": self.quantity,
            "voucher_code": self.voucher_code,
            "discount_amount": float(self.discount_amount or 0),
            "total_price": float(self.total_price or 0),
            "note": self.note,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
