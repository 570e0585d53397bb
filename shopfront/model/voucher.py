from ..extensions import db
from sqlalchemy.sql import func

class Voucher(db.Model):
    __tablename__ = "vouchers"
    __table_args__ = (
        db.CheckConstraint(
            "usage_limit = 0 OR used_count <= usage_limit",
            name="ck_vouchers_used_within_limit",
        ),
        db.CheckConstraint("usage_limit >= 0", name="ck_vouchers_usage_limit_positive"),
    )

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(64), unique=True, nullable=False, index=True)  # always upper-case

    discount_amount = db.Column(db.Numeric(12, 2), nullable=False)

    valid_from = db.Column(db.DateTime, nullable=False)   # naive UTC
    valid_to = db.Column(db.DateTime, nullable=False)

    usage_limit = db.Column(db.Integer, nullable=False, default=0)   # 0 = unlimited
    used_count = db.Column(db.Integer, nullable=False, default=0)

    is_active = db.Column(db.Boolean, default=True, index=True)

    created_at = db.Column(db.DateTime, server_default=func.now())
    updated_at = db.Column(db.DateTime, onupdate=func.now(), server_default=func.now())

    @property
    def unlimited(self):
        return not self.usage_limit

    @property
    def remaining(self):
        if self.unlimited:
            return None
        return max(0, self.usage_limit - (self.used_count or 0))

    def as_api(self):
        return {
            "id": self.id,
            "code": self.code,
            "discount_amount": float(self.discount_amount or 0),
            "valid_from": self.valid_from.isoformat() if self.valid_from else None,
            "valid_to": self.valid_to.isoformat() if self.valid_to else None,
            "usage_limit": self.usage_limit,
            "used_count": self.used_count,
            "remaining": self.remaining,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
