# shopfront/model/product.py
from ..extensions import db
from sqlalchemy.sql import func

class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    description = db.Column(db.Text, default="")

    price = db.Column(db.Numeric(12, 2), nullable=False)
    original_price = db.Column(db.Numeric(12, 2), nullable=True)   # strike-through price

    category = db.Column(db.String(64), default="unisex", index=True)
    brand = db.Column(db.String(120), default="")
    material = db.Column(db.String(120), default="")
    thumbnail = db.Column(db.String(1024), default="")
    images = db.Column(db.JSON, default=list)
    colors = db.Column(db.JSON, default=list)
    sizes = db.Column(db.JSON, default=list)

    stock = db.Column(db.Integer, default=0)
    is_active = db.Column(db.Boolean, default=True, index=True)
    is_featured = db.Column(db.Boolean, default=False)

    created_at = db.Column(db.DateTime, server_default=func.now(), index=True)
    updated_at = db.Column(db.DateTime, onupdate=func.now(), server_default=func.now())

    def as_api(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": float(self.price or 0),
            "original_price": float(self.original_price) if self.original_price is not None else None,
            "category": self.category,
            "brand": self.brand,
            "material": self.material,
            "thumbnail": self.thumbnail,
            "images": self.images or [],
            "colors": self.colors or [],
            "sizes": self.sizes or [],
            "stock": self.stock,
            "is_active": self.is_active,
            "is_featured": self.is_featured,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
