from .user import User
from .product import Product
from .voucher import Voucher
from .order import Order, ORDER_STATUSES

__all__ = [
    "User",
    "Product",
    "Voucher",
    "Order",
    "ORDER_STATUSES",
]
