# shopfront/order/routes.py
from ..errors import ShopError
from ..services import order_service
from ..utils.api import ok, err, json_body
from ..utils.money import to_float
from . import bp

# POST /api/orders
@bp.post("")
def create_order():
    try:
        result = order_service.create_order(json_body())
    except ShopError as e:
        return err(e.message, e.status_code)

    return ok(
        status_code=201,
        order_code=result.order_code,
        id=result.order.id,
        discount=to_float(result.discount),
        total=to_float(result.total),
    )
