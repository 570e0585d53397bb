# shopfront/voucher/routes.py
from ..errors import VoucherError
from ..services import voucher_service
from ..utils.api import ok, err, json_body
from . import bp

# POST /api/vouchers/validate
@bp.post("/validate")
def validate_voucher():
    data = json_body()
    try:
        voucher = voucher_service.validate(data.get("code"))
    except VoucherError as e:
        return err(e.code, e.status_code)
    return ok(voucher=voucher_service.summary(voucher))
