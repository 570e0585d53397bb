# shopfront/errors.py

INVALID_VOUCHER = "INVALID_VOUCHER"
VOUCHER_LIMIT = "VOUCHER_LIMIT"


class ShopError(Exception):
    """Base for failures a route turns into a JSON error body."""

    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ShopError):
    status_code = 400


class NotFoundError(ShopError):
    status_code = 404


class ConflictError(ShopError):
    status_code = 409


class VoucherError(ShopError):
    """Voucher rejection. ``message`` is the machine-readable code."""

    status_code = 400

    def __init__(self, code):
        super().__init__(code)
        self.code = code
