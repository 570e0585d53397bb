# shopfront/services/export_service.py
from io import BytesIO
import pandas as pd
from ..model import Order

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

STATUS_LABELS = {
    "pending": "Pending",
    "confirmed": "Confirmed",
    "shipping": "Shipping",
    "done": "Done",
    "cancelled": "Cancelled",
}

def orders_query(status=None):
    q = Order.query
    if status and status != "all":
        q = q.filter(Order.status == status)
    return q.order_by(Order.created_at.desc(), Order.id.desc())

def orders_dataframe(orders) -> pd.DataFrame:
    rows = [{
        "No.": i,
        "Order Code": o.order_code,
        "Customer": o.customer_name,
        "Phone": o.customer_phone,
        "Address": o.customer_address,
        "Product": o.product_name,
        "Unit Price": float(o.product_price or 0),
        "Color": o.color or "",
        "Size": o.size or "",
        "Quantity": o.quantity,
        "Voucher": o.voucher_code or "",
        "Discount": float(o.discount_amount or 0),
        "Total": float(o.total_price or 0),
        "Note": o.note or "",
        "Status": STATUS_LABELS.get(o.status, o.status),
        "Created At": o.created_at,
    } for i, o in enumerate(orders, start=1)]
    return pd.DataFrame(rows, columns=[
        "No.", "Order Code", "Customer", "Phone", "Address", "Product", "Unit Price",
        "Color", "Size", "Quantity", "Voucher", "Discount", "Total", "Note",
        "Status", "Created At",
    ])

def orders_xlsx(orders) -> BytesIO:
    df = orders_dataframe(orders)
    output = BytesIO()
    df.to_excel(output, index=False, sheet_name="Orders")
    output.seek(0)
    return output
