# shopfront/cli.py
import click
from flask.cli import with_appcontext
from .extensions import db
from .errors import ShopError
from .model import User
from .services import voucher_service
from .services.export_service import orders_query, orders_dataframe

@click.command("create-admin")
@with_appcontext
@click.option("--email", required=True)
@click.option("--password", required=True)
@click.option("--name", required=True)
@click.option("--role", type=click.Choice(["admin", "manager"]), default="admin", show_default=True)
def create_admin(email, password, name, role):
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        click.echo("Email already exists"); return
    u = User(email=email, name=name, role=role)
    u.set_password(password)
    db.session.add(u); db.session.commit()
    click.echo(f"{role.capitalize()} created: {u.id} {u.email}")

@click.command("create-voucher")
@with_appcontext
@click.option("--code", required=True)
@click.option("--discount", required=True, help="Flat amount taken off the order total.")
@click.option("--valid-from", required=True, help="ISO-8601, e.g. 2026-01-01T00:00:00Z")
@click.option("--valid-to", required=True)
@click.option("--limit", default=0, show_default=True, help="Max redemptions, 0 = unlimited.")
def create_voucher(code, discount, valid_from, valid_to, limit):
    try:
        v = voucher_service.create_voucher_from_payload({
            "code": code,
            "discount_amount": discount,
            "valid_from": valid_from,
            "valid_to": valid_to,
            "usage_limit": limit,
        })
    except ShopError as e:
        db.session.rollback()
        raise click.ClickException(e.message)
    click.echo(f"Voucher created: {v.id} {v.code}")

@click.command("export-orders")
@with_appcontext
@click.option("--out", "out_path", required=True, type=click.Path(dir_okay=False))
@click.option("--status", default=None, help="Only orders in this status.")
def export_orders(out_path, status):
    df = orders_dataframe(orders_query(status).all())
    df.to_excel(out_path, index=False, sheet_name="Orders")
    click.echo(f"{len(df)} orders exported to {out_path}")

def register_cli(app):
    app.cli.add_command(create_admin)
    app.cli.add_command(create_voucher)
    app.cli.add_command(export_orders)
