import logging
from flask import Flask, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from .config import Config
from .extensions import db, jwt, cors, migrate
from .utils.api import err

def create_app(overrides=None, config_object=Config):
    app = Flask(__name__, instance_relative_config=True)

    app.config.from_object(config_object)
    if overrides:
        app.config.update(overrides)
    config_object.init_app(app)

    app.logger.setLevel(getattr(logging, str(app.config["LOG_LEVEL"]).upper(), logging.INFO))

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})
    migrate.init_app(app, db)

    # Register blueprints
    from .auth import bp as auth_bp; app.register_blueprint(auth_bp)
    from .product import bp as product_bp; app.register_blueprint(product_bp)
    from .order import bp as order_bp; app.register_blueprint(order_bp)
    from .voucher import bp as voucher_bp; app.register_blueprint(voucher_bp)
    from .admin import bp as admin_bp; app.register_blueprint(admin_bp)

    from .cli import register_cli
    register_cli(app)

    @app.errorhandler(SQLAlchemyError)
    def datastore_error(e):
        db.session.rollback()
        app.logger.exception("datastore error on %s", request.path)
        return err(str(getattr(e, "orig", None) or e), 500)

    @app.get("/")
    def health():
        return jsonify(success=True, msg="API running")

    with app.app_context():
        from . import model  # noqa: F401  register tables before create_all
        db.create_all()
        app.logger.debug("blueprints: %s", sorted(app.blueprints.keys()))
        for rule in app.url_map.iter_rules():
            app.logger.debug("%s %s", sorted(rule.methods), rule.rule)

    return app
