import os

from flask import Flask, render_template
from config import Config
from errors import StockAppError, ValidationError, NotFoundError, DependencyError
from extensions import db, csrf
from register_blueprints import register_blueprints


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)
    csrf.init_app(app)
    register_blueprints(app)

    # QR service: one per process, the directory must exist before the first registration
    from modules.products.qrcodes import QRCodeService
    qr_service = QRCodeService.from_config(app.config)
    qr_service.ensure_directory()
    app.extensions["qr_codes"] = qr_service

    # Import models so create_all sees every table
    from modules.products.models import Product, Stock  # noqa: F401
    from modules.warehouse.models import Transaction  # noqa: F401
    from modules.reference.sites.models import Site  # noqa: F401

    with app.app_context():
        db.create_all()

    @app.route('/')
    def index():
        from modules.products.forms import ProductForm
        return render_template('index.html', title='Welcome to LionelV2', form=ProductForm())

    # ── workflow errors -> HTTP
    def _app_error_handler(e: StockAppError):
        if isinstance(e, ValidationError):
            app.logger.warning("Validation error: %s", e.message)
        elif isinstance(e, NotFoundError):
            app.logger.info("Not found: %s", e.message)
        # DependencyError is already logged with its traceback where it was raised
        return render_template('errors/message.html', message=e.message, status=e.status_code), e.status_code

    app.register_error_handler(ValidationError, _app_error_handler)
    app.register_error_handler(NotFoundError, _app_error_handler)
    app.register_error_handler(DependencyError, _app_error_handler)

    return app

if __name__ == '__main__':
    app = create_app()
    app.logger.info("Server is running on http://localhost:%s", app.config["PORT"])
    app.run(host='0.0.0.0', port=app.config["PORT"])
