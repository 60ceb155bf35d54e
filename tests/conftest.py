"""Shared pytest fixtures: an app over in-memory SQLite and a temporary QR directory."""

from __future__ import annotations

import pytest

from app import create_app
from config import Config
from extensions import db as _db


@pytest.fixture
def app(tmp_path):
    class TestConfig(Config):
        TESTING = True
        SECRET_KEY = "test"
        SQLALCHEMY_DATABASE_URI = "sqlite://"
        WTF_CSRF_ENABLED = False
        QR_CODE_DIR = str(tmp_path / "qrcodes")
        PUBLIC_BASE_URL = "http://stock.test"
        QR_CODE_WIDTH = 128

    app = create_app(TestConfig)
    with app.app_context():
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def qr_service(app):
    return app.extensions["qr_codes"]


@pytest.fixture
def make_product(db):
    """Insert a Product with its Stock row directly, without QR codes."""
    from modules.products.models import Product, Stock

    def _make(name="Cement", packaging="bag", stock_level=100):
        product = Product(name=name, packaging_type=packaging)
        db.session.add(product)
        db.session.flush()
        db.session.add(Stock(product_id=product.id, stock_level=stock_level))
        db.session.commit()
        return product.id

    return _make


@pytest.fixture
def make_site(db):
    from modules.reference.sites.models import Site

    def _make(name="SiteA"):
        site = Site(name=name)
        db.session.add(site)
        db.session.commit()
        return site.id

    return _make
