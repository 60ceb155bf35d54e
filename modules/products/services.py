# modules/products/services.py
from __future__ import annotations

from dataclasses import dataclass

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from errors import DependencyError, ValidationError
from modules.products.models import INTEGER_MAX, Product, Stock
from modules.warehouse.models import TransactionKind


@dataclass
class RegisteredProduct:
    product_id: int
    product_name: str
    entry_qr: str
    exit_qr: str


def _packaging_text(packaging) -> str:
    if isinstance(packaging, (list, tuple)):
        items = [str(p).strip() for p in packaging if p is not None and str(p).strip()]
        return ", ".join(items)
    return (packaging or "").strip()


def _initial_stock(raw) -> int:
    if isinstance(raw, bool):
        raise ValidationError("Initial stock must be a non-negative whole number.")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if len(text) > len(str(INTEGER_MAX)) + 1:
            raise ValidationError("Initial stock is too large.")
        try:
            value = int(text, 10)
        except ValueError:
            raise ValidationError("Initial stock must be a non-negative whole number.")
    if value < 0:
        raise ValidationError("Initial stock must be a non-negative whole number.")
    if value > INTEGER_MAX:
        raise ValidationError("Initial stock is too large.")
    return value


def register_product(session, qr_service, name, packaging, initial_stock) -> RegisteredProduct:
    """
    Create a product with its stock row and the two QR codes.

    Product and Stock are committed together. QR codes are rendered afterwards:
    if that fails the rows stay in place and DependencyError is raised.
    """
    name = (name or "").strip()
    packaging_text = _packaging_text(packaging)

    if not name or not packaging_text or initial_stock is None or str(initial_stock).strip() == "":
        current_app.logger.warning("Add product rejected: missing required fields")
        raise ValidationError("All fields are required.")

    level = _initial_stock(initial_stock)

    product = Product(name=name, packaging_type=packaging_text)
    try:
        session.add(product)
        session.flush()
    except SQLAlchemyError:
        session.rollback()
        current_app.logger.exception("Error inserting product %r", name)
        raise DependencyError("Failed to add product.")

    try:
        session.add(Stock(product_id=product.id, stock_level=level))
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        current_app.logger.exception("Error inserting stock for product %r", name)
        raise DependencyError("Failed to add stock.")

    product_id = product.id
    current_app.logger.info("Product %s added with stock %s", product_id, level)

    generated = {}
    for kind in TransactionKind:
        try:
            generated[kind] = qr_service.generate(kind, product_id)
        except Exception:
            current_app.logger.exception(
                "Error generating %s QR code for product %s (product and stock already saved)",
                kind.value, product_id,
            )
            raise DependencyError(f"Failed to generate {kind.value} QR code.")

    current_app.logger.info("QR codes generated for product %s", product_id)

    return RegisteredProduct(
        product_id=product_id,
        product_name=name,
        entry_qr=generated[TransactionKind.ENTRY].data_url,
        exit_qr=generated[TransactionKind.EXIT].data_url,
    )
