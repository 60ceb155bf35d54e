# modules/warehouse/services.py
"""
Stock entry / exit workflow.

Fetch:  product + stock (+ sites for an exit), read only.
Apply:  validate -> relative UPDATE of Stock -> commit -> INSERT into Transactions -> commit.

The two commits are separate. If the journal insert fails, the stock change is already
saved and DependencyError is raised; that mismatch is logged at error level.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from errors import DependencyError, NotFoundError, ValidationError
from modules.products.models import INTEGER_MAX, Product, Stock
from modules.reference.sites.models import Site
from .models import Transaction, TransactionKind


@dataclass
class ProductStockView:
    product: Product
    stock_level: int
    kind: TransactionKind
    sites: list = field(default_factory=list)


@dataclass
class AppliedTransaction:
    product_id: int
    kind: TransactionKind
    quantity: int
    site: str | None = None

    @property
    def message(self) -> str:
        return f"Stock {self.kind.value} successful! Quantity: {self.quantity}."


# ---------- HELPERS ----------

_QUANTITY_RE = re.compile(r"^[+-]?([0-9]+)(\.[0-9]*)?$|^[+-]?\.[0-9]+$")
_MAX_DIGITS = len(str(INTEGER_MAX))


def _product_id(raw) -> int:
    if raw is None or isinstance(raw, bool) or str(raw).strip() == "":
        raise ValidationError("Product id is required.")
    text = str(raw).strip()
    if not (text.isascii() and text.isdigit()) or len(text) > _MAX_DIGITS:
        raise ValidationError("Product id must be a whole number.")
    pid = int(text, 10)
    if not 0 < pid <= INTEGER_MAX:
        raise ValidationError("Product id is out of range.")
    return pid


def parse_quantity(raw) -> int:
    """
    Quantity must be a plain decimal number > 0; the stored value is its integer part.
    "12" -> 12, "2.7" -> 2, "0", "-3", "0.4", "1e2", "abc" -> ValidationError.
    """
    if raw is None or isinstance(raw, bool) or str(raw).strip() == "":
        raise ValidationError("All fields are required and quantity must be a positive number.")

    text = str(raw).strip()
    match = _QUANTITY_RE.match(text)
    if match is None:
        raise ValidationError("Quantity must be a number.")
    if text.startswith("-"):
        raise ValidationError("All fields are required and quantity must be a positive number.")

    digits = (match.group(1) or "0").lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS or int(digits, 10) > INTEGER_MAX:
        raise ValidationError("Quantity is too large.")

    quantity = int(digits, 10)
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1.")
    return quantity


# ---------- FETCH ----------

def fetch_transaction_form(session, product_id, kind) -> ProductStockView:
    pid = _product_id(product_id)
    kind = TransactionKind.parse(kind)

    try:
        row = (
            session.query(Product, Stock.stock_level)
            .join(Stock, Stock.product_id == Product.id)
            .filter(Product.id == pid)
            .first()
        )
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching product details for %s", kind.value)
        raise DependencyError("Failed to fetch product details.")

    if row is None:
        raise NotFoundError("Product not found.")

    product, stock_level = row

    sites = []
    if kind is TransactionKind.EXIT:
        try:
            sites = session.query(Site).order_by(Site.id.asc()).all()
        except SQLAlchemyError:
            current_app.logger.exception("Error fetching site list")
            raise DependencyError("Failed to fetch site data.")

    return ProductStockView(product=product, stock_level=stock_level, kind=kind, sites=sites)


# ---------- APPLY ----------

def apply_transaction(session, product_id, kind, quantity, site=None) -> AppliedTransaction:
    pid = _product_id(product_id)
    kind = TransactionKind.parse(kind)
    qty = parse_quantity(quantity)

    site = (site or "").strip() or None
    if kind is TransactionKind.EXIT and site is None:
        raise ValidationError("A destination site is required for a stock exit.")
    if kind is TransactionKind.ENTRY:
        site = None

    # stock_level = stock_level ± qty, evaluated by the database
    stmt = (
        update(Stock)
        .where(Stock.product_id == pid)
        .values(stock_level=Stock.stock_level + kind.sign * qty)
        .execution_options(synchronize_session=False)
    )
    try:
        result = session.execute(stmt)
        if result.rowcount == 0:
            session.rollback()
            raise NotFoundError("Product not found.")
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        current_app.logger.exception("Error updating stock for %s (product %s)", kind.value, pid)
        raise DependencyError("Failed to update stock.")

    try:
        session.add(Transaction(product_id=pid, transaction_type=kind, quantity=qty, site=site))
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        current_app.logger.exception(
            "Error inserting transaction data: stock of product %s already changed by %+d, journal entry missing",
            pid, kind.sign * qty,
        )
        raise DependencyError("Failed to insert transaction data.")

    current_app.logger.info(
        "Transaction recorded for product %s, type: %s, quantity: %s", pid, kind.value, qty
    )
    return AppliedTransaction(product_id=pid, kind=kind, quantity=qty, site=site)


# ---------- JOURNAL ----------

def list_transactions(session, product_id=None, limit=500):
    query = (
        session.query(Transaction, Product)
        .join(Product, Product.id == Transaction.product_id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    if product_id is not None:
        product_id = _product_id(product_id)
        query = query.filter(Transaction.product_id == product_id)

    try:
        rows = query.limit(limit).all()
    except SQLAlchemyError:
        current_app.logger.exception("Error fetching transaction journal")
        raise DependencyError("Failed to fetch transactions.")

    return [
        {
            "created_at": tx.created_at,
            "product_id": p.id,
            "product_name": p.name,
            "kind": tx.transaction_type,
            "quantity": tx.quantity,
            "site": tx.site,
        }
        for tx, p in rows
    ]
