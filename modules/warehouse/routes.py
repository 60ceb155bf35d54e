from flask import render_template, request

from extensions import db
from modules.products.models import INTEGER_MAX
from . import warehouse_bp
from .forms import StockMovementForm
from .models import TransactionKind
from .services import apply_transaction, fetch_transaction_form, list_transactions


def _render_stock_page(product_id: int, kind: TransactionKind):
    view = fetch_transaction_form(db.session, product_id, kind)
    return render_template(
        "warehouse/product.html",
        product=view.product,
        stock_level=view.stock_level,
        transaction_type=view.kind,
        sites=view.sites,
        form=StockMovementForm.for_view(view),
    )


# ---------- QR TARGETS ----------

@warehouse_bp.get(f"/stock-entry/<int(min=1, max={INTEGER_MAX}):product_id>")
def stock_entry(product_id: int):
    return _render_stock_page(product_id, TransactionKind.ENTRY)


@warehouse_bp.get(f"/stock-exit/<int(min=1, max={INTEGER_MAX}):product_id>")
def stock_exit(product_id: int):
    return _render_stock_page(product_id, TransactionKind.EXIT)


@warehouse_bp.post("/update-stock")
def update_stock():
    applied = apply_transaction(
        db.session,
        product_id=request.form.get("productId"),
        kind=request.form.get("transactionType"),
        quantity=request.form.get("quantity"),
        site=request.form.get("site"),
    )
    return render_template("warehouse/success.html", applied=applied)


# ---------- JOURNAL ----------

@warehouse_bp.get("/transactions")
def journal():
    """Latest stock movements, optionally for one product (?product_id=)."""
    product_id = request.args.get("product_id", type=int)
    rows = list_transactions(db.session, product_id=product_id)
    return render_template("warehouse/journal.html", rows=rows, product_id=product_id)
