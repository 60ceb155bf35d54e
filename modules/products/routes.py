import os

from flask import current_app, redirect, render_template, request, send_file, url_for

from errors import NotFoundError
from extensions import db
from modules.warehouse.models import TransactionKind
from . import products_bp
from .labels import build_label_sheet
from .models import INTEGER_MAX, Product
from .services import register_product


def _qr_service():
    return current_app.extensions["qr_codes"]


# ---------- REGISTRATION ----------

@products_bp.post("/add-product")
def add_product():
    current_app.logger.info("Form submission received: %s", request.form.get("productName"))

    # browsers post checkbox groups either as packagingType or packagingType[]
    packaging = request.form.getlist("packagingType") or request.form.getlist("packagingType[]")

    registered = register_product(
        db.session,
        _qr_service(),
        name=request.form.get("productName"),
        packaging=packaging,
        initial_stock=request.form.get("initialStock"),
    )

    return redirect(url_for(
        "products.settings",
        productId=registered.product_id,
        productName=registered.product_name,
        entryQR=registered.entry_qr,
        exitQR=registered.exit_qr,
    ))


@products_bp.get("/settings")
def settings():
    return render_template(
        "products/settings.html",
        title="Settings Page",
        product_id=request.args.get("productId", type=int),
        product_name=request.args.get("productName"),
        entry_qr=request.args.get("entryQR"),
        exit_qr=request.args.get("exitQR"),
    )


# ---------- DOWNLOADS ----------

def _download_qr(product_id: int, kind: TransactionKind):
    service = _qr_service()
    path = service.path_for(kind, product_id)
    if not os.path.isfile(path):
        current_app.logger.warning("%s QR code for product %s not found at %s", kind.value, product_id, path)
        raise NotFoundError(f"{kind.label} QR code not found.")

    return send_file(
        path,
        mimetype="image/png",
        as_attachment=True,
        download_name=service.filename(kind, product_id),
    )


@products_bp.get(f"/download-entry-qr/<int(min=1, max={INTEGER_MAX}):product_id>")
def download_entry_qr(product_id: int):
    return _download_qr(product_id, TransactionKind.ENTRY)


@products_bp.get(f"/download-exit-qr/<int(min=1, max={INTEGER_MAX}):product_id>")
def download_exit_qr(product_id: int):
    return _download_qr(product_id, TransactionKind.EXIT)


@products_bp.get(f"/download-qr-labels/<int(min=1, max={INTEGER_MAX}):product_id>")
def download_qr_labels(product_id: int):
    """Printable PDF with both QR codes of a product."""
    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found.")

    buffer = build_label_sheet(product, _qr_service())
    return send_file(
        buffer,
        as_attachment=True,
        download_name=f"qr_labels_{product_id}.pdf",
        mimetype="application/pdf",
    )
