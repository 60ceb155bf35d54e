# modules/products/labels.py
from io import BytesIO
import os
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from errors import NotFoundError
from modules.warehouse.models import TransactionKind


def build_label_sheet(product, qr_service, size=70 * mm) -> BytesIO:
    """A4 sheet: product name, packaging, then the entry and exit QR side by side."""
    images = []
    for kind in TransactionKind:
        path = qr_service.path_for(kind, product.id)
        if not os.path.isfile(path):
            raise NotFoundError(f"{kind.label} QR code not found.")
        images.append(Image(path, width=size, height=size))

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=f"QR labels #{product.id}")
    styles = getSampleStyleSheet()

    elements = [
        Paragraph(f"{escape(product.name)} (#{product.id})", styles['Title']),
        Paragraph(f"Packaging: {escape(product.packaging_type)}", styles['Normal']),
        Spacer(1, 12),
    ]

    table = Table(
        [["Stock entry", "Stock exit"], images],
        colWidths=[size + 10 * mm, size + 10 * mm],
    )
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (0, 0), colors.lightgreen),
        ('BACKGROUND', (1, 0), (1, 0), colors.pink),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
    ]))

    elements.append(table)
    doc.build(elements)
    buffer.seek(0)
    return buffer
