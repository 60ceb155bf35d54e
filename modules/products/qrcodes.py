# modules/products/qrcodes.py
"""
QR codes for stock entry / exit pages.

One service instance lives for the whole process (``app.extensions["qr_codes"]``):
it knows the flat PNG directory, the public base URL and the colour theme per kind.
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass
from io import BytesIO

import qrcode
from PIL import Image

from modules.warehouse.models import TransactionKind


@dataclass(frozen=True)
class QRTheme:
    dark: str
    light: str = "#FFFFFF"


@dataclass(frozen=True)
class GeneratedQR:
    kind: TransactionKind
    url: str
    path: str
    data_url: str


class QRCodeService:

    def __init__(self, directory: str, base_url: str, width: int = 512, themes: dict | None = None):
        self.directory = directory
        self.base_url = base_url.rstrip("/")
        self.width = width
        self.themes = themes or {
            TransactionKind.ENTRY: QRTheme(dark="#00FF00"),
            TransactionKind.EXIT: QRTheme(dark="#FF0000"),
        }

    @classmethod
    def from_config(cls, config) -> "QRCodeService":
        light = config.get("QR_BACKGROUND_COLOR", "#FFFFFF")
        return cls(
            directory=config["QR_CODE_DIR"],
            base_url=config["PUBLIC_BASE_URL"],
            width=config.get("QR_CODE_WIDTH", 512),
            themes={
                TransactionKind.ENTRY: QRTheme(dark=config.get("QR_ENTRY_COLOR", "#00FF00"), light=light),
                TransactionKind.EXIT: QRTheme(dark=config.get("QR_EXIT_COLOR", "#FF0000"), light=light),
            },
        )

    def ensure_directory(self) -> None:
        os.makedirs(self.directory, exist_ok=True)

    # ---------- naming ----------

    def payload_url(self, kind: TransactionKind, product_id: int) -> str:
        return f"{self.base_url}/stock-{kind.value}/{product_id}"

    @staticmethod
    def filename(kind: TransactionKind, product_id: int) -> str:
        return f"{kind.value}_{product_id}.png"

    def path_for(self, kind: TransactionKind, product_id: int) -> str:
        return os.path.join(self.directory, self.filename(kind, product_id))

    # ---------- rendering ----------

    def render_png(self, url: str, theme: QRTheme) -> bytes:
        qr = qrcode.QRCode(error_correction=qrcode.constants.ERROR_CORRECT_M, border=4)
        qr.add_data(url)
        qr.make(fit=True)

        img = qr.make_image(fill_color=theme.dark, back_color=theme.light).get_image()
        img = img.convert("RGB").resize((self.width, self.width), Image.NEAREST)

        buf = BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    def generate(self, kind: TransactionKind, product_id: int) -> GeneratedQR:
        """Render the QR for one kind, write ``{kind}_{id}.png`` and return it inline as well."""
        url = self.payload_url(kind, product_id)
        png = self.render_png(url, self.themes[kind])

        path = self.path_for(kind, product_id)
        with open(path, "wb") as fh:
            fh.write(png)

        data_url = "data:image/png;base64," + base64.b64encode(png).decode("ascii")
        return GeneratedQR(kind=kind, url=url, path=path, data_url=data_url)
