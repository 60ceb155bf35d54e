import enum
from datetime import datetime

from extensions import db
from errors import ValidationError


class TransactionKind(enum.Enum):
    ENTRY = "entry"
    EXIT = "exit"

    @classmethod
    def parse(cls, raw) -> "TransactionKind":
        if isinstance(raw, cls):
            return raw
        value = (raw or "").strip().lower() if isinstance(raw, str) else raw
        for kind in cls:
            if kind.value == value:
                return kind
        raise ValidationError("Transaction type must be 'entry' or 'exit'.")

    @property
    def sign(self) -> int:
        return 1 if self is TransactionKind.ENTRY else -1

    @property
    def label(self) -> str:
        return "Entry" if self is TransactionKind.ENTRY else "Exit"


class Transaction(db.Model):
    """Append-only journal of stock movements. Rows are never updated or deleted."""
    __tablename__ = "Transactions"

    id = db.Column(db.Integer, primary_key=True)

    product_id = db.Column(db.Integer, db.ForeignKey("Products.id"), nullable=False, index=True)
    transaction_type = db.Column(
        db.Enum(
            TransactionKind,
            name="transaction_type",
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
    )
    quantity = db.Column(db.Integer, nullable=False)

    # destination site name; set only for exits
    site = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    product = db.relationship("Product", backref=db.backref("transactions", lazy="dynamic"))

    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_transactions_quantity_positive"),
        db.CheckConstraint(
            "transaction_type = 'entry' OR site IS NOT NULL",
            name="ck_transactions_exit_site",
        ),
    )

    def __repr__(self) -> str:
        return f"<Transaction id={self.id} product_id={self.product_id} {self.transaction_type.value} {self.quantity}>"
