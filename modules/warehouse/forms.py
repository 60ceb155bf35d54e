from flask_wtf import FlaskForm
from wtforms import HiddenField, IntegerField, SubmitField
from wtforms.validators import InputRequired, NumberRange
from wtforms_sqlalchemy.fields import QuerySelectField


class StockMovementForm(FlaskForm):
    product_id = HiddenField(name="productId")
    transaction_type = HiddenField(name="transactionType")
    quantity = IntegerField("Quantity", validators=[InputRequired(), NumberRange(min=1)])

    # posted value is the site name, the journal stores it as text
    site = QuerySelectField(
        "Site",
        get_pk=lambda s: s.name,
        get_label="name",
        allow_blank=True,
        blank_text="-- choose a site --",
    )

    submit = SubmitField("Save")

    @classmethod
    def for_view(cls, view):
        form = cls(formdata=None)
        form.product_id.data = view.product.id
        form.transaction_type.data = view.kind.value
        form.site.query = view.sites
        return form
