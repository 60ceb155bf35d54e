# modules/products/forms.py

from flask_wtf import FlaskForm
from wtforms import IntegerField, SelectMultipleField, StringField, SubmitField
from wtforms.validators import DataRequired, InputRequired, NumberRange
from wtforms.widgets import CheckboxInput, ListWidget

PACKAGING_CHOICES = [
    ('bag', 'Bag'),
    ('box', 'Box'),
    ('pallet', 'Pallet'),
    ('drum', 'Drum'),
    ('roll', 'Roll'),
    ('unit', 'Unit'),
]


class MultiCheckboxField(SelectMultipleField):
    widget = ListWidget(prefix_label=False)
    option_widget = CheckboxInput()


class ProductForm(FlaskForm):
    # field names follow the /add-product form contract
    name = StringField('Product name', name='productName', validators=[DataRequired()])
    packaging = MultiCheckboxField(
        'Packaging',
        name='packagingType',
        choices=PACKAGING_CHOICES,
        validators=[DataRequired()],
    )
    initial_stock = IntegerField(
        'Initial stock',
        name='initialStock',
        validators=[InputRequired(), NumberRange(min=0)],
    )

    submit = SubmitField('Add product')
