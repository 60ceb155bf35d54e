from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField
from wtforms.validators import DataRequired, Length

class SiteForm(FlaskForm):
    name = StringField("Site name", validators=[DataRequired(), Length(max=255)])
    submit = SubmitField("Save")
