# modules/reference/sites/models.py
from extensions import db

class Site(db.Model):
    """Construction site (chantier) a stock exit is sent to."""
    __tablename__ = 'chantier'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column('chantier_nom', db.String(255), nullable=False, unique=True)

    def __repr__(self):
        return f"<Site {self.name}>"
