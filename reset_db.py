# reset_db.py

from app import create_app
from extensions import db

app = create_app()

with app.app_context():
    app.logger.warning("All tables will be dropped...")
    db.drop_all()
    app.logger.warning("Tables dropped.")
    db.create_all()
    app.logger.warning("Database recreated.")
