# modules/products/models.py

from extensions import db

# largest value an INTEGER column holds on every supported backend
INTEGER_MAX = 2_147_483_647


class Product(db.Model):
    __tablename__ = 'Products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)

    # several selections are stored joined: "bag, pallet"
    packaging_type = db.Column(db.String(255), nullable=False)

    stock = db.relationship('Stock', back_populates='product', uselist=False)

    def __repr__(self):
        return f'<Product {self.name}>'


class Stock(db.Model):
    __tablename__ = 'Stock'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('Products.id'), nullable=False, unique=True)

    # running aggregate of entries minus exits; no floor
    stock_level = db.Column(db.Integer, nullable=False, default=0)

    product = db.relationship('Product', back_populates='stock')

    def __repr__(self):
        return f'<Stock product_id={self.product_id} level={self.stock_level}>'
