"""
Product Model
"""

from datetime import datetime

from storefront.extensions import db


class Product(db.Model):
    """Item listed on the storefront"""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Float, nullable=False)
    # Generated filename inside UPLOAD_FOLDER
    image = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint('price > 0', name='ck_products_price_positive'),
    )

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'price': self.price, 'image': self.image}

    def __repr__(self):
        return f'<Product {self.name} {self.price}>'
