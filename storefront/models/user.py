"""
User Model
"""

from datetime import datetime

from storefront.extensions import db

ROLE_USER = 'user'
ROLE_ADMIN = 'admin'


class User(db.Model):
    """Registered customer or administrator"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    # Always stored trimmed and lowercased
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), default=ROLE_USER, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint("role IN ('user', 'admin')", name='ck_users_role'),
    )

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'email': self.email, 'role': self.role}

    def __repr__(self):
        return f'<User {self.email}>'
