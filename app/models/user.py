from app.extensions import db
from datetime import datetime


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    username = db.Column(db.String(50), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False)
    phone = db.Column(db.String(20))

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    sales_rep = db.relationship(
        "SalesRep",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def to_dict(self, superadmin_email=None):
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "role": self.role,
            "phone": self.phone,
            "salesRepId": self.sales_rep.id if self.sales_rep else None,
            "isPredefinedAdmin": bool(superadmin_email)
            and self.email == superadmin_email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


class SalesRep(db.Model):
    __tablename__ = "sales_reps"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False
    )
    name = db.Column(db.String(100), nullable=False)

    user = db.relationship("User", back_populates="sales_rep")

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "username": self.user.username if self.user else None,
            "email": self.user.email if self.user else None,
            "phone": self.user.phone if self.user else None,
            "retailerCount": self.retailers.count(),
        }
