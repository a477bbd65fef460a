from app.extensions import db
from datetime import datetime


retailer_assignments = db.Table(
    "retailer_assignments",
    db.Column(
        "retailer_id",
        db.Integer,
        db.ForeignKey("retailers.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "sales_rep_id",
        db.Integer,
        db.ForeignKey("sales_reps.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column("assigned_at", db.DateTime, default=datetime.utcnow),
)


class Retailer(db.Model):
    __tablename__ = "retailers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), unique=True, nullable=True)
    points = db.Column(db.Integer, nullable=False, default=0)
    routes = db.Column(db.String(255), nullable=False, default="")
    notes = db.Column(db.Text, nullable=False, default="")

    region_id = db.Column(db.Integer, db.ForeignKey("regions.id"), nullable=False)
    area_id = db.Column(db.Integer, db.ForeignKey("areas.id"), nullable=False)
    distributor_id = db.Column(
        db.Integer, db.ForeignKey("distributors.id"), nullable=False
    )
    territory_id = db.Column(db.Integer, db.ForeignKey("territories.id"), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    region = db.relationship("Region", backref="retailers")
    area = db.relationship("Area", backref="retailers")
    distributor = db.relationship("Distributor", backref="retailers")
    territory = db.relationship("Territory", backref="retailers")

    sales_reps = db.relationship(
        "SalesRep",
        secondary=retailer_assignments,
        backref=db.backref("retailers", lazy="dynamic"),
    )

    def is_assigned_to(self, sales_rep_id):
        return any(sr.id == sales_rep_id for sr in self.sales_reps)

    def to_dict(self, include_assignments=True):
        def ref(obj):
            return {"id": obj.id, "name": obj.name} if obj else None

        data = {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "points": self.points,
            "routes": self.routes,
            "notes": self.notes,
            "regionId": self.region_id,
            "areaId": self.area_id,
            "distributorId": self.distributor_id,
            "territoryId": self.territory_id,
            "region": ref(self.region),
            "area": ref(self.area),
            "distributor": ref(self.distributor),
            "territory": ref(self.territory),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_assignments:
            data["salesReps"] = [ref(sr) for sr in self.sales_reps]
        return data
