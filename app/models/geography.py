from app.extensions import db


class Region(db.Model):
    __tablename__ = "regions"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)

    areas = db.relationship("Area", backref="region", lazy=True)

    def to_dict(self, include_areas=False):
        data = {"id": self.id, "name": self.name}
        if include_areas:
            data["areas"] = [{"id": a.id, "name": a.name} for a in self.areas]
        return data


class Area(db.Model):
    __tablename__ = "areas"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    region_id = db.Column(db.Integer, db.ForeignKey("regions.id"), nullable=False)

    territories = db.relationship("Territory", backref="area", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "regionId": self.region_id,
            "region": {"id": self.region.id, "name": self.region.name}
            if self.region
            else None,
            "territories": [{"id": t.id, "name": t.name} for t in self.territories],
        }


class Territory(db.Model):
    __tablename__ = "territories"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    area_id = db.Column(db.Integer, db.ForeignKey("areas.id"), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "areaId": self.area_id,
            "area": {"id": self.area.id, "name": self.area.name} if self.area else None,
        }
