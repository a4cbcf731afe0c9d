from datetime import datetime
from vetclinic import db
from vetclinic.models.base_model import RecordMixin


class Owner(RecordMixin, db.Model):
    __tablename__ = 'duenos'
    id = db.Column(db.Integer, primary_key=True)
    nombre_completo = db.Column(db.String(150), nullable=False)
    telefono = db.Column(db.String(30), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f'<Owner {self.nombre_completo}>'
