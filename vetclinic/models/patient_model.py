from vetclinic import db
from vetclinic.models.base_model import RecordMixin


class Patient(RecordMixin, db.Model):
    __tablename__ = 'pacientes'
    id = db.Column(db.Integer, primary_key=True)
    nombre_mascota = db.Column(db.String(100), nullable=False)
    raza = db.Column(db.String(100), nullable=False)
    nombre_dueno = db.Column(db.String(150), nullable=False)

    def __repr__(self):
        return f'<Patient {self.nombre_mascota}>'
