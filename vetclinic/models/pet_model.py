import enum
from datetime import datetime
from vetclinic import db
from vetclinic.models.base_model import RecordMixin


class PetSex(enum.Enum):
    MALE = 'Macho'
    FEMALE = 'Hembra'


class Pet(RecordMixin, db.Model):
    __tablename__ = 'mascotas'
    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100), nullable=False)
    especie = db.Column(db.String(50), nullable=False)
    edad = db.Column(db.Integer, nullable=False)
    sexo = db.Column(db.String(10), nullable=False)
    id_dueno = db.Column(db.Integer, db.ForeignKey('duenos.id'), nullable=False, index=True)
    motivo = db.Column(db.String(300))
    producto_adicional_id = db.Column(db.Integer, db.ForeignKey('productos.id'), nullable=True)
    cantidad_producto = db.Column(db.Integer, nullable=True)
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f'<Pet {self.nombre} ({self.especie})>'
