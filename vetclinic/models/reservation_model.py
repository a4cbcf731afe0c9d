import enum
from datetime import datetime
from vetclinic import db
from vetclinic.models.base_model import RecordMixin


class ReservationStatus(enum.Enum):
    PENDING = 'pendiente'
    CONFIRMED = 'confirmada'
    CANCELLED = 'cancelada'
    RESCHEDULE = 'reprogramar'


class AppointmentType(enum.Enum):
    IN_PERSON = 'presencial'
    AT_HOME = 'domicilio'


class Reservation(RecordMixin, db.Model):
    __tablename__ = 'reservaciones'
    id = db.Column(db.Integer, primary_key=True)
    nombre_cliente = db.Column(db.String(150), nullable=False)
    telefono = db.Column(db.String(30), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    nombre_mascota = db.Column(db.String(100), nullable=False)
    especie = db.Column(db.String(50), nullable=False)
    motivo_consulta = db.Column(db.String(300), nullable=False)
    fecha_solicitada = db.Column(db.Date, nullable=False)
    hora_solicitada = db.Column(db.Time, nullable=False)
    tipo_cita = db.Column(db.String(20), nullable=False)
    estado = db.Column(db.String(20), nullable=False, default=ReservationStatus.PENDING.value)
    producto_adicional_id = db.Column(db.Integer, db.ForeignKey('productos.id'), nullable=True)
    cantidad_producto = db.Column(db.Integer, nullable=True)
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f'<Reservation {self.id} {self.fecha_solicitada} ({self.estado})>'
