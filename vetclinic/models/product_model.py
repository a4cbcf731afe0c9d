from datetime import datetime
from vetclinic import db
from vetclinic.models.base_model import RecordMixin


class Product(RecordMixin, db.Model):
    __tablename__ = 'productos'
    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100), nullable=False)
    precio = db.Column(db.Float, nullable=False)
    cantidad = db.Column(db.Integer, nullable=False, default=0)
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint('cantidad >= 0', name='ck_productos_cantidad_no_negativa'),
    )

    def __repr__(self):
        return f'<Product {self.nombre} x{self.cantidad}>'
