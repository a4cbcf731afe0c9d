from vetclinic import db
from vetclinic.models import Product


def get_reservations_with_products(repo):
    reservation = repo.model
    with repo.storage_guard('get_reservations_with_products'):
        rows = (db.session.query(reservation,
                                 Product.nombre.label('nombre_producto'),
                                 Product.precio.label('precio_producto'))
                .outerjoin(Product, reservation.producto_adicional_id == Product.id)
                .order_by(reservation.fecha_solicitada.desc(), reservation.hora_solicitada.desc())
                .all())
    result = []
    for row in rows:
        record = row[0].to_dict()
        record['nombre_producto'] = row.nombre_producto
        record['precio_producto'] = row.precio_producto
        result.append(record)
    return result
