# Product service module for business logic
import logging

from vetclinic.repositories import product_repository
from vetclinic.utils.util import is_blank, parse_int, parse_positive_float, require_fields

logger = logging.getLogger(__name__)


def create_product(data):
    require_fields(data, ('nombre', 'precio', 'cantidad'), 'Se requieren: nombre, precio, cantidad')
    product = product_repository.create({
        'nombre': str(data['nombre']).strip(),
        'precio': parse_positive_float(data['precio'], 'precio'),
        'cantidad': parse_int(data['cantidad'], 'cantidad', minimum=0),
    })
    logger.info(f"Producto {product['id']} creado")
    return product


def update_product(product_id, data):
    changes = {}
    if not is_blank(data.get('nombre')):
        changes['nombre'] = str(data['nombre']).strip()
    if not is_blank(data.get('precio')):
        changes['precio'] = parse_positive_float(data['precio'], 'precio')
    if data.get('cantidad') is not None:
        changes['cantidad'] = parse_int(data['cantidad'], 'cantidad', minimum=0)
    return product_repository.update(product_id, changes)
