# Pet service: pet/owner cascade and stock side effects
import logging

from sqlalchemy.exc import SQLAlchemyError

from vetclinic import db
from vetclinic.errors import ClinicError, NotFoundError, ValidationError
from vetclinic.models import PetSex
from vetclinic.repositories import owner_repository, pet_repository, product_repository
from vetclinic.repositories.generic import commit_transaction
from vetclinic.repositories.pets import count_pets_for_owner
from vetclinic.repositories.products import decrement_stock
from vetclinic.utils.util import is_blank, parse_choice, parse_int, require_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('nombre', 'especie', 'edad', 'sexo', 'nombre_dueño', 'telefono', 'email')
SEX_CHOICES = [sex.value for sex in PetSex]


def parse_product_selection(data):
    """Return (product_id, quantity) or (None, None) when no product was chosen."""
    product_id = data.get('producto_adicional_id')
    quantity = data.get('cantidad_producto')
    if is_blank(product_id):
        return None, None
    product_id = parse_int(product_id, 'producto_adicional_id', minimum=1)
    quantity = parse_int(quantity, 'cantidad_producto', minimum=1) if not is_blank(quantity) else None
    if product_repository.get_by_id(product_id) is None:
        raise ValidationError('Dato inválido', f'Producto {product_id} no encontrado')
    return product_id, quantity


def reserve_product(product_id, quantity):
    # Stock is taken only when both product and quantity were given; a shortfall skips the write
    if product_id is not None and quantity:
        decrement_stock(product_repository, product_id, quantity)


def create_pet_with_owner(data):
    """Create the owner, then the pet pointing at it, then take product stock.

    All writes share one transaction: if any step fails nothing is kept, so an
    owner without pets is never left behind.
    """
    require_fields(data, REQUIRED_FIELDS,
                   'Se requieren todos los campos: ' + ', '.join(REQUIRED_FIELDS))
    edad = parse_int(data['edad'], 'edad', minimum=0)
    sexo = parse_choice(data['sexo'], 'sexo', SEX_CHOICES)
    product_id, quantity = parse_product_selection(data)

    try:
        owner = owner_repository.create({
            'nombre_completo': data['nombre_dueño'],
            'telefono': data['telefono'],
            'email': data['email'],
        }, commit=False)

        pet_fields = {
            'nombre': data['nombre'],
            'especie': str(data['especie']).lower(),
            'edad': edad,
            'sexo': sexo,
            'id_dueno': owner['id'],
        }
        if not is_blank(data.get('motivo')):
            pet_fields['motivo'] = data['motivo']
        if product_id is not None:
            pet_fields['producto_adicional_id'] = product_id
        if quantity:
            pet_fields['cantidad_producto'] = quantity
        pet = pet_repository.create(pet_fields, commit=False)

        reserve_product(product_id, quantity)
        commit_transaction('creación de mascota')
    except ClinicError:
        db.session.rollback()
        raise

    logger.info(f"Mascota {pet['id']} creada con dueño {owner['id']}")
    return pet, owner


def update_pet(pet_id, data):
    changes = {}
    if not is_blank(data.get('nombre')):
        changes['nombre'] = data['nombre']
    if not is_blank(data.get('especie')):
        changes['especie'] = str(data['especie']).lower()
    if not is_blank(data.get('edad')):
        changes['edad'] = parse_int(data['edad'], 'edad', minimum=0)
    if not is_blank(data.get('sexo')):
        changes['sexo'] = parse_choice(data['sexo'], 'sexo', SEX_CHOICES)
    if 'motivo' in data:
        changes['motivo'] = data['motivo']
    return pet_repository.update(pet_id, changes)


def remove_orphan_owner(owner_id):
    """Delete the owner if it has no pets left.

    Runs in a savepoint of the caller's transaction; a failure here is logged
    and does not undo the pet deletion.
    """
    try:
        with db.session.begin_nested():
            if count_pets_for_owner(pet_repository, owner_id) > 0:
                return
            owner_repository.model.query.filter_by(id=owner_id).delete(synchronize_session=False)
        logger.info(f"Dueño {owner_id} eliminado: sin mascotas")
    except SQLAlchemyError:
        logger.exception(f"Error al eliminar dueño {owner_id}")


def delete_pet(pet_id):
    pet = pet_repository.get_by_id(pet_id)
    if pet is None:
        raise NotFoundError('Mascota no encontrada')

    owner_id = pet['id_dueno']
    pet_repository.delete(pet_id, commit=False)
    remove_orphan_owner(owner_id)
    commit_transaction('eliminación de mascota')
    logger.info(f"Mascota {pet_id} eliminada")
