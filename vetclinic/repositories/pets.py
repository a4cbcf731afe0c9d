"""Joined pet queries over the pet repository."""
from sqlalchemy import func

from vetclinic import db
from vetclinic.models import Owner, Product


def _joined_query(repo):
    pet = repo.model
    return (db.session.query(pet,
                             Owner.nombre_completo.label('nombre_dueno'),
                             Owner.telefono.label('telefono'),
                             Owner.email.label('email_dueno'),
                             Product.nombre.label('nombre_producto'),
                             Product.precio.label('precio_producto'))
            .outerjoin(Owner, pet.id_dueno == Owner.id)
            .outerjoin(Product, pet.producto_adicional_id == Product.id))


def _format_joined(row):
    record = row[0].to_dict()
    record.update({
        'nombre_dueno': row.nombre_dueno,
        'telefono': row.telefono,
        'email_dueno': row.email_dueno,
        'nombre_producto': row.nombre_producto,
        'precio_producto': row.precio_producto,
    })
    return record


def get_pets_with_owners(repo):
    with repo.storage_guard('get_pets_with_owners'):
        rows = _joined_query(repo).order_by(repo.model.fecha_creacion.desc(), repo.model.id.desc()).all()
    return [_format_joined(row) for row in rows]


def get_pet_with_owner(repo, pet_id):
    with repo.storage_guard('get_pet_with_owner'):
        row = _joined_query(repo).filter(repo.model.id == pet_id).first()
    return _format_joined(row) if row is not None else None


def count_pets_for_owner(repo, owner_id):
    # Unguarded: callers run it inside their own savepoint
    return (db.session.query(func.count(repo.model.id))
            .filter(repo.model.id_dueno == owner_id)
            .scalar())
