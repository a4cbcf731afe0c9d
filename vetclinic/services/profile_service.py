import logging

from vetclinic.errors import DuplicateEmailError, DuplicateKeyError, NotFoundError, ValidationError
from vetclinic.repositories import user_repository
from vetclinic.services.auth_service import check_password, hash_password, validate_email, validate_password
from vetclinic.utils.util import is_blank

logger = logging.getLogger(__name__)


def update_profile(user_id, data):
    """Update name, email and/or password of the authenticated user."""
    nombre = data.get('nombre_completo')
    email = data.get('email')
    new_password = data.get('contraseña_nueva')

    if is_blank(nombre) and is_blank(email) and not new_password:
        raise ValidationError('Datos incompletos', 'Debes proporcionar al menos un campo a actualizar')

    current = user_repository.get_by_id(user_id)
    if current is None:
        raise NotFoundError('Usuario no encontrado')

    changes = {}
    if not is_blank(nombre):
        changes['nombre_completo'] = str(nombre).strip()
    if not is_blank(email):
        email = str(email).strip()
        validate_email(email)
        changes['email'] = email
    if new_password:
        current_password = data.get('contraseña_actual')
        if not current_password:
            raise ValidationError('Datos incompletos',
                                  'Debes proporcionar tu contraseña actual para cambiarla')
        if not isinstance(current_password, str) or not check_password(current['contrasena'], current_password):
            raise ValidationError('Contraseña incorrecta', 'La contraseña actual es incorrecta')
        validate_password(new_password)
        changes['contrasena'] = hash_password(new_password)

    try:
        user_repository.update(user_id, changes)
    except DuplicateKeyError as e:
        raise DuplicateEmailError() from e

    logger.info(f"Perfil actualizado: {user_id} ({', '.join(sorted(changes))})")
    return {
        'id': user_id,
        'nombre_completo': changes.get('nombre_completo', current['nombre_completo']),
        'email': changes.get('email', current['email']),
        'rol': current['rol'],
    }
