# Registration and login: bcrypt hashing and JWT issuing
import logging
import re

from flask_jwt_extended import create_access_token

from vetclinic import bcrypt
from vetclinic.errors import DuplicateEmailError, DuplicateKeyError, InvalidCredentialsError, ValidationError
from vetclinic.models import DEFAULT_ROLE
from vetclinic.repositories import user_repository
from vetclinic.repositories.users import get_user_by_email
from vetclinic.utils.util import require_fields

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')
MIN_PASSWORD_LENGTH = 6


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def check_password(password_hash, password):
    return bcrypt.check_password_hash(password_hash, password)


def public_user(user):
    return {
        'id': user['id'],
        'nombre_completo': user['nombre_completo'],
        'email': user['email'],
        'rol': user['rol'],
    }


def validate_email(email):
    if not EMAIL_REGEX.match(email):
        raise ValidationError('Dato inválido', 'Email debe tener formato válido')


def validate_password(password):
    if not isinstance(password, str):
        raise ValidationError('Dato inválido', 'La contraseña debe ser texto')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError('Dato inválido',
                              f'La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres')


def register(data):
    require_fields(data, ('nombre_completo', 'email', 'contraseña'),
                   'Se requieren: nombre_completo, email, contraseña')
    email = str(data['email']).strip()
    validate_email(email)
    validate_password(data['contraseña'])

    try:
        user = user_repository.create({
            'nombre_completo': str(data['nombre_completo']).strip(),
            'email': email,
            'contrasena': hash_password(data['contraseña']),
            'rol': DEFAULT_ROLE,
        })
    except DuplicateKeyError as e:
        raise DuplicateEmailError() from e

    user.pop('contrasena', None)
    logger.info(f"Usuario registrado: {user['id']}")
    return user


def issue_token(user):
    return create_access_token(
        identity=str(user['id']),
        additional_claims={
            'nombre_completo': user['nombre_completo'],
            'email': user['email'],
            'rol': user['rol'],
        },
    )


def login(data):
    if not data.get('email') or not data.get('contraseña'):
        raise ValidationError('Credenciales incompletas')
    if not isinstance(data['email'], str) or not isinstance(data['contraseña'], str):
        raise InvalidCredentialsError()

    user = get_user_by_email(user_repository, data['email'])
    # unknown email and wrong password must be indistinguishable
    if user is None or not check_password(user['contrasena'], data['contraseña']):
        raise InvalidCredentialsError()

    return issue_token(user), public_user(user)
