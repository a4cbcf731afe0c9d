import logging
from functools import wraps

from flask import g, jsonify
from flask_jwt_extended import get_jwt, jwt_required

from vetclinic.errors import InvalidCredentialError, MissingCredentialError

logger = logging.getLogger(__name__)


def identity_from_claims(claims):
    return {
        'id': int(claims['sub']),
        'nombre_completo': claims.get('nombre_completo'),
        'email': claims.get('email'),
        'rol': claims.get('rol'),
    }


def token_required(f):
    """Reject the request unless it carries a valid bearer token.

    The decoded identity is exposed to the handler as ``g.usuario``.
    """
    @wraps(f)
    @jwt_required()
    def decorated(*args, **kwargs):
        g.usuario = identity_from_claims(get_jwt())
        return f(*args, **kwargs)
    return decorated


def setup_auth_middleware(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        error = MissingCredentialError('No autorizado', 'Token no proporcionado')
        return jsonify(error.to_dict()), error.status_code

    @jwt.invalid_token_loader
    def invalid_token(reason):
        logger.info(f"Token rechazado: {reason}")
        error = InvalidCredentialError('Token inválido', 'El token ha expirado o es inválido')
        return jsonify(error.to_dict()), error.status_code

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        error = InvalidCredentialError('Token inválido', 'El token ha expirado o es inválido')
        return jsonify(error.to_dict()), error.status_code
