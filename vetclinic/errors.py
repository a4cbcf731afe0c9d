"""Domain errors raised by repositories and services.

Each error knows its HTTP status and serializes to the JSON body every failed
request returns: ``error`` (short human title), ``codigo`` (machine code) and an
optional ``mensaje`` with details.
"""


class ClinicError(Exception):
    status_code = 500
    codigo = 'error'
    error = 'Error interno'

    def __init__(self, error=None, mensaje=None):
        super().__init__(error or self.error)
        if error:
            self.error = error
        self.mensaje = mensaje

    def to_dict(self):
        body = {'error': self.error, 'codigo': self.codigo}
        if self.mensaje:
            body['mensaje'] = self.mensaje
        return body


class ValidationError(ClinicError):
    status_code = 400
    codigo = 'validation_error'
    error = 'Datos incompletos'


class DuplicateKeyError(ValidationError):
    codigo = 'duplicate_key'
    error = 'Registro duplicado'


class DuplicateEmailError(DuplicateKeyError):
    codigo = 'duplicate_email'
    error = 'El email ya está registrado'


class InvalidCredentialsError(ValidationError):
    codigo = 'invalid_credentials'
    error = 'Credenciales inválidas'


class AuthError(ClinicError):
    status_code = 401
    codigo = 'auth_error'
    error = 'No autorizado'


class MissingCredentialError(AuthError):
    codigo = 'missing_credential'
    error = 'No autorizado'


class InvalidCredentialError(AuthError):
    status_code = 403
    codigo = 'invalid_credential'
    error = 'Token inválido'


class NotFoundError(ClinicError):
    status_code = 404
    codigo = 'not_found'
    error = 'Registro no encontrado'


class StorageError(ClinicError):
    status_code = 500
    codigo = 'storage_error'
    error = 'Error en la base de datos'
