import math
import re

from dateutil import parser as date_parser
from dateutil.parser import isoparser
from flask import request

from vetclinic.errors import ValidationError

_iso_time = isoparser()
TIME_REGEX = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")


def json_body():
    """Request payload as a dict; a missing body counts as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Dato inválido', 'El cuerpo de la petición debe ser un objeto JSON')
    return data


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(data, fields, mensaje=None):
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise ValidationError('Datos incompletos',
                              mensaje or f"Se requieren los campos: {', '.join(fields)}")


def parse_int(value, field, minimum=None):
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValidationError('Dato inválido', f'{field} debe ser un número entero')
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError('Dato inválido', f'{field} debe ser un número entero')
    if isinstance(value, float) and value != number:
        raise ValidationError('Dato inválido', f'{field} debe ser un número entero')
    if minimum is not None and number < minimum:
        raise ValidationError('Dato inválido', f'{field} debe ser mayor o igual a {minimum}')
    return number


def parse_positive_float(value, field):
    if isinstance(value, bool):
        raise ValidationError('Dato inválido', f'{field} debe ser un número')
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError('Dato inválido', f'{field} debe ser un número')
    if not math.isfinite(number):
        raise ValidationError('Dato inválido', f'{field} debe ser un número')
    if number <= 0:
        raise ValidationError('Dato inválido', f'{field} debe ser mayor a 0')
    return number


def parse_choice(value, field, choices):
    if value not in choices:
        raise ValidationError('Dato inválido', f"{field} debe ser: {', '.join(choices)}")
    return value


def parse_date(value, field):
    try:
        return date_parser.isoparse(str(value)).date()
    except (ValueError, TypeError, OverflowError):
        raise ValidationError('Dato inválido', f'{field} debe tener formato YYYY-MM-DD')


def parse_time(value, field):
    try:
        if not isinstance(value, str) or not TIME_REGEX.match(value.strip()):
            raise ValueError(value)
        return _iso_time.parse_isotime(value.strip()).replace(microsecond=0)
    except (ValueError, TypeError, OverflowError):
        raise ValidationError('Dato inválido', f'{field} debe tener formato HH:MM')
