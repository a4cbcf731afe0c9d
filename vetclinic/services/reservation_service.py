# Reservation service: public booking flow and staff status changes
import logging

from vetclinic import db
from vetclinic.errors import ClinicError, ValidationError
from vetclinic.models import AppointmentType, ReservationStatus
from vetclinic.repositories import reservation_repository
from vetclinic.repositories.generic import commit_transaction
from vetclinic.services.pet_service import parse_product_selection, reserve_product
from vetclinic.utils.util import parse_choice, parse_date, parse_time, require_fields

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('nombre_cliente', 'telefono', 'email', 'nombre_mascota', 'especie',
                   'motivo_consulta', 'fecha_solicitada', 'hora_solicitada', 'tipo_cita')
STATUS_CHOICES = [status.value for status in ReservationStatus]
APPOINTMENT_TYPES = [kind.value for kind in AppointmentType]


def create_reservation(data):
    require_fields(data, REQUIRED_FIELDS,
                   'Se requieren todos los campos: ' + ', '.join(REQUIRED_FIELDS))
    fields = {
        'nombre_cliente': data['nombre_cliente'],
        'telefono': data['telefono'],
        'email': data['email'],
        'nombre_mascota': data['nombre_mascota'],
        'especie': str(data['especie']).lower(),
        'motivo_consulta': data['motivo_consulta'],
        'fecha_solicitada': parse_date(data['fecha_solicitada'], 'fecha_solicitada'),
        'hora_solicitada': parse_time(data['hora_solicitada'], 'hora_solicitada'),
        'tipo_cita': parse_choice(data['tipo_cita'], 'tipo_cita', APPOINTMENT_TYPES),
        'estado': ReservationStatus.PENDING.value,
    }
    product_id, quantity = parse_product_selection(data)
    if product_id is not None:
        fields['producto_adicional_id'] = product_id
    if quantity:
        fields['cantidad_producto'] = quantity

    try:
        reservation = reservation_repository.create(fields, commit=False)
        reserve_product(product_id, quantity)
        commit_transaction('creación de reservación')
    except ClinicError:
        db.session.rollback()
        raise

    logger.info(f"Reservación {reservation['id']} creada para {fields['fecha_solicitada']}")
    return reservation


def update_status(reservation_id, data):
    estado = data.get('estado')
    if estado not in STATUS_CHOICES:
        raise ValidationError('Estado inválido',
                              'El estado debe ser: ' + ', '.join(STATUS_CHOICES))
    reservation = reservation_repository.update(reservation_id, {'estado': estado})
    logger.info(f"Reservación {reservation_id} ahora en estado {estado}")
    return reservation
