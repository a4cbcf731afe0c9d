from flask_restx import Namespace, Resource, fields

from vetclinic.errors import NotFoundError
from vetclinic.repositories import reservation_repository
from vetclinic.repositories.reservations import get_reservations_with_products
from vetclinic.services import reservation_service
from vetclinic.utils.auth_middleware import token_required
from vetclinic.utils.util import json_body

reservation_ns = Namespace('reservaciones', description='Reservaciones de citas', path='/reservaciones')

reservation_model = reservation_ns.model('Reservacion', {
    'nombre_cliente': fields.String(required=True),
    'telefono': fields.String(required=True),
    'email': fields.String(required=True),
    'nombre_mascota': fields.String(required=True),
    'especie': fields.String(required=True),
    'motivo_consulta': fields.String(required=True),
    'fecha_solicitada': fields.String(required=True, description='YYYY-MM-DD'),
    'hora_solicitada': fields.String(required=True, description='HH:MM'),
    'tipo_cita': fields.String(required=True, enum=reservation_service.APPOINTMENT_TYPES),
    'producto_adicional_id': fields.Integer(),
    'cantidad_producto': fields.Integer(min=1)
})

status_model = reservation_ns.model('EstadoReservacion', {
    'estado': fields.String(required=True, enum=reservation_service.STATUS_CHOICES)
})


@reservation_ns.route('')
class ReservationList(Resource):
    @token_required
    @reservation_ns.doc('list_reservations', security='BearerAuth')
    def get(self):
        """Obtener todas las reservaciones"""
        return get_reservations_with_products(reservation_repository), 200

    @token_required
    @reservation_ns.expect(reservation_model)
    @reservation_ns.doc('create_reservation', security='BearerAuth')
    def post(self):
        """Crear una reservación (estado inicial: pendiente)"""
        data = json_body()
        reservation = reservation_service.create_reservation(data)
        return {
            'mensaje': 'Reservación creada exitosamente',
            'reservacion': reservation
        }, 201


@reservation_ns.route('/<int:reservation_id>')
class ReservationResource(Resource):
    @token_required
    @reservation_ns.doc('get_reservation', security='BearerAuth')
    def get(self, reservation_id):
        """Obtener una reservación por ID"""
        reservation = reservation_repository.get_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError('Reservación no encontrada')
        return reservation, 200

    @token_required
    @reservation_ns.doc('delete_reservation', security='BearerAuth')
    def delete(self, reservation_id):
        """Eliminar una reservación"""
        reservation_repository.delete(reservation_id)
        return '', 204


@reservation_ns.route('/<int:reservation_id>/estado')
class ReservationStatusResource(Resource):
    @token_required
    @reservation_ns.expect(status_model)
    @reservation_ns.doc('update_reservation_status', security='BearerAuth')
    def put(self, reservation_id):
        """Cambiar el estado de una reservación"""
        data = json_body()
        reservation = reservation_service.update_status(reservation_id, data)
        return {
            'mensaje': 'Estado actualizado exitosamente',
            'reservacion': reservation
        }, 200
