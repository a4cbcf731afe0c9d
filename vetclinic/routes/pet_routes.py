import logging

from flask_restx import Namespace, Resource, fields

from vetclinic.errors import NotFoundError
from vetclinic.repositories import pet_repository
from vetclinic.repositories.pets import get_pet_with_owner, get_pets_with_owners
from vetclinic.services import pet_service
from vetclinic.utils.auth_middleware import token_required
from vetclinic.utils.util import json_body

logger = logging.getLogger(__name__)

pet_ns = Namespace('mascotas', description='Mascotas y sus dueños', path='/mascotas')

pet_model = pet_ns.model('NuevaMascota', {
    'nombre': fields.String(required=True),
    'especie': fields.String(required=True, description='Se guarda en minúsculas'),
    'edad': fields.Integer(required=True, min=0),
    'sexo': fields.String(required=True, enum=pet_service.SEX_CHOICES),
    'nombre_dueño': fields.String(required=True),
    'telefono': fields.String(required=True),
    'email': fields.String(required=True),
    'motivo': fields.String(),
    'producto_adicional_id': fields.Integer(),
    'cantidad_producto': fields.Integer(min=1)
})

pet_update_model = pet_ns.model('ActualizarMascota', {
    'nombre': fields.String(),
    'especie': fields.String(),
    'edad': fields.Integer(min=0),
    'sexo': fields.String(enum=pet_service.SEX_CHOICES),
    'motivo': fields.String()
})


@pet_ns.route('')
class PetList(Resource):
    @token_required
    @pet_ns.doc('list_pets', security='BearerAuth')
    def get(self):
        """Obtener todas las mascotas con su dueño y producto"""
        pets = get_pets_with_owners(pet_repository)
        logger.debug(f"Retrieved {len(pets)} pets")
        return pets, 200

    @token_required
    @pet_ns.expect(pet_model)
    @pet_ns.doc('create_pet', security='BearerAuth')
    def post(self):
        """Registrar una mascota junto con un nuevo dueño"""
        data = json_body()
        pet, owner = pet_service.create_pet_with_owner(data)
        return {
            'mensaje': 'Mascota y dueño registrados exitosamente',
            'mascota': pet,
            'dueño': owner
        }, 201


@pet_ns.route('/<int:pet_id>')
class PetResource(Resource):
    @token_required
    @pet_ns.doc('get_pet', security='BearerAuth')
    def get(self, pet_id):
        """Obtener una mascota por ID"""
        pet = get_pet_with_owner(pet_repository, pet_id)
        if pet is None:
            raise NotFoundError('Mascota no encontrada')
        return pet, 200

    @token_required
    @pet_ns.expect(pet_update_model)
    @pet_ns.doc('update_pet', security='BearerAuth')
    def put(self, pet_id):
        """Actualizar campos de una mascota"""
        data = json_body()
        return pet_service.update_pet(pet_id, data), 200

    @token_required
    @pet_ns.doc('delete_pet', security='BearerAuth')
    def delete(self, pet_id):
        """Eliminar una mascota (y su dueño si no le quedan mascotas)"""
        pet_service.delete_pet(pet_id)
        return '', 204
