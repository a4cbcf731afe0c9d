from flask import g
from flask_restx import Namespace, Resource, fields

from vetclinic.services.profile_service import update_profile
from vetclinic.utils.auth_middleware import token_required
from vetclinic.utils.util import json_body

profile_ns = Namespace('perfil', description='Perfil del usuario autenticado', path='/perfil')

profile_model = profile_ns.model('Perfil', {
    'nombre_completo': fields.String(),
    'email': fields.String(),
    'contraseña_actual': fields.String(description='Requerida para cambiar la contraseña'),
    'contraseña_nueva': fields.String()
})


@profile_ns.route('/actualizar')
class ProfileUpdate(Resource):
    @token_required
    @profile_ns.expect(profile_model)
    @profile_ns.doc('update_profile', security='BearerAuth')
    def put(self):
        """Actualizar nombre, email o contraseña del usuario actual"""
        data = json_body()
        user = update_profile(g.usuario['id'], data)
        return {
            'mensaje': 'Perfil actualizado exitosamente',
            'usuario': user
        }, 200
