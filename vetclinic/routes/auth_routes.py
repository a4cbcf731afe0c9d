from flask_restx import Namespace, Resource, fields

from vetclinic.services import auth_service
from vetclinic.utils.util import json_body

auth_ns = Namespace('auth', description='Registro e inicio de sesión', path='/auth')

register_model = auth_ns.model('Registro', {
    'nombre_completo': fields.String(required=True, description='Nombre completo'),
    'email': fields.String(required=True, description='Correo electrónico'),
    'contraseña': fields.String(required=True, description='Contraseña (mínimo 6 caracteres)')
})

login_model = auth_ns.model('Login', {
    'email': fields.String(required=True, description='Correo electrónico'),
    'contraseña': fields.String(required=True, description='Contraseña')
})


@auth_ns.route('/registro')
class Register(Resource):
    @auth_ns.expect(register_model)
    @auth_ns.doc(security=[])
    def post(self):
        """Registrar un nuevo usuario (rol "usuario")"""
        data = json_body()
        user = auth_service.register(data)
        return {
            'mensaje': 'Usuario registrado exitosamente',
            'usuario': user
        }, 201


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    @auth_ns.doc(security=[])
    def post(self):
        """Iniciar sesión y obtener un token válido por 24 horas"""
        data = json_body()
        token, user = auth_service.login(data)
        return {
            'mensaje': 'Login exitoso',
            'token': token,
            'usuario': user
        }, 200
