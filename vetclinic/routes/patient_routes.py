from flask_restx import Namespace, Resource, fields

from vetclinic.errors import NotFoundError
from vetclinic.repositories import patient_repository
from vetclinic.utils.auth_middleware import token_required
from vetclinic.utils.util import json_body, require_fields

patient_ns = Namespace('pacientes', description='Pacientes (registro simple)', path='/pacientes')

patient_model = patient_ns.model('Paciente', {
    'nombre_mascota': fields.String(required=True),
    'raza': fields.String(required=True),
    'nombre_dueño': fields.String(required=True)
})


def patient_fields(data):
    fields_ = {}
    if data.get('nombre_mascota'):
        fields_['nombre_mascota'] = data['nombre_mascota']
    if data.get('raza'):
        fields_['raza'] = data['raza']
    if data.get('nombre_dueño'):
        fields_['nombre_dueno'] = data['nombre_dueño']
    return fields_


@patient_ns.route('')
class PatientList(Resource):
    @token_required
    @patient_ns.doc('list_patients', security='BearerAuth')
    def get(self):
        """Obtener todos los pacientes"""
        return patient_repository.get_all(), 200


@patient_ns.route('/<int:patient_id>')
class PatientResource(Resource):
    @token_required
    @patient_ns.doc('get_patient', security='BearerAuth')
    def get(self, patient_id):
        """Obtener un paciente por ID"""
        patient = patient_repository.get_by_id(patient_id)
        if patient is None:
            raise NotFoundError('Paciente no encontrado')
        return patient, 200


@patient_ns.route('/add')
class PatientCreate(Resource):
    @token_required
    @patient_ns.expect(patient_model)
    @patient_ns.doc('create_patient', security='BearerAuth')
    def post(self):
        """Crear un paciente"""
        data = json_body()
        require_fields(data, ('nombre_mascota', 'raza', 'nombre_dueño'))
        return patient_repository.create(patient_fields(data)), 201


@patient_ns.route('/update/<int:patient_id>')
class PatientUpdate(Resource):
    @token_required
    @patient_ns.expect(patient_model)
    @patient_ns.doc('update_patient', security='BearerAuth')
    def put(self, patient_id):
        """Actualizar un paciente"""
        data = json_body()
        return patient_repository.update(patient_id, patient_fields(data)), 200


@patient_ns.route('/delete/<int:patient_id>')
class PatientDelete(Resource):
    @token_required
    @patient_ns.doc('delete_patient', security='BearerAuth')
    def delete(self, patient_id):
        """Eliminar un paciente"""
        patient_repository.delete(patient_id)
        return '', 204
