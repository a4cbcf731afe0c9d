from flask_restx import Namespace, Resource

from vetclinic.services.report_service import get_statistics
from vetclinic.utils.auth_middleware import token_required

report_ns = Namespace('reportes', description='Estadísticas de la clínica', path='/reportes')


@report_ns.route('/estadisticas')
class Statistics(Resource):
    @token_required
    @report_ns.doc('get_statistics', security='BearerAuth')
    def get(self):
        """Obtener estadísticas de mascotas, productos y reservaciones"""
        return get_statistics(), 200
