import logging

from vetclinic.errors import ClinicError

logger = logging.getLogger(__name__)


def register_namespaces(api):
    from .auth_routes import auth_ns
    from .pet_routes import pet_ns
    from .product_routes import product_ns
    from .reservation_routes import reservation_ns
    from .report_routes import report_ns
    from .profile_routes import profile_ns
    from .patient_routes import patient_ns

    for ns in (auth_ns, pet_ns, product_ns, reservation_ns, report_ns, profile_ns, patient_ns):
        if ns not in api.namespaces:
            api.add_namespace(ns)

    # Error handler
    @api.errorhandler(ClinicError)
    def handle_clinic_error(error):
        if error.status_code >= 500:
            logger.error(f"{error.codigo}: {error.error} ({error.mensaje})")
        return error.to_dict(), error.status_code
