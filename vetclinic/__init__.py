from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_restx import Api
from vetclinic.config import Config

db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()

api = Api(
    title='Clínica Veterinaria API',
    version='2.0',
    description='API para la gestión de pacientes, productos y reservaciones de la clínica veterinaria',
    doc='/api-docs',
    ui_config={
        'displayOperationId': True,
        'docExpansion': 'none',
        'filter': True,
        'defaultModelsExpandDepth': 1,
        'defaultModelExpandDepth': 1
    },
    security=[{'BearerAuth': []}],
    authorizations={
        'BearerAuth': {
            'type': 'apiKey',
            'in': 'header',
            'name': 'Authorization',
            'description': 'Introduce el token JWT como "Bearer <token>"'
        }
    }
)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    db.init_app(app)
    jwt.init_app(app)
    bcrypt.init_app(app)
    api.init_app(app)

    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "DELETE", "OPTIONS"]))

    # JWT error callbacks and the domain error boundary
    from .utils.auth_middleware import setup_auth_middleware
    setup_auth_middleware(jwt)

    from .routes import register_namespaces
    register_namespaces(api)

    from . import models  # noqa: F401  (tables must be registered before create_all)

    with app.app_context():
        db.create_all()

    return app
