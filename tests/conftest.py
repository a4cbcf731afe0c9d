"""
Pytest fixtures for the clinic API tests.

The application is built once per session on an in-memory SQLite database;
every test starts from empty tables.
"""

import pytest

from vetclinic import create_app, db
from vetclinic.config import TestingConfig


USER = {
    'nombre_completo': 'Ana Veterinaria',
    'email': 'ana@clinica.com',
    'contraseña': 'secreto123',
}


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    return create_app(TestingConfig)


@pytest.fixture(autouse=True)
def clean_tables(app):
    """Clear all data but keep schema."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
    yield


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered_user(client):
    resp = client.post('/auth/registro', json=USER)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()['usuario']


@pytest.fixture
def token(client, registered_user):
    resp = client.post('/auth/login', json={'email': USER['email'], 'contraseña': USER['contraseña']})
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()['token']


@pytest.fixture
def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def pet_payload():
    return {
        'nombre': 'Max',
        'especie': 'Perro',
        'edad': 3,
        'sexo': 'Macho',
        'nombre_dueño': 'Juan Pérez',
        'telefono': '555-0001',
        'email': 'juan@x.com',
    }


@pytest.fixture
def reservation_payload():
    return {
        'nombre_cliente': 'María López',
        'telefono': '555-0002',
        'email': 'maria@x.com',
        'nombre_mascota': 'Luna',
        'especie': 'Gato',
        'motivo_consulta': 'Vacunación anual',
        'fecha_solicitada': '2030-05-20',
        'hora_solicitada': '10:30',
        'tipo_cita': 'presencial',
    }


@pytest.fixture
def create_product(client, auth_headers):
    def _create(nombre='Croquetas', precio=150.5, cantidad=5):
        resp = client.post('/productos', json={'nombre': nombre, 'precio': precio, 'cantidad': cantidad},
                           headers=auth_headers)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()['producto']
    return _create
