"""
Pet endpoints and the pet/owner cascade.
"""

import pytest

from vetclinic import db
from vetclinic.models import Owner, Pet
from vetclinic.repositories import pet_repository
from vetclinic.repositories.pets import count_pets_for_owner


def owner_ids_without_pets(app):
    with app.app_context():
        return [owner.id for owner in Owner.query.all()
                if count_pets_for_owner(pet_repository, owner.id) == 0]


class TestCreatePet:

    def test_create_lowercases_species_and_spawns_owner(self, client, auth_headers, pet_payload):
        resp = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        assert resp.status_code == 201
        body = resp.get_json()
        assert body['mascota']['especie'] == 'perro'
        assert body['dueño']['id'] > 0
        assert body['mascota']['id_dueno'] == body['dueño']['id']
        assert body['dueño']['nombre_completo'] == 'Juan Pérez'

    def test_every_creation_gets_a_new_owner(self, client, auth_headers, pet_payload):
        first = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()
        second = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()
        assert first['dueño']['id'] != second['dueño']['id']

    @pytest.mark.parametrize('missing', ['nombre', 'especie', 'edad', 'sexo', 'nombre_dueño', 'telefono', 'email'])
    def test_missing_field(self, app, client, auth_headers, pet_payload, missing):
        del pet_payload[missing]
        resp = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.get_json()['error'] == 'Datos incompletos'
        with app.app_context():
            assert Owner.query.count() == 0

    def test_age_zero_is_accepted(self, client, auth_headers, pet_payload):
        pet_payload['edad'] = 0
        resp = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        assert resp.status_code == 201
        assert resp.get_json()['mascota']['edad'] == 0

    @pytest.mark.parametrize('field,value', [('edad', -1), ('edad', 'tres'), ('sexo', 'Otro')])
    def test_invalid_values_leave_no_owner(self, app, client, auth_headers, pet_payload, field, value):
        pet_payload[field] = value
        resp = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        assert resp.status_code == 400
        with app.app_context():
            assert Owner.query.count() == 0

    def test_unknown_product_is_rejected_without_orphan(self, app, client, auth_headers, pet_payload):
        pet_payload.update(producto_adicional_id=999, cantidad_producto=1)
        resp = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        assert resp.status_code == 400
        with app.app_context():
            assert Owner.query.count() == 0
            assert Pet.query.count() == 0

    def test_product_stock_is_decremented(self, client, auth_headers, pet_payload, create_product):
        product = create_product(cantidad=5)
        pet_payload.update(producto_adicional_id=product['id'], cantidad_producto=2)
        resp = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        assert resp.status_code == 201
        stored = client.get(f"/productos/{product['id']}", headers=auth_headers).get_json()
        assert stored['cantidad'] == 3

    def test_last_unit_is_taken_only_once(self, client, auth_headers, pet_payload, create_product):
        product = create_product(cantidad=1)
        pet_payload.update(producto_adicional_id=product['id'], cantidad_producto=1)
        first = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        second = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        assert first.status_code == second.status_code == 201
        stored = client.get(f"/productos/{product['id']}", headers=auth_headers).get_json()
        assert stored['cantidad'] == 0

    def test_insufficient_stock_is_skipped_not_clamped(self, client, auth_headers, pet_payload, create_product):
        product = create_product(cantidad=2)
        pet_payload.update(producto_adicional_id=product['id'], cantidad_producto=3)
        resp = client.post('/mascotas', json=pet_payload, headers=auth_headers)
        assert resp.status_code == 201
        stored = client.get(f"/productos/{product['id']}", headers=auth_headers).get_json()
        assert stored['cantidad'] == 2


class TestReadPet:

    def test_round_trip_through_join(self, client, auth_headers, pet_payload, create_product):
        product = create_product(nombre='Antipulgas', precio=99.0, cantidad=4)
        pet_payload.update(producto_adicional_id=product['id'], cantidad_producto=1, motivo='Revisión')
        created = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()

        resp = client.get(f"/mascotas/{created['mascota']['id']}", headers=auth_headers)
        assert resp.status_code == 200
        pet = resp.get_json()
        assert pet['nombre'] == 'Max'
        assert pet['nombre_dueno'] == pet_payload['nombre_dueño']
        assert pet['telefono'] == pet_payload['telefono']
        assert pet['email_dueno'] == pet_payload['email']
        assert pet['nombre_producto'] == 'Antipulgas'
        assert pet['precio_producto'] == 99.0
        assert pet['motivo'] == 'Revisión'

    def test_list_is_newest_first(self, client, auth_headers, pet_payload):
        client.post('/mascotas', json=pet_payload, headers=auth_headers)
        client.post('/mascotas', json=dict(pet_payload, nombre='Rocky'), headers=auth_headers)
        pets = client.get('/mascotas', headers=auth_headers).get_json()
        assert [p['nombre'] for p in pets] == ['Rocky', 'Max']
        assert pets[0]['nombre_producto'] is None

    def test_missing_pet_is_404(self, client, auth_headers):
        resp = client.get('/mascotas/12345', headers=auth_headers)
        assert resp.status_code == 404
        assert resp.get_json()['error'] == 'Mascota no encontrada'


class TestUpdatePet:

    def test_update_echoes_submitted_fields(self, client, auth_headers, pet_payload):
        pet_id = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()['mascota']['id']
        resp = client.put(f'/mascotas/{pet_id}', json={'especie': 'GATO', 'edad': 4}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.get_json() == {'id': pet_id, 'especie': 'gato', 'edad': 4}

        stored = client.get(f'/mascotas/{pet_id}', headers=auth_headers).get_json()
        assert stored['especie'] == 'gato'
        assert stored['nombre'] == 'Max'

    def test_update_missing_pet_is_404(self, client, auth_headers):
        resp = client.put('/mascotas/999', json={'nombre': 'Nadie'}, headers=auth_headers)
        assert resp.status_code == 404

    def test_update_without_fields_is_400(self, client, auth_headers, pet_payload):
        pet_id = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()['mascota']['id']
        resp = client.put(f'/mascotas/{pet_id}', json={}, headers=auth_headers)
        assert resp.status_code == 400


class TestDeletePet:

    def test_delete_removes_orphaned_owner(self, app, client, auth_headers, pet_payload):
        created = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()
        resp = client.delete(f"/mascotas/{created['mascota']['id']}", headers=auth_headers)
        assert resp.status_code == 204
        assert resp.data == b''
        with app.app_context():
            assert db.session.get(Owner, created['dueño']['id']) is None

    def test_owner_with_other_pets_is_kept(self, app, client, auth_headers, pet_payload):
        created = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()
        owner_id = created['dueño']['id']
        with app.app_context():
            sibling = pet_repository.create({'nombre': 'Toby', 'especie': 'perro', 'edad': 1,
                                             'sexo': 'Macho', 'id_dueno': owner_id})

        client.delete(f"/mascotas/{created['mascota']['id']}", headers=auth_headers)
        with app.app_context():
            assert db.session.get(Owner, owner_id) is not None

        client.delete(f"/mascotas/{sibling['id']}", headers=auth_headers)
        with app.app_context():
            assert db.session.get(Owner, owner_id) is None

    def test_repeated_delete_is_always_404(self, client, auth_headers, pet_payload):
        pet_id = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()['mascota']['id']
        assert client.delete(f'/mascotas/{pet_id}', headers=auth_headers).status_code == 204
        for _ in range(3):
            resp = client.delete(f'/mascotas/{pet_id}', headers=auth_headers)
            assert resp.status_code == 404
            assert resp.get_json()['codigo'] == 'not_found'

    def test_every_owner_keeps_at_least_one_pet(self, app, client, auth_headers, pet_payload):
        ids = []
        for name in ('Max', 'Rocky', 'Luna', 'Kira'):
            created = client.post('/mascotas', json=dict(pet_payload, nombre=name), headers=auth_headers)
            ids.append(created.get_json()['mascota']['id'])
        # failed creations must not leave owners behind either
        client.post('/mascotas', json=dict(pet_payload, sexo='Otro'), headers=auth_headers)
        client.post('/mascotas', json=dict(pet_payload, producto_adicional_id=404, cantidad_producto=1),
                    headers=auth_headers)
        for pet_id in ids[::2]:
            client.delete(f'/mascotas/{pet_id}', headers=auth_headers)

        assert owner_ids_without_pets(app) == []
        with app.app_context():
            assert Owner.query.count() == 2

    def test_owner_cleanup_failure_keeps_pet_deleted(self, app, client, auth_headers, pet_payload,
                                                     monkeypatch, caplog):
        from sqlalchemy.exc import SQLAlchemyError
        from vetclinic.services import pet_service

        def broken_count(repo, owner_id):
            raise SQLAlchemyError('conexión perdida')

        created = client.post('/mascotas', json=pet_payload, headers=auth_headers).get_json()
        monkeypatch.setattr(pet_service, 'count_pets_for_owner', broken_count)

        with caplog.at_level('ERROR', logger='vetclinic.services.pet_service'):
            resp = client.delete(f"/mascotas/{created['mascota']['id']}", headers=auth_headers)

        assert resp.status_code == 204
        assert f"Error al eliminar dueño {created['dueño']['id']}" in caplog.text
        with app.app_context():
            assert db.session.get(Pet, created['mascota']['id']) is None
            assert db.session.get(Owner, created['dueño']['id']) is not None


def test_body_must_be_a_json_object(client, auth_headers):
    resp = client.post('/mascotas', json=[1, 2], headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()['codigo'] == 'validation_error'
