"""Clinic statistics for the dashboard.

Each entry of the report is an independent query run in order; the first
failure aborts the whole report.
"""
import logging
from collections import OrderedDict
from datetime import datetime

from dateutil.relativedelta import relativedelta
from flask import current_app
from sqlalchemy import extract, func
from sqlalchemy.exc import SQLAlchemyError

from vetclinic import db
from vetclinic.errors import StorageError
from vetclinic.models import Owner, Pet, Product, Reservation, ReservationStatus
from vetclinic.repositories import product_repository
from vetclinic.repositories.products import get_low_stock_products

logger = logging.getLogger(__name__)

AGE_GROUPS = (
    (1, 'Cachorro (0-1 año)'),
    (3, 'Joven (1-3 años)'),
    (7, 'Adulto (3-7 años)'),
    (None, 'Senior (7+ años)'),
)


def age_group(edad):
    for upper, label in AGE_GROUPS:
        if upper is None or edad <= upper:
            return label


def total_pets():
    return Pet.query.count()


def total_owners():
    return Owner.query.count()


def total_products():
    return Product.query.count()


def total_reservations():
    return Reservation.query.count()


def pending_reservations():
    return Reservation.query.filter_by(estado=ReservationStatus.PENDING.value).count()


def pets_this_month():
    now = datetime.utcnow()
    month_start = datetime(now.year, now.month, 1)
    return Pet.query.filter(Pet.fecha_creacion >= month_start).count()


def common_species(limit=10):
    especie = func.lower(Pet.especie)
    cantidad = func.count(Pet.id)
    rows = (db.session.query(especie.label('especie'), cantidad.label('cantidad'))
            .group_by(especie)
            .order_by(cantidad.desc())
            .limit(limit)
            .all())
    return [{'especie': row.especie, 'cantidad': row.cantidad} for row in rows]


def sex_distribution():
    rows = (db.session.query(Pet.sexo, func.count(Pet.id))
            .filter(Pet.sexo.isnot(None))
            .group_by(Pet.sexo)
            .all())
    return [{'sexo': sexo, 'cantidad': cantidad} for sexo, cantidad in rows]


def low_stock_products():
    return get_low_stock_products(product_repository, current_app.config.get('LOW_STOCK_THRESHOLD', 10))


def reservations_by_status():
    rows = (db.session.query(Reservation.estado, func.count(Reservation.id))
            .group_by(Reservation.estado)
            .all())
    return [{'estado': estado, 'cantidad': cantidad} for estado, cantidad in rows]


def age_distribution():
    rows = (db.session.query(Pet.edad, func.count(Pet.id))
            .filter(Pet.edad.isnot(None))
            .group_by(Pet.edad)
            .order_by(Pet.edad)
            .all())
    groups = OrderedDict()
    for edad, cantidad in rows:
        label = age_group(edad)
        groups[label] = groups.get(label, 0) + cantidad
    return [{'grupo_edad': label, 'cantidad': cantidad} for label, cantidad in groups.items()]


def pets_by_month():
    since = datetime.utcnow() - relativedelta(months=12)
    year = extract('year', Pet.fecha_creacion)
    month = extract('month', Pet.fecha_creacion)
    rows = (db.session.query(year.label('anio'), month.label('mes'), func.count(Pet.id))
            .filter(Pet.fecha_creacion >= since)
            .group_by(year, month)
            .order_by(year, month)
            .all())
    return [{'mes': f'{int(anio):04d}-{int(mes):02d}', 'cantidad': cantidad}
            for anio, mes, cantidad in rows]


STATISTICS = (
    ('total_mascotas', total_pets),
    ('total_duenos', total_owners),
    ('total_productos', total_products),
    ('total_reservaciones', total_reservations),
    ('reservaciones_pendientes', pending_reservations),
    ('mascotas_este_mes', pets_this_month),
    ('especies_comunes', common_species),
    ('distribucion_sexo', sex_distribution),
    ('productos_stock_bajo', low_stock_products),
    ('reservaciones_por_estado', reservations_by_status),
    ('distribucion_edad', age_distribution),
    ('mascotas_por_mes', pets_by_month),
)


def get_statistics():
    results = {}
    for name, query in STATISTICS:
        logger.debug(f"Calculando estadística {name}")
        try:
            results[name] = query()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error al calcular estadística {name}: {e}")
            raise StorageError('Error al obtener estadísticas', str(e)) from e
    return results
