from datetime import date, datetime, time


def serialize_value(value):
    """Make a column value JSON-ready (flask-restx serializes with plain json)."""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def serialize_fields(fields):
    return {key: serialize_value(value) for key, value in fields.items()}


class RecordMixin:
    def to_dict(self):
        return {column.name: serialize_value(getattr(self, column.name))
                for column in self.__table__.columns}
