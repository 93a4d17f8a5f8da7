"""
Query filter translation.

Turns the structured ``where`` / ``order`` / ``limit`` / ``skip`` objects
received on the wire into SQLAlchemy clauses on a model query. Field names
may be given by their wire name (``teamId``) or their attribute name
(``team_id``).
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import and_, inspect, not_, or_, true
from sqlalchemy.exc import ArgumentError

from roster.db import schemas
from roster.db.errors import ValidationError


_NULLABLE_OPERATORS = ('eq', 'neq')
_LIST_OPERATORS = ('inq', 'nin', 'between')


def _comparison(column, op: str, value: Any):
    if value is None and op not in _NULLABLE_OPERATORS:
        raise ValidationError(f"Operator '{op}' does not accept null")
    if op not in _LIST_OPERATORS and isinstance(value, (list, dict)):
        raise ValidationError(f"Operator '{op}' expects a single value")
    if op in _LIST_OPERATORS and isinstance(value, list) and any(isinstance(v, (list, dict)) for v in value):
        raise ValidationError(f"Operator '{op}' expects a list of plain values")
    try:
        return _operator_clause(column, op, value)
    except ArgumentError as e:
        raise ValidationError(f"Invalid operand for operator '{op}': {e}") from e


def _operator_clause(column, op: str, value: Any):
    if op == 'eq':
        return column.is_(None) if value is None else column == value
    if op == 'neq':
        return column.is_not(None) if value is None else column != value
    if op == 'gt':
        return column > value
    if op == 'gte':
        return column >= value
    if op == 'lt':
        return column < value
    if op == 'lte':
        return column <= value
    if op in ('inq', 'nin'):
        if not isinstance(value, list):
            raise ValidationError(f"Operator '{op}' expects a list")
        clause = column.in_(value)
        return not_(clause) if op == 'nin' else clause
    if op == 'between':
        if not isinstance(value, list) or len(value) != 2:
            raise ValidationError("Operator 'between' expects a list of two values")
        return column.between(value[0], value[1])
    if op == 'like':
        return column.like(value)
    if op == 'nlike':
        return not_(column.like(value))
    if op == 'ilike':
        return column.ilike(value)
    if op == 'nilike':
        return not_(column.ilike(value))
    raise ValidationError(f"Unsupported filter operator '{op}'")


def resolve_field(model, field: str) -> str:
    """Return the model attribute name for a wire or attribute field name."""
    attr = getattr(model, 'field_aliases', {}).get(field, field)
    if attr not in inspect(model).columns.keys():
        raise ValidationError(f"Unknown field '{field}' for {model.__name__}")
    return attr


def build_condition(model, where: Optional[Dict[str, Any]]):
    if not where:
        return true()
    if not isinstance(where, dict):
        raise ValidationError("'where' must be an object")
    clauses = []
    for key, value in where.items():
        if key in ('and', 'or'):
            if not isinstance(value, list):
                raise ValidationError(f"'{key}' expects a list of conditions")
            parts = [build_condition(model, sub) for sub in value]
            if parts:
                clauses.append(and_(*parts) if key == 'and' else or_(*parts))
            continue
        column = getattr(model, resolve_field(model, key))
        if isinstance(value, dict):
            for op, operand in value.items():
                clauses.append(_comparison(column, op, operand))
        else:
            clauses.append(_comparison(column, 'eq', value))
    return and_(*clauses) if clauses else true()


def equality_fields(model, where: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Plain ``field: value`` pairs of a where, keyed by attribute name.

    Used to seed a new record from the where of an upsert.
    """
    fields = {}
    for key, value in (where or {}).items():
        if key in ('and', 'or') or isinstance(value, dict):
            continue
        fields[resolve_field(model, key)] = value
    return fields


def apply_order(query, model, order):
    if not order:
        return query.order_by(model.id.asc())
    entries = [order] if isinstance(order, str) else order
    for entry in entries:
        parts = entry.split()
        if not parts or len(parts) > 2:
            raise ValidationError(f"Invalid order clause '{entry}'")
        column = getattr(model, resolve_field(model, parts[0]))
        direction = parts[1].upper() if len(parts) == 2 else 'ASC'
        if direction not in ('ASC', 'DESC'):
            raise ValidationError(f"Invalid order direction '{parts[1]}'")
        query = query.order_by(column.desc() if direction == 'DESC' else column.asc())
    return query


def apply_filter(query, model, query_filter: Optional[schemas.Filter]):
    if query_filter is None:
        return apply_order(query, model, None)
    query = query.filter(build_condition(model, query_filter.where))
    query = apply_order(query, model, query_filter.order)
    if query_filter.start:
        query = query.offset(query_filter.start)
    if query_filter.limit is not None:
        query = query.limit(query_filter.limit)
    return query


def parse_json_param(raw: Optional[str], name: str) -> Optional[Dict[str, Any]]:
    """Decode a query parameter that carries a JSON object."""
    if raw is None or raw == '':
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(f"Query parameter '{name}' is not valid JSON")
    if not isinstance(value, dict):
        raise ValidationError(f"Query parameter '{name}' must be a JSON object")
    return value


def parse_filter(raw: Optional[str]) -> Optional[schemas.Filter]:
    value = parse_json_param(raw, 'filter')
    if value is None:
        return None
    try:
        return schemas.Filter.model_validate(value)
    except SchemaValidationError as e:
        raise ValidationError(f"Invalid filter: {e.errors()[0]['msg']}")
