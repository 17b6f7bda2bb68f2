"""JSON API for pantries, politicians, candidates and map markers.

All routes live on ``api_bp``; the app factory mounts it under the
configured base path.
"""

import sqlite3

from flask import Blueprint, current_app, jsonify, request

from . import markers
from .geocode import geocode_with_app_config

api_bp = Blueprint('api', __name__)


class ValidationError(ValueError):
    """Request payload failed validation."""


def get_store():
    return current_app.extensions['pantryfinder.store']


@api_bp.errorhandler(sqlite3.Error)
def handle_db_error(e):
    current_app.logger.exception('Database error on %s %s', request.method, request.path)
    return jsonify({'error': 'Database error.'}), 500


@api_bp.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({'error': str(e)}), 400


def _number(data, key):
    value = data.get(key)
    if isinstance(value, bool) or value in (None, ''):
        raise ValidationError(f'`{key}` must be a number.')
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'`{key}` must be a number.') from None


def _text(data, key, required=False):
    value = data.get(key)
    if value is None:
        if required:
            raise ValidationError(f'Missing required field `{key}`.')
        return None
    value = str(value).strip()
    if required and not value:
        raise ValidationError(f'Missing required field `{key}`.')
    return value


TRUE_FLAGS = ('1', 'true', 'yes', 'on')
FALSE_FLAGS = ('0', 'false', 'no', 'off', '')


def _flag(data, key):
    """Read a 0/1 flag from a JSON boolean, integer or string."""
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, (bool, int)):
        return 1 if value else 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in TRUE_FLAGS:
            return 1
        if text in FALSE_FLAGS:
            return 0
    raise ValidationError(f'`{key}` must be true or false.')


def parse_pantry(data):
    """Validate a pantry payload and return the columns to store."""
    pantry_type = data.get('type') or 'food'
    if pantry_type not in markers.PANTRY_TYPES:
        raise ValidationError(
            f'`type` must be one of: {", ".join(markers.PANTRY_TYPES)}.'
        )
    repeating = data.get('repeating') or None
    if repeating is not None and repeating not in markers.REPEATING_TYPES:
        raise ValidationError(
            f'`repeating` must be one of: {", ".join(markers.REPEATING_TYPES)}.'
        )
    return {
        'name': _text(data, 'name', required=True),
        'address': _text(data, 'address', required=True),
        'notes': _text(data, 'notes'),
        'hours': _text(data, 'hours'),
        'lat': _number(data, 'lat'),
        'lng': _number(data, 'lng'),
        'type': pantry_type,
        'repeating': repeating,
    }


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object.')
    return data


@api_bp.route('/api/pantries')
def api_pantries():
    return jsonify(get_store().list_pantries())


@api_bp.route('/api/pantries', methods=['POST'])
def api_create_pantry():
    pantry = get_store().add_pantry(parse_pantry(_json_body()))
    current_app.logger.info('Added pantry %s (%s)', pantry['id'], pantry['name'])
    return jsonify(pantry), 201


@api_bp.route('/api/pantries/<int:pantry_id>')
def api_pantry(pantry_id):
    pantry = get_store().get_pantry(pantry_id)
    if pantry is None:
        return jsonify({'error': 'Pantry not found.'}), 404
    return jsonify(pantry)


@api_bp.route('/api/pantries/<int:pantry_id>', methods=['DELETE'])
def api_delete_pantry(pantry_id):
    if not get_store().delete_pantry(pantry_id):
        return jsonify({'error': 'Pantry not found.'}), 404
    return jsonify({'success': True})


@api_bp.route('/api/politicians')
def api_politicians():
    return jsonify(markers.with_paired_senators(get_store().list_politicians()))


@api_bp.route('/api/candidates')
def api_candidates():
    return jsonify(get_store().list_candidates(only_on_map=True))


@api_bp.route('/api/candidates', methods=['POST'])
def api_create_candidate():
    """Register a candidate, placing them at their state when shown on the map."""
    data = _json_body()
    name = _text(data, 'name', required=True)
    country = _text(data, 'country', required=True)
    state = _text(data, 'state', required=True)
    office_type = _text(data, 'office_type')
    show_on_map = _flag(data, 'show_on_map')

    coords = None
    if show_on_map:
        coords = geocode_with_app_config(f'{state}, {country}', current_app.config)
        if coords is None:
            current_app.logger.warning('No coordinates for candidate %r in %s, %s', name, state, country)
    lat, lng = coords if coords else (0, 0)

    candidate = get_store().add_candidate({
        'name': name,
        'country': country,
        'state': state,
        'office': markers.office_from_office_type(office_type),
        'office_type': office_type,
        'website': _text(data, 'website'),
        'phone': _text(data, 'phone'),
        'show_on_map': show_on_map,
        'lat': lat,
        'lng': lng,
        'district': None,
        'party': '',
    })
    return jsonify(candidate), 201


@api_bp.route('/api/geocode')
def api_geocode():
    address = (request.args.get('address') or '').strip()
    if not address:
        return jsonify({'error': 'Address is required.'}), 400
    coords = geocode_with_app_config(address, current_app.config)
    if coords is None:
        return jsonify({'error': 'Coordinates not found.'}), 404
    lat, lng = coords
    return jsonify({'lat': lat, 'lng': lng})


def _selection(name, default):
    """Read a multi-valued query parameter.

    Values may repeat (``?category=food&category=library``) or be comma
    separated. An absent parameter selects ``default``; an empty one
    selects nothing.
    """
    if name not in request.args:
        return set(default)
    values = set()
    for raw in request.args.getlist(name):
        values.update(v.strip() for v in raw.split(',') if v.strip())
    return values


@api_bp.route('/api/markers')
def api_markers():
    """Records to draw on the map for the current filter selection."""
    categories = _selection('category', markers.CATEGORIES)
    politician_offices = _selection('politician_office', markers.OFFICE_TYPES)
    candidate_offices = _selection('candidate_office', markers.OFFICE_TYPES)

    store = get_store()
    politicians = markers.with_paired_senators(store.list_politicians())
    return jsonify({
        'pantries': markers.filter_pantries(store.list_pantries(), categories),
        'politicians': markers.filter_politicians(politicians, categories, politician_offices),
        'candidates': markers.filter_candidates(
            store.list_candidates(only_on_map=False), categories, candidate_offices
        ),
    })
