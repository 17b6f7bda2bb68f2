"""HTTP tests for the JSON API."""

import sqlite3

import pytest

from pantryfinder import api

from .conftest import pantry


@pytest.fixture
def geocoder(monkeypatch):
    """Replace Nominatim with a dict lookup and record the queries."""
    known = {'Ohio, USA': (40.4, -82.9), '1 Main St': (1.0, 2.0)}
    calls = []

    def fake(query, config):
        calls.append(query)
        return known.get(query)

    monkeypatch.setattr(api, 'geocode_with_app_config', fake)
    return calls


def test_health(client):
    assert client.get('/health').get_json() == {'status': 'healthy', 'service': 'PantryFinder Backend'}


def test_list_pantries_empty(client):
    resp = client.get('/api/pantries')
    assert resp.status_code == 200
    assert resp.get_json() == []


def test_create_pantry(client, store):
    resp = client.post('/api/pantries', json=pantry(type='clothing', lat='41.5'))
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['type'] == 'clothing'
    assert body['lat'] == 41.5
    assert body['deleted'] == 0
    assert store.list_pantries() == [body]


def test_create_pantry_defaults_type(client):
    data = pantry()
    del data['type']
    del data['repeating']
    body = client.post('/api/pantries', json=data).get_json()
    assert body['type'] == 'food'
    assert body['repeating'] is None


@pytest.mark.parametrize('overrides, message', [
    ({'name': ''}, 'name'),
    ({'address': None}, 'address'),
    ({'lat': 'north'}, 'lat'),
    ({'lng': None}, 'lng'),
    ({'lat': True}, 'lat'),
    ({'type': 'soup'}, 'type'),
    ({'repeating': 'yearly'}, 'repeating'),
])
def test_create_pantry_rejects_invalid(client, overrides, message):
    resp = client.post('/api/pantries', json=pantry(**overrides))
    assert resp.status_code == 400
    assert message in resp.get_json()['error']


def test_create_pantry_requires_json_object(client):
    resp = client.post('/api/pantries', data='nope', content_type='text/plain')
    assert resp.status_code == 400
    resp = client.post('/api/pantries', json=[1, 2])
    assert resp.status_code == 400


def test_get_and_delete_pantry(client, store):
    added = store.add_pantry(pantry())
    assert client.get(f'/api/pantries/{added["id"]}').get_json() == added
    assert client.delete(f'/api/pantries/{added["id"]}').get_json() == {'success': True}
    assert client.get(f'/api/pantries/{added["id"]}').status_code == 404
    assert client.delete(f'/api/pantries/{added["id"]}').status_code == 404
    assert client.get('/api/pantries').get_json() == []


def test_politicians_include_paired_senator(client, store):
    store.add_politician({'name': 'Sen', 'office': 'Senate', 'state': 'OH', 'lat': 40.0, 'lng': -83.0})
    store.add_politician({'name': 'Rep', 'office': 'House', 'state': 'OH', 'lat': 39.0, 'lng': -84.0})
    body = client.get('/api/politicians').get_json()
    assert [p['name'] for p in body] == ['Sen', 'Rep', 'Senator for OH 2']
    assert body[2]['id'] == 1001


def test_create_candidate_geocodes_state(client, store, geocoder):
    resp = client.post('/api/candidates', json={
        'name': 'Pat', 'country': 'USA', 'state': 'Ohio',
        'office_type': 'House, State Senate', 'website': 'https://pat.example',
        'phone': '555-0100', 'show_on_map': True,
    })
    assert resp.status_code == 201
    body = resp.get_json()
    assert geocoder == ['Ohio, USA']
    assert (body['lat'], body['lng']) == (40.4, -82.9)
    assert body['office'] == 'Senate'
    assert body['office_type'] == 'House, State Senate'
    assert body['show_on_map'] == 1
    assert body['party'] == ''
    assert client.get('/api/candidates').get_json() == [body]


def test_create_hidden_candidate_skips_geocoding(client, geocoder):
    body = client.post('/api/candidates', json={
        'name': 'Quiet', 'country': 'Canada', 'state': 'Ontario',
        'office_type': 'Other', 'show_on_map': 0,
    }).get_json()
    assert geocoder == []
    assert (body['lat'], body['lng']) == (0, 0)
    assert body['office'] == 'House'
    assert client.get('/api/candidates').get_json() == []


def test_create_candidate_unknown_location(client, geocoder):
    body = client.post('/api/candidates', json={
        'name': 'Lost', 'country': 'Nowhere', 'state': 'Nope', 'show_on_map': 1,
    }).get_json()
    assert (body['lat'], body['lng']) == (0, 0)


def test_create_candidate_requires_fields(client, geocoder):
    resp = client.post('/api/candidates', json={'name': 'Pat', 'country': 'USA'})
    assert resp.status_code == 400
    assert 'state' in resp.get_json()['error']


def test_geocode_endpoint(client, geocoder):
    assert client.get('/api/geocode').status_code == 400
    assert client.get('/api/geocode?address=%20').status_code == 400
    assert client.get('/api/geocode', query_string={'address': '1 Main St'}).get_json() == {'lat': 1.0, 'lng': 2.0}
    resp = client.get('/api/geocode?address=Atlantis')
    assert resp.status_code == 404


@pytest.fixture
def map_data(store):
    store.add_pantry(pantry('Food', type='food'))
    store.add_pantry(pantry('Clothes', type='clothing'))
    store.add_politician({'name': 'Rep', 'office': 'House', 'state': 'OH', 'lat': 1.0, 'lng': 1.0})
    store.add_politician({'name': 'Sen', 'office': 'Senate', 'state': 'OH', 'lat': 1.0, 'lng': 1.0})
    store.add_candidate({'name': 'Cand House', 'office': 'House', 'show_on_map': 1})
    store.add_candidate({'name': 'Cand Senate', 'office': 'Senate', 'show_on_map': 1})
    store.add_candidate({'name': 'Cand Hidden', 'office': 'House', 'show_on_map': 0})


def _names(body, key):
    return [r['name'] for r in body[key]]


def test_markers_default_selects_everything(client, map_data):
    body = client.get('/api/markers').get_json()
    assert _names(body, 'pantries') == ['Food', 'Clothes']
    assert _names(body, 'politicians') == ['Rep', 'Sen', 'Senator for OH 2']
    assert _names(body, 'candidates') == ['Cand House', 'Cand Senate']


def test_markers_by_category(client, map_data):
    body = client.get('/api/markers?category=clothing&category=candidates').get_json()
    assert _names(body, 'pantries') == ['Clothes']
    assert body['politicians'] == []
    assert _names(body, 'candidates') == ['Cand House', 'Cand Senate']


def test_markers_by_office(client, map_data):
    body = client.get(
        '/api/markers?category=politicians,candidates'
        '&politician_office=House&candidate_office=Senate'
    ).get_json()
    assert body['pantries'] == []
    assert _names(body, 'politicians') == ['Rep']
    assert _names(body, 'candidates') == ['Cand Senate']


def test_markers_empty_selection(client, map_data):
    body = client.get('/api/markers?category=').get_json()
    assert body == {'pantries': [], 'politicians': [], 'candidates': []}


def test_database_error_returns_500(client, monkeypatch):
    def broken():
        raise sqlite3.OperationalError('disk I/O error')

    store = client.application.extensions['pantryfinder.store']
    monkeypatch.setattr(store, 'list_pantries', broken)
    resp = client.get('/api/pantries')
    assert resp.status_code == 500
    assert resp.get_json() == {'error': 'Database error.'}


def test_api_mounted_under_base_path(make_app):
    app = make_app(BASE_PATH='https://example.org/pantry/')
    assert app.config['MOUNT_PATH'] == '/pantry'
    client = app.test_client()
    assert client.get('/pantry/api/pantries').status_code == 200
    assert client.get('/api/pantries').status_code == 404
    assert client.get('/health').status_code == 200


def test_bad_base_path_mounts_at_root(make_app):
    app = make_app(BASE_PATH='https://bad:::url')
    assert app.config['MOUNT_PATH'] == '/'
    assert app.test_client().get('/api/pantries').status_code == 200


def test_base_url_from_environment(monkeypatch, store):
    from pantryfinder.app import create_app

    monkeypatch.setenv('BASE_URL', 'api.example.org/v1/')
    app = create_app({'TESTING': True}, store=store)
    assert app.config['MOUNT_PATH'] == '/v1'


def test_politicians_senator_without_coordinates(client, store):
    store.add_politician({'name': 'S', 'office': 'Senate', 'state': 'CA'})
    body = client.get('/api/politicians').get_json()
    assert [p['name'] for p in body] == ['S', 'Senator for CA 2']
    assert body[1]['lat'] == pytest.approx(0.1)
    assert client.get('/api/markers').status_code == 200


def test_rule_variable_base_path_mounts_at_root(make_app):
    app = make_app(BASE_PATH='/<tenant>')
    assert app.config['MOUNT_PATH'] == '/'
    client = app.test_client()
    assert client.get('/api/pantries').status_code == 200
    assert client.get('/acme/api/pantries').status_code == 404


@pytest.mark.parametrize('flag, shown', [
    ('false', 0), ('0', 0), ('no', 0), ('', 0), (False, 0), (0, 0),
    ('true', 1), ('1', 1), ('Yes', 1), (True, 1), (1, 1),
])
def test_create_candidate_show_on_map_flag(client, geocoder, flag, shown):
    body = client.post('/api/candidates', json={
        'name': 'Pat', 'country': 'USA', 'state': 'Ohio', 'show_on_map': flag,
    }).get_json()
    assert body['show_on_map'] == shown
    assert geocoder == (['Ohio, USA'] if shown else [])


def test_create_candidate_rejects_unknown_flag(client, geocoder):
    resp = client.post('/api/candidates', json={
        'name': 'Pat', 'country': 'USA', 'state': 'Ohio', 'show_on_map': 'maybe',
    })
    assert resp.status_code == 400
    assert 'show_on_map' in resp.get_json()['error']
