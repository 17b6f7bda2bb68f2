"""Address lookup through the OpenStreetMap Nominatim search API."""

import logging

import requests

from .config import NOMINATIM_URL, USER_AGENT

log = logging.getLogger(__name__)


def geocode_location(query, url=NOMINATIM_URL, user_agent=USER_AGENT, timeout=10):
    """Return ``(lat, lng)`` for ``query``, or None if nothing was found.

    Network and decoding errors are logged and reported as no result.
    """
    params = {
        'q': query,
        'format': 'json',
        'limit': 1
    }
    headers = {'User-Agent': user_agent}
    try:
        r = requests.get(url, params=params, headers=headers, timeout=timeout)
        r.raise_for_status()
        data = r.json()
        if data:
            return float(data[0]['lat']), float(data[0]['lon'])
    except (requests.RequestException, ValueError, KeyError, IndexError, TypeError):
        log.exception('Geocoding failed for %r', query)
    return None


def geocode_with_app_config(query, config):
    return geocode_location(
        query,
        url=config['GEOCODER_URL'],
        user_agent=config['GEOCODER_USER_AGENT'],
        timeout=config['GEOCODER_TIMEOUT'],
    )
