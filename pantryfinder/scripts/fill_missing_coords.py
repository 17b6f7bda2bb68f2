"""
Fill missing lat/lng for pantries using OpenStreetMap Nominatim geocoding.

This script will:
- find pantries where `lat` or `lng` is NULL
- geocode their address with Nominatim (through geopy)
- update the database with the returned coordinates

Usage:
  pantryfinder-fill-coords          # runs and updates DB (with a short delay between requests)
  pantryfinder-fill-coords --dry    # shows what would be updated without writing

Notes:
- Nominatim has rate limits. This script sleeps 1 second between requests.
- Geocoding accuracy varies; review results before using in production.
"""

import argparse
import time

from geopy.exc import GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim

from ..config import USER_AGENT, get_db_path
from ..db import PantryStore


def make_geolocator(user_agent=USER_AGENT):
    return Nominatim(user_agent=user_agent, timeout=10)


def get_lat_long(geolocator, address, retry=True):
    """
    Look up ``address``. Returns (lat, lon) or (None, None) if not found.
    A timeout is retried once.
    """
    try:
        location = geolocator.geocode(address, exactly_one=True, addressdetails=False)
        if location:
            return location.latitude, location.longitude
    except GeocoderTimedOut:
        if retry:
            print(f"Timeout geocoding '{address}', retrying...")
            time.sleep(1)
            return get_lat_long(geolocator, address, retry=False)
        print(f"Timeout geocoding '{address}', giving up")
    except GeocoderServiceError as e:
        print(f"Error geocoding '{address}': {e}")
    return None, None


def main(argv=None, geolocator=None, delay=1.0):
    parser = argparse.ArgumentParser(description='Geocode pantries that have no coordinates.')
    parser.add_argument('--db', default=None, help='Database file (default: $DATA_DIRECTORY/database.sqlite)')
    parser.add_argument('--dry', action='store_true', help='Do not write changes')
    args = parser.parse_args(argv)

    store = PantryStore(args.db or get_db_path())
    if not store.exists():
        print('Database not found at', store.path)
        return 1

    missing = store.pantries_missing_coords()
    print(f'Pantries missing coords: {len(missing)}')
    if geolocator is None:
        geolocator = make_geolocator()

    updates = []
    for pantry in missing:
        if not pantry['address']:
            print('No address for pantry', pantry['id'], '- skipping')
            continue
        print('Geocoding:', pantry['address'])
        lat, lon = get_lat_long(geolocator, pantry['address'])
        if lat is not None and lon is not None:
            updates.append((lat, lon, pantry['id']))
        else:
            print('No geocode result for', pantry['id'])
        time.sleep(delay)  # be polite to Nominatim

    if not updates:
        print('No updates to perform')
        return 0

    print('Planned updates (first 10):')
    for u in updates[:10]:
        print('pantry', u[2], '->', u[0], u[1])

    if args.dry:
        print('Dry run - no changes written')
        return 0

    store.update_coords(updates)
    print('Applied', len(updates), 'updates')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
