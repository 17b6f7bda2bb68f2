"""Environment-driven settings, loaded into ``app.config``."""

import os

NOMINATIM_URL = 'https://nominatim.openstreetmap.org/search'
USER_AGENT = 'PantryFinderApp/1.0'
DEFAULT_DATA_DIRECTORY = './data'
DB_NAME = 'database.sqlite'


def get_db_path(environ=None):
    env = os.environ if environ is None else environ
    if env.get('DATABASE_PATH'):
        return env['DATABASE_PATH']
    data_dir = env.get('DATA_DIRECTORY') or DEFAULT_DATA_DIRECTORY
    return os.path.join(data_dir, DB_NAME)


def load_config(environ=None):
    """Build the settings mapping from ``environ`` (defaults to os.environ).

    ``BASE_PATH`` wins over ``BASE_URL`` when both are set; the value is
    kept raw here and normalized when the API is mounted.
    """
    env = os.environ if environ is None else environ
    mode = env.get('FLASK_ENV') or env.get('NODE_ENV') or ''
    return {
        'SECRET_KEY': env.get('SECRET_KEY', 'pantryfinder-dev'),
        'DATABASE': get_db_path(env),
        'BASE_PATH': env.get('BASE_PATH') or env.get('BASE_URL'),
        'SERVE_STATIC': mode == 'production',
        'STATIC_DIR': env.get('STATIC_DIR', os.path.join(os.getcwd(), 'public')),
        'GEOCODER_URL': env.get('GEOCODER_URL', NOMINATIM_URL),
        'GEOCODER_USER_AGENT': env.get('GEOCODER_USER_AGENT', USER_AGENT),
        'GEOCODER_TIMEOUT': float(env.get('GEOCODER_TIMEOUT', 10)),
        'PORT': int(env.get('PORT', 3001)),
    }
