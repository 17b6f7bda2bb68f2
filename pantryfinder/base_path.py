"""Mount-path handling for the API blueprint.

The API can run behind a reverse proxy under a prefix taken from the
environment (``BASE_PATH`` or ``BASE_URL``). Those values come in many
shapes (full URLs, bare ``host/path`` strings, relative fragments). A
``<...>`` that reaches Werkzeug's rule parser becomes a URL variable that
every view then receives as an unexpected argument, and leftover URL
syntax such as a scheme or ``:`` means the value was not a path at all.
``normalize_base_path`` turns whatever was configured into a plain
absolute path, and ``safe_mount`` registers the blueprint there, falling
back to ``/`` if registration fails.
"""

import logging
import re
from urllib.parse import urlsplit

log = logging.getLogger(__name__)

ROOT = '/'
_SCHEME_RE = re.compile(r'[A-Za-z][A-Za-z0-9+.-]*://')
# ":" is never part of a path here; "<" and ">" delimit Werkzeug rule variables
_UNSAFE_CHARS = frozenset(':<>')


def _sanitize(path):
    path = path.rstrip('/') or ROOT
    if _SCHEME_RE.search(path) or _UNSAFE_CHARS.intersection(path):
        log.warning('Unusable base path %r, using %r', path, ROOT)
        return ROOT
    return path


def _path_from_url(raw):
    """Path component of ``raw``, or None if it does not parse as a URL."""
    try:
        parts = urlsplit(raw)
        # .port validates whatever follows the host
        parts.port
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return parts.path or ROOT


def _as_path(value):
    return value if value.startswith('/') else '/' + value


def normalize_base_path(raw):
    """Return a router-safe absolute path for a configured base path.

    ``None`` or blank input gives ``/``. A full URL contributes only its
    path; a URL that fails to parse is treated as a plain path. Without a
    scheme, ``host/path`` contributes everything from the first slash and
    anything else gets a leading slash. Trailing slashes are dropped, and
    a result that still holds a ``:``, ``<`` or ``>`` collapses to ``/``.
    Never raises.
    """
    if raw is None:
        return ROOT
    value = str(raw).strip()
    if not value:
        return ROOT

    if '://' in value:
        path = _path_from_url(value)
        if path is None:
            path = _as_path(value)
        return _sanitize(path)

    slash = value.find('/')
    if slash > 0:
        return _sanitize(value[slash:])
    return _sanitize(_as_path(value))


def _register(app, blueprint, path):
    prefix = None if path == ROOT else path
    try:
        app.register_blueprint(blueprint, url_prefix=prefix)
    except Exception:
        # a half-finished registration keeps the name reserved
        if app.blueprints.get(blueprint.name) is blueprint:
            del app.blueprints[blueprint.name]
        raise


def safe_mount(app, raw_base_path, blueprint):
    """Register ``blueprint`` on ``app`` under the configured base path.

    If registering at the normalized path fails for any reason the
    blueprint is registered at ``/`` instead. A failure there is not a
    configuration problem and is re-raised. Returns the path used.
    """
    app.logger.info('Base path from environment: %r', raw_base_path)
    mount_path = normalize_base_path(raw_base_path)
    app.logger.info('Normalized base path: %r', mount_path)

    try:
        _register(app, blueprint, mount_path)
    except Exception:
        app.logger.warning(
            'Could not mount %r at %r, retrying at %r',
            blueprint.name, mount_path, ROOT, exc_info=True,
        )
        _register(app, blueprint, ROOT)
        mount_path = ROOT

    app.logger.info('Mounted %r at %r', blueprint.name, mount_path)
    return mount_path
