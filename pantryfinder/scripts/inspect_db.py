"""Print a JSON summary of the PantryFinder database."""

import argparse
import json
import os

from ..config import get_db_path
from ..db import PantryStore


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--db', default=None, help='Database file (default: $DATA_DIRECTORY/database.sqlite)')
    parser.add_argument('--sample', type=int, default=5, help='Pantries to include in the sample')
    args = parser.parse_args(argv)

    store = PantryStore(args.db or get_db_path())
    print('db path:', store.path, 'exists=', os.path.exists(store.path))
    if not store.exists():
        print(json.dumps({'error': 'db_not_found', 'path': store.path}))
        return 1

    summary = store.summary()
    if 'pantries' in summary['tables']:
        summary['pantries_sample'] = [
            {'id': p['id'], 'name': p['name'], 'lat': p['lat'], 'lng': p['lng']}
            for p in store.list_pantries()[:args.sample]
        ]
    print(json.dumps(summary, indent=2))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
