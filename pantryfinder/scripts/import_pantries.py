"""
Load pantries from a spreadsheet (CSV or Excel) into the database.

Headers are matched loosely: surrounding whitespace and case are ignored,
and common variants ("Latitude", "Lon", "Pantry Name", "Category") map to
the stored columns. Rows without a name or address are skipped. Missing
coordinates are left empty; fill them with ``pantryfinder-fill-coords``.

Usage:
  pantryfinder-import-pantries pantries.xlsx
  pantryfinder-import-pantries pantries.csv --type clothing --dry
"""

import argparse
import re

import pandas as pd

from ..config import get_db_path
from ..db import PantryStore
from ..markers import PANTRY_TYPES, REPEATING_TYPES

COLUMN_ALIASES = {
    'pantry_name': 'name',
    'title': 'name',
    'location': 'address',
    'latitude': 'lat',
    'longitude': 'lng',
    'lon': 'lng',
    'long': 'lng',
    'category': 'type',
    'pantry_type': 'type',
    'description': 'notes',
    'schedule': 'repeating',
}


def norm_col(c):
    c = str(c).strip().lower()
    c = re.sub(r'[\s\-]+', '_', c)  # "Pantry Name" -> pantry_name
    c = c.rstrip('.')
    return COLUMN_ALIASES.get(c, c)


def read_table(path):
    # keep everything as text so blanks don't turn into NaN-y floats
    if str(path).lower().endswith(('.xlsx', '.xls')):
        df = pd.read_excel(path, sheet_name=0, dtype=str, keep_default_na=False)
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [norm_col(c) for c in df.columns]
    return df


def clean_rows(df, default_type='food'):
    """Turn a normalized frame into pantry dicts, reporting skipped rows."""
    df = df.apply(lambda col: col.str.strip())
    for col in ('lat', 'lng'):
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors='coerce')

    rows = []
    for i, rec in enumerate(df.to_dict(orient='records'), start=2):
        if not rec.get('name') or not rec.get('address'):
            print('Row', i, 'has no name or address - skipping')
            continue
        pantry_type = (rec.get('type') or default_type).lower()
        if pantry_type not in PANTRY_TYPES:
            print('Row', i, 'has unknown type', repr(pantry_type), '- skipping')
            continue
        repeating = (rec.get('repeating') or '').lower() or None
        if repeating not in REPEATING_TYPES:
            repeating = None
        lat, lng = rec.get('lat'), rec.get('lng')
        rows.append({
            'name': rec['name'],
            'address': rec['address'],
            'notes': rec.get('notes') or None,
            'hours': rec.get('hours') or None,
            'lat': None if pd.isna(lat) else float(lat),
            'lng': None if pd.isna(lng) else float(lng),
            'type': pantry_type,
            'repeating': repeating,
        })
    return rows


def main(argv=None):
    parser = argparse.ArgumentParser(description='Import pantries from a CSV or Excel file.')
    parser.add_argument('path', help='CSV or Excel file to read')
    parser.add_argument('--db', default=None, help='Database file (default: $DATA_DIRECTORY/database.sqlite)')
    parser.add_argument('--type', default='food', choices=PANTRY_TYPES, help='Type for rows without one')
    parser.add_argument('--dry', action='store_true', help='Do not write changes')
    args = parser.parse_args(argv)

    df = read_table(args.path)
    print('Columns:', list(df.columns))
    rows = clean_rows(df, default_type=args.type)
    print(f'Read {len(df)} rows, {len(rows)} usable')

    if args.dry:
        for r in rows[:10]:
            print(r['name'], '|', r['address'], '|', r['type'])
        print('Dry run - no changes written')
        return 0

    store = PantryStore(args.db or get_db_path())
    store.init_schema()
    print('Imported', store.seed_pantries(rows), 'pantries into', store.path)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
