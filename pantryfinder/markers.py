"""Map marker selection.

The map shows pantries by type, and politicians and candidates as two
extra categories that are further narrowed by legislative chamber. These
helpers take the full record lists and the current selections and return
the records to draw, in their original order.
"""

PANTRY_TYPES = ('food', 'clothing', 'resource', 'library')
REPEATING_TYPES = ('one-time', 'daily', 'weekly', 'weekendly', 'monthly', 'idk')

POLITICIANS = 'politicians'
CANDIDATES = 'candidates'
CATEGORIES = PANTRY_TYPES + (CANDIDATES, POLITICIANS)

OFFICE_TYPES = ('House', 'Senate')


def filter_pantries(pantries, selected_categories):
    selected = frozenset(selected_categories)
    return [p for p in pantries if p.get('type') in selected]


def filter_politicians(politicians, selected_categories, selected_office_types):
    if POLITICIANS not in frozenset(selected_categories):
        return []
    offices = frozenset(selected_office_types)
    return [p for p in politicians if p.get('office') in offices]


def filter_candidates(candidates, selected_categories, selected_office_types):
    """Candidates to draw: category selected, opted in, chamber selected."""
    if CANDIDATES not in frozenset(selected_categories):
        return []
    offices = frozenset(selected_office_types)
    return [
        c for c in candidates
        if c.get('show_on_map') and c.get('office') in offices
    ]


def office_from_office_type(office_type):
    """Collapse the free-text offices a candidate runs for into a chamber.

    Anything mentioning the Senate maps to ``Senate``, everything else to
    ``House``.
    """
    if office_type and 'Senate' in office_type:
        return 'Senate'
    return 'House'


def with_paired_senators(politicians):
    """Add a placeholder second senator for states that list only one.

    The placeholder copies the sitting senator with an offset id, a generic
    name and a small coordinate shift so the two markers do not overlap.
    Missing coordinates count as 0.
    """
    by_state = {}
    for p in politicians:
        if p.get('office') == 'Senate':
            by_state.setdefault(p.get('state'), []).append(p)

    extra = []
    for state, senators in by_state.items():
        if len(senators) != 1:
            continue
        senator = senators[0]
        extra.append({
            **senator,
            'id': senator['id'] + 1000,
            'name': f'Senator for {state} 2',
            'lat': (senator.get('lat') or 0) + 0.1,
            'lng': (senator.get('lng') or 0) + 0.1,
        })
    return list(politicians) + extra
