# archive/utils.py - HELPER FUNCTIONS

import re

_WHITESPACE = re.compile(r'\s+')

# ============================================
# SLUGS
# ============================================


def derive_slug(value):
    """Lower-case `value` and replace each run of whitespace with one hyphen."""
    if value is None:
        return ''
    return _WHITESPACE.sub('-', str(value).strip().lower())


# ============================================
# UNIVERSITY SHORT FORMS (home page cards)
# ============================================

SHORT_FORMS = {
    'Khulna University of Engineering & Technology': 'KUET',
    'Bangladesh University of Engineering & Technology': 'BUET',
    'Chittagong University of Engineering & Technology': 'CUET',
    'Rajshahi University of Engineering & Technology': 'RUET',
    'University of Dhaka': 'DU',
    'Jahangirnagar University': 'JU',
    'Shahjalal University of Science & Technology': 'SUST',
}


def short_form(name):
    """Known abbreviation for a university, otherwise the initials of its words."""
    if not name:
        return ''
    if name in SHORT_FORMS:
        return SHORT_FORMS[name]
    return ''.join(word[0] for word in name.split() if word[0].isalnum()).upper()


# ============================================
# QUERY PARAMETERS
# ============================================


def parse_int(value):
    """Integer value of a query parameter, or None when absent or not a number."""
    if value in (None, ''):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
