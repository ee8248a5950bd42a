# src/taskforge/core/query/operators.py

# Maps filter operators to SQLAlchemy column methods.
# For example, a condition with op 'gte' calls `Column.__ge__(value)`.
OPERATOR_MAP = {
    'eq': '__eq__',      # Equal
    'neq': '__ne__',     # Not Equal
    'gt': '__gt__',      # Greater Than
    'gte': '__ge__',     # Greater Than or Equal
    'lt': '__lt__',      # Less Than
    'lte': '__le__',     # Less Than or Equal
    'like': 'like',      # String LIKE
    'ilike': 'ilike',    # String ILIKE (case-insensitive)
    'in': 'in_',         # In a list of values
    'notin': 'not_in',   # Not in a list of values
    'isnull': 'is_',     # Is Null
}

# Operators that expect a list of values.
LIST_OPERATORS = {'in', 'notin'}

# Operators whose value is a LIKE pattern and need an ESCAPE clause.
PATTERN_OPERATORS = {'like', 'ilike'}

LIKE_ESCAPE = '\\'


def escape_like(text: str, escape: str = LIKE_ESCAPE) -> str:
    """Escape LIKE wildcards so `text` only ever matches itself."""
    return (
        text.replace(escape, escape * 2)
        .replace('%', f'{escape}%')
        .replace('_', f'{escape}_')
    )


def contains_pattern(text: str) -> str:
    """Literal substring pattern for LIKE/ILIKE."""
    return f'%{escape_like(text)}%'
