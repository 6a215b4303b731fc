"""
db/placeholders.py
------------------
Query templates are written once, with DB-API ``%s`` ordinal markers,
and rewritten here for the active engine:

    MySQL       ->  unchanged            (driver binds ``%s`` positionally)
    PostgreSQL  ->  ``$1``, ``$2``, ...  (in left-to-right appearance order)

Markers inside quoted literals and the ``%%`` escape are left alone.
"""

from typing import Any, Iterable, Sequence

from db.dialect import Dialect


def _scan(template: str) -> Iterable[tuple[int, str]]:
    """
    Walk the template and yield ``(index, kind)`` for every ``%`` token
    outside quotes. ``kind`` is 'param' for ``%s`` and 'escape' for ``%%``.
    """
    quote = None
    i = 0
    length = len(template)
    while i < length:
        ch = template[i]
        if quote:
            if ch == quote:
                # doubled quote inside a literal ('it''s')
                if i + 1 < length and template[i + 1] == quote:
                    i += 2
                    continue
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "%" and i + 1 < length:
            nxt = template[i + 1]
            if nxt == "s":
                yield i, "param"
                i += 2
                continue
            if nxt == "%":
                yield i, "escape"
                i += 2
                continue
        i += 1


def squeeze(template: str) -> str:
    """
    Collapse whitespace runs to single spaces and trim the ends.
    Text inside quoted literals is copied unchanged.
    """
    out: list[str] = []
    quote = None
    pending_space = False
    for ch in template:
        if quote:
            out.append(ch)
            if ch == quote:
                quote = None
            continue
        if ch.isspace():
            pending_space = bool(out)
            continue
        if pending_space:
            out.append(" ")
            pending_space = False
        if ch in ("'", '"'):
            quote = ch
        out.append(ch)
    return "".join(out)


def count_placeholders(template: str) -> int:
    """Number of ordinal markers in a template."""
    return sum(1 for _, kind in _scan(template) if kind == "param")


def translate(template: str, dialect: Dialect) -> str:
    """
    Rewrite ordinal markers into the dialect's placeholder syntax.

    Args:
        template: SQL with ``%s`` markers.
        dialect: The active engine.

    Returns:
        The SQL ready for the driver. Templates without markers, and every
        template on the positional engine, come back unchanged.
    """
    if not dialect.numbered_placeholders:
        return template

    parts: list[str] = []
    last = 0
    position = 0
    for index, kind in _scan(template):
        parts.append(template[last:index])
        if kind == "param":
            position += 1
            parts.append(f"${position}")
        else:
            # no pyformat on asyncpg: %% is a literal percent sign
            parts.append("%")
        last = index + 2
    if not parts:
        return template
    parts.append(template[last:])
    return "".join(parts)


class QueryBuilder:
    """
    Accumulates SQL fragments together with the values they bind.

    Each ``add`` call must pass exactly as many values as the fragment has
    markers, so conditionally appended filters can never shift a bind.

    Usage:
        q = QueryBuilder("SELECT * FROM accommodations WHERE is_active = TRUE")
        if city:
            q.add("AND city LIKE %s", f"%{city}%")
        sql, params = q.build()
    """

    def __init__(self, base: str = "", *params: Any) -> None:
        self._fragments: list[str] = []
        self._params: list[Any] = []
        if base:
            self.add(base, *params)

    def add(self, fragment: str, *params: Any) -> "QueryBuilder":
        expected = count_placeholders(fragment)
        if expected != len(params):
            raise ValueError(
                f"Fragment has {expected} placeholder(s) but {len(params)} value(s): {fragment!r}"
            )
        self._fragments.append(fragment.strip())
        self._params.extend(params)
        return self

    @property
    def params(self) -> Sequence[Any]:
        return tuple(self._params)

    def __len__(self) -> int:
        return len(self._fragments)

    def build(self, separator: str = " ") -> tuple[str, list[Any]]:
        """Join the fragments and return ``(template, params)``."""
        return separator.join(self._fragments), list(self._params)
