"""Sorting and Pagination.

Translates client sort/limit/offset input into a bounded, allow-listed
QueryParameter and applies it to SQLAlchemy select statements.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select
from sqlalchemy.sql.elements import ColumnElement

from ..core.config import Settings, get_settings
from ..core.constants import ErrorMessages, Pagination as PaginationDefaults
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Sort:
    """One ORDER BY entry, keyed by its public field name."""

    key: str
    is_asc: bool = True


@dataclass(frozen=True)
class Pagination:
    """Bounded limit/offset pair."""

    limit: int = PaginationDefaults.DEFAULT_LIMIT
    offset: int = PaginationDefaults.DEFAULT_OFFSET


@dataclass(frozen=True)
class QueryParameter:
    """Validated sorts and pagination for a list request."""

    sorts: tuple[Sort, ...] = ()
    pagination: Pagination = field(default_factory=Pagination)


class SortOptions:
    """Closed allow-list of sortable fields for one entity.

    Args:
        columns: Mapping of public field name to the column it sorts by
    """

    def __init__(self, columns: Mapping[str, ColumnElement[Any]]):
        self._columns = dict(columns)

    def __contains__(self, key: str) -> bool:
        return key in self._columns

    @property
    def allowed(self) -> list[str]:
        return sorted(self._columns)

    def column(self, key: str) -> ColumnElement[Any]:
        """Return the column for key.

        Raises:
            ValidationError: If key is not in the allow-list
        """
        try:
            return self._columns[key]
        except KeyError:
            raise ValidationError(
                ErrorMessages.SORT_FIELD_UNKNOWN.format(
                    field=key, allowed=", ".join(self.allowed)
                ),
                field="sort"
            ) from None


def parse_sorts(raw: str | Sequence[str] | None, options: SortOptions) -> tuple[Sort, ...]:
    """Parse client sort input.

    Keys are comma separated; a leading "-" sorts descending. Repeated keys keep
    their first occurrence.

    Args:
        raw: e.g. "surname,-age" or ["surname", "-age"]
        options: Allow-list for the entity being listed

    Returns:
        Tuple of Sort entries in the requested order

    Raises:
        ValidationError: If any key is not allowed

    Examples:
        >>> parse_sorts("surname,-age", CONTACT_SORT_OPTIONS)
        (Sort(key='surname', is_asc=True), Sort(key='age', is_asc=False))
    """
    if not raw:
        return ()

    parts = raw.split(PaginationDefaults.SORT_SEPARATOR) if isinstance(raw, str) else list(raw)

    sorts: list[Sort] = []
    seen: set[str] = set()
    for part in parts:
        token = part.strip()
        if not token:
            continue
        is_asc = not token.startswith(PaginationDefaults.DESCENDING_PREFIX)
        key = (token if is_asc else token[len(PaginationDefaults.DESCENDING_PREFIX):]).strip()
        options.column(key)
        if key in seen:
            continue
        seen.add(key)
        sorts.append(Sort(key=key, is_asc=is_asc))
    return tuple(sorts)


def build_pagination(
    limit: int | None = None,
    offset: int | None = None,
    settings: Settings | None = None
) -> Pagination:
    """Bound client pagination input.

    A missing limit falls back to the configured default; a limit above the
    ceiling is clamped to it.

    Raises:
        ValidationError: If limit < 1, or offset is negative or exceeds bigint
    """
    settings = settings or get_settings()

    if limit is None:
        limit = settings.DEFAULT_PAGE_LIMIT
    elif limit < PaginationDefaults.MIN_LIMIT:
        raise ValidationError(
            ErrorMessages.LIMIT_INVALID.format(min_limit=PaginationDefaults.MIN_LIMIT),
            field="limit"
        )
    limit = min(limit, settings.MAX_PAGE_LIMIT)

    if offset is None:
        offset = PaginationDefaults.DEFAULT_OFFSET
    elif offset < 0:
        raise ValidationError(ErrorMessages.OFFSET_INVALID, field="offset")
    elif offset > PaginationDefaults.MAX_OFFSET:
        raise ValidationError(
            ErrorMessages.OFFSET_TOO_LARGE.format(max_offset=PaginationDefaults.MAX_OFFSET),
            field="offset"
        )

    return Pagination(limit=limit, offset=offset)


def build_query_parameter(
    options: SortOptions,
    sort: str | Sequence[str] | None = None,
    limit: int | None = None,
    offset: int | None = None,
    settings: Settings | None = None
) -> QueryParameter:
    """Validate sort and pagination input for one entity."""
    return QueryParameter(
        sorts=parse_sorts(sort, options),
        pagination=build_pagination(limit, offset, settings),
    )


def apply_query_parameter(
    stmt: Select,
    params: QueryParameter,
    options: SortOptions,
    default_order: Sequence[ColumnElement[Any]],
    tiebreaker: ColumnElement[Any],
    settings: Settings | None = None
) -> Select:
    """Add ORDER BY, LIMIT and OFFSET to a select.

    Without client sorts the default order is used. The unique tiebreaker is
    always appended last so pages never overlap or skip rows. The limit is
    clamped again here so a hand-built QueryParameter cannot bypass the ceiling.

    Args:
        stmt: Select to extend
        params: Validated query parameters
        options: Allow-list the sorts were validated against
        default_order: Columns used when no sort is requested
        tiebreaker: Unique column (primary key)
        settings: Service settings for the limit ceiling

    Returns:
        The extended select
    """
    settings = settings or get_settings()

    order_by: list[ColumnElement[Any]] = []
    sorted_columns: list[ColumnElement[Any]] = []
    for sort in params.sorts:
        column = options.column(sort.key)
        sorted_columns.append(column)
        order_by.append(column.asc() if sort.is_asc else column.desc())

    if not order_by:
        order_by.extend(column.asc() for column in default_order)
        sorted_columns.extend(default_order)

    if not any(column is tiebreaker for column in sorted_columns):
        order_by.append(tiebreaker.asc())

    limit = max(PaginationDefaults.MIN_LIMIT, min(params.pagination.limit, settings.MAX_PAGE_LIMIT))
    offset = max(0, params.pagination.offset)

    return stmt.order_by(*order_by).limit(limit).offset(offset)
