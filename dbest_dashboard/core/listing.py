"""
Filter, sort and paginate helpers shared by every list and report page

Records are plain dicts as returned by the REST API. List state lives in the
query string (q, filters, sort, dir, page, per_page) so every page is
bookmarkable and the total unfiltered count is never affected by filters.
"""
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..config.settings import DashboardConfig
from .formatting import parse_datetime

ALL = 'all'

# Filter option -> statuses it accepts
INVENTORY_CONDITION_ALIASES = {
    'SERVICEABLE': ('SERVICEABLE', 'Working'),
    'Working': ('SERVICEABLE', 'Working'),
    'UNSERVICEABLE': ('UNSERVICEABLE', 'Unrepairable'),
    'NEEDS REPAIR': ('NEEDS REPAIR', 'For Repair', 'For Part Replacement'),
    'MISSING/LOST': ('MISSING/LOST', 'Lost'),
}

ASSIGNED_ITEM_STATUS_ALIASES = {
    'available': ('available', 'Working'),
    'Working': ('available', 'Working'),
    'assigned': ('assigned',),
    'maintenance': ('maintenance', 'For Repair', 'For Part Replacement'),
}


def get_value(record, path):
    """Look up a dotted path such as 'personnel.full_name'; callables are applied"""
    if callable(path):
        return path(record)
    value = record
    for part in path.split('.'):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


def search(items, term, fields):
    """Case-insensitive substring match over any of `fields`"""
    term = (term or '').strip().lower()
    if not term:
        return list(items)
    matches = []
    for item in items:
        for path in fields:
            value = get_value(item, path)
            if value not in (None, '') and term in str(value).lower():
                matches.append(item)
                break
    return matches


def filter_by(items, field, value, aliases=None):
    """Keep records whose field equals value; 'all' or blank keeps everything

    `aliases` maps a filter value to the tuple of record values it accepts.
    """
    if value in (None, '', ALL):
        return list(items)
    accepted = (aliases or {}).get(value, (value,))
    return [item for item in items if get_value(item, field) in accepted]


def filter_active(items, status):
    """'active' / 'inactive' over the is_active flag"""
    if status == 'active':
        return [item for item in items if item.get('is_active')]
    if status == 'inactive':
        return [item for item in items if not item.get('is_active')]
    return list(items)


def item_status(item):
    return item.get('status') or item.get('condition_status') or ''


def sort_records(items, field, direction='asc', date_fields=('created_at', 'updated_at'),
                 key_funcs=None, numeric_fields=()):
    """Stable sort; dates compare as datetimes, missing ones as the epoch"""
    key_funcs = key_funcs or {}

    if field in key_funcs:
        key = key_funcs[field]
    elif field in date_fields:
        def key(item):
            parsed = parse_datetime(item.get(field))
            return parsed.timestamp() if parsed else 0.0
    elif field in numeric_fields:
        def key(item):
            try:
                return float(get_value(item, field) or 0)
            except (TypeError, ValueError):
                return 0.0
    else:
        def key(item):
            value = get_value(item, field)
            return '' if value is None else str(value).lower()

    return sorted(items, key=key, reverse=(direction == 'desc'))


def toggle_sort(current_field, current_direction, field):
    """Clicking the active column flips direction; a new column starts ascending"""
    if current_field == field:
        return field, 'desc' if current_direction == 'asc' else 'asc'
    return field, 'asc'


def distinct_values(items, field):
    return sorted({str(v) for v in (get_value(item, field) for item in items) if v not in (None, '')})


@dataclass
class Page:
    items: List[dict]
    page: int
    per_page: int
    total: int
    total_pages: int

    @property
    def start_index(self):
        """1-based position of the first item on this page, 0 when empty"""
        return (self.page - 1) * self.per_page + 1 if self.total else 0

    @property
    def end_index(self):
        return min(self.page * self.per_page, self.total)

    @property
    def has_prev(self):
        return self.page > 1

    @property
    def has_next(self):
        return self.page < self.total_pages

    @property
    def pages(self):
        return range(1, self.total_pages + 1)


def paginate(items, page=1, per_page=DashboardConfig.DEFAULT_PAGE_SIZE):
    """Slice one page; a page outside 1..total_pages falls back to 1"""
    items = list(items)
    per_page = max(1, int(per_page))
    total_pages = max(1, math.ceil(len(items) / per_page))
    if page < 1 or page > total_pages:
        page = 1
    start = (page - 1) * per_page
    return Page(items=items[start:start + per_page], page=page, per_page=per_page,
                total=len(items), total_pages=total_pages)


def _as_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class ListQuery:
    """List state parsed from request arguments"""

    search: str = ''
    filters: Dict[str, str] = field(default_factory=dict)
    sort: Optional[str] = 'created_at'
    direction: str = 'desc'
    page: int = 1
    per_page: int = DashboardConfig.DEFAULT_PAGE_SIZE

    @classmethod
    def from_args(cls, args, filters: Iterable[str] = (), default_sort='created_at',
                  default_direction='desc', sortable: Optional[Sequence[str]] = None,
                  page_sizes=DashboardConfig.PAGE_SIZE_OPTIONS,
                  default_per_page=DashboardConfig.DEFAULT_PAGE_SIZE):
        sort = args.get('sort') or default_sort
        if sortable is not None and sort not in sortable:
            sort = default_sort
        direction = args.get('dir') if args.get('dir') in ('asc', 'desc') else default_direction
        per_page = _as_int(args.get('per_page'), default_per_page)
        if per_page not in page_sizes:
            per_page = default_per_page
        return cls(
            search=(args.get('q') or '').strip(),
            filters={name: args.get(name) or ALL for name in filters},
            sort=sort,
            direction=direction,
            page=_as_int(args.get('page'), 1),
            per_page=per_page,
        )

    def filter(self, name):
        return self.filters.get(name, ALL)

    def sort_args(self, field):
        """Query arguments for a column header link"""
        sort, direction = toggle_sort(self.sort, self.direction, field)
        return self.to_args(sort=sort, dir=direction, page=1)

    def to_args(self, **overrides):
        args = {'q': self.search, 'sort': self.sort, 'dir': self.direction,
                'page': self.page, 'per_page': self.per_page}
        args.update({k: v for k, v in self.filters.items() if v != ALL})
        args.update(overrides)
        return {k: v for k, v in args.items() if v not in (None, '')}


def apply_query(items, query: ListQuery, search_fields, filter_fields=None, date_fields=('created_at', 'updated_at'),
                key_funcs: Optional[Dict[str, Callable]] = None, numeric_fields=()):
    """Search, filter and sort a record list according to a ListQuery

    `filter_fields` maps a query filter name to (record field, aliases); the
    special record field 'is_active' uses active/inactive semantics.
    """
    result = search(items, query.search, search_fields)
    for name, (record_field, aliases) in (filter_fields or {}).items():
        value = query.filter(name)
        if record_field == 'is_active':
            result = filter_active(result, value)
        else:
            result = filter_by(result, record_field, value, aliases)
    return sort_records(result, query.sort, query.direction, date_fields=date_fields,
                        key_funcs=key_funcs, numeric_fields=numeric_fields)
