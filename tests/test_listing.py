from werkzeug.datastructures import MultiDict

from dbest_dashboard.core.listing import (ASSIGNED_ITEM_STATUS_ALIASES, ListQuery, apply_query, filter_active,
                                          filter_by, get_value, paginate, search, sort_records, toggle_sort)

ITEMS = [
    {'id': 1, 'name': 'Laptop', 'category': 'ICT', 'status': 'available', 'quantity': '10',
     'created_at': '2024-03-01T08:00:00Z', 'personnel': {'full_name': 'Ana Santos'}},
    {'id': 2, 'name': 'Projector', 'category': 'ICT', 'status': 'assigned', 'quantity': '2',
     'created_at': '2024-05-01T08:00:00Z', 'personnel': {'full_name': 'Ben Cruz'}},
    {'id': 3, 'name': 'Chair', 'category': 'Furniture', 'status': 'Working', 'quantity': '120',
     'created_at': None},
]


def test_get_value_follows_dotted_paths():
    assert get_value(ITEMS[0], 'personnel.full_name') == 'Ana Santos'
    assert get_value(ITEMS[2], 'personnel.full_name') is None
    assert get_value(ITEMS[0], lambda item: item['id'] * 2) == 2


def test_search_is_case_insensitive_across_fields():
    assert [i['id'] for i in search(ITEMS, 'lap', ('name',))] == [1]
    assert [i['id'] for i in search(ITEMS, 'ben', ('name', 'personnel.full_name'))] == [2]
    assert len(search(ITEMS, '   ', ('name',))) == 3


def test_filter_all_keeps_everything():
    assert len(filter_by(ITEMS, 'category', 'all')) == 3
    assert [i['id'] for i in filter_by(ITEMS, 'category', 'Furniture')] == [3]


def test_filter_aliases_match_legacy_statuses():
    available = filter_by(ITEMS, 'status', 'available', ASSIGNED_ITEM_STATUS_ALIASES)
    assert [i['id'] for i in available] == [1, 3]


def test_filter_active():
    records = [{'id': 1, 'is_active': True}, {'id': 2, 'is_active': False}]
    assert [r['id'] for r in filter_active(records, 'active')] == [1]
    assert [r['id'] for r in filter_active(records, 'inactive')] == [2]
    assert len(filter_active(records, 'all')) == 2


def test_sort_dates_missing_last_when_descending():
    result = sort_records(ITEMS, 'created_at', 'desc')
    assert [i['id'] for i in result] == [2, 1, 3]


def test_sort_numeric_fields_compare_as_numbers():
    result = sort_records(ITEMS, 'quantity', 'asc', numeric_fields=('quantity',))
    assert [i['id'] for i in result] == [2, 1, 3]


def test_sort_text_is_case_insensitive():
    result = sort_records([{'name': 'b'}, {'name': 'A'}, {'name': None}], 'name', 'asc')
    assert [r['name'] for r in result] == [None, 'A', 'b']


def test_toggle_sort():
    assert toggle_sort('name', 'asc', 'name') == ('name', 'desc')
    assert toggle_sort('name', 'desc', 'name') == ('name', 'asc')
    assert toggle_sort('name', 'desc', 'category') == ('category', 'asc')


def test_paginate_slices_and_reports_positions():
    page = paginate(list(range(23)), page=3, per_page=10)
    assert page.items == [20, 21, 22]
    assert page.total_pages == 3
    assert (page.start_index, page.end_index) == (21, 23)
    assert page.has_prev and not page.has_next


def test_paginate_out_of_range_falls_back_to_first_page():
    page = paginate(list(range(5)), page=9, per_page=10)
    assert page.page == 1
    assert page.items == list(range(5))


def test_paginate_empty():
    page = paginate([], page=1, per_page=10)
    assert page.total_pages == 1
    assert (page.start_index, page.end_index) == (0, 0)


def test_list_query_from_args():
    args = MultiDict({'q': ' lap ', 'status': 'assigned', 'sort': 'name', 'dir': 'asc', 'page': '2',
                      'per_page': '25'})
    query = ListQuery.from_args(args, filters=('status', 'category'))
    assert query.search == 'lap'
    assert query.filter('status') == 'assigned'
    assert query.filter('category') == 'all'
    assert (query.sort, query.direction, query.page, query.per_page) == ('name', 'asc', 2, 25)


def test_list_query_rejects_unknown_page_size_and_direction():
    query = ListQuery.from_args(MultiDict({'per_page': '7', 'dir': 'sideways', 'page': 'x'}))
    assert query.per_page == 10
    assert query.direction == 'desc'
    assert query.page == 1


def test_list_query_args_drop_defaults_and_all_filters():
    query = ListQuery.from_args(MultiDict({'status': 'all', 'category': 'ICT'}), filters=('status', 'category'))
    args = query.to_args(page=3)
    assert 'status' not in args
    assert args['category'] == 'ICT'
    assert args['page'] == 3
    assert 'q' not in args


def test_sort_args_flip_active_column_and_reset_page():
    query = ListQuery(sort='name', direction='asc', page=4)
    args = query.sort_args('name')
    assert (args['sort'], args['dir'], args['page']) == ('name', 'desc', 1)


def test_apply_query_combines_search_filter_and_sort():
    query = ListQuery(search='', filters={'category': 'ICT'}, sort='name', direction='desc')
    result = apply_query(ITEMS, query, ('name',), filter_fields={'category': ('category', None)})
    assert [i['name'] for i in result] == ['Projector', 'Laptop']
