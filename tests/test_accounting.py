from datetime import datetime, timezone

from dbest_dashboard.components.accounting.service import (build_chart_data, build_dashboard_data, export_rows,
                                                           inventory_stats, item_amount, item_quantity)

ANALYTICS = {
    'summary': {'total_items': 120, 'total_quantity': 300, 'total_assigned': 10, 'total_unassigned': 60},
    'by_category': [{'category': f'Cat {n}', 'count': n, 'value': n * 1000} for n in range(1, 13)],
    'by_school': [{'school_name': 'Rizal ES', 'total_items': 80, 'total_value': 500000},
                  {'school_name': 'Mabini HS', 'total_items': 40, 'total_value': 900000}],
    'by_status': [{'status': 'SERVICEABLE', 'count': 100}, {'status': 'Mystery', 'count': 20}],
    'school_vs_dcp': {'school_inventory': 90, 'dcp_inventory': 30},
}

FINANCIAL = {'total_inventory_value': 1400000, 'available_inventory_value': 1000000,
             'assigned_inventory_value': 400000}

INVENTORY = [
    {'id': 1, 'name': 'Laptop', 'category': 'ICT', 'status': 'Working', 'type': 'school', 'quantity': 2,
     'unit_price': 30000, 'school_name': 'Rizal ES', 'created_at': '2024-05-01T08:00:00Z'},
    {'id': 2, 'name': 'Tablet', 'category': 'ICT', 'condition_status': 'For Repair', 'type': 'dcp',
     'quantity': 0, 'unit_value': 12000, 'school_name': 'Mabini HS', 'created_at': '2024-04-01T08:00:00Z'},
    {'id': 3, 'name': 'Desk', 'category': 'Furniture', 'status': 'SERVICEABLE', 'type': 'school',
     'quantity': 10, 'available_quantity': 4, 'unit_price': 2500, 'school_name': 'Rizal ES',
     'created_at': '2024-03-01T08:00:00Z'},
]


def test_zero_quantity_counts_as_one_unit():
    assert item_quantity({'quantity': 0}) == 1
    assert item_quantity({}) == 1
    assert item_amount(INVENTORY[1]) == 12000


def test_inventory_stats():
    stats = inventory_stats(INVENTORY)
    assert stats == {'total_items': 3, 'school_items': 2, 'dcp_items': 1, 'total_quantity': 13,
                     'total_value': 60000 + 12000 + 25000}


def test_export_rows():
    row = export_rows(INVENTORY[2:])[0]
    assert row == ['Desk', 'Furniture', 'SERVICEABLE', 10, 4, '', '', '', '', '₱25,000.00']
    assert export_rows([{'quantity': 3}], blank='-')[0][4] == 3


def test_dashboard_builder():
    now = datetime(2024, 5, 1, 10, tzinfo=timezone.utc).timestamp()
    data = build_dashboard_data(ANALYTICS, {'data': INVENTORY}, FINANCIAL, now=now)
    assert data['quick_stats'][0]['value'] == '₱1,400,000.00'
    assert data['quick_stats'][1]['trend'] == '₱400,000.00 assigned'
    assert [c['category'] for c in data['top_categories']] == ['Cat 12', 'Cat 11', 'Cat 10', 'Cat 9', 'Cat 8']
    assert [s['school_name'] for s in data['top_schools']] == ['Mabini HS', 'Rizal ES']
    assert data['recent_activities'][0]['entity'] == 'Laptop'
    assert data['recent_activities'][0]['time'] == '2 hours ago'
    assert data['priority_tasks'][0] == {'task': 'Review unassigned inventory', 'priority': 'high', 'count': 60}
    assert [a['title'] for a in data['alerts']] == ['High unassigned inventory']
    assert data['system_status']['tone'] == 'info'


def test_dashboard_builder_with_nothing_loaded():
    data = build_dashboard_data(None, None, None)
    assert data['stats']['total_items'] == 0
    assert [a['title'] for a in data['alerts']] == ['No inventory items']
    assert data['recent_activities'] == []


def test_chart_data_keeps_top_ten():
    charts = build_chart_data(ANALYTICS)
    assert len(charts['category_value']['labels']) == 10
    assert charts['by_source']['datasets'][0]['data'] == [90.0, 30.0]
    assert charts['status']['datasets'][0]['backgroundColor'] == ['#28a745', 'rgba(108, 117, 125, 0.8)']
    assert charts['stats']['total_schools'] == 2


def test_chart_data_from_empty_payload():
    charts = build_chart_data(None)
    assert charts['status']['labels'] == []
    assert charts['stats']['total_items'] == 0


def test_dashboard_page(accounting, http):
    http.add('GET', '/accounting/analytics', ANALYTICS)
    http.add('GET', '/accounting/inventory', {'data': INVENTORY, 'last_page': 1})
    http.add('GET', '/accounting/analytics/financial', FINANCIAL)
    response = accounting.get('/finance')
    assert response.status_code == 200
    assert '₱1,400,000.00'.encode() in response.data
    assert b'Mabini HS' in response.data


def test_analytics_page_embeds_chart_data(accounting, http):
    http.add('GET', '/accounting/analytics', ANALYTICS)
    response = accounting.get('/finance/analytics')
    assert response.status_code == 200
    assert response.data.count(b'class="analytics-chart"') == 6


def test_inventory_filters_by_school_and_status_aliases(accounting, http):
    http.add('GET', '/accounting/inventory', {'data': INVENTORY, 'last_page': 1})
    response = accounting.get('/finance/inventory?school=Rizal+ES&status=SERVICEABLE')
    assert response.status_code == 200
    assert b'Laptop' in response.data
    assert b'Desk' in response.data
    assert b'Tablet' not in response.data


def test_inventory_csv_export(accounting, http):
    http.add('GET', '/accounting/inventory', {'data': INVENTORY, 'last_page': 1})
    response = accounting.get('/finance/inventory/export.csv?source=school&sort=name&dir=asc')
    lines = response.get_data(as_text=True).split('\n')
    assert lines[0] == 'Name,Category,Status,Quantity,Available,Location,Brand,Model,Serial Number,Amount'
    assert [line.split(',')[0] for line in lines[1:]] == ['Desk', 'Laptop']


def test_password_change_from_profile_page(accounting, http):
    http.add('PUT', '/accounting/settings/change-password', {'message': 'Password changed'})
    response = accounting.post('/finance/profile', data={
        'form': 'password', 'current_password': 'OldSecret1', 'new_password': 'NewSecret1',
        'new_password_confirmation': 'NewSecret1',
    })
    assert response.headers['Location'].endswith('/finance/profile')
    body = http.called('PUT', '/accounting/settings/change-password')[0]['json']
    assert body == {'current_password': 'OldSecret1', 'new_password': 'NewSecret1',
                    'new_password_confirmation': 'NewSecret1'}


def test_password_mismatch_is_caught_locally(accounting, http):
    response = accounting.post('/finance/profile', data={
        'form': 'password', 'current_password': 'OldSecret1', 'new_password': 'NewSecret1',
        'new_password_confirmation': 'Different1',
    })
    assert b'Passwords do not match.' in response.data
    assert not http.called('PUT', '/accounting/settings/change-password')
