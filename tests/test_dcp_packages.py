from werkzeug.datastructures import MultiDict

from dbest_dashboard.components.dcp_packages.service import (DcpPackageProgressService, IctDcpPackageService,
                                                             documents, filter_by_status, form_record,
                                                             package_stats)
from dbest_dashboard.core.listing import ListQuery

PACKAGES = [
    {'id': 1, 'batch_name': 'Batch 2023-A', 'details': 'Laptops and projector', 'quantity': 12,
     'package_count': 3, 'delivery_date': '2024-05-10T00:00:00Z', 'delivery_status': 'Delivered',
     'installation_status': 'Completed', 'school_id': 3, 'school': {'id': 3, 'name': 'Rizal ES'},
     'dr_number': 'DR-001', 'dr_filename': 'dr-001.pdf', 'iar_number': 'IAR-9', 'iar_filename': 'iar-9.pdf'},
    {'id': 2, 'batch_name': 'Batch 2024-B', 'details': 'Smart TV set', 'quantity': 2, 'package_count': 1,
     'delivery_date': None, 'delivery_status': 'In Transit', 'installation_status': 'Not Started',
     'school_id': 4, 'school': {'id': 4, 'name': 'Mabini HS'}},
    {'id': 3, 'batch_name': 'Batch 2024-C', 'details': 'Solar kit', 'quantity': 1, 'package_count': 1,
     'delivery_date': '2024-06-01', 'delivery_status': None, 'installation_status': 'On Hold',
     'school_id': 3, 'school': {'id': 3, 'name': 'Rizal ES'}},
]

DCP_ITEMS = [
    {'id': 5, 'dcp_package_id': 1, 'batch_name': 'Batch 2023-A', 'category': 'Laptop', 'description': 'Laptop',
     'serial_number': 'SN-100', 'condition_status': 'Working', 'last_checked_at': '2024-05-12T00:00:00Z'},
    {'id': 6, 'dcp_package_id': 1, 'batch_name': 'Batch 2023-A', 'category': 'Projector',
     'description': 'Projector', 'serial_number': 'SN-200', 'condition_status': 'For Repair'},
]


def test_status_filter_matches_delivery_or_installation():
    assert [p['id'] for p in filter_by_status(PACKAGES, 'delivered')] == [1]
    assert [p['id'] for p in filter_by_status(PACKAGES, 'on hold')] == [3]
    assert len(filter_by_status(PACKAGES, 'all')) == 3


def test_package_stats_counts_blank_delivery_as_pending():
    assert package_stats(PACKAGES) == {'total': 3, 'delivered': 1, 'in_transit': 1, 'pending': 1}
    assert package_stats([]) == {'total': 0, 'delivered': 0, 'in_transit': 0, 'pending': 0}


def test_documents_lists_only_uploaded_files():
    assert documents(PACKAGES[0]) == [
        ('dr', 'Delivery Receipt', 'DR-001', 'dr-001.pdf'),
        ('iar', 'Inspection and Acceptance Report', 'IAR-9', 'iar-9.pdf'),
    ]
    assert documents(PACKAGES[1]) == []


def test_form_record_trims_dates_for_date_inputs():
    record = form_record(PACKAGES[0])
    assert record['delivery_date'] == '2024-05-10'
    assert record['school_id'] == '3'
    assert form_record(PACKAGES[1])['delivery_date'] == ''


def test_progress_listing_reads_packages_key_and_keeps_backend_order(app, http):
    http.add('GET', '/property-custodian/dcp-packages', {'success': True, 'packages': PACKAGES})
    query = ListQuery.from_args(MultiDict({'q': 'batch'}), filters=('status',), default_sort=None)
    with app.test_request_context():
        listing = DcpPackageProgressService().get_listing(query)
    assert [p['id'] for p in listing['page'].items] == [1, 2, 3]
    assert listing['total'] == 3
    assert listing['stats']['delivered'] == 1


def test_ict_listing_sorts_by_delivery_date(app, http):
    http.add('GET', '/ict/dcp-packages', {'packages': PACKAGES})
    query = ListQuery.from_args(MultiDict({'q': 'rizal'}), filters=('status',), default_sort='delivery_date')
    with app.test_request_context():
        listing = IctDcpPackageService().get_listing(query)
    assert [p['id'] for p in listing['page'].items] == [3, 1]


def test_custodian_package_page_searches_and_links_documents(custodian, http):
    http.add('GET', '/property-custodian/dcp-packages', {'packages': PACKAGES})
    response = custodian.get('/custodian/dcp-packages?q=laptops')
    assert response.status_code == 200
    assert b'Batch 2023-A' in response.data
    assert b'Batch 2024-B' not in response.data
    assert b'/custodian/dcp-packages/1/documents/dr' in response.data
    assert b'/custodian/dcp-packages/1/documents/ptr' not in response.data
    assert b'/custodian/dcp-packages/1/progress' in response.data


def test_custodian_package_page_status_filter(custodian, http):
    http.add('GET', '/property-custodian/dcp-packages', {'packages': PACKAGES})
    response = custodian.get('/custodian/dcp-packages?status=in%20transit')
    assert b'Batch 2024-B' in response.data
    assert b'Batch 2023-A' not in response.data


def test_custodian_package_page_survives_backend_errors(custodian, http):
    http.add('GET', '/property-custodian/dcp-packages', {'message': 'Server error'}, status=500)
    response = custodian.get('/custodian/dcp-packages')
    assert response.status_code == 200
    assert b'Server error' in response.data


def test_progress_update_sends_put(custodian, http):
    http.add('GET', '/property-custodian/dcp-packages', {'packages': PACKAGES})
    http.add('PUT', '/property-custodian/dcp-packages/2', {'success': True})
    response = custodian.post('/custodian/dcp-packages/2/progress', data={
        'delivery_date': '', 'delivery_status': 'Delivered', 'installation_status': 'Ongoing',
        'dr_number': ' DR-002 ', 'remarks': 'Received by the principal',
    })
    assert response.headers['Location'].endswith('/custodian/dcp-packages')
    body = http.called('PUT', '/property-custodian/dcp-packages/2')[0]['json']
    assert body['delivery_status'] == 'Delivered'
    assert body['installation_status'] == 'Ongoing'
    assert body['delivery_date'] is None
    assert body['dr_number'] == 'DR-002'
    assert not http.called('POST', '/property-custodian/dcp-packages')


def test_progress_update_rejects_long_remarks(custodian, http):
    http.add('GET', '/property-custodian/dcp-packages', {'packages': PACKAGES})
    response = custodian.post('/custodian/dcp-packages/2/progress', data={'remarks': 'x' * 1001})
    assert response.status_code == 200
    assert b'Remarks must be 1000 characters or less' in response.data
    assert not http.called('PUT', '/property-custodian/dcp-packages/2')


def test_progress_form_for_unknown_package_is_not_found(custodian, http):
    http.add('GET', '/property-custodian/dcp-packages', {'packages': PACKAGES})
    assert custodian.get('/custodian/dcp-packages/99/progress').status_code == 404


def test_document_download_streams_backend_file(custodian, http):
    http.add('GET', '/dcp-package-file/1/dr', content=b'%PDF-1.4 receipt',
             headers={'Content-Type': 'application/pdf', 'Content-Disposition': 'attachment; filename="dr-001.pdf"'})
    response = custodian.get('/custodian/dcp-packages/1/documents/dr')
    assert response.status_code == 200
    assert response.mimetype == 'application/pdf'
    assert response.data == b'%PDF-1.4 receipt'
    assert 'dr-001.pdf' in response.headers['Content-Disposition']


def test_document_download_failure_returns_to_list(custodian, http):
    response = custodian.get('/custodian/dcp-packages/1/documents/ptr')
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/custodian/dcp-packages')


def test_unknown_document_type_is_not_found(custodian, http):
    assert custodian.get('/custodian/dcp-packages/1/documents/receipt').status_code == 404
    assert http.calls == []


def test_ict_package_page_shows_schools_and_stats(ict, http):
    http.add('GET', '/ict/dcp-packages', {'packages': PACKAGES})
    response = ict.get('/dashboard/ict/dcp-packages')
    assert response.status_code == 200
    assert b'Mabini HS' in response.data
    assert b'In Transit' in response.data
    assert b'/dashboard/ict/dcp-packages/1/documents/iar' in response.data


def test_ict_create_validates_locally(ict, http):
    http.add('GET', '/ict/schools', {'schools': [{'id': 3, 'name': 'Rizal ES'}]})
    response = ict.post('/dashboard/ict/dcp-packages/new', data={
        'school_id': '3', 'batch_name': ' ', 'quantity': '0', 'package_count': '1', 'details': 'Laptops',
    })
    assert response.status_code == 200
    assert b'Batch name is required' in response.data
    assert b'Minimum of 1 item' in response.data
    assert not http.called('POST', '/ict/dcp-packages')


def test_ict_create_sends_numbers(ict, http):
    http.add('GET', '/ict/schools', {'schools': [{'id': 3, 'name': 'Rizal ES'}]})
    http.add('POST', '/ict/dcp-packages', {'success': True, 'package': {'id': 9}}, status=201)
    response = ict.post('/dashboard/ict/dcp-packages/new', data={
        'school_id': '3', 'batch_name': 'Batch 2025-A', 'quantity': '10', 'package_count': '2',
        'details': 'Laptops', 'delivery_status': 'Pending', 'installation_status': 'Not Started',
    })
    assert response.headers['Location'].endswith('/dashboard/ict/dcp-packages')
    body = http.called('POST', '/ict/dcp-packages')[0]['json']
    assert body['school_id'] == 3
    assert body['quantity'] == 10
    assert body['package_count'] == 2
    assert body['delivery_date'] is None


def test_ict_edit_sends_put(ict, http):
    http.add('GET', '/ict/dcp-packages', {'packages': PACKAGES})
    http.add('GET', '/ict/schools', {'schools': [{'id': 3, 'name': 'Rizal ES'}]})
    http.add('PUT', '/ict/dcp-packages/3', {'success': True})
    response = ict.post('/dashboard/ict/dcp-packages/3/edit', data={
        'school_id': '3', 'batch_name': 'Batch 2024-C', 'quantity': '1', 'package_count': '1',
        'details': 'Solar kit', 'delivery_status': 'Delivered',
    })
    assert response.headers['Location'].endswith('/dashboard/ict/dcp-packages')
    assert http.called('PUT', '/ict/dcp-packages/3')[0]['json']['delivery_status'] == 'Delivered'


def test_ict_delete(ict, http):
    http.add('DELETE', '/ict/dcp-packages/2', {'success': True})
    response = ict.post('/dashboard/ict/dcp-packages/2/delete')
    assert response.headers['Location'].endswith('/dashboard/ict/dcp-packages')
    assert http.called('DELETE', '/ict/dcp-packages/2')


def test_custodian_cannot_manage_packages(custodian, http):
    response = custodian.get('/dashboard/ict/dcp-packages')
    assert response.status_code in (302, 403)
    assert not http.called('GET', '/ict/dcp-packages')


def test_dcp_inventory_page_filters_by_condition(custodian, http):
    http.add('GET', '/property-custodian/dcp-inventory', {'items': DCP_ITEMS})
    response = custodian.get('/custodian/dcp-inventory?condition=For%20Repair')
    assert response.status_code == 200
    assert b'SN-200' in response.data
    assert b'SN-100' not in response.data


def test_dcp_inventory_rejects_duplicate_serial(custodian, http):
    http.add('GET', '/property-custodian/dcp-inventory', {'items': DCP_ITEMS})
    response = custodian.post('/custodian/dcp-inventory/new', data={
        'dcp_package_id': '1', 'category': 'Laptop', 'description': 'Laptop', 'manufacturer': 'Acer',
        'model': 'TravelMate', 'serial_number': 'sn-100', 'property_no': 'PN-1', 'unit_value': '35000',
        'quantity': '1', 'personnel_id': '20', 'last_checked_at': '2024-06-01',
    })
    assert response.status_code == 200
    assert b'Serial number already exists' in response.data
    assert not http.called('POST', '/property-custodian/dcp-inventory')


def test_dcp_inventory_create_sends_numbers(custodian, http):
    http.add('GET', '/property-custodian/dcp-inventory', {'items': DCP_ITEMS})
    http.add('POST', '/property-custodian/dcp-inventory', {'success': True}, status=201)
    response = custodian.post('/custodian/dcp-inventory/new', data={
        'dcp_package_id': '1', 'category': 'Laptop', 'description': 'Laptop', 'manufacturer': 'Acer',
        'model': 'TravelMate', 'serial_number': 'SN-300', 'property_no': 'PN-3', 'unit_value': '35000.50',
        'quantity': '2', 'personnel_id': '20', 'last_checked_at': '2024-06-01', 'remarks': '',
    })
    assert response.headers['Location'].endswith('/custodian/dcp-inventory')
    body = http.called('POST', '/property-custodian/dcp-inventory')[0]['json']
    assert body['unit_value'] == 35000.5
    assert body['quantity'] == 2
    assert 'remarks' not in body


def test_sidebar_lists_dcp_pages(custodian, http):
    http.add('GET', '/property-custodian/dcp-packages', {'packages': []})
    response = custodian.get('/custodian/dcp-packages')
    assert b'/custodian/dcp-inventory' in response.data
