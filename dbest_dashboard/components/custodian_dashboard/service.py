"""
Property Custodian Dashboard Service
"""
import logging

from ...core.api_client import extract_list, get_api_client
from ...core.formatting import format_number, format_relative_time, full_name, parse_datetime

logger = logging.getLogger(__name__)

ALERT_TONES = (
    ('danger', 'Critical inventory issues detected.'),
    ('warning', 'Some inventory warnings need attention.'),
    ('info', 'Monitoring informational updates.'),
)


def _timestamp(value):
    parsed = parse_datetime(value)
    return parsed.timestamp() if parsed else 0.0


def _int(value):
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def activity_badge(kind, status):
    if kind == 'inventory':
        return 'success' if status in ('SERVICEABLE', 'Working') else 'info'
    if kind == 'assignment':
        return 'primary' if status == 'active' else 'secondary'
    if kind == 'personnel':
        return 'success' if status else 'secondary'
    return 'secondary'


def status_tone(alerts):
    """Worst alert type wins: danger, then warning, then info"""
    kinds = {alert['type'] for alert in alerts}
    for tone, message in ALERT_TONES:
        if tone in kinds:
            return {'tone': tone, 'message': message}
    return {'tone': 'success', 'message': 'Inventory looks healthy.'}


def build_dashboard_data(inventory, assigned_items, personnel, now=None):
    """Aggregate the three custodian collections into dashboard widgets"""
    inventory = inventory if isinstance(inventory, list) else []
    assigned_items = assigned_items if isinstance(assigned_items, list) else []
    personnel = personnel if isinstance(personnel, list) else []

    total_inventory_items = len(inventory)
    total_quantity = sum(_int(item.get('quantity')) for item in inventory)
    total_available = sum(_int(item.get('available_quantity')) for item in inventory)
    total_assigned = len(assigned_items)
    active_assignments = sum(1 for a in assigned_items if a.get('status') == 'active')
    total_personnel = len(personnel)
    active_personnel = sum(1 for p in personnel if p.get('is_active'))
    low_stock_items = sum(
        1 for item in inventory
        if 'available_quantity' in item and _int(item['available_quantity']) == 0
    )
    inactive_personnel = total_personnel - active_personnel

    quick_stats = [
        {
            'label': 'Total Assets',
            'value': format_number(total_inventory_items),
            'trend': f'{format_number(total_quantity)} total quantity',
            'positive': total_inventory_items > 0,
        },
        {
            'label': 'Available Stock',
            'value': format_number(total_available),
            'trend': f'{format_number(total_quantity - total_available)} in use',
            'positive': total_available > 0,
        },
        {
            'label': 'Active Assignments',
            'value': format_number(active_assignments),
            'trend': f'{format_number(total_assigned)} total records',
            'positive': active_assignments > 0,
        },
        {
            'label': 'Personnel Coverage',
            'value': format_number(active_personnel),
            'trend': f'{format_number(total_personnel)} registered',
            'positive': active_personnel > 0,
        },
    ]

    def activity(activity_id, action, entity, date, status, kind):
        return {
            'id': activity_id,
            'action': action,
            'entity': entity,
            'status': status,
            'type': kind,
            'time': format_relative_time(date, now=now),
            'badge': activity_badge(kind, status),
            'timestamp': _timestamp(date),
        }

    activities = []
    newest_inventory = sorted(inventory, key=lambda i: _timestamp(i.get('created_at')), reverse=True)[:3]
    for item in newest_inventory:
        activities.append(activity(
            f"inv-{item.get('id')}", 'Inventory item created',
            item.get('name') or item.get('item_code'), item.get('created_at'),
            item.get('status'), 'inventory',
        ))

    newest_assignments = sorted(assigned_items, key=lambda a: _timestamp(a.get('assigned_date')), reverse=True)[:3]
    for assignment in newest_assignments:
        item_name = (assignment.get('inventory_item') or {}).get('name') or 'Item'
        person_name = (assignment.get('personnel') or {}).get('full_name') or 'Personnel'
        activities.append(activity(
            f"assign-{assignment.get('id')}", 'Item assigned', f'{item_name} → {person_name}',
            assignment.get('assigned_date') or assignment.get('created_at'),
            assignment.get('status'), 'assignment',
        ))

    newest_personnel = sorted(personnel, key=lambda p: _timestamp(p.get('created_at')), reverse=True)[:2]
    for person in newest_personnel:
        activities.append(activity(
            f"person-{person.get('id')}", 'Personnel record created', full_name(person),
            person.get('created_at'), person.get('is_active'), 'personnel',
        ))

    recent_activities = sorted(activities, key=lambda a: a['timestamp'], reverse=True)[:6]
    for entry in recent_activities:
        entry.pop('timestamp')

    priority_tasks = [
        {
            'task': 'Resolve out-of-stock items',
            'priority': 'high' if low_stock_items > 0 else 'low',
            'count': low_stock_items,
        },
        {
            'task': 'Review active assignments',
            'priority': 'medium' if active_assignments > 20 else 'low',
            'count': active_assignments,
        },
        {
            'task': 'Activate personnel records',
            'priority': 'medium' if inactive_personnel > 0 else 'low',
            'count': inactive_personnel,
        },
    ]

    system_metrics = [
        {'parameter': 'Inventory Items', 'value': format_number(total_inventory_items),
         'status': 'optimal' if total_inventory_items > 0 else 'warning'},
        {'parameter': 'In Stock', 'value': format_number(total_available),
         'status': 'good' if total_available > 0 else 'warning'},
        {'parameter': 'Assignments', 'value': format_number(total_assigned),
         'status': 'good' if total_assigned > 0 else 'monitor'},
        {'parameter': 'Personnel', 'value': format_number(total_personnel),
         'status': 'good' if total_personnel > 0 else 'warning'},
    ]

    alerts = []
    if low_stock_items > 0:
        alerts.append({
            'type': 'warning',
            'title': 'Out-of-stock assets',
            'message': f'{low_stock_items} item(s) have zero available quantity.',
        })
    if total_personnel == 0:
        alerts.append({
            'type': 'warning',
            'title': 'No personnel records',
            'message': 'No personnel are registered for asset assignment.',
        })
    if not alerts:
        alerts.append({
            'type': 'success',
            'title': 'Inventory Healthy',
            'message': 'No critical inventory alerts at this time.',
        })

    return {
        'stats': {
            'total_inventory_items': total_inventory_items,
            'total_quantity': total_quantity,
            'total_available_quantity': total_available,
            'total_assigned_items': total_assigned,
            'active_assignments': active_assignments,
            'total_personnel': total_personnel,
            'active_personnel': active_personnel,
            'low_stock_items': low_stock_items,
        },
        'quick_stats': quick_stats,
        'recent_activities': recent_activities,
        'priority_tasks': priority_tasks,
        'system_metrics': system_metrics,
        'alerts': alerts,
        'system_status': status_tone(alerts),
    }


class CustodianDashboardService:
    """Fetches the custodian collections in parallel and aggregates them"""

    QUICK_ACTIONS = [
        ('Inventory', '/custodian/inventory'),
        ('Assigned Items', '/custodian/assigned-items'),
        ('Personnel', '/custodian/personnel'),
        ('Inventory Categories', '/custodian/inventory/categories'),
        ('Reports & Analytics', '/custodian/reports'),
    ]

    def get_dashboard_data(self):
        params = {'per_page': 1000}
        results = get_api_client().fetch_many({
            'inventory': ('/property-custodian/inventory', 'inventory', params),
            'assigned_items': ('/property-custodian/assigned-items', 'assigned items', params),
            'personnel': ('/property-custodian/personnel', 'personnel', params),
        })
        data = build_dashboard_data(
            extract_list(results['inventory']),
            extract_list(results['assigned_items']),
            extract_list(results['personnel']),
        )
        logger.debug(f"Custodian dashboard built from {data['stats']['total_inventory_items']} items")
        return data
