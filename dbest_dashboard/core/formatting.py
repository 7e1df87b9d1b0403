"""
Display formatting helpers, registered as Jinja filters
"""
import math
import time
from datetime import datetime

CURRENCY_SYMBOL = '₱'
FILE_SIZE_UNITS = ['Bytes', 'KB', 'MB', 'GB', 'TB']


def parse_datetime(value):
    """Parse an API timestamp; None when missing or unparseable"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in ('%Y-%m-%d %H:%M:%S', '%Y-%m-%d', '%Y-%m-%dT%H:%M:%S.%f%z'):
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _to_number(value):
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def format_currency(value):
    return f'{CURRENCY_SYMBOL}{_to_number(value):,.2f}'


def format_number(value):
    number = _to_number(value)
    return f'{int(number):,}' if number.is_integer() else f'{number:,.2f}'


def format_file_size(size):
    """1024-based size with at most two decimals, e.g. '1.5 MB'"""
    size = _to_number(size)
    if size <= 0:
        return '0 Bytes'
    index = min(int(math.floor(math.log(size, 1024))), len(FILE_SIZE_UNITS) - 1)
    scaled = f'{size / (1024 ** index):.2f}'.rstrip('0').rstrip('.')
    return f'{scaled} {FILE_SIZE_UNITS[index]}'


def format_relative_time(value, now=None):
    if not value:
        return 'N/A'
    parsed = parse_datetime(value)
    if parsed is None:
        return value

    now = time.time() if now is None else now
    minutes = int((now - parsed.timestamp()) // 60)
    if minutes < 1:
        return 'Just now'
    if minutes < 60:
        return f"{minutes} min{'' if minutes == 1 else 's'} ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hour{'' if hours == 1 else 's'} ago"
    days = hours // 24
    return f"{days} day{'' if days == 1 else 's'} ago"


def format_date(value, fmt='%b %d, %Y'):
    parsed = parse_datetime(value)
    if parsed is None:
        return value or 'N/A'
    return parsed.strftime(fmt)


def format_datetime(value, fmt='%b %d, %Y %I:%M %p'):
    return format_date(value, fmt)


def full_name(record):
    record = record or {}
    if record.get('full_name'):
        return record['full_name']
    return ' '.join(part for part in (record.get('first_name'), record.get('last_name')) if part) or 'N/A'


def register_filters(app):
    app.jinja_env.filters.update({
        'currency': format_currency,
        'number': format_number,
        'filesize': format_file_size,
        'relative_time': format_relative_time,
        'date': format_date,
        'datetime': format_datetime,
        'full_name': full_name,
    })
