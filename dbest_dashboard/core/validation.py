"""
Form validators

A validator is a callable (value, data) -> message; an empty string means the
value passed. validate() runs each field's validators in order and keeps the
first message per field.
"""
import re

EMAIL_RE = re.compile(r'\S+@\S+\.\S+')
URL_RE = re.compile(r'^https?://\S+')
USERNAME_RE = re.compile(r'^[A-Za-z0-9._-]+$')
STRONG_PASSWORD_RE = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}$')


def _blank(value):
    return value is None or str(value).strip() == ''


def _number(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def required(message='This field is required'):
    def check(value, data):
        return message if _blank(value) else ''
    return check


def email(message='Invalid email format'):
    def check(value, data):
        if _blank(value):
            return ''
        return '' if EMAIL_RE.search(str(value)) else message
    return check


def url(message='Website must start with http:// or https://'):
    def check(value, data):
        if _blank(value):
            return ''
        return '' if URL_RE.match(str(value).strip()) else message
    return check


def phone(message='Contact number must be exactly 11 digits'):
    """Blank, or exactly 11 digits once separators are stripped"""
    def check(value, data):
        digits = re.sub(r'\D', '', str(value or ''))
        if not digits or len(digits) == 11:
            return ''
        return message
    return check


def username(message='Username may only contain letters, numbers, dots, underscores, and hyphens'):
    def check(value, data):
        if _blank(value):
            return ''
        return '' if USERNAME_RE.match(str(value).strip()) else message
    return check


def min_length(length, message=None):
    message = message or f'Must be at least {length} characters'

    def check(value, data):
        if not value:
            return ''
        return message if len(str(value)) < length else ''
    return check


def password(creating=True, length=8, strong=True, required_message='Password is required'):
    """Required only when creating; on edit a blank password keeps the old one"""
    def check(value, data):
        if not value:
            return required_message if creating else ''
        if len(value) < length:
            return f'Password must be at least {length} characters'
        if strong and not STRONG_PASSWORD_RE.match(value):
            return 'Password must include uppercase, lowercase, and a number'
        return ''
    return check


def matches(other_field, message='Passwords do not match', required_message=None):
    def check(value, data):
        if required_message and not value:
            return required_message
        other = data.get(other_field)
        if other and value != other:
            return message
        return ''
    return check


def non_negative(message, required_value=True):
    def check(value, data):
        if _blank(value):
            return message if required_value else ''
        number = _number(value)
        return message if number is None or number < 0 else ''
    return check


def at_least(minimum, message):
    def check(value, data):
        number = _number(value)
        return message if number is None or number < minimum else ''
    return check


def not_greater_than(other_field, message):
    def check(value, data):
        number, limit = _number(value), _number(data.get(other_field))
        if number is None or limit is None:
            return ''
        return message if number > limit else ''
    return check


def unique_among(records, field, message, current_id=None, ignore_case=False):
    """Reject a value already used by another record (the edited one excluded)"""
    def normalise(value):
        text = str(value).strip()
        return text.lower() if ignore_case else text

    def check(value, data):
        if _blank(value):
            return ''
        wanted = normalise(value)
        for record in records:
            existing = record.get(field)
            if existing in (None, ''):
                continue
            if normalise(existing) == wanted and str(record.get('id')) != str(current_id):
                return message(record) if callable(message) else message
        return ''
    return check


def max_length(length, message=None):
    message = message or f'Must be {length} characters or less'

    def check(value, data):
        return message if value and len(str(value)) > length else ''
    return check


def validate(data, validators):
    """Run {field: [validator, ...]} against a form dict -> {field: message}"""
    errors = {}
    for field, checks in validators.items():
        value = data.get(field)
        if isinstance(value, str) and field not in ('password', 'password_confirmation',
                                                    'new_password', 'new_password_confirmation',
                                                    'current_password'):
            value = value.strip()
        for check in checks:
            message = check(value, data)
            if message:
                errors[field] = message
                break
    return errors


def merge_api_errors(exc, errors=None):
    """Fold a backend {'field': ['message', ...]} payload into field errors"""
    merged = dict(errors or {})
    for field, messages in (getattr(exc, 'errors', None) or {}).items():
        if isinstance(messages, (list, tuple)):
            messages = messages[0] if messages else ''
        if messages:
            merged[field] = str(messages)
    return merged
