"""
Shared helpers for component routes: list/form page descriptors and the
error-to-flash conventions every page follows
"""
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from flask import abort, flash, redirect, render_template, request, url_for

from .errors import ApiRequestError, AuthenticationError, FormValidationError
from .listing import get_value

logger = logging.getLogger(__name__)


@dataclass
class Column:
    key: str
    label: str
    sortable: bool = True
    render: Optional[Callable] = None
    # Returns (label, url) pairs rendered as links instead of a value
    links: Optional[Callable] = None

    def value(self, item):
        if self.render:
            return self.render(item)
        value = get_value(item, self.key)
        return 'N/A' if value in (None, '') else value


@dataclass
class FilterSpec:
    name: str
    label: str
    options: Sequence = ()


@dataclass
class FormField:
    name: str
    label: str
    type: str = 'text'
    options: Sequence = ()
    required: bool = False
    help: str = ''


@dataclass
class RowAction:
    """Per-row button; POST actions go through a small inline form"""

    label: str
    endpoint: str
    method: str = 'post'
    style: str = 'secondary'
    confirm: str = ''
    when: Optional[Callable] = None
    reason_field: str = ''

    def visible(self, item):
        return self.when is None or bool(self.when(item))


@dataclass
class ListPage:
    title: str
    columns: Sequence[Column]
    page: object
    query: object
    filters: Sequence[FilterSpec] = ()
    actions: Sequence[RowAction] = ()
    create_url: str = ''
    exports: dict = field(default_factory=dict)
    summary: Sequence = ()
    total: int = 0
    subtitle: str = ''


def load_or_flash(loader, fallback=None):
    """Run a backend call; request failures become a flash message

    Authentication failures propagate to the app-level handler, which ends
    the session.
    """
    try:
        return loader()
    except AuthenticationError:
        raise
    except ApiRequestError as e:
        flash(e.message, 'danger')
        return fallback


def load_for_edit(service, record_id, list_endpoint):
    """The record being edited plus the collection it came from

    A failed fetch has already been flashed, so it goes back to the list
    instead of claiming the record does not exist.
    """
    records = load_or_flash(service.list)
    if records is None:
        abort(redirect(url_for(list_endpoint)))
    record = service.find(record_id, records)
    if record is None:
        abort(404)
    return record, records


def run_action(action, success_message, redirect_to):
    """POST handler body: perform, flash the outcome, redirect"""
    try:
        action()
    except AuthenticationError:
        raise
    except ApiRequestError as e:
        flash(e.message, 'danger')
    else:
        flash(success_message, 'success')
    return redirect(redirect_to)


def render_list(list_page, template='listing.html'):
    return render_template(template, view=list_page)


def handle_form(service, fields, title, list_endpoint, record=None, existing=(),
                template='form.html', success_message=None, **context):
    """GET renders the form, POST validates and saves, re-rendering on errors"""
    record_id = record.get('id') if record else None
    values = dict(record or {})
    errors = {}

    if request.method == 'POST':
        values.update(request.form.to_dict())
        # Unchecked boxes are absent from the submitted form
        for f in fields:
            if f.type == 'checkbox':
                values[f.name] = f.name in request.form
        try:
            service.save(request.form, record_id=record_id, existing=existing)
        except FormValidationError as e:
            errors = e.errors
            flash(e.message, 'danger')
        except AuthenticationError:
            raise
        except ApiRequestError as e:
            flash(e.message, 'danger')
        else:
            verb = 'updated' if record_id else 'created'
            flash(success_message or f'{service.label.capitalize()} {verb} successfully', 'success')
            return redirect(url_for(list_endpoint))

    for name in ('password', 'password_confirmation'):
        values.pop(name, None)

    return render_template(template, title=title, fields=fields, values=values, errors=errors,
                           cancel_url=url_for(list_endpoint), **context)
