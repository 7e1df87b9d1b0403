"""
REST API client for the inventory backend

Every call carries the bearer token from the dashboard session. Failures are
raised as ApiRequestError (or AuthenticationError on HTTP 401) with the
message taken from the response body when the backend sends one.
"""
import concurrent.futures
import logging
import re

import requests
from flask import current_app, session

from .errors import AccountDeactivatedError, ApiRequestError, AuthenticationError
from .monitoring import record_request

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = 'Unable to connect to the server. Please try again later.'

_FILENAME_RE = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)


def extract_list(payload, *keys):
    """Pull the record list out of a paginated, bare or wrapped payload

    Named `keys` (e.g. 'packages') are tried before 'data' and 'items'.
    """
    if isinstance(payload, dict):
        for key in keys + ('data', 'items'):
            if isinstance(payload.get(key), list):
                return payload[key]
        return []
    if isinstance(payload, list):
        return payload
    return []


def extract_record(payload, *keys):
    """Unwrap a single record from {'data': {...}} or a named key"""
    if not isinstance(payload, dict):
        return {}
    for key in keys + ('data',):
        if isinstance(payload.get(key), dict):
            return payload[key]
    return payload


class ApiClient:
    """Thin wrapper around requests for the inventory REST API"""

    def __init__(self, base_url, token=None, timeout=10, http=None, max_workers=4):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.http = http or requests
        self.max_workers = max_workers

    def _url(self, endpoint):
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _headers(self, accept='application/json'):
        headers = {
            'Content-Type': 'application/json',
            'Accept': accept,
        }
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    @staticmethod
    def _resource(endpoint):
        """Metrics bucket: role prefix plus resource name"""
        path = endpoint.split('?', 1)[0].strip('/')
        return '/'.join(path.split('/')[:2]) or 'root'

    @staticmethod
    def _decode(response):
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _error_for(response, data, label=None):
        body = data if isinstance(data, dict) else {}
        fallback = f'Failed to fetch {label}' if label else 'Request failed'
        message = body.get('message')
        if not message:
            message = fallback if data is not None else f'{fallback} ({response.status_code})'

        if response.status_code == 401:
            return AuthenticationError(body.get('message'), payload=body)
        if response.status_code == 423 and body.get('deactivation'):
            return AccountDeactivatedError(message, deactivation=body['deactivation'], payload=body)
        return ApiRequestError(message, status_code=response.status_code,
                               errors=body.get('errors'), payload=body)

    def _send(self, method, endpoint, json=None, params=None, label=None, accept='application/json'):
        resource = self._resource(endpoint)
        try:
            response = self.http.request(
                method,
                self._url(endpoint),
                headers=self._headers(accept),
                json=json,
                params=params,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            record_request(resource, failed=True)
            logger.error(f'{method} {endpoint} failed: {e}')
            raise ApiRequestError(CONNECTION_ERROR_MESSAGE) from e

        record_request(resource, response.status_code, failed=not response.ok)
        if not response.ok:
            error = self._error_for(response, self._decode(response), label)
            logger.warning(f'{method} {endpoint} -> HTTP {response.status_code}: {error.message}')
            raise error
        return response

    def request(self, method, endpoint, json=None, params=None, label=None):
        """Send a request and return (decoded body, response)"""
        response = self._send(method, endpoint, json=json, params=params, label=label)
        return self._decode(response), response

    def get(self, endpoint, params=None, label=None):
        return self.request('GET', endpoint, params=params, label=label)

    def post(self, endpoint, body=None, label=None):
        return self.request('POST', endpoint, json=body, label=label)

    def put(self, endpoint, body=None, label=None):
        return self.request('PUT', endpoint, json=body, label=label)

    def patch(self, endpoint, body=None, label=None):
        return self.request('PATCH', endpoint, json=body, label=label)

    def delete(self, endpoint, label=None):
        return self.request('DELETE', endpoint, label=label)

    def download(self, endpoint, default_filename='download'):
        """Fetch a binary payload: (content, filename, content_type)"""
        response = self._send('GET', endpoint, accept='*/*', label='download')
        disposition = response.headers.get('Content-Disposition', '')
        match = _FILENAME_RE.search(disposition)
        filename = match.group(1) if match else default_filename
        content_type = response.headers.get('Content-Type', 'application/octet-stream')
        return response.content, filename, content_type

    def fetch_list(self, endpoint, label=None, params=None, keys=()):
        data, _ = self.get(endpoint, params=params, label=label)
        return extract_list(data, *keys)

    def fetch_all_pages(self, endpoint, per_page=100, label=None):
        """Walk a Laravel-style paginated listing until last_page"""
        items = []
        page = 1
        while True:
            data, _ = self.get(endpoint, params={'per_page': per_page, 'page': page}, label=label)
            if not isinstance(data, dict) or not isinstance(data.get('data'), list):
                break
            items.extend(data['data'])
            if page >= int(data.get('last_page') or 1):
                break
            page += 1
        return items

    def fetch_many(self, calls):
        """Run several GETs in parallel

        `calls` maps a key to (endpoint, label) or (endpoint, label, params).
        All requests complete before returning; the first failure is raised
        afterwards, an authentication failure taking precedence.
        """
        results = {}
        errors = []

        def _fetch(spec):
            endpoint, label = spec[0], spec[1]
            params = spec[2] if len(spec) > 2 else None
            data, _ = self.get(endpoint, params=params, label=label)
            return data

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_key = {executor.submit(_fetch, spec): key for key, spec in calls.items()}
            for future in concurrent.futures.as_completed(future_to_key):
                key = future_to_key[future]
                try:
                    results[key] = future.result()
                except ApiRequestError as e:
                    errors.append(e)

        if errors:
            auth_errors = [e for e in errors if isinstance(e, AuthenticationError)]
            raise (auth_errors or errors)[0]
        return results


def get_api_client(authenticated=True):
    """Build a client for the current request from app config and session"""
    config = current_app.config
    return ApiClient(
        config['API_BASE_URL'],
        token=session.get('access_token') if authenticated else None,
        timeout=config['REQUEST_TIMEOUT'],
        http=current_app.extensions.get('dbest_http'),
        max_workers=config['MAX_PARALLEL_REQUESTS'],
    )
