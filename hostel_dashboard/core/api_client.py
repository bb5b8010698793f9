"""
REST client for the hostel backend API

Every dashboard component talks to the backend through HostelApiClient.
It attaches the bearer token, applies the configured timeout and turns
transport and HTTP failures into ApiError / UnauthorizedError.
"""
import logging

import requests

from .exceptions import ApiError, UnauthorizedError

logger = logging.getLogger(__name__)


class HostelApiClient:
    """Thin wrapper around a requests session bound to one backend and token"""

    def __init__(self, base_url, token=None, timeout=10, session=None):
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self):
        headers = {'Content-Type': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    def request(self, method, path, params=None, json=None, default_error=None):
        """Send a request and return the decoded JSON body

        Raises:
            UnauthorizedError: backend answered 401
            ApiError: connection failure, other non-2xx status or invalid JSON
        """
        url = f'{self.base_url}{path}'
        default_error = default_error or f'Request to {path} failed'
        logger.debug(f'{method} {url} params={params}')

        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(),
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f'{method} {path} failed: {e}')
            raise ApiError(f'{default_error}: backend unreachable') from e

        if response.status_code == 401:
            logger.warning(f'{method} {path} returned 401')
            raise UnauthorizedError()

        if not response.ok:
            message = self._error_message(response) or f'{default_error} ({response.status_code})'
            logger.error(f'{method} {path} returned {response.status_code}: {message}')
            raise ApiError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            logger.error(f'{method} {path} returned invalid JSON')
            raise ApiError('Invalid response from server') from e

    @staticmethod
    def _error_message(response):
        """Pull the backend's `message` field out of an error body, if any"""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get('message') or body.get('error')
        return None

    def get(self, path, params=None, default_error=None):
        return self.request('GET', path, params=params, default_error=default_error)

    def post(self, path, json=None, default_error=None):
        return self.request('POST', path, json=json, default_error=default_error)

    def put(self, path, json=None, default_error=None):
        return self.request('PUT', path, json=json, default_error=default_error)

    def patch(self, path, json=None, default_error=None):
        return self.request('PATCH', path, json=json, default_error=default_error)

    def delete(self, path, default_error=None):
        return self.request('DELETE', path, default_error=default_error)


def unwrap_list(payload, *keys):
    """Extract a list from a backend envelope

    Accepts a bare list, or a dict carrying the list under `data` or one of
    the extra `keys`. Anything that does not end up as a list is a parse
    failure.
    """
    if isinstance(payload, list):
        return payload

    result = None
    if isinstance(payload, dict):
        for key in ('data',) + keys:
            if payload.get(key) is not None:
                result = payload[key]
                break
        else:
            result = []

    if not isinstance(result, list):
        raise ApiError('Invalid data format received from server')
    return result


def unwrap_data(payload):
    """Return `payload['data']` when the reply uses the success envelope"""
    if isinstance(payload, dict) and 'data' in payload:
        return payload['data']
    return payload


def check_success(payload, default_error):
    """Raise ApiError when a success-envelope reply reports failure"""
    if isinstance(payload, dict) and payload.get('success') is False:
        raise ApiError(payload.get('message') or default_error)
    return payload
