"""HTTP store backend: talks to a remote instance of the events API."""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..errors import LoadFailure, NotFoundError, ValidationError
from ..models.event import Event
from ..models.registration import Registration, normalize_event_ref
from .base import EventStore, RegistrationStore, StoreBackend

logger = logging.getLogger(__name__)

class EventAPIClient:
    """Thin JSON client for the remote API with a fixed per-call timeout."""

    def __init__(self, base_url: str, timeout: float = 10, api_key: Optional[str] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.api_key = api_key
        self.session = requests.Session()
        if api_key:
            self.session.headers['Authorization'] = f"Bearer {api_key}"

    def request(self, method: str, path: str, kind: str = 'Record', record_id: str = '', **kwargs) -> Any:
        """
        Send a request and return the decoded JSON body.

        Raises:
            NotFoundError: On HTTP 404
            ValidationError: On HTTP 400 or 422
            LoadFailure: On any other failure, including timeouts
        """
        url = f"{self.base_url}/api{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise LoadFailure(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(kind, record_id)
        if response.status_code in (400, 422):
            raise ValidationError(self._error_detail(response))
        try:
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"{method} {url} returned an unusable response: {e}")
            raise LoadFailure(f"Bad response from {url}: {e}") from e

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        try:
            detail = response.json().get('detail')
        except ValueError:
            detail = None
        return str(detail or response.text or f"HTTP {response.status_code}")

    def close(self) -> None:
        self.session.close()

class HttpEventStore(EventStore):
    """Events held by a remote API."""

    def __init__(self, client: EventAPIClient):
        self.client = client

    def list(self) -> List[Event]:
        data = self.client.request('GET', '/events')
        if not isinstance(data, list):
            raise LoadFailure("API response must be a list of events")
        return [_parse(Event, item) for item in data]

    def get(self, event_id: str) -> Event:
        data = self.client.request('GET', f"/events/{event_id}", 'Event', event_id)
        return _parse(Event, data)

    def create(self, fields: Dict[str, Any]) -> Event:
        data = self.client.request('POST', '/events', json=_jsonable(fields))
        return _parse(Event, data)

    def update(self, event_id: str, fields: Dict[str, Any]) -> Event:
        data = self.client.request(
            'PUT', f"/events/{event_id}", 'Event', event_id, json=_jsonable(fields)
        )
        return _parse(Event, data)

    def delete(self, event_id: str) -> bool:
        try:
            data = self.client.request('DELETE', f"/events/{event_id}", 'Event', event_id)
        except NotFoundError:
            return False
        return bool(data.get('deleted')) if isinstance(data, dict) else True

    def close(self) -> None:
        self.client.close()

class HttpRegistrationStore(RegistrationStore):
    """Registrations held by a remote API."""

    def __init__(self, client: EventAPIClient):
        self.client = client

    def list(self) -> List[Registration]:
        return self._fetch()

    def list_by_event(self, event_id: Any) -> List[Registration]:
        target = normalize_event_ref(event_id)
        if target is None:
            return []
        return self._fetch(target)

    def _fetch(self, event_id: Optional[str] = None) -> List[Registration]:
        params = {'event_id': event_id} if event_id else None
        data = self.client.request('GET', '/registrations', params=params)
        if not isinstance(data, list):
            raise LoadFailure("API response must be a list of registrations")
        return [_parse(Registration, item) for item in data]

    def create(self, fields: Dict[str, Any]) -> Registration:
        payload = dict(fields)
        payload['event_id'] = normalize_event_ref(payload.get('event_id'))
        data = self.client.request('POST', '/registrations', json=_jsonable(payload))
        return _parse(Registration, data)

    def delete(self, registration_id: str) -> bool:
        try:
            data = self.client.request(
                'DELETE', f"/registrations/{registration_id}", 'Registration', registration_id
            )
        except NotFoundError:
            return False
        return bool(data.get('deleted')) if isinstance(data, dict) else True

def _parse(model, data: Any):
    if not isinstance(data, dict):
        raise LoadFailure(f"Expected a JSON object for {model.__name__}")
    try:
        return model.from_dict(data)
    except ValueError as e:
        raise LoadFailure(f"Invalid {model.__name__} in API response: {e}") from e

def _jsonable(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Dates and datetimes go over the wire as ISO strings."""
    return {
        key: value.isoformat() if hasattr(value, 'isoformat') else value
        for key, value in fields.items()
    }

def create_http_backend(base_url: str, timeout: float = 10, api_key: Optional[str] = None) -> StoreBackend:
    client = EventAPIClient(base_url, timeout=timeout, api_key=api_key)
    return StoreBackend(
        events=HttpEventStore(client),
        registrations=HttpRegistrationStore(client),
        name='http',
    )
