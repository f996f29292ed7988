"""HTTP client for the BugSink canonical API."""

import sys
import json

import requests

from ..config import API_PREFIX, DEFAULT_PAGE_LIMIT, REQUEST_TIMEOUT, Config
from ..errors import (
    ClientError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from .response import ListResult, normalize, normalize_single


ERROR_MAP = {
    401: AuthenticationError,
    403: AuthorizationError,
    404: NotFoundError,
    429: RateLimitError,
}

UPDATE_REQUIRED_MESSAGE = 'At least one field must be provided for update'


def _compact(**fields) -> dict:
    """Drop fields the caller left as None (False is kept)."""
    return {key: value for key, value in fields.items() if value is not None}


class BugsinkClient:
    """HTTP client for the BugSink API with bearer token auth.

    The transport is a ``requests.Session``; pass one in to control
    adapters or to substitute a fake in tests.
    """

    def __init__(self, config: Config = None, session: requests.Session = None,
                 verbose: bool = False, timeout: float = REQUEST_TIMEOUT):
        self.config = config or Config.resolve()
        self.config.validate()

        self.verbose = verbose
        self.timeout = timeout
        self.base_url = f"{self.config.host}{API_PREFIX}"
        self.session = self._configure_session(session or requests.Session())

    def _configure_session(self, session: requests.Session) -> requests.Session:
        """Attach auth and content negotiation headers to the session."""
        session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
            **self.config.authorization_header(),
        })
        return session

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        """Send a request and return the response once its status is 2xx.

        Args:
            method: HTTP method (GET, POST, PATCH)
            path: Path below the API prefix, e.g. '/teams/'
            **kwargs: Passed to requests

        Raises:
            ClientError: On transport failure or a non-2xx status
        """
        url = f"{self.base_url}{path}"
        kwargs.setdefault('timeout', self.timeout)

        if self.verbose:
            print(f">> {method} {url}", file=sys.stderr)
            if kwargs.get('params'):
                print(f"   Query: {kwargs['params']}", file=sys.stderr)
            if 'json' in kwargs:
                print(f"   Body: {json.dumps(kwargs['json'])[:200]}", file=sys.stderr)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise ClientError(f"Connection error: {e}") from e

        if self.verbose:
            print(f"<< {response.status_code} {response.reason}", file=sys.stderr)

        self._check_response(response)
        return response

    def _check_response(self, response: requests.Response):
        """Raise the mapped ClientError for any status outside [200, 300)."""
        if 200 <= response.status_code < 300:
            return

        error_class = ERROR_MAP.get(response.status_code, ClientError)

        message = f"HTTP {response.status_code}"
        detail = self._error_detail(response)
        if detail:
            message += f": {detail}"

        raise error_class(message, code=response.status_code, response=response.text)

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        """Pull the error content out of a failed response body."""
        if not response.content:
            return ''
        try:
            body = response.json()
        except ValueError:
            return response.text

        if isinstance(body, dict):
            for key in ('detail', 'error', 'message'):
                if body.get(key):
                    value = body[key]
                    return value if isinstance(value, str) else json.dumps(value)
        if isinstance(body, str):
            return body
        return json.dumps(body) if body else ''

    def _request_json(self, method: str, path: str, **kwargs):
        """Send a request and return the parsed JSON body (None if empty)."""
        response = self._send(method, path, **kwargs)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ClientError(
                f"Invalid JSON response: {e}",
                code=response.status_code,
                response=response.text,
            ) from e

    def _list(self, path: str, params: dict = None) -> ListResult:
        return normalize(self._request_json('GET', path, params=params or {}))

    def _single(self, method: str, path: str, **kwargs) -> dict:
        return normalize_single(self._request_json(method, path, **kwargs))

    # ── Teams ───────────────────────────────────────────────────────

    def teams_list(self) -> ListResult:
        """List all teams visible to the token."""
        return self._list('/teams/')

    def team_get(self, uuid: str) -> dict:
        return self._single('GET', f'/teams/{uuid}/')

    def team_create(self, name: str = None, visibility: str = None) -> dict:
        """Create a team.

        Args:
            name: Team name (required)
            visibility: joinable, discoverable or hidden

        Raises:
            ValidationError: If name is missing
        """
        if not name:
            raise ValidationError('Team name is required', field='name')
        body = _compact(name=name, visibility=visibility)
        return self._single('POST', '/teams/', json=body)

    def team_update(self, uuid: str, name: str = None, visibility: str = None) -> dict:
        """Update a team with only the supplied fields."""
        body = _compact(name=name, visibility=visibility)
        if not body:
            raise ValidationError(UPDATE_REQUIRED_MESSAGE)
        return self._single('PATCH', f'/teams/{uuid}/', json=body)

    # ── Projects ────────────────────────────────────────────────────

    def projects_list(self, team_uuid: str = None) -> ListResult:
        """List projects, optionally filtered by team UUID."""
        params = _compact(team=team_uuid)
        return self._list('/projects/', params)

    def project_get(self, project_id: int) -> dict:
        return self._single('GET', f'/projects/{project_id}/')

    def project_create(self, team_uuid: str = None, name: str = None,
                       visibility: str = None, alert_on_new_issue: bool = None,
                       alert_on_regression: bool = None,
                       alert_on_unmute: bool = None) -> dict:
        """Create a project in a team.

        Args:
            team_uuid: Owning team UUID (required)
            name: Project name (required)
            visibility: joinable, discoverable or team_members
            alert_on_new_issue: Alert flag, sent when not None
            alert_on_regression: Alert flag, sent when not None
            alert_on_unmute: Alert flag, sent when not None

        Raises:
            ValidationError: If team_uuid or name is missing
        """
        if not team_uuid or not name:
            raise ValidationError('Project team and name are required')
        body = _compact(
            team=team_uuid,
            name=name,
            visibility=visibility,
            alert_on_new_issue=alert_on_new_issue,
            alert_on_regression=alert_on_regression,
            alert_on_unmute=alert_on_unmute,
        )
        return self._single('POST', '/projects/', json=body)

    def project_update(self, project_id: int, name: str = None,
                       visibility: str = None, alert_on_new_issue: bool = None,
                       alert_on_regression: bool = None,
                       alert_on_unmute: bool = None) -> dict:
        """Update a project with only the supplied fields."""
        body = _compact(
            name=name,
            visibility=visibility,
            alert_on_new_issue=alert_on_new_issue,
            alert_on_regression=alert_on_regression,
            alert_on_unmute=alert_on_unmute,
        )
        if not body:
            raise ValidationError(UPDATE_REQUIRED_MESSAGE)
        return self._single('PATCH', f'/projects/{project_id}/', json=body)

    # ── Issues (read-only) ──────────────────────────────────────────

    def issues_list(self, project_id: int = None, sort: str = 'last_seen',
                    order: str = 'desc', limit: int = DEFAULT_PAGE_LIMIT,
                    cursor: str = None) -> ListResult:
        """List one page of issues for a project.

        Args:
            project_id: Project ID filter
            sort: last_seen or digest_order
            order: asc or desc
            limit: Page size
            cursor: Continuation token from a previous page

        Returns:
            ListResult; next_cursor is set when more pages exist
        """
        params = _compact(project=project_id, sort=sort, order=order,
                          limit=limit, cursor=cursor)
        return self._list('/issues/', params)

    def issue_get(self, uuid: str) -> dict:
        return self._single('GET', f'/issues/{uuid}/')

    # ── Events (read-only) ──────────────────────────────────────────

    def events_list(self, issue_uuid: str = None, order: str = 'desc',
                    limit: int = DEFAULT_PAGE_LIMIT, cursor: str = None) -> ListResult:
        """List one page of events for an issue."""
        params = _compact(issue=issue_uuid, order=order, limit=limit, cursor=cursor)
        return self._list('/events/', params)

    def event_get(self, uuid: str) -> dict:
        return self._single('GET', f'/events/{uuid}/')

    def event_stacktrace(self, uuid: str) -> str:
        """Get the server-formatted stacktrace for an event as plain text."""
        return self._send('GET', f'/events/{uuid}/stacktrace/').text

    # ── Releases ────────────────────────────────────────────────────

    def releases_list(self, project_id: int = None) -> ListResult:
        params = _compact(project=project_id)
        return self._list('/releases/', params)

    def release_get(self, uuid: str) -> dict:
        return self._single('GET', f'/releases/{uuid}/')

    def release_create(self, project_id: int = None, version: str = None,
                       timestamp: str = None) -> dict:
        """Create a release.

        Args:
            project_id: Project ID (required)
            version: Version string (required)
            timestamp: ISO 8601 release time, server default when omitted

        Raises:
            ValidationError: If project_id or version is missing
        """
        if not project_id or not version:
            raise ValidationError('Release project and version are required')
        body = _compact(project=project_id, version=version, timestamp=timestamp)
        return self._single('POST', '/releases/', json=body)

    # ── Connectivity ────────────────────────────────────────────────

    def test_connection(self) -> bool:
        """Check host and credentials with a teams list call.

        Raises:
            ClientError: Prefixed with 'Connection test failed', keeping
                the underlying status code and body
        """
        try:
            self._send('GET', '/teams/')
        except ClientError as e:
            raise ClientError(
                f"Connection test failed: {e.message}",
                code=e.code,
                response=e.response,
            ) from e
        return True
