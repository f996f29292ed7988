"""Configuration for BugSink CLI.

Constants, plus the resolver that works out the API host, API key and
active project ID from the environment and the per-directory dotfile.

Project ID precedence:

    1. BUGSINK_PROJECT_ID, when it parses as a positive integer
    2. .bugsink in the working directory, a single ``PROJECT_ID=<n>`` line
    3. not set
"""

import os
import re

from .errors import ConfigError, ValidationError

# API endpoints
DEFAULT_HOST = "https://bugs.kopernici.cz"
API_PREFIX = "/api/canonical/0"

# Environment
API_KEY_ENV = "BUGSINK_API_KEY"
HOST_ENV = "BUGSINK_HOST"
PROJECT_ID_ENV = "BUGSINK_PROJECT_ID"

# Per-directory project file
DOTFILE = ".bugsink"
DOTFILE_PATTERN = re.compile(r"PROJECT_ID=(\d+)")

# HTTP configuration
REQUEST_TIMEOUT = 30
DEFAULT_PAGE_LIMIT = 250


def _parse_positive_int(value):
    """Return value as a positive int, or None if it isn't one."""
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


class Config:
    """Resolved CLI configuration.

    Build it with ``Config.resolve()``. The API key is not checked until
    ``validate()`` is called, so ``config show`` can report a missing key.
    """

    def __init__(self, api_key=None, host=DEFAULT_HOST, project_id=None,
                 project_id_source=None, environ=None, cwd=None):
        self.api_key = api_key
        self.host = host.rstrip('/')
        self.project_id = project_id
        self.project_id_source = project_id_source
        self._environ = os.environ if environ is None else environ
        self._cwd = cwd

    @classmethod
    def resolve(cls, environ=None, cwd=None) -> "Config":
        """Resolve configuration from the environment and the dotfile.

        Args:
            environ: Mapping to read variables from (default: os.environ)
            cwd: Directory holding the dotfile (default: current directory)
        """
        environ = os.environ if environ is None else environ

        config = cls(
            api_key=environ.get(API_KEY_ENV),
            host=environ.get(HOST_ENV) or DEFAULT_HOST,
            environ=environ,
            cwd=cwd,
        )

        project_id = _parse_positive_int(environ.get(PROJECT_ID_ENV))
        if project_id is not None:
            config.project_id, config.project_id_source = project_id, 'env'
        else:
            project_id = config._read_dotfile()
            if project_id is not None:
                config.project_id, config.project_id_source = project_id, 'file'

        return config

    @property
    def dotfile_path(self) -> str:
        return os.path.join(self._cwd or os.getcwd(), DOTFILE)

    def _read_dotfile(self):
        """Read the project ID from the dotfile, if it holds exactly one."""
        if not os.path.isfile(self.dotfile_path):
            return None
        try:
            with open(self.dotfile_path) as f:
                content = f.read().strip()
        except (IOError, UnicodeDecodeError):
            return None
        match = DOTFILE_PATTERN.fullmatch(content)
        return _parse_positive_int(match.group(1)) if match else None

    def _env_project_id_set(self) -> bool:
        return bool(self._environ.get(PROJECT_ID_ENV))

    def set_project_id(self, project_id: int) -> bool:
        """Set the active project ID.

        Writes the dotfile unless BUGSINK_PROJECT_ID is set; the
        environment wins on the next run, so only memory changes then.

        Returns:
            True if the dotfile was written

        Raises:
            ValidationError: If project_id is not a positive integer
        """
        value = _parse_positive_int(project_id)
        if value is None:
            raise ValidationError(
                f"Project ID must be a positive integer, got {project_id!r}",
                field='project_id',
            )

        if not self._env_project_id_set():
            with open(self.dotfile_path, 'w') as f:
                f.write(f"PROJECT_ID={value}\n")
            self.project_id, self.project_id_source = value, 'file'
            return True

        self.project_id, self.project_id_source = value, None
        return False

    def has_project_id(self) -> bool:
        return self.project_id is not None

    def require_project_id(self, override=None) -> int:
        """Return override, else the configured project ID.

        Raises:
            ValidationError: If override is not a positive integer, or
                neither is available
        """
        if override is not None:
            value = _parse_positive_int(override)
            if value is None:
                raise ValidationError(
                    f"Project ID must be a positive integer, got {override!r}",
                    field='project_id',
                )
            return value

        project_id = self.project_id
        if project_id is None:
            raise ValidationError(
                'Project ID required (use --project or set via config)',
                field='project_id',
            )
        return project_id

    def is_valid(self) -> bool:
        return bool(self.api_key)

    def validate(self):
        """Raise ConfigError if no API key is configured."""
        if not self.is_valid():
            raise ConfigError()

    def authorization_header(self) -> dict:
        return {'Authorization': f'Bearer {self.api_key}'}

    def masked_api_key(self) -> str:
        if not self.api_key:
            return 'not set'
        return f"{self.api_key[:9]}...{self.api_key[-8:]}"

    def _project_id_display(self) -> str:
        if self.project_id is None:
            return 'not set'
        if self.project_id_source:
            return f"{self.project_id} (from {self.project_id_source})"
        return str(self.project_id)

    def to_dict(self) -> dict:
        """Configuration summary for JSON output (API key masked)."""
        return {
            'host': self.host,
            'api_key': self.masked_api_key(),
            'project_id': self.project_id,
            'project_id_source': self.project_id_source,
        }

    def __str__(self):
        return (
            "BugSink Configuration:\n"
            f"  Host: {self.host}\n"
            f"  API Key: {self.masked_api_key()}\n"
            f"  Project ID: {self._project_id_display()}"
        )
