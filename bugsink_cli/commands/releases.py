"""Release commands. Releases can be created but not updated or deleted."""

from ..errors import ValidationError
from ..utils.payload import parse_json_arg


class ReleaseCommands:
    """Commands for listing and creating releases."""

    def __init__(self, client):
        self.client = client

    def list(self, project_id: int = None):
        project_id = self.client.config.require_project_id(project_id)
        return self.client.releases_list(project_id=project_id)

    def get(self, uuid: str) -> dict:
        return self.client.release_get(uuid)

    def create(self, payload: str) -> dict:
        """Create a release from a JSON payload.

        Payload: {"project": 8, "version": "v1.2.3",
                  "timestamp": "2026-02-03T12:00:00Z"}  (timestamp optional)
        """
        data = parse_json_arg(payload)
        if not (data.get('project') and data.get('version')):
            raise ValidationError('Project and version required in JSON')
        return self.client.release_create(
            project_id=data['project'],
            version=data['version'],
            timestamp=data.get('timestamp'),
        )
