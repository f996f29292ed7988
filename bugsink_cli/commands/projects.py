"""Project commands."""

from ..errors import ValidationError
from ..utils.payload import parse_json_arg

PROJECT_FIELDS = (
    'visibility',
    'alert_on_new_issue',
    'alert_on_regression',
    'alert_on_unmute',
)


class ProjectCommands:
    """Commands for listing and managing projects."""

    def __init__(self, client):
        self.client = client

    def list(self, team: str = None):
        """List projects, optionally only those of one team."""
        return self.client.projects_list(team_uuid=team)

    def get(self, project_id: int) -> dict:
        return self.client.project_get(project_id)

    def create(self, payload: str) -> dict:
        """Create a project from a JSON payload.

        Payload:
            {"team": "<team-uuid>", "name": "Project Name",
             "visibility": "team_members", "alert_on_new_issue": true,
             "alert_on_regression": true, "alert_on_unmute": false}
        """
        data = parse_json_arg(payload)
        if not (data.get('team') and data.get('name')):
            raise ValidationError('Team and name required in JSON')
        return self.client.project_create(
            team_uuid=data['team'],
            name=data['name'],
            **{key: data.get(key) for key in PROJECT_FIELDS},
        )

    def update(self, project_id: int, payload: str) -> dict:
        """Update a project; every payload field is optional."""
        data = parse_json_arg(payload)
        if not data:
            raise ValidationError('Update data required')
        return self.client.project_update(
            project_id,
            name=data.get('name'),
            **{key: data.get(key) for key in PROJECT_FIELDS},
        )
