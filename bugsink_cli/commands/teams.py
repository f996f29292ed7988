"""Team commands."""

from ..errors import ValidationError
from ..utils.payload import parse_json_arg


class TeamCommands:
    """Commands for listing and managing teams."""

    def __init__(self, client):
        self.client = client

    def list(self):
        return self.client.teams_list()

    def get(self, uuid: str) -> dict:
        return self.client.team_get(uuid)

    def create(self, payload: str) -> dict:
        """Create a team from a JSON payload.

        Payload: {"name": "Team Name", "visibility": "hidden"}
        """
        data = parse_json_arg(payload)
        if not data.get('name'):
            raise ValidationError('Name required in JSON', field='name')
        return self.client.team_create(
            name=data['name'],
            visibility=data.get('visibility'),
        )

    def update(self, uuid: str, payload: str) -> dict:
        data = parse_json_arg(payload)
        if not data:
            raise ValidationError('Update data required')
        return self.client.team_update(
            uuid,
            name=data.get('name'),
            visibility=data.get('visibility'),
        )
