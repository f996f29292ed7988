"""Configuration commands - show, set-project, test."""


class SettingsCommands:
    """Commands for inspecting and changing local configuration.

    ``show`` and ``set_project`` work without an API key; ``test`` needs
    a client, so one is only built on demand.
    """

    def __init__(self, config, client_factory):
        self.config = config
        self.client_factory = client_factory

    def show(self):
        return self.config

    def set_project(self, project_id: int) -> dict:
        """Persist the default project ID for this directory.

        Returns:
            Dict with 'project_id' and 'persisted' (False when
            BUGSINK_PROJECT_ID overrides the dotfile)
        """
        persisted = self.config.set_project_id(project_id)
        return {'project_id': self.config.project_id, 'persisted': persisted}

    def test(self) -> bool:
        client = self.client_factory(self.config)
        return client.test_connection()
