import pytest

from bugsink_cli.commands import (
    EventCommands,
    IssueCommands,
    ProjectCommands,
    ReleaseCommands,
    SettingsCommands,
    TeamCommands,
)
from bugsink_cli.commands.paging import fetch_all_pages
from bugsink_cli.client.response import ListResult
from bugsink_cli.config import Config
from bugsink_cli.errors import ValidationError

from conftest import make_response

NEXT = 'https://test.example.com/api/canonical/0/issues/?cursor={}&project=8'


class TestTeamCommands:

    def test_create_parses_payload(self, client, session):
        session.queue(make_response(201, {"id": "t1"}))

        TeamCommands(client).create('{"name": "Core", "visibility": "joinable"}')

        assert session.calls[0]['json'] == {'name': 'Core', 'visibility': 'joinable'}

    def test_create_requires_name(self, client, session):
        with pytest.raises(ValidationError, match='Name required'):
            TeamCommands(client).create('{"visibility": "hidden"}')
        assert session.calls == []

    def test_malformed_json(self, client, session):
        with pytest.raises(ValidationError, match='Invalid JSON'):
            TeamCommands(client).create('{name: Core}')
        assert session.calls == []

    def test_non_object_json(self, client, session):
        with pytest.raises(ValidationError, match='expected an object'):
            TeamCommands(client).create('["Core"]')

    def test_update_requires_data(self, client, session):
        with pytest.raises(ValidationError, match='Update data required'):
            TeamCommands(client).update('t1', '{}')
        assert session.calls == []

    def test_update_with_only_unknown_fields(self, client, session):
        with pytest.raises(ValidationError, match='At least one field'):
            TeamCommands(client).update('t1', '{"color": "red"}')
        assert session.calls == []


class TestProjectCommands:

    def test_create(self, client, session):
        session.queue(make_response(201, {"id": 9}))

        ProjectCommands(client).create(
            '{"team": "t1", "name": "API", "alert_on_new_issue": true}')

        assert session.calls[0]['json'] == {
            'team': 't1',
            'name': 'API',
            'alert_on_new_issue': True,
        }

    def test_create_requires_team_and_name(self, client, session):
        with pytest.raises(ValidationError, match='Team and name required'):
            ProjectCommands(client).create('{"name": "API"}')
        assert session.calls == []

    def test_update(self, client, session):
        session.queue(make_response(200, {"id": 8}))

        ProjectCommands(client).update(8, '{"alert_on_regression": false}')

        assert session.calls[0]['json'] == {'alert_on_regression': False}

    def test_list_filters_by_team(self, client, session):
        session.queue(make_response(200, {"results": []}))
        ProjectCommands(client).list(team='t1')
        assert session.calls[0]['params'] == {'team': 't1'}


class TestIssueCommands:

    def test_uses_configured_project(self, environ, tmp_path, session):
        from bugsink_cli.client import BugsinkClient

        environ['BUGSINK_PROJECT_ID'] = '8'
        config = Config.resolve(environ=environ, cwd=str(tmp_path))
        client = BugsinkClient(config=config, session=session)
        session.queue(make_response(200, {"results": []}))

        IssueCommands(client).list()

        assert session.calls[0]['params']['project'] == 8

    def test_explicit_project_wins(self, client, session):
        session.queue(make_response(200, {"results": []}))
        IssueCommands(client).list(project_id=3, sort='digest_order', order='asc')
        params = session.calls[0]['params']
        assert params['project'] == 3
        assert params['sort'] == 'digest_order'
        assert params['order'] == 'asc'

    def test_requires_project(self, client, session):
        with pytest.raises(ValidationError, match='Project ID required'):
            IssueCommands(client).list()
        assert session.calls == []

    def test_zero_project_is_rejected(self, environ, tmp_path, session):
        from bugsink_cli.client import BugsinkClient

        environ['BUGSINK_PROJECT_ID'] = '8'
        config = Config.resolve(environ=environ, cwd=str(tmp_path))
        client = BugsinkClient(config=config, session=session)

        with pytest.raises(ValidationError, match='positive integer'):
            IssueCommands(client).list(project_id=0)
        assert session.calls == []

    def test_single_page_keeps_cursor(self, client, session):
        session.queue(make_response(200, {"results": [{"id": 1}], "next": NEXT.format('c2')}))

        result = IssueCommands(client).list(project_id=8)

        assert result.has_more()
        assert len(session.calls) == 1

    def test_fetch_all_follows_cursors(self, client, session):
        session.queue(
            make_response(200, {"results": [{"id": 1}], "next": NEXT.format('c2')}),
            make_response(200, {"results": [{"id": 2}], "next": NEXT.format('c3')}),
            make_response(200, {"results": [{"id": 3}], "next": None}),
        )

        result = IssueCommands(client).list(project_id=8, limit=1, fetch_all=True)

        assert [issue['id'] for issue in result.items] == [1, 2, 3]
        assert not result.has_more()
        assert [call['params'].get('cursor') for call in session.calls] == [None, 'c2', 'c3']
        assert all(call['params']['limit'] == 1 for call in session.calls)


class TestEventCommands:

    def test_list_and_stacktrace(self, client, session):
        session.queue(
            make_response(200, {"results": [{"id": "e1"}]}),
            make_response(200, text='KeyError: x'),
        )
        commands = EventCommands(client)

        assert commands.list('i1').items == [{"id": "e1"}]
        assert commands.stacktrace('e1') == 'KeyError: x'
        assert session.calls[0]['params']['issue'] == 'i1'


class TestReleaseCommands:

    def test_create(self, client, session):
        session.queue(make_response(201, {"id": "r1"}))

        ReleaseCommands(client).create(
            '{"project": 8, "version": "v1.2.3", "timestamp": "2026-02-03T12:00:00Z"}')

        assert session.calls[0]['json'] == {
            'project': 8,
            'version': 'v1.2.3',
            'timestamp': '2026-02-03T12:00:00Z',
        }

    def test_create_requires_project_and_version(self, client, session):
        with pytest.raises(ValidationError, match='Project and version required'):
            ReleaseCommands(client).create('{"version": "v1"}')
        assert session.calls == []

    def test_list_requires_project(self, client, session):
        with pytest.raises(ValidationError):
            ReleaseCommands(client).list()


class TestSettingsCommands:

    def test_set_project_persists(self, tmp_path):
        config = Config.resolve(environ={}, cwd=str(tmp_path))
        result = SettingsCommands(config, client_factory=None).set_project(12)

        assert result == {'project_id': 12, 'persisted': True}
        assert (tmp_path / '.bugsink').read_text() == "PROJECT_ID=12\n"

    def test_set_project_under_env_override(self, tmp_path):
        config = Config.resolve(environ={'BUGSINK_PROJECT_ID': '4'}, cwd=str(tmp_path))
        result = SettingsCommands(config, client_factory=None).set_project(12)

        assert result == {'project_id': 12, 'persisted': False}
        assert not (tmp_path / '.bugsink').exists()

    def test_set_project_with_invalid_env_and_dotfile(self, tmp_path):
        (tmp_path / '.bugsink').write_text("PROJECT_ID=5\n")
        config = Config.resolve(environ={'BUGSINK_PROJECT_ID': 'abc'}, cwd=str(tmp_path))
        result = SettingsCommands(config, client_factory=None).set_project(9)

        assert result == {'project_id': 9, 'persisted': False}
        assert (tmp_path / '.bugsink').read_text() == "PROJECT_ID=5\n"

    def test_test_builds_client_on_demand(self, config, client, session):
        session.queue(make_response(200, []))
        built = []

        def factory(cfg):
            built.append(cfg)
            return client

        assert SettingsCommands(config, factory).test() is True
        assert built == [config]


def test_fetch_all_pages_stops_without_cursor_param():
    first = ListResult(items=[1], next_cursor='https://x.test/issues/?page=2')
    result = fetch_all_pages(lambda cursor=None: pytest.fail('no fetch expected'), first)
    assert result.items == [1]
    assert result.next_cursor is None
