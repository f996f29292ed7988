"""Main CLI entry point for BugSink CLI.

Handles argument parsing, command routing, and output coordination.
"""

import os
import sys
import argparse
import traceback

from .client import BugsinkClient
from .commands import (
    SettingsCommands, TeamCommands, ProjectCommands,
    IssueCommands, EventCommands, ReleaseCommands,
)
from .config import Config, DEFAULT_HOST, DEFAULT_PAGE_LIMIT
from .errors import BugsinkError
from .formatters import JsonFormatter, HumanFormatter, QuietFormatter
from . import __version__


RESOURCES = ('config', 'teams', 'projects', 'issues', 'events', 'releases')


def _add_paging_arguments(parser):
    parser.add_argument('--order', choices=['asc', 'desc'], default='desc',
                        help='Sort order (default: desc)')
    parser.add_argument('--limit', type=int, default=DEFAULT_PAGE_LIMIT,
                        help=f'Page size (default: {DEFAULT_PAGE_LIMIT})')
    parser.add_argument('--cursor', help='Continue from this page cursor')
    parser.add_argument('--all', dest='fetch_all', action='store_true',
                        help='Follow pagination and return every page')


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for BugSink CLI."""

    parser = argparse.ArgumentParser(
        prog='bugsink',
        description='BugSink CLI - API wrapper for BugSink error tracking',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Environment Variables:
  BUGSINK_API_KEY         API authentication token (required)
  BUGSINK_HOST            API host (default: {DEFAULT_HOST})
  BUGSINK_PROJECT_ID      Default project ID (takes precedence over .bugsink file)

Configuration File:
  .bugsink                Project ID for current directory (ignored if BUGSINK_PROJECT_ID is set)

Examples:
  # Set up configuration
  export BUGSINK_API_KEY="your-token-here"
  bugsink config set-project 8
  bugsink config test

  # Teams and projects
  bugsink teams list --json
  bugsink teams create '{{"name":"My Team","visibility":"hidden"}}'
  bugsink projects list --team <uuid>
  bugsink projects update 8 '{{"alert_on_new_issue":false}}'

  # Latest issues, their events and a stacktrace
  bugsink issues list --project 8 --sort last_seen --order desc
  bugsink events list --issue <uuid> --all --quiet
  bugsink events stacktrace <event-uuid>

  # Releases
  bugsink releases create '{{"project":8,"version":"v1.2.3"}}'

Note: Issues and Events are READ-ONLY via the API.
"""
    )
    parser.add_argument('--version', action='version',
                        version=f'BugSink CLI v{__version__}')
    parser.add_argument('--json', action='store_true', help='Output as JSON')
    parser.add_argument('--quiet', action='store_true', help='Minimal output (IDs only)')
    parser.add_argument('--verbose', action='store_true',
                        help='Show HTTP requests and full error traces')

    subparsers = parser.add_subparsers(dest='resource', help='Resource to manage')

    # ── help ────────────────────────────────────────────────────
    help_parser = subparsers.add_parser('help', help='Show help for a resource')
    help_parser.add_argument('topic', nargs='?', choices=RESOURCES,
                             help='Resource to describe')

    # ── config ──────────────────────────────────────────────────
    config_parser = subparsers.add_parser('config', help='Configuration management')
    config_sub = config_parser.add_subparsers(dest='action')

    config_sub.add_parser('show', help='Show current configuration')
    set_project_parser = config_sub.add_parser(
        'set-project', help='Set default project ID in .bugsink file')
    set_project_parser.add_argument('project_id', type=int, help='Project ID')
    config_sub.add_parser('test', help='Test API connectivity')

    # ── teams ───────────────────────────────────────────────────
    teams_parser = subparsers.add_parser('teams', help='Team operations')
    teams_sub = teams_parser.add_subparsers(dest='action')

    teams_sub.add_parser('list', help='List all teams')
    team_get_parser = teams_sub.add_parser('get', help='Get team details')
    team_get_parser.add_argument('uuid', help='Team UUID')
    team_create_parser = teams_sub.add_parser(
        'create', help='Create new team',
        description='JSON: {"name":"Team Name","visibility":"hidden"} '
                    '(visibility: joinable, discoverable, hidden)')
    team_create_parser.add_argument('payload', help='Team JSON')
    team_update_parser = teams_sub.add_parser(
        'update', help='Update team',
        description='JSON: {"name":"New Name"} (all fields optional)')
    team_update_parser.add_argument('uuid', help='Team UUID')
    team_update_parser.add_argument('payload', help='Fields to change, as JSON')

    # ── projects ────────────────────────────────────────────────
    projects_parser = subparsers.add_parser('projects', help='Project operations')
    projects_sub = projects_parser.add_subparsers(dest='action')

    project_list_parser = projects_sub.add_parser('list', help='List projects')
    project_list_parser.add_argument('--team', help='Filter by team UUID')
    project_get_parser = projects_sub.add_parser('get', help='Get project details')
    project_get_parser.add_argument('project_id', type=int, help='Project ID')
    project_create_parser = projects_sub.add_parser(
        'create', help='Create new project',
        description='JSON: {"team":"<uuid>","name":"Project Name",'
                    '"visibility":"team_members","alert_on_new_issue":true,'
                    '"alert_on_regression":true,"alert_on_unmute":false}')
    project_create_parser.add_argument('payload', help='Project JSON')
    project_update_parser = projects_sub.add_parser(
        'update', help='Update project',
        description='JSON: {"name":"New Name","alert_on_new_issue":false} '
                    '(all fields optional)')
    project_update_parser.add_argument('project_id', type=int, help='Project ID')
    project_update_parser.add_argument('payload', help='Fields to change, as JSON')

    # ── issues ──────────────────────────────────────────────────
    issues_parser = subparsers.add_parser('issues', help='Issue operations (read-only)')
    issues_sub = issues_parser.add_subparsers(dest='action')

    issue_list_parser = issues_sub.add_parser('list', help='List issues for a project')
    issue_list_parser.add_argument('--project', dest='project_id', type=int,
                                   help='Project ID (default: configured project)')
    issue_list_parser.add_argument('--sort', choices=['last_seen', 'digest_order'],
                                   default='last_seen',
                                   help='Sort field (default: last_seen)')
    _add_paging_arguments(issue_list_parser)
    issue_get_parser = issues_sub.add_parser('get', help='Get issue details')
    issue_get_parser.add_argument('uuid', help='Issue UUID')

    # ── events ──────────────────────────────────────────────────
    events_parser = subparsers.add_parser('events', help='Event operations (read-only)')
    events_sub = events_parser.add_subparsers(dest='action')

    event_list_parser = events_sub.add_parser('list', help='List events for an issue')
    event_list_parser.add_argument('--issue', required=True, help='Issue UUID')
    _add_paging_arguments(event_list_parser)
    event_get_parser = events_sub.add_parser('get', help='Get event details')
    event_get_parser.add_argument('uuid', help='Event UUID')
    stacktrace_parser = events_sub.add_parser('stacktrace',
                                              help='Get formatted stacktrace')
    stacktrace_parser.add_argument('uuid', help='Event UUID')

    # ── releases ────────────────────────────────────────────────
    releases_parser = subparsers.add_parser('releases', help='Release operations')
    releases_sub = releases_parser.add_subparsers(dest='action')

    release_list_parser = releases_sub.add_parser('list', help='List releases for a project')
    release_list_parser.add_argument('--project', dest='project_id', type=int,
                                     help='Project ID (default: configured project)')
    release_get_parser = releases_sub.add_parser('get', help='Get release details')
    release_get_parser.add_argument('uuid', help='Release UUID')
    release_create_parser = releases_sub.add_parser(
        'create', help='Create new release',
        description='JSON: {"project":8,"version":"v1.2.3",'
                    '"timestamp":"2026-02-03T12:00:00Z"} (timestamp optional)')
    release_create_parser.add_argument('payload', help='Release JSON')

    return parser


def _select_formatter(args):
    if args.quiet:
        return QuietFormatter()
    if args.json:
        return JsonFormatter()
    return HumanFormatter()


def main(argv=None):
    """Main entry point."""
    # Pre-parse global flags so they work anywhere in the command line
    global_parser = argparse.ArgumentParser(add_help=False)
    global_parser.add_argument('--json', action='store_true')
    global_parser.add_argument('--quiet', action='store_true')
    global_parser.add_argument('--verbose', action='store_true')
    global_args, remaining = global_parser.parse_known_args(argv)

    parser = create_parser()
    args = parser.parse_args(remaining)

    # Merge global flags into args
    args.json = global_args.json
    args.quiet = global_args.quiet
    args.verbose = global_args.verbose or bool(os.environ.get('DEBUG'))

    if not args.resource:
        parser.print_help()
        sys.exit(0)

    if args.resource == 'help':
        if args.topic:
            parser.parse_args([args.topic, '--help'])
        parser.print_help()
        sys.exit(0)

    if not args.action:
        parser.parse_args([args.resource, '--help'])

    formatter = _select_formatter(args)
    # Created/updated records are always shown in full
    mutation_formatter = formatter if args.quiet else JsonFormatter()

    def client_factory(config):
        return BugsinkClient(config=config, verbose=args.verbose)

    try:
        config = Config.resolve()

        # ── config (show/set-project need no API key) ───────────
        if args.resource == 'config':
            cmds = SettingsCommands(config, client_factory)
            if args.action == 'show':
                formatter.output_result(cmds.show())
            elif args.action == 'set-project':
                result = cmds.set_project(args.project_id)
                message = f"Project ID set to {result['project_id']}"
                if not result['persisted']:
                    message += " (BUGSINK_PROJECT_ID is set; .bugsink not written)"
                formatter.output_success(message, **result)
            elif args.action == 'test':
                cmds.test()
                formatter.output_success('API connection successful!', host=config.host)
            sys.exit(0)

        # ── All other commands require a client ─────────────────
        client = client_factory(config)

        if args.resource == 'teams':
            cmds = TeamCommands(client)
            if args.action == 'list':
                formatter.output_result(cmds.list())
            elif args.action == 'get':
                formatter.output_result(cmds.get(args.uuid))
            elif args.action == 'create':
                mutation_formatter.output_result(cmds.create(args.payload))
            elif args.action == 'update':
                mutation_formatter.output_result(cmds.update(args.uuid, args.payload))

        elif args.resource == 'projects':
            cmds = ProjectCommands(client)
            if args.action == 'list':
                formatter.output_result(cmds.list(team=args.team))
            elif args.action == 'get':
                formatter.output_result(cmds.get(args.project_id))
            elif args.action == 'create':
                mutation_formatter.output_result(cmds.create(args.payload))
            elif args.action == 'update':
                mutation_formatter.output_result(
                    cmds.update(args.project_id, args.payload))

        elif args.resource == 'issues':
            cmds = IssueCommands(client)
            if args.action == 'list':
                result = cmds.list(
                    project_id=args.project_id,
                    sort=args.sort,
                    order=args.order,
                    limit=args.limit,
                    cursor=args.cursor,
                    fetch_all=args.fetch_all,
                )
                formatter.output_result(result)
            elif args.action == 'get':
                formatter.output_result(cmds.get(args.uuid))

        elif args.resource == 'events':
            cmds = EventCommands(client)
            if args.action == 'list':
                result = cmds.list(
                    issue_uuid=args.issue,
                    order=args.order,
                    limit=args.limit,
                    cursor=args.cursor,
                    fetch_all=args.fetch_all,
                )
                formatter.output_result(result)
            elif args.action == 'get':
                formatter.output_result(cmds.get(args.uuid))
            elif args.action == 'stacktrace':
                print(cmds.stacktrace(args.uuid))

        elif args.resource == 'releases':
            cmds = ReleaseCommands(client)
            if args.action == 'list':
                formatter.output_result(cmds.list(project_id=args.project_id))
            elif args.action == 'get':
                formatter.output_result(cmds.get(args.uuid))
            elif args.action == 'create':
                mutation_formatter.output_result(cmds.create(args.payload))

    except BugsinkError as e:
        formatter.output_error(e)
        if args.verbose:
            traceback.print_exc()
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        formatter.output_error(e)
        if args.verbose:
            traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
