"""
GitHub Actions Slack Notifier CLI

Usage:
    actions-notify [OPTIONS] COMMAND [ARGS]...

Commands:
    send      Build the notification and post it to the webhook
    preview   Build the notification and print it as JSON
"""

import json
import logging
import sys
from dataclasses import replace
from typing import Any, Callable, Dict, NoReturn, Optional

import click
import requests
from dotenv import find_dotenv, load_dotenv

from ..config import NotifierConfig
from ..monitoring import capture_exception, init_sentry, set_workflow_context
from ..notifier import WorkflowNotifier
from ..slack.client import DeliveryError
from ..types import EventContext, InvalidStatusError

logger = logging.getLogger(__name__)

SLACK_KEYS = ('webhook_url', 'channel', 'username', 'icon_emoji', 'icon_url')


def setup_logging(verbose: bool, quiet: bool = False):
    """Configure logging to output to stderr, keeping stdout for command output."""
    if quiet:
        level = logging.WARNING
    else:
        level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(message)s',  # Simple format for CLI
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def notification_options(func: Callable) -> Callable:
    """Options shared by send and preview. Each one overrides its env variable."""
    options = [
        click.option('--job-name', help='Job name shown in the message [JOB_NAME]'),
        click.option('--status', help='success, failure or cancelled [JOB_STATUS]'),
        click.option('--mention', help='Mention target, e.g. channel or here [SLACK_MENTION]'),
        click.option('--mention-if', help="'always' or a status to mention on [SLACK_MENTION_IF]"),
        click.option('--commit/--no-commit', default=None, help='Add commit and author fields [NOTIFY_COMMIT]'),
        click.option('--compact/--no-compact', default=None, help='Single-line message [NOTIFY_COMPACT]'),
        click.option('--release/--no-release', default=None, help='Release tag link message [NOTIFY_RELEASE]'),
        click.option('--created-tag', help='Tag name for release mode [CREATED_TAG]'),
        click.option('--token', help='GitHub token for commit lookups [GITHUB_TOKEN]'),
        click.option('--url', 'webhook_url', help='Slack incoming webhook URL [SLACK_WEBHOOK_URL]'),
        click.option('--channel', help='Override channel [SLACK_CHANNEL]'),
        click.option('--username', help='Override bot name [SLACK_USERNAME]'),
        click.option('--icon-emoji', help='Override icon emoji [SLACK_ICON_EMOJI]'),
        click.option('--icon-url', help='Override icon URL [SLACK_ICON_URL]'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_config(overrides: Dict[str, Any]) -> NotifierConfig:
    """Read config from the environment and apply command line overrides."""
    config = NotifierConfig.from_env()

    slack_overrides = {}
    for key in SLACK_KEYS:
        value = overrides.pop(key, None)
        if value is not None:
            slack_overrides[key] = value

    return replace(
        config,
        slack=replace(config.slack, **slack_overrides),
        **{k: v for k, v in overrides.items() if v is not None},
    )


def _fail(message: str, error: Optional[BaseException] = None) -> NoReturn:
    if error is not None:
        capture_exception(error)
    click.echo(click.style(message, fg='red'), err=True)
    raise SystemExit(1)


def _load(overrides: Dict[str, Any]):
    config = build_config(overrides)
    init_sentry(config.sentry)

    try:
        context = EventContext.from_env()
    except (ValueError, OSError) as e:
        _fail(f"Invalid workflow context: {e}", e)

    set_workflow_context(context, job_name=config.job_name)
    return config, context


@click.group()
@click.option('--env-file', type=click.Path(exists=True, dir_okay=False), default=None,
              help='Load environment variables from this .env file')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output (show DEBUG logs)')
@click.option('-q', '--quiet', is_flag=True, help='Quiet mode (only show warnings/errors)')
def cli(env_file, verbose, quiet):
    """Post GitHub Actions job status notifications to Slack."""
    load_dotenv(env_file or find_dotenv(usecwd=True))
    setup_logging(verbose, quiet)


@cli.command()
@notification_options
def send(**overrides):
    """Build the notification and post it to the webhook."""
    config, context = _load(overrides)

    if not config.slack.enabled:
        raise click.UsageError("No webhook URL: pass --url or set SLACK_WEBHOOK_URL")

    notifier = WorkflowNotifier(config, context)

    try:
        notifier.notify()
    except InvalidStatusError as e:
        _fail(f"Error: {e}")
    except DeliveryError as e:
        _fail(str(e))
    except requests.RequestException as e:
        _fail(f"Request failed: {e}")
    except KeyError as e:
        _fail(f"Unexpected GitHub API response, missing {e}")

    click.echo(click.style("Notification sent.", fg='green'))


@cli.command()
@notification_options
def preview(**overrides):
    """Build the notification and print it as JSON without sending it."""
    config, context = _load(overrides)
    notifier = WorkflowNotifier(config, context)

    try:
        payload = notifier.build_payload()
    except InvalidStatusError as e:
        _fail(f"Error: {e}")
    except requests.RequestException as e:
        _fail(f"Request failed: {e}")
    except KeyError as e:
        _fail(f"Unexpected GitHub API response, missing {e}")

    body = {**config.slack.default_args, **payload.to_dict()}
    click.echo(json.dumps(body, indent=2))


if __name__ == '__main__':
    cli()
