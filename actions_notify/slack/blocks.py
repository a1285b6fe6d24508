"""
Slack Attachment Builders

Creates the attachment payload for workflow status notifications.
"""

import logging
import re
from typing import List, Optional, Union

from ..api.client import GitHubApiClient, ProductionGitHubApiClient
from ..helpers.mrkdwn import first_line, link
from ..types import (
    Accessory,
    CompactSection,
    EventContext,
    Field,
    FullSection,
    JobStatus,
    Payload,
    ReleaseSection,
    RenderMode,
    Section,
    resolve_accessory,
)

logger = logging.getLogger(__name__)

RELEASE_URL_TEMPLATE = "https://github.com/weseek/growi/releases/tag/{tag}"

_BRANCH_PREFIX = re.compile(r"refs/heads/")


def build_base_fields(context: EventContext) -> List[Field]:
    """
    Build the four context fields: repository, ref, event name, workflow.

    On pull_request events the event name links to the PR and the workflow
    links to the PR checks page; otherwise the workflow links to the
    commit checks page.
    """
    if context.is_pull_request:
        event = link(context.pull_request_url, context.event_name)
    else:
        event = context.event_name

    return [
        Field("repository", link(context.repo_url, context.repo_slug)),
        Field("ref", context.ref),
        Field("event name", event),
        Field("workflow", link(context.checks_url, context.workflow)),
    ]


def resolve_commit_ref(context: EventContext) -> str:
    """Ref to look up: the PR head branch for pull_request events, else the sha."""
    if not context.is_pull_request:
        return context.sha

    if not context.head_ref:
        logger.warning("GITHUB_HEAD_REF not set for pull_request event, using sha")
        return context.sha

    return _BRANCH_PREFIX.sub("", context.head_ref, count=1)


def build_commit_fields(client: GitHubApiClient, context: EventContext) -> List[Field]:
    """
    Fetch the triggering commit and build commit/author fields.

    Args:
        client: GitHub API client
        context: Event context

    Returns:
        The commit field, followed by the author field when the commit is
        linked to a GitHub user
    """
    commit = client.get_commit(context.owner, context.repo, resolve_commit_ref(context))

    fields = [Field("commit", link(commit.html_url, first_line(commit.message)))]

    if commit.has_author:
        fields.append(Field("author", link(commit.author_url, commit.author_login)))
    else:
        logger.debug("Commit %s has no GitHub author, omitting author field", commit.html_url)

    return fields


def build_compact_text(context: EventContext, result: str) -> str:
    """Single-line summary used in compact mode."""
    repo = link(context.repo_url, context.repo_slug)
    workflow = link(context.commit_checks_url, context.workflow)
    return f"[{repo}] {result} by {context.actor} on {context.ref}, check {workflow}"


def build_release_text(created_tag: str) -> str:
    """Release tag page URL used in release mode."""
    return RELEASE_URL_TEMPLATE.format(tag=created_tag)


def should_mention(mention: str, condition: str, status: Union[str, JobStatus]) -> bool:
    """Mention only when a target is set and the condition is 'always' or equals the status."""
    if not mention:
        return False
    return condition == "always" or condition == JobStatus.parse(status).value


def build_summary_text(
    job_name: str,
    accessory: Accessory,
    mention: str,
    mention_condition: str,
    status: Union[str, JobStatus],
) -> str:
    """Compose '<job> <result>', prefixed with '<!mention> ' when required."""
    text = f"{job_name} {accessory.result}"
    if should_mention(mention, mention_condition, status):
        return f"<!{mention}> {text}"
    return text


def build_payload(
    job_name: str,
    status: Union[str, JobStatus],
    mention: str,
    mention_condition: str,
    commit_flag: bool,
    compact_mode: bool,
    release_mode: bool,
    created_tag: str,
    context: EventContext,
    token: Optional[str] = None,
    client: Optional[GitHubApiClient] = None,
) -> Payload:
    """
    Build the notification payload.

    Args:
        job_name: Name shown in the summary text
        status: success, failure or cancelled
        mention: Mention target (e.g. 'channel', 'here'), may be empty
        mention_condition: 'always' or a status value
        commit_flag: Append commit/author fields in full mode
        compact_mode: Render a single summary line
        release_mode: Render a link to the release tag page
        created_tag: Tag name used in release mode
        context: Event context
        token: GitHub token, required for commit fields
        client: GitHub API client (created from token when omitted)

    Returns:
        Payload

    Raises:
        InvalidStatusError: If status is unknown (before any network call)
    """
    job_status = JobStatus.parse(status)
    accessory = resolve_accessory(job_status)
    text = build_summary_text(job_name, accessory, mention, mention_condition, job_status)

    mode = RenderMode.select(compact_mode, release_mode)
    section: Section

    if mode == RenderMode.COMPACT:
        section = CompactSection(build_compact_text(context, accessory.result))
    elif mode == RenderMode.RELEASE:
        section = ReleaseSection(build_release_text(created_tag))
    else:
        fields = build_base_fields(context)

        if commit_flag and token:
            client = client or ProductionGitHubApiClient(token, api_url=context.api_url)
            fields.extend(build_commit_fields(client, context))
        elif commit_flag:
            logger.info("No token provided, skipping commit fields")

        section = FullSection(tuple(fields))

    logger.debug("Built %s payload for %s (%s)", mode.value, job_name, job_status.value)

    return Payload(text=text, color=accessory.color, section=section)
