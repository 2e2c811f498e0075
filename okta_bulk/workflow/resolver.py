"""Resolves group names and user logins to Okta ids.

Every distinct group name and login is looked up exactly once, however many
assignment rows share it, and the id is copied onto all of those rows.  A
failed lookup is reported and the run carries on: rows that depend on it are
simply never assigned.
"""

import logging
import urllib.parse
from collections import OrderedDict
from typing import Dict, List

from ..errors import AmbiguousResultError, HttpError
from ..http_client import OktaClient
from ..loader import Assignment
from .report import print_failure, print_stage

logger = logging.getLogger(__name__)


class ResolutionSummary:
    """Which keys resolved during a run and which did not."""

    def __init__(self):
        self.groups: Dict[str, str] = {}
        self.users: Dict[str, str] = {}
        self.failed_groups: List[str] = []
        self.failed_users: List[str] = []


def _parse_body(resp, name: str, kind: str):
    """Decode a successful response, treating an unreadable body as no match."""
    try:
        return resp.json()
    except ValueError:
        raise AmbiguousResultError(name, 0, resp.body, kind=kind) from None


def _single_id(body, name: str, raw: str, kind: str) -> str:
    """Return ``body["id"]`` or raise ``AmbiguousResultError`` for any other shape."""
    if isinstance(body, list):
        raise AmbiguousResultError(name, len(body), raw, kind=kind)
    if not isinstance(body, dict) or not body.get("id"):
        raise AmbiguousResultError(name, 0, raw, kind=kind)
    return str(body["id"])


def resolve_group(client: OktaClient, name: str) -> str:
    """Return the id of the single group matching ``name``.

    Raises:
        HttpError:            the search request was not successful.
        AmbiguousResultError: the search matched no group or more than one.
    """
    resp = client.get("groups", params={"q": name})
    if not resp.ok:
        raise HttpError(resp)
    matches = _parse_body(resp, name, "group")
    if not isinstance(matches, list) or len(matches) != 1:
        count = len(matches) if isinstance(matches, list) else 0
        raise AmbiguousResultError(name, count, resp.body)
    return _single_id(matches[0], name, resp.body, "group")


def resolve_user(client: OktaClient, login: str) -> str:
    """Return the id of the user whose login is ``login``.

    Raises:
        HttpError:            the lookup was not successful (including 404).
        AmbiguousResultError: the response was not a single user object.
    """
    resp = client.get(f"users/{urllib.parse.quote(login, safe='@')}")
    if not resp.ok:
        raise HttpError(resp)
    return _single_id(_parse_body(resp, login, "user"), login, resp.body, "user")


def _index(records: List[Assignment], attr: str) -> "OrderedDict[str, List[Assignment]]":
    """Group records by an attribute value, keeping first-seen order."""
    index: "OrderedDict[str, List[Assignment]]" = OrderedDict()
    for record in records:
        index.setdefault(getattr(record, attr), []).append(record)
    return index


def _lines(rows: List[Assignment]) -> str:
    """Describe where a set of rows came from, e.g. ``line 3, 7``."""
    lines = [str(r.line) for r in rows if r.line]
    if not lines:
        return f"{len(rows)} row(s)"
    return ("line " if len(lines) == 1 else "lines ") + ", ".join(lines)


def resolve_assignments(client: OktaClient, records: List[Assignment]) -> ResolutionSummary:
    """Fill in ``group_id`` and ``user_id`` on every record that can be resolved.

    Groups are resolved first, then users.  Failures are printed with the
    API's reason phrase and body and recorded in the returned summary.
    """
    summary = ResolutionSummary()

    print_stage("Gathering Group Guids...")
    for name, rows in _index(records, "group_name").items():
        if not name.strip():
            print_failure(f"Missing group name on {_lines(rows)}; skipping lookup")
            summary.failed_groups.append(name)
            continue
        logger.info("Looking up %s", name)
        try:
            group_id = resolve_group(client, name)
        except HttpError as exc:
            print_failure(f"Unable to get group guid for {name}", exc.reason, exc.body)
            summary.failed_groups.append(name)
            continue
        except AmbiguousResultError as exc:
            print_failure(
                f"Got unexpected result while looking up guid for group {name}", body=exc.body
            )
            summary.failed_groups.append(name)
            continue
        logger.info("Found %s", group_id)
        summary.groups[name] = group_id
        for row in rows:
            row.group_id = group_id

    print_stage("Gathering User Guids...")
    for login, rows in _index(records, "login").items():
        if not login.strip():
            print_failure(f"Missing user login on {_lines(rows)}; skipping lookup")
            summary.failed_users.append(login)
            continue
        logger.info("Looking up %s", login)
        try:
            user_id = resolve_user(client, login)
        except HttpError as exc:
            print_failure(f"Unable to get user guid for {login}", exc.reason, exc.body)
            summary.failed_users.append(login)
            continue
        except AmbiguousResultError as exc:
            print_failure(
                f"Got unexpected result while looking up guid for user {login}", body=exc.body
            )
            summary.failed_users.append(login)
            continue
        logger.info("Found %s", user_id)
        summary.users[login] = user_id
        for row in rows:
            row.user_id = user_id

    return summary
