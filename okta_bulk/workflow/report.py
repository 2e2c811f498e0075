"""Console output for a run: stage banners, row failures, and the final report.

Everything is written to stdout with ``click.echo``; styling is dropped
automatically when stdout is not a TTY, so redirected output stays plain.

The final report lists every row that did not succeed in the same shape as
the input file, so it can be pasted into a new CSV and resubmitted.
"""

from typing import Dict, List, Optional

import click

from ..loader import Assignment


class ImportResult:
    """Outcome of one create-user request.

    Attributes:
        profile:  The profile mapping that was submitted.
        created:  True once the API accepted the user.
        user_id:  Okta id of the new user, when created.
        message:  Failure detail (status and reason), empty on success.
    """

    def __init__(
        self,
        profile: Dict[str, str],
        created: bool = False,
        user_id: Optional[str] = None,
        message: str = "",
    ):
        self.profile = profile
        self.created = created
        self.user_id = user_id
        self.message = message

    @property
    def login(self) -> str:
        return self.profile.get("login", "")


def print_stage(title: str):
    """Print a stage banner such as ``Gathering Group Guids...``."""
    click.echo(click.style(title, bold=True))


def print_failure(message: str, reason: Optional[str] = None, body: Optional[str] = None):
    """Print a row-level failure followed by the API's reason phrase and body."""
    click.echo(click.style(message, fg="red"))
    if reason:
        click.echo(reason)
    if body:
        click.echo(body)


def format_assignment_row(assignment: Assignment) -> str:
    """Render an assignment as ``login,"group name"``.

    The group name is always quoted; the login is quoted only when it holds
    a comma, quote or line break.  Embedded quotes are doubled, so the line
    reads back through ``load_assignments`` as the same pair.
    """
    login = assignment.login
    if any(ch in login for ch in ',"\r\n'):
        login = _quote(login)
    return f"{login},{_quote(assignment.group_name)}"


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def print_assignment_report(records: List[Assignment]):
    """Print the assignment count and every unassigned row in input order."""
    assigned = sum(1 for r in records if r.assigned)
    failed = [r for r in records if not r.assigned]

    click.echo(click.style(f"Finished making {assigned} assignments.", bold=True))
    if failed:
        click.echo("The following users were not assigned due to errors:")
        for record in failed:
            click.echo(format_assignment_row(record))


def print_import_report(results: List[ImportResult]):
    """Print the created-user count and the login of every failed row."""
    created = sum(1 for r in results if r.created)
    failed = [r for r in results if not r.created]

    click.echo(click.style(f"Finished creating {created} users.", bold=True))
    if failed:
        click.echo("The following users were not created due to errors:")
        for result in failed:
            click.echo(result.login)
