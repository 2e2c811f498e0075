"""CLI interface for okta-bulk using Click."""

import logging
import sys
from typing import Optional

import click

from . import __version__
from .config import ACTIONS, DEFAULT_TIMEOUT, BulkConfig, validate_config
from .workflow.runner import run_assign, run_import

# Marks the handler installed by setup_logging so repeat calls replace it
_HANDLER_NAME = "okta-bulk-console"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send okta_bulk trace lines to stdout, plain text, when ``verbose`` is set.

    Without ``verbose`` only warnings and errors get through.
    """
    logger = logging.getLogger("okta_bulk")
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    return logger


def _print_error(message: str):
    click.echo(click.style(message, fg="red"))


EPILOG = """\b
Assign mode only adds users to groups of type OKTA_GROUP; groups mastered in
Active Directory or another directory cannot be changed this way.

\b
The assign csv has no header: user login in the first column and group name
in the second, one assignment per line:

\b
  user@domain.dev,group1
  otheruser@domain.dev,"group two"
  admin@domain.dev,group1

\b
The import csv starts with a header row naming profile attributes (login is
required); every following row is one user:

\b
  login,email,firstName,lastName
  user@domain.dev,user@domain.dev,Ada,Lovelace
"""


@click.command(epilog=EPILOG)
@click.argument("action", type=click.Choice(ACTIONS))
@click.option("-k", "--key", "api_key", envvar="OKTA_API_TOKEN",
              help="The API key for your Okta tenant.  It needs read and write access to groups and users.")
@click.option("-t", "--tenant", envvar="OKTA_TENANT",
              help="The domain of your Okta tenant, e.g. mytenant.okta.com")
@click.option("-i", "--import", "import_path", type=click.Path(dir_okay=False),
              help="Path to the csv file of users (import) or of user/group pairs (assign).")
@click.option("-v", "--verbose", is_flag=True, help="Print every lookup and write as it happens.")
@click.option("--activate/--no-activate", default=True, show_default=True,
              help="Import only: create users as ACTIVE.")
@click.option("--timeout", type=int, default=DEFAULT_TIMEOUT, show_default=True,
              help="Per-request timeout in seconds.")
@click.version_option(version=__version__)
def main(
    action: str,
    api_key: Optional[str],
    tenant: Optional[str],
    import_path: Optional[str],
    verbose: bool,
    activate: bool,
    timeout: int,
):
    """Bulk import users into Okta, or bulk assign existing users to groups.

    ACTION is either "import" or "assign".

    Examples:

    \b
      okta-bulk import -k $OKTA_API_TOKEN -t mytenant.okta.com -i users.csv
      okta-bulk assign -k $OKTA_API_TOKEN -t mytenant.okta.com -i groups.csv -v
    """
    setup_logging(verbose)

    config = BulkConfig(
        action,
        api_key=api_key,
        tenant=tenant,
        import_path=import_path,
        verbose=verbose,
        activate=activate,
        timeout=timeout,
    )
    errors = validate_config(config)
    if errors:
        for error in errors:
            _print_error(error.message)
        sys.exit(1)

    if action == "import":
        sys.exit(run_import(config))
    sys.exit(run_assign(config))


if __name__ == "__main__":
    main()
