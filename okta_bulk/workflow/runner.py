"""Runs one mode of the pipeline end to end.

``run_assign()`` loads ``login,group`` rows, resolves names and logins to
ids, adds users to groups, and prints the report.  ``run_import()`` loads
profile rows, creates the users, and prints the report.

Row-level failures are reported as they happen and never stop the batch.
Anything else that escapes (an unreadable file, a malformed row, a network
failure) aborts the run with an ``Unexpected Error:`` message instead of a
traceback.

Both functions return an exit code: 0 when the pipeline ran to the end
(even if some rows failed), 1 when the run was aborted.
"""

import logging
from typing import Optional

from ..config import BulkConfig
from ..http_client import OktaClient
from ..loader import load_assignments, load_profiles
from .executor import assign_users, create_users
from .report import print_assignment_report, print_failure, print_import_report, print_stage
from .resolver import resolve_assignments

logger = logging.getLogger(__name__)


def run_assign(config: BulkConfig, client: Optional[OktaClient] = None) -> int:
    """Assign users to groups as listed in ``config.import_path``."""
    owns_client = client is None
    if client is None:
        client = _make_client(config)

    try:
        records = load_assignments(config.import_path)
        logger.info("Loaded %d assignment(s) from %s", len(records), config.import_path)

        summary = resolve_assignments(client, records)
        logger.info(
            "Resolved %d group(s) and %d user(s); %d group(s) and %d user(s) failed",
            len(summary.groups), len(summary.users),
            len(summary.failed_groups), len(summary.failed_users),
        )

        print_stage("Making group assignments...")
        assign_users(client, records)

        print_assignment_report(records)
    except Exception as exc:
        _print_unexpected_error(exc)
        return 1
    finally:
        if owns_client:
            client.close()
    return 0


def run_import(config: BulkConfig, client: Optional[OktaClient] = None) -> int:
    """Create one user per row of ``config.import_path``."""
    owns_client = client is None
    if client is None:
        client = _make_client(config)

    try:
        profiles = load_profiles(config.import_path)
        logger.info("Loaded %d profile(s) from %s", len(profiles), config.import_path)

        print_stage("Creating users...")
        results = create_users(client, profiles, activate=config.activate)

        print_import_report(results)
    except Exception as exc:
        _print_unexpected_error(exc)
        return 1
    finally:
        if owns_client:
            client.close()
    return 0


def _make_client(config: BulkConfig) -> OktaClient:
    return OktaClient(config.base_url, config.api_key or "", timeout=config.timeout)


def _print_unexpected_error(exc: BaseException):
    """Print the abort message, the error, and the error that caused it, if any."""
    logger.debug("Run aborted", exc_info=exc)
    cause = exc.__cause__ or exc.__context__
    print_failure("Unexpected Error:", str(exc) or type(exc).__name__, str(cause) if cause else None)
