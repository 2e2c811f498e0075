"""Applies the writes for both run modes.

Each row is submitted once, in input order.  A failed row is printed with
the API's reason phrase and response body and left marked as failed; it
never stops the remaining rows.
"""

import logging
from typing import Dict, List

from ..http_client import OktaClient
from ..loader import Assignment
from ..payload_factory import activate_param, make_user_payload
from .report import ImportResult, print_failure

logger = logging.getLogger(__name__)


def create_users(
    client: OktaClient,
    profiles: List[Dict[str, str]],
    activate: bool = True,
) -> List[ImportResult]:
    """Create one user per profile and return a result for each, in order."""
    results: List[ImportResult] = []
    params = {"activate": activate_param(activate)}

    for profile in profiles:
        result = ImportResult(profile)
        results.append(result)

        logger.info("Creating %s", result.login)
        resp = client.post("users", make_user_payload(profile), params=params)
        if not resp.ok:
            result.message = f"{resp.status_code} {resp.reason}"
            print_failure(f"Unable to create user {result.login}", resp.reason, resp.body)
            continue

        body = resp.json() or {}
        result.created = True
        result.user_id = body.get("id")
        logger.info("Created %s (%s)", result.login, result.user_id)

    return results


def assign_users(client: OktaClient, records: List[Assignment]) -> int:
    """Add each fully resolved user to its group.

    Records missing either id are skipped and stay unassigned.  Returns the
    number of membership writes attempted.
    """
    attempted = 0
    for a in records:
        if not a.resolved:
            continue

        attempted += 1
        description = f"{a.login} ({a.user_id}) to {a.group_name} ({a.group_id})"
        logger.info("Assigning %s", description)
        resp = client.put(f"groups/{a.group_id}/users/{a.user_id}")
        if not resp.ok:
            print_failure(f"Unable to assign {description}", resp.reason, resp.body)
            continue

        logger.info("Assignment successful")
        a.assigned = True

    return attempted
