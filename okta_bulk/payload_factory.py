"""Builds request bodies and query strings for the Okta Users API.

Kept separate from the executor so payload shape can be checked without a
server.
"""

from typing import Any, Dict


def make_user_payload(profile: Dict[str, str]) -> Dict[str, Any]:
    """Wrap a profile mapping in the create-user body ``{"profile": {...}}``.

    The profile is copied so later changes to the caller's dict do not leak
    into a payload that has already been built.
    """
    return {"profile": dict(profile)}


def activate_param(activate: bool) -> str:
    """Render the ``activate`` query flag the way the API expects it."""
    return "true" if activate else "false"
