"""Run configuration and upfront validation.

The CLI collects options into a ``BulkConfig`` and calls ``validate_config``
before any file or network access.  Validation returns the full list of
problems instead of prompting, so the workflow can also be driven from code.
"""

from typing import List, Optional

from .errors import ConfigError

ACTIONS = ("import", "assign")

# Seconds to wait for each API call before giving up
DEFAULT_TIMEOUT = 30


class BulkConfig:
    """Options for a single okta-bulk run.

    Args:
        action:       ``"import"`` or ``"assign"``.
        api_key:      Okta API token (sent as ``Authorization: SSWS <key>``).
        tenant:       Tenant domain, e.g. ``mytenant.okta.com``.  A value that
                      already carries a scheme is used as the origin as is.
        import_path:  Path to the CSV input file.
        verbose:      Print per-lookup and per-write trace lines.
        activate:     Import only: create users in the ACTIVE state.
        timeout:      Per-request timeout in seconds.
    """

    def __init__(
        self,
        action: str,
        api_key: Optional[str] = None,
        tenant: Optional[str] = None,
        import_path: Optional[str] = None,
        verbose: bool = False,
        activate: bool = True,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.action = action
        self.api_key = api_key
        self.tenant = tenant
        self.import_path = import_path
        self.verbose = verbose
        self.activate = activate
        self.timeout = timeout

    @property
    def base_url(self) -> str:
        """The ``/api/v1/`` root for the configured tenant."""
        return tenant_base_url(self.tenant or "")


def tenant_base_url(tenant: str) -> str:
    """Build the API root URL for a tenant domain.

    ``mytenant.okta.com`` -> ``https://mytenant.okta.com/api/v1/``
    """
    origin = tenant.strip().rstrip("/")
    if "://" not in origin:
        origin = f"https://{origin}"
    return f"{origin}/api/v1/"


def validate_config(config: BulkConfig) -> List[ConfigError]:
    """Check a configuration for missing or invalid values.

    Returns an empty list when the configuration is usable.
    """
    errors: List[ConfigError] = []
    if config.action not in ACTIONS:
        errors.append(ConfigError(
            "action", f"Unknown action {config.action!r}.  Expected one of: {', '.join(ACTIONS)}."
        ))
    if not config.api_key:
        errors.append(ConfigError("api_key", "The API key is required.  See help for details."))
    if not config.tenant:
        errors.append(ConfigError("tenant", "The tenant url is required.  See help for details."))
    if not config.import_path:
        errors.append(ConfigError(
            "import_path", "The path to the csv file is required.  See help for details."
        ))
    if config.timeout is not None and config.timeout <= 0:
        errors.append(ConfigError("timeout", "The timeout must be a positive number of seconds."))
    return errors
