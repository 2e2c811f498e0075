"""okta-bulk: CSV-driven bulk user import and group assignment for Okta tenants.

Two modes share one pipeline: ``import`` creates a user per CSV row, and
``assign`` resolves ``login,group name`` pairs to Okta ids and adds each user
to its group.  Failed rows are printed back in CSV form so they can be fixed
and resubmitted.
"""

__version__ = "0.3.0"
