"""The bulk import / assignment pipeline: load, resolve, execute, report.

Entry points: ``okta_bulk.workflow.runner.run_import()`` and
``okta_bulk.workflow.runner.run_assign()``
"""
