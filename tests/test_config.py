"""Tests for run configuration and upfront validation."""

from okta_bulk.config import BulkConfig, tenant_base_url, validate_config


def _fields(errors):
    return [e.field for e in errors]


def test_complete_config_is_valid():
    config = BulkConfig("assign", api_key="k", tenant="t.okta.com", import_path="a.csv")
    assert validate_config(config) == []


def test_every_missing_value_is_reported():
    errors = validate_config(BulkConfig("import"))
    assert _fields(errors) == ["api_key", "tenant", "import_path"]
    assert errors[0].message == "The API key is required.  See help for details."
    assert str(errors[1]) == "The tenant url is required.  See help for details."


def test_empty_strings_count_as_missing():
    errors = validate_config(BulkConfig("assign", api_key="", tenant="", import_path=""))
    assert len(errors) == 3


def test_unknown_action():
    config = BulkConfig("delete", api_key="k", tenant="t", import_path="a.csv")
    assert _fields(validate_config(config)) == ["action"]


def test_non_positive_timeout():
    config = BulkConfig("assign", api_key="k", tenant="t", import_path="a.csv", timeout=0)
    assert _fields(validate_config(config)) == ["timeout"]


def test_tenant_base_url():
    assert tenant_base_url("mytenant.okta.com") == "https://mytenant.okta.com/api/v1/"
    assert tenant_base_url("mytenant.okta.com/") == "https://mytenant.okta.com/api/v1/"


def test_tenant_with_scheme_is_kept():
    assert tenant_base_url("http://127.0.0.1:8080") == "http://127.0.0.1:8080/api/v1/"


def test_config_base_url():
    config = BulkConfig("import", tenant="dev-1.oktapreview.com")
    assert config.base_url == "https://dev-1.oktapreview.com/api/v1/"
    assert config.activate is True
