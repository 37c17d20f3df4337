"""Tests for runtime settings validation and loading."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from northwind_reports.config import AppSettings, SettingsLoadError, config_load_settings


def test_settings_defaults_match_report_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use Northwind report defaults when no overrides are present.

    Returns:
        None: Assertions validate default values.

    Raises:
        AssertionError: Raised when defaults differ.
    """

    monkeypatch.delenv("REPORT_BACKEND", raising=False)
    settings = AppSettings(_env_file=None)

    assert settings.report_backend == "sql"
    assert settings.report_default_year == 1997
    assert settings.segment_group_count == 5
    assert settings.marketing_min_group == 3
    assert settings.top_products_limit == 10
    assert settings.uk_country_code == "uk"
    assert settings.uk_payment_threshold == Decimal("1000")


def test_settings_normalize_backend_country_and_log_level() -> None:
    """Normalize case and whitespace for enumerated string settings.

    Returns:
        None: Assertions validate normalization.

    Raises:
        AssertionError: Raised when values are not normalized.
    """

    settings = AppSettings(
        _env_file=None,
        report_backend=" Memory ",
        uk_country_code=" UK ",
        log_level="debug",
    )

    assert settings.report_backend == "memory"
    assert settings.uk_country_code == "uk"
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [
        {"report_backend": "duckdb"},
        {"database_url": "   "},
        {"segment_group_count": 4, "marketing_min_group": 5},
        {"top_products_limit": 20, "top_products_max_limit": 10},
        {"log_level": "chatty"},
        {"uk_payment_threshold": Decimal("-1")},
    ],
)
def test_settings_reject_invalid_values(overrides: dict) -> None:
    """Reject values outside supported ranges.

    Args:
        overrides: Invalid setting overrides.

    Returns:
        None: Assertions validate rejection.

    Raises:
        AssertionError: Raised when invalid values are accepted.
    """

    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, **overrides)


def test_config_load_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Read overrides from environment variables.

    Returns:
        None: Assertions validate environment loading.

    Raises:
        AssertionError: Raised when environment values are ignored.
    """

    monkeypatch.setenv("REPORT_BACKEND", "memory")
    monkeypatch.setenv("UK_PAYMENT_THRESHOLD", "2500.50")

    settings = config_load_settings()

    assert settings.report_backend == "memory"
    assert settings.uk_payment_threshold == Decimal("2500.50")


def test_config_load_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Raise SettingsLoadError with guidance when validation fails.

    Returns:
        None: Assertions validate error translation.

    Raises:
        AssertionError: Raised when validation errors escape untranslated.
    """

    monkeypatch.setenv("APPLICATION_PORT", "70000")

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()
