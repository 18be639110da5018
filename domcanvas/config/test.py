"""Tests for configuration management."""

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _convert_value,
    get_environment,
    get_environment_info,
    get_reference_resolution,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("DOMCANVAS_REFERENCE_WIDTH", raising=False)
        assert get_environment(EnvVar.REFERENCE_WIDTH) == 1080

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("DOMCANVAS_REFERENCE_WIDTH", "9999")
        assert get_environment(EnvVar.REFERENCE_WIDTH, override=720) == 720

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("DOMCANVAS_REFERENCE_HEIGHT", "1280")
        result = get_environment(EnvVar.REFERENCE_HEIGHT)
        assert result == 1280
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_float_type_conversion(self, monkeypatch):
        """Float variables convert from string."""
        monkeypatch.setenv("DOMCANVAS_GRID_CELL_WIDTH", "64.5")
        assert get_environment(EnvVar.GRID_CELL_WIDTH) == 64.5

    @pytest.mark.unit
    def test_invalid_number_falls_back_to_default(self, monkeypatch):
        """Unparseable numbers resolve to the default."""
        monkeypatch.setenv("DOMCANVAS_MATCH_WIDTH_OR_HEIGHT", "half")
        monkeypatch.setenv("DOMCANVAS_REFERENCE_WIDTH", "wide")
        assert get_environment(EnvVar.MATCH_WIDTH_OR_HEIGHT) == 0.5
        assert get_environment(EnvVar.REFERENCE_WIDTH) == 1080

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String type returns as-is."""
        monkeypatch.setenv("DOMCANVAS_TEXT_SUPPORT", "legacy")
        assert get_environment(EnvVar.TEXT_SUPPORT) == "legacy"

    @pytest.mark.unit
    @pytest.mark.parametrize("value, expected", [("false", False), ("1", True)])
    def test_bool_type_conversion(self, monkeypatch, value, expected):
        """Boolean variables parse common spellings."""
        monkeypatch.setenv("DOMCANVAS_ENSURE_EVENT_SYSTEM", value)
        assert get_environment(EnvVar.ENSURE_EVENT_SYSTEM) is expected

    @pytest.mark.unit
    def test_bool_default(self):
        """Unset boolean variables use their default."""
        assert get_environment(EnvVar.ENSURE_EVENT_SYSTEM) is True


class TestConvertValue:
    """Tests for the type conversion helper."""

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["true", "1", "yes", "TRUE", "Yes"])
    def test_bool_true(self, value):
        """Truthy strings convert to True."""
        assert _convert_value(value, bool, None) is True

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["false", "0", "no", "FALSE", "No"])
    def test_bool_false(self, value):
        """Falsy strings convert to False."""
        assert _convert_value(value, bool, None) is False

    @pytest.mark.unit
    def test_bool_unrecognized_uses_default(self):
        """Unrecognized booleans use the default."""
        assert _convert_value("maybe", bool, True) is True

    @pytest.mark.unit
    def test_none_uses_default(self):
        """Missing value uses the default."""
        assert _convert_value(None, int, 7) == 7


class TestIntrospection:
    """Tests for metadata and listing helpers."""

    @pytest.mark.unit
    def test_environment_info(self):
        """Info exposes the EnvConfig."""
        info = get_environment_info(EnvVar.LOG_LEVEL)
        assert isinstance(info, EnvConfig)
        assert info.name == "DOMCANVAS_LOG_LEVEL"
        assert info.default == "INFO"

    @pytest.mark.unit
    def test_all_names_prefixed(self):
        """Every variable uses the project prefix."""
        for var in EnvVar:
            assert var.value.name.startswith("DOMCANVAS_")

    @pytest.mark.unit
    def test_list_by_category(self):
        """Category filter returns only matching variables."""
        canvas = list_environment_variables("canvas")
        assert EnvVar.REFERENCE_WIDTH in canvas
        assert EnvVar.GRID_CELL_WIDTH not in canvas

    @pytest.mark.unit
    def test_list_all(self):
        """No filter returns every variable."""
        assert len(list_environment_variables()) == len(EnvVar)

    @pytest.mark.unit
    def test_reference_resolution(self, monkeypatch):
        """Reference resolution combines width and height."""
        monkeypatch.delenv("DOMCANVAS_REFERENCE_WIDTH", raising=False)
        monkeypatch.setenv("DOMCANVAS_REFERENCE_HEIGHT", "2400")
        assert get_reference_resolution() == (1080, 2400)
