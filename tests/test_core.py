"""
Tests for unit normalisation, settings, containers and the Outcome type.

Run with:
    python -m pytest tests/test_core.py -v
"""

import logging

import pytest
from pydantic import ValidationError

import loadplan.core.settings as settings_module
from loadplan import (
    CONTAINER_TYPES,
    Dimensions,
    MalformedInputError,
    Outcome,
    PlannerSettings,
    Position3D,
    Unit,
    UnknownUnitError,
    configure,
    get_container_type,
    get_settings,
    load_settings,
    normalize,
    normalize_outcome,
)
from loadplan.core.units import to_meters


# ---------------------------------------------------------------------------
# 1. Dimension normaliser
# ---------------------------------------------------------------------------

class TestNormalize:
    def test_centimetres_divide_by_100(self, make_item):
        dims = normalize(make_item(120, 80, 250, unit=Unit.CM))
        assert dims == Dimensions(pytest.approx(1.2), pytest.approx(0.8), pytest.approx(2.5))

    def test_metres_pass_through(self, make_item):
        assert normalize(make_item(1.2, 0.8, 2.5, unit=Unit.M)) == Dimensions(1.2, 0.8, 2.5)

    def test_plain_string_unit_accepted(self, make_item):
        assert normalize(make_item(3, 2, 1, unit="m")) == Dimensions(3, 2, 1)

    def test_unknown_unit_gives_zero_dimensions(self, make_item, caplog):
        assert normalize(make_item(unit="ft")) == Dimensions(0.0, 0.0, 0.0)
        assert "Unknown unit 'ft'" in caplog.text

    def test_non_numeric_dimension(self, make_item):
        outcome = normalize_outcome(make_item(height=None))
        assert outcome.degraded
        assert outcome.value.volume == 0.0
        assert "non-numeric height" in outcome.issues[0]

    def test_none_item(self):
        assert normalize_outcome(None).degraded

    def test_strict_unknown_unit_raises(self, make_item):
        configure(strict=True)
        with pytest.raises(UnknownUnitError):
            normalize(make_item(unit="ft"))

    def test_strict_non_numeric_raises_malformed(self, make_item):
        configure(strict=True)
        with pytest.raises(MalformedInputError) as exc_info:
            normalize(make_item(length="big"))
        assert not isinstance(exc_info.value, UnknownUnitError)

    def test_to_meters(self):
        assert to_meters(250, "cm") == pytest.approx(2.5)
        assert to_meters(2.5, Unit.M) == 2.5
        with pytest.raises(UnknownUnitError):
            to_meters(1, "in")

    def test_unknown_unit_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            to_meters(1, "yd")


# ---------------------------------------------------------------------------
# 2. Models
# ---------------------------------------------------------------------------

class TestCargoItem:
    def test_new_item_is_unplaced(self, make_item):
        item = make_item()
        assert not item.is_placed
        assert item.position is None
        assert not item.has_placement

    def test_placed_at_returns_copy(self, make_item):
        item = make_item()
        placed = item.placed_at(Position3D(1.0, 0.0, 0.0))
        assert placed.has_placement
        assert item.position is None

    def test_unplaced_clears_position_and_labels(self, make_item):
        item = make_item(at=(0.0, 0.0, 0.0)).with_layer_labels(1, 2)
        assert item.label == "1-2"
        removed = item.unplaced()
        assert removed.position is None
        assert not removed.is_placed
        assert removed.label is None

    def test_items_are_immutable(self, make_item):
        item = make_item()
        with pytest.raises(AttributeError):
            item.is_placed = True


class TestContainers:
    def test_standard_types(self):
        assert [c.id for c in CONTAINER_TYPES] == ["20ft", "40ft", "40ftHC"]
        hc = get_container_type("40ftHC")
        assert (hc.length, hc.width, hc.height) == (12.03, 2.35, 2.69)

    def test_unknown_id_falls_back_to_20ft(self, caplog):
        assert get_container_type("45ft").id == "20ft"
        assert "Unknown container id" in caplog.text

    def test_bounds_centred_on_origin(self, container_20ft):
        b = container_20ft.bounds
        assert (b.min_x, b.max_x) == (pytest.approx(-2.95), pytest.approx(2.95))
        assert (b.min_z, b.max_z) == (pytest.approx(-1.175), pytest.approx(1.175))
        assert (b.min_y, b.max_y) == (0.0, 2.39)


# ---------------------------------------------------------------------------
# 3. Outcome
# ---------------------------------------------------------------------------

class TestOutcome:
    def test_success(self):
        outcome = Outcome.success(3)
        assert outcome.ok and not outcome.degraded
        assert outcome.unwrap() == 3

    def test_degrade_and_unwrap(self):
        outcome = Outcome.degrade([], "items is not a list")
        assert outcome.degraded
        assert outcome.value == []
        with pytest.raises(MalformedInputError, match="items is not a list"):
            outcome.unwrap()

    def test_merge_keeps_value(self):
        merged = Outcome.success(1.0).merge(Outcome.degrade(None, "bad"))
        assert merged.value == 1.0
        assert merged.issues == ("bad",)

    def test_report_logs_issues(self, caplog):
        log = logging.getLogger("loadplan.test")
        assert Outcome.degrade(0.0, "container is None").report(log, "volume") == 0.0
        assert "volume: container is None" in caplog.text

    def test_report_is_silent_when_ok(self, caplog):
        assert Outcome.success(2).report(logging.getLogger("loadplan.test"), "count") == 2
        assert caplog.text == ""

    def test_report_raises_when_strict(self):
        log = logging.getLogger("loadplan.test")
        with pytest.raises(UnknownUnitError):
            Outcome.degrade(0.0, "unit ft").report(log, "normalize", strict=True, error=UnknownUnitError)


# ---------------------------------------------------------------------------
# 4. Settings
# ---------------------------------------------------------------------------

class TestSettings:
    def test_defaults(self):
        s = get_settings()
        assert s.layer_threshold == 0.01
        assert s.box_order_tolerance == 0.01
        assert s.grid_pitch == 0.1
        assert s.layer_clustering == "anchor"
        assert s.strict is False

    def test_configure_overrides_and_resets(self):
        configure(strict=True, grid_pitch=0.05)
        assert get_settings().strict
        assert get_settings().grid_pitch == 0.05
        configure()
        assert get_settings() == PlannerSettings()

    def test_configure_validates(self):
        with pytest.raises(ValidationError):
            configure(layer_threshold=-1.0)
        with pytest.raises(ValidationError):
            configure(layer_clustering="kmeans")

    def test_settings_are_frozen(self):
        with pytest.raises(ValidationError):
            get_settings().strict = True

    def test_load_yaml_top_level(self, tmp_path):
        path = tmp_path / "planner.yaml"
        path.write_text("grid_pitch: 0.05\nstrict: true\n")
        s = load_settings(path)
        assert s.grid_pitch == 0.05
        assert s.strict is True
        assert s.layer_threshold == 0.01

    def test_load_yaml_section(self, tmp_path):
        path = tmp_path / "app.yaml"
        path.write_text("loadplan:\n  layer_clustering: single_linkage\nother: 1\n")
        assert load_settings(path).layer_clustering == "single_linkage"

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path) == PlannerSettings()

    @pytest.mark.parametrize("text", ["- 1\n- 2\n", "grid_pitch: -3\n", "unknown_key: 1\n"])
    def test_invalid_yaml_raises(self, tmp_path, text):
        path = tmp_path / "bad.yaml"
        path.write_text(text)
        with pytest.raises(MalformedInputError):
            load_settings(path)

    def test_env_var_loaded_on_first_use(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("layer_threshold: 0.05\n")
        monkeypatch.setenv(settings_module.CONFIG_ENV_VAR, str(path))
        monkeypatch.setattr(settings_module, "_active", None)
        assert get_settings().layer_threshold == 0.05

