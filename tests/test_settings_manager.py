import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from models.fleet import PLACEHOLDERS, FleetSettings
from utils.notification_bus import notification_bus
from utils.settings_manager import KEY_PARSE_SLO_MS, KEY_PLACEHOLDERS, SettingsManager


@pytest.fixture
def notifications():
    events = []

    def on_notify(level: str, message: str, timeout_ms: int):
        events.append((level, message))

    notification_bus.notified.connect(on_notify)
    yield events
    notification_bus.notified.disconnect(on_notify)


def test_missing_values_fall_back_to_defaults(tmp_path: Path):
    fleet = SettingsManager(tmp_path / "empty.ini").load_fleet_settings()

    assert fleet.placeholders == list(PLACEHOLDERS)
    assert fleet.parse_slo_ms == 50.0


def test_fleet_settings_round_trip_through_ini(tmp_path: Path):
    ini = tmp_path / "settings.ini"
    SettingsManager(ini).save_fleet_settings(FleetSettings(placeholders=[260, 252], parse_slo_ms=25))

    fleet = SettingsManager(ini).load_fleet_settings()

    assert fleet.placeholders == [260, 252]
    assert fleet.parse_slo_ms == 25.0


def test_invalid_values_warn_and_use_defaults(tmp_path: Path, notifications):
    manager = SettingsManager(tmp_path / "bad.ini")
    manager.set(KEY_PLACEHOLDERS, "999")
    manager.set(KEY_PARSE_SLO_MS, "-1")

    fleet = manager.load_fleet_settings()

    assert fleet == FleetSettings()
    assert notifications[-1][0] == "warning"


def test_get_and_set_plain_values(tmp_path: Path):
    manager = SettingsManager(tmp_path / "plain.ini")
    manager.set("ui/last_tab", "overview")

    assert manager.get("ui/last_tab") == "overview"
    assert manager.get("ui/missing", "x") == "x"
