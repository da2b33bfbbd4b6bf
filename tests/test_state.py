"""Tests for state.py: readings batches, input inventory and event projection."""

import logging
from unittest.mock import MagicMock

import pytest

from pioneer.avr.config import SessionConfig
from pioneer.avr.decoder import decode_line
from pioneer.avr.enums import PowerState, Zone
from pioneer.avr.events import VolumeReport, ZoneMessage
from pioneer.avr.state import InputChannelTable, Readings, State


def _apply(state, *lines):
    for line in lines:
        state.apply(decode_line(line))


# --- Readings ---


def test_readings_outside_batch_commit_immediately():
    readings = Readings()
    listener = MagicMock()
    readings.add_listener(listener)
    readings.bulk_update("power", "on")
    assert readings.get("power") == "on"
    listener.assert_called_once_with({"power": "on"})


def test_readings_batch_publishes_once():
    readings = Readings()
    listener = MagicMock()
    readings.add_listener(listener)

    readings.begin_update()
    readings.bulk_update("power", "on")
    readings.bulk_update("volume", 40)
    assert readings.in_update
    assert readings.current("power") == "on"
    assert readings.get("power") is None
    listener.assert_not_called()

    readings.end_update()
    listener.assert_called_once_with({"power": "on", "volume": 40})
    assert readings.to_dict() == {"power": "on", "volume": 40}


def test_readings_empty_batch_is_silent():
    readings = Readings()
    listener = MagicMock()
    readings.add_listener(listener)
    with readings.update():
        pass
    listener.assert_not_called()


def test_readings_update_commits_on_error():
    readings = Readings()
    with pytest.raises(KeyError):
        with readings.update():
            readings.bulk_update("mute", "on")
            raise KeyError()
    assert readings.get("mute") == "on"
    assert not readings.in_update


def test_readings_nested_batch_rejected():
    readings = Readings()
    readings.begin_update()
    with pytest.raises(RuntimeError):
        readings.begin_update()


def test_readings_end_without_begin_rejected():
    with pytest.raises(RuntimeError):
        Readings().end_update()


def test_readings_failing_listener_is_logged(caplog):
    readings = Readings()
    good = MagicMock()
    readings.add_listener(MagicMock(side_effect=ValueError("boom")))
    readings.add_listener(good)
    readings.bulk_update("power", "on")
    good.assert_called_once()
    assert "failed" in caplog.text


def test_readings_remove_listener():
    readings = Readings()
    listener = MagicMock()
    readings.add_listener(listener)
    readings.remove_listener(listener)
    readings.bulk_update("power", "on")
    listener.assert_not_called()
    assert "power" in readings


# --- InputChannelTable ---


def test_input_table_defaults():
    table = InputChannelTable()
    assert table.get("05").name == "tvSat"
    assert "07" not in table
    assert [channel.code for channel in table][:3] == ["00", "01", "02"]


def test_input_table_code_for_alias_and_name():
    table = InputChannelTable()
    table.get("05").alias_name = "livingroom"
    assert table.code_for("livingroom") == "05"
    assert table.code_for("tvSat") == "05"
    assert table.code_for("nothing") is None


def test_input_table_enabled_names():
    table = InputChannelTable({"01": "cd", "05": "tvSat"})
    table.get("01").enabled = False
    table.get("05").alias_name = "livingroom"
    assert table.enabled_names() == ["livingroom"]
    assert len(table) == 2


# --- Volume and clamp ---


def test_volume_published():
    state = State()
    _apply(state, "VOL121")
    assert state.get("volume") == 65
    assert state.get("volumeStraight") == -20.0


def test_volume_above_percent_limit_corrected():
    """A report above the ceiling issues one corrective write."""
    send = MagicMock()
    state = State(SessionConfig(volume_limit=90), send=send)
    state.apply(VolumeReport("VOL178", 178))

    assert state.get("volume") == 96
    assert state.get("volumeStraight") == 8.5
    send.assert_called_once_with("166VL")
    corrected = VolumeReport("VOL166", 166)
    assert corrected.percent <= 90


def test_volume_just_above_percent_limit_corrected():
    """A report rounding down to the ceiling is still above it in dB."""
    send = MagicMock()
    state = State(SessionConfig(volume_limit=50), send=send)
    _apply(state, "VOL094")
    assert state.get("volume") == 50
    assert state.get("volumeStraight") == -33.5
    send.assert_called_once_with("093VL")

    send.reset_mock()
    _apply(state, "VOL093")
    send.assert_not_called()


def test_volume_above_db_limit_corrected():
    send = MagicMock()
    state = State(SessionConfig(volume_limit_straight=0), send=send)
    _apply(state, "VOL170")
    send.assert_called_once_with("161VL")


def test_volume_within_limit_not_corrected():
    """Only a volume above the tighter ceiling is corrected.

    With a 100 % ceiling both ceilings are 12 dB, so 96 % (8.5 dB) stays.
    """
    send = MagicMock()
    state = State(SessionConfig(volume_limit=100), send=send)
    _apply(state, "VOL178")
    assert state.get("volume") == 96
    send.assert_not_called()


def test_volume_correction_without_writer(caplog):
    state = State(SessionConfig(volume_limit=50))
    _apply(state, "VOL178")
    assert state.get("volume") == 96
    assert "Unable to correct volume" in caplog.text


# --- Power, input, display ---


def test_power():
    state = State()
    assert state.power_state == PowerState.UNKNOWN
    _apply(state, "PWR0")
    assert state.power_state == PowerState.ON
    assert state.get("power") == "on"
    assert state.get("state") == "on"
    _apply(state, "PWR1")
    assert state.power_state == PowerState.OFF


@pytest.mark.parametrize(
    "lines, expected",
    [
        (["RGB051livingroom", "FN05"], "livingroom"),
        (["FN05"], "tvSat"),
        (["FN07"], "FN07"),
        (["RGB070MY INPUT", "FN07"], "myInput"),
    ],
)
def test_input_resolution(lines, expected):
    """Alias name wins over canonical name, the raw line is the fallback."""
    state = State()
    _apply(state, *lines)
    assert state.input_name == expected
    assert state.input_code == lines[-1][2:]


def test_input_change_blanks_line_data():
    state = State()
    _apply(state, 'GEH01020"Song"', "FN05")
    assert state.get("currentTrack") == ""


def test_display_keeps_previous():
    state = State()
    first = "FL00" + "ONE".encode().hex()
    second = "FL00" + "TWO".encode().hex()
    with state.readings.update():
        _apply(state, first, second)
    assert state.get("display") == "TWO"
    assert state.get("displayPrevious") == "ONE"


def test_mute_and_tone_readings():
    state = State()
    _apply(state, "MUT0", "BA02", "TR12")
    assert state.get("mute") == "on"
    assert state.get("bass") == 4
    assert state.get("treble") == -6


# --- Inventory ---


def test_input_terminals_and_level():
    state = State()
    _apply(state, "SSC050001", "SSC050103", "SSC050200", "SSC050301", "ILA0556")
    channel = state.inputs.get("05")
    assert channel.audio_terminal == "COAX 1"
    assert channel.hdmi_terminal == "hdmi 3"
    assert channel.component_terminal == "No Assign"
    assert channel.enabled is False
    assert channel.input_level_adjust == 3.0
    assert "tvSat" not in state.inputs.enabled_names()


# --- Tuner ---


def test_tuner_preset_with_name():
    state = State()
    _apply(state, 'TQA1"ANTENNE "', "PRA01")
    assert state.get("channelStraight") == "A1"
    assert state.get("channelName") == "ANTENNE "
    assert state.get("channel") == "1"


def test_tuner_preset_other_class():
    state = State()
    _apply(state, "PRB03")
    assert state.get("channel") == "-"
    assert state.get("channelName") == ""


# --- Device information ---


def test_device_information():
    state = State()
    _apply(
        state,
        "SVB0123456789AB",
        "RGD<000><VSX-923/CUXESM>",
        'SSI"1-06-2-0"',
        "STJ1",
        "SUM00023999990810299999",
    )
    assert state.mac_address == "01:23:45:67:89:AB"
    assert state.model == "VSX-923"
    assert state.software_version == "1-06-2-0"
    assert state.network_standby is True
    assert state.network_ports == (23, None, 8102, None)
    assert "VSX-923" in repr(state)


def test_device_error_logged(caplog):
    state = State()
    with caplog.at_level(logging.INFO):
        _apply(state, "E04")
    assert "COMMAND ERROR" in caplog.text


def test_zone_message_ignored():
    state = State()
    state.apply(ZoneMessage("ZV50", Zone.ZONE2))
    assert state.readings.to_dict() == {}


def test_unknown_line_ignored():
    state = State()
    _apply(state, "XYZ")
    assert state.readings.to_dict() == {}


# --- Change notification ---


async def test_wait_changed():
    state = State()
    _apply(state, "PWR0")
    await state.wait_changed()
    assert not state._changed.is_set()


def test_to_dict():
    state = State()
    _apply(state, "PWR0", "FN05")
    data = state.to_dict()
    assert data["power"] == "on"
    assert data["input"] == "05"
    assert data["readings"]["input"] == "tvSat"
    assert data["network"] is None
