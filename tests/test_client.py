"""Tests for client.py: receive pipeline, commands and link lifecycle."""

import logging
from unittest.mock import MagicMock

import pytest

from pioneer.avr.client import Client, ClientContext
from pioneer.avr.commands import inventory_queries, status_queries
from pioneer.avr.config import SessionConfig
from pioneer.avr.enums import LinkState, PowerState, Zone
from pioneer.avr.events import PowerReport, UnknownLine
from pioneer.avr.exceptions import (
    CommandNotAvailable,
    ConnectionFailed,
    NotConnectedException,
    PioneerException,
    UnknownCommand,
)
from pioneer.avr.scheduler import LoopScheduler
from pioneer.avr.zones import ZoneState

# --- Construction and lifecycle ---


def test_client_requires_host_or_transport():
    with pytest.raises(ValueError):
        Client()


async def test_start_opens_link(make_client, transport):
    client = await make_client()
    assert transport.opens == 1
    assert client.link == LinkState.OPEN
    assert client.connected
    assert client.status == "opened"
    assert client.supervisor.enabled
    assert client.supervisor.next_probe == 120


async def test_start_twice_rejected(make_client):
    client = await make_client()
    with pytest.raises(PioneerException):
        await client.start()


async def test_start_without_connection_checking(make_client, scheduler):
    client = await make_client(SessionConfig(check_connection=False))
    assert not client.supervisor.enabled
    assert scheduler.pending() == []


async def test_start_failure(transport, scheduler):
    transport.fail_open = True
    client = Client(transport=transport, scheduler=scheduler)
    with pytest.raises(ConnectionFailed):
        await client.start()
    assert client.status == "disconnected"


async def test_stop(make_client, transport, scheduler):
    client = await make_client()
    await client.stop()
    assert transport.closes == 1
    assert client.status == "uninitialized"
    assert not client.supervisor.enabled
    assert scheduler.pending() == []


async def test_stop_closes_own_scheduler(transport, mocker):
    close = mocker.patch.object(LoopScheduler, "close", new_callable=mocker.AsyncMock)
    client = Client(transport=transport, throttle_delay=0)
    await client.start()
    await client.stop()
    close.assert_awaited_once()


async def test_stop_leaves_given_scheduler_open(make_client, mocker):
    close = mocker.patch.object(LoopScheduler, "close", new_callable=mocker.AsyncMock)
    client = await make_client()
    await client.stop()
    close.assert_not_awaited()


async def test_connection_lost(make_client, transport):
    client = await make_client()
    transport.lose()
    assert client.status == "disconnected"
    assert not client.connected


async def test_client_context(transport, scheduler):
    client = Client(transport=transport, scheduler=scheduler)
    async with ClientContext(client) as c:
        assert c is client
        assert c.connected
    assert transport.closes == 1
    assert client.link == LinkState.CLOSED


# --- Receive side ---


async def test_status_follows_power(make_client, transport):
    client = await make_client()
    transport.feed(b"PWR0\r\n")
    assert client.status == "on"
    transport.feed(b"PWR1\r\n")
    assert client.status == "off"
    assert client.state.power_state == PowerState.OFF


async def test_one_read_is_one_batch(make_client, transport):
    client = await make_client()
    listener = MagicMock()
    client.state.readings.add_listener(listener)

    transport.feed(b"PWR0\r\nVOL101\r\nMUT0\r\n")

    listener.assert_called_once()
    changes = listener.call_args[0][0]
    assert changes["power"] == "on"
    assert changes["volume"] == 54
    assert changes["mute"] == "on"


async def test_line_split_across_reads(make_client, transport):
    client = await make_client()
    transport.feed(b"FN0")
    assert client.state.input_name is None
    transport.feed(b"5\r\n")
    assert client.state.input_name == "tvSat"


async def test_alias_resolution(make_client, transport):
    client = await make_client()
    transport.feed(b"RGB051livingroom\r\nFN05\r\n")
    assert client.state.input_name == "livingroom"
    assert client.state.input_code == "05"


async def test_event_listeners(make_client, transport):
    client = await make_client()
    events = []
    with client.listen(events.append):
        transport.feed(b"PWR0\r\nXYZ\r\n")
    transport.feed(b"PWR1\r\n")
    assert events == [PowerReport("PWR0", True), UnknownLine("XYZ")]


async def test_failing_listener_does_not_stop_read(make_client, transport, scheduler, caplog):
    client = await make_client()
    events = []

    def failing(event):
        raise RuntimeError("listener bug")

    client.add_listener(failing)
    client.add_listener(events.append)
    await scheduler.advance(100)

    transport.feed(b"PWR0\r\nVOL100\r\n")

    assert client.state.get("volume") == 54
    assert client.framer.partial == b""
    assert len(events) == 2
    assert client.supervisor.next_probe == 220
    assert "Event listener" in caplog.text


async def test_volume_clamp_writes_correction(make_client, transport):
    """A volume report above the ceiling is answered with exactly one write."""
    client = await make_client(SessionConfig(volume_limit=90))
    transport.feed(b"VOL178\r\n")
    assert transport.payloads == ["166VL"]
    assert client.state.get("volume") == 96


async def test_zone_lines_routed(make_client, transport):
    client = await make_client()
    listener = MagicMock()
    client.registry.add_provisioning_listener(listener)

    transport.feed(b"ZV50\r\nZ2MUT0\r\n")

    listener.assert_called_once_with(Zone.ZONE2)
    zone = client.registry.lookup(Zone.ZONE2)
    assert isinstance(zone, ZoneState)
    assert zone.readings.get("volumeStraight") == -31
    assert zone.readings.get("mute") == "on"
    assert client.state.get("volume") is None


async def test_zone_input_uses_session_inputs(make_client, transport):
    client = await make_client()
    transport.feed(b"RGB041player\r\nZ2F04\r\n")
    assert client.registry.lookup(Zone.ZONE2).readings.get("input") == "player"


# --- Connection supervision ---


async def test_traffic_and_writes_move_probe(make_client, transport, scheduler):
    client = await make_client()
    await scheduler.advance(50)
    client.send("?P")
    assert client.supervisor.next_probe == 63
    transport.feed(b"PWR0\r\n")
    assert client.supervisor.next_probe == 170


async def test_probe_answered(make_client, transport, scheduler):
    client = await make_client()
    transport.expect_reply = b"R\r\nPWR"
    await scheduler.advance(120)

    assert len(transport.expected) == 1
    assert transport.opens == 1
    assert client.framer.partial == b"R\r\nPWR"

    transport.feed(b"0\r\n")
    assert client.status == "on"


async def test_probe_timeout_reopens(make_client, transport, scheduler, mocker):
    client = await make_client()
    status_update = mocker.patch.object(client, "status_update")
    transport.expect_reply = None

    await scheduler.advance(120)

    assert transport.closes == 1
    assert transport.opens == 2
    assert client.supervisor.reopens == 1
    assert client.status == "opened"
    status_update.assert_called_once_with()
    await client.stop()


async def test_reopen_failure_disconnects(make_client, transport, scheduler):
    client = await make_client()
    transport.expect_reply = None
    transport.fail_open = True

    await scheduler.advance(120)
    assert client.status == "disconnected"

    await scheduler.advance(120)
    assert transport.opens == 3
    assert client.supervisor.reopens == 2


async def test_reopen_clears_partial_line(make_client, transport, mocker):
    client = await make_client()
    mocker.patch.object(client, "status_update")
    transport.feed(b"VOL1")
    assert await client.reopen()
    assert client.framer.partial == b""
    await client.stop()


async def test_set_check_connection(make_client, scheduler):
    client = await make_client()
    client.set_check_connection(False)
    assert scheduler.pending() == []
    client.set_check_connection(True)
    assert scheduler.pending() == [120]


# --- Send side ---


async def test_send_not_connected(transport, scheduler):
    client = Client(transport=transport, scheduler=scheduler)
    with pytest.raises(NotConnectedException):
        client.send("?P")


async def test_send_write_failure(make_client, transport):
    client = await make_client()
    transport.write = MagicMock(side_effect=OSError("broken pipe"))
    with pytest.raises(ConnectionFailed):
        client.send("?P")
    assert client.status == "disconnected"


async def test_send_appends_terminator(make_client, transport):
    client = await make_client()
    client.send("?P")
    assert transport.written == [b"?P\r\n"]


@pytest.mark.parametrize(
    "name, args, zone, payload",
    [
        ("volume", (50,), Zone.MAIN, "092VL"),
        ("volumeStraight", (-30.5,), Zone.MAIN, "100VL"),
        ("bass", (4,), Zone.MAIN, "02BA"),
        ("treble", (-6,), Zone.MAIN, "12TR"),
        ("tone", ("bypass",), Zone.MAIN, "0TO"),
        ("speakers", ("A+B",), Zone.MAIN, "3SPK"),
        ("signalSelect", ("cycle",), Zone.MAIN, "9SDA"),
        ("listeningMode", ("stereoCyclic",), Zone.MAIN, "0001SR"),
        ("input", ("tvSat",), Zone.MAIN, "05FN"),
        ("remoteControl", ("homeMenu",), Zone.MAIN, "HM"),
        ("raw", ("?P",), Zone.MAIN, "?P"),
        ("on", (), Zone.MAIN, "PO"),
        ("volumeUp", (), Zone.ZONE2, "ZU"),
        ("off", (), Zone.HDZONE, "ZEF"),
    ],
)
async def test_set(make_client, transport, name, args, zone, payload):
    client = await make_client()
    assert client.set(name, *args, zone=zone) == payload
    assert transport.payloads == [payload]


async def test_set_volume_capped_by_limit(make_client, transport):
    client = await make_client(SessionConfig(volume_limit=50))
    client.set("volume", 80)
    assert transport.payloads == ["092VL"]


async def test_set_mute_updates_reading(make_client, transport):
    client = await make_client()
    client.set("mute", "on")
    assert transport.payloads == ["MO"]
    assert client.state.get("mute") == "on"


async def test_set_input_by_alias(make_client, transport):
    client = await make_client()
    transport.feed(b"RGB051livingroom\r\n")
    client.set("input", "livingroom")
    assert transport.payloads == ["05FN"]


async def test_set_unknown_input(make_client):
    client = await make_client()
    with pytest.raises(ValueError):
        client.set("input", "nothing")


async def test_set_player_depends_on_input(make_client, transport):
    client = await make_client()
    with pytest.raises(CommandNotAvailable):
        client.set("play")
    transport.feed(b"FN17\r\n")
    assert client.set("play") == "00IP"


async def test_set_tuner_commands(make_client, transport):
    client = await make_client()
    with pytest.raises(CommandNotAvailable):
        client.set("channelStraight", "A1")
    transport.feed(b"FN02\r\n")
    assert client.set("channelStraight", "A1") == "A01PR"
    assert client.set("channel", 3) == "3TP"
    assert client.set("channelUp") == "TPI"


async def test_set_unknown_command(make_client, transport):
    client = await make_client()
    with pytest.raises(UnknownCommand):
        client.set("bogus")
    with pytest.raises(UnknownCommand):
        client.set("bogus", 1)
    assert transport.written == []


async def test_get(make_client, transport):
    client = await make_client()
    assert client.get("volume") == "?V"
    assert client.get("power", Zone.ZONE3) == "?BP"
    with pytest.raises(UnknownCommand):
        client.get("bogus")


async def test_status_update(make_client, transport):
    client = await make_client()
    await client.status_update()
    assert transport.payloads == list(status_queries())


async def test_status_update_single_zone(make_client, transport):
    client = await make_client()
    await client.status_update([Zone.HDZONE])
    assert transport.payloads == ["?ZEA", "?ZEP"]


async def test_load_input_names(make_client, transport):
    client = await make_client()
    await client.load_input_names()
    assert transport.payloads == list(inventory_queries())
    assert transport.payloads[:6] == [
        "?RGB00",
        "?SSC0000",
        "?SSC0001",
        "?SSC0002",
        "?SSC0003",
        "?ILA00",
    ]


async def test_power_on(make_client, transport, mocker, caplog):
    mocker.patch("pioneer.avr.client._POWER_ON_WAKE_DELAY", 0)
    mocker.patch("pioneer.avr.client._POWER_ON_REPEAT_DELAY", 0)
    client = await make_client()
    transport.feed(b"STJ0\r\n")

    await client.power_on()

    assert transport.payloads == ["", "", "\n\rPO", "\n\rPO"]
    assert "Network standby is off" in caplog.text


async def test_power_off(make_client, transport):
    client = await make_client()
    await client.power_off()
    assert transport.payloads == ["PF"]


async def test_input_names(make_client, transport):
    client = await make_client()
    assert "tvSat" in client.input_names()
    transport.feed(b"SSC050301\r\nRGB011MY CD\r\n")
    names = client.input_names()
    assert "tvSat" not in names
    assert "myCd" in names


async def test_traffic_logging(make_client, transport, caplog):
    client = await make_client(SessionConfig(log_traffic=logging.INFO))
    with caplog.at_level(logging.INFO, logger="pioneer.avr.traffic"):
        transport.feed(b"PWR0\r\n")
        client.send("?V")
    assert "Received" in caplog.text
    assert "Sending" in caplog.text


async def test_no_traffic_logging_by_default(make_client, transport, caplog):
    client = await make_client()
    with caplog.at_level(logging.DEBUG, logger="pioneer.avr.traffic"):
        transport.feed(b"PWR0\r\n")
        client.send("?V")
    assert not [r for r in caplog.records if r.name == "pioneer.avr.traffic"]
