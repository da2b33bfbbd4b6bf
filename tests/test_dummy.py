"""Tests for dummy.py: DummyServer handlers and a session against it."""

import asyncio

import pytest

from pioneer.avr.client import Client, ClientContext
from pioneer.avr.config import SessionConfig
from pioneer.avr.dummy import DummyServer
from pioneer.avr.enums import PowerState, Zone
from pioneer.avr.server import ServerContext


@pytest.fixture
def dummy():
    """Create a DummyServer for testing (no TCP, just handler logic)."""
    return DummyServer("127.0.0.1", 0)


# --- Handlers ---


def test_power(dummy):
    assert dummy.process_request("?P") == ["PWR1"]
    assert dummy.process_request("PO") == ["PWR0"]
    assert dummy.process_request("PF") == ["PWR1"]


def test_commands_need_power(dummy):
    assert dummy.process_request("VU") == ["E02"]
    assert dummy.process_request("MO") == ["E02"]
    assert dummy.process_request("05FN") == ["E02"]


def test_volume(dummy):
    dummy.process_request("PO")
    assert dummy.process_request("?V") == ["VOL081"]
    assert dummy.process_request("VU") == ["VOL083"]
    assert dummy.process_request("VD") == ["VOL081"]
    assert dummy.process_request("121VL") == ["VOL121"]
    assert dummy.process_request("999VL") == ["VOL185"]


def test_mute(dummy):
    dummy.process_request("PO")
    assert dummy.process_request("?M") == ["MUT1"]
    assert dummy.process_request("MO") == ["MUT0"]
    assert dummy.process_request("MZ") == ["MUT1"]


def test_input(dummy):
    dummy.process_request("PO")
    assert dummy.process_request("?F") == ["FN04"]
    assert dummy.process_request("05FN") == ["FN05"]
    assert dummy.process_request("07FN") == ["E06"]


def test_tone(dummy):
    assert dummy.process_request("02BA") == ["BA02"]
    assert dummy.process_request("?TR") == ["TR06"]


def test_input_name(dummy):
    assert dummy.process_request("?RGB05") == ["RGB050TVSAT"]
    assert dummy.process_request("?RGB07") == ["E06"]


def test_device_information(dummy):
    assert dummy.process_request("?RGD") == ["RGD<000><VSX-923/CUXESM>"]
    assert dummy.process_request("?STJ") == ["STJ1"]
    assert dummy.process_request("?SVB") == ["SVB0123456789AB"]


def test_zone2(dummy):
    assert dummy.process_request("?AP") == ["APR1"]
    assert dummy.process_request("APO") == ["APR0"]
    assert dummy.process_request("?ZV") == ["ZV40"]


# --- Session against the dummy receiver ---


async def _wait_for(predicate):
    async with asyncio.timeout(2):
        while not predicate():
            await asyncio.sleep(0.01)


async def test_session_against_dummy():
    async with ServerContext(DummyServer("127.0.0.1", 0, "VSX-1130")) as server:
        client = Client("127.0.0.1", server.port, throttle_delay=0)
        async with ClientContext(client):
            client.send("?P")
            await _wait_for(lambda: client.status == "off")

            await client.power_off()
            client.set("on")
            await _wait_for(lambda: client.state.power_state == PowerState.ON)

            client.set("input", "tvSat")
            client.get("model")
            await _wait_for(lambda: client.state.model == "VSX-1130")
            assert client.state.input_name == "tvSat"

            client.get("power", Zone.ZONE2)
            await _wait_for(lambda: client.registry.lookup(Zone.ZONE2) is not None)
            zone = client.registry.lookup(Zone.ZONE2)
            await _wait_for(lambda: zone.readings.get("power") == "off")


async def test_session_volume_clamp_against_dummy():
    """The receiver is corrected back below the ceiling."""
    async with ServerContext(DummyServer("127.0.0.1", 0)) as server:
        client = Client("127.0.0.1", server.port, config=SessionConfig(volume_limit=50))
        async with ClientContext(client):
            client.send("PO")
            await _wait_for(lambda: client.status == "on")

            client.send("185VL")
            await _wait_for(lambda: client.state.get("volume") == 50)
            assert client.state.get("volumeStraight") == -34.0


async def test_session_probe_against_dummy():
    async with ServerContext(DummyServer("127.0.0.1", 0)) as server:
        client = Client("127.0.0.1", server.port)
        async with ClientContext(client):
            await client.supervisor.probe()
            assert client.supervisor.reopens == 0
            assert client.framer.partial == b"R\r\n"
            assert client.connected
