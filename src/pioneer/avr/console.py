import argparse
import asyncio
import logging
import sys

from .client import Client, ClientContext
from .config import SessionConfig
from .display import print_state
from .dummy import DummyServer
from .server import ServerContext
from .transport import DEFAULT_PORT
from .zones import ZoneState

_LOGGER = logging.getLogger(__name__)
_SETTLE_DELAY = 2.0


def traffic_level(x: str) -> int:
    level = int(x)
    if not 0 <= level <= 5:
        raise argparse.ArgumentTypeError(f"traffic level {level} out of range [0, 5]")
    return level


parser = argparse.ArgumentParser(description="Communicate with Pioneer receivers.")
parser.add_argument("--verbose", action="store_true")

subparsers = parser.add_subparsers(dest="subcommand")

parser_state = subparsers.add_parser("state")
parser_state.add_argument("--host", required=True)
parser_state.add_argument("--port", default=DEFAULT_PORT, type=int)
parser_state.add_argument("--volume", type=float)
parser_state.add_argument("--input")
parser_state.add_argument("--volume-limit", type=float)
parser_state.add_argument("--log-traffic", type=traffic_level)
parser_state.add_argument("--monitor", action="store_true")
parser_state.add_argument("--power-on", action=argparse.BooleanOptionalAction)
parser_state.add_argument("--power-off", action=argparse.BooleanOptionalAction)

parser_send = subparsers.add_parser("send")
parser_send.add_argument("--host", required=True)
parser_send.add_argument("--port", default=DEFAULT_PORT, type=int)
parser_send.add_argument("--command", required=True)

parser_server = subparsers.add_parser("server")
parser_server.add_argument("--host", default="localhost")
parser_server.add_argument("--port", default=DEFAULT_PORT, type=int)
parser_server.add_argument("--model", default="VSX-923")


def _config(args: argparse.Namespace) -> SessionConfig:
    values: dict[str, object] = {}
    if getattr(args, "volume_limit", None) is not None:
        values["volumeLimit"] = args.volume_limit
    if getattr(args, "log_traffic", None) is not None:
        values["logTraffic"] = args.log_traffic
    return SessionConfig.from_dict(values)


async def run_send(args: argparse.Namespace) -> None:
    client = Client(args.host, args.port)
    async with ClientContext(client):
        with client.listen(lambda event: print(event.line)):
            client.send(args.command)
            await asyncio.sleep(_SETTLE_DELAY)


def _zones(client: Client) -> list[ZoneState]:
    return [zone for zone in client.registry.consumers() if isinstance(zone, ZoneState)]


async def run_state(args: argparse.Namespace) -> None:
    client = Client(args.host, args.port, config=_config(args))
    async with ClientContext(client):
        await client.status_update()

        if args.volume is not None:
            client.set("volume", args.volume)

        if args.input is not None:
            client.set("input", args.input)

        if args.power_on:
            await client.power_on()

        if args.power_off:
            await client.power_off()

        await asyncio.sleep(_SETTLE_DELAY)
        state = client.state

        if args.monitor:
            print_state(state, _zones(client))
            while client.connected:
                await state.wait_changed()
                print_state(state, _zones(client))
        else:
            print_state(state, _zones(client))


async def run_server(args: argparse.Namespace) -> None:
    server = DummyServer(args.host, args.port, args.model)
    async with ServerContext(server):
        while True:
            await asyncio.sleep(delay=1)


def main() -> None:
    args = parser.parse_args()

    if args.verbose:
        root = logging.getLogger()
        root.setLevel(logging.DEBUG)

        channel = logging.StreamHandler(sys.stdout)
        channel.setLevel(logging.DEBUG)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        channel.setFormatter(formatter)
        root.addHandler(channel)

    if args.subcommand == "send":
        asyncio.run(run_send(args))
    elif args.subcommand == "state":
        asyncio.run(run_state(args))
    elif args.subcommand == "server":
        asyncio.run(run_server(args))


if __name__ == "__main__":
    main()
