import argparse
import logging
import pathlib
import sys

import trio

from .commontypes import OjitypeError
from .device.hwtypes import KeyEvent
from .device.keycodes import KeyCode
from .device.keystreams import make_keystream
from .settings import Settings
from .table.chart import render_chart
from .table.compositions import build_composition_table
from .table.syllabary import Syllabary

logger = logging.getLogger(__name__)


def _read_syllabary(chartable: pathlib.Path | None) -> Syllabary:
    if chartable is None:
        logger.debug("Reading character table from standard input")
        return Syllabary.from_lines(sys.stdin)
    return Syllabary.load(chartable)


def build(args: argparse.Namespace):
    syllabary = _read_syllabary(args.chartable)
    table = build_composition_table(syllabary)
    if args.output is None:
        sys.stdout.buffer.write(table.dumps() + b"\n")
    else:
        table.save(args.output)
        logger.info("Wrote %d compositions to %s", len(table), args.output)


def check(args: argparse.Namespace):
    syllabary = _read_syllabary(args.chartable)
    chart = render_chart(syllabary, args.font_path, args.font_name)
    sys.stdout.buffer.write(chart.replace("\n", "\r\n").encode("utf-8"))


buildtable_parser = argparse.ArgumentParser(prog="ojitype-buildtable", description="Build and check the syllabics composition table.")
buildtable_parser.add_argument("-v", "--verbose", action="store_true")
buildtable_subparsers = buildtable_parser.add_subparsers(dest="mode", required=True)

build_parser = buildtable_subparsers.add_parser("build", help="write the composition table as JSON")
build_parser.add_argument("--chartable", type=pathlib.Path, help="character data table (default: standard input)")
build_parser.add_argument("--output", type=pathlib.Path)
build_parser.set_defaults(func=build)

check_parser = buildtable_subparsers.add_parser("check", help="write HTML charts for proofreading a font")
check_parser.add_argument("font_path", help="path or URL of the WOFF font")
check_parser.add_argument("font_name", help="font family name used in the CSS")
check_parser.add_argument("--chartable", type=pathlib.Path, help="character data table (default: standard input)")
check_parser.set_defaults(func=check)


def buildtable_cli(argv=sys.argv):
    args = buildtable_parser.parse_args(argv[1:])
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    try:
        args.func(args)
    except OjitypeError as exc:
        print(f"{buildtable_parser.prog}: {exc}", file=sys.stderr)
        return 1
    return 0


def parse_key_script(text: str) -> list[KeyEvent]:
    """Turn a whitespace-separated list of key names into key events.

    A plain name is pressed and released; ``+NAME`` only presses and ``-NAME`` only
    releases, so ``+KEY_LEFTSHIFT KEY_P -KEY_LEFTSHIFT`` types a shifted P.
    """
    events = []
    for token in text.split():
        if token.startswith("+"):
            events.append(KeyEvent.pressed(KeyCode[token[1:]]))
        elif token.startswith("-"):
            events.append(KeyEvent.released(KeyCode[token[1:]]))
        else:
            key = KeyCode[token]
            events.append(KeyEvent.pressed(key))
            events.append(KeyEvent.released(key))
    return events


async def type_keys(settings: Settings, events: list[KeyEvent]) -> str:
    syllabary = settings.load_syllabary()
    table = settings.load_composition_table(syllabary)
    layout = settings.load_layout(syllabary)
    send_channel, receive_channel = trio.open_memory_channel(len(events))
    async with send_channel:
        for event in events:
            send_channel.send_nowait(event)
    output = []
    async with make_keystream(receive_channel, table, layout) as keystream:
        async for text in keystream:
            output.append(text)
    return "".join(output)


type_keys_parser = argparse.ArgumentParser(prog="ojitype-type", description="Replay key names from standard input through the composer.")
type_keys_parser.add_argument("--settings", type=pathlib.Path)


def type_keys_cli(argv=sys.argv):
    args = type_keys_parser.parse_args(argv[1:])
    logging.basicConfig(level=logging.WARNING)
    if args.settings is not None:
        settings = Settings.load(args.settings)
    else:
        settings = Settings.default(pathlib.Path("ojitype.settings.json"))
    try:
        events = parse_key_script(sys.stdin.read())
    except KeyError as exc:
        print(f"{type_keys_parser.prog}: unknown key {exc}", file=sys.stderr)
        return 1
    try:
        print(trio.run(type_keys, settings, events))
    except OjitypeError as exc:
        print(f"{type_keys_parser.prog}: {exc}", file=sys.stderr)
        return 1
    return 0
