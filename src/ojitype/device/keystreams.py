# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import abc
import logging
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterable, Union

import trio

from ..editor.composer import Composer
from ..editor.keystrokes import SystemKey
from .hwtypes import AnnotatedKeyEvent, KeyboardDisconnect, KeyEvent, KeyPress, ModifierAnnotation
from .keycodes import KeyCode

if TYPE_CHECKING:
    from ..editor.keystrokes import AnyKeystroke
    from ..editor.layout import Layout
    from ..table.compositions import CompositionTable

logger = logging.getLogger(__name__)


class Section(abc.ABC):
    @abc.abstractmethod
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]): ...


# stage 1: track modifier keydown/up and annotate keystream with current modifiers
class ModifierTracking(Section):
    def __init__(self):
        self.momentary_state = {
            KeyCode.KEY_LEFTALT: False,
            KeyCode.KEY_RIGHTALT: False,
            KeyCode.KEY_LEFTCTRL: False,
            KeyCode.KEY_RIGHTCTRL: False,
            KeyCode.KEY_LEFTMETA: False,
            KeyCode.KEY_RIGHTMETA: False,
            KeyCode.KEY_LEFTSHIFT: False,
            KeyCode.KEY_RIGHTSHIFT: False,
        }
        self.lock_state = {
            KeyCode.KEY_CAPSLOCK: False,
        }

    def _make_annotation(self):
        return ModifierAnnotation(
            alt=self.momentary_state[KeyCode.KEY_LEFTALT] or self.momentary_state[KeyCode.KEY_RIGHTALT],
            ctrl=self.momentary_state[KeyCode.KEY_LEFTCTRL] or self.momentary_state[KeyCode.KEY_RIGHTCTRL],
            meta=self.momentary_state[KeyCode.KEY_LEFTMETA] or self.momentary_state[KeyCode.KEY_RIGHTMETA],
            shift=self.momentary_state[KeyCode.KEY_LEFTSHIFT] or self.momentary_state[KeyCode.KEY_RIGHTSHIFT],
            capslock=self.lock_state[KeyCode.KEY_CAPSLOCK],
        )

    async def pump(
        self,
        source: trio.MemoryReceiveChannel[Union[KeyEvent, KeyboardDisconnect]],
        sink: trio.MemorySendChannel[Union[AnnotatedKeyEvent, KeyboardDisconnect]],
    ):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if isinstance(event, KeyboardDisconnect):
                    # a new keyboard starts with nothing held down
                    for key in self.momentary_state:
                        self.momentary_state[key] = False
                    await sink.send(event)
                    continue
                is_modifier = False
                if event.key in self.momentary_state:
                    is_modifier = True
                    self.momentary_state[event.key] = event.press is not KeyPress.RELEASED
                if event.key in self.lock_state:
                    is_modifier = True
                    if event.press is KeyPress.PRESSED:
                        self.lock_state[event.key] = not self.lock_state[event.key]
                await sink.send(
                    AnnotatedKeyEvent(
                        key=event.key,
                        press=event.press,
                        annotation=self._make_annotation(),
                        is_modifier=is_modifier,
                    )
                )


# stage 1.5: drop KeyPress.RELEASED events
class OnlyPresses(Section):
    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if isinstance(event, AnnotatedKeyEvent) and event.press is KeyPress.RELEASED:
                    continue
                await sink.send(event)


# stage 2: classify key event + modifiers into a syllabics keystroke
class ClassifyKeystrokes(Section):
    def __init__(self, layout: Layout):
        self.layout = layout

    async def pump(
        self,
        source: trio.MemoryReceiveChannel[Union[AnnotatedKeyEvent, KeyboardDisconnect]],
        sink: trio.MemorySendChannel[AnyKeystroke],
    ):
        async with aclosing(source), aclosing(sink):
            async for event in source:
                if isinstance(event, KeyboardDisconnect):
                    logger.debug("Keyboard disconnected; treating as a system key")
                    await sink.send(SystemKey())
                    continue
                keystroke = self.layout.classify(event)
                if keystroke is not None:
                    await sink.send(keystroke)


# stage 3: compose syllables; one composer per keystream
class ComposeSyllabics(Section):
    def __init__(self, table: CompositionTable):
        self.composer = Composer(table)

    async def pump(self, source: trio.MemoryReceiveChannel[AnyKeystroke], sink: trio.MemorySendChannel[str]):
        async with aclosing(source), aclosing(sink):
            async for keystroke in source:
                emitted = self.composer.handle(keystroke)
                if emitted:
                    await sink.send(emitted)
            # end of input flushes whatever is still pending
            emitted = self.composer.flush()
            if emitted:
                await sink.send(emitted)


@asynccontextmanager
async def pump_all(first_source: AsyncIterable[Any], *sections: Section):
    async with trio.open_nursery() as nursery:
        section_input = first_source
        for section in sections:
            section_send_channel, section_receive_channel = trio.open_memory_channel(0)
            nursery.start_soon(section.pump, section_input, section_send_channel)
            section_input = section_receive_channel
        yield section_input
        nursery.cancel_scope.cancel()


@asynccontextmanager
async def make_keystream(
    key_event_channel: trio.MemoryReceiveChannel[Union[KeyEvent, KeyboardDisconnect]],
    table: CompositionTable,
    layout: Layout,
):
    sections = [
        ModifierTracking(),
        OnlyPresses(),
        ClassifyKeystrokes(layout),
        ComposeSyllabics(table),
    ]
    async with pump_all(key_event_channel, *sections) as keystream:
        yield keystream
