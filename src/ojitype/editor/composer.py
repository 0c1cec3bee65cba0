from __future__ import annotations

import logging
import typing

import msgspec

from ..commontypes import Vowel
from .keystrokes import AtomicKey, EasternFinalKey, FlushKey, LengthKey, SystemKey, VowelKey, WDotKey

if typing.TYPE_CHECKING:
    from ..table.compositions import CompositionTable
    from .keystrokes import AnyKeystroke, Composable

logger = logging.getLogger(__name__)


class Composer:
    """Turns classified keystrokes into syllabics text for one input context.

    Eastern finals, w-dots and vowel length dots are held in a small buffer until a
    vowel completes the syllable or something else forces them out one by one.
    Every call to :meth:`handle` returns the text to append, possibly empty.
    """

    _buffer: list[Composable]

    def __init__(self, table: CompositionTable):
        self.table = table
        self._buffer = []

    @property
    def pending(self) -> tuple[Composable, ...]:
        return tuple(self._buffer)

    @property
    def composing_chars(self) -> str:
        return "".join(entry.compose for entry in self._buffer)

    def reset(self):
        if self._buffer:
            logger.debug("Discarding %d pending keystrokes", len(self._buffer))
        self._buffer.clear()

    def flush(self) -> str:
        if not self._buffer:
            return ""
        entries = self._buffer
        if isinstance(entries[-1], LengthKey):
            # a length dot has no standalone form
            entries = entries[:-1]
        flushed = "".join(entry.symbol for entry in entries)
        self._buffer.clear()
        return flushed

    def handle(self, keystroke: AnyKeystroke) -> str:
        if keystroke.shift and not isinstance(keystroke, SystemKey):
            # shift isolates the key as its own composition
            unshifted = msgspec.structs.replace(keystroke, shift=False)
            return self.flush() + self._handle(unshifted) + self.flush()
        return self._handle(keystroke)

    def _handle(self, keystroke: AnyKeystroke) -> str:
        match keystroke:
            case SystemKey():
                self.reset()
                return ""
            case FlushKey():
                return self.flush()
            case AtomicKey(symbol=symbol):
                return self.flush() + symbol
            case EasternFinalKey():
                flushed = self.flush()
                self._buffer.append(keystroke)
                return flushed
            case WDotKey():
                flushed = ""
                if self._buffer and isinstance(self._buffer[-1], (LengthKey, WDotKey)):
                    flushed = self.flush()
                self._buffer.append(keystroke)
                return flushed
            case LengthKey():
                if not (self._buffer and isinstance(self._buffer[-1], LengthKey)):
                    self._buffer.append(keystroke)
                return ""
            case VowelKey():
                return self._complete(keystroke)
            case _:
                raise TypeError(f"Unexpected keystroke {keystroke!r}")

    def _complete(self, vowel: VowelKey) -> str:
        entries = self._buffer
        if vowel.vowel is Vowel.E and entries and isinstance(entries[-1], LengthKey):
            # e has no long form, so the dot does nothing
            entries = entries[:-1]
        result = self.table.lookup([entry.compose for entry in entries] + [vowel.compose])
        if result is None:
            logger.debug("No syllable for %r + %r; flushing", self.composing_chars, vowel.compose)
            result = self.flush() + vowel.compose
        self._buffer.clear()
        return result
