import pytest
from ojitype.commontypes import Vowel, WDotSide
from ojitype.device.hwtypes import AnnotatedKeyEvent, KeyPress, ModifierAnnotation
from ojitype.device.keycodes import KeyCode
from ojitype.editor.keystrokes import AtomicKey, EasternFinalKey, FlushKey, LengthKey, SystemKey, VowelKey, WDotKey
from ojitype.editor.layout import Layout, LayoutError, resolve_role


def press(key: KeyCode, is_modifier=False, **modifiers):
    return AnnotatedKeyEvent(
        key=key,
        press=KeyPress.PRESSED,
        annotation=ModifierAnnotation(**modifiers),
        is_modifier=is_modifier,
    )


def test_resolve_roles(syllabary):
    assert resolve_role("vowel:i", syllabary) == VowelKey(vowel=Vowel.I, compose="ᐃ")
    final = resolve_role("final:S", syllabary)
    assert isinstance(final, EasternFinalKey)
    assert (final.compose, final.symbol) == ("ᔕ", "ᔥ")
    assert resolve_role("wdot:right", syllabary) == WDotKey(side=WDotSide.RIGHT, compose="ᐏ", symbol="ᐤ")
    assert resolve_role("western:p", syllabary) == AtomicKey(symbol="ᑊ")
    assert resolve_role("common:h", syllabary) == AtomicKey(symbol="ᐦ")
    assert resolve_role("alternate:y", syllabary) == AtomicKey(symbol="ᐩ")
    assert resolve_role("symbol:full_stop", syllabary) == AtomicKey(symbol="᙮")
    assert resolve_role("ghost:zero_width_joiner", syllabary) == AtomicKey(symbol="\u200d")
    assert resolve_role("text: ", syllabary) == AtomicKey(symbol=" ")
    assert resolve_role("length", syllabary) == LengthKey()
    assert resolve_role("flush", syllabary) == FlushKey()


@pytest.mark.parametrize(
    "role",
    ("vowel:u", "final:w", "wdot:middle", "symbol:interrobang", "alternate:p", "western:"),
)
def test_unresolvable_roles(syllabary, role: str):
    with pytest.raises(LayoutError, match="Cannot resolve"):
        resolve_role(role, syllabary)


@pytest.mark.parametrize("role", ("", "backspace", "text:", "length:long", "flush:now"))
def test_unknown_roles(syllabary, role: str):
    with pytest.raises(LayoutError, match="Unknown keymap role"):
        resolve_role(role, syllabary)


def test_classify(layout: Layout):
    assert layout.classify(press(KeyCode.KEY_A)) == VowelKey(vowel=Vowel.A, compose="ᐊ")
    assert layout.classify(press(KeyCode.KEY_A, capslock=True)) == VowelKey(vowel=Vowel.A, compose="ᐊ")
    assert layout.classify(press(KeyCode.KEY_A, shift=True)) == VowelKey(vowel=Vowel.A, compose="ᐊ", shift=True)
    assert layout.classify(press(KeyCode.KEY_SEMICOLON)) == FlushKey()


@pytest.mark.parametrize("modifier", ("alt", "ctrl", "meta"))
def test_system_modifiers(layout: Layout, modifier: str):
    assert layout.classify(press(KeyCode.KEY_A, **{modifier: True})) == SystemKey()
    assert layout.classify(press(KeyCode.KEY_A, shift=True, **{modifier: True})) == SystemKey()


def test_unmapped_keys_are_system_keys(layout: Layout):
    assert layout.classify(press(KeyCode.KEY_F1)) == SystemKey()
    assert layout.classify(press(KeyCode.KEY_BACKSPACE)) == SystemKey()


def test_modifier_presses_are_ignored(layout: Layout):
    assert layout.classify(press(KeyCode.KEY_LEFTSHIFT, is_modifier=True, shift=True)) is None
    assert layout.classify(press(KeyCode.KEY_CAPSLOCK, is_modifier=True, capslock=True)) is None


def test_layout_is_read_only(layout: Layout):
    with pytest.raises(TypeError):
        layout.keys[KeyCode.KEY_F1] = FlushKey()
