import pytest
from ojitype.commontypes import LEFT_WDOT_CODEPOINT, VOWEL_LENGTH_CODEPOINT, Consonant, Vowel, VowelLength, WDotSide
from ojitype.table.compositions import (
    CompositionTable,
    DuplicateCompositionError,
    MalformedCompositionError,
    build_composition_table,
    canonical_key,
    composition_key,
)
from ojitype.table.definitions import Syllable
from ojitype.table.syllabary import MISSING_SYLLABLES, Syllabary, syllable_matrix


def test_table_size(table: CompositionTable):
    # every matrix entry but the five known gaps, plus the four bare vowels
    assert len(table) == 247


def test_every_syllable_is_reachable(syllabary, table: CompositionTable):
    for syllable in syllable_matrix():
        if syllable in MISSING_SYLLABLES:
            assert composition_key(syllabary, syllable) not in table
            continue
        assert table[composition_key(syllabary, syllable)] == syllabary.character_for(syllable)


def test_keys_are_in_codepoint_order(table: CompositionTable):
    for key, value in table.items():
        assert [ord(c) for c in key] == sorted(ord(c) for c in key)
        assert len(set(key)) == len(key)
        assert len(value) == 1


def test_bare_vowels_map_to_themselves(table: CompositionTable):
    for vowel in "ᐁᐃᐅᐊ":
        assert table[(vowel,)] == vowel


def test_consonant_and_vowel(table: CompositionTable):
    assert table[("ᐊ", "ᐸ")] == "ᐸ"
    assert table.lookup(["ᐸ", "ᐊ"]) == "ᐸ"


def test_dotted_long_vowel(syllabary, table: CompositionTable):
    key = composition_key(syllabary, Syllable(wdot=WDotSide.LEFT, length=VowelLength.LONG, vowel=Vowel.I))
    assert key == (chr(0x1403), chr(VOWEL_LENGTH_CODEPOINT), chr(LEFT_WDOT_CODEPOINT))
    assert table[key] == "ᐐ"


def test_typing_order_does_not_matter(table: CompositionTable):
    pwaa = ["ᐸ", chr(LEFT_WDOT_CODEPOINT), chr(VOWEL_LENGTH_CODEPOINT), "ᐊ"]
    assert table.lookup(pwaa) == "ᑆ"
    assert table.lookup(reversed(pwaa)) == "ᑆ"


def test_known_gap_is_absent(syllabary, table: CompositionTable):
    gap = Syllable(consonant=Consonant.R, wdot=WDotSide.RIGHT, vowel=Vowel.A)
    assert table.lookup(composition_key(syllabary, gap)) is None


def test_lone_modifiers_compose_nothing(table: CompositionTable):
    assert table.lookup([chr(VOWEL_LENGTH_CODEPOINT)]) is None
    assert table.lookup(["ᐸ"]) is None
    assert table.lookup([]) is None


def test_canonical_key():
    assert canonical_key("ᐸᐊᐄ") == ("ᐄ", "ᐊ", "ᐸ")


def test_dumps_and_loads(table: CompositionTable):
    loaded = CompositionTable.loads(table.dumps())
    assert len(loaded) == len(table)
    assert dict(loaded.items()) == dict(table.items())
    assert loaded.unstructure()["ᐊᐸ"] == "ᐸ"


def test_save_and_load(tmp_path, table: CompositionTable):
    dest = tmp_path / "compositions.json"
    table.save(dest)
    assert dest.read_bytes().endswith(b"}\n")
    assert CompositionTable.load(dest).lookup(["ᐸ", "ᐊ"]) == "ᐸ"


@pytest.mark.parametrize(
    "data",
    (
        '{"ᐸᐊ": "ᐸ"}',
        '{"": "ᐸ"}',
        '{"ᐊᐸ": "ᐸᐸ"}',
        '{"ᐊᐸ": ""}',
    ),
)
def test_loads_rejects_malformed_tables(data: str):
    with pytest.raises(MalformedCompositionError):
        CompositionTable.loads(data)


def test_colliding_keys_are_rejected(chartable_lines):
    # putting pa on the vowel length codepoint makes pa and +a share a key
    swapped = {"1404 +i": "1438 +i", "1438 pa": "1404 pa"}
    syllabary = Syllabary.from_lines([swapped.get(line.strip(), line) for line in chartable_lines])
    with pytest.raises(DuplicateCompositionError, match="1404 140A") as excinfo:
        build_composition_table(syllabary)
    assert excinfo.value.key == ("ᐄ", "ᐊ")
