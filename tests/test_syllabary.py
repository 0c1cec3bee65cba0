import pytest
from ojitype.commontypes import AlternateConsonant, CommonConsonant, Consonant, Vowel, VowelLength, WDotSide
from ojitype.table.definitions import (
    AlternateFinal,
    CommonFinal,
    EasternFinal,
    Ghost,
    Punctuation,
    Record,
    Syllable,
    WesternFinal,
)
from ojitype.table.syllabary import (
    MISSING_SYLLABLES,
    DuplicateCodepointError,
    DuplicateDefinitionError,
    MissingFinalError,
    MissingSyllableError,
    SealedSyllabaryError,
    Syllabary,
    syllable_matrix,
)


def without(lines, *removed):
    remaining = [line for line in lines if line.strip() not in removed]
    assert len(remaining) == len(lines) - len(removed)
    return remaining


def test_default_table(syllabary: Syllabary):
    assert syllabary.sealed
    assert len(syllabary) == 285
    assert len(syllabary.of_kind(Syllable)) == 247
    assert len(syllabary.of_kind(Punctuation)) == 7
    assert len(syllabary.of_kind(Ghost)) == 4


def test_syllable_round_trip(syllabary: Syllabary):
    for record in syllabary.of_kind(Syllable):
        definition = record.definition
        rebuilt = Syllable(
            consonant=definition.consonant,
            wdot=definition.wdot,
            length=definition.length,
            vowel=definition.vowel,
        )
        assert syllabary.codepoint_for(rebuilt) == record.codepoint
        assert syllabary.definition_for(record.codepoint) == rebuilt


def test_lookups(syllabary: Syllabary):
    assert syllabary.character_for(Syllable(consonant=Consonant.P, vowel=Vowel.A)) == "ᐸ"
    assert syllabary.character_for(EasternFinal(consonant=Consonant.P)) == "ᑉ"
    assert syllabary.character_for(CommonFinal(consonant=CommonConsonant.W)) == "ᐤ"
    assert syllabary.codepoint_for(Punctuation(name="full_stop")) == 0x166E
    assert WesternFinal(consonant=Consonant.M) in syllabary
    assert Syllable(consonant=Consonant.R, wdot=WDotSide.RIGHT, vowel=Vowel.A) not in syllabary


def test_known_missing_syllables_are_absent(syllabary: Syllabary):
    assert len(MISSING_SYLLABLES) == 5
    for syllable in MISSING_SYLLABLES:
        assert syllable not in syllabary


def test_syllable_matrix():
    combinations = list(syllable_matrix())
    # 12 initials, 3 dot positions, 7 vowel and length pairs
    assert len(combinations) == 12 * 3 * 7
    assert len(set(combinations)) == len(combinations)
    assert not any(s.vowel is Vowel.E and s.length is VowelLength.LONG for s in combinations)
    assert combinations[0] == Syllable(vowel=Vowel.A)


def test_duplicate_codepoint_leaves_indices_untouched():
    syllabary = Syllabary()
    syllabary.add(Record(codepoint=0x1449, definition=EasternFinal(consonant=Consonant.P)))
    with pytest.raises(DuplicateCodepointError, match="1449"):
        syllabary.add(Record(codepoint=0x1449, definition=EasternFinal(consonant=Consonant.T)))
    assert len(syllabary) == 1
    assert EasternFinal(consonant=Consonant.T) not in syllabary


def test_duplicate_definition_leaves_indices_untouched():
    syllabary = Syllabary()
    syllabary.add(Record(codepoint=0x1449, definition=EasternFinal(consonant=Consonant.P)))
    with pytest.raises(DuplicateDefinitionError, match="EasternFinal 'p'"):
        syllabary.add(Record(codepoint=0x1466, definition=EasternFinal(consonant=Consonant.P)))
    assert len(syllabary) == 1
    assert 0x1466 not in syllabary.by_codepoint


def test_duplicate_line_in_table(chartable_lines):
    with pytest.raises(DuplicateCodepointError):
        Syllabary.from_lines(chartable_lines + ["1438 'p"])
    with pytest.raises(DuplicateDefinitionError):
        Syllabary.from_lines(chartable_lines + ["E000 pa"])


@pytest.mark.parametrize(
    "line,missing",
    (
        ("1449 p", EasternFinal(consonant=Consonant.P)),
        ("1421 'S", WesternFinal(consonant=Consonant.SH)),
        ("1426 h", CommonFinal(consonant=CommonConsonant.H)),
        ('14EB "l', AlternateFinal(consonant=AlternateConsonant.L)),
    ),
)
def test_missing_final(chartable_lines, line, missing):
    with pytest.raises(MissingFinalError) as excinfo:
        Syllabary.from_lines(without(chartable_lines, line))
    assert excinfo.value.definition == missing


@pytest.mark.parametrize(
    "line,notation",
    (
        ("1438 pa", "pa"),
        ("140B +a", "+a"),
        ("18C6 nwi", "nwi"),
        ("154F ru+a", "ru+a"),
        ("1524 Su+a", "Su+a"),
    ),
)
def test_missing_syllable(chartable_lines, line, notation):
    with pytest.raises(MissingSyllableError, match=f"'{notation}'".replace("+", r"\+")):
        Syllabary.from_lines(without(chartable_lines, line))


def test_validated_syllabary_is_sealed(syllabary: Syllabary):
    with pytest.raises(SealedSyllabaryError):
        syllabary.add(Record(codepoint=0xE000, definition=Punctuation(name="extra")))
    with pytest.raises(TypeError):
        syllabary.by_codepoint[0xE000] = Punctuation(name="extra")


def test_load(tmp_path, chartable_lines):
    src = tmp_path / "chartable.txt"
    src.write_text("\n".join(chartable_lines) + "\n", encoding="ascii")
    loaded = Syllabary.load(src)
    assert dict(loaded.by_codepoint) == dict(Syllabary.default().by_codepoint)
