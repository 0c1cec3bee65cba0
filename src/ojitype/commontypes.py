import enum


class OjitypeError(Exception):
    pass


class Consonant(enum.Enum):
    P = "p"
    T = "t"
    C = "c"
    K = "k"
    M = "m"
    N = "n"
    S = "s"
    SH = "S"
    Y = "y"
    L = "l"
    R = "r"

    @property
    def display(self):
        return "sh" if self is Consonant.SH else self.value


class CommonConsonant(enum.Enum):
    W = "w"
    H = "h"


class AlternateConsonant(enum.Enum):
    Y = "y"
    L = "l"
    R = "r"


class WDotSide(enum.Enum):
    NONE = "."
    LEFT = "w"
    RIGHT = "u"


class VowelLength(enum.Enum):
    NORMAL = "."
    LONG = "+"


class Vowel(enum.Enum):
    A = "a"
    E = "e"
    I = "i"  # noqa: E741
    O = "o"


# Codepoints of the composable entities that have no syllable of their own in the
# composition keys. The keyboard shows these glyphs on the w-dot and length keys.
LEFT_WDOT_CODEPOINT = 0x140E
RIGHT_WDOT_CODEPOINT = 0x140F
VOWEL_LENGTH_CODEPOINT = 0x1404

WDOT_CODEPOINTS = {
    WDotSide.LEFT: LEFT_WDOT_CODEPOINT,
    WDotSide.RIGHT: RIGHT_WDOT_CODEPOINT,
}
