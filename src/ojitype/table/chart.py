"""HTML proofing charts for checking a font against the character data table."""
from __future__ import annotations

import html
import re
import typing

from ..commontypes import AlternateConsonant, CommonConsonant, Consonant, OjitypeError, Vowel, VowelLength, WDotSide
from .definitions import AlternateFinal, CommonFinal, EasternFinal, Ghost, Punctuation, Syllable, WesternFinal
from .syllabary import INITIALS, MISSING_SYLLABLES

if typing.TYPE_CHECKING:
    from .syllabary import Syllabary


class ChartError(OjitypeError):
    pass


# printable ASCII except the apostrophe, since these end up in quoted CSS strings
CSS_SAFE_MATCHER = re.compile(r"[\x20-\x26\x28-\x7e]+")

# column order of the syllable charts
CHART_COLUMNS = (
    (VowelLength.NORMAL, Vowel.E),
    (VowelLength.NORMAL, Vowel.I),
    (VowelLength.LONG, Vowel.I),
    (VowelLength.NORMAL, Vowel.O),
    (VowelLength.LONG, Vowel.O),
    (VowelLength.NORMAL, Vowel.A),
    (VowelLength.LONG, Vowel.A),
)

STYLESHEET = """\
@font-face {{
    font-family: '{font_name}';
    src: url('{font_path}') format('woff');
    font-weight: normal;
    font-style: normal;
}}

body {{
  max-width: 35em;
  margin-left: auto;
  margin-right: auto;
  padding-left: 0.5em;
  padding-right: 0.5em;
  margin-top: 2.5em;
  margin-bottom: 5em;
  font-family: '{font_name}', sans-serif;
  color: black;
  background-color: linen;
}}

table {{
  border-collapse: collapse;
  margin-top: 2.5em;
  margin-bottom: 2.5em;
}}

td {{
  border: thin solid;
  padding: 0.5em;
  text-align: center;
}}

th {{
  border: thin solid;
  padding: 0.5em;
  font-weight: bold;
  text-align: center;
}}

.missing {{
  background-color: silver;
}}
"""


def _cell(content: str, tag: str = "td", **attrs: str) -> str:
    attributes = "".join(f' {k.rstrip("_")}="{html.escape(v)}"' for k, v in attrs.items())
    return f"<{tag}{attributes}>{content}</{tag}>"


def _row(*cells: str) -> str:
    return "  <tr>\n" + "".join(f"    {cell}\n" for cell in cells) + "  </tr>\n"


def _table(header: list[str], rows: list[str]) -> str:
    return "<table>\n" + _row(*header) + "".join(rows) + "</table>\n"


def _missing(colspan: int = 1) -> str:
    if colspan == 1:
        return _cell("&nbsp;", class_="missing")
    return _cell("&nbsp;", class_="missing", colspan=str(colspan))


def _codepoint(codepoint: int, prefix: str = "U+") -> str:
    return f"{prefix}{codepoint:04X}"


def _named_table(syllabary: Syllabary, kind: type, title: str, show_symbol: bool) -> str:
    records = sorted(syllabary.of_kind(kind), key=lambda r: r.definition.name)
    if show_symbol:
        header = [_cell(title, "th"), _cell("Symbol", "th", colspan="2")]
        rows = [
            _row(_cell(html.escape(r.definition.name)), _cell(html.escape(r.character)), _cell(_codepoint(r.codepoint)))
            for r in records
        ]
    else:
        header = [_cell(title, "th"), _cell("Codepoint", "th")]
        rows = [_row(_cell(html.escape(r.definition.name)), _cell(_codepoint(r.codepoint))) for r in records]
    return _table(header, rows)


def _finals_tables(syllabary: Syllabary) -> str:
    common_rows = []
    for common in CommonConsonant:
        codepoint = syllabary.codepoint_for(CommonFinal(consonant=common))
        common_rows.append(_row(_cell(common.value), _cell(chr(codepoint)), _cell(_codepoint(codepoint))))
    common = _table([_cell("Common final", "th"), _cell("Symbol", "th", colspan="2")], common_rows)

    rows = []
    alternates = {a.value: a for a in AlternateConsonant}
    for consonant in Consonant:
        cells = [_cell(consonant.display)]
        for definition in (EasternFinal(consonant=consonant), WesternFinal(consonant=consonant)):
            codepoint = syllabary.codepoint_for(definition)
            cells += [_cell(chr(codepoint)), _cell(_codepoint(codepoint, prefix=""))]
        if consonant.value in alternates:
            codepoint = syllabary.codepoint_for(AlternateFinal(consonant=alternates[consonant.value]))
            cells += [_cell(chr(codepoint)), _cell(_codepoint(codepoint, prefix=""))]
        else:
            cells.append(_missing(colspan=2))
        rows.append(_row(*cells))
    header = [_cell("Final", "th")] + [_cell(title, "th", colspan="2") for title in ("Eastern", "Western", "Alternate")]
    return common + _table(header, rows)


def _syllable_table(syllabary: Syllabary, wdot: WDotSide) -> str:
    prefix = "" if wdot is WDotSide.NONE else "w"
    header = [_cell("Initial", "th"), _cell(prefix + "e", "th")]
    header += [_cell(prefix + vowel, "th", colspan="2") for vowel in ("i", "o", "a")]
    rows = []
    for initial in INITIALS:
        cells = [_cell("&mdash;" if initial is None else initial.display, "th")]
        for length, vowel in CHART_COLUMNS:
            syllable = Syllable(consonant=initial, wdot=wdot, length=length, vowel=vowel)
            if syllable in MISSING_SYLLABLES:
                cells.append(_missing())
            else:
                cells.append(_cell(html.escape(syllabary.character_for(syllable))))
        rows.append(_row(*cells))
    return _table(header, rows)


def render_chart(syllabary: Syllabary, font_path: str, font_name: str) -> str:
    if not CSS_SAFE_MATCHER.fullmatch(font_path):
        raise ChartError("Font path is invalid")
    if not CSS_SAFE_MATCHER.fullmatch(font_name):
        raise ChartError("Font name is invalid")

    parts = [
        "<!DOCTYPE html>\n",
        '<html lang="en">\n',
        "  <head>\n",
        '    <meta charset="utf-8"/>\n',
        "    <title>Syllabics test charts</title>\n",
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0"/>\n',
        "    <style>\n",
        STYLESHEET.format(font_name=font_name, font_path=font_path),
        "    </style>\n",
        "  </head>\n",
        "  <body>\n",
        _named_table(syllabary, Punctuation, "Punctuation", show_symbol=True),
        _named_table(syllabary, Ghost, "Ghost symbol", show_symbol=False),
        _finals_tables(syllabary),
    ]
    parts.extend(_syllable_table(syllabary, wdot) for wdot in WDotSide)
    parts.append("  </body>\n</html>\n")
    return "".join(parts)
