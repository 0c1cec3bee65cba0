import dataclasses
import json
import logging
import operator
import pathlib
import typing

import cattrs
from cattrs.gen import make_dict_structure_fn

from .device.keycodes import KeyCode
from .editor.layout import Layout
from .table.compositions import CompositionTable, build_composition_table
from .table.syllabary import Syllabary

logger = logging.getLogger(__name__)

KEYMAPS = {
    "KEY_A": "vowel:a",
    "KEY_E": "vowel:e",
    "KEY_I": "vowel:i",
    "KEY_O": "vowel:o",
    "KEY_P": "final:p",
    "KEY_T": "final:t",
    "KEY_C": "final:c",
    "KEY_K": "final:k",
    "KEY_M": "final:m",
    "KEY_N": "final:n",
    "KEY_S": "final:s",
    "KEY_X": "final:S",
    "KEY_Y": "final:y",
    "KEY_L": "final:l",
    "KEY_R": "final:r",
    "KEY_W": "wdot:left",
    "KEY_U": "wdot:right",
    "KEY_APOSTROPHE": "length",
    "KEY_SEMICOLON": "flush",
    "KEY_H": "common:h",
    "KEY_1": "western:p",
    "KEY_2": "western:t",
    "KEY_3": "western:c",
    "KEY_4": "western:k",
    "KEY_5": "western:m",
    "KEY_6": "western:n",
    "KEY_7": "western:s",
    "KEY_8": "western:S",
    "KEY_9": "western:y",
    "KEY_MINUS": "western:l",
    "KEY_EQUAL": "western:r",
    "KEY_0": "alternate:y",
    "KEY_DOT": "symbol:full_stop",
    "KEY_COMMA": "symbol:comma",
    "KEY_SLASH": "symbol:question_mark",
    "KEY_GRAVE": "symbol:chi_sign",
    "KEY_BACKSLASH": "symbol:hyphen",
    "KEY_Q": "symbol:glottal_stop",
    "KEY_SPACE": "text: ",
    "KEY_TAB": "text:\t",
    "KEY_ENTER": "text:\n",
}


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v))
settings_converter.register_unstructure_hook(KeyCode, operator.attrgetter("name"))
settings_converter.register_structure_hook(KeyCode, lambda v, _: KeyCode[v])


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: pathlib.Path
    # the shipped table is used when these are unset
    chartable_path: typing.Optional[pathlib.Path] = None
    composition_table_path: typing.Optional[pathlib.Path] = None
    keymaps: dict[KeyCode, str]

    def load_syllabary(self) -> Syllabary:
        if self.chartable_path is None:
            return Syllabary.default()
        return Syllabary.load(self.chartable_path)

    def load_composition_table(self, syllabary: Syllabary) -> CompositionTable:
        if self.composition_table_path is None:
            return build_composition_table(syllabary)
        logger.debug("Loading composition table from %s", self.composition_table_path)
        return CompositionTable.load(self.composition_table_path)

    def load_layout(self, syllabary: Syllabary) -> Layout:
        return Layout.from_keymaps(self.keymaps, syllabary)

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as outfile:
            json.dump(raw, outfile, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        with src.open() as infile:
            raw = json.load(infile)
        raw["_path"] = src
        return settings_converter.structure(raw, cls)

    @classmethod
    def default(cls, path: pathlib.Path):
        return settings_converter.structure({"_path": path, "keymaps": KEYMAPS}, cls)

    @classmethod
    def for_test(cls):
        return cls.default(pathlib.Path("test.settings.json"))


settings_converter.register_structure_hook(Settings, make_dict_structure_fn(Settings, settings_converter))
