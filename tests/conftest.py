import importlib.resources

import msgspec
import pytest
from ojitype.editor.composer import Composer
from ojitype.editor.layout import resolve_role
from ojitype.settings import Settings
from ojitype.table.compositions import build_composition_table
from ojitype.table.syllabary import Syllabary


@pytest.fixture(scope="session")
def chartable_lines():
    return importlib.resources.files("ojitype.data").joinpath("chartable.txt").read_text(encoding="ascii").splitlines()


@pytest.fixture(scope="session")
def syllabary():
    return Syllabary.default()


@pytest.fixture(scope="session")
def table(syllabary):
    return build_composition_table(syllabary)


@pytest.fixture(scope="session")
def layout(syllabary):
    return Settings.for_test().load_layout(syllabary)


@pytest.fixture
def composer(table):
    return Composer(table)


@pytest.fixture(scope="session")
def key(syllabary):
    def make_key(role: str, shift: bool = False):
        keystroke = resolve_role(role, syllabary)
        if shift:
            keystroke = msgspec.structs.replace(keystroke, shift=True)
        return keystroke

    return make_key
