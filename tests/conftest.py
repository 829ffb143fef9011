import pytest

from FieldEncryption.field_bindings import clear_registry
from FieldEncryption.key_management import MappingKeyResolver


@pytest.fixture
def resolver():
    return MappingKeyResolver({
        "secrets": {
            "ssnKey": "correct-horse",
            "notesKey": "battery-staple",
        },
    })


@pytest.fixture(autouse=True)
def _clean_registry():
    yield
    clear_registry()
