from __future__ import annotations

from uuid import UUID, uuid4

import pytest
from crudkit.utils.identifiers import is_uuid, parse_uuid


@pytest.mark.parametrize(
    "value",
    [
        "3f2504e0-4f89-11d3-9a0c-0305e82c3301",
        "3F2504E0-4F89-11D3-9A0C-0305E82C3301",
        uuid4(),
    ],
)
def test_is_uuid_accepts_canonical_forms(value):
    assert is_uuid(value)


@pytest.mark.parametrize(
    "value",
    [
        "not-a-uuid",
        "",
        "3f2504e04f8911d39a0c0305e82c3301",
        "{3f2504e0-4f89-11d3-9a0c-0305e82c3301}",
        "3f2504e0-4f89-11d3-9a0c-0305e82c3301\n",
        None,
        42,
    ],
)
def test_is_uuid_rejects_everything_else(value):
    assert not is_uuid(value)


def test_parse_uuid():
    value = "3f2504e0-4f89-11d3-9a0c-0305e82c3301"
    assert parse_uuid(value) == UUID(value)
    with pytest.raises(ValueError):
        parse_uuid("nope")
