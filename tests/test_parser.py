from dataclasses import dataclass, field

import pytest

from clicky.parser import (
    get_field_value,
    get_field_value_case_insensitive,
    get_struct_headers,
    get_struct_row,
    get_table_fields,
    parse_struct_schema,
    struct_to_row,
    to_pretty_data,
    to_pretty_data_with_format_hint,
)
from clicky.schema import PrettyData


@dataclass
class Person:
    Name: str = field(default="", metadata={"json": "name", "pretty": "label=Name"})
    Age: int = field(default=0, metadata={"json": "age", "pretty": "label=Age,format=number"})
    Email: str = field(default="", metadata={"json": "email", "pretty": "label=Email Address"})
    Hidden: str = field(default="", metadata={"pretty": "hide"})


@dataclass
class Order:
    Id: str = ""
    Items: list = field(default_factory=list, metadata={"pretty": "table"})
    Tags: dict = field(default_factory=dict)
    _secret_note: str = ""


class Node:
    def label(self):
        return "root"

    def children(self):
        return []


class Fancy:
    def pretty(self):
        return "fancy"


def make_person():
    return Person("John Doe", 30, "john@example.com", "this should not appear")


def test_none_gives_empty_data():
    data = to_pretty_data(None)
    assert data.schema.fields == []
    assert data.values == {}
    assert data.original is None


def test_pretty_data_passes_through():
    existing = PrettyData()
    assert to_pretty_data(existing) is existing
    assert to_pretty_data_with_format_hint(existing, "table") is existing


def test_struct_schema_excludes_hidden():
    data = to_pretty_data(make_person())
    assert [f.name for f in data.schema.fields] == ["Name", "Age", "Email"]
    assert data.values["Name"].value == "John Doe"
    assert data.values["Age"].value == 30
    assert data.schema.fields[2].label == "Email Address"
    assert "Hidden" not in data.values


def test_struct_with_table_field():
    order = Order("o1", [make_person(), None, make_person()], {1: "a"}, "x")
    data = to_pretty_data(order)
    assert [f.name for f in data.schema.fields] == ["Id", "Items", "Tags"]
    assert len(data.tables["Items"]) == 2
    assert [f.name for f in data.schema.fields[1].fields] == ["name", "age", "email"]
    assert data.values["Tags"].value == {"1": "a"}


def test_list_becomes_table():
    people = [make_person(), make_person()]
    data = to_pretty_data(people)
    assert [f.name for f in data.schema.fields] == ["data"]
    assert data.schema.fields[0].format == "table"
    rows = data.tables["data"]
    assert len(rows) == 2
    assert set(rows[0]) == {"name", "age", "email"}
    assert rows[0]["name"].value == "John Doe"
    assert data.original is people


def test_list_skips_none_elements():
    data = to_pretty_data([make_person(), None])
    assert len(data.tables["data"]) == 1


def test_empty_list():
    items = []
    data = to_pretty_data(items)
    assert data.schema.fields == []
    assert data.original is items


def test_list_of_scalars_is_rejected():
    with pytest.raises(TypeError):
        to_pretty_data([1, 2, 3])


def test_mapping_is_rejected():
    with pytest.raises(TypeError):
        to_pretty_data({"a": 1})


def test_tree_node_detected():
    node = Node()
    data = to_pretty_data(node)
    assert data.schema.fields[0].format == "tree"
    assert data.values["tree"].value is node


def test_pretty_object_detected():
    obj = Fancy()
    data = to_pretty_data(obj)
    assert data.schema.fields[0].name == "content"
    assert data.values["content"].value is obj


@pytest.mark.parametrize("hint", ["table", "tree", "pretty"])
def test_format_hint_with_list(hint):
    data = to_pretty_data_with_format_hint([make_person()], hint)
    assert data.schema.fields[0].format == "table"
    assert len(data.tables["data"]) == 1


def test_format_hint_with_struct_matches_plain():
    person = make_person()
    hinted = to_pretty_data_with_format_hint(person, "table")
    assert hinted.schema == to_pretty_data(person).schema


def test_parse_struct_schema_rejects_non_struct():
    with pytest.raises(TypeError):
        parse_struct_schema(42)
    assert len(parse_struct_schema(make_person()).fields) == 3


def test_get_table_fields_uses_json_names():
    names = [f.name for f in get_table_fields(make_person())]
    assert names == ["name", "age", "email"]


def test_headers_and_row_line_up():
    person = make_person()
    assert get_struct_headers(person) == ["name", "age", "email"]
    assert get_struct_row(person) == ["John Doe", "30", "john@example.com"]


def test_struct_to_row():
    row = struct_to_row(make_person())
    assert list(row) == ["name", "age", "email"]
    assert row["age"].field.format == "number"
    with pytest.raises(TypeError):
        struct_to_row(None)


def test_get_field_value_by_name_or_json_tag():
    person = make_person()
    assert get_field_value(person, "Name") == "John Doe"
    assert get_field_value(person, "email") == "john@example.com"
    with pytest.raises(KeyError):
        get_field_value(person, "missing")


def test_get_field_value_case_insensitive():
    person = make_person()
    assert get_field_value_case_insensitive(person, "aGe") == 30
    with pytest.raises(KeyError):
        get_field_value_case_insensitive(person, "nope")
    with pytest.raises(KeyError):
        get_field_value_case_insensitive("text", "Name")