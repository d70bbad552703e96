from dataclasses import dataclass, field

import pytest

from clicky.pretty_formatter import PrettyFormatter
from clicky.schema import (
    FieldValue,
    PrettyData,
    PrettyField,
    PrettyObject,
    TableOptions,
)
from clicky.style import strip_ansi
from clicky.tree_formatter import SimpleTreeNode


@dataclass
class Person:
    name: str = field(default="", metadata={"json": "name", "pretty": "label=Name"})
    age: int = field(default=0, metadata={"json": "age", "pretty": "label=Age"})
    secret_note: str = field(default="", metadata={"pretty": "hide"})


@dataclass
class Single:
    name: str = ""


@dataclass
class Address:
    street: str = ""
    city: str = ""


@pytest.fixture
def plain():
    return PrettyFormatter(no_color=True)


def test_single_field_summary(plain):
    assert plain.format(Single(name="Alice")) == "Name: Alice"


def test_two_fields_share_a_row(plain):
    out = plain.format(Person(name="Bob", age=41, secret_note="hidden value"))
    assert "\n" not in out
    assert out.startswith("Name: Bob")
    assert "Age: 41" in out
    assert len(out) == 100
    assert "hidden value" not in out


def test_table_of_dataclasses(plain):
    out = plain.format([Person(name="Ann", age=3), Person(name="Ben", age=5)])
    lines = out.split("\n")
    assert lines[0].startswith("┌") and lines[0].endswith("┐")
    assert lines[-1].startswith("└") and lines[-1].endswith("┘")
    assert "Name" in lines[1] and "Age" in lines[1]
    assert any("Ann" in line for line in lines)
    assert any("Ben" in line for line in lines)
    assert len({len(line) for line in lines}) == 1
    assert "hidden" not in out


def test_table_widths_consistent_with_colors():
    out = PrettyFormatter().format([Person(name="Ann", age=3)])
    lines = strip_ansi(out).split("\n")
    assert len({len(line) for line in lines}) == 1
    assert "\x1b[" in out


def test_empty_list_gives_empty_output(plain):
    assert plain.format([]) == ""


def test_unsupported_data_raises(plain):
    with pytest.raises(TypeError):
        plain.format(42)


def test_format_value_none(plain):
    assert plain.format_value(None, PrettyField()) == "null"


def test_format_value_matches_field_value_text(plain):
    pf = PrettyField(name="price", format="currency")
    assert plain.format_value(12.5, pf) == FieldValue(value=12.5, field=pf).formatted()


def test_format_value_color_adds_escapes():
    out = PrettyFormatter().format_value("ok", PrettyField(color="color=green"))
    assert out != "ok"
    assert strip_ansi(out) == "ok"


def test_format_value_style_transform_without_color(plain):
    assert plain.format_value("hello", PrettyField(style="uppercase")) == "HELLO"


def test_nested_dataclass(plain):
    out = plain.format_value(Address(street="Main", city="Springfield"), PrettyField())
    assert out.split("\n") == ["Street: Main", "City: Springfield"]


def test_missing_field_is_null(plain):
    data = PrettyData(schema=PrettyObject(fields=[PrettyField(name="missing")]))
    assert plain.format_pretty_data(data) == "Missing: null"


def test_tree_node_output(plain):
    root = SimpleTreeNode(label="root", children=[SimpleTreeNode(label="child")])
    out = plain.format(root)
    assert out.startswith("Tree:\nroot\n")
    assert "└── child" in out


def test_table_options_row_style(plain):
    column = PrettyField(name="name")
    table_field = PrettyField(
        name="items",
        format="table",
        table_options=TableOptions(fields=[column], row_style="uppercase"),
    )
    data = PrettyData(
        schema=PrettyObject(fields=[table_field]),
        tables={"items": [{"name": FieldValue(value="abc", field=column)}]},
    )
    out = plain.format_pretty_data(data)
    assert "ABC" in out
    assert "abc" not in out


def test_no_color_has_no_escapes(plain):
    out = plain.format([Person(name="Ann", age=3)])
    assert strip_ansi(out) == out