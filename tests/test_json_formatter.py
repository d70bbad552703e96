import json
from dataclasses import dataclass, field

import pytest

from clicky.json_formatter import JSONFormatter
from clicky.schema import PrettyData


@dataclass
class Person:
    Name: str = field(default="", metadata={"json": "name", "pretty": "label=Name"})
    Age: int = field(default=0, metadata={"json": "age"})
    Nick: str = field(default="", metadata={"json": "nick,omitempty"})
    Skip: str = field(default="", metadata={"json": "-"})
    Hidden: str = field(default="", metadata={"pretty": "hide"})
    _internal: int = 0


def test_struct_uses_json_names():
    out = JSONFormatter().format(Person("John Doe", 30, "", "gone", "kept", 5))
    assert '"name"' in out
    assert '"age"' in out
    assert json.loads(out) == {"name": "John Doe", "age": 30, "Hidden": "kept"}


def test_omitempty_keeps_set_values():
    out = JSONFormatter().format(Person("Ann", 1, "annie"))
    assert json.loads(out)["nick"] == "annie"


def test_default_indent_is_two_spaces():
    out = JSONFormatter().format(Person("Ann", 1))
    assert out.split("\n")[1].startswith('  "name"')


def test_custom_indent():
    out = JSONFormatter(indent="\t").format(Person("Ann", 1))
    assert out.split("\n")[1].startswith('\t"name"')


def test_list_of_structs():
    people = [Person("A", 1), Person("B", 2)]
    out = JSONFormatter().format(people)
    assert [p["name"] for p in json.loads(out)] == ["A", "B"]


def test_none_gives_empty_string():
    assert JSONFormatter().format(None) == ""


def test_format_pretty_data_none_is_null():
    assert JSONFormatter().format_pretty_data(None) == "null"


def test_format_pretty_data_uses_original():
    data = PrettyData(original={"k": [1, 2]})
    assert json.loads(JSONFormatter().format_pretty_data(data)) == {"k": [1, 2]}


def test_mapping_input_is_rejected():
    with pytest.raises(TypeError):
        JSONFormatter().format({"a": 1})


def test_compact_has_no_whitespace():
    out = JSONFormatter().format_compact({"a": [1, 2], "b": "x"})
    assert out == '{"a":[1,2],"b":"x"}'


def test_html_characters_escaped():
    out = JSONFormatter().format_compact("<a&b>")
    assert "<" not in out and ">" not in out and "&" not in out
    assert json.loads(out) == "<a&b>"


def test_non_ascii_kept():
    out = JSONFormatter().format_compact("héllo")
    assert "héllo" in out


def test_nan_rejected():
    with pytest.raises(ValueError):
        JSONFormatter().format_compact(float("nan"))