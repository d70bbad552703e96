"""Conversion of dataclass instances and lists of them into PrettyData.

Dataclass fields play the part of tagged struct fields: the ``pretty`` and
``json`` entries of a field's metadata hold the tag strings, and fields whose
names start with an underscore are treated as private and skipped.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from clicky.schema import (
    FORMAT_HIDE,
    FORMAT_PRETTY,
    FORMAT_TABLE,
    FORMAT_TREE,
    FieldValue,
    PrettyData,
    PrettyField,
    PrettyObject,
    parse_pretty_tag,
)

Row = dict[str, FieldValue]


def _is_struct(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def _require_struct(obj: Any, what: str) -> None:
    if not _is_struct(obj):
        raise TypeError(f"expected {what}, got {type(obj).__name__}")


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, (list, tuple))


def _is_public(f: dataclasses.Field) -> bool:
    return not f.name.startswith("_")


def _pretty_tag(f: dataclasses.Field) -> str:
    return f.metadata.get("pretty", "")


def _is_hidden_tag(tag: str) -> bool:
    return tag in ("-", FORMAT_HIDE)


def _json_name(f: dataclasses.Field) -> str:
    tag = f.metadata.get("json", "")
    if tag and tag != "-":
        first = tag.split(",")[0]
        if first:
            return first
    return f.name


def _is_tree_node(obj: Any) -> bool:
    return callable(getattr(obj, "label", None)) and callable(getattr(obj, "children", None))


def _is_pretty(obj: Any) -> bool:
    return callable(getattr(obj, "pretty", None))


def _process_field_value(value: Any) -> Any:
    """Copy lists and give mappings string keys; other values pass through."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, Mapping):
        return {str(key): val for key, val in value.items()}
    return value


def _empty_data(original: Any) -> PrettyData:
    return PrettyData(schema=PrettyObject(), values={}, tables={}, original=original)


def _single_field_data(name: str, fmt: str, label: str, value: Any, original: Any) -> PrettyData:
    def make_field() -> PrettyField:
        return PrettyField(name=name, format=fmt, label=label)

    return PrettyData(
        schema=PrettyObject(fields=[make_field()]),
        values={name: FieldValue(value=value, field=make_field())},
        tables={},
        original=original,
    )


def parse_struct_schema(obj: Any) -> PrettyObject:
    """Build a schema from the ``pretty`` tags of a dataclass instance."""
    _require_struct(obj, "struct")
    schema = PrettyObject()
    for f in dataclasses.fields(obj):
        if not _is_public(f):
            continue
        tag = _pretty_tag(f)
        if _is_hidden_tag(tag):
            continue
        pf = parse_pretty_tag(f.name, tag)
        value = getattr(obj, f.name)
        if "table" in tag and _is_sequence(value):
            pf.format = FORMAT_TABLE
            if value and _is_struct(value[0]):
                pf.fields = get_table_fields(value[0])
        schema.fields.append(pf)
    return schema


def get_table_fields(obj: Any) -> list[PrettyField]:
    """Column descriptions for a table row, named by ``json`` tag when present."""
    _require_struct(obj, "struct for table row")
    return [
        parse_pretty_tag(_json_name(f), _pretty_tag(f))
        for f in dataclasses.fields(obj)
        if _is_public(f) and not _is_hidden_tag(_pretty_tag(f))
    ]


def get_struct_headers(obj: Any) -> list[str]:
    """Column headers of a dataclass instance, hidden fields left out."""
    _require_struct(obj, "struct")
    return [
        _json_name(f)
        for f in dataclasses.fields(obj)
        if _is_public(f) and not _is_hidden_tag(_pretty_tag(f))
    ]


def _cell_text(value: Any) -> str:
    if _is_pretty(value):
        return str(value.pretty())
    processed = _process_field_value(value)
    return "" if processed is None else str(processed)


def get_struct_row(obj: Any) -> list[str]:
    """Field values of a dataclass instance as plain strings, hidden fields left out."""
    _require_struct(obj, "struct")
    return [
        _cell_text(getattr(obj, f.name))
        for f in dataclasses.fields(obj)
        if _is_public(f) and not _is_hidden_tag(_pretty_tag(f))
    ]


def get_field_value(obj: Any, field_name: str) -> Any:
    """The value of the field named ``field_name`` or carrying it as ``json`` tag.

    Raises KeyError when there is no such field.
    """
    _require_struct(obj, "struct")
    for f in dataclasses.fields(obj):
        if f.name == field_name:
            return getattr(obj, f.name)
        tag = f.metadata.get("json", "")
        if tag and tag != "-" and tag.split(",")[0] == field_name:
            return getattr(obj, f.name)
    raise KeyError(field_name)


def get_field_value_case_insensitive(obj: Any, name: str) -> Any:
    """The value of a field matched exactly, then ignoring case.

    Raises KeyError when nothing matches or ``obj`` is not a dataclass instance.
    """
    if not _is_struct(obj):
        raise KeyError(name)
    all_fields = dataclasses.fields(obj)
    for f in all_fields:
        if f.name == name:
            return getattr(obj, f.name)
    lower = name.lower()
    for f in all_fields:
        if f.name.lower() == lower:
            return getattr(obj, f.name)
    raise KeyError(name)


def struct_to_row(obj: Any) -> Row:
    """Convert a dataclass instance to a table row keyed by column name."""
    if obj is None:
        raise TypeError("cannot convert None to row")
    _require_struct(obj, "struct")
    row: Row = {}
    for f in dataclasses.fields(obj):
        if not _is_public(f):
            continue
        tag = _pretty_tag(f)
        if _is_hidden_tag(tag):
            continue
        name = _json_name(f)
        row[name] = FieldValue(
            value=_process_field_value(getattr(obj, f.name)),
            field=parse_pretty_tag(name, tag),
        )
    return row


def _rows_from(items: Any) -> list[Row]:
    rows: list[Row] = []
    for item in items:
        if item is None:
            continue
        try:
            rows.append(struct_to_row(item))
        except TypeError:
            continue
    return rows


def _convert_sequence(items: list | tuple) -> PrettyData:
    if not items:
        return _empty_data(items)
    first = items[0]
    if not _is_struct(first):
        kind = "None" if first is None else type(first).__name__
        raise TypeError(f"can only convert slice of structs to PrettyData, got slice of {kind}")
    table_fields = get_table_fields(first)
    return PrettyData(
        schema=PrettyObject(
            fields=[PrettyField(name="data", format=FORMAT_TABLE, label="Data", fields=table_fields)]
        ),
        values={},
        tables={"data": _rows_from(items)},
        original=items,
    )


def to_pretty_data_with_format_hint(data: Any, format_hint: str) -> PrettyData:
    """Like to_pretty_data, but lists are always laid out as a table."""
    if data is None:
        return _empty_data(data)
    if isinstance(data, PrettyData):
        return data
    if _is_sequence(data):
        return _convert_sequence(data)
    return to_pretty_data(data)


def to_pretty_data(data: Any) -> PrettyData:
    """Convert a tree node, pretty object, list of dataclasses or dataclass to PrettyData.

    Raises TypeError for anything else.
    """
    if data is None:
        return _empty_data(data)
    if isinstance(data, PrettyData):
        return data
    if _is_tree_node(data):
        return _single_field_data("tree", FORMAT_TREE, "Tree", data, data)
    if _is_pretty(data):
        return _single_field_data("content", FORMAT_PRETTY, "Content", data, data)
    if _is_sequence(data):
        return _convert_sequence(data)

    try:
        schema = parse_struct_schema(data)
    except TypeError as exc:
        raise TypeError(f"failed to parse struct schema: {exc}") from exc

    result = PrettyData(schema=schema, values={}, tables={}, original=data)
    for pf in schema.fields:
        try:
            value = get_field_value(data, pf.name)
        except KeyError:
            try:
                value = get_field_value_case_insensitive(data, pf.name)
            except KeyError:
                continue
        if pf.format == FORMAT_TABLE and _is_sequence(value):
            result.tables[pf.name] = _rows_from(value)
        else:
            result.values[pf.name] = FieldValue(value=_process_field_value(value), field=pf)
    return result