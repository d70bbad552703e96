import argparse

import pytest

from clicky.options import (
    FormatConflictError,
    FormatOptions,
    add_format_arguments,
    merge_options,
    options_from_namespace,
)


def test_resolve_format_single_flag_overrides_format():
    opts = FormatOptions(format="pretty", json=True)
    assert opts.resolve_format() == "json"
    assert opts.format == "json"


def test_resolve_format_no_flags_keeps_format():
    opts = FormatOptions(format="csv")
    assert opts.resolve_format() == "csv"
    assert opts.format == "csv"


def test_resolve_format_multiple_flags_raises():
    opts = FormatOptions(json=True, yaml=True)
    with pytest.raises(FormatConflictError, match="multiple format flags"):
        opts.resolve_format()
    assert opts.format == ""


@pytest.mark.parametrize(
    "flag", ["json", "yaml", "csv", "markdown", "pretty", "html", "pdf"]
)
def test_each_flag_resolves_to_its_name(flag):
    opts = FormatOptions(**{flag: True})
    assert opts.resolve_format() == flag


def test_merge_options_later_values_win():
    merged = merge_options(
        FormatOptions(format="json", output="a.txt"),
        FormatOptions(format="yaml", verbose=True),
    )
    assert merged.format == "yaml"
    assert merged.output == "a.txt"
    assert merged.verbose is True
    assert merged.no_color is False


def test_merge_options_takes_only_first_flag_of_each():
    merged = merge_options(FormatOptions(json=True, yaml=True), FormatOptions(csv=True))
    assert merged.json is True
    assert merged.yaml is False
    assert merged.csv is True


def test_merge_options_empty_is_default():
    assert merge_options() == FormatOptions()


def test_argparse_defaults():
    parser = add_format_arguments(argparse.ArgumentParser())
    opts = options_from_namespace(parser.parse_args([]))
    assert opts.format == "pretty"
    assert opts.output == ""
    assert opts.selected_flags() == []


def test_argparse_flags_round_trip():
    parser = add_format_arguments(argparse.ArgumentParser())
    ns = parser.parse_args(["--markdown", "--no-color", "--output", "out.md", "--dump-schema"])
    opts = options_from_namespace(ns)
    assert opts.markdown is True
    assert opts.no_color is True
    assert opts.dump_schema is True
    assert opts.output == "out.md"
    assert opts.resolve_format() == "markdown"


def test_options_from_partial_namespace_uses_defaults():
    opts = options_from_namespace(argparse.Namespace(verbose=True))
    assert opts.verbose is True
    assert opts == FormatOptions(verbose=True)