# clicky

clicky turns dataclass instances, lists of them and tree-shaped objects
into output for people and for other programs:

- styled terminal text with two-column summaries, boxed tables and trees
  (`clicky.pretty_formatter.PrettyFormatter`);
- JSON (`clicky.json_formatter.JSONFormatter`);
- YAML (`clicky.yaml_formatter.YAMLFormatter`);
- CSV (`clicky.csv_formatter.CSVFormatter`);
- Markdown with tables and bullet trees
  (`clicky.markdown_formatter.MarkdownFormatter`).

## Formatting data

Every formatter has a `format(data)` method that returns a string:

```python
from dataclasses import dataclass

from clicky.csv_formatter import CSVFormatter
from clicky.json_formatter import JSONFormatter
from clicky.markdown_formatter import MarkdownFormatter
from clicky.pretty_formatter import PrettyFormatter
from clicky.yaml_formatter import YAMLFormatter


@dataclass
class Person:
    name: str
    age: int


people = [Person("John Doe", 30), Person("Jane Roe", 41)]

print(JSONFormatter().format(people))
print(YAMLFormatter().format(people))
print(CSVFormatter().format(people))
print(MarkdownFormatter().format(people))
print(PrettyFormatter(no_color=True).format(people))
```

A list of dataclass instances becomes a table, one row per item. A single
instance becomes a summary of its fields; fields tagged as tables are
shown as tables after the summary. A list of anything other than
dataclass instances, or a value that is neither a dataclass, a list, a
tree node nor an object with a `pretty()` method, raises `TypeError`.

`JSONFormatter` also has `format_compact(data)` for JSON without
whitespace, and `CSVFormatter(separator=";")` changes the separator.

## Conversion to PrettyData

All formatters first turn their input into a `clicky.schema.PrettyData`
with `clicky.parser.to_pretty_data`. It holds the field schema, the
field values, the table rows and the original data, and each formatter
also accepts one directly through `format_pretty_data`:

```python
from clicky.parser import to_pretty_data

data = to_pretty_data(people)
print([f.name for f in data.schema.fields])   # ['data']
print(len(data.tables["data"]))               # 2
```

`to_pretty_data_with_format_hint(data, hint)` does the same but always
lays lists out as a table.

## Field tags

Tags live in a dataclass field's metadata. The `pretty` entry is a
comma-separated tag; the `json` entry names the field in table columns
and JSON output:

```python
from dataclasses import dataclass, field


@dataclass
class Item:
    name: str = field(metadata={"json": "name"})
    price: float = field(metadata={"pretty": "label=Price,format=currency"})
    notes: str = field(default="", metadata={"pretty": "hide"})
```

`clicky.schema.parse_pretty_tag` reads such a tag into a `PrettyField`.
A tag can set the label, the format (`currency`, `date`, `float`,
`table`, `tree`, ...), a `color=` value, table title and sort options,
or hide the field with `hide` or `-`. Fields whose names start with an
underscore are left out.

Field names are turned into readable labels:

```python
from clicky.schema import prettify_field_name

prettify_field_name("firstName")   # "First Name"
prettify_field_name("first_name")  # "First Name"
prettify_field_name("userID")      # "User Id"
```

## Trees

Any object with `label()` and `children()` methods is drawn as a tree.
`clicky.tree_formatter` provides `TreeNode`, `SimpleTreeNode` and
`CompactListNode`, and `convert_to_tree_node` turns nested dictionaries
with `label` (or `name`), `icon`, `style` and `children` keys into nodes:

```python
from clicky.tree_formatter import SimpleTreeNode, TreeFormatter

root = SimpleTreeNode("root", children=[SimpleTreeNode("a"), SimpleTreeNode("b")])
print(TreeFormatter(no_color=True).format_tree_from_root(root))
# root
# ├── a
# └── b
```

`TreeOptions` in `clicky.schema` sets the connectors, a maximum depth,
collapsed nodes and compact listing of `CompactListNode` items.

## Styles

`clicky.style.parse_style` reads space-separated utility classes such as
`"text-red bold uppercase"` into a `Style`, whose `render(text)` wraps
the text in ANSI escape codes. Colours come from a `Theme`.
`strip_ansi` removes the escape codes again.

## Options and command-line flags

`clicky.options.FormatOptions` holds the output settings: the format
name, colour, the output file and one flag for each format. The format
flags exclude each other; `resolve_format()` turns the one that is set
into the format name and raises `FormatConflictError` if more than one
is set:

```python
from clicky.options import FormatOptions

options = FormatOptions(json=True)
assert options.resolve_format() == "json"
```

To offer these settings on your own command line, add them to an
`argparse` parser and read them back:

```python
import argparse

from clicky.options import add_format_arguments, options_from_namespace

parser = argparse.ArgumentParser()
add_format_arguments(parser)
options = options_from_namespace(parser.parse_args())
```

`merge_options` joins several `FormatOptions` into one; later values win.

## Lenient JSON

`clicky.json_parser.parse_json` accepts strict JSON, JSON quoted inside a
string, and JSON with `//` or single-line `/* */` comments or trailing
commas (cleaned by `clean_json_string`). If none of these parse, it
returns the input as a string.

## What the package does not do

- There is no single entry point that picks a formatter from a format
  name or from `FormatOptions` and writes the result to a file or to
  standard output; choose the formatter class yourself and write its
  string where you need it.
- `FormatOptions` has `html` and `pdf` flags, but the package has no
  HTML or PDF formatter.
- The package has no command-line program of its own.