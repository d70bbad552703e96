"""Format dataclasses, lists and trees as styled text, tables, JSON, YAML, CSV and Markdown."""

__version__ = "0.1.0"