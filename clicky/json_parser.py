"""Lenient JSON parsing that tolerates comments and trailing commas."""

from __future__ import annotations

import json
from typing import Any


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def clean_json_string(text: str) -> str:
    """Strip ``//`` and single-line ``/* */`` comments and ``,}`` / ``,]`` line endings."""
    cleaned = []
    for line in text.split("\n"):
        idx = line.find("//")
        if idx != -1:
            line = line[:idx]
        start = line.find("/*")
        if start != -1:
            end = line.find("*/", start)
            if end != -1:
                line = line[:start] + line[end + 2:]
        line = line.strip()
        if line.endswith(",}"):
            line = line[:-2] + "}"
        if line.endswith(",]"):
            line = line[:-2] + "]"
        cleaned.append(line)
    return "\n".join(cleaned)


def parse_json(data: bytes | str) -> Any:
    """Parse JSON leniently; text that cannot be parsed is returned as a string."""
    text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
    for candidate in (text, clean_json_string(text)):
        try:
            return _loads(candidate)
        except ValueError:
            continue
    return text