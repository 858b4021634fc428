"""Format normalizers: raw bytes to indented text lines."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from xml.dom import minidom
from xml.parsers.expat import ExpatError

import yaml

logger = logging.getLogger(__name__)

Parser = Callable[[bytes, int], list[str]]

DEFAULT_FORMAT_ORDER: tuple[str, ...] = ("json", "yaml", "xml", "raw")


class FormatError(ValueError):
    """Content is not in the requested format."""


class DocumentLoadError(Exception):
    """The document could not be read or parsed in any format."""


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping CRs and the empty tail after a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class _Literal(str):
    """Number or constant kept exactly as written in the source."""


class _Pairs(list):
    """Object members in source order, duplicate keys included."""


def _json_scalar(value: object) -> str:
    if isinstance(value, _Literal):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def _dump_json(
    value: object, pad: str, level: int, head: str, tail: str, out: list[str]
) -> None:
    """Append *value* to *out*; *head* prefixes its first line, *tail* ends its last."""
    if isinstance(value, _Pairs):
        items = [(json.dumps(k, ensure_ascii=False) + ": ", v) for k, v in value]
        opener, closer = "{", "}"
    elif isinstance(value, list):
        items = [("", v) for v in value]
        opener, closer = "[", "]"
    else:
        out.append(head + _json_scalar(value) + tail)
        return
    if not items:
        out.append(head + opener + closer + tail)
        return
    out.append(head + opener)
    inner = pad * (level + 1)
    last = len(items) - 1
    for i, (key, item) in enumerate(items):
        _dump_json(item, pad, level + 1, inner + key, "," if i < last else "", out)
    out.append(pad * level + closer + tail)


def format_json(content: bytes, tab_size: int) -> list[str]:
    """Re-indent JSON without touching keys or number text."""
    try:
        data = json.loads(
            content,
            object_pairs_hook=_Pairs,
            parse_float=_Literal,
            parse_int=_Literal,
            parse_constant=_Literal,
        )
        lines: list[str] = []
        _dump_json(data, " " * tab_size, 0, "", "", lines)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise FormatError(f"invalid JSON: {e}") from e
    return lines


class _IndentDumper(yaml.SafeDumper):
    """Indent block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False):
        return super().increase_indent(flow, False)


def format_yaml(content: bytes, tab_size: int) -> list[str]:
    try:
        data = yaml.safe_load(content)
        if not isinstance(data, dict):
            raise FormatError("YAML document is not a mapping")
        dumped = yaml.dump(
            data,
            Dumper=_IndentDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            indent=max(2, min(9, tab_size)),
        )
    except (yaml.YAMLError, RecursionError) as e:
        raise FormatError(f"invalid YAML: {e}") from e
    return split_lines(dumped)


def format_xml(content: bytes, tab_size: int) -> list[str]:
    try:
        dom = minidom.parseString(content)
        pretty = dom.toprettyxml(indent=" " * tab_size)
    except (ExpatError, RecursionError) as e:
        raise FormatError(f"invalid XML: {e}") from e
    return [line for line in split_lines(pretty) if line.strip()]


def format_raw(content: bytes, tab_size: int) -> list[str]:
    return split_lines(content.decode("utf-8", errors="replace"))


PARSERS: dict[str, Parser] = {
    "json": format_json,
    "yaml": format_yaml,
    "xml": format_xml,
    "raw": format_raw,
}


def resolve_format_order(
    name: str | None, default: Iterable[str] = DEFAULT_FORMAT_ORDER
) -> list[str]:
    """Formats to try: just *name* when it is known, else the default order."""
    if name:
        tag = name.lower()
        if tag in PARSERS:
            return [tag]
        logger.warning("unknown format %r, trying %s", name, ", ".join(default))
    return list(default)


def format_document(
    content: bytes, order: Iterable[str], tab_size: int
) -> tuple[list[str], str]:
    """Return ``(lines, format_name)`` for the first format that parses."""
    for tag in order:
        parser = PARSERS.get(tag)
        if parser is None:
            logger.warning("skipping unknown format %r", tag)
            continue
        try:
            lines = parser(content, tab_size)
        except FormatError as e:
            logger.debug("%s: %s", tag, e)
            continue
        logger.info("parsed %d lines as %s", len(lines), tag)
        return lines, tag
    raise DocumentLoadError("unable to parse file")


def read_document(
    path: str | Path, order: Iterable[str], tab_size: int
) -> tuple[list[str], str]:
    try:
        content = Path(path).read_bytes()
    except OSError as e:
        raise DocumentLoadError(f"unable to read file: {e}") from e
    return format_document(content, order, tab_size)
