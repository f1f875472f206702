"""Minimal RON (Rusty Object Notation) reader and writer.

Covers the subset used by persisted cookie stores: structs with named fields, tuples, lists, strings, booleans,
integers, unit enum variants and single-value enum variants.

Values are mapped to Python as follows:

- ``(a: 1, b: 2)`` struct -> ``dict``
- ``("a", true)`` tuple -> ``tuple``
- ``[1, 2]`` list -> ``list``
- ``Variant("x")`` -> ``{"Variant": "x"}``
- ``Variant`` -> ``"Variant"``
"""

import re
from typing import Any

_WHITESPACE = re.compile(r"(?:\s+|//[^\n]*|/\*.*?\*/)*", re.DOTALL)
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER = re.compile(r"[+-]?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
_ESCAPES = {'"': '"', "\\": "\\", "/": "/", "b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "0": "\0"}
_DUMP_ESCAPES = (("\\", "\\\\"), ('"', '\\"'), ("\n", "\\n"), ("\r", "\\r"), ("\t", "\\t"))


class RonDecodeError(ValueError):
    """Malformed RON input."""

    def __init__(self, message: str, doc: str, pos: int) -> None:
        line = doc.count("\n", 0, pos) + 1
        column = pos - doc.rfind("\n", 0, pos)
        super().__init__(f"{message}: line {line} column {column} (char {pos})")
        self.pos = pos


class Struct(dict[str, Any]):
    """A RON struct. Serialized with named fields."""


class Variant:
    """An enum variant, optionally carrying a single value."""

    __slots__ = ("name", "value")

    def __init__(self, name: str, value: Any = None) -> None:
        self.name = name
        self.value = value


def loads(doc: str) -> Any:
    """Parse a RON document."""
    parser = _Parser(doc)
    value = parser.value()
    parser.skip_ws()
    if parser.pos != len(doc):
        raise parser.error("Extra data")
    return value


def dumps(value: Any, *, indent: str = "    ") -> str:
    """Pretty print `value` as RON.

    Use `Struct` for structs with named fields and `Variant` for enum variants. Tuples are written as RON tuples and
    lists as RON lists.
    """
    return _dump(value, indent, 0)


def _dump(value: Any, indent: str, level: int) -> str:
    pad = indent * (level + 1)
    end = indent * level
    if isinstance(value, Variant):
        if value.value is None:
            return value.name
        return f"{value.name}({_dump(value.value, indent, level)})"
    if isinstance(value, Struct):
        if not value:
            return "()"
        fields = "".join(f"{pad}{k}: {_dump(v, indent, level + 1)},\n" for k, v in value.items())
        return f"(\n{fields}{end})"
    if isinstance(value, tuple):
        return "(" + ", ".join(_dump(v, indent, level) for v in value) + ")"
    if isinstance(value, list):
        if not value:
            return "[]"
        items = "".join(f"{pad}{_dump(v, indent, level + 1)},\n" for v in value)
        return f"[\n{items}{end}]"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return repr(value)
    if isinstance(value, str):
        return _dump_str(value)
    raise TypeError(f"Type is not RON serializable: {type(value).__name__}")


def _dump_str(value: str) -> str:
    for char, escape in _DUMP_ESCAPES:
        value = value.replace(char, escape)
    return f'"{value}"'


class _Parser:
    def __init__(self, doc: str) -> None:
        self.doc = doc
        self.pos = 0

    def error(self, message: str) -> RonDecodeError:
        return RonDecodeError(message, self.doc, self.pos)

    def skip_ws(self) -> None:
        self.pos = _WHITESPACE.match(self.doc, self.pos).end()  # type: ignore[union-attr]

    def peek(self) -> str:
        self.skip_ws()
        return self.doc[self.pos : self.pos + 1]

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise self.error(f"Expecting {char!r}")
        self.pos += 1

    def value(self) -> Any:
        char = self.peek()
        if char == '"':
            return self.string()
        if char == "(":
            return self.parens()
        if char == "[":
            return self.list()
        if m := _NUMBER.match(self.doc, self.pos):
            self.pos = m.end()
            text = m.group()
            return float(text) if any(c in text for c in ".eE") else int(text)
        if m := _IDENT.match(self.doc, self.pos):
            self.pos = m.end()
            name = m.group()
            if name in ("true", "false"):
                return name == "true"
            if self.peek() == "(":
                inner = self.parens()
                if isinstance(inner, tuple) and len(inner) == 1:
                    inner = inner[0]
                return {name: inner}
            return name
        raise self.error("Expecting value")

    def parens(self) -> dict[str, Any] | tuple[Any, ...]:
        self.expect("(")
        if self.peek() == ")":
            self.pos += 1
            return ()
        if (m := _IDENT.match(self.doc, self.pos)) and self._is_field(m.end()):
            return self.struct_fields()
        items: list[Any] = []
        while True:
            items.append(self.value())
            if self.peek() == ",":
                self.pos += 1
                if self.peek() == ")":
                    break
                continue
            break
        self.expect(")")
        return tuple(items)

    def _is_field(self, end: int) -> bool:
        pos = _WHITESPACE.match(self.doc, end).end()  # type: ignore[union-attr]
        return self.doc[pos : pos + 1] == ":"

    def struct_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        while self.peek() != ")":
            m = _IDENT.match(self.doc, self.pos)
            if m is None:
                raise self.error("Expecting field name")
            self.pos = m.end()
            self.expect(":")
            fields[m.group()] = self.value()
            if self.peek() != ",":
                break
            self.pos += 1
        self.expect(")")
        return fields

    def list(self) -> list[Any]:
        self.expect("[")
        items: list[Any] = []
        while self.peek() != "]":
            items.append(self.value())
            if self.peek() != ",":
                break
            self.pos += 1
        self.expect("]")
        return items

    def string(self) -> str:
        self.expect('"')
        chunks: list[str] = []
        start = self.pos
        doc = self.doc
        while True:
            if self.pos >= len(doc):
                raise self.error("Unterminated string")
            char = doc[self.pos]
            if char == '"':
                chunks.append(doc[start : self.pos])
                self.pos += 1
                return "".join(chunks)
            if char == "\\":
                chunks.append(doc[start : self.pos])
                self.pos += 1
                escape = doc[self.pos : self.pos + 1]
                if escape == "u":
                    chunks.append(self._unicode_escape())
                elif escape in _ESCAPES:
                    chunks.append(_ESCAPES[escape])
                    self.pos += 1
                else:
                    raise self.error("Invalid escape")
                start = self.pos
                continue
            self.pos += 1

    def _unicode_escape(self) -> str:
        self.pos += 1
        if self.doc[self.pos : self.pos + 1] == "{":
            end = self.doc.find("}", self.pos)
            if end == -1:
                raise self.error("Invalid unicode escape")
            digits, self.pos = self.doc[self.pos + 1 : end], end + 1
        else:
            digits, self.pos = self.doc[self.pos : self.pos + 4], self.pos + 4
        try:
            return chr(int(digits, 16))
        except ValueError as exc:
            raise self.error("Invalid unicode escape") from exc
