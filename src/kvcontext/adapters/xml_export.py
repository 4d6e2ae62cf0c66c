from __future__ import annotations

import math
import re
import xml.etree.ElementTree as ET
from collections.abc import Sequence

from kvcontext.adapters.tree import TreeSerializer
from kvcontext.domain.formats import ExportFormat
from kvcontext.domain.value import Bool, Char, Integer, String, Value

# Element names: no leading digit, dash or dot; no namespace prefixes.
_NAME = re.compile(r"[^\W\d][\w.\-]*")
# Characters XML 1.0 cannot carry at all, escaped or not.
_INVALID_TEXT = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


class _Absent:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<absent>"


_ABSENT = _Absent()


class XmlExporter(TreeSerializer):
    """Writes the context as ``<root>`` with one child element per key.

    Scalars become element text and Unit an empty element. An absent Option
    leaves its element out. A Seq repeats its parent's element once per item,
    so a Seq directly inside a Seq has no element to repeat and fails. Map
    keys become child element names and must be valid XML names.
    """

    format = ExportFormat.XML

    def serialize_bool(self, value: bool) -> object:
        return "true" if value else "false"

    def serialize_int(self, value: int, *, bits: int, signed: bool) -> object:
        return str(value)

    def serialize_float(self, value: float, *, bits: int) -> object:
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return repr(value)

    def serialize_bytes(self, value: bytes) -> object:
        encoded = super().serialize_bytes(value)
        if isinstance(encoded, list):
            return [str(byte) for byte in encoded]
        return encoded

    def serialize_none(self) -> object:
        return _ABSENT

    def serialize_seq(self, items: tuple[Value, ...]) -> object:
        encoded = [item.serialize(self) for item in items]
        for item in encoded:
            if item is _ABSENT:
                raise self.error("unsupported None value in sequence")
            if isinstance(item, list):
                raise self.error("nested sequences have no element name")
        return encoded

    def map_key(self, key: Value) -> object:
        if isinstance(key, (String, Char)):
            return key.value
        if isinstance(key, Bool):
            return "true" if key.value else "false"
        if isinstance(key, Integer):
            return str(key.value)
        raise self.error(f"map key must be a name, got {key.kind.value}")

    def export(self, entries: Sequence[tuple[str, Value]], *, pretty: bool = False) -> str:
        tree = self.serialize_document(entries)
        root = ET.Element("root")
        for key, node in tree.items():
            self._append(root, key, node)
        if pretty:
            ET.indent(root, space="  ")
        return ET.tostring(root, encoding="unicode")

    def _append(self, parent: ET.Element, tag: object, node: object) -> None:
        if node is _ABSENT:
            return
        if not isinstance(tag, str) or _NAME.fullmatch(tag) is None:
            raise self.error(f"invalid element name: {tag!r}")
        if isinstance(node, list):
            for item in node:
                self._append(parent, tag, item)
            return
        element = ET.SubElement(parent, tag)
        if isinstance(node, dict):
            for key, child in node.items():
                self._append(element, key, child)
        elif node is not None:
            text = str(node)
            if _INVALID_TEXT.search(text):
                raise self.error(f"text of <{tag}> contains characters XML cannot represent")
            element.text = text
