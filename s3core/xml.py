# -*- coding: utf-8 -*-
# MinIO Python Library for Amazon S3 Compatible Cloud Storage, (C)
# [2014] - [2025] MinIO, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
XML encoding and decoding.

Domain records opt in to XML support by declaring a schema with
:func:`schema`; a schema is a table of :class:`Field` rows mapping record
attributes to XML elements or attributes. :func:`encode` and :func:`decode`
work from these tables only and refuse types which are not registered.

    >>> @schema(
    ...     "Owner", Field("id", "ID"), Field("display_name", "DisplayName"),
    ... )
    ... @dataclass(frozen=True)
    ... class Owner:
    ...     id: Optional[str] = None
    ...     display_name: Optional[str] = None
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, TypeVar
from xml.etree import ElementTree as ET

from .error import XmlError
from .time import from_iso8601utc, to_iso8601utc

_S3_NAMESPACE = "http://s3.amazonaws.com/doc/2006-03-01/"

REQUIRED = "required"
OPTIONAL = "optional"
REPEATED = "repeated"

T = TypeVar("T")


def Element(  # pylint: disable=invalid-name
    tag: str,
    namespace: str = _S3_NAMESPACE,
) -> ET.Element:
    """Create ElementTree.Element with tag and namespace."""
    return ET.Element(tag, {"xmlns": namespace} if namespace else {})


def SubElement(  # pylint: disable=invalid-name
    parent: ET.Element, tag: str, text: Optional[str] = None
) -> ET.Element:
    """Create ElementTree.SubElement on parent with tag and text."""
    element = ET.SubElement(parent, tag)
    if text is not None:
        element.text = text
    return element


def _namespaced(element: ET.Element, name: str) -> tuple[str, dict[str, str]]:
    """Namespace arguments for find and findall."""
    def _get_namespace() -> str:
        """Exact namespace if found."""
        start = element.tag.find("{")
        if start < 0:
            return ""
        start += 1
        end = element.tag.find("}")
        if end < 0:
            return ""
        return element.tag[start:end]

    namespace = _get_namespace()
    if namespace:
        name = "/".join(f"ns:{token}" for token in name.split("/"))
        return name, {"ns": namespace}
    return name, {}


def findall(element: ET.Element, name: str) -> list[ET.Element]:
    """Namespace aware ElementTree.Element.findall()."""
    name, namespaces = _namespaced(element, name)
    return element.findall(name, namespaces=namespaces)


def find(
        element: ET.Element,
        name: str,
        strict: bool = False,
) -> Optional[ET.Element]:
    """Namespace aware ElementTree.Element.find()."""
    name, namespaces = _namespaced(element, name)
    elem = element.find(name, namespaces=namespaces)
    if strict and elem is None:
        raise ValueError(f"XML element <{name}> not found")
    return elem


def findtext(
    element: ET.Element,
    name: str,
    strict: bool = False,
    default: Optional[str] = None,
) -> Optional[str]:
    """
    Namespace aware ElementTree.Element.findtext() with strict flag
    raises ValueError if element name not exist.
    """
    elem = find(element, name, strict=strict)
    return default if elem is None else (elem.text or "")


def getbytes(element: ET.Element) -> bytes:
    """Convert ElementTree.Element to bytes."""
    with io.BytesIO() as data:
        ET.ElementTree(element).write(
            data,
            encoding=None,
            xml_declaration=False,
        )
        return data.getvalue()


def fromstring(data: str | bytes) -> ET.Element:
    """Parse XML document; raise XmlError on malformed data."""
    try:
        return ET.fromstring(data.encode() if isinstance(data, str) else data)
    except ET.ParseError as exc:
        raise XmlError(f"malformed XML; {exc}") from exc


def _localname(tag: str) -> str:
    """Strip namespace from tag or attribute name."""
    return tag.rsplit("}", 1)[-1]


@dataclass(frozen=True)
class Field:
    """
    One row of a schema: record attribute ``name`` is stored in XML element
    (or attribute) ``tag`` with value type ``kind``. ``kind`` is ``str``,
    ``int``, ``bool``, ``datetime`` or a registered record type. Repeated
    elements may be grouped under a ``wrapper`` element.
    """
    name: str
    tag: str
    kind: Any = str
    cardinality: str = OPTIONAL
    wrapper: Optional[str] = None
    attribute: bool = False

    def __post_init__(self):
        if self.cardinality not in [REQUIRED, OPTIONAL, REPEATED]:
            raise ValueError(f"unknown cardinality {self.cardinality}")
        if self.wrapper and self.cardinality != REPEATED:
            raise ValueError("wrapper is allowed for repeated field only")
        if self.attribute and (
                self.cardinality == REPEATED or self.kind in _SCHEMAS
        ):
            raise ValueError("attribute field must be a single scalar value")


@dataclass(frozen=True)
class Schema:
    """XML schema of a record type."""
    cls: type
    root: str
    fields: tuple[Field, ...]
    namespace: str = _S3_NAMESPACE


_SCHEMAS: dict[type, Schema] = {}
_ROOTS: dict[str, type] = {}


def schema(
        root: str,
        *fields: Field,
        namespace: str = _S3_NAMESPACE,
) -> Callable[[type[T]], type[T]]:
    """
    Class decorator registering record type with root element name and
    field table. Record types must accept all field names as keyword
    arguments.
    """
    def register(cls: type[T]) -> type[T]:
        if root in _ROOTS:
            raise ValueError(f"root element <{root}> is already registered")
        _SCHEMAS[cls] = Schema(cls, root, tuple(fields), namespace)
        _ROOTS[root] = cls
        return cls
    return register


def is_registered(cls: type) -> bool:
    """Check whether type is registered for XML encoding and decoding."""
    return cls in _SCHEMAS


def _get_schema(cls: type) -> Schema:
    """Get schema of registered type."""
    try:
        return _SCHEMAS[cls]
    except KeyError as exc:
        raise TypeError(
            f"{cls.__name__} is not registered for XML encoding/decoding",
        ) from exc


def _to_text(value: Any, kind: Any) -> str:
    """Convert scalar value to XML text."""
    if kind is bool:
        return "true" if value else "false"
    if kind is datetime:
        return str(to_iso8601utc(value))
    return str(value)


def _from_text(text: str, kind: Any, tag: str) -> Any:
    """Convert XML text to scalar value."""
    try:
        if kind is bool:
            if text.strip().lower() not in ["true", "false"]:
                raise ValueError(f"{text!r} is not a boolean")
            return text.strip().lower() == "true"
        if kind is int:
            return int(text)
        if kind is datetime:
            return from_iso8601utc(text.strip())
        return text
    except ValueError as exc:
        raise XmlError(
            f"invalid value {text!r} in XML element <{tag}>; {exc}", tag,
        ) from exc


def _decode_value(field: Field, element: ET.Element) -> Any:
    """Decode single element value of field."""
    if field.kind in _SCHEMAS:
        return _decode_record(field.kind, element)
    return _from_text(element.text or "", field.kind, field.tag)


def _decode_record(cls: type[T], element: ET.Element) -> T:
    """Decode element into record of given type."""
    table = _SCHEMAS[cls]
    children: dict[str, list[ET.Element]] = {}
    for child in element:
        children.setdefault(_localname(child.tag), []).append(child)

    values: dict[str, Any] = {}
    for field in table.fields:
        if field.attribute:
            attrs = {
                _localname(key): value for key, value in element.attrib.items()
            }
            text = attrs.get(field.tag)
            if text is None and field.cardinality == REQUIRED:
                raise XmlError(
                    f"XML attribute {field.tag} not found in "
                    f"<{_localname(element.tag)}>",
                    field.tag,
                )
            values[field.name] = (
                None if text is None
                else _from_text(text, field.kind, field.tag)
            )
            continue

        if field.wrapper:
            elements = [
                child
                for wrapper in children.get(field.wrapper, [])
                for child in wrapper
                if _localname(child.tag) == field.tag
            ]
        else:
            elements = children.get(field.tag, [])

        if field.cardinality == REPEATED:
            values[field.name] = [
                _decode_value(field, elem) for elem in elements
            ]
        elif elements:
            values[field.name] = _decode_value(field, elements[0])
        elif field.cardinality == REQUIRED:
            raise XmlError(
                f"XML element <{field.tag}> not found in "
                f"<{_localname(element.tag)}>",
                field.tag,
            )
        else:
            values[field.name] = None

    try:
        return cls(**values)
    except (TypeError, ValueError) as exc:
        raise XmlError(
            f"invalid <{_localname(element.tag)}> document; {exc}",
            _localname(element.tag),
        ) from exc


def _encode_value(field: Field, value: Any, parent: ET.Element):
    """Encode single value of field as child of parent."""
    if field.kind in _SCHEMAS:
        _encode_record(value, SubElement(parent, field.tag))
    else:
        SubElement(parent, field.tag, _to_text(value, field.kind))


def _encode_record(value: Any, element: ET.Element) -> ET.Element:
    """Encode fields of record into element."""
    table = _get_schema(type(value))
    for field in table.fields:
        item = getattr(value, field.name)
        if field.cardinality == REPEATED:
            parent = (
                SubElement(element, field.wrapper) if field.wrapper
                else element
            )
            for entry in item or []:
                _encode_value(field, entry, parent)
        elif item is None:
            if field.cardinality == REQUIRED:
                raise ValueError(
                    f"{type(value).__name__}.{field.name} must be set",
                )
        elif field.attribute:
            element.set(field.tag, _to_text(item, field.kind))
        else:
            _encode_value(field, item, element)
    return element


def encode(value: Any) -> str:
    """Encode registered record to XML text."""
    table = _get_schema(type(value))
    return getbytes(
        _encode_record(value, Element(table.root, table.namespace)),
    ).decode()


def decode(data: str | bytes, cls: Optional[type[T]] = None) -> T:
    """
    Decode XML text to record. Record type is looked up by root element
    name if cls is not given.
    """
    element = fromstring(data)
    root = _localname(element.tag)
    if cls is None:
        if root not in _ROOTS:
            raise XmlError(f"unknown XML document <{root}>", root)
        cls = _ROOTS[root]
    elif _get_schema(cls).root != root:
        raise XmlError(
            f"expected XML document <{_get_schema(cls).root}>, got <{root}>",
            root,
        )
    return _decode_record(cls, element)
