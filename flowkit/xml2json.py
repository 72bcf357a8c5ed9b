"""Conversion of XML documents to JSON-style objects, and the activity that does it."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ElementTree
from typing import Any

from .activity import ActivityContext, ActivityError
from .coerce import to_string

_logger = logging.getLogger(__name__)
_NUMBER = re.compile(r"-?(0|[1-9]\d*)(\.\d+)?([eE][+-]?\d+)?")
_ATTRIBUTE_PREFIX = "-"
_CONTENT_KEY = "#content"


def _local(name: str) -> str:
    return name.rsplit("}", 1)[-1]


def _scalar(text: str) -> Any:
    if text == "true":
        return True
    if text == "false":
        return False
    if text == "null":
        return None
    if _NUMBER.fullmatch(text):
        return float(text)
    return text


def _element_value(element: ElementTree.Element) -> Any:
    attributes = {
        _ATTRIBUTE_PREFIX + _local(name): _scalar(value.strip())
        for name, value in element.attrib.items()
    }
    grouped: dict[str, list[Any]] = {}
    for child in element:
        grouped.setdefault(_local(child.tag), []).append(_element_value(child))
    text = ((element.text or "") + "".join(child.tail or "" for child in element)).strip()

    if not attributes and not grouped:
        return _scalar(text)
    result: dict[str, Any] = dict(attributes)
    for name, values in grouped.items():
        result[name] = values[0] if len(values) == 1 else values
    if text:
        result[_CONTENT_KEY] = _scalar(text)
    return result


def convert(xml_data: str) -> dict[str, Any]:
    """Convert an XML document to an object keyed by the root element's name.

    Attributes become keys prefixed with ``-``, text next to attributes or
    children is kept under ``#content``, repeated elements become lists and
    text that reads as a number, boolean or null is converted.
    """
    try:
        root = ElementTree.fromstring(xml_data)
    except ElementTree.ParseError as exc:
        raise ValueError(f"invalid XML: {exc}") from exc
    return {_local(root.tag): _element_value(root)}


class Xml2JsonActivity:
    """An activity that turns its ``xmlData`` input into a ``jsonObject`` output."""

    def eval(self, ctx: ActivityContext) -> bool:
        ctx.logger.debug("Executing XML2JSON activity")
        xml_data = to_string(ctx.get_input("xmlData"))
        try:
            json_object = convert(xml_data)
        except ValueError as exc:
            ctx.logger.error("%s", exc)
            raise ActivityError("Failed to convert XML data") from exc
        ctx.set_output("jsonObject", json_object)
        ctx.logger.debug("XML2JSON activity completed")
        return True