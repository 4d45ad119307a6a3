r"""HTTP response body parsing utilities.

This module provides functions to decode a response body according to
its declared content type.
"""

from __future__ import annotations

__all__ = ["parse_body", "xml_to_data"]

import json
import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any

from reqlog.exceptions import JsonDecodeError, XmlParseError

if TYPE_CHECKING:
    from reqlog.models import RawResponse

logger: logging.Logger = logging.getLogger(__name__)

ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "0"


def parse_body(response: RawResponse) -> Any:
    """Parse a response body based on its content type.

    Content types are matched as case-insensitive substrings of the
    ``Content-Type`` header, so parameters such as ``charset`` are
    ignored:

    - ``application/json``: decoded to Python data.
    - ``text/html``: returned as a string.
    - ``application/xml`` and ``text/xml``: parsed and normalized to the
      same structure a JSON body would decode to (see ``xml_to_data``).
    - anything else, including a missing header: returned as a string.

    Args:
        response: The response to parse.

    Returns:
        The parsed body, or a ``JsonDecodeError``/``XmlParseError`` if
        the body is malformed for its content type.

    Example:
        ```pycon
        >>> from reqlog.models import RawResponse
        >>> from reqlog.utils.response import parse_body
        >>> parse_body(RawResponse(200, {"Content-Type": "application/json"}, b'{"id": 1}'))
        {'id': 1}
        >>> parse_body(RawResponse(200, {"Content-Type": "text/xml"}, b"<r><id>1</id></r>"))
        {'id': '1'}
        >>> parse_body(RawResponse(200, {}, b"OK"))
        'OK'

        ```
    """
    content_type = response.header("content-type").lower()
    if "application/json" in content_type:
        try:
            return json.loads(response.body)
        except ValueError as exc:
            logger.debug(f"Failed to decode JSON response body: {exc}")
            return JsonDecodeError()
    if "text/html" in content_type:
        return response.text
    if "application/xml" in content_type or "text/xml" in content_type:
        try:
            root = ET.fromstring(response.body)
        except ET.ParseError as exc:
            logger.debug(f"Failed to parse XML response body: {exc}")
            return XmlParseError()
        return xml_to_data(root)
    return response.text


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _text(element: ET.Element) -> str | None:
    if element.text is None or not element.text.strip():
        return None
    return element.text


def _element_value(element: ET.Element) -> Any:
    text = _text(element)
    if len(element) == 0 and not element.attrib:
        return text if text is not None else {}
    data = _element_data(element)
    if len(element) == 0 and text is not None:
        data[TEXT_KEY] = text
    return data


def _element_data(element: ET.Element) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if element.attrib:
        data[ATTRIBUTES_KEY] = {_local_name(k): v for k, v in element.attrib.items()}
    repeated: set[str] = set()
    for child in element:
        name = _local_name(child.tag)
        value = _element_value(child)
        if name not in data:
            data[name] = value
        elif name in repeated:
            data[name].append(value)
        else:
            data[name] = [data[name], value]
            repeated.add(name)
    return data


def xml_to_data(root: ET.Element) -> dict[str, Any]:
    """Normalize an XML tree to JSON-like data.

    The root element becomes the returned dictionary. The rules are:

    - attributes are stored under ``"@attributes"``;
    - a child with only text becomes a string;
    - a child without text, attributes or children becomes ``{}``;
    - repeated child tags become a list, in document order;
    - whitespace-only text is ignored;
    - the text of an element that also has attributes is stored under
      ``"0"``, as is the text of a root without children.

    Keeping the text of an element with attributes differs from
    PHP's ``json_encode`` of a SimpleXML tree, which reduces such a
    child to its text alone and loses the attributes.

    Namespaces are dropped from tag and attribute names.

    Args:
        root: The root element.

    Returns:
        The normalized data.

    Example:
        ```pycon
        >>> import xml.etree.ElementTree as ET
        >>> from reqlog.utils.response import xml_to_data
        >>> xml_to_data(ET.fromstring('<r v="2"><item>a</item><item>b</item><empty/></r>'))
        {'@attributes': {'v': '2'}, 'item': ['a', 'b'], 'empty': {}}

        ```
    """
    data = _element_data(root)
    text = _text(root)
    if len(root) == 0 and text is not None:
        data[TEXT_KEY] = text
    return data
