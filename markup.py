"""Parse Printout markup into an immutable node tree.

The markup is plain XML::

    <Printout>
      <Text align="center" bold="1">Coffee shop</Text>
      <NewLine />
      <Text>Espresso|2.50</Text>
      <Line lineChar="=" />
      <QRCode magnification="4">https://example.com</QRCode>
    </Printout>

Each element becomes a :class:`Node` exposing its tag, attributes, text
value and children. The encoder only consumes this tree.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Mapping, Tuple, Union

from errors import MarkupError

logger = logging.getLogger(__name__)

ROOT_TAG = "Printout"


@dataclass(frozen=True)
class Node:
    """Single markup element."""

    tag: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    value: str = ""
    children: Tuple["Node", ...] = ()

    @classmethod
    def from_element(cls, element: ET.Element) -> "Node":
        """Convert an ElementTree element (and its subtree) to a Node."""
        return cls(
            tag=element.tag,
            attributes=dict(element.attrib),
            value=element.text or "",
            children=tuple(
                cls.from_element(child)
                for child in element
                # Skip comments and processing instructions
                if isinstance(child.tag, str)
            ),
        )


@dataclass(frozen=True)
class Document:
    root: Node

    @property
    def is_printout(self) -> bool:
        return self.root.tag == ROOT_TAG


def parse_markup(text: Union[str, bytes]) -> Document:
    """Parse markup text into a Document.

    Raises:
        MarkupError: the text is not well-formed XML.
    """
    try:
        element = ET.fromstring(text)
    except ET.ParseError as e:
        logger.warning("Markup parsing failed: %s", e)
        raise MarkupError(f"Malformed markup: {e}") from e
    return Document(root=Node.from_element(element))
