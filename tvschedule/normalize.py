"""
Normalizing (raw bytes -> BeautifulSoup tree).

Best effort: html.parser copes with unclosed tags and stray markup.
Only input that is not markup at all is rejected.
"""

from __future__ import annotations

import logging
from typing import Union

from bs4 import BeautifulSoup

from tvschedule.errors import UnparsableDocumentError
from tvschedule.model import RawDocument

logger = logging.getLogger(__name__)

# number of leading bytes inspected for binary content
_SNIFF_BYTES = 1024


def _looks_binary(content: bytes) -> bool:
    return b"\x00" in content[:_SNIFF_BYTES]


def normalize(raw: Union[RawDocument, bytes, str]) -> BeautifulSoup:
    """
    Parse raw markup into a document tree.

    Raises UnparsableDocumentError for empty bodies, binary content and
    text that contains no element at all.
    """
    encoding = None
    if isinstance(raw, RawDocument):
        content: Union[bytes, str] = raw.content
        encoding = raw.encoding
    else:
        content = raw

    if not content or not content.strip():
        raise UnparsableDocumentError("Document is empty")

    if isinstance(content, bytes):
        if _looks_binary(content):
            raise UnparsableDocumentError("Document looks like binary content")
        # from_encoding is only a hint, bs4 falls back to its own detection
        soup = BeautifulSoup(content, "html.parser", from_encoding=encoding)
    else:
        if "\x00" in content[:_SNIFF_BYTES]:
            raise UnparsableDocumentError("Document looks like binary content")
        soup = BeautifulSoup(content, "html.parser")

    if soup.find() is None:
        raise UnparsableDocumentError("Document contains no markup")

    logger.debug("Normalized document (encoding=%s)", soup.original_encoding or encoding)
    return soup
