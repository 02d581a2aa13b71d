"""
Codec do envelope XML usado por todas as operações v2 do gateway
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Dict, Mapping, Optional

from .errors import EnvelopeDecodeError


def encode(fields: Mapping[str, Optional[str]]) -> bytes:
    """
    Serializa campos em um envelope ``<xml>``

    Args:
        fields: Campos na ordem do envelope; valores vazios ou None ficam de fora

    Returns:
        Corpo XML em UTF-8
    """
    root = ET.Element("xml")
    for name, value in fields.items():
        if value is None or value == "":
            continue
        ET.SubElement(root, name).text = str(value)
    return ET.tostring(root, encoding="utf-8")


def decode(raw: bytes) -> Dict[str, str]:
    """
    Decodifica um envelope ``<xml>`` em ``{tag: texto}``

    Tags ausentes simplesmente não aparecem no dicionário.

    Raises:
        EnvelopeDecodeError: Se o XML é inválido ou a raiz não é ``<xml>``
    """
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        raise EnvelopeDecodeError(raw, str(e)) from e

    if root.tag != "xml":
        raise EnvelopeDecodeError(raw, f"unexpected root element <{root.tag}>")

    return {child.tag: child.text or "" for child in root}


__all__ = ["encode", "decode"]
