"""
Assinatura MD5 do protocolo v2 do WeChat Pay
"""

from __future__ import annotations

import hashlib
import secrets
import string
from typing import Iterable, List, Tuple

Pair = Tuple[str, str]

NONCE_ALPHABET = string.ascii_letters + string.digits


def md5_hex(text: str) -> str:
    """MD5 em hexadecimal maiúsculo, formato exigido pelo gateway"""
    return hashlib.md5(text.encode("utf-8")).hexdigest().upper()


def sign(pairs: Iterable[Pair], key: str) -> str:
    """
    Assina pares na ordem recebida

    Monta ``campo=valor&`` para cada par, acrescenta ``key=<key>`` e aplica MD5.

    Args:
        pairs: Pares (campo, valor) já na ordem canônica da operação
        key: Chave compartilhada do comerciante

    Returns:
        Assinatura MD5 em hexadecimal maiúsculo
    """
    text = "".join(f"{name}={value}&" for name, value in pairs)
    return md5_hex(f"{text}key={key}")


def sorted_sign(fragments: Iterable[str], key: str) -> str:
    """
    Assina fragmentos ``campo=valor&`` ordenados lexicograficamente

    A ordem de construção dos fragmentos não influencia o resultado.
    """
    return md5_hex("".join(sorted(fragments)) + f"key={key}")


def random_str(length: int = 32) -> str:
    """Gera nonce alfanumérico"""
    return "".join(secrets.choice(NONCE_ALPHABET) for _ in range(length))


class SignBuilder:
    """Lista ordenada de pares usada para montar a string assinada"""

    def __init__(self):
        self._pairs: List[Pair] = []

    def add(self, name: str, value) -> "SignBuilder":
        """Adiciona um par; valores vazios ficam de fora, como no envelope XML"""
        if value is None or value == "":
            return self
        self._pairs.append((name, str(value)))
        return self

    def pairs(self) -> List[Pair]:
        return list(self._pairs)

    def canonical(self) -> str:
        """String assinada sem a chave, segura para mensagens de erro"""
        return "&".join(f"{name}={value}" for name, value in self._pairs)

    def sign(self, key: str) -> str:
        return sign(self._pairs, key)


__all__ = ["SignBuilder", "md5_hex", "random_str", "sign", "sorted_sign"]
