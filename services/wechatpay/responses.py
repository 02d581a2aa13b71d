"""
Validação compartilhada das respostas do gateway

Toda resposta tem dois níveis de status: return_code (comunicação) e
result_code (negócio). O trade_state não é verificado aqui; quem chama decide.
"""

from __future__ import annotations

from typing import Type, TypeVar

from core.telemetry import logger

from . import xml_codec
from .errors import EnvelopeDecodeError, ResultCodeError, ReturnCodeError
from .models import SUCCESS, OrderQueryResult, PayResult

T = TypeVar("T", PayResult, OrderQueryResult)


def decode_envelope(raw: bytes, model: Type[T]) -> T:
    """Decodifica o XML bruto no dataclass indicado"""
    data = xml_codec.decode(raw)
    try:
        return model.from_fields(data)
    except ValueError as e:
        raise EnvelopeDecodeError(raw, str(e)) from e


def _validate(raw: bytes, signed: str, sign: str, model: Type[T]) -> T:
    result = decode_envelope(raw, model)

    if result.return_code != SUCCESS:
        logger.error(
            "Gateway communication failure",
            extra={"return_code": result.return_code, "return_msg": result.return_msg},
        )
        raise ReturnCodeError(raw, signed, sign)

    if result.result_code != SUCCESS:
        logger.warning(
            "Gateway business failure",
            extra={"err_code": result.err_code, "err_code_des": result.err_code_des},
        )
        raise ResultCodeError(result.err_code, result.err_code_des)

    return result


def parse_pay_response(raw: bytes, signed: str, sign: str) -> PayResult:
    """
    Valida a resposta do unified order

    Args:
        raw: Corpo bruto da resposta
        signed: String assinada da requisição (sem a chave)
        sign: Assinatura enviada

    Returns:
        PayResult decodificado

    Raises:
        ReturnCodeError: Se return_code != SUCCESS
        ResultCodeError: Se result_code != SUCCESS
    """
    return _validate(raw, signed, sign, PayResult)


def parse_order_query_response(raw: bytes, signed: str, sign: str) -> OrderQueryResult:
    """Valida a resposta do order query (mesmas regras do unified order)"""
    return _validate(raw, signed, sign, OrderQueryResult)


__all__ = ["decode_envelope", "parse_order_query_response", "parse_pay_response"]
