"""
Notificações assíncronas de pagamento do WeChat Pay

O corpo da notificação chega ao endpoint HTTP da aplicação e é entregue aqui
já lido; este módulo não faz nenhuma chamada de rede.
"""

from __future__ import annotations

import hmac

from core.telemetry import logger

from . import xml_codec
from .errors import NotifyError, SignatureError
from .models import SUCCESS, MerchantConfig, OrderQueryResult, UnifiedOrderParams
from .responses import decode_envelope
from .signer import sorted_sign


def parse_notification(body: bytes) -> OrderQueryResult:
    """
    Decodifica a notificação de pagamento

    Args:
        body: Corpo XML recebido no callback

    Returns:
        OrderQueryResult com os dados do pagamento

    Raises:
        NotifyError: Com o return_code ou result_code que falhou (só o código)
        EnvelopeDecodeError: Se o corpo não é um envelope XML válido
    """
    result = decode_envelope(body, OrderQueryResult)

    if result.return_code != SUCCESS:
        logger.warning(
            "Payment notification with failed return_code",
            extra={"return_code": result.return_code},
        )
        raise NotifyError(result.return_code)

    if result.result_code != SUCCESS:
        logger.warning(
            "Payment notification with failed result_code",
            extra={"result_code": result.result_code, "out_trade_no": result.out_trade_no},
        )
        raise NotifyError(result.result_code)

    logger.info(
        "Payment notification received",
        extra={
            "out_trade_no": result.out_trade_no,
            "transaction_id": result.transaction_id,
        },
    )
    return result


def _fee(value) -> str:
    return "" if value is None else str(value)


def notification_fragments(
    result: OrderQueryResult, params: UnifiedOrderParams, config: MerchantConfig
) -> list:
    """
    Fragmentos ``campo=valor&`` usados na verificação da assinatura

    appid e mch_id vêm da configuração; openid, total_fee e out_trade_no do
    pedido original, para amarrar a notificação ao que foi cobrado. Campos
    vazios não participam da assinatura.
    """
    values = [
        ("appid", config.app_id),
        ("mch_id", config.mch_id),
        ("result_code", result.result_code),
        ("openid", params.openid),
        ("is_subscribe", result.is_subscribe),
        ("trade_type", result.trade_type),
        ("bank_type", result.bank_type),
        ("total_fee", params.total_fee),
        ("cash_fee", _fee(result.cash_fee)),
        ("transaction_id", result.transaction_id),
        ("out_trade_no", params.out_trade_no),
        ("time_end", result.time_end),
        ("return_code", result.return_code),
        ("return_msg", result.return_msg),
        ("nonce_str", result.nonce_str),
    ]
    return [f"{name}={value}&" for name, value in values if value != ""]


def check_sign(
    result: OrderQueryResult, params: UnifiedOrderParams, config: MerchantConfig
) -> None:
    """
    Verifica a assinatura de uma notificação contra o pedido original

    Raises:
        SignatureError: Se a assinatura calculada difere da recebida
    """
    expected = sorted_sign(notification_fragments(result, params, config), config.pay_key)

    # Comparação sensível a maiúsculas, em tempo constante
    if not hmac.compare_digest(expected.encode(), result.sign.encode()):
        logger.warning(
            "Payment notification signature mismatch",
            extra={"out_trade_no": params.out_trade_no},
        )
        raise SignatureError(expected, result.sign)


def build_notify_reply(return_code: str = SUCCESS, return_msg: str = "OK") -> bytes:
    """Corpo XML que o endpoint de callback devolve ao gateway"""
    return xml_codec.encode({"return_code": return_code, "return_msg": return_msg})


__all__ = [
    "build_notify_reply",
    "check_sign",
    "notification_fragments",
    "parse_notification",
]
