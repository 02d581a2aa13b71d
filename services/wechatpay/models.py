"""
Estruturas de dados trocadas com o gateway do WeChat Pay
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from core.config import (
    DEFAULT_ORDER_QUERY_BACKUP_URL,
    DEFAULT_ORDER_QUERY_URL,
    DEFAULT_UNIFIED_ORDER_URL,
)

SUCCESS = "SUCCESS"
TRADE_TYPE_JSAPI = "JSAPI"
SIGN_TYPE_MD5 = "MD5"


class TradeState(str, Enum):
    SUCCESS = "SUCCESS"
    REFUND = "REFUND"
    NOTPAY = "NOTPAY"
    CLOSED = "CLOSED"
    REVOKED = "REVOKED"
    USERPAYING = "USERPAYING"
    PAYERROR = "PAYERROR"


@dataclass(frozen=True)
class MerchantConfig:
    """Credenciais e endpoints do comerciante; imutável durante a vida do cliente"""

    app_id: str
    mch_id: str
    pay_key: str = field(repr=False)
    notify_url: str = ""
    unified_order_url: str = DEFAULT_UNIFIED_ORDER_URL
    order_query_url: str = DEFAULT_ORDER_QUERY_URL
    order_query_backup_url: str = DEFAULT_ORDER_QUERY_BACKUP_URL
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings) -> "MerchantConfig":
        """
        Monta a configuração a partir de core.config

        Args:
            settings: Instância de Settings

        Returns:
            MerchantConfig pronta para o WeChatPayClient

        Raises:
            ValueError: Se appid, mch_id ou chave não estão configurados
        """
        if not settings.merchant_configured:
            raise ValueError(
                "WeChat Pay não configurado (WECHAT_APP_ID, WECHAT_MCH_ID, WECHAT_PAY_KEY)"
            )
        return cls(
            app_id=settings.WECHAT_APP_ID,
            mch_id=settings.WECHAT_MCH_ID,
            pay_key=settings.WECHAT_PAY_KEY,
            notify_url=settings.WECHAT_PAY_NOTIFY_URL,
            unified_order_url=settings.WECHAT_UNIFIED_ORDER_URL,
            order_query_url=settings.WECHAT_ORDER_QUERY_URL,
            order_query_backup_url=settings.WECHAT_ORDER_QUERY_BACKUP_URL,
            timeout=settings.WECHAT_HTTP_TIMEOUT,
        )


@dataclass
class UnifiedOrderParams:
    """Dados do pedido necessários para obter um prepay_id"""

    total_fee: str  # em centavos (fen)
    create_ip: str
    body: str
    fee_type: str
    out_trade_no: str
    openid: str
    notify_url: str = ""  # substitui MerchantConfig.notify_url quando definido


def _int_or_none(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass
class _Envelope:
    """Decodificação comum dos envelopes de resposta"""

    @classmethod
    def from_fields(cls, data: Mapping[str, str]):
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            if f.type in ("Optional[int]", Optional[int]):
                kwargs[f.name] = _int_or_none(raw)
            else:
                kwargs[f.name] = raw or ""
        return cls(**kwargs)


@dataclass
class PayResult(_Envelope):
    return_code: str = ""
    return_msg: str = ""
    appid: str = ""
    mch_id: str = ""
    nonce_str: str = ""
    sign: str = ""
    result_code: str = ""
    trade_type: str = ""
    prepay_id: str = ""
    code_url: str = ""
    err_code: str = ""
    err_code_des: str = ""


@dataclass
class OrderQueryResult(_Envelope):
    # Status de comunicação, não de transação
    return_code: str = ""
    return_msg: str = ""

    appid: str = ""
    mch_id: str = ""
    nonce_str: str = ""
    sign: str = ""
    result_code: str = ""
    err_code: str = ""
    err_code_des: str = ""

    trade_state: str = ""

    device_info: str = ""
    openid: str = ""
    is_subscribe: str = ""
    trade_type: str = ""
    bank_type: str = ""
    total_fee: Optional[int] = None
    settlement_total_fee: Optional[int] = None
    fee_type: str = ""
    cash_fee: Optional[int] = None
    cash_fee_type: str = ""
    coupon_fee: Optional[int] = None
    coupon_count: Optional[int] = None
    transaction_id: str = ""
    out_trade_no: str = ""
    attach: str = ""
    trade_state_desc: str = ""
    time_end: str = ""

    @property
    def state(self) -> Optional[TradeState]:
        try:
            return TradeState(self.trade_state)
        except ValueError:
            return None

    @property
    def is_paid(self) -> bool:
        return self.state is TradeState.SUCCESS


@dataclass
class JSAPIParams:
    """Parâmetros entregues ao JS bridge do WeChat para abrir o pagamento"""

    app_id: str
    timestamp: int
    nonce_str: str
    package: str
    sign_type: str
    sign: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "appId": self.app_id,
            "timeStamp": str(self.timestamp),
            "nonceStr": self.nonce_str,
            "package": self.package,
            "signType": self.sign_type,
            "paySign": self.sign,
        }


__all__ = [
    "JSAPIParams",
    "MerchantConfig",
    "OrderQueryResult",
    "PayResult",
    "TradeState",
    "UnifiedOrderParams",
]
