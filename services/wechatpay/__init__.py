"""
WeChat Pay v2 (XML) client services
"""

from .client import WeChatPayClient
from .errors import (
    EnvelopeDecodeError,
    NotifyError,
    ResultCodeError,
    ReturnCodeError,
    SignatureError,
    WeChatPayError,
)
from .models import (
    JSAPIParams,
    MerchantConfig,
    OrderQueryResult,
    PayResult,
    TradeState,
    UnifiedOrderParams,
)
from .notify import build_notify_reply, check_sign, parse_notification

__all__ = [
    "EnvelopeDecodeError",
    "JSAPIParams",
    "MerchantConfig",
    "NotifyError",
    "OrderQueryResult",
    "PayResult",
    "ResultCodeError",
    "ReturnCodeError",
    "SignatureError",
    "TradeState",
    "UnifiedOrderParams",
    "WeChatPayClient",
    "WeChatPayError",
    "build_notify_reply",
    "check_sign",
    "parse_notification",
]
