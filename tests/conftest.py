"""
Configuração global do pytest
"""

from typing import Callable
from unittest.mock import MagicMock

import pytest

from services.wechatpay import MerchantConfig, UnifiedOrderParams, WeChatPayClient

APP_ID = "wx016b7f8177b8a007"
MCH_ID = "1900000109"
PAY_KEY = "1ebbd6188e79ed64fc2c4f957a988a5b"


def make_envelope(**fields) -> bytes:
    """Monta um envelope XML como o gateway devolve (valores em CDATA)"""
    parts = "".join(
        f"<{name}><![CDATA[{value}]]></{name}>" for name, value in fields.items()
    )
    return f"<xml>{parts}</xml>".encode("utf-8")


@pytest.fixture
def merchant_config() -> MerchantConfig:
    """Configuração de comerciante com endpoints de teste"""
    return MerchantConfig(
        app_id=APP_ID,
        mch_id=MCH_ID,
        pay_key=PAY_KEY,
        notify_url="https://shop.example.com/wechatpay/notify",
        unified_order_url="https://primary.test/pay/unifiedorder",
        order_query_url="https://primary.test/pay/orderquery",
        order_query_backup_url="https://backup.test/pay/orderquery",
        timeout=5.0,
    )


@pytest.fixture
def client(merchant_config) -> WeChatPayClient:
    return WeChatPayClient(merchant_config)


@pytest.fixture
def order_params() -> UnifiedOrderParams:
    return UnifiedOrderParams(
        total_fee="1",
        create_ip="127.0.0.1",
        body="Test product",
        fee_type="CNY",
        out_trade_no="ORDER20190811001",
        openid="oUpF8uMuAJO_M2pxb1Q9zNjWeS6o",
    )


@pytest.fixture
def envelope() -> Callable[..., bytes]:
    return make_envelope


@pytest.fixture
def xml_response() -> Callable[[bytes], MagicMock]:
    """Fábrica de respostas httpx falsas com corpo XML"""

    def _make(body: bytes) -> MagicMock:
        response = MagicMock()
        response.content = body
        response.raise_for_status = MagicMock()
        return response

    return _make
