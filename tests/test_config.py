"""
Testes para configuração do comerciante
"""

import dataclasses

import pytest

from core.config import DEFAULT_ORDER_QUERY_BACKUP_URL, Settings
from services.wechatpay.models import MerchantConfig


def test_merchant_config_from_settings(monkeypatch):
    """Deve montar a configuração a partir das variáveis de ambiente"""
    monkeypatch.setenv("WECHAT_APP_ID", "wx123")
    monkeypatch.setenv("WECHAT_MCH_ID", "1900000109")
    monkeypatch.setenv("WECHAT_PAY_KEY", "secret-key")
    monkeypatch.setenv("WECHAT_PAY_NOTIFY_URL", "https://shop.example.com/notify")
    monkeypatch.setenv("WECHAT_HTTP_TIMEOUT", "7.5")

    settings = Settings(_env_file=None)
    config = MerchantConfig.from_settings(settings)

    assert settings.merchant_configured
    assert config.app_id == "wx123"
    assert config.pay_key == "secret-key"
    assert config.notify_url == "https://shop.example.com/notify"
    assert config.timeout == 7.5
    assert config.order_query_backup_url == DEFAULT_ORDER_QUERY_BACKUP_URL


def test_settings_without_credentials(monkeypatch):
    for name in ("WECHAT_APP_ID", "WECHAT_MCH_ID", "WECHAT_PAY_KEY"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert not settings.merchant_configured
    with pytest.raises(ValueError, match="WECHAT_PAY_KEY"):
        MerchantConfig.from_settings(settings)


def test_settings_endpoint_defaults_match_merchant_config(monkeypatch):
    """Settings e MerchantConfig usam os mesmos endpoints padrão"""
    for name in (
        "WECHAT_UNIFIED_ORDER_URL",
        "WECHAT_ORDER_QUERY_URL",
        "WECHAT_ORDER_QUERY_BACKUP_URL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)
    config = MerchantConfig(app_id="wx1", mch_id="1", pay_key="k")

    assert settings.WECHAT_UNIFIED_ORDER_URL == config.unified_order_url
    assert settings.WECHAT_ORDER_QUERY_URL == config.order_query_url
    assert settings.WECHAT_ORDER_QUERY_BACKUP_URL == config.order_query_backup_url


def test_merchant_config_is_immutable():
    config = MerchantConfig(app_id="wx1", mch_id="1", pay_key="k")

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.app_id = "wx2"


def test_repr_hides_key():
    config = MerchantConfig(app_id="wx1", mch_id="1", pay_key="very-secret")
    assert "very-secret" not in repr(config)
