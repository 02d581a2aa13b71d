"""
Configurações da aplicação usando Pydantic
"""
from pydantic_settings import BaseSettings

DEFAULT_UNIFIED_ORDER_URL = "https://api.mch.weixin.qq.com/pay/unifiedorder"
DEFAULT_ORDER_QUERY_URL = "https://api.mch.weixin.qq.com/pay/orderquery"
DEFAULT_ORDER_QUERY_BACKUP_URL = "https://api2.mch.weixin.qq.com/pay/orderquery"


class Settings(BaseSettings):
    """Configurações globais do cliente WeChat Pay"""

    # Ambiente
    APP_ENV: str = "dev"

    # Credenciais do comerciante
    WECHAT_APP_ID: str = ""
    WECHAT_MCH_ID: str = ""
    WECHAT_PAY_KEY: str = ""
    WECHAT_PAY_NOTIFY_URL: str = ""

    # Endpoints do gateway
    WECHAT_UNIFIED_ORDER_URL: str = DEFAULT_UNIFIED_ORDER_URL
    WECHAT_ORDER_QUERY_URL: str = DEFAULT_ORDER_QUERY_URL
    WECHAT_ORDER_QUERY_BACKUP_URL: str = DEFAULT_ORDER_QUERY_BACKUP_URL
    WECHAT_HTTP_TIMEOUT: float = 30.0

    # Monitoring
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignora campos extras do .env

    @property
    def merchant_configured(self) -> bool:
        """Indica se as credenciais mínimas do comerciante estão presentes"""
        return bool(self.WECHAT_APP_ID and self.WECHAT_MCH_ID and self.WECHAT_PAY_KEY)


settings = Settings()
