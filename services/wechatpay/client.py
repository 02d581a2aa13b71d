"""
Cliente para API v2 (XML) do WeChat Pay
"""

import time
from typing import NamedTuple, Optional

import httpx

from core.telemetry import logger

from . import xml_codec
from .models import (
    SIGN_TYPE_MD5,
    TRADE_TYPE_JSAPI,
    JSAPIParams,
    MerchantConfig,
    OrderQueryResult,
    UnifiedOrderParams,
)
from .responses import parse_order_query_response, parse_pay_response
from .signer import SignBuilder, random_str

XML_HEADERS = {"Content-Type": "application/xml; charset=utf-8"}


class SignedRequest(NamedTuple):
    body: bytes
    signed: str  # string assinada sem a chave
    sign: str


class WeChatPayClient:
    """Cliente para API do WeChat Pay"""

    def __init__(self, config: MerchantConfig):
        self.config = config

    # ==================== REQUEST BUILDERS ====================

    def build_unified_order(
        self, params: UnifiedOrderParams, nonce_str: Optional[str] = None
    ) -> SignedRequest:
        """
        Monta o envelope assinado do unified order

        Args:
            params: Dados do pedido
            nonce_str: Nonce fixo (testes); gerado quando omitido

        Returns:
            SignedRequest com corpo XML, string assinada e assinatura
        """
        cfg = self.config
        nonce_str = nonce_str or random_str(32)
        notify_url = params.notify_url or cfg.notify_url

        builder = (
            SignBuilder()
            .add("appid", cfg.app_id)
            .add("body", params.body)
            .add("fee_type", params.fee_type)
            .add("mch_id", cfg.mch_id)
            .add("nonce_str", nonce_str)
            .add("notify_url", notify_url)
            .add("openid", params.openid)
            .add("out_trade_no", params.out_trade_no)
            .add("spbill_create_ip", params.create_ip)
            .add("total_fee", params.total_fee)
            .add("trade_type", TRADE_TYPE_JSAPI)
        )
        sign = builder.sign(cfg.pay_key)

        body = xml_codec.encode(
            {
                "appid": cfg.app_id,
                "mch_id": cfg.mch_id,
                "nonce_str": nonce_str,
                "sign": sign,
                "body": params.body,
                "out_trade_no": params.out_trade_no,
                "fee_type": params.fee_type,
                "total_fee": params.total_fee,
                "spbill_create_ip": params.create_ip,
                "notify_url": notify_url,
                "trade_type": TRADE_TYPE_JSAPI,
                "openid": params.openid,
            }
        )
        return SignedRequest(body, builder.canonical(), sign)

    def build_order_query(
        self, id_field: str, id_value: str, nonce_str: Optional[str] = None
    ) -> SignedRequest:
        """Monta o envelope do order query por out_trade_no ou transaction_id"""
        if id_field not in ("out_trade_no", "transaction_id"):
            raise ValueError(f"Unsupported order identifier: {id_field}")
        if not id_value:
            raise ValueError(f"{id_field} é obrigatório")

        cfg = self.config
        nonce_str = nonce_str or random_str(32)

        builder = (
            SignBuilder()
            .add("appid", cfg.app_id)
            .add("mch_id", cfg.mch_id)
            .add("nonce_str", nonce_str)
            .add(id_field, id_value)
        )
        sign = builder.sign(cfg.pay_key)

        body = xml_codec.encode(
            {
                "appid": cfg.app_id,
                "mch_id": cfg.mch_id,
                id_field: id_value,
                "nonce_str": nonce_str,
                "sign": sign,
            }
        )
        return SignedRequest(body, builder.canonical(), sign)

    def build_jsapi_params(
        self,
        prepay_id: str,
        nonce_str: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> JSAPIParams:
        """
        Gera os parâmetros do JS bridge a partir de um prepay_id

        Args:
            prepay_id: ID retornado pelo unified order
            nonce_str: Nonce fixo (testes); gerado quando omitido
            timestamp: Unix timestamp fixo (testes); usa o relógio quando omitido
        """
        cfg = self.config
        nonce_str = nonce_str or random_str(32)
        timestamp = int(time.time()) if timestamp is None else timestamp
        package = f"prepay_id={prepay_id}"

        sign = (
            SignBuilder()
            .add("appId", cfg.app_id)
            .add("nonceStr", nonce_str)
            .add("package", package)
            .add("signType", SIGN_TYPE_MD5)
            .add("timeStamp", timestamp)
            .sign(cfg.pay_key)
        )

        return JSAPIParams(
            app_id=cfg.app_id,
            timestamp=timestamp,
            nonce_str=nonce_str,
            package=package,
            sign_type=SIGN_TYPE_MD5,
            sign=sign,
        )

    # ==================== TRANSPORT ====================

    async def _post(self, url: str, body: bytes) -> bytes:
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            response = await client.post(url, content=body, headers=XML_HEADERS)
            response.raise_for_status()
            return response.content

    def _post_sync(self, url: str, body: bytes) -> bytes:
        with httpx.Client(timeout=self.config.timeout) as client:
            response = client.post(url, content=body, headers=XML_HEADERS)
            response.raise_for_status()
            return response.content

    # ==================== UNIFIED ORDER ====================

    async def create_prepay_id(self, params: UnifiedOrderParams) -> str:
        """
        Solicita um prepay_id ao gateway (trade_type JSAPI)

        Args:
            params: Dados do pedido

        Returns:
            prepay_id

        Raises:
            ReturnCodeError: Falha de comunicação reportada pelo gateway
            ResultCodeError: Falha de negócio (err_code + err_code_des)
            httpx.HTTPError: Se erro na requisição
        """
        request = self.build_unified_order(params)
        try:
            raw = await self._post(self.config.unified_order_url, request.body)
        except httpx.HTTPError as e:
            logger.error(
                "Error creating unified order",
                extra={"error": str(e), "out_trade_no": params.out_trade_no},
            )
            raise

        result = parse_pay_response(raw, request.signed, request.sign)
        logger.info(
            "Prepay id created successfully",
            extra={"out_trade_no": params.out_trade_no, "prepay_id": result.prepay_id},
        )
        return result.prepay_id

    def create_prepay_id_sync(self, params: UnifiedOrderParams) -> str:
        """
        Versão síncrona de create_prepay_id
        """
        request = self.build_unified_order(params)
        try:
            raw = self._post_sync(self.config.unified_order_url, request.body)
        except httpx.HTTPError as e:
            logger.error(
                "Error creating unified order (sync)",
                extra={"error": str(e), "out_trade_no": params.out_trade_no},
            )
            raise

        result = parse_pay_response(raw, request.signed, request.sign)
        logger.info(
            "Prepay id created successfully (sync)",
            extra={"out_trade_no": params.out_trade_no, "prepay_id": result.prepay_id},
        )
        return result.prepay_id

    # ==================== JSAPI ====================

    async def get_jsapi_params(self, params: UnifiedOrderParams) -> JSAPIParams:
        """Cria o pedido e devolve os parâmetros para o JS bridge"""
        prepay_id = await self.create_prepay_id(params)
        return self.build_jsapi_params(prepay_id)

    def get_jsapi_params_sync(self, params: UnifiedOrderParams) -> JSAPIParams:
        prepay_id = self.create_prepay_id_sync(params)
        return self.build_jsapi_params(prepay_id)

    # ==================== ORDER QUERY ====================

    async def _query(self, id_field: str, id_value: str) -> OrderQueryResult:
        request = self.build_order_query(id_field, id_value)
        try:
            raw = await self._post(self.config.order_query_url, request.body)
        except httpx.HTTPError as e:
            # Falhou: consulta de novo no endpoint reserva
            logger.warning(
                "Order query failed, retrying on backup endpoint",
                extra={"error": str(e), id_field: id_value},
            )
            try:
                raw = await self._post(self.config.order_query_backup_url, request.body)
            except httpx.HTTPError as backup_error:
                logger.error(
                    "Error querying order",
                    extra={"error": str(backup_error), id_field: id_value},
                )
                raise

        result = parse_order_query_response(raw, request.signed, request.sign)
        logger.info(
            "Order queried",
            extra={id_field: id_value, "trade_state": result.trade_state},
        )
        return result

    def _query_sync(self, id_field: str, id_value: str) -> OrderQueryResult:
        request = self.build_order_query(id_field, id_value)
        try:
            raw = self._post_sync(self.config.order_query_url, request.body)
        except httpx.HTTPError as e:
            logger.warning(
                "Order query failed, retrying on backup endpoint (sync)",
                extra={"error": str(e), id_field: id_value},
            )
            try:
                raw = self._post_sync(self.config.order_query_backup_url, request.body)
            except httpx.HTTPError as backup_error:
                logger.error(
                    "Error querying order (sync)",
                    extra={"error": str(backup_error), id_field: id_value},
                )
                raise

        result = parse_order_query_response(raw, request.signed, request.sign)
        logger.info(
            "Order queried (sync)",
            extra={id_field: id_value, "trade_state": result.trade_state},
        )
        return result

    async def query_order(self, out_trade_no: str) -> OrderQueryResult:
        """
        Consulta pedido pelo número do comerciante

        Args:
            out_trade_no: Número do pedido no sistema do comerciante

        Returns:
            OrderQueryResult; quem chama verifica trade_state

        Note:
            Erro de transporte no endpoint principal repete uma vez no reserva
        """
        return await self._query("out_trade_no", out_trade_no)

    def query_order_sync(self, out_trade_no: str) -> OrderQueryResult:
        return self._query_sync("out_trade_no", out_trade_no)

    async def query_order_by_transaction_id(self, transaction_id: str) -> OrderQueryResult:
        """Consulta pedido pelo ID de transação do WeChat"""
        return await self._query("transaction_id", transaction_id)

    def query_order_by_transaction_id_sync(self, transaction_id: str) -> OrderQueryResult:
        return self._query_sync("transaction_id", transaction_id)


__all__ = ["SignedRequest", "WeChatPayClient"]
