"""
Erros tipados do cliente WeChat Pay
"""

from __future__ import annotations


class WeChatPayError(Exception):
    """Base de todas as falhas relacionadas ao gateway"""


class EnvelopeDecodeError(WeChatPayError):
    """Corpo de resposta ou notificação que não é um envelope XML válido"""

    def __init__(self, raw: bytes, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"[msg : xmlDecodeError] [reason : {reason}]")


class ReturnCodeError(WeChatPayError):
    """
    Falha de comunicação (return_code != SUCCESS)

    A mensagem inclui a resposta bruta, a string assinada e a assinatura para
    facilitar o suporte. A string assinada nunca contém a chave.

    Args:
        raw: Corpo bruto da resposta
        signed: String assinada da requisição (sem a chave)
        sign: Assinatura enviada
    """

    def __init__(self, raw: bytes, signed: str, sign: str):
        self.raw = raw
        self.signed = signed
        self.sign = sign
        text = raw.decode("utf-8", errors="replace")
        super().__init__(
            f"[msg : returnCodeFail] [rawReturn : {text}] "
            f"[signstr : {signed}] [sign : {sign}]"
        )


class ResultCodeError(WeChatPayError):
    """Falha de negócio; a mensagem é err_code seguido de err_code_des, sem separador"""

    def __init__(self, err_code: str, err_code_des: str):
        self.err_code = err_code
        self.err_code_des = err_code_des
        super().__init__(err_code + err_code_des)


class NotifyError(WeChatPayError):
    """Notificação rejeitada; a mensagem é só o código de status que falhou"""

    def __init__(self, code: str):
        self.code = code
        super().__init__(code)


class SignatureError(WeChatPayError):
    """Assinatura recebida difere da calculada localmente"""

    def __init__(self, expected: str, received: str):
        self.expected = expected
        self.received = received
        super().__init__("invalid signature")


__all__ = [
    "WeChatPayError",
    "EnvelopeDecodeError",
    "ReturnCodeError",
    "ResultCodeError",
    "NotifyError",
    "SignatureError",
]
