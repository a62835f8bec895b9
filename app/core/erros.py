"""
Tratamento global de erros

Converte exceções em uma resposta padronizada:
{
  "status_code": 404,
  "error": "PESSOA_NOT_FOUND",
  "message": "...",
  "timestamp": "2026-01-09T12:00:00+00:00",
  "path": "/pessoas/email/...",
  "details": {...}       // somente com EXPOSE_ERROR_DETAILS=true
}

SEGURANÇA:
- Com EXPOSE_ERROR_DETAILS=false (padrão) mensagens 4xx são trocadas por
  textos genéricos e os detalhes são omitidos, evitando enumeração de
  emails/telefones cadastrados
- Erros 500 nunca expõem a mensagem interna nesse modo
- O log sempre recebe a mensagem e os detalhes originais
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.exceptions import ErroNegocio
from app.core.logger import get_logger

logger = get_logger(__name__)

MENSAGENS_GENERICAS = {
    400: "Dados da requisição inválidos",
    401: "Autenticação necessária",
    403: "Acesso negado",
    404: "Recurso não encontrado",
    409: "Conflito de recurso - não foi possível processar a requisição",
    422: "Não foi possível processar a requisição",
}
MENSAGEM_GENERICA_4XX = "Falha na requisição"
MENSAGEM_ERRO_INTERNO = "Ocorreu um erro inesperado"

CODIGOS_HTTP = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
}


class FormatadorErros:
    """Monta o corpo de erro respeitando o modo de exposição de detalhes"""

    def __init__(self, expor_detalhes: bool = False):
        self.expor_detalhes = expor_detalhes

    def formatar(
        self,
        status_code: int,
        codigo: str,
        mensagem: str,
        caminho: str,
        detalhes: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if not self.expor_detalhes:
            if status_code >= 500:
                mensagem = MENSAGEM_ERRO_INTERNO
            else:
                mensagem = MENSAGENS_GENERICAS.get(status_code, MENSAGEM_GENERICA_4XX)
            detalhes = None

        corpo = {
            "status_code": status_code,
            "error": codigo,
            "message": mensagem,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": caminho,
        }
        if detalhes:
            corpo["details"] = detalhes
        return corpo

    def resposta(
        self,
        request: Request,
        status_code: int,
        codigo: str,
        mensagem: str,
        detalhes: Optional[Dict[str, Any]] = None,
    ) -> JSONResponse:
        contexto = f"{request.method} {request.url.path} status={status_code} error={codigo}"
        if status_code >= 500:
            logger.error(f"{mensagem} | {contexto} | details={detalhes}")
        else:
            logger.warning(f"{mensagem} | {contexto} | details={detalhes}")

        corpo = self.formatar(status_code, codigo, mensagem, request.url.path, detalhes)
        return JSONResponse(status_code=status_code, content=corpo)


def registrar_handlers_erro(app: FastAPI, formatador: FormatadorErros) -> None:
    """Registra os exception handlers da aplicação"""

    @app.exception_handler(ErroNegocio)
    async def erro_negocio_handler(request: Request, exc: ErroNegocio):
        return formatador.resposta(request, exc.status_code, exc.codigo, exc.mensagem, exc.detalhes)

    @app.exception_handler(RequestValidationError)
    async def erro_validacao_handler(request: Request, exc: RequestValidationError):
        erros = [
            {"field": ".".join(str(parte) for parte in erro.get("loc", ())), "message": erro.get("msg")}
            for erro in exc.errors()
        ]
        return formatador.resposta(
            request, 400, "VALIDATION_ERROR", "Dados da requisição inválidos", {"errors": erros}
        )

    @app.exception_handler(StarletteHTTPException)
    async def erro_http_handler(request: Request, exc: StarletteHTTPException):
        codigo = CODIGOS_HTTP.get(exc.status_code, "HTTP_ERROR")
        return formatador.resposta(request, exc.status_code, codigo, str(exc.detail))

    @app.exception_handler(Exception)
    async def erro_inesperado_handler(request: Request, exc: Exception):
        logger.exception(f"Erro inesperado em {request.method} {request.url.path}: {exc}")
        return formatador.resposta(request, 500, "INTERNAL_SERVER_ERROR", str(exc) or exc.__class__.__name__)
