"""
Middleware de log e métricas das requisições HTTP

Para cada requisição:
- Gera um request id (devolvido no header X-Request-ID)
- Loga entrada, conclusão (status e tempo) ou falha
- Registra método, rota, tempo de resposta e status no ColetorMetricas

As métricas usam o template da rota (ex.: GET /pessoas/email/{email}) para
manter baixa a cardinalidade; requisições sem rota correspondente (404 de
caminhos arbitrários) são agrupadas em um único rótulo <unmatched>.
"""
import time
import uuid
from fastapi import FastAPI, Request
from app.core.logger import get_logger

logger = get_logger("app.http")

ROTA_SEM_CORRESPONDENCIA = "<unmatched>"


def _gerar_request_id() -> str:
    return f"req_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


def _caminho_metrica(request: Request) -> str:
    rota = request.scope.get("route")
    return getattr(rota, "path", None) or ROTA_SEM_CORRESPONDENCIA


def registrar_middleware_requisicoes(app: FastAPI) -> None:

    @app.middleware("http")
    async def log_e_metricas(request: Request, call_next):
        request_id = _gerar_request_id()
        request.state.request_id = request_id
        metodo = request.method
        url = request.url.path
        inicio = time.perf_counter()

        logger.info(f"Requisição recebida {request_id} {metodo} {url}")

        try:
            response = await call_next(request)
        except Exception as e:
            tempo_ms = (time.perf_counter() - inicio) * 1000
            logger.error(f"Requisição falhou {request_id} {metodo} {url} status=500 tempo={tempo_ms:.2f}ms erro={e}")
            request.app.state.metricas.registrar_requisicao(metodo, _caminho_metrica(request), tempo_ms, 500)
            raise

        tempo_ms = (time.perf_counter() - inicio) * 1000
        logger.info(
            f"Requisição concluída {request_id} {metodo} {url} "
            f"status={response.status_code} tempo={tempo_ms:.2f}ms"
        )
        request.app.state.metricas.registrar_requisicao(
            metodo, _caminho_metrica(request), tempo_ms, response.status_code
        )
        response.headers["X-Request-ID"] = request_id
        return response
