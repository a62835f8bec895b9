"""
Router de Métricas
Expõe a fotografia atual do ColetorMetricas
"""
from fastapi import APIRouter, Depends
from app.core.dependencias import get_metricas
from app.services.metricas_service import ColetorMetricas

router = APIRouter(tags=["Monitoramento"])


@router.get(
    "/metrics",
    summary="Métricas da aplicação",
    description="""
    Retorna métricas calculadas no momento da chamada.

    **Inclui**:
    - Acertos, falhas e taxa de acerto do cache
    - Requisições, tempo médio de resposta e taxa de erro por endpoint
    - Total de erros e uptime do processo
    """
)
async def obter_metricas(metricas: ColetorMetricas = Depends(get_metricas)):
    return metricas.snapshot()
