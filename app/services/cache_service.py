"""
Serviço de Cache com TTL
TRADE-OFF: Cache com TTL vs Queries Diretas

DECISÃO: Cache em memória com TTL por entrada e limite de itens

JUSTIFICATIVA:
- Buscas por email e telefone são as consultas mais repetidas da API
- TTL padrão de 5 minutos limita o tempo máximo de dado desatualizado
- Invalidação explícita nas escritas mantém o cache consistente com o banco

IMPLEMENTAÇÃO:
- Usa cachetools.TLRUCache: cada entrada guarda seu próprio TTL
- Ao atingir CACHE_MAX_ITEMS remove primeiro as expiradas e depois a menos
  recentemente usada (LRU)
- Métodos async para permitir trocar o armazenamento por um remoto (Redis)
  sem alterar quem consome o serviço

LIMITAÇÕES:
- Cache em memória não persiste entre reinicializações
- Não compartilhado entre múltiplas instâncias (usar Redis em produção)
"""
import time
from typing import Any, Callable, NamedTuple, Optional
from cachetools import TLRUCache
from app.core.logger import get_logger
from app.services.metricas_service import ColetorMetricas

logger = get_logger(__name__)

TTL_PADRAO_MS = 300_000
MAX_ITENS_PADRAO = 100


class _Entrada(NamedTuple):
    valor: Any
    ttl_segundos: float


def _expiracao(_chave: str, entrada: _Entrada, agora: float) -> float:
    return agora + entrada.ttl_segundos


def _abreviar(chave: str) -> str:
    return chave[:16]


class CacheService:
    """Cache de leitura com métricas de acerto/falha"""

    def __init__(
        self,
        metricas: ColetorMetricas,
        max_itens: int = MAX_ITENS_PADRAO,
        ttl_padrao_ms: int = TTL_PADRAO_MS,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.metricas = metricas
        self.ttl_padrao_ms = ttl_padrao_ms
        self._cache = TLRUCache(maxsize=max_itens, ttu=_expiracao, timer=timer)

    async def get(self, chave: str) -> Optional[Any]:
        """Recupera valor do cache (None quando ausente ou expirado)"""
        entrada = self._cache.get(chave)

        if entrada is None:
            logger.debug(f"Cache MISS key={_abreviar(chave)}")
            self.metricas.registrar_falha_cache()
            return None

        logger.debug(f"Cache HIT key={_abreviar(chave)}")
        self.metricas.registrar_acerto_cache()
        return entrada.valor

    async def set(self, chave: str, valor: Any, ttl_ms: Optional[int] = None) -> bool:
        """Armazena valor no cache, sobrescrevendo entrada existente"""
        if ttl_ms is None:
            ttl_ms = self.ttl_padrao_ms
        if isinstance(ttl_ms, bool) or not isinstance(ttl_ms, int) or ttl_ms <= 0:
            raise ValueError(f"ttl_ms deve ser um inteiro positivo, recebido: {ttl_ms!r}")

        self._cache[chave] = _Entrada(valor, ttl_ms / 1000)
        logger.debug(f"Cache SET key={_abreviar(chave)} ttl={ttl_ms}ms")
        return True

    async def delete(self, chave: str) -> bool:
        """Remove a chave; chave inexistente não é erro"""
        self._cache.pop(chave, None)
        logger.debug(f"Cache DEL key={_abreviar(chave)}")
        return True

    async def reset_all(self) -> bool:
        """Limpa todo o cache (uso administrativo e em testes)"""
        self._cache.clear()
        logger.info("Cache RESET - todas as entradas removidas")
        return True

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, chave: str) -> bool:
        return chave in self._cache
