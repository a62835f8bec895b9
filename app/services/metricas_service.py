"""
Coletor de Métricas

Contadores do processo para monitoramento:
- Acertos e falhas do cache
- Quantidade de requisições por endpoint
- Tempo médio de resposta por endpoint
- Taxa de erros (status >= 400)

Os valores derivados (taxa de acerto, médias, taxa de erro) são calculados a
cada chamada de snapshot(), nunca armazenados.

LIMITAÇÕES:
- Sem lock: seguro apenas enquanto todas as mutações ocorrem no event loop
  (todos os endpoints são async). Com threads, proteger com threading.Lock.
- As amostras de latência crescem sem limite até reset().
"""
import time
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, List


def _arredondar(valor: float) -> float:
    return round(valor, 2)


class ColetorMetricas:
    """Métricas de cache e de requisições HTTP"""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Zera todos os contadores e reinicia o relógio de uptime (uso em testes)"""
        self.acertos_cache = 0
        self.falhas_cache = 0
        self._requisicoes: Dict[str, int] = defaultdict(int)
        self._tempos_resposta: Dict[str, List[float]] = defaultdict(list)
        self._erros: Dict[str, int] = defaultdict(int)
        self.total_erros = 0
        self._inicio = time.monotonic()

    # === CACHE ===

    def registrar_acerto_cache(self) -> None:
        self.acertos_cache += 1

    def registrar_falha_cache(self) -> None:
        self.falhas_cache += 1

    def taxa_acerto_cache(self) -> float:
        """Percentual de acertos com 2 casas decimais (0 sem amostras)"""
        total = self.acertos_cache + self.falhas_cache
        if total == 0:
            return 0
        return _arredondar(self.acertos_cache / total * 100)

    # === REQUISIÇÕES ===

    def registrar_requisicao(self, metodo: str, caminho: str, tempo_ms: float, status_code: int) -> None:
        chave = f"{metodo} {caminho}"
        self._requisicoes[chave] += 1
        self._tempos_resposta[chave].append(tempo_ms)

        if status_code >= 400:
            self._erros[chave] += 1
            self.total_erros += 1

    def tempo_medio_resposta(self, chave: str) -> float:
        tempos = self._tempos_resposta.get(chave) or []
        if not tempos:
            return 0
        return _arredondar(sum(tempos) / len(tempos))

    def snapshot(self) -> Dict[str, Any]:
        """Fotografia das métricas calculada no momento da chamada"""
        endpoints = {}
        for chave, quantidade in self._requisicoes.items():
            erros = self._erros.get(chave, 0)
            endpoints[chave] = {
                "requests": quantidade,
                "avg_response_time_ms": self.tempo_medio_resposta(chave),
                "errors": erros,
                "error_rate": _arredondar(erros / quantidade * 100) if quantidade else 0,
            }

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime_seconds": int(time.monotonic() - self._inicio),
            "cache": {
                "hits": self.acertos_cache,
                "misses": self.falhas_cache,
                "hit_rate": self.taxa_acerto_cache(),
                "total": self.acertos_cache + self.falhas_cache,
            },
            "requests": {
                "total": sum(self._requisicoes.values()),
                "by_endpoint": endpoints,
            },
            "errors": {
                "total": self.total_erros,
            },
        }
