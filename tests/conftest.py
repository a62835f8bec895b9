import uuid
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.exceptions import PessoaDuplicadaError, PessoaNaoEncontradaError
from app.main import criar_app
from app.repositories.interfaces import RepositorioPessoas
from app.schemas.schemas import Pessoa
from app.services.cache_service import CacheService
from app.services.metricas_service import ColetorMetricas
from app.services.pessoa_service import PessoaService

CAMPOS_UNICOS = ("cpf", "email", "telefone")


def dados_pessoa(n: int = 1, **sobrescrever) -> Dict[str, Any]:
    """Dados válidos e únicos por n"""
    dados = {
        "nome": f"Pessoa {n}",
        "idade": 30,
        "cpf": f"123.456.789-{n:02d}",
        "endereco": f"Rua A, {n} - São Paulo, SP",
        "email": f"pessoa{n}@example.com",
        "telefone": f"(11) 90000-{n:04d}",
    }
    dados.update(sobrescrever)
    return dados


class RelogioFalso:
    def __init__(self, inicio: float = 1000.0):
        self.agora = inicio

    def __call__(self) -> float:
        return self.agora

    def avancar(self, segundos: float) -> None:
        self.agora += segundos


class RepositorioEmMemoria(RepositorioPessoas):
    """Repositório falso com as mesmas regras de unicidade do banco"""

    def __init__(self, eventos: Optional[List[str]] = None):
        self.pessoas: Dict[str, Pessoa] = {}
        self.chamadas: Counter = Counter()
        self.eventos = eventos if eventos is not None else []
        self.conectado = True

    def _registrar(self, operacao: str) -> None:
        self.chamadas[operacao] += 1
        self.eventos.append(f"repo.{operacao}")

    def _verificar_unicidade(self, dados: Dict[str, Any], ignorar_id: Optional[str] = None) -> None:
        for campo in CAMPOS_UNICOS:
            if campo not in dados:
                continue
            for pessoa in self.pessoas.values():
                if pessoa.id != ignorar_id and getattr(pessoa, campo) == dados[campo]:
                    raise PessoaDuplicadaError(campo, dados[campo])

    async def inserir(self, dados: Dict[str, Any]) -> Pessoa:
        self._registrar("inserir")
        self._verificar_unicidade(dados)
        agora = datetime.now(timezone.utc)
        pessoa = Pessoa(id=str(uuid.uuid4()), criado_em=agora, atualizado_em=agora, **dados)
        self.pessoas[pessoa.id] = pessoa
        return pessoa

    async def atualizar_por_id(self, id: str, campos: Dict[str, Any]) -> Pessoa:
        self._registrar("atualizar_por_id")
        if id not in self.pessoas:
            raise PessoaNaoEncontradaError(id, "id")
        self._verificar_unicidade(campos, ignorar_id=id)
        atualizada = self.pessoas[id].model_copy(
            update={**campos, "atualizado_em": datetime.now(timezone.utc)}
        )
        self.pessoas[id] = atualizada
        return atualizada

    async def remover_por_id(self, id: str) -> Pessoa:
        self._registrar("remover_por_id")
        if id not in self.pessoas:
            raise PessoaNaoEncontradaError(id, "id")
        return self.pessoas.pop(id)

    async def buscar_por_id(self, id: str) -> Optional[Pessoa]:
        self._registrar("buscar_por_id")
        return self.pessoas.get(id)

    async def buscar_por_email(self, email: str) -> Optional[Pessoa]:
        self._registrar("buscar_por_email")
        return next((p for p in self.pessoas.values() if p.email == email), None)

    async def buscar_por_telefone(self, telefone: str) -> Optional[Pessoa]:
        self._registrar("buscar_por_telefone")
        return next((p for p in self.pessoas.values() if p.telefone == telefone), None)

    async def buscar_por_nome(self, fragmento: str) -> List[Pessoa]:
        self._registrar("buscar_por_nome")
        return sorted(
            (p for p in self.pessoas.values() if fragmento.lower() in p.nome.lower()),
            key=lambda p: p.nome,
        )

    async def verificar_conexao(self) -> bool:
        return self.conectado


class CacheEspiao(CacheService):
    """CacheService que registra as chaves gravadas e removidas"""

    def __init__(self, *args, eventos: Optional[List[str]] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.chaves_gravadas: List[str] = []
        self.chaves_removidas: List[str] = []
        self.eventos = eventos if eventos is not None else []

    async def set(self, chave, valor, ttl_ms=None):
        self.chaves_gravadas.append(chave)
        self.eventos.append("cache.set")
        return await super().set(chave, valor, ttl_ms)

    async def delete(self, chave):
        self.chaves_removidas.append(chave)
        self.eventos.append("cache.delete")
        return await super().delete(chave)


@pytest.fixture
def eventos():
    return []


@pytest.fixture
def relogio():
    return RelogioFalso()


@pytest.fixture
def metricas():
    return ColetorMetricas()


@pytest.fixture
def cache(metricas, relogio, eventos):
    return CacheEspiao(metricas, max_itens=100, ttl_padrao_ms=300_000, timer=relogio, eventos=eventos)


@pytest.fixture
def repositorio(eventos):
    return RepositorioEmMemoria(eventos)


@pytest.fixture
def service(repositorio, cache):
    return PessoaService(repositorio, cache, ttl_cache_ms=300_000)


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        expose_error_details=True,
        log_level="WARNING",
        log_dir=None,
    )


@pytest.fixture
def app(settings, repositorio):
    return criar_app(settings, repositorio)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
