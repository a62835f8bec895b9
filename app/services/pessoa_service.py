"""
Serviço de Pessoas
Orquestra cache + repositório: leitura com read-through e invalidação nas escritas

TRADE-OFF: Atualizar o cache vs Invalidar nas escritas
DECISÃO: Invalidar (write-invalidate)

JUSTIFICATIVA:
- A próxima leitura repopula o cache com o estado já persistido
- Não é preciso reproduzir no cache as regras do banco (unicidade, timestamps)
- Resultado "não encontrado" nunca é cacheado: um cadastro logo após uma
  busca sem resultado aparece imediatamente

ORDEM DAS OPERAÇÕES (escritas):
1. Ler o estado anterior (por id)
2. Alterar o banco
3. Invalidar as chaves de email/telefone antigas e novas
Se a alteração no banco falhar nenhuma chave é tocada.

LIMITAÇÃO CONHECIDA:
- Uma leitura concorrente entre o commit de uma atualização e a invalidação
  pode repopular uma entrada desatualizada, que vive até o TTL (5 minutos)
"""
from typing import Any, Callable, Dict, List, Optional
from app.core.exceptions import OperacaoInvalidaError, PessoaNaoEncontradaError
from app.core.logger import get_logger
from app.repositories.interfaces import RepositorioPessoas
from app.schemas.schemas import Pessoa
from app.services.cache_service import CacheService
from app.services.chaves_cache import chave_email, chave_telefone

logger = get_logger(__name__)


class PessoaService:
    """Serviço para operações com pessoas"""

    def __init__(self, repositorio: RepositorioPessoas, cache: CacheService, ttl_cache_ms: Optional[int] = None):
        self.repositorio = repositorio
        self.cache = cache
        self.ttl_cache_ms = ttl_cache_ms or cache.ttl_padrao_ms

    # === ESCRITA ===

    async def criar(self, dados: Dict[str, Any]) -> Pessoa:
        logger.info(f"Criando pessoa email={dados.get('email')}")
        pessoa = await self.repositorio.inserir(dados)

        await self._invalidar_cache(pessoa)

        logger.info(f"Pessoa criada id={pessoa.id}")
        return pessoa

    async def atualizar(self, id: str, campos: Dict[str, Any]) -> Pessoa:
        if not campos:
            raise OperacaoInvalidaError("atualizar pessoa", "nenhum campo informado")

        logger.info(f"Atualizando pessoa id={id} campos={sorted(campos)}")
        anterior = await self.repositorio.buscar_por_id(id)
        if not anterior:
            logger.warning(f"Pessoa não encontrada para atualização id={id}")
            raise PessoaNaoEncontradaError(id, "id")

        atualizada = await self.repositorio.atualizar_por_id(id, campos)

        await self._invalidar_cache(anterior)
        await self._invalidar_cache(atualizada)

        logger.info(f"Pessoa atualizada id={id}")
        return atualizada

    async def remover(self, id: str) -> Pessoa:
        logger.info(f"Removendo pessoa id={id}")
        pessoa = await self.repositorio.buscar_por_id(id)
        if not pessoa:
            logger.warning(f"Pessoa não encontrada para remoção id={id}")
            raise PessoaNaoEncontradaError(id, "id")

        removida = await self.repositorio.remover_por_id(id)

        await self._invalidar_cache(pessoa)

        logger.info(f"Pessoa removida id={id}")
        return removida

    # === LEITURA ===

    async def buscar_por_id(self, id: str) -> Pessoa:
        """Busca por chave primária, sem cache"""
        pessoa = await self.repositorio.buscar_por_id(id)
        if not pessoa:
            logger.warning(f"Pessoa não encontrada id={id}")
            raise PessoaNaoEncontradaError(id, "id")
        return pessoa

    async def buscar_por_email(self, email: str) -> Pessoa:
        return await self._buscar_com_cache(
            "email", email, chave_email(email), self.repositorio.buscar_por_email
        )

    async def buscar_por_telefone(self, telefone: str) -> Pessoa:
        return await self._buscar_com_cache(
            "telefone", telefone, chave_telefone(telefone), self.repositorio.buscar_por_telefone
        )

    async def buscar_por_nome(self, nome: str) -> List[Pessoa]:
        """Busca parcial por nome, sem cache (resultado varia a cada cadastro)"""
        pessoas = await self.repositorio.buscar_por_nome(nome)
        logger.debug(f"Busca por nome '{nome}' retornou {len(pessoas)} pessoa(s)")
        return pessoas

    # === CACHE ===

    async def _buscar_com_cache(
        self,
        tipo: str,
        valor: str,
        chave: str,
        buscar: Callable[[str], Any],
    ) -> Pessoa:
        """
        Read-through:
        1. Consulta o cache (HIT retorna sem acessar o banco)
        2. MISS consulta o repositório
        3. Sem registro: PessoaNaoEncontradaError e nada é cacheado
        4. Com registro: armazena no cache e retorna
        """
        em_cache = await self.cache.get(chave)
        if em_cache is not None:
            logger.debug(f"Pessoa por {tipo} retornada do cache")
            return Pessoa.model_validate(em_cache)

        pessoa = await buscar(valor)
        if not pessoa:
            logger.warning(f"Pessoa não encontrada {tipo}={valor}")
            raise PessoaNaoEncontradaError(valor, tipo)

        await self.cache.set(chave, pessoa.model_dump(mode="json"), self.ttl_cache_ms)
        logger.debug(f"Pessoa por {tipo} encontrada e cacheada")
        return pessoa

    async def _invalidar_cache(self, pessoa: Pessoa) -> None:
        """Remove as entradas de email e telefone da pessoa"""
        await self.cache.delete(chave_email(pessoa.email))
        await self.cache.delete(chave_telefone(pessoa.telefone))
