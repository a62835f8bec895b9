"""Repositório de acesso à tabela pessoas"""
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine
from app.core.exceptions import PessoaDuplicadaError, PessoaNaoEncontradaError
from app.core.logger import get_logger
from app.repositories.interfaces import RepositorioPessoas
from app.schemas.schemas import Pessoa

logger = get_logger(__name__)

COLUNAS = "id, nome, idade, cpf, endereco, email, telefone, criado_em, atualizado_em"
CAMPOS_ATUALIZAVEIS = ("nome", "idade", "cpf", "endereco", "email", "telefone")

# PostgreSQL: ... unique constraint "pessoas_email_key"
# SQLite:     UNIQUE constraint failed: pessoas.email
_REGEX_CAMPO_UNICO = re.compile(r"pessoas[._](cpf|email|telefone)")

SQL_CRIAR_TABELA = """
    CREATE TABLE IF NOT EXISTS pessoas (
        id VARCHAR(36) PRIMARY KEY,
        nome TEXT NOT NULL,
        idade INTEGER NOT NULL,
        cpf TEXT NOT NULL,
        endereco TEXT NOT NULL,
        email TEXT NOT NULL,
        telefone TEXT NOT NULL,
        criado_em TIMESTAMPTZ NOT NULL,
        atualizado_em TIMESTAMPTZ NOT NULL,
        CONSTRAINT pessoas_cpf_key UNIQUE (cpf),
        CONSTRAINT pessoas_email_key UNIQUE (email),
        CONSTRAINT pessoas_telefone_key UNIQUE (telefone)
    )
"""


def _sql(consulta: str, *parametros_data: str):
    """text() com tipos de data declarados para bind e resultado"""
    clausula = text(consulta)
    if parametros_data:
        clausula = clausula.bindparams(
            *[bindparam(nome, type_=DateTime(timezone=True)) for nome in parametros_data]
        )
    return clausula.columns(
        criado_em=DateTime(timezone=True),
        atualizado_em=DateTime(timezone=True),
    )


def _agora() -> datetime:
    return datetime.now(timezone.utc)


def _campo_violado(erro: IntegrityError) -> Optional[str]:
    resultado = _REGEX_CAMPO_UNICO.search(str(erro.orig))
    return resultado.group(1) if resultado else None


def _escapar_like(valor: str) -> str:
    return valor.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PessoaRepository(RepositorioPessoas):
    """Acesso a dados de Pessoa com SQL escrito à mão"""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def criar_tabela(self) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(text(SQL_CRIAR_TABELA))
        logger.info("Tabela pessoas verificada/criada")

    async def verificar_conexao(self) -> bool:
        """Testa a conexão com o banco de dados"""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Erro ao conectar ao banco: {e}")
            return False

    # === ESCRITA ===

    async def inserir(self, dados: Dict[str, Any]) -> Pessoa:
        agora = _agora()
        params = {
            **{campo: dados[campo] for campo in CAMPOS_ATUALIZAVEIS},
            "id": str(uuid.uuid4()),
            "criado_em": agora,
            "atualizado_em": agora,
        }
        sql = _sql(
            f"""
            INSERT INTO pessoas ({COLUNAS})
            VALUES (:id, :nome, :idade, :cpf, :endereco, :email, :telefone, :criado_em, :atualizado_em)
            RETURNING {COLUNAS}
            """,
            "criado_em",
            "atualizado_em",
        )

        try:
            async with self.engine.begin() as conn:
                row = (await conn.execute(sql, params)).mappings().one()
        except IntegrityError as e:
            campo = _campo_violado(e)
            if campo is None:
                raise
            raise PessoaDuplicadaError(campo, dados.get(campo)) from e

        return Pessoa.model_validate(dict(row))

    async def atualizar_por_id(self, id: str, campos: Dict[str, Any]) -> Pessoa:
        desconhecidos = set(campos) - set(CAMPOS_ATUALIZAVEIS)
        if desconhecidos:
            raise ValueError(f"Campos não atualizáveis: {sorted(desconhecidos)}")

        atribuicoes = "".join(f"{campo} = :{campo}, " for campo in campos)
        sql = _sql(
            f"""
            UPDATE pessoas
            SET {atribuicoes}atualizado_em = :atualizado_em
            WHERE id = :id
            RETURNING {COLUNAS}
            """,
            "atualizado_em",
        )
        params = {**campos, "id": id, "atualizado_em": _agora()}

        try:
            async with self.engine.begin() as conn:
                row = (await conn.execute(sql, params)).mappings().first()
        except IntegrityError as e:
            campo = _campo_violado(e)
            if campo is None:
                raise
            raise PessoaDuplicadaError(campo, campos.get(campo)) from e

        if not row:
            raise PessoaNaoEncontradaError(id, "id")
        return Pessoa.model_validate(dict(row))

    async def remover_por_id(self, id: str) -> Pessoa:
        sql = _sql(f"DELETE FROM pessoas WHERE id = :id RETURNING {COLUNAS}")
        async with self.engine.begin() as conn:
            row = (await conn.execute(sql, {"id": id})).mappings().first()

        if not row:
            raise PessoaNaoEncontradaError(id, "id")
        return Pessoa.model_validate(dict(row))

    # === LEITURA ===

    async def _buscar_um(self, coluna: str, valor: str) -> Optional[Pessoa]:
        sql = _sql(f"SELECT {COLUNAS} FROM pessoas WHERE {coluna} = :valor LIMIT 1")
        async with self.engine.connect() as conn:
            row = (await conn.execute(sql, {"valor": valor})).mappings().first()
        return Pessoa.model_validate(dict(row)) if row else None

    async def buscar_por_id(self, id: str) -> Optional[Pessoa]:
        return await self._buscar_um("id", id)

    async def buscar_por_email(self, email: str) -> Optional[Pessoa]:
        return await self._buscar_um("email", email)

    async def buscar_por_telefone(self, telefone: str) -> Optional[Pessoa]:
        return await self._buscar_um("telefone", telefone)

    async def buscar_por_nome(self, fragmento: str) -> List[Pessoa]:
        """Busca parcial e sem diferenciar maiúsculas/minúsculas"""
        sql = _sql(
            f"""
            SELECT {COLUNAS}
            FROM pessoas
            WHERE LOWER(nome) LIKE LOWER(:busca) ESCAPE '\\'
            ORDER BY nome
            """
        )
        async with self.engine.connect() as conn:
            rows = (await conn.execute(sql, {"busca": f"%{_escapar_like(fragmento)}%"})).mappings().all()
        return [Pessoa.model_validate(dict(row)) for row in rows]
