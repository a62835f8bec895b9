from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from app.schemas.schemas import Pessoa


class RepositorioPessoas(ABC):
    @abstractmethod
    async def inserir(self, dados: Dict[str, Any]) -> Pessoa:
        pass

    @abstractmethod
    async def atualizar_por_id(self, id: str, campos: Dict[str, Any]) -> Pessoa:
        pass

    @abstractmethod
    async def remover_por_id(self, id: str) -> Pessoa:
        pass

    @abstractmethod
    async def buscar_por_id(self, id: str) -> Optional[Pessoa]:
        pass

    @abstractmethod
    async def buscar_por_email(self, email: str) -> Optional[Pessoa]:
        pass

    @abstractmethod
    async def buscar_por_telefone(self, telefone: str) -> Optional[Pessoa]:
        pass

    @abstractmethod
    async def buscar_por_nome(self, fragmento: str) -> List[Pessoa]:
        pass

    @abstractmethod
    async def verificar_conexao(self) -> bool:
        pass
