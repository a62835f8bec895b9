"""
Exceções de negócio da API de Pessoas

Cada exceção carrega o status HTTP, um código de erro estável e os detalhes
que só são enviados ao cliente quando EXPOSE_ERROR_DETAILS está ativo.
"""
from typing import Any, Dict, Optional


class ErroNegocio(Exception):
    """Base para exceções de negócio"""

    status_code: int = 400
    codigo: str = "BUSINESS_ERROR"

    def __init__(self, mensagem: str, detalhes: Optional[Dict[str, Any]] = None):
        super().__init__(mensagem)
        self.mensagem = mensagem
        self.detalhes = detalhes or {}


class PessoaNaoEncontradaError(ErroNegocio):
    """Pessoa não encontrada por id, email, telefone ou cpf"""

    status_code = 404
    codigo = "PESSOA_NOT_FOUND"

    def __init__(self, identificador: str, tipo: str = "id"):
        super().__init__(
            f'Pessoa com {tipo} "{identificador}" não encontrada',
            {tipo: identificador},
        )
        self.identificador = identificador
        self.tipo = tipo


class PessoaDuplicadaError(ErroNegocio):
    """Violação de unicidade (cpf, email ou telefone) em criação/atualização"""

    status_code = 409
    codigo = "DUPLICATE_PESSOA"

    def __init__(self, campo: str, valor: Any = None):
        super().__init__(
            f'Pessoa com {campo} "{valor}" já existe',
            {"field": campo, "value": valor},
        )
        self.campo = campo
        self.valor = valor


class OperacaoInvalidaError(ErroNegocio):
    """Operação que viola uma regra de negócio"""

    status_code = 422
    codigo = "INVALID_OPERATION"

    def __init__(self, operacao: str, motivo: str):
        super().__init__(
            f"Não é possível {operacao}: {motivo}",
            {"operation": operacao, "reason": motivo},
        )
