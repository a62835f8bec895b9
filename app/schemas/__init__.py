"""Módulo schemas - modelos de entrada e resposta da API"""
from app.schemas.schemas import (
    Pessoa,
    PessoaCriar,
    PessoaAtualizar,
    ErrorResponse,
)

__all__ = [
    "Pessoa",
    "PessoaCriar",
    "PessoaAtualizar",
    "ErrorResponse",
]
