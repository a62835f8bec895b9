"""Módulo repositories - acesso ao banco de dados"""
from app.repositories.interfaces import RepositorioPessoas
from app.repositories.pessoa_repository import PessoaRepository

__all__ = [
    "RepositorioPessoas",
    "PessoaRepository",
]
