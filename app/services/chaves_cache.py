"""
Geração de chaves de cache

A chave é o SHA-256 (hex, 64 caracteres) do JSON canônico
{"params": [...], "prefix": operacao}. Mesmas entradas geram sempre a mesma
chave, inclusive entre reinicializações do processo, e o prefixo da operação
impede colisão entre consultas diferentes com os mesmos parâmetros.
"""
import hashlib
import json
from typing import Any, Sequence

OPERACAO_BUSCA_EMAIL = "findByEmail"
OPERACAO_BUSCA_TELEFONE = "findByTelefone"


def gerar_chave(operacao: str, parametros: Sequence[Any]) -> str:
    """Gera a chave determinística para (operação, parâmetros ordenados)"""
    conteudo = json.dumps(
        {"prefix": operacao, "params": list(parametros)},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(conteudo.encode("utf-8")).hexdigest()


def chave_email(email: str) -> str:
    return gerar_chave(OPERACAO_BUSCA_EMAIL, [email])


def chave_telefone(telefone: str) -> str:
    return gerar_chave(OPERACAO_BUSCA_TELEFONE, [telefone])
