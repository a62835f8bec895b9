"""Modelos de entrada e resposta da API"""
from datetime import datetime
from typing import Annotated, Any, Dict, Optional
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

PADRAO_CPF = r"^[0-9]{3}\.[0-9]{3}\.[0-9]{3}-[0-9]{2}$"
PADRAO_TELEFONE = r"^\([0-9]{2}\) [0-9]{4,5}-[0-9]{4}$"


def _validar_email(valor: str) -> str:
    """Valida o formato e devolve o email exatamente como recebido"""
    try:
        validate_email(valor, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"email inválido: {e}") from e
    return valor


# Sem normalização: o email é gravado e buscado com a mesma grafia
Email = Annotated[str, AfterValidator(_validar_email)]


# === PESSOAS ===

class PessoaBase(BaseModel):
    nome: str = Field(..., min_length=2, max_length=100, examples=["João Silva"])
    idade: int = Field(..., ge=0, le=150, examples=[30])
    cpf: str = Field(..., pattern=PADRAO_CPF, examples=["123.456.789-00"])
    endereco: str = Field(..., min_length=5, max_length=200, examples=["Rua A, 123 - São Paulo, SP"])
    email: Email = Field(..., examples=["joao.silva@example.com"])
    telefone: str = Field(..., pattern=PADRAO_TELEFONE, examples=["(11) 98765-4321"])


class PessoaCriar(PessoaBase):
    """Corpo do POST /pessoas"""
    model_config = ConfigDict(extra="forbid")


class PessoaAtualizar(BaseModel):
    """Corpo do PUT /pessoas/{id} - todos os campos opcionais"""
    model_config = ConfigDict(extra="forbid")

    nome: Optional[str] = Field(None, min_length=2, max_length=100)
    idade: Optional[int] = Field(None, ge=0, le=150)
    cpf: Optional[str] = Field(None, pattern=PADRAO_CPF)
    endereco: Optional[str] = Field(None, min_length=5, max_length=200)
    email: Optional[Email] = None
    telefone: Optional[str] = Field(None, pattern=PADRAO_TELEFONE)

    def campos_informados(self) -> Dict[str, Any]:
        """Somente os campos enviados pelo cliente (sem nulos)"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class Pessoa(BaseModel):
    """Registro completo da tabela pessoas"""
    id: str
    nome: str
    idade: int
    cpf: str
    endereco: str
    email: str
    telefone: str
    criado_em: datetime
    atualizado_em: datetime


# === RESPOSTAS DE ERRO ===

class ErrorResponse(BaseModel):
    """Resposta de erro padrão"""
    status_code: int
    error: str
    message: str
    timestamp: str
    path: str
    details: Optional[Dict[str, Any]] = None
