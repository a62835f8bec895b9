"""
Router de Pessoas
Define todas as rotas relacionadas a pessoas

Buscas por email e telefone passam pelo cache (chave SHA-256, TTL de 5 minutos).
Criação, atualização e remoção invalidam as entradas afetadas.
Erros são convertidos pelos handlers globais (app.core.erros).
"""
from typing import List
from fastapi import APIRouter, Depends, Query, Response, status
from app.core.dependencias import get_pessoa_service
from app.schemas.schemas import ErrorResponse, Pessoa, PessoaAtualizar, PessoaCriar
from app.services.pessoa_service import PessoaService

router = APIRouter(prefix="/pessoas", tags=["Pessoas"])

RESPOSTA_404 = {404: {"model": ErrorResponse, "description": "Pessoa não encontrada"}}
RESPOSTA_409 = {409: {"model": ErrorResponse, "description": "CPF, email ou telefone já cadastrado"}}
RESPOSTA_400 = {400: {"model": ErrorResponse, "description": "Dados inválidos"}}


@router.post(
    "",
    response_model=Pessoa,
    status_code=status.HTTP_201_CREATED,
    summary="Cadastrar pessoa",
    description="Cria uma pessoa e invalida o cache do novo email e telefone.",
    responses={**RESPOSTA_400, **RESPOSTA_409},
)
async def criar_pessoa(dados: PessoaCriar, service: PessoaService = Depends(get_pessoa_service)):
    return await service.criar(dados.model_dump())


@router.get(
    "/search/by-name",
    response_model=List[Pessoa],
    summary="Buscar pessoas por nome",
    description="Busca parcial, sem diferenciar maiúsculas/minúsculas. Não usa cache.",
)
async def buscar_por_nome(
    nome: str = Query(..., min_length=1, description="Nome ou parte do nome"),
    service: PessoaService = Depends(get_pessoa_service),
):
    return await service.buscar_por_nome(nome)


@router.get(
    "/email/{email}",
    response_model=Pessoa,
    summary="Buscar pessoa por email (com cache)",
    description="Read-through: MISS consulta o banco e armazena o resultado; HIT responde direto do cache.",
    responses=RESPOSTA_404,
)
async def buscar_por_email(email: str, service: PessoaService = Depends(get_pessoa_service)):
    return await service.buscar_por_email(email)


@router.get(
    "/telefone/{telefone}",
    response_model=Pessoa,
    summary="Buscar pessoa por telefone (com cache)",
    description="Mesma estratégia de cache da busca por email.",
    responses=RESPOSTA_404,
)
async def buscar_por_telefone(telefone: str, service: PessoaService = Depends(get_pessoa_service)):
    return await service.buscar_por_telefone(telefone)


@router.get(
    "/{id}",
    response_model=Pessoa,
    summary="Detalhes da pessoa",
    description="Busca por id (UUID). Consulta por chave primária, sem cache.",
    responses=RESPOSTA_404,
)
async def obter_pessoa(id: str, service: PessoaService = Depends(get_pessoa_service)):
    return await service.buscar_por_id(id)


@router.put(
    "/{id}",
    response_model=Pessoa,
    summary="Atualizar pessoa",
    description="Atualização parcial. Invalida o cache do email/telefone antigos e novos.",
    responses={**RESPOSTA_400, **RESPOSTA_404, **RESPOSTA_409},
)
async def atualizar_pessoa(
    id: str,
    dados: PessoaAtualizar,
    service: PessoaService = Depends(get_pessoa_service),
):
    return await service.atualizar(id, dados.campos_informados())


@router.delete(
    "/{id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remover pessoa",
    description="Remove a pessoa e invalida o cache do seu email e telefone.",
    responses=RESPOSTA_404,
)
async def remover_pessoa(id: str, service: PessoaService = Depends(get_pessoa_service)):
    await service.remover(id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
