"""Dependências FastAPI: componentes criados em criar_app() e guardados em app.state"""
from fastapi import Request
from app.services.metricas_service import ColetorMetricas
from app.services.pessoa_service import PessoaService


def get_pessoa_service(request: Request) -> PessoaService:
    return request.app.state.pessoa_service


def get_metricas(request: Request) -> ColetorMetricas:
    return request.app.state.metricas
