"""Conexão com banco de dados via SQLAlchemy (asyncio)"""
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def criar_engine(database_url: str) -> AsyncEngine:
    """Cria o engine assíncrono; a conexão só é aberta no primeiro uso"""
    return create_async_engine(database_url, pool_pre_ping=True)
