from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import Settings, get_settings
from app.core.database import criar_engine
from app.core.erros import FormatadorErros, registrar_handlers_erro
from app.core.logger import configurar_logging, get_logger
from app.core.middleware import registrar_middleware_requisicoes
from app.repositories.interfaces import RepositorioPessoas
from app.repositories.pessoa_repository import PessoaRepository
from app.routers import metricas, pessoas
from app.services.cache_service import CacheService
from app.services.metricas_service import ColetorMetricas
from app.services.pessoa_service import PessoaService

logger = get_logger(__name__)


def criar_app(settings: Optional[Settings] = None, repositorio: Optional[RepositorioPessoas] = None) -> FastAPI:
    """
    Monta a aplicação e seus componentes (métricas, cache, repositório, serviço)

    Os componentes ficam em app.state; cada chamada cria instâncias novas,
    o que permite isolar testes. Sem repositório informado é criado um
    PessoaRepository sobre o DATABASE_URL das configurações.
    """
    settings = settings or get_settings()
    configurar_logging(settings.log_level, settings.log_dir)

    engine = None
    if repositorio is None:
        engine = criar_engine(settings.database_url)
        repositorio = PessoaRepository(engine)

    metricas_coletor = ColetorMetricas()
    cache = CacheService(
        metricas_coletor,
        max_itens=settings.cache_max_items,
        ttl_padrao_ms=settings.cache_ttl_ms,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("=" * 60)
        logger.info(f" {settings.api_title} v{settings.api_version}")
        logger.info("=" * 60)

        if await repositorio.verificar_conexao():
            logger.info("[OK] Conexão com banco de dados OK")
            if settings.db_auto_create and isinstance(repositorio, PessoaRepository):
                await repositorio.criar_tabela()
        else:
            logger.error("[ERRO] Erro na conexão com banco de dados")

        logger.info(
            f"Cache: max_itens={settings.cache_max_items} ttl={settings.cache_ttl_seconds}s | "
            f"Documentação: http://{settings.api_host}:{settings.api_port}/docs"
        )
        yield

        if engine is not None:
            await engine.dispose()
        logger.info("Aplicação finalizada")

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description=settings.api_description,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.metricas = metricas_coletor
    app.state.cache = cache
    app.state.repositorio = repositorio
    app.state.pessoa_service = PessoaService(repositorio, cache, settings.cache_ttl_ms)

    # Configurar CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.lista_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    registrar_middleware_requisicoes(app)
    registrar_handlers_erro(app, FormatadorErros(settings.expose_error_details))

    # Incluir routers
    app.include_router(pessoas.router)
    app.include_router(metricas.router)

    @app.get("/", tags=["Health"])
    async def root():
        """Endpoint raiz - Health check"""
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request):
        """Verificação de saúde da API"""
        db_status = await request.app.state.repositorio.verificar_conexao()

        return {
            "status": "healthy" if db_status else "unhealthy",
            "database": "connected" if db_status else "disconnected",
        }

    return app
