#!/usr/bin/env python3
"""
Script para executar a API FastAPI

OPÇÕES:
- uvicorn app.main:criar_app --factory --reload          # Modo desenvolvimento com hot reload
- uvicorn app.main:criar_app --factory --host 0.0.0.0    # Modo produção em 0.0.0.0
"""
import uvicorn
import sys
from app.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()

    # Modo desenvolvimento (com reload) se não houver argumentos
    # Modo produção se houver argumentos específicos
    uvicorn.run(
        "app.main:criar_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=len(sys.argv) == 1,
        log_level=settings.log_level.lower(),
    )
