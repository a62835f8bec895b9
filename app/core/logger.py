"""
Sistema de logging centralizado da API
"""

import os
import logging
from typing import Optional

NOME_LOGGER_RAIZ = 'app'


class LoggerConfig:
    _configurado = False
    _log_dir: Optional[str] = None

    @classmethod
    def configurar(cls, nivel: str = 'INFO', log_dir: Optional[str] = None) -> logging.Logger:
        """Configura o logger raiz da aplicação com handlers para console e arquivo"""
        logger = logging.getLogger(NOME_LOGGER_RAIZ)
        logger.setLevel(logging.DEBUG)

        # Limpar handlers existentes
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

        # Formatar mensagens com informações de arquivo e linha
        formato_detalhado = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(filename)s:%(lineno)d | %(funcName)s() | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Handler para arquivo (somente se LOG_DIR foi definido)
        if log_dir:
            try:
                os.makedirs(log_dir, exist_ok=True)
                arquivo_log = os.path.join(log_dir, 'aplicacao.log')
                fh = logging.FileHandler(arquivo_log, encoding='utf-8')
                fh.setLevel(logging.DEBUG)
                fh.setFormatter(formato_detalhado)
                logger.addHandler(fh)
                cls._log_dir = log_dir
            except OSError as e:
                print(f"Aviso: Não foi possível criar handler de arquivo de log em {log_dir}: {e}")

        # Handler para console
        ch = logging.StreamHandler()
        ch.setLevel(getattr(logging, nivel.upper(), logging.INFO))
        ch.setFormatter(formato_detalhado)
        logger.addHandler(ch)

        cls._configurado = True
        return logger

    @classmethod
    def get_logger(cls, nome: str = NOME_LOGGER_RAIZ) -> logging.Logger:
        """Retorna o logger configurado"""
        if not cls._configurado:
            cls.configurar()
        return logging.getLogger(nome)


def configurar_logging(nivel: str = 'INFO', log_dir: Optional[str] = None) -> logging.Logger:
    """Função auxiliar chamada na inicialização da aplicação"""
    return LoggerConfig.configurar(nivel, log_dir)


def get_logger(nome: str = NOME_LOGGER_RAIZ) -> logging.Logger:
    """Função auxiliar para obter o logger"""
    return LoggerConfig.get_logger(nome)
