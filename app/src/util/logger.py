"""Fábrica de logger da aplicação.

Responsabilidades:
- Configurar o logger raiz das pautas uma única vez
- Fornecer loggers filhos por componente (fórmulas, classificação, pauta)
- Direcionar saída para stdout
"""

import logging
import sys

from src.config.settings import Configuracoes

NOME_LOGGER_RAIZ = "PAUTAS_APP"
FORMATO_LOG = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class FabricaLogger:
    """Responsável por configurar e fornecer instâncias de Logger.

    Responsabilidades:
    - Instalar um único handler de console por logger
    - Aplicar o nível definido em Configuracoes.LOG_LEVEL
    - Criar loggers filhos que herdam o handler do logger raiz
    """

    @classmethod
    def configurar(cls, nome: str = NOME_LOGGER_RAIZ, nivel: str = None):
        """Configura o logger se ainda não estiver configurado.

        Parâmetros:
        - nome (str): nome do logger
        - nivel (str | None): nível explícito; usa LOG_LEVEL quando ausente

        Retorno:
        - logging.Logger: logger configurado
        """
        logger_instancia = logging.getLogger(nome)

        if not logger_instancia.handlers:
            logger_instancia.setLevel(nivel or Configuracoes.LOG_LEVEL)

            handler_console = logging.StreamHandler(sys.stdout)
            handler_console.setFormatter(logging.Formatter(fmt=FORMATO_LOG, datefmt="%Y-%m-%d %H:%M:%S"))
            logger_instancia.addHandler(handler_console)

            logger_instancia.propagate = False

        return logger_instancia

    @classmethod
    def obter(cls, componente: str):
        """Retorna um logger filho do logger raiz, ex.: PAUTAS_APP.formulas."""
        cls.configurar()
        return logging.getLogger(f"{NOME_LOGGER_RAIZ}.{componente}")


logger = FabricaLogger.configurar()
