"""Ponto de entrada da API FastAPI.

Responsabilidades:
- Configurar a aplicação FastAPI
- Registrar rotas de fórmulas, classificação e pautas
- Registrar em log a política de classificação ativa no startup
"""

import os

import uvicorn
from fastapi import FastAPI

from src.api.classification_controller import ControladorClassificacao
from src.api.formula_controller import ControladorFormulas
from src.config.settings import Configuracoes
from src.util.logger import logger

app = FastAPI(
    title="Pautas",
    description="API de cálculo de componentes de avaliação e classificação de transição de alunos",
    version="1.0.0",
)


def registrar_politica_classificacao():
    """Registra no log os limiares e tolerâncias em vigor."""
    logger.info(
        "Política de classificação: "
        f"limiar primário={Configuracoes.LIMIAR_APROVACAO_PRIMARIO}, "
        f"limiar secundário={Configuracoes.LIMIAR_APROVACAO_SECUNDARIO}, "
        f"teto={Configuracoes.TETO_NOTA_SECUNDARIO}, "
        f"tolerância condicional={Configuracoes.TOLERANCIA_DISCIPLINAS_CONDICIONAL}, "
        f"frequência mínima={Configuracoes.FREQUENCIA_MINIMA}%"
    )


@app.on_event("startup")
async def evento_inicializacao():
    """Executa ações de inicialização da aplicação."""
    logger.info("Inicializando API de pautas...")
    registrar_politica_classificacao()


controlador_formulas = ControladorFormulas()
app.include_router(controlador_formulas.roteador, prefix="/api/v1", tags=["Fórmulas"])

controlador_classificacao = ControladorClassificacao()
app.include_router(controlador_classificacao.roteador, prefix="/api/v1", tags=["Classificação"])


@app.get("/health", tags=["Infraestrutura"])
def checar_saude():
    """Endpoint de health check.

    Retorno:
    - dict: status da aplicação
    """
    return {"status": "ok"}


if __name__ == "__main__":
    porta = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=porta)
