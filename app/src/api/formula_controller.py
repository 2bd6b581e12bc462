"""Controlador de fórmulas de componentes.

Responsabilidades:
- Definir rotas de avaliação e validação de fórmulas
- Traduzir erros de fórmula em respostas HTTP
"""

from fastapi import APIRouter, HTTPException

from src.application.formula_evaluator import (
    avaliar_formula,
    exemplos_formula,
    extrair_componentes,
    formatar_formula,
    validar_formula,
)
from src.domain.api_models import EntradaFormula, EntradaValidacaoFormula
from src.domain.formula import ErroFormula
from src.util.arredondamento import arredondar_meio_acima
from src.util.logger import logger


class ControladorFormulas:
    """Controlador de fórmulas.

    Responsabilidades:
    - Registrar rotas de fórmulas
    - Expor avaliação (com arredondamento) e validação
    """

    def __init__(self):
        """Inicializa o controlador e registra as rotas."""
        self.roteador = APIRouter()
        self._registrar_rotas()

    def _registrar_rotas(self):
        self.roteador.add_api_route(
            path="/formulas/avaliar",
            endpoint=self._avaliar,
            methods=["POST"],
            response_model=dict,
            summary="Avalia uma fórmula com as notas dos componentes",
        )
        self.roteador.add_api_route(
            path="/formulas/validar",
            endpoint=self._validar,
            methods=["POST"],
            response_model=dict,
            summary="Valida uma fórmula contra os componentes disponíveis",
        )

    @staticmethod
    async def _avaliar(entrada: EntradaFormula):
        """Avalia a fórmula e arredonda o resultado.

        Parâmetros:
        - entrada (EntradaFormula): expressão, valores e casas decimais

        Retorno:
        - dict: resultado arredondado, componentes usados e fórmula formatada

        Exceções:
        - HTTPException: 422 com o tipo de erro quando a fórmula não pode ser avaliada
        """
        try:
            valor = avaliar_formula(entrada.expressao, entrada.valores)
        except ErroFormula as erro:
            logger.warning(f"Falha ao avaliar fórmula '{entrada.expressao}': {erro}")
            raise HTTPException(status_code=422, detail={"tipo": erro.tipo.value, "mensagem": erro.mensagem})

        return {
            "resultado": arredondar_meio_acima(valor, entrada.casas_decimais),
            "componentes_usados": extrair_componentes(entrada.expressao),
            "formula_formatada": formatar_formula(entrada.expressao),
        }

    @staticmethod
    async def _validar(entrada: EntradaValidacaoFormula):
        """Valida a fórmula e sugere exemplos quando é inválida."""
        validacao = validar_formula(entrada.expressao, entrada.codigos_disponiveis)
        resposta = validacao.model_dump()
        if not validacao.valida:
            resposta["exemplos"] = exemplos_formula(entrada.codigos_disponiveis)
        return resposta
