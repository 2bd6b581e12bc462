"""Controlador de classificação e pautas.

Responsabilidades:
- Definir rotas de classificação de aluno, matrícula e pauta de turma
- Resolver dependências do serviço de pauta
- Traduzir erros em respostas HTTP
"""

import pandas as pd
from fastapi import APIRouter, Depends, HTTPException

from src.application.enrollment_service import preparar_matricula
from src.application.report_service import ServicoPauta
from src.application.student_classifier import classificar_aluno
from src.domain.api_models import EntradaClassificacao, EntradaMatricula, EntradaPauta
from src.infrastructure.data.grade_loader import CarregadorNotas


def obter_servico_pauta():
    """Dependência para obter uma instância do serviço de pauta."""
    return ServicoPauta()


def _para_registros(df: pd.DataFrame) -> list:
    """Converte o DataFrame em registros JSON, trocando NaN por None."""
    return df.astype(object).where(df.notna(), None).to_dict(orient="records")


class ControladorClassificacao:
    """Controlador de classificação.

    Responsabilidades:
    - Registrar rotas de classificação
    - Expor classificação individual, matrícula e pauta de turma
    """

    def __init__(self):
        """Inicializa o controlador e registra as rotas."""
        self.roteador = APIRouter()
        self._registrar_rotas()

    def _registrar_rotas(self):
        self.roteador.add_api_route(
            path="/classificacao/aluno",
            endpoint=self._classificar_aluno,
            methods=["POST"],
            response_model=dict,
            summary="Classifica a transição de um aluno",
        )
        self.roteador.add_api_route(
            path="/classificacao/matricula",
            endpoint=self._preparar_matricula,
            methods=["POST"],
            response_model=dict,
            summary="Prepara a matrícula do ano seguinte",
        )
        self.roteador.add_api_route(
            path="/pauta",
            endpoint=self._gerar_pauta,
            methods=["POST"],
            response_model=dict,
            summary="Gera a pauta de uma turma",
        )

    @staticmethod
    async def _classificar_aluno(entrada: EntradaClassificacao):
        """Classificação individual; nunca falha para notas bem formadas."""
        resultado = classificar_aluno(
            entrada.disciplinas,
            entrada.nivel_ensino,
            entrada.classe,
            entrada.disciplinas_obrigatorias,
            entrada.frequencia,
        )
        return resultado.model_dump(mode="json")

    @staticmethod
    async def _preparar_matricula(entrada: EntradaMatricula):
        return preparar_matricula(entrada.resultado, entrada.classe_origem)

    @staticmethod
    async def _gerar_pauta(entrada: EntradaPauta, servico: ServicoPauta = Depends(obter_servico_pauta)):
        """Gera a pauta da turma e o respetivo resumo.

        Parâmetros:
        - entrada (EntradaPauta): notas lançadas, componentes e contexto da turma
        - servico (ServicoPauta): serviço de pauta injetado

        Retorno:
        - dict: linhas da pauta e resumo da turma

        Exceções:
        - HTTPException: 400 quando as notas violam o contrato de dados
        """
        try:
            notas = CarregadorNotas().preparar_notas(pd.DataFrame([linha.model_dump() for linha in entrada.notas]))
            pauta = servico.gerar_pauta(
                notas,
                entrada.componentes,
                entrada.nivel_ensino,
                entrada.classe,
                entrada.disciplinas_obrigatorias,
                entrada.frequencias,
            )
        except (ValueError, KeyError) as erro:
            raise HTTPException(status_code=400, detail=str(erro))

        return {"pauta": _para_registros(pauta), "resumo": servico.resumo(pauta, entrada.nivel_ensino)}
