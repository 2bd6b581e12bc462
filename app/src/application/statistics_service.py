"""Estatísticas de turma.

Responsabilidades:
- Atribuir a classificação qualitativa de uma nota
- Calcular estatísticas de aprovação de uma turma
- Resumir os veredictos de transição da turma
"""

from typing import Dict, Iterable, List

import pandas as pd

from src.config.settings import Configuracoes
from src.domain.classification import ResultadoClassificacao, StatusTransicao

CLASSIFICACOES_QUALITATIVAS = ["Excelente", "Bom", "Suficiente", "Insuficiente"]


def obter_classificacao_qualitativa(nota: float) -> str:
    """Classificação qualitativa na escala angolana de 0 a 20."""
    if nota >= 17:
        return "Excelente"
    if nota >= 14:
        return "Bom"
    if nota >= 10:
        return "Suficiente"
    return "Insuficiente"


def calcular_estatisticas_turma(notas_finais: Iterable[float], limiar_aprovacao: float = None) -> dict:
    """Calcula estatísticas de aprovação da turma.

    Parâmetros:
    - notas_finais (Iterable[float]): nota final de cada aluno; valores nulos são ignorados
    - limiar_aprovacao (float | None): nota mínima de aprovação

    Retorno:
    - dict: totais, taxa de aprovação, média, mínimo, máximo e distribuição qualitativa
    """
    if limiar_aprovacao is None:
        limiar_aprovacao = Configuracoes.LIMIAR_APROVACAO_ESTATISTICAS

    notas = pd.to_numeric(pd.Series(list(notas_finais), dtype="object"), errors="coerce").dropna()
    distribuicao = {classificacao: 0 for classificacao in CLASSIFICACOES_QUALITATIVAS}

    if notas.empty:
        return {
            "total_alunos": 0,
            "aprovados": 0,
            "reprovados": 0,
            "taxa_aprovacao": 0.0,
            "media_turma": 0.0,
            "nota_minima": 0.0,
            "nota_maxima": 0.0,
            "distribuicao": distribuicao,
        }

    aprovados = int((notas >= limiar_aprovacao).sum())
    total = int(len(notas))
    distribuicao.update(notas.map(obter_classificacao_qualitativa).value_counts().to_dict())

    return {
        "total_alunos": total,
        "aprovados": aprovados,
        "reprovados": total - aprovados,
        "taxa_aprovacao": round(aprovados / total * 100, 1),
        "media_turma": round(float(notas.mean()), 2),
        "nota_minima": round(float(notas.min()), 2),
        "nota_maxima": round(float(notas.max()), 2),
        "distribuicao": {chave: int(valor) for chave, valor in distribuicao.items()},
    }


def resumir_status(resultados: List[ResultadoClassificacao]) -> Dict[str, int]:
    """Conta os alunos por veredicto de transição."""
    resumo = {status.value: 0 for status in StatusTransicao}
    for resultado in resultados:
        resumo[StatusTransicao(resultado.status).value] += 1
    return resumo
