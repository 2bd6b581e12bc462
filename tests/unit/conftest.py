"""Fixtures compartilhadas para os testes."""

import sys
from pathlib import Path

import pandas as pd
import pytest


RAIZ = Path(__file__).resolve().parents[2]
DIRETORIO_APP = RAIZ / "app"
if str(DIRETORIO_APP) not in sys.path:
    sys.path.insert(0, str(DIRETORIO_APP))


from src.domain.formula import ComponenteAvaliacao  # noqa: E402


@pytest.fixture()
def disciplinas_aprovadas():
    """Notas finais de um aluno aprovado em todas as disciplinas."""
    return [
        {"id": "LP", "nome": "Língua Portuguesa", "nota": 12},
        {"id": "MAT", "nome": "Matemática", "nota": 14},
        {"id": "HIST", "nome": "História", "nota": 11},
    ]


@pytest.fixture()
def obrigatorias():
    """Ids das disciplinas obrigatórias."""
    return {"LP", "MAT"}


@pytest.fixture()
def componentes_mf():
    """Componentes de uma disciplina: MAC e EXAME lançados, MF calculado."""
    return [
        ComponenteAvaliacao(codigo="MAC", nome="Média das Avaliações Contínuas"),
        ComponenteAvaliacao(codigo="EXAME", nome="Exame"),
        ComponenteAvaliacao(
            codigo="MF",
            nome="Média Final",
            calculado=True,
            formula_expressao="MAC*0.4 + EXAME*0.6",
            depende_de=["MAC", "EXAME"],
        ),
    ]


@pytest.fixture()
def notas_turma():
    """Notas em formato longo de dois alunos em três disciplinas."""
    linhas = []
    notas = {
        "A1": {"LP": (12, 13), "MAT": (14, 15), "HIST": (11, 12)},
        "A2": {"LP": (12, 13), "MAT": (4, 5), "HIST": (11, 12)},
    }
    nomes_disciplinas = {"LP": "Língua Portuguesa", "MAT": "Matemática", "HIST": "História"}
    for aluno_id, disciplinas in notas.items():
        for disciplina_id, (mac, exame) in disciplinas.items():
            for componente, valor in (("MAC", mac), ("EXAME", exame)):
                linhas.append(
                    {
                        "ALUNO_ID": aluno_id,
                        "ALUNO_NOME": f"Aluno {aluno_id}",
                        "DISCIPLINA_ID": disciplina_id,
                        "DISCIPLINA_NOME": nomes_disciplinas[disciplina_id],
                        "COMPONENTE": componente,
                        "VALOR": float(valor),
                    }
                )
    return pd.DataFrame(linhas)
