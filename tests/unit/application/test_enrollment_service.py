"""Testes da preparação de matrícula."""

import pytest

from src.application.enrollment_service import (
    calcular_proximo_ano_lectivo,
    determinar_proxima_classe,
    extrair_classe,
    preparar_matricula,
)
from src.domain.classification import ResultadoClassificacao, StatusTransicao


@pytest.mark.parametrize(
    "atual, esperada",
    [("7ª Classe", "8ª Classe"), ("9º Classe", "10ª Classe"), ("12ª Classe", "12ª Classe"), ("Iniciação", "Iniciação")],
)
def test_determinar_proxima_classe(atual, esperada):
    assert determinar_proxima_classe(atual) == esperada


def test_extrair_classe():
    assert extrair_classe("10ª Classe A") == "10ª Classe"
    assert extrair_classe("Turma da tarde") is None


def test_calcular_proximo_ano_lectivo():
    assert calcular_proximo_ano_lectivo("2025") == "2026"
    assert calcular_proximo_ano_lectivo("2025/2026") == "2026"
    assert calcular_proximo_ano_lectivo("") == ""


def test_matricula_de_aluno_que_transita():
    resultado = ResultadoClassificacao(status=StatusTransicao.TRANSITA, media_geral=10.0)

    matricula = preparar_matricula(resultado, "7ª Classe")

    assert matricula["classe_destino"] == "8ª Classe"
    assert matricula["estado_matricula"] == "pendente"
    assert matricula["status_transicao"] == "Transita"


def test_matricula_condicional_aguarda_exame():
    resultado = ResultadoClassificacao(
        status=StatusTransicao.CONDICIONAL,
        disciplinas_em_risco=["HIST"],
        matricula_condicional=True,
    )

    matricula = preparar_matricula(resultado, "8ª Classe")

    assert matricula["classe_destino"] == "9ª Classe"
    assert matricula["estado_matricula"] == "aguardando_exame"
    assert matricula["matricula_condicional"] is True
    assert matricula["disciplinas_em_risco"] == ["HIST"]


def test_matricula_de_aluno_retido_repete_classe():
    resultado = ResultadoClassificacao(status=StatusTransicao.NAO_TRANSITA, motivo_retencao="Matemática")

    matricula = preparar_matricula(resultado, "8ª Classe")

    assert matricula["classe_destino"] == "8ª Classe"
    assert matricula["motivo_retencao"] == "Matemática"


def test_matricula_sem_classe_de_origem():
    resultado = ResultadoClassificacao(status=StatusTransicao.TRANSITA)

    assert preparar_matricula(resultado, None)["classe_destino"] is None
