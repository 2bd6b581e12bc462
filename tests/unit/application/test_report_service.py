"""Testes do serviço de geração de pautas."""

from unittest.mock import Mock

import pandas as pd
import pytest

from src.application import report_service as modulo_pauta
from src.application.report_service import ServicoPauta
from src.domain.formula import ComponenteAvaliacao


@pytest.fixture()
def servico():
    return ServicoPauta()


def test_gerar_pauta_classifica_cada_aluno(servico, notas_turma, componentes_mf):
    pauta = servico.gerar_pauta(
        notas_turma,
        {"_padrao": componentes_mf},
        "Ensino Secundário I Ciclo",
        "8ª Classe",
        ["LP", "MAT"],
    )

    assert list(pauta["ALUNO_ID"]) == ["A1", "A2"]
    assert list(pauta.columns[:5]) == ["ALUNO_ID", "ALUNO_NOME", "LP", "MAT", "HIST"]

    a1 = pauta.iloc[0]
    assert a1["STATUS"] == "Transita"
    assert a1["MAT"] == pytest.approx(14.6)
    assert a1["MEDIA_GERAL"] == 10
    assert a1["CLASSE_DESTINO"] == "9ª Classe"
    assert a1["ESTADO_MATRICULA"] == "pendente"

    a2 = pauta.iloc[1]
    assert a2["STATUS"] == "NãoTransita"
    assert a2["MAT"] == pytest.approx(4.6)
    assert a2["DISCIPLINAS_EM_RISCO"] == "MAT"
    assert a2["CLASSE_DESTINO"] == "8ª Classe"


def test_gerar_pauta_usa_componentes_da_disciplina(servico, notas_turma, componentes_mf):
    so_exame = [ComponenteAvaliacao(codigo="MF", calculado=True, formula_expressao="EXAME")]

    pauta = servico.gerar_pauta(notas_turma, {"_padrao": componentes_mf, "MAT": so_exame}, "secundário")

    assert pauta.iloc[1]["MAT"] == 5


def test_gerar_pauta_condicional_e_frequencia(servico, notas_turma, componentes_mf):
    pauta = servico.gerar_pauta(
        notas_turma,
        {"_padrao": componentes_mf},
        "secundário",
        "8ª Classe",
        ["LP"],
        frequencias={"A1": 40},
    )

    assert pauta.iloc[0]["STATUS"] == "NãoTransita"
    assert pauta.iloc[1]["STATUS"] == "Condicional"
    assert pauta.iloc[1]["ESTADO_MATRICULA"] == "aguardando_exame"
    assert bool(pauta.iloc[1]["MATRICULA_CONDICIONAL"]) is True


def test_gerar_pauta_sem_componentes_aguarda_notas(servico, notas_turma):
    pauta = servico.gerar_pauta(notas_turma, {}, "secundário")

    assert set(pauta["STATUS"]) == {"AguardandoNotas"}


def test_falha_de_um_aluno_nao_interrompe_pauta(monkeypatch, notas_turma, componentes_mf):
    logger_mock = Mock()
    monkeypatch.setattr(modulo_pauta, "logger", logger_mock)
    servico = ServicoPauta()
    notas_finais = servico.notas_finais_aluno

    def falhar_para_a1(notas_aluno, componentes):
        if notas_aluno["ALUNO_ID"].iloc[0] == "A1":
            raise RuntimeError("dados corrompidos")
        return notas_finais(notas_aluno, componentes)

    monkeypatch.setattr(servico, "notas_finais_aluno", falhar_para_a1)

    pauta = servico.gerar_pauta(notas_turma, {"_padrao": componentes_mf}, "secundário", None, ["MAT"])

    assert pauta.iloc[0]["STATUS"] == "AguardandoNotas"
    assert pauta.iloc[1]["STATUS"] == "NãoTransita"
    logger_mock.error.assert_called_once()


def test_escolher_nota_final_prefere_mfd():
    assert ServicoPauta.escolher_nota_final({"MF": 8.0, "MFD": 12.0}) == 12.0
    assert ServicoPauta.escolher_nota_final({"MF": 8.0, "MFD": None}) == 8.0
    assert ServicoPauta.escolher_nota_final({"MAC": 8.0}) is None


def test_gerar_mini_pauta(servico, notas_turma, componentes_mf):
    mini = servico.gerar_mini_pauta(notas_turma, "MAT", componentes_mf)

    assert list(mini.columns) == ["ALUNO_ID", "ALUNO_NOME", "MAC", "EXAME", "MF"]
    assert mini.iloc[0]["MF"] == "14.60"
    assert mini.iloc[1]["MF"] == "4.60"


def test_mini_pauta_marca_componente_sem_nota(servico, componentes_mf):
    notas = pd.DataFrame(
        [
            {
                "ALUNO_ID": "A1",
                "ALUNO_NOME": "Aluno A1",
                "DISCIPLINA_ID": "MAT",
                "DISCIPLINA_NOME": "Matemática",
                "COMPONENTE": "MAC",
                "VALOR": None,
            }
        ]
    )

    mini = servico.gerar_mini_pauta(notas, "MAT", componentes_mf)

    assert mini.iloc[0]["MAC"] == "-"
    assert mini.iloc[0]["EXAME"] == "-"
    assert mini.iloc[0]["MF"] == "0.00"


def test_resumo_da_pauta(servico, notas_turma, componentes_mf):
    pauta = servico.gerar_pauta(notas_turma, {"_padrao": componentes_mf}, "secundário", None, ["LP", "MAT"])

    resumo = ServicoPauta.resumo(pauta, "secundário")

    assert resumo["status"]["Transita"] == 1
    assert resumo["status"]["NãoTransita"] == 1
    assert resumo["estatisticas"]["total_alunos"] == 2
    assert resumo["estatisticas"]["aprovados"] == 1


def test_resumo_conta_todos_os_veredictos():
    pauta = pd.DataFrame(
        {
            "MEDIA_GERAL": [10.0, None, 8.0],
            "STATUS": ["Transita", "AguardandoNotas", "Condicional"],
        }
    )

    resumo = ServicoPauta.resumo(pauta, "secundário")

    assert resumo["status"] == {"Transita": 1, "NãoTransita": 0, "Condicional": 1, "AguardandoNotas": 1}
    assert resumo["estatisticas"]["total_alunos"] == 2
