"""Testes do avaliador de fórmulas."""

import pytest

from src.application.formula_evaluator import (
    avaliar_formula,
    exemplos_formula,
    extrair_componentes,
    formatar_formula,
    validar_formula,
)
from src.domain.formula import ErroFormula, TipoErroFormula


def test_media_ponderada_igual_a_aritmetica_padrao():
    resultado = avaliar_formula("A*0.4+B*0.6", {"A": 10, "B": 8})

    assert resultado == pytest.approx(10 * 0.4 + 8 * 0.6)
    assert resultado == pytest.approx(8.8)


def test_precedencia_e_associatividade():
    assert avaliar_formula("2 + 3 * 4", {}) == 14
    assert avaliar_formula("(2 + 3) * 4", {}) == 20
    assert avaliar_formula("10 - 4 - 3", {}) == 3
    assert avaliar_formula("24 / 4 / 2", {}) == 3
    assert avaliar_formula("MT1 + MT2 * 2 - (MT3 - 1) / 2", {"MT1": 10, "MT2": 12, "MT3": 15}) == 27


def test_menos_unario():
    assert avaliar_formula("-A + 10", {"A": 4}) == 6
    assert avaliar_formula("2 * -3", {}) == -6
    assert avaliar_formula("-(A + B)", {"A": 1, "B": 2}) == -3


def test_identificador_ausente_vale_zero():
    assert avaliar_formula("A+B", {"A": 5}) == 5
    assert avaliar_formula("MAC*0.4 + EXAME*0.6", {"MAC": 10, "EXAME": None}) == pytest.approx(4.0)


def test_divisao_por_zero():
    with pytest.raises(ErroFormula) as erro:
        avaliar_formula("A/B", {"A": 5, "B": 0})

    assert erro.value.tipo is TipoErroFormula.DIVISAO_POR_ZERO
    assert erro.value.tipo.value == "DivisionByZero"


def test_divisao_por_identificador_ausente():
    with pytest.raises(ErroFormula) as erro:
        avaliar_formula("A/B", {"A": 5})

    assert erro.value.tipo is TipoErroFormula.DIVISAO_POR_ZERO


@pytest.mark.parametrize(
    "expressao",
    ["", "   ", "(A + B", "A + B)", "A +", "A ** B", "A % 2", "A B", "2MAC", "__import__('os')", "A.b", "()"],
)
def test_expressoes_malformadas(expressao):
    with pytest.raises(ErroFormula) as erro:
        avaliar_formula(expressao, {"A": 1, "B": 2})

    assert erro.value.tipo is TipoErroFormula.SINTAXE


def test_resultado_nao_e_arredondado():
    assert avaliar_formula("A / 3", {"A": 10}) == pytest.approx(10 / 3)


def test_extrair_componentes_sem_repeticoes():
    assert extrair_componentes("MAC*0.4 + EXAME*0.6 + MAC") == ["MAC", "EXAME"]
    assert extrair_componentes("") == []


def test_validar_formula_valida():
    validacao = validar_formula("MAC*0.4 + EXAME*0.6", ["MAC", "EXAME", "MF"])

    assert validacao.valida is True
    assert validacao.componentes_usados == ["MAC", "EXAME"]


def test_validar_formula_componente_inexistente():
    validacao = validar_formula("MAC*0.4 + PROVA*0.6", ["MAC", "EXAME"])

    assert validacao.valida is False
    assert "PROVA" in validacao.mensagem


def test_validar_formula_sintaxe_invalida():
    validacao = validar_formula("(MAC + EXAME", ["MAC", "EXAME"])

    assert validacao.valida is False
    assert "sintaxe" in validacao.mensagem


def test_validar_formula_vazia():
    assert validar_formula("  ", ["MAC"]).valida is False


def test_formatar_formula():
    assert formatar_formula("MAC*0.4+EXAME*0.6") == "MAC × 0.4 + EXAME × 0.6"
    assert formatar_formula("(MT1+MT2)/2") == "(MT1 + MT2) ÷ 2"


def test_exemplos_formula():
    assert exemplos_formula(["MAC", "EXAME"])[0] == "MAC * 0.4 + EXAME * 0.6"
    assert exemplos_formula(["MAC"]) == ["MAC * 1.0", "MAC / 2"]
    assert exemplos_formula([]) == []


def test_muitos_sinais_unarios_seguidos():
    assert avaliar_formula("-" * 1200 + "A", {"A": 1}) == 1
    assert avaliar_formula("-" * 1201 + "A", {"A": 1}) == -1
    assert avaliar_formula("+-+A", {"A": 2}) == -2


def test_parenteses_aninhados_dentro_do_limite():
    assert avaliar_formula("(" * 50 + "A" + ")" * 50, {"A": 3}) == 3


def test_parenteses_demasiado_aninhados():
    with pytest.raises(ErroFormula) as erro:
        avaliar_formula("(" * 400 + "A" + ")" * 400, {"A": 1})

    assert erro.value.tipo is TipoErroFormula.SINTAXE
    assert "aninhada" in erro.value.mensagem


def test_formatar_formula_com_caractere_invalido_devolve_texto_original():
    assert formatar_formula("MAC % 2") == "MAC % 2"
    assert formatar_formula("") == ""
