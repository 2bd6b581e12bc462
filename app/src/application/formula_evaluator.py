"""Avaliador de fórmulas de componentes de avaliação.

Responsabilidades:
- Interpretar expressões aritméticas sobre códigos de componentes (ex.: "MAC*0.4 + EXAME*0.6")
- Validar fórmulas contra os componentes disponíveis
- Formatar fórmulas para exibição

A gramática aceita apenas identificadores, números, + - * /, menos unário e
parênteses. Não há chamadas de função nem acesso a nada além dos valores
fornecidos, pelo que expressões escritas pelos utilizadores são seguras.
"""

import re
from typing import Dict, List, Mapping, NamedTuple, Optional

from src.domain.formula import ErroFormula, TipoErroFormula, ValidacaoFormula

PADRAO_TOKEN = re.compile(
    r"\s*(?:(?P<numero>\d+(?:\.\d*)?|\.\d+)|(?P<identificador>[A-Za-z_][A-Za-z0-9_]*)|(?P<operador>[-+*/()]))"
)
PADRAO_IDENTIFICADOR = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
VALOR_TESTE_VALIDACAO = 10.0
PROFUNDIDADE_MAXIMA_PARENTESES = 100


class Token(NamedTuple):
    tipo: str
    texto: str
    posicao: int


def _erro_sintaxe(mensagem: str, expressao: str) -> ErroFormula:
    return ErroFormula(TipoErroFormula.SINTAXE, mensagem, expressao)


def _tokenizar(expressao: str) -> List[Token]:
    """Divide a expressão em tokens, rejeitando qualquer caractere fora da gramática."""
    tokens = []
    posicao = 0
    fim = len(expressao.rstrip())
    while posicao < fim:
        correspondencia = PADRAO_TOKEN.match(expressao, posicao)
        if not correspondencia:
            caractere = expressao[posicao:].lstrip()[:1]
            raise _erro_sintaxe(f"Caractere inválido na fórmula: '{caractere}'", expressao)
        tipo = correspondencia.lastgroup
        tokens.append(Token(tipo, correspondencia.group(tipo), correspondencia.start(tipo)))
        posicao = correspondencia.end()
    return tokens


class _AnalisadorExpressao:
    """Analisador descendente recursivo que avalia a expressão durante a leitura.

    expressao := termo (("+" | "-") termo)*
    termo     := unario (("*" | "/") unario)*
    unario    := ("-" | "+")* primario
    primario  := numero | identificador | "(" expressao ")"
    """

    def __init__(self, expressao: str, valores: Mapping[str, float]):
        self.expressao = expressao
        self.valores = valores
        self.tokens = _tokenizar(expressao)
        self.indice = 0
        self.profundidade = 0

    def avaliar(self) -> float:
        if not self.tokens:
            raise _erro_sintaxe("Fórmula não pode estar vazia", self.expressao)
        resultado = self._expressao()
        if self.indice < len(self.tokens):
            token = self.tokens[self.indice]
            raise _erro_sintaxe(f"Token inesperado '{token.texto}' na posição {token.posicao}", self.expressao)
        return resultado

    def _atual(self) -> Optional[Token]:
        if self.indice < len(self.tokens):
            return self.tokens[self.indice]
        return None

    def _consumir_operador(self, *operadores: str) -> Optional[str]:
        token = self._atual()
        if token is not None and token.tipo == "operador" and token.texto in operadores:
            self.indice += 1
            return token.texto
        return None

    def _expressao(self) -> float:
        resultado = self._termo()
        while True:
            operador = self._consumir_operador("+", "-")
            if operador is None:
                return resultado
            direita = self._termo()
            resultado = resultado + direita if operador == "+" else resultado - direita

    def _termo(self) -> float:
        resultado = self._unario()
        while True:
            operador = self._consumir_operador("*", "/")
            if operador is None:
                return resultado
            direita = self._unario()
            if operador == "*":
                resultado = resultado * direita
            elif direita == 0:
                raise ErroFormula(TipoErroFormula.DIVISAO_POR_ZERO, "Divisão por zero", self.expressao)
            else:
                resultado = resultado / direita

    def _unario(self) -> float:
        sinal = 1.0
        operador = self._consumir_operador("-", "+")
        while operador is not None:
            if operador == "-":
                sinal = -sinal
            operador = self._consumir_operador("-", "+")
        return sinal * self._primario()

    def _primario(self) -> float:
        token = self._atual()
        if token is None:
            raise _erro_sintaxe("Fim inesperado da fórmula", self.expressao)

        if token.tipo == "numero":
            self.indice += 1
            return float(token.texto)

        if token.tipo == "identificador":
            self.indice += 1
            return self._valor_componente(token.texto)

        if token.texto == "(":
            if self.profundidade >= PROFUNDIDADE_MAXIMA_PARENTESES:
                raise _erro_sintaxe("Fórmula demasiado aninhada", self.expressao)
            self.indice += 1
            self.profundidade += 1
            resultado = self._expressao()
            self.profundidade -= 1
            if self._consumir_operador(")") is None:
                raise _erro_sintaxe("Parênteses desbalanceados", self.expressao)
            return resultado

        raise _erro_sintaxe(f"Token inesperado '{token.texto}' na posição {token.posicao}", self.expressao)

    def _valor_componente(self, codigo: str) -> float:
        # Componente sem nota conta como 0 para a pauta continuar calculável.
        valor = self.valores.get(codigo)
        if valor is None:
            return 0.0
        try:
            return float(valor)
        except (TypeError, ValueError):
            return 0.0


def avaliar_formula(expressao: str, valores: Mapping[str, float]) -> float:
    """Avalia a fórmula com os valores dos componentes.

    Parâmetros:
    - expressao (str): fórmula, ex.: "MAC*0.4 + EXAME*0.6"
    - valores (Mapping[str, float]): código do componente -> nota

    Retorno:
    - float: resultado sem arredondamento (o arredondamento é do chamador)

    Exceções:
    - ErroFormula: SyntaxError para fórmulas malformadas, DivisionByZero para divisões por zero
    """
    if expressao is None:
        raise _erro_sintaxe("Fórmula não pode estar vazia", "")
    return _AnalisadorExpressao(expressao, valores or {}).avaliar()


def extrair_componentes(expressao: str) -> List[str]:
    """Lista os códigos de componentes usados na fórmula, sem repetições."""
    if not expressao:
        return []
    return list(dict.fromkeys(PADRAO_IDENTIFICADOR.findall(expressao)))


def validar_formula(expressao: str, codigos_disponiveis: List[str]) -> ValidacaoFormula:
    """Valida a fórmula: sintaxe e existência de todos os componentes referidos.

    Parâmetros:
    - expressao (str): fórmula a validar
    - codigos_disponiveis (list[str]): códigos que a fórmula pode usar

    Retorno:
    - ValidacaoFormula: resultado com mensagem para o utilizador
    """
    if not expressao or not expressao.strip():
        return ValidacaoFormula(valida=False, mensagem="Fórmula não pode estar vazia")

    usados = extrair_componentes(expressao)
    desconhecidos = [codigo for codigo in usados if codigo not in codigos_disponiveis]
    if desconhecidos:
        return ValidacaoFormula(
            valida=False,
            mensagem=f"Componentes não encontrados: {', '.join(desconhecidos)}",
            componentes_usados=usados,
        )

    valores_teste: Dict[str, float] = {codigo: VALOR_TESTE_VALIDACAO for codigo in usados}
    try:
        avaliar_formula(expressao, valores_teste)
    except ErroFormula as erro:
        if erro.tipo is TipoErroFormula.SINTAXE:
            return ValidacaoFormula(
                valida=False,
                mensagem=f"Erro de sintaxe na fórmula: {erro.mensagem}",
                componentes_usados=usados,
            )
        # Divisão por zero com valores de teste depende dos dados, não da sintaxe.

    return ValidacaoFormula(valida=True, mensagem="Fórmula válida", componentes_usados=usados)


def formatar_formula(expressao: str) -> str:
    """Formata a fórmula para exibição, ex.: "MAC*0.4+EXAME*0.6" -> "MAC × 0.4 + EXAME × 0.6"."""
    simbolos = {"*": "×", "/": "÷"}
    try:
        tokens = _tokenizar(expressao or "")
    except ErroFormula:
        return expressao or ""

    partes = []
    for token in tokens:
        if token.tipo == "operador":
            partes.append(simbolos.get(token.texto, token.texto))
        else:
            partes.append(token.texto)
    return " ".join(partes).replace("( ", "(").replace(" )", ")")


def exemplos_formula(codigos: List[str]) -> List[str]:
    """Gera fórmulas de exemplo para orientar quem configura os componentes."""
    if len(codigos) >= 2:
        primeiro, segundo = codigos[0], codigos[1]
        return [
            f"{primeiro} * 0.4 + {segundo} * 0.6",
            f"({primeiro} + {segundo}) / 2",
            f"{primeiro} * 0.3 + {segundo} * 0.7",
        ]
    if len(codigos) == 1:
        return [f"{codigos[0]} * 1.0", f"{codigos[0]} / 2"]
    return []
