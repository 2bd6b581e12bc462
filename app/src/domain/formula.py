"""Modelos de domínio das fórmulas de componentes de avaliação.

Responsabilidades:
- Declarar o erro de avaliação de fórmulas e os seus tipos
- Representar componentes de avaliação, brutos ou calculados
- Representar o resultado da validação de uma fórmula
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.config.settings import Configuracoes


class TipoErroFormula(str, Enum):
    """Tipos de falha na avaliação de uma fórmula."""

    SINTAXE = "SyntaxError"
    DIVISAO_POR_ZERO = "DivisionByZero"


class ErroFormula(Exception):
    """Falha ao avaliar uma fórmula de componente.

    O chamador trata o componente como indisponível e segue com os restantes.
    """

    def __init__(self, tipo: TipoErroFormula, mensagem: str, expressao: str = ""):
        super().__init__(mensagem)
        self.tipo = tipo
        self.mensagem = mensagem
        self.expressao = expressao

    def __str__(self):
        return f"{self.tipo.value}: {self.mensagem}"


class ComponenteAvaliacao(BaseModel):
    """Componente de avaliação de uma disciplina (ex.: MAC, EXAME, MF).

    Responsabilidades:
    - Identificar o componente pelo código usado nas fórmulas
    - Indicar se é calculado e, nesse caso, a sua expressão e dependências
    - Declarar a escala válida do componente
    """

    codigo: str = Field(..., min_length=1, pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")
    nome: Optional[str] = None
    escala_minima: float = Configuracoes.ESCALA_MINIMA_PADRAO
    escala_maxima: float = Configuracoes.ESCALA_MAXIMA_PADRAO
    calculado: bool = False
    formula_expressao: Optional[str] = None
    depende_de: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class ValidacaoFormula(BaseModel):
    """Resultado da validação de uma fórmula contra os componentes disponíveis."""

    valida: bool
    mensagem: str
    componentes_usados: List[str] = Field(default_factory=list)
