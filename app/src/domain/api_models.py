"""Modelos de entrada da API.

Responsabilidades:
- Validar pedidos de avaliação e validação de fórmulas
- Validar pedidos de classificação de aluno e de pauta de turma
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.classification import DisciplinaGrade, ResultadoClassificacao
from src.domain.formula import ComponenteAvaliacao


class EntradaFormula(BaseModel):
    """Pedido de avaliação de uma fórmula com as notas de um aluno."""

    expressao: str = Field(..., description="Fórmula, ex.: MAC*0.4 + EXAME*0.6")
    valores: Dict[str, Optional[float]] = Field(default_factory=dict)
    casas_decimais: int = Field(2, ge=0, le=6)


class EntradaValidacaoFormula(BaseModel):
    """Pedido de validação de uma fórmula contra os componentes da disciplina."""

    expressao: str
    codigos_disponiveis: List[str] = Field(default_factory=list)


class EntradaClassificacao(BaseModel):
    """Notas finais de um aluno e o contexto da turma."""

    disciplinas: List[DisciplinaGrade] = Field(default_factory=list)
    nivel_ensino: str = Field(..., min_length=1)
    classe: Optional[str] = None
    disciplinas_obrigatorias: List[str] = Field(default_factory=list)
    frequencia: Optional[float] = Field(None, ge=0, le=100, description="Frequência anual (%)")


class EntradaMatricula(BaseModel):
    """Classificação já calculada e a classe frequentada."""

    resultado: ResultadoClassificacao
    classe_origem: Optional[str] = None


class LinhaNota(BaseModel):
    """Uma nota lançada: aluno, disciplina, componente e valor."""

    ALUNO_ID: str = Field(..., min_length=1)
    ALUNO_NOME: Optional[str] = None
    DISCIPLINA_ID: str = Field(..., min_length=1)
    DISCIPLINA_NOME: Optional[str] = None
    COMPONENTE: str = Field(..., min_length=1)
    VALOR: Optional[float] = None

    model_config = ConfigDict(populate_by_name=True)


class EntradaPauta(BaseModel):
    """Notas lançadas de uma turma e a configuração dos componentes."""

    notas: List[LinhaNota] = Field(..., min_length=1)
    componentes: Dict[str, List[ComponenteAvaliacao]] = Field(default_factory=dict)
    nivel_ensino: str = Field(..., min_length=1)
    classe: Optional[str] = None
    disciplinas_obrigatorias: List[str] = Field(default_factory=list)
    frequencias: Dict[str, float] = Field(default_factory=dict)
