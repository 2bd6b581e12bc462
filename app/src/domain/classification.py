"""Modelos de domínio da classificação de transição do aluno.

Responsabilidades:
- Representar a nota final de um aluno numa disciplina
- Representar o veredicto de transição e os seus fundamentos
"""

import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class StatusTransicao(str, Enum):
    """Veredictos possíveis da classificação anual."""

    TRANSITA = "Transita"
    NAO_TRANSITA = "NãoTransita"
    CONDICIONAL = "Condicional"
    AGUARDANDO_NOTAS = "AguardandoNotas"


class DisciplinaGrade(BaseModel):
    """Nota final, já resolvida, de um aluno numa disciplina.

    Responsabilidades:
    - Identificar a disciplina de forma estável
    - Transportar a nota final (após fórmulas e teto)

    Uma nota ausente, não numérica, NaN ou <= 0 significa "ainda sem nota".
    """

    id: str = Field(..., min_length=1, description="Identificador da disciplina")
    nome: str = Field("", description="Nome de exibição, usado apenas nas mensagens")
    nota: Optional[float] = Field(None, description="Nota final da disciplina")

    model_config = ConfigDict(frozen=True)

    @field_validator("id", mode="before")
    @classmethod
    def _id_como_texto(cls, valor):
        if valor is None or isinstance(valor, bool):
            return valor
        return str(valor).strip()

    @field_validator("nota", mode="before")
    @classmethod
    def _normalizar_nota(cls, valor):
        if valor is None or isinstance(valor, bool):
            return None
        try:
            numero = float(valor)
        except (TypeError, ValueError):
            return None
        if math.isnan(numero) or math.isinf(numero):
            return None
        return numero

    @model_validator(mode="before")
    @classmethod
    def _nome_padrao(cls, dados):
        if isinstance(dados, dict) and not dados.get("nome"):
            dados = {**dados, "nome": str(dados.get("id", ""))}
        return dados

    @property
    def tem_nota(self) -> bool:
        return self.nota is not None and self.nota > 0


class ResultadoClassificacao(BaseModel):
    """Resultado de uma classificação; recalculado a cada pedido, nunca persistido."""

    status: StatusTransicao
    motivos: List[str] = Field(default_factory=list)
    disciplinas_em_risco: List[str] = Field(default_factory=list)
    acoes_recomendadas: List[str] = Field(default_factory=list)
    media_geral: Optional[float] = None
    observacao_padronizada: str = ""
    motivo_retencao: Optional[str] = None
    matricula_condicional: bool = False

    model_config = ConfigDict(frozen=True, use_enum_values=False)
