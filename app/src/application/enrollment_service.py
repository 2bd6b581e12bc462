"""Preparação da matrícula do ano seguinte.

Responsabilidades:
- Determinar a classe de destino a partir do veredicto de transição
- Calcular o ano lectivo seguinte
- Montar os dados da matrícula pendente
"""

import re
from typing import Optional

from src.config.settings import Configuracoes
from src.domain.classification import ResultadoClassificacao, StatusTransicao

PADRAO_CLASSE = re.compile(r"(\d+)[ªº]\s*Classe", re.IGNORECASE)
PADRAO_ANO = re.compile(r"(\d{4})")

ESTADO_PENDENTE = "pendente"
ESTADO_AGUARDANDO_EXAME = "aguardando_exame"


def determinar_proxima_classe(classe_atual: str) -> str:
    """Devolve a classe seguinte, ex.: "7ª Classe" -> "8ª Classe"; a última classe não avança."""
    correspondencia = PADRAO_CLASSE.search(classe_atual or "")
    if not correspondencia:
        return classe_atual

    proximo_numero = int(correspondencia.group(1)) + 1
    if proximo_numero > Configuracoes.CLASSE_MAXIMA:
        return classe_atual
    return f"{proximo_numero}ª Classe"


def extrair_classe(nome_turma: str) -> Optional[str]:
    """Extrai a classe do nome da turma, ex.: "10ª Classe A" -> "10ª Classe"."""
    correspondencia = re.search(r"(\d+[ªº]\s*Classe)", nome_turma or "", re.IGNORECASE)
    return correspondencia.group(1) if correspondencia else None


def calcular_proximo_ano_lectivo(ano_atual: str) -> str:
    """Ano lectivo seguinte, aceitando "2025" ou "2025/2026"."""
    correspondencia = PADRAO_ANO.search(ano_atual or "")
    if not correspondencia:
        return ano_atual
    return str(int(correspondencia.group(1)) + 1)


def preparar_matricula(resultado: ResultadoClassificacao, classe_origem: Optional[str]) -> dict:
    """Monta a matrícula pendente do aluno a partir da classificação.

    Parâmetros:
    - resultado (ResultadoClassificacao): veredicto do aluno
    - classe_origem (str | None): classe frequentada no ano corrente

    Retorno:
    - dict: dados da matrícula (classe de destino, estado e fundamentos)
    """
    status = StatusTransicao(resultado.status)
    promovido = status in (StatusTransicao.TRANSITA, StatusTransicao.CONDICIONAL)

    if promovido and classe_origem:
        classe_destino = determinar_proxima_classe(classe_origem)
    else:
        classe_destino = classe_origem

    return {
        "status_transicao": status.value,
        "classe_origem": classe_origem,
        "classe_destino": classe_destino,
        "estado_matricula": ESTADO_AGUARDANDO_EXAME if status is StatusTransicao.CONDICIONAL else ESTADO_PENDENTE,
        "matricula_condicional": resultado.matricula_condicional,
        "media_geral": resultado.media_geral,
        "disciplinas_em_risco": list(resultado.disciplinas_em_risco),
        "observacao_padronizada": resultado.observacao_padronizada,
        "motivo_retencao": resultado.motivo_retencao,
    }
