"""Classificação de transição de ano do aluno.

Responsabilidades:
- Determinar o regime (primário/secundário) e os respetivos limiares
- Identificar disciplinas em risco, com peso especial para as obrigatórias
- Produzir o veredicto (Transita, NãoTransita, Condicional, AguardandoNotas),
  os motivos, as ações recomendadas e a observação padronizada da pauta

A classificação é uma função pura: não faz I/O, não guarda estado e nunca
levanta exceções para listas de notas, degradando para AguardandoNotas ou
ignorando entradas sem nota.
"""

import math
import re
from typing import Iterable, List, NamedTuple, Optional, Tuple

from pydantic import ValidationError

from src.config.settings import Configuracoes
from src.domain.classification import DisciplinaGrade, ResultadoClassificacao, StatusTransicao
from src.util.arredondamento import arredondar_meio_acima

PADRAO_NUMERO_CLASSE = re.compile(r"(\d+)\s*[ªº]")


class RegimeEnsino(NamedTuple):
    nome: str
    limiar: float
    teto: float

    @property
    def nota_minima_exibida(self) -> int:
        """Nota inteira que se lê nas pautas (4.45 -> 5, 9.45 -> 10)."""
        return int(math.ceil(self.limiar))


def eh_ensino_primario(nivel_ensino: Optional[str]) -> bool:
    """Indica se o nível de ensino pertence ao Ensino Primário."""
    if not nivel_ensino:
        return False
    nivel = nivel_ensino.lower()
    return "primário" in nivel or "primario" in nivel


def obter_regime(nivel_ensino: Optional[str]) -> RegimeEnsino:
    """Devolve limiar de aprovação e teto de nota do regime do nível de ensino."""
    if eh_ensino_primario(nivel_ensino):
        return RegimeEnsino(
            nome="Ensino Primário",
            limiar=Configuracoes.LIMIAR_APROVACAO_PRIMARIO,
            teto=Configuracoes.TETO_NOTA_PRIMARIO,
        )
    return RegimeEnsino(
        nome="Ensino Secundário",
        limiar=Configuracoes.LIMIAR_APROVACAO_SECUNDARIO,
        teto=Configuracoes.TETO_NOTA_SECUNDARIO,
    )


def extrair_numero_classe(classe: Optional[str]) -> Optional[int]:
    """Extrai o número da classe, ex.: "7ª Classe" -> 7."""
    if not classe:
        return None
    correspondencia = PADRAO_NUMERO_CLASSE.search(classe)
    return int(correspondencia.group(1)) if correspondencia else None


def _normalizar_frequencia(frequencia) -> Optional[float]:
    if frequencia is None or isinstance(frequencia, bool):
        return None
    try:
        valor = float(frequencia)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(valor) else valor


def _disciplinas_com_nota(disciplinas: Iterable) -> List[DisciplinaGrade]:
    """Filtra as disciplinas com nota resolvida; a primeira ocorrência de cada id prevalece."""
    validas: List[DisciplinaGrade] = []
    vistos = set()
    for item in disciplinas or []:
        if isinstance(item, DisciplinaGrade):
            disciplina = item
        elif isinstance(item, dict):
            try:
                disciplina = DisciplinaGrade(**item)
            except ValidationError:
                continue
        else:
            continue

        if disciplina.id in vistos or not disciplina.tem_nota:
            continue
        vistos.add(disciplina.id)
        validas.append(disciplina)
    return validas


def _descrever(disciplina: DisciplinaGrade, nota: float, obrigatoria: bool) -> str:
    descricao = f"{disciplina.nome}: {nota:.2f} valores"
    if obrigatoria:
        descricao += " (disciplina obrigatória)"
    return descricao


def _aguardando_notas() -> ResultadoClassificacao:
    return ResultadoClassificacao(
        status=StatusTransicao.AGUARDANDO_NOTAS,
        motivos=["Nenhuma nota disponível"],
        observacao_padronizada="Aguardando notas para determinar transição.",
    )


def _frequencia_insuficiente(frequencia: float, media_geral: float) -> ResultadoClassificacao:
    minimo = f"{Configuracoes.FREQUENCIA_MINIMA:.2f}".replace(".", ",")
    return ResultadoClassificacao(
        status=StatusTransicao.NAO_TRANSITA,
        motivos=[f"Frequência insuficiente ({frequencia:.2f}%)"],
        acoes_recomendadas=["Melhorar assiduidade"],
        media_geral=media_geral,
        observacao_padronizada=(
            f"Não transitou por frequência insuficiente ({frequencia:.2f}%, "
            f"inferior ao mínimo de {minimo}%)."
        ),
        motivo_retencao=f"Frequência insuficiente ({frequencia:.2f}%, inferior ao mínimo de {minimo}%)",
    )


def classificar_aluno(
    disciplinas: List[DisciplinaGrade],
    nivel_ensino: Optional[str],
    classe: Optional[str] = None,
    disciplinas_obrigatorias: Iterable[str] = (),
    frequencia: Optional[float] = None,
) -> ResultadoClassificacao:
    """Classifica a transição de ano de um aluno.

    Parâmetros:
    - disciplinas (list[DisciplinaGrade]): nota final de cada disciplina
    - nivel_ensino (str): ex.: "Ensino Primário", "Ensino Secundário I Ciclo"
    - classe (str | None): ex.: "7ª Classe"
    - disciplinas_obrigatorias (Iterable[str]): ids das disciplinas obrigatórias
    - frequencia (float | None): frequência anual em percentagem; ausente não bloqueia

    Retorno:
    - ResultadoClassificacao: veredicto e fundamentos
    """
    com_nota = _disciplinas_com_nota(disciplinas)
    if not com_nota:
        return _aguardando_notas()

    regime = obter_regime(nivel_ensino)
    obrigatorias = frozenset(str(codigo) for codigo in disciplinas_obrigatorias or ())
    tolerancia = Configuracoes.TOLERANCIA_DISCIPLINAS_CONDICIONAL

    notas: List[Tuple[DisciplinaGrade, float]] = [(d, min(d.nota, regime.teto)) for d in com_nota]
    media_geral = arredondar_meio_acima(sum(nota for _, nota in notas) / len(notas), 2)

    frequencia = _normalizar_frequencia(frequencia)
    if frequencia is not None and frequencia < Configuracoes.FREQUENCIA_MINIMA:
        return _frequencia_insuficiente(frequencia, media_geral)

    em_risco = [(d, nota) for d, nota in notas if nota < regime.limiar]
    obrigatorias_em_risco = [d for d, _ in em_risco if d.id in obrigatorias]
    outras_em_risco = [d for d, _ in em_risco if d.id not in obrigatorias]

    acoes = [f"Recuperação em {d.nome}" for d, _ in em_risco]
    if media_geral < regime.limiar + Configuracoes.MARGEM_MEDIA_MARGINAL:
        acoes.append("Acompanhamento pedagógico geral (média geral marginal)")

    if not em_risco:
        return ResultadoClassificacao(
            status=StatusTransicao.TRANSITA,
            motivos=[f"Todas as disciplinas com nota igual ou superior a {regime.nota_minima_exibida} valores"],
            acoes_recomendadas=acoes,
            media_geral=media_geral,
            observacao_padronizada=(
                f"Transitou por ter obtido classificação igual ou superior a {regime.nota_minima_exibida} "
                f"valores em todas as disciplinas"
                + (f" e frequência de {frequencia:.2f}%." if frequencia is not None else ".")
            ),
        )

    ids_em_risco = [d.id for d, _ in em_risco]
    nomes_em_risco = ", ".join(d.nome for d, _ in em_risco)
    detalhes = [_descrever(d, nota, d.id in obrigatorias) for d, nota in em_risco]
    numero_classe = extrair_numero_classe(classe)
    classe_sem_condicional = numero_classe in Configuracoes.CLASSES_SEM_CONDICIONAL

    if obrigatorias_em_risco or len(outras_em_risco) > tolerancia or classe_sem_condicional:
        motivos = []
        if obrigatorias_em_risco:
            motivos.append(
                "Classificação negativa em disciplina(s) obrigatória(s): "
                + ", ".join(d.nome for d in obrigatorias_em_risco)
            )
        if len(outras_em_risco) > tolerancia:
            motivos.append(
                f"Reprovado a mais de {tolerancia} disciplinas ({len(outras_em_risco)} encontradas)"
            )
        if classe_sem_condicional:
            motivos.append(f"A {numero_classe}ª Classe requer todas as disciplinas com classificação positiva")
        motivos.extend(detalhes)

        if obrigatorias_em_risco:
            acoes.append("Acompanhamento pedagógico intensivo nas disciplinas obrigatórias")

        return ResultadoClassificacao(
            status=StatusTransicao.NAO_TRANSITA,
            motivos=motivos,
            disciplinas_em_risco=ids_em_risco,
            acoes_recomendadas=acoes,
            media_geral=media_geral,
            observacao_padronizada=(
                f"Não transitou por ter obtido classificação inferior a {regime.nota_minima_exibida} valores "
                f"em {len(em_risco)} disciplina(s): {nomes_em_risco}."
            ),
            motivo_retencao="; ".join(motivos[: len(motivos) - len(detalhes)]),
        )

    acoes.append("Preparação para Exame Extraordinário")
    return ResultadoClassificacao(
        status=StatusTransicao.CONDICIONAL,
        motivos=[
            f"{len(em_risco)} disciplina(s) não obrigatória(s) com classificação negativa "
            f"(permitido até {tolerancia})"
        ]
        + detalhes,
        disciplinas_em_risco=ids_em_risco,
        acoes_recomendadas=acoes,
        media_geral=media_geral,
        observacao_padronizada=(
            f"Transitou condicionalmente com {len(em_risco)} disciplina(s) abaixo de "
            f"{regime.nota_minima_exibida} valores: {nomes_em_risco}. "
            f"Deve realizar Exame Extraordinário conforme calendário oficial."
        ),
        matricula_condicional=True,
    )
