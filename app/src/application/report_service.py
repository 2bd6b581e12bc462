"""Serviço de geração de pautas de turma.

Responsabilidades:
- Calcular os componentes derivados de cada aluno e disciplina
- Escolher a nota final de cada disciplina
- Classificar cada aluno e preparar a sua matrícula
- Resumir a turma (estatísticas e veredictos)
"""

from typing import Dict, Iterable, List, Mapping, Optional

import pandas as pd

from src.application.component_service import ServicoComponentes, formatar_nota
from src.application.enrollment_service import preparar_matricula
from src.application.statistics_service import calcular_estatisticas_turma
from src.application.student_classifier import classificar_aluno, obter_regime
from src.config.settings import Configuracoes
from src.domain.classification import DisciplinaGrade, ResultadoClassificacao, StatusTransicao
from src.domain.formula import ComponenteAvaliacao
from src.infrastructure.data.grade_loader import CHAVE_COMPONENTES_PADRAO
from src.util.logger import logger


def _valor_ou_none(valor) -> Optional[float]:
    return None if pd.isna(valor) else float(valor)


class ServicoPauta:
    """Gera a pauta de uma turma a partir das notas lançadas.

    Responsabilidades:
    - Processar cada aluno de forma independente
    - Não deixar os dados de um aluno interromper a pauta da turma
    """

    def __init__(self, servico_componentes: ServicoComponentes = None):
        """Inicializa o serviço.

        Parâmetros:
        - servico_componentes (ServicoComponentes | None): calculadora de componentes
        """
        self.servico_componentes = servico_componentes or ServicoComponentes()

    @staticmethod
    def componentes_da_disciplina(
        componentes_por_disciplina: Mapping[str, List[ComponenteAvaliacao]],
        disciplina_id: str,
    ) -> List[ComponenteAvaliacao]:
        """Componentes próprios da disciplina ou, na falta deles, os componentes padrão."""
        if disciplina_id in componentes_por_disciplina:
            return componentes_por_disciplina[disciplina_id]
        return componentes_por_disciplina.get(CHAVE_COMPONENTES_PADRAO, [])

    def calcular_notas_disciplina(
        self,
        notas_disciplina: pd.DataFrame,
        componentes: List[ComponenteAvaliacao],
        contexto: str = "",
    ) -> Dict[str, Optional[float]]:
        """Notas de todos os componentes (lançados e calculados) de um aluno numa disciplina."""
        lancadas = {
            str(linha.COMPONENTE): _valor_ou_none(linha.VALOR)
            for linha in notas_disciplina.itertuples(index=False)
        }
        return self.servico_componentes.calcular_componentes(componentes, lancadas, contexto)

    @staticmethod
    def escolher_nota_final(valores: Mapping[str, Optional[float]]) -> Optional[float]:
        """Primeiro componente disponível de Configuracoes.CODIGOS_NOTA_FINAL (MFD, depois MF)."""
        for codigo in Configuracoes.CODIGOS_NOTA_FINAL:
            if valores.get(codigo) is not None:
                return valores[codigo]
        return None

    def notas_finais_aluno(
        self,
        notas_aluno: pd.DataFrame,
        componentes_por_disciplina: Mapping[str, List[ComponenteAvaliacao]],
    ) -> List[DisciplinaGrade]:
        """Monta a lista de DisciplinaGrade de um aluno."""
        disciplinas = []
        for disciplina_id, notas_disciplina in notas_aluno.groupby("DISCIPLINA_ID", sort=False):
            componentes = self.componentes_da_disciplina(componentes_por_disciplina, disciplina_id)
            contexto = f"(aluno {notas_aluno['ALUNO_ID'].iloc[0]}, disciplina {disciplina_id})"
            valores = self.calcular_notas_disciplina(notas_disciplina, componentes, contexto)
            disciplinas.append(
                DisciplinaGrade(
                    id=str(disciplina_id),
                    nome=str(notas_disciplina["DISCIPLINA_NOME"].iloc[0]),
                    nota=self.escolher_nota_final(valores),
                )
            )
        return disciplinas

    def gerar_pauta(
        self,
        notas: pd.DataFrame,
        componentes_por_disciplina: Mapping[str, List[ComponenteAvaliacao]],
        nivel_ensino: str,
        classe: Optional[str] = None,
        disciplinas_obrigatorias: Iterable[str] = (),
        frequencias: Optional[Mapping[str, float]] = None,
    ) -> pd.DataFrame:
        """Gera a pauta da turma, uma linha por aluno.

        Parâmetros:
        - notas (pd.DataFrame): notas em formato longo (Configuracoes.COLUNAS_NOTAS)
        - componentes_por_disciplina (Mapping): id da disciplina -> componentes
        - nivel_ensino (str): nível de ensino da turma
        - classe (str | None): classe da turma, ex.: "8ª Classe"
        - disciplinas_obrigatorias (Iterable[str]): ids das disciplinas obrigatórias
        - frequencias (Mapping | None): id do aluno -> frequência anual (%)

        Retorno:
        - pd.DataFrame: nota final por disciplina, média, veredicto e matrícula de cada aluno
        """
        obrigatorias = frozenset(str(codigo) for codigo in disciplinas_obrigatorias or ())
        frequencias = frequencias or {}
        ordem_disciplinas = list(dict.fromkeys(notas["DISCIPLINA_ID"]))
        linhas = []

        logger.info(f"Gerando pauta: {notas['ALUNO_ID'].nunique()} aluno(s), {len(ordem_disciplinas)} disciplina(s)")

        for aluno_id, notas_aluno in notas.groupby("ALUNO_ID", sort=False):
            linha = {"ALUNO_ID": aluno_id, "ALUNO_NOME": notas_aluno["ALUNO_NOME"].iloc[0]}
            try:
                disciplinas = self.notas_finais_aluno(notas_aluno, componentes_por_disciplina)
                resultado = classificar_aluno(
                    disciplinas,
                    nivel_ensino,
                    classe,
                    obrigatorias,
                    frequencias.get(aluno_id),
                )
            except Exception as erro:
                logger.error(f"Falha ao processar notas do aluno {aluno_id}: {erro}")
                disciplinas = []
                resultado = ResultadoClassificacao(
                    status=StatusTransicao.AGUARDANDO_NOTAS,
                    motivos=[f"Erro ao processar notas: {erro}"],
                    observacao_padronizada="Aguardando notas para determinar transição.",
                )

            linha.update({d.id: d.nota for d in disciplinas})
            linha.update(self._colunas_resultado(resultado, classe))
            linhas.append(linha)

        colunas = ["ALUNO_ID", "ALUNO_NOME"] + ordem_disciplinas + list(self._colunas_resultado(None, classe))
        return pd.DataFrame(linhas).reindex(columns=colunas)

    @staticmethod
    def _colunas_resultado(resultado: Optional[ResultadoClassificacao], classe: Optional[str]) -> dict:
        if resultado is None:
            return dict.fromkeys(
                [
                    "MEDIA_GERAL",
                    "STATUS",
                    "DISCIPLINAS_EM_RISCO",
                    "ACOES_RECOMENDADAS",
                    "OBSERVACAO",
                    "CLASSE_DESTINO",
                    "ESTADO_MATRICULA",
                    "MATRICULA_CONDICIONAL",
                ]
            )
        matricula = preparar_matricula(resultado, classe)
        return {
            "MEDIA_GERAL": resultado.media_geral,
            "STATUS": matricula["status_transicao"],
            "DISCIPLINAS_EM_RISCO": ", ".join(resultado.disciplinas_em_risco),
            "ACOES_RECOMENDADAS": "; ".join(resultado.acoes_recomendadas),
            "OBSERVACAO": resultado.observacao_padronizada,
            "CLASSE_DESTINO": matricula["classe_destino"],
            "ESTADO_MATRICULA": matricula["estado_matricula"],
            "MATRICULA_CONDICIONAL": resultado.matricula_condicional,
        }

    def gerar_mini_pauta(
        self,
        notas: pd.DataFrame,
        disciplina_id: str,
        componentes: List[ComponenteAvaliacao],
    ) -> pd.DataFrame:
        """Mini-pauta de uma disciplina: todos os componentes por aluno, "-" quando indisponível."""
        notas_disciplina = notas[notas["DISCIPLINA_ID"] == disciplina_id]
        codigos = list(dict.fromkeys(
            [c.codigo for c in componentes] + list(notas_disciplina["COMPONENTE"].unique())
        ))

        linhas = []
        for aluno_id, notas_aluno in notas_disciplina.groupby("ALUNO_ID", sort=False):
            contexto = f"(aluno {aluno_id}, disciplina {disciplina_id})"
            valores = self.calcular_notas_disciplina(notas_aluno, componentes, contexto)
            linha = {"ALUNO_ID": aluno_id, "ALUNO_NOME": notas_aluno["ALUNO_NOME"].iloc[0]}
            linha.update({codigo: formatar_nota(valores.get(codigo)) for codigo in codigos})
            linhas.append(linha)

        return pd.DataFrame(linhas, columns=["ALUNO_ID", "ALUNO_NOME"] + codigos)

    @staticmethod
    def resumo(pauta: pd.DataFrame, nivel_ensino: str) -> dict:
        """Estatísticas da média geral e contagem de veredictos de uma pauta gerada."""
        limiar = obter_regime(nivel_ensino).limiar
        estatisticas = calcular_estatisticas_turma(pauta["MEDIA_GERAL"].tolist(), limiar_aprovacao=limiar)
        contagem = pauta["STATUS"].value_counts()
        status = {s.value: int(contagem.get(s.value, 0)) for s in StatusTransicao}
        return {"estatisticas": estatisticas, "status": status}
