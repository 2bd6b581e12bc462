"""Serviço de cálculo dos componentes calculados.

Responsabilidades:
- Ordenar os componentes calculados pelas suas dependências
- Avaliar as fórmulas com as notas do aluno
- Tratar falhas de fórmula como componente indisponível
- Aplicar escala e arredondamento ao resultado
"""

from typing import Dict, List, Mapping, Optional

from src.application.formula_evaluator import avaliar_formula, extrair_componentes
from src.config.settings import Configuracoes
from src.domain.formula import ComponenteAvaliacao, ErroFormula
from src.util.arredondamento import arredondar_meio_acima
from src.util.logger import FabricaLogger

logger = FabricaLogger.obter("componentes")

MARCADOR_SEM_NOTA = "-"


def formatar_nota(valor: Optional[float]) -> str:
    """Formata a nota para exibição; componentes indisponíveis aparecem como "-"."""
    if valor is None:
        return MARCADOR_SEM_NOTA
    return f"{valor:.{Configuracoes.CASAS_DECIMAIS_COMPONENTE}f}"


class ServicoComponentes:
    """Calcula os componentes derivados de uma disciplina para um aluno.

    Responsabilidades:
    - Resolver dependências entre componentes calculados (ex.: MF depende de MT1, MT2, MT3)
    - Contar dependências sem nota como 0
    - Registar em log e ignorar fórmulas inválidas
    """

    def __init__(self, casas_decimais: int = None):
        """Inicializa o serviço.

        Parâmetros:
        - casas_decimais (int | None): precisão do resultado; usa a configuração quando ausente
        """
        if casas_decimais is None:
            casas_decimais = Configuracoes.CASAS_DECIMAIS_COMPONENTE
        self.casas_decimais = casas_decimais

    def calcular_componentes(
        self,
        componentes: List[ComponenteAvaliacao],
        notas: Mapping[str, Optional[float]],
        contexto: str = "",
    ) -> Dict[str, Optional[float]]:
        """Preenche os componentes calculados a partir das notas lançadas.

        Parâmetros:
        - componentes (list[ComponenteAvaliacao]): componentes da disciplina
        - notas (Mapping[str, float]): código -> nota dos componentes lançados
        - contexto (str): identificação do aluno/disciplina para as mensagens de log

        Retorno:
        - dict: código -> nota; componentes calculados que falharam ficam com None
        """
        resultado: Dict[str, Optional[float]] = dict(notas)
        calculados = {c.codigo: c for c in componentes if c.calculado}

        ordem = self._ordenar_por_dependencias(calculados, contexto)
        # Componentes em ciclo ficam sem nota antes de alimentarem outras fórmulas.
        for codigo in calculados:
            if codigo not in ordem:
                resultado[codigo] = None

        for codigo in ordem:
            resultado[codigo] = self._calcular(calculados[codigo], resultado, contexto)

        return resultado

    def _calcular(
        self,
        componente: ComponenteAvaliacao,
        valores: Mapping[str, Optional[float]],
        contexto: str,
    ) -> Optional[float]:
        if not componente.formula_expressao:
            logger.warning(f"Componente calculado {componente.codigo} sem fórmula {contexto}".rstrip())
            return None

        try:
            valor = avaliar_formula(componente.formula_expressao, valores)
        except ErroFormula as erro:
            logger.warning(
                f"Componente {componente.codigo} ignorado {contexto}: {erro} "
                f"(fórmula '{componente.formula_expressao}')"
            )
            return None

        valor = min(max(valor, componente.escala_minima), componente.escala_maxima)
        return arredondar_meio_acima(valor, self.casas_decimais)

    @staticmethod
    def dependencias(componente: ComponenteAvaliacao) -> List[str]:
        """Dependências declaradas ou, na falta delas, as inferidas da fórmula."""
        if componente.depende_de:
            return list(componente.depende_de)
        return extrair_componentes(componente.formula_expressao or "")

    def _ordenar_por_dependencias(
        self,
        calculados: Dict[str, ComponenteAvaliacao],
        contexto: str,
    ) -> List[str]:
        """Ordena os componentes calculados de modo que cada um venha depois das suas dependências.

        Componentes envolvidos num ciclo ficam fora da ordem (e, portanto, sem nota).
        """
        ordem: List[str] = []
        estado: Dict[str, str] = {}
        em_ciclo = set()

        def visitar(codigo: str, caminho: List[str]) -> None:
            if estado.get(codigo) == "concluido":
                return
            if estado.get(codigo) == "visitando":
                ciclo = caminho[caminho.index(codigo):]
                em_ciclo.update(ciclo)
                logger.warning(f"Dependência circular entre componentes {' -> '.join(ciclo + [codigo])} {contexto}".rstrip())
                return

            estado[codigo] = "visitando"
            for dependencia in self.dependencias(calculados[codigo]):
                if dependencia in calculados:
                    visitar(dependencia, caminho + [codigo])
            estado[codigo] = "concluido"
            ordem.append(codigo)

        for codigo in calculados:
            visitar(codigo, [])

        return [codigo for codigo in ordem if codigo not in em_ciclo]
