"""Validação de contrato de dados das notas.

Responsabilidades:
- Validar presença de colunas obrigatórias
- Converter colunas de texto e numéricas
- Falhar explicitamente se contrato for violado
"""

from typing import List

import pandas as pd

from src.util.logger import logger


class ContratoDataFrame:
    """Define e valida contrato de dados para DataFrames.

    Responsabilidades:
    - Especificar colunas obrigatórias
    - Normalizar colunas de texto (strip) e numéricas (coerção para NaN)
    - Falhar com mensagem clara se violado
    """

    def __init__(
        self,
        colunas_obrigatorias: List[str],
        colunas_texto: List[str] = None,
        colunas_numericas: List[str] = None,
    ):
        """Inicializa o contrato.

        Parâmetros:
        - colunas_obrigatorias (list): colunas que devem estar presentes
        - colunas_texto (list): colunas convertidas para texto
        - colunas_numericas (list): colunas convertidas para número
        """
        self.colunas_obrigatorias = colunas_obrigatorias
        self.colunas_texto = colunas_texto or []
        self.colunas_numericas = colunas_numericas or []

    def validar(self, df: pd.DataFrame) -> pd.DataFrame:
        """Valida o DataFrame contra o contrato e devolve uma cópia normalizada.

        Parâmetros:
        - df (pd.DataFrame): DataFrame a validar

        Retorno:
        - pd.DataFrame: dados com tipos normalizados

        Exceções:
        - ValueError: quando contrato é violado
        """
        if df is None or df.empty:
            raise ValueError("DataFrame vazio ou nulo. Impossível validar contrato.")

        colunas_faltantes = [c for c in self.colunas_obrigatorias if c not in df.columns]
        if colunas_faltantes:
            raise ValueError(
                f"Contrato de dados violado: colunas obrigatórias ausentes: {colunas_faltantes}. "
                f"Colunas disponíveis: {list(df.columns)}"
            )

        df = df.copy()
        for coluna in self.colunas_texto:
            if coluna in df.columns:
                df[coluna] = df[coluna].where(df[coluna].isna(), df[coluna].astype(str).str.strip())

        for coluna in self.colunas_numericas:
            if coluna not in df.columns:
                continue
            originais_nulos = int(df[coluna].isna().sum())
            df[coluna] = pd.to_numeric(df[coluna], errors="coerce")
            invalidos = int(df[coluna].isna().sum()) - originais_nulos
            if invalidos > 0:
                logger.warning(
                    f"Coluna '{coluna}' contém {invalidos} valor(es) não numérico(s); tratados como sem nota."
                )

        logger.info(f"Contrato de dados validado com sucesso. {len(df)} registros.")
        return df


CONTRATO_NOTAS = ContratoDataFrame(
    colunas_obrigatorias=["ALUNO_ID", "DISCIPLINA_ID", "COMPONENTE", "VALOR"],
    colunas_texto=["ALUNO_ID", "ALUNO_NOME", "DISCIPLINA_ID", "DISCIPLINA_NOME", "COMPONENTE"],
    colunas_numericas=["VALOR"],
)

