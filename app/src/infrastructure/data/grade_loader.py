"""Carregamento de notas lançadas e de definições de componentes.

Responsabilidades:
- Ler folhas de notas em CSV ou Excel
- Normalizar nomes de colunas
- Validar o contrato de dados e a escala das notas
- Ler a configuração de componentes por disciplina
"""

import json
import os
import re
import unicodedata
from typing import Dict, List

import pandas as pd
from pydantic import ValidationError

from src.config.settings import Configuracoes
from src.domain.formula import ComponenteAvaliacao
from src.infrastructure.data.data_contract import CONTRATO_NOTAS
from src.util.logger import logger

CHAVE_COMPONENTES_PADRAO = "_padrao"

ALIASES_COLUNAS = {
    "ALUNO": "ALUNO_ID",
    "ID_ALUNO": "ALUNO_ID",
    "NUMERO_PROCESSO": "ALUNO_ID",
    "NOME_COMPLETO": "ALUNO_NOME",
    "NOME_ALUNO": "ALUNO_NOME",
    "DISCIPLINA": "DISCIPLINA_ID",
    "ID_DISCIPLINA": "DISCIPLINA_ID",
    "NOME_DISCIPLINA": "DISCIPLINA_NOME",
    "CODIGO": "COMPONENTE",
    "CODIGO_COMPONENTE": "COMPONENTE",
    "NOTA": "VALOR",
}


class CarregadorNotas:
    """Responsável pelo carregamento e limpeza das notas de uma turma.

    Responsabilidades:
    - Ler o ficheiro de notas em formato longo (uma linha por aluno/disciplina/componente)
    - Descartar notas fora da escala, com aviso
    - Ler os componentes de avaliação configurados
    """

    def __init__(self, escala_minima: float = None, escala_maxima: float = None):
        self.escala_minima = Configuracoes.ESCALA_MINIMA_PADRAO if escala_minima is None else escala_minima
        self.escala_maxima = Configuracoes.ESCALA_MAXIMA_PADRAO if escala_maxima is None else escala_maxima

    def carregar_notas(self, caminho_arquivo: str) -> pd.DataFrame:
        """Lê e valida um ficheiro de notas.

        Parâmetros:
        - caminho_arquivo (str): caminho .csv ou .xlsx

        Retorno:
        - pd.DataFrame: notas com as colunas de Configuracoes.COLUNAS_NOTAS

        Exceções:
        - FileNotFoundError: quando o ficheiro não existe
        - ValueError: quando o contrato de dados é violado
        """
        if not os.path.exists(caminho_arquivo):
            raise FileNotFoundError(f"Ficheiro de notas não encontrado: {caminho_arquivo}")

        logger.info(f"Carregando notas de: {caminho_arquivo}")
        if caminho_arquivo.lower().endswith((".xlsx", ".xls")):
            df = self._ler_excel(caminho_arquivo)
        else:
            df = self._ler_csv(caminho_arquivo)

        return self.preparar_notas(df)

    def preparar_notas(self, df: pd.DataFrame) -> pd.DataFrame:
        """Normaliza colunas, valida o contrato e descarta notas fora da escala."""
        df = self._normalizar_colunas(df)
        df = CONTRATO_NOTAS.validar(df)

        for coluna_nome, coluna_id in (("ALUNO_NOME", "ALUNO_ID"), ("DISCIPLINA_NOME", "DISCIPLINA_ID")):
            if coluna_nome not in df.columns:
                df[coluna_nome] = df[coluna_id]
            else:
                df[coluna_nome] = df[coluna_nome].fillna(df[coluna_id])

        fora_escala = df["VALOR"].notna() & (
            (df["VALOR"] < self.escala_minima) | (df["VALOR"] > self.escala_maxima)
        )
        if fora_escala.any():
            for _, linha in df[fora_escala].iterrows():
                logger.warning(
                    f"Nota fora da escala {self.escala_minima}-{self.escala_maxima} ignorada: "
                    f"aluno {linha['ALUNO_ID']}, disciplina {linha['DISCIPLINA_ID']}, "
                    f"componente {linha['COMPONENTE']} (valor: {linha['VALOR']})"
                )
            df = df[~fora_escala]

        return df[Configuracoes.COLUNAS_NOTAS].reset_index(drop=True)

    @staticmethod
    def carregar_componentes(caminho_arquivo: str) -> Dict[str, List[ComponenteAvaliacao]]:
        """Lê a configuração de componentes: id da disciplina -> lista de componentes.

        A chave "_padrao" define os componentes das disciplinas sem configuração própria.

        Exceções:
        - ValueError: quando o JSON não é um mapeamento ou um componente é inválido
        """
        with open(caminho_arquivo, "r", encoding="utf-8") as arquivo:
            bruto = json.load(arquivo)

        if not isinstance(bruto, dict):
            raise ValueError("A configuração de componentes deve ser um objeto disciplina -> componentes.")

        componentes = {}
        for disciplina_id, lista in bruto.items():
            try:
                componentes[str(disciplina_id)] = [ComponenteAvaliacao(**item) for item in lista]
            except (TypeError, ValidationError) as erro:
                raise ValueError(f"Componentes inválidos para a disciplina '{disciplina_id}': {erro}")

        logger.info(f"Componentes carregados para {len(componentes)} disciplina(s).")
        return componentes

    @staticmethod
    def _ler_excel(caminho_arquivo: str) -> pd.DataFrame:
        try:
            return pd.read_excel(caminho_arquivo)
        except Exception as erro:
            logger.error(f"Erro crítico ao ler o Excel: {erro}")
            raise erro

    @staticmethod
    def _ler_csv(caminho_arquivo: str) -> pd.DataFrame:
        """Lê CSV separado por ";" ou ",", ignorando linhas de comentário (#)."""
        try:
            df = pd.read_csv(caminho_arquivo, sep=";", comment="#")
            if len(df.columns) <= 1:
                df = pd.read_csv(caminho_arquivo, sep=",", comment="#")
            return df
        except Exception as erro:
            logger.error(f"Erro crítico ao ler o CSV: {erro}")
            raise erro

    @staticmethod
    def _normalizar_colunas(df: pd.DataFrame) -> pd.DataFrame:
        novas_colunas = []
        for coluna in df.columns:
            coluna_limpa = str(coluna).upper().strip()
            coluna_limpa = unicodedata.normalize("NFKD", coluna_limpa).encode("ASCII", "ignore").decode("utf-8")
            coluna_limpa = re.sub(r"[\s\-]+", "_", coluna_limpa)
            novas_colunas.append(ALIASES_COLUNAS.get(coluna_limpa, coluna_limpa))

        df = df.copy()
        df.columns = novas_colunas
        if df.columns.duplicated().any():
            df = df.loc[:, ~df.columns.duplicated()]
        return df
