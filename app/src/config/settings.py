"""Configurações centrais do projeto.

Responsabilidades:
- Definir caminhos de arquivos
- Definir limiares e tetos da classificação de alunos
- Definir códigos de componentes usados na pauta
"""

import os
from pathlib import Path


def _ler_lista(nome: str, padrao: str) -> list:
    """Lê uma lista separada por vírgulas de uma variável de ambiente."""
    bruto = os.getenv(nome, padrao)
    return [item.strip() for item in bruto.split(",") if item.strip()]


class Configuracoes:
    """Centraliza configurações da aplicação.

    Responsabilidades:
    - Fornecer caminhos de diretórios
    - Declarar os limiares de aprovação por regime de ensino
    - Declarar a política de transição condicional
    """

    BASE_DIR = Path(__file__).resolve().parents[2]
    DEFAULT_DATA_DIR = os.path.join(BASE_DIR, "data")
    DATA_DIR = os.path.abspath(os.getenv("DATA_DIR", DEFAULT_DATA_DIR))
    REPORT_DIR = os.path.join(BASE_DIR, "relatorios")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    LIMIAR_APROVACAO_PRIMARIO = float(os.getenv("LIMIAR_APROVACAO_PRIMARIO", "4.45"))
    LIMIAR_APROVACAO_SECUNDARIO = float(os.getenv("LIMIAR_APROVACAO_SECUNDARIO", "9.45"))
    TETO_NOTA_PRIMARIO = float(os.getenv("TETO_NOTA_PRIMARIO", "10"))
    TETO_NOTA_SECUNDARIO = float(os.getenv("TETO_NOTA_SECUNDARIO", "10"))
    TOLERANCIA_DISCIPLINAS_CONDICIONAL = int(os.getenv("TOLERANCIA_DISCIPLINAS_CONDICIONAL", "2"))
    MARGEM_MEDIA_MARGINAL = float(os.getenv("MARGEM_MEDIA_MARGINAL", "0.5"))
    FREQUENCIA_MINIMA = float(os.getenv("FREQUENCIA_MINIMA", "66.67"))

    # Classes de fim de ciclo: não admitem matrícula condicional.
    CLASSES_SEM_CONDICIONAL = [int(c) for c in _ler_lista("CLASSES_SEM_CONDICIONAL", "9")]
    CLASSE_MAXIMA = int(os.getenv("CLASSE_MAXIMA", "12"))

    CASAS_DECIMAIS_COMPONENTE = int(os.getenv("CASAS_DECIMAIS_COMPONENTE", "2"))
    ESCALA_MINIMA_PADRAO = 0.0
    ESCALA_MAXIMA_PADRAO = 20.0
    LIMIAR_APROVACAO_ESTATISTICAS = float(os.getenv("LIMIAR_APROVACAO_ESTATISTICAS", "10"))

    # Ordem de preferência do componente que contém a nota final da disciplina.
    CODIGOS_NOTA_FINAL = _ler_lista("CODIGOS_NOTA_FINAL", "MFD,MF")

    COLUNAS_NOTAS = [
        "ALUNO_ID",
        "ALUNO_NOME",
        "DISCIPLINA_ID",
        "DISCIPLINA_NOME",
        "COMPONENTE",
        "VALOR",
    ]
