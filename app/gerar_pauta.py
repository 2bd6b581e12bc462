"""Ponto de entrada da geração de pautas em linha de comando.

Responsabilidades:
- Ler as notas lançadas e a configuração de componentes
- Gerar a pauta da turma e gravá-la em CSV
- Tratar falhas e finalizar com código de saída
"""

import argparse
import os

from src.application.report_service import ServicoPauta
from src.config.settings import Configuracoes
from src.infrastructure.data.grade_loader import CarregadorNotas
from src.util.logger import logger


def criar_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Gera a pauta de transição de uma turma.")
    parser.add_argument("--notas", required=True, help="CSV ou Excel com as notas lançadas")
    parser.add_argument("--componentes", required=True, help="JSON com os componentes por disciplina")
    parser.add_argument("--nivel", required=True, help='Nível de ensino, ex.: "Ensino Secundário I Ciclo"')
    parser.add_argument("--classe", default=None, help='Classe da turma, ex.: "8ª Classe"')
    parser.add_argument("--obrigatorias", default="", help="Ids das disciplinas obrigatórias, separados por vírgula")
    parser.add_argument(
        "--saida",
        default=os.path.join(Configuracoes.REPORT_DIR, "pauta.csv"),
        help="Caminho do CSV de saída",
    )
    return parser


def executar(argumentos) -> str:
    """Gera a pauta e devolve o caminho do ficheiro gravado."""
    carregador = CarregadorNotas()
    notas = carregador.carregar_notas(argumentos.notas)
    componentes = carregador.carregar_componentes(argumentos.componentes)
    obrigatorias = [item.strip() for item in argumentos.obrigatorias.split(",") if item.strip()]

    servico = ServicoPauta()
    pauta = servico.gerar_pauta(notas, componentes, argumentos.nivel, argumentos.classe, obrigatorias)
    resumo = servico.resumo(pauta, argumentos.nivel)

    diretorio = os.path.dirname(os.path.abspath(argumentos.saida))
    os.makedirs(diretorio, exist_ok=True)
    pauta.to_csv(argumentos.saida, index=False, sep=";")

    logger.info(f"Resumo da turma: {resumo['status']}")
    logger.info(f"Pauta gravada em: {argumentos.saida}")
    return argumentos.saida


if __name__ == "__main__":
    logger.info("Iniciando geração de pauta...")

    try:
        executar(criar_parser().parse_args())
        logger.info("Processo concluído com sucesso!")

    except Exception as erro:
        logger.exception(f"Ocorreu um erro fatal durante a geração da pauta: {str(erro)}")
        exit(1)
