"""Arredondamento de notas.

Responsabilidades:
- Arredondar notas "meio para cima", como nas pautas oficiais
"""

from decimal import Decimal, ROUND_HALF_UP


def arredondar_meio_acima(valor: float, casas: int = 2) -> float:
    """Arredonda com ROUND_HALF_UP (2.345 -> 2.35), evitando o arredondamento bancário de round()."""
    quantum = Decimal(1).scaleb(-casas)
    return float(Decimal(str(valor)).quantize(quantum, rounding=ROUND_HALF_UP))
