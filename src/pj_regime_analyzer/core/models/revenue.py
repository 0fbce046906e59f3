"""Revenue aggregation over the 24-month window."""

from decimal import Decimal

from pydantic import BaseModel, Field

ZERO = Decimal("0")


class ReceitaBruta(BaseModel):
    """Monthly gross revenue for the current and the prior year.

    Both series are ordered January..December and always hold 12 values.
    """

    atual: tuple[Decimal, ...] = Field(..., min_length=12, max_length=12)
    anterior: tuple[Decimal, ...] = Field(..., min_length=12, max_length=12)

    model_config = {"frozen": True}

    @property
    def rba(self) -> Decimal:
        """Receita Bruta Anual (current year)."""
        return sum(self.atual, ZERO)

    @property
    def rbaa(self) -> Decimal:
        """Receita Bruta do Ano Anterior."""
        return sum(self.anterior, ZERO)

    @property
    def rbt12(self) -> Decimal:
        """Trailing twelve months as of the latest month with data.

        Defined as the last 12 values of ``anterior ++ atual``.
        """
        return sum((self.anterior + self.atual)[-12:], ZERO)

    def rbt12_no_mes(self, indice: int) -> Decimal:
        """RBT12 used to tax month ``indice`` (0 = January).

        Sums the ``indice`` current-year months before it plus the most recent
        ``12 - indice`` prior-year months. ``indice=12`` gives the window after
        December, equal to :attr:`rbt12`.
        """
        if not 0 <= indice <= 12:
            raise ValueError(f"Índice de mês inválido: {indice}")
        return sum(self.atual[:indice], ZERO) + sum(self.anterior[indice:], ZERO)
