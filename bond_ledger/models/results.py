from dataclasses import dataclass
from enum import Enum


class Party(Enum):
    ISSUER = "issuer"
    INVESTOR = "investor"


@dataclass(frozen=True)
class IndicatorReport:
    party: Party
    period_discount_rate: float  # COK per month, percent
    period_irr: float  # Percent per month
    annualized_rate: float  # TCEA (issuer) or TREA (investor), percent
    npv: float

    @property
    def annualized_label(self) -> str:
        return "TCEA" if self.party is Party.ISSUER else "TREA"
