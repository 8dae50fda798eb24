from dataclasses import dataclass
from enum import Enum


class RateType(Enum):
    TEM = "TEM"  # Tasa Efectiva Mensual
    TNM = "TNM"  # Tasa Nominal Mensual
    TEB = "TEB"  # Bimestral
    TNB = "TNB"
    TET = "TET"  # Trimestral
    TNT = "TNT"
    TES = "TES"  # Semestral
    TNS = "TNS"
    TEA = "TEA"  # Anual
    TNA = "TNA"

    @property
    def is_nominal(self) -> bool:
        return self.value[1] == "N"

    @property
    def months(self) -> int:
        """Months contained in one period of this convention."""
        return {"M": 1, "B": 2, "T": 3, "S": 6, "A": 12}[self.value[2]]

    @property
    def days(self) -> int:
        """Days nominally spanned, on a 30/360 basis."""
        return 30 * self.months


class NominalMethod(Enum):
    DAILY = "daily"    # (1 + r/d)^30 - 1
    SIMPLE = "simple"  # r / months


@dataclass(frozen=True)
class RateSpec:
    magnitude: float  # Percent, e.g. 12.0 for 12%
    convention: RateType
