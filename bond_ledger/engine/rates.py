"""Rate normalization: any supported convention to a monthly effective rate (TEM).

Pure functions. No I/O.
"""

import logging

from bond_ledger.config import settings
from bond_ledger.errors import InvalidConvention
from bond_ledger.models.rates import NominalMethod, RateSpec, RateType

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30


def to_rate_type(convention: RateType | str) -> RateType:
    if isinstance(convention, RateType):
        return convention
    try:
        return RateType(str(convention).upper())
    except ValueError:
        raise InvalidConvention(f"Unsupported rate convention: {convention!r}") from None


def to_nominal_method(method: NominalMethod | str | None) -> NominalMethod:
    if method is None:
        method = settings.nominal_method
    if isinstance(method, NominalMethod):
        return method
    try:
        return NominalMethod(str(method).lower())
    except ValueError:
        raise InvalidConvention(f"Unsupported nominal method: {method!r}") from None


def to_rate_spec(magnitude: float, convention: RateType | str) -> RateSpec:
    return RateSpec(magnitude=float(magnitude), convention=to_rate_type(convention))


def normalize(
    magnitude: float,
    convention: RateType | str,
    nominal_method: NominalMethod | str | None = None,
) -> float:
    """Convert a percent rate in any convention to TEM (decimal fraction).

    Effective rates are re-based by compounding: (1 + r)^(1/k) - 1, with k the
    months per period. Nominal rates use daily compounding over the days the
    convention spans, re-based to a 30-day month: (1 + r/d)^30 - 1. The
    SIMPLE nominal method divides by k instead.
    """
    rate_type = to_rate_type(convention)
    method = to_nominal_method(nominal_method)
    r = magnitude / 100

    if not rate_type.is_nominal:
        tem = (1 + r) ** (1 / rate_type.months) - 1
    elif method is NominalMethod.SIMPLE:
        tem = r / rate_type.months
    else:
        tem = (1 + r / rate_type.days) ** DAYS_PER_MONTH - 1

    logger.debug("normalize %s%% %s (%s) -> TEM %.12f", magnitude, rate_type.value, method.value, tem)
    return tem


def normalize_spec(spec: RateSpec, nominal_method: NominalMethod | str | None = None) -> float:
    return normalize(spec.magnitude, spec.convention, nominal_method)
