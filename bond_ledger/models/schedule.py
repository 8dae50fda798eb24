from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ScheduleRow:
    """One boleta of the amortization schedule.

    Period 0 is the disbursement and carries only the two cash flows.
    """
    period: int
    investor_flow: float
    issuer_flow: float
    tea: float | None = None  # Original rate magnitude, as entered
    tep: float | None = None  # Monthly effective rate, percent
    pg: str | None = None  # "S" on payment rows
    opening_balance: float | None = None
    interest: float | None = None
    amortization: float | None = None
    installment: float | None = None
    closing_balance: float | None = None

    @property
    def is_disbursement(self) -> bool:
        return self.period == 0

    def as_record(self) -> dict:
        """Field mapping persisted by the caller."""
        return asdict(self)
