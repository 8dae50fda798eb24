"""Engine error types. All derive from ValueError."""


class EngineError(ValueError):
    pass


class InvalidConvention(EngineError):
    """Rate convention is not one of the supported RateType values."""


class InvalidPeriodCount(EngineError):
    """Period count is non-positive, non-integral or non-finite."""


class ScheduleError(EngineError):
    """Schedule inputs are non-finite, or the final balance drifted from zero."""


class NoConvergence(EngineError):
    """IRR solver exhausted its strategy without meeting the tolerance."""
