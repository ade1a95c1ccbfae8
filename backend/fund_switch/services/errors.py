"""Errors raised while resolving switches."""


class SwitchError(Exception):
    """Base class for reallocation failures surfaced to the caller."""


class MissingPriceError(SwitchError, KeyError):
    def __init__(self, fund: str):
        self.fund = fund
        super().__init__(f"No unit price for fund {fund}")

    def __str__(self) -> str:
        return self.args[0]


class UnresolvableResidualError(SwitchError):
    """The residual split hit a zero denominator while holdings remain."""


class DuplicateFundError(SwitchError, ValueError):
    def __init__(self, fund: str, kind: str):
        self.fund = fund
        self.kind = kind
        super().__init__(f"Fund {fund} appears more than once in {kind}")
