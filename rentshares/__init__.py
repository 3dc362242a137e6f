"""Income-proportional bill splitting with per-participant limits."""
from .allocation import (
    Allocation,
    AllocationError,
    AllocationResult,
    BillParameters,
    HourlyIncome,
    IncomeOverflowError,
    NoUnlimitedParticipantsError,
    Participant,
    SalaryIncome,
    ZeroIncomeError,
    calculate_shares,
)
from .app import create_app
from .schema import FormValidationError, parse_bill

__all__ = [
    "Allocation",
    "AllocationError",
    "AllocationResult",
    "BillParameters",
    "FormValidationError",
    "HourlyIncome",
    "IncomeOverflowError",
    "NoUnlimitedParticipantsError",
    "Participant",
    "SalaryIncome",
    "ZeroIncomeError",
    "calculate_shares",
    "create_app",
    "parse_bill",
]
