# rentshares/allocation.py
import logging
import math
from dataclasses import dataclass
from typing import List, Union

logger = logging.getLogger(__name__)

WEEKS_PER_MONTH = 4
MONTHS_PER_YEAR = 12


class AllocationError(ValueError):
    """Raised when the inputs cannot be split into finite shares."""


class ZeroIncomeError(AllocationError):
    """Household gross income adds up to zero."""


class NoUnlimitedParticipantsError(AllocationError):
    """Clamping moved money but nobody is left to absorb it."""


class IncomeOverflowError(AllocationError):
    """Incomes or shares too large to represent as finite numbers."""


@dataclass(frozen=True)
class HourlyIncome:
    hourly_rate: float
    hours_per_week: float

    income_type = "hourly"

    def monthly_gross(self) -> float:
        return self.hourly_rate * self.hours_per_week * WEEKS_PER_MONTH


@dataclass(frozen=True)
class SalaryIncome:
    annual_salary: float

    income_type = "salary"

    def monthly_gross(self) -> float:
        return self.annual_salary / MONTHS_PER_YEAR


Income = Union[HourlyIncome, SalaryIncome]


@dataclass(frozen=True)
class Participant:
    name: str
    income: Income
    limited: bool = False


@dataclass(frozen=True)
class BillParameters:
    amount: float
    minimum_limit: float = 0.0
    maximum_limit: float = 0.0


@dataclass(frozen=True)
class AllocationResult:
    participant: Participant
    gross_monthly_income: float
    percentage_of_total: float
    amount_due: float
    adjusted_due: float


@dataclass(frozen=True)
class Allocation:
    results: List[AllocationResult]
    total_gross: float


def calculate_shares(bill, participants):
    """Split ``bill.amount`` across ``participants`` in proportion to income.

    Limited participants are held to the ``[minimum_limit, maximum_limit]``
    band (a zero limit is disabled) and whatever that moves is spread evenly
    over the unlimited participants, so the adjusted dues still add up to the
    bill amount.
    """
    if not participants:
        raise AllocationError("At least one participant is required.")

    # 1. Monthly gross income of each participant
    gross_incomes = [p.income.monthly_gross() for p in participants]
    total_gross = sum(gross_incomes)
    if not math.isfinite(total_gross):
        raise IncomeOverflowError("Household gross income is too large to split.")
    if total_gross == 0:
        raise ZeroIncomeError("Household gross income is zero, shares cannot be computed.")

    # 2. Proportional split, ignoring limits
    percentages = [income / total_gross * 100 for income in gross_incomes]
    unadjusted = [bill.amount * (percentage / 100) for percentage in percentages]

    # 3. Clamp limited participants; positive delta means the limited group
    # now pays less than its proportional share
    maximum = bill.maximum_limit or 0
    minimum = bill.minimum_limit or 0
    delta_balance = 0.0
    clamped = []
    for participant, due in zip(participants, unadjusted):
        if participant.limited:
            if maximum and due > maximum:
                delta_balance += due - maximum
                due = maximum
            elif minimum and due < minimum:
                delta_balance += due - minimum
                due = minimum
        clamped.append(due)

    unlimited_count = sum(1 for p in participants if not p.limited)
    if math.isclose(delta_balance, 0.0, abs_tol=1e-9):
        delta_balance = 0.0
    elif unlimited_count == 0:
        raise NoUnlimitedParticipantsError(
            f"Limits leave {delta_balance:.2f} unallocated and every participant is limited."
        )

    logger.debug("Total gross %.2f, delta balance %.2f over %d unlimited participants",
                 total_gross, delta_balance, unlimited_count)

    # 4. Spread the delta over everyone who is not limited
    results = []
    for index, participant in enumerate(participants):
        adjusted = clamped[index]
        if not participant.limited:
            adjusted += delta_balance / unlimited_count
        results.append(AllocationResult(
            participant=participant,
            gross_monthly_income=gross_incomes[index],
            percentage_of_total=percentages[index],
            amount_due=unadjusted[index],
            adjusted_due=adjusted,
        ))

    if not all(math.isfinite(r.adjusted_due) for r in results):
        raise IncomeOverflowError("Adjusted shares are too large to represent.")

    return Allocation(results=results, total_gross=total_gross)
