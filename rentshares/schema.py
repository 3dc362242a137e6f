# rentshares/schema.py
import math
import re
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, BeforeValidator, Field, StrictBool, StringConstraints
from pydantic import ValidationError
from pydantic_core import PydanticCustomError

from rentshares.allocation import BillParameters, HourlyIncome, Participant, SalaryIncome

HOURS_PER_WEEK = 24 * 7
INCOME_TYPES = ("hourly", "salary")

SETTINGS_STEP = "settings"
PARTICIPANTS_STEP = "participants"

DEFAULT_FORM = {
    "amount": 0,
    "maximumLimit": 600,
    "minimumLimit": 200,
    "participants": [
        {
            "name": "Participant 1",
            "incomeType": "salary",
            "limited": False,
            "annualSalary": 30000,
        },
        {
            "name": "Participant 2",
            "incomeType": "hourly",
            "limited": False,
            "hourlyRate": 15,
            "hoursPerWeek": 40,
        },
    ],
}

# Same grammar a browser accepts for a decimal number typed into a text field
_NUMBER_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# (field, pydantic error type) -> message shown next to the input; a None
# error type matches every error on that field
_MESSAGES = {
    ("amount", "greater_than"): "Bill amount must be greater than zero.",
    ("minimumLimit", "greater_than_equal"): "Minimum limit cannot be negative.",
    ("maximumLimit", "greater_than_equal"): "Maximum limit cannot be negative.",
    ("participants", None): "At least one participant is required.",
    ("name", None): "Name is required.",
    ("limited", "bool_type"): "Expected boolean.",
    ("incomeType", None): "Invalid income type. Expected 'hourly' | 'salary'.",
    ("hourlyRate", "greater_than"): "Hourly rate must be greater than zero.",
    ("hoursPerWeek", "greater_than"): "Hours worked per week must be greater than zero.",
    ("hoursPerWeek", "less_than"): "There are only 168 hours in a week...",
    ("annualSalary", "greater_than"): "Annual salary must be greater than zero.",
}

_GENERIC_MESSAGES = {
    "missing": "Required",
    "model_type": "Expected object.",
    "model_attributes_type": "Expected object.",
}


class FormValidationError(ValueError):
    """Carries one ``{"field", "message", "step"}`` entry per bad field."""

    def __init__(self, errors):
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))
        self.errors = errors

    @property
    def step(self):
        # The wizard goes back to the earliest step holding an error
        steps = {e["step"] for e in self.errors}
        return SETTINGS_STEP if SETTINGS_STEP in steps else PARTICIPANTS_STEP


def coerce_number(value):
    """Coerce a form value to a float the way the browser form does.

    Empty values count as zero; anything that is not a finite decimal number
    is rejected.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _NUMBER_PATTERN.fullmatch(text):
            value = float(text)
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            value = float(value)
        except OverflowError:
            value = math.inf
    if isinstance(value, float) and math.isfinite(value):
        return value
    raise PydanticCustomError("nan", "Expected number, received nan")


FormNumber = Annotated[float, BeforeValidator(coerce_number)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class HourlyParticipant(BaseModel):
    name: Name
    limited: StrictBool = False
    income_type: Literal["hourly"] = Field(alias="incomeType")
    hourly_rate: FormNumber = Field(alias="hourlyRate", gt=0)
    hours_per_week: FormNumber = Field(alias="hoursPerWeek", gt=0, lt=HOURS_PER_WEEK)

    def to_participant(self):
        income = HourlyIncome(hourly_rate=self.hourly_rate, hours_per_week=self.hours_per_week)
        return Participant(name=self.name, income=income, limited=self.limited)


class SalaryParticipant(BaseModel):
    name: Name
    limited: StrictBool = False
    income_type: Literal["salary"] = Field(alias="incomeType")
    annual_salary: FormNumber = Field(alias="annualSalary", gt=0)

    def to_participant(self):
        income = SalaryIncome(annual_salary=self.annual_salary)
        return Participant(name=self.name, income=income, limited=self.limited)


ParticipantForm = Annotated[
    Union[HourlyParticipant, SalaryParticipant],
    Field(discriminator="income_type"),
]


class BillForm(BaseModel):
    amount: FormNumber = Field(gt=0)
    minimum_limit: FormNumber = Field(0.0, alias="minimumLimit", ge=0)
    maximum_limit: FormNumber = Field(0.0, alias="maximumLimit", ge=0)
    participants: List[ParticipantForm] = Field(min_length=1)

    def to_bill(self):
        return BillParameters(
            amount=self.amount,
            minimum_limit=self.minimum_limit,
            maximum_limit=self.maximum_limit,
        )


def default_form():
    return {
        **DEFAULT_FORM,
        "participants": [dict(p) for p in DEFAULT_FORM["participants"]],
    }


def new_participant(index):
    """Blank entry appended by "Add Participant"; ``index`` is zero based."""
    return {
        "name": f"Participant {index + 1}",
        "incomeType": "salary",
        "limited": False,
        "annualSalary": 0,
    }


def _form_error(error):
    # Discriminated unions put the tag in the location; drop it
    loc = [part for part in error["loc"] if part not in INCOME_TYPES]
    if error["type"] in ("union_tag_invalid", "union_tag_not_found"):
        loc.append("incomeType")

    leaf = loc[-1] if loc else ""
    if isinstance(leaf, int):
        leaf = ""
    message = (
        _MESSAGES.get((leaf, error["type"]))
        or _MESSAGES.get((leaf, None))
        or _GENERIC_MESSAGES.get(error["type"])
        or error["msg"]
    )
    step = PARTICIPANTS_STEP if loc and loc[0] == "participants" else SETTINGS_STEP
    return {"field": ".".join(str(part) for part in loc), "message": message, "step": step}


def parse_bill(payload):
    """Validate raw form values and build the engine's typed inputs.

    Returns ``(BillParameters, participants)``. Every offending field is
    reported at once through :class:`FormValidationError`.
    """
    try:
        form = BillForm.model_validate(payload)
    except ValidationError as e:
        raise FormValidationError([_form_error(error) for error in e.errors()]) from e

    return form.to_bill(), [p.to_participant() for p in form.participants]
