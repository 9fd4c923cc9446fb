"""debtplan: debt repayment planning engine.

Projects month-by-month amortization for a set of debts, summarizes them and
evaluates extra-payment and refinancing scenarios.
"""

from debtplan.engine.amortization import (
    PeriodResult,
    ScheduleRow,
    advance,
    amortization_schedule,
    amortizing_payment,
    payoff_months,
    total_interest,
)
from debtplan.engine.errors import (
    DebtNotFoundError,
    DebtPlanError,
    InvalidInputError,
    InvalidRateError,
    NonConvergenceError,
)
from debtplan.engine.models import Debt, DebtCategory, DebtStatus, Payment
from debtplan.engine.payments import record_payment
from debtplan.engine.scheduler import MonthSnapshot, Schedule, simulate
from debtplan.evaluation.scenarios import (
    DebtScenario,
    RefinanceScenario,
    evaluate_extra_payment,
    evaluate_refinance,
)
from debtplan.evaluation.summary import DebtSummary, summarize
from debtplan.strategies import AvalancheStrategy, PayoffStrategy, SnowballStrategy, get_strategy

__all__ = [
    "advance",
    "amortization_schedule",
    "amortizing_payment",
    "payoff_months",
    "total_interest",
    "PeriodResult",
    "ScheduleRow",
    "DebtPlanError",
    "InvalidInputError",
    "InvalidRateError",
    "DebtNotFoundError",
    "NonConvergenceError",
    "Debt",
    "DebtCategory",
    "DebtStatus",
    "Payment",
    "record_payment",
    "simulate",
    "Schedule",
    "MonthSnapshot",
    "evaluate_extra_payment",
    "evaluate_refinance",
    "DebtScenario",
    "RefinanceScenario",
    "summarize",
    "DebtSummary",
    "PayoffStrategy",
    "AvalancheStrategy",
    "SnowballStrategy",
    "get_strategy",
]
