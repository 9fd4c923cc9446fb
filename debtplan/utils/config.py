"""YAML configuration loader and dataclasses for payoff plans."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from debtplan.engine.amortization import DEFAULT_MAX_MONTHS
from debtplan.engine.errors import InvalidInputError
from debtplan.engine.models import Debt


def _resolve_config_path(path: str | Path) -> Path:
    """Resolve a config path, anchoring relative paths to the project root.

    The project root is identified as the nearest ancestor directory that
    contains ``pyproject.toml``.  If the file exists as-is (e.g. an absolute
    path or the CWD happens to be the project root already), it is returned
    unchanged.
    """
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p

    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            # Missing files still resolve here so open() reports the full path
            return parent / p

    return p


@dataclass
class DebtConfig:
    """Configuration for a single debt."""

    id: str
    name: str = "Debt"
    category: str = "other"
    status: str = "active"
    current_balance: float = 0.0
    original_balance: float | None = None
    interest_rate: float = 0.0
    minimum_payment: float = 0.0
    due_date: int = 1

    def to_debt(self) -> Debt:
        return Debt(
            id=self.id,
            name=self.name,
            category=self.category,
            status=self.status,
            current_balance=self.current_balance,
            original_balance=self.original_balance,
            interest_rate=self.interest_rate,
            minimum_payment=self.minimum_payment,
            due_date=self.due_date,
        )


@dataclass
class PlanConfig:
    """Full payoff plan: debts plus simulation settings."""

    debts: list[DebtConfig] = field(default_factory=list)
    strategy: str = "avalanche"
    extra_payment: float = 0.0
    max_months: int = DEFAULT_MAX_MONTHS

    @property
    def num_debts(self) -> int:
        return len(self.debts)

    def to_debts(self) -> list[Debt]:
        return [dc.to_debt() for dc in self.debts]


def _parse_debt(raw: dict[str, Any], index: int) -> DebtConfig:
    if "id" not in raw:
        raise InvalidInputError(f"Debt #{index + 1} in config has no 'id'")
    original = raw.get("original_balance")
    try:
        return DebtConfig(
            id=str(raw["id"]),
            name=str(raw.get("name", raw["id"])),
            category=str(raw.get("category", "other")),
            status=str(raw.get("status", "active")),
            current_balance=float(raw.get("current_balance", 0.0)),
            original_balance=None if original is None else float(original),
            interest_rate=float(raw.get("interest_rate", 0.0)),
            minimum_payment=float(raw.get("minimum_payment", 0.0)),
            # Left as written; Debt rejects non-integral days
            due_date=raw.get("due_date", 1),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Debt {raw['id']!r} in config: {exc}") from exc


def load_plan_config(path: str | Path) -> PlanConfig:
    """Load a PlanConfig from a YAML file.

    Args:
        path: Path to a YAML config file (e.g., configs/portfolio/household.yaml).

    Returns:
        Populated PlanConfig instance.
    """
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    debts = [_parse_debt(d, i) for i, d in enumerate(raw.get("debts", []))]

    try:
        return PlanConfig(
            debts=debts,
            strategy=str(raw.get("strategy", "avalanche")),
            extra_payment=float(raw.get("extra_payment", 0.0)),
            max_months=int(raw.get("max_months", DEFAULT_MAX_MONTHS)),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid plan settings in {path}: {exc}") from exc
