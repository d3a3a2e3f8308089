"""
Reporting Configuration Schema.

Defines the presentation order of ledger groups per statement section, the
balancing-figure captions and report formatting options.  Can be built from
defaults, a dict, or a YAML file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self

import yaml

from books_kernel.domain.classification import StatementSection
from books_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")


def _default_group_order() -> dict[str, tuple[str, ...]]:
    return {
        StatementSection.LIABILITY.value: (
            "Capital Account",
            "Loans (Liability)",
            "Secured Loans",
            "Unsecured Loans",
            "Current Liabilities",
            "Sundry Creditors",
            "Duties & Taxes",
            "Bank OD A/c",
            "Provisions",
            "Reserves & Surplus",
            "Suspense A/c",
        ),
        StatementSection.ASSET.value: (
            "Fixed Assets",
            "Investments",
            "Current Assets",
            "Sundry Debtors",
            "Stock-in-Hand",
            "Cash-in-Hand",
            "Bank Accounts",
            "Deposits (Asset)",
            "Loans & Advances (Asset)",
            "Misc. Expenses (Asset)",
        ),
        StatementSection.INCOME.value: (
            "Sales Accounts",
            "Direct Incomes",
            "Indirect Incomes",
        ),
        StatementSection.EXPENSE.value: (
            "Purchase Accounts",
            "Direct Expenses",
            "Indirect Expenses",
        ),
    }


@dataclass
class BalancingLabels:
    """Captions of the balancing figures."""

    balance_sheet_profit: str = "Profit for the Year"
    balance_sheet_loss: str = "Loss for the Year"
    net_profit: str = "Net Profit"
    net_loss: str = "Net Loss"


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls group ordering, captions and formatting.
    """

    # Fixed presentation order of group labels, keyed by section value
    group_order: dict[str, tuple[str, ...]] = field(
        default_factory=_default_group_order,
    )

    labels: BalancingLabels = field(default_factory=BalancingLabels)

    default_currency: str = "INR"

    # Company name shown on reports when none is supplied
    entity_name: str = "Company"

    # Rounding precision for display
    display_precision: int = 2

    # Zero-balance ledgers are listed unless this is False
    include_zero_balances: bool = True

    def __post_init__(self):
        if self.display_precision < 0:
            raise ValueError("display_precision cannot be negative")
        if len(self.default_currency) != 3:
            raise ValueError("default_currency must be a 3-letter ISO 4217 code")
        unknown = set(self.group_order) - {s.value for s in StatementSection}
        if unknown:
            raise ValueError(f"group_order has unknown sections: {sorted(unknown)}")
        self.group_order = {
            section: tuple(labels) for section, labels in self.group_order.items()
        }

    def order_for(self, section: StatementSection) -> tuple[str, ...]:
        """Priority list of group labels for a section (empty if unset)."""
        return self.group_order.get(section.value, ())

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from dictionary.  Missing sections keep their defaults."""
        data = dict(data)
        if "group_order" in data:
            order = _default_group_order()
            order.update(data["group_order"] or {})
            data["group_order"] = order
        if "labels" in data and isinstance(data["labels"], dict):
            data["labels"] = BalancingLabels(**data["labels"])
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Self:
        """
        Create config from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            ValueError: If the document is not a mapping.
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        logger.info("reporting_config_loading_from_yaml", extra={"path": str(path)})
        return cls.from_dict(data)
