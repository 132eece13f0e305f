"""
Command catalog - the static command vocabulary, consumed once at startup.

Used to build the CapabilityRegistry and to publish the slash commands to
the chat platform.
"""

from finbot.application.routing.registry import CapabilityRegistry, CommandRegistration
from finbot.domain.ports.services import (
    BudgetService,
    CarService,
    ContributionService,
    HousingService,
    InvestmentService,
    PaycheckService,
    SideGigService,
    TransactionService,
)

COMMANDS: tuple[CommandRegistration, ...] = (
    CommandRegistration(
        name="car",
        capability=CarService,
        label="cars",
        default_operation="count",
        description="Car-related commands",
        icon=":red_car:",
    ),
    CommandRegistration(
        name="budget",
        capability=BudgetService,
        label="budget lines",
        default_operation="count",
        description="Budget-related commands",
        icon=":bar_chart:",
    ),
    CommandRegistration(
        name="sidegig",
        capability=SideGigService,
        label="side gigs",
        default_operation="count",
        description="Side gig commands",
        icon=":hammer_and_wrench:",
    ),
    CommandRegistration(
        name="housing",
        capability=HousingService,
        label="housing records",
        default_operation="count",
        description="Housing commands",
        icon=":house:",
    ),
    CommandRegistration(
        name="contribution",
        capability=ContributionService,
        label="contributions",
        default_operation="count",
        description="Retirement and savings contribution commands",
        icon=":moneybag:",
    ),
    CommandRegistration(
        name="paycheck",
        capability=PaycheckService,
        label="paychecks",
        default_operation="count",
        description="Paycheck commands",
        icon=":money_with_wings:",
    ),
    CommandRegistration(
        name="investment",
        capability=InvestmentService,
        label="investments",
        default_operation="count",
        description="Investment commands",
        icon=":chart_with_upwards_trend:",
    ),
    CommandRegistration(
        name="transaction",
        capability=TransactionService,
        label="transactions",
        default_operation="count",
        description="Transaction commands",
        icon=":receipt:",
    ),
)


def build_registry(commands=COMMANDS) -> CapabilityRegistry:
    return CapabilityRegistry(commands)
