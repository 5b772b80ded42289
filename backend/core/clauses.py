"""
Lexora Clause Module
====================
Clause records and the canned clause sets returned for legal documents.

Clause content is not derived from the uploaded text. Legal documents
receive the standard template set; the results page preview receives the
shorter preview set.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class RiskLevel(str, Enum):
    """Risk level categories."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class Clause:
    """A single interpreted clause with its risk annotation."""
    id: str
    title: str
    category: str
    original_text: str
    plain_english: str
    risk_level: RiskLevel
    risk_reason: str
    suggestions: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "originalText": self.original_text,
            "plainEnglish": self.plain_english,
            "riskLevel": self.risk_level.value,
            "riskReason": self.risk_reason,
            "suggestions": list(self.suggestions),
        }


RENT_PAYMENT = Clause(
    id="1",
    title="Rent Payment Terms",
    category="Financial",
    original_text=(
        "Tenant agrees to pay rent in the amount of $2,500.00 per month, due on the first "
        "day of each month. Late payments will incur a fee of $75.00 after a 5-day grace period."
    ),
    plain_english=(
        "You must pay $2,500 rent by the 1st of each month. If you're more than 5 days "
        "late, you'll be charged an extra $75 fee."
    ),
    risk_level=RiskLevel.LOW,
    risk_reason="Standard rent terms with reasonable grace period and late fee.",
)

SECURITY_DEPOSIT = Clause(
    id="2",
    title="Security Deposit",
    category="Financial",
    original_text=(
        "Tenant shall provide a security deposit of $2,500.00 prior to occupancy. This "
        "deposit may be used by Landlord to cover damages beyond normal wear and tear, "
        "unpaid rent, or cleaning costs upon termination."
    ),
    plain_english=(
        "You need to pay a $2,500 security deposit before moving in. The landlord can use "
        "this money to fix damages you cause, cover unpaid rent, or pay for cleaning when "
        "you move out."
    ),
    risk_level=RiskLevel.LOW,
    risk_reason="Standard security deposit terms that protect both parties.",
)

AUTOMATIC_RENEWAL = Clause(
    id="3",
    title="Automatic Renewal",
    category="Termination",
    original_text=(
        "This lease shall automatically renew for successive one-year terms unless either "
        "party provides written notice of termination at least 60 days prior to the "
        "expiration date."
    ),
    plain_english=(
        "Your lease will automatically continue for another year unless you or your "
        "landlord give written notice 60 days before it expires."
    ),
    risk_level=RiskLevel.MEDIUM,
    risk_reason="Automatic renewal can trap tenants who forget to give notice in time.",
    suggestions=(
        "Set a calendar reminder 90 days before lease expiration",
        "Consider negotiating for a shorter notice period (30 days)",
    ),
)

MAINTENANCE = Clause(
    id="4",
    title="Maintenance Responsibilities",
    category="Maintenance",
    original_text=(
        "Landlord shall be responsible for all major repairs and maintenance of the "
        "property, including but not limited to plumbing, electrical, heating, and "
        "structural issues. Tenant is responsible for minor maintenance and keeping the "
        "property clean."
    ),
    plain_english=(
        "The landlord will fix big problems like plumbing, electrical issues, heating, and "
        "structural damage. You're responsible for small maintenance tasks and keeping the "
        "place clean."
    ),
    risk_level=RiskLevel.LOW,
    risk_reason="Clear division of maintenance responsibilities favoring the tenant.",
)

ENTRY_RIGHTS = Clause(
    id="5",
    title="Entry Rights",
    category="Privacy",
    original_text=(
        "Landlord reserves the right to enter the premises at any reasonable time with "
        "24-hour written notice for inspections, repairs, or showing to prospective "
        "tenants or buyers."
    ),
    plain_english=(
        "Your landlord can enter your apartment with 24 hours written notice for "
        "inspections, repairs, or to show it to potential renters or buyers."
    ),
    risk_level=RiskLevel.MEDIUM,
    risk_reason=(
        "Entry rights are reasonable but 'any reasonable time' is vague and could be "
        "interpreted broadly."
    ),
    suggestions=(
        "Request specific time windows for entry (e.g., 9 AM - 5 PM)",
        "Clarify what constitutes 'reasonable time'",
    ),
)

LIABILITY_LIMITATION = Clause(
    id="6",
    title="Liability Limitation",
    category="Liability",
    original_text=(
        "Landlord shall not be liable for any personal injury or property damage occurring "
        "on the premises, regardless of cause, except where such injury or damage results "
        "from Landlord's gross negligence or willful misconduct."
    ),
    plain_english=(
        "The landlord won't be responsible if you get hurt or your stuff gets damaged on "
        "the property, unless they were extremely careless or did something intentionally "
        "wrong."
    ),
    risk_level=RiskLevel.HIGH,
    risk_reason=(
        "Very broad liability waiver that could leave tenant without recourse for "
        "legitimate claims."
    ),
    suggestions=(
        "Negotiate to limit this clause to exclude landlord negligence",
        "Consider renter's insurance to protect your personal property",
        "Request landlord maintain adequate property insurance",
    ),
)

# Returned for every document classified as legal
STANDARD_CLAUSES: tuple[Clause, ...] = (
    RENT_PAYMENT,
    SECURITY_DEPOSIT,
    AUTOMATIC_RENEWAL,
    MAINTENANCE,
    ENTRY_RIGHTS,
    LIABILITY_LIMITATION,
)

# Shown on the results page for the demo document; ids are renumbered
PREVIEW_CLAUSES: tuple[Clause, ...] = (
    RENT_PAYMENT,
    SECURITY_DEPOSIT,
    AUTOMATIC_RENEWAL,
    replace(LIABILITY_LIMITATION, id="4"),
)


def get_clause(clauses: tuple[Clause, ...], clause_id: str) -> Clause | None:
    """Find a clause by id."""
    for clause in clauses:
        if clause.id == clause_id:
            return clause
    return None
