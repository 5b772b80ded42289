"""
Lexora Lexicon Module
=====================
Fixed vocabulary used by the classification engine and the chat responder.

All tables are immutable and loaded once at import time. Order matters for
the document type rules and the chat triggers: the first match wins.
"""

from types import MappingProxyType
from typing import NamedTuple


# Single terms; three or more distinct hits mark a document as legal
LEGAL_KEYWORDS: tuple[str, ...] = (
    "agreement",
    "contract",
    "lease",
    "terms and conditions",
    "whereas",
    "party",
    "covenant",
    "liability",
    "indemnify",
    "jurisdiction",
    "governing law",
    "breach",
    "termination",
    "clause",
    "provision",
    "shall",
    "hereby",
    "legal",
    "attorney",
    "court",
    "dispute",
    "arbitration",
    "damages",
)

# Any single hit marks a document as legal
LEGAL_PHRASES: tuple[str, ...] = (
    "terms of service",
    "privacy policy",
    "end user license",
    "rental agreement",
    "employment contract",
    "non-disclosure agreement",
    "service agreement",
    "purchase agreement",
    "loan agreement",
    "partnership agreement",
)

# Terms counted towards the confidence score
CONFIDENCE_INDICATORS: tuple[str, ...] = (
    "whereas",
    "hereby",
    "shall",
    "party",
    "agreement",
    "contract",
    "terms",
    "conditions",
    "liability",
    "breach",
    "termination",
)


class DocumentTypeRule(NamedTuple):
    """
    A document type rule.

    ``require_all`` switches the rule from "any term present" to
    "every term present".
    """
    label: str
    terms: tuple[str, ...]
    require_all: bool = False

    def matches(self, text_lower: str) -> bool:
        check = all if self.require_all else any
        return check(term in text_lower for term in self.terms)


DEFAULT_DOCUMENT_TYPE = "Legal Document"

DOCUMENT_TYPE_RULES: tuple[DocumentTypeRule, ...] = (
    DocumentTypeRule("Rental Agreement", ("rental", "lease")),
    DocumentTypeRule("Employment Contract", ("employment", "job")),
    DocumentTypeRule("Service Agreement", ("service", "agreement"), require_all=True),
    DocumentTypeRule("Privacy Policy", ("privacy", "policy"), require_all=True),
    DocumentTypeRule("Terms of Service", ("terms", "service"), require_all=True),
    DocumentTypeRule("Purchase Agreement", ("purchase", "sale")),
    DocumentTypeRule("Loan Agreement", ("loan", "credit")),
    DocumentTypeRule("Non-Disclosure Agreement", ("non-disclosure", "nda")),
)

# Trigger substring -> canned answer, evaluated in insertion order
CHAT_RESPONSES = MappingProxyType({
    "what is the rent": (
        "According to your rental agreement, the monthly rent is $2,500, due on the "
        "first day of each month. There's a 5-day grace period before late fees apply."
    ),
    # Keys must be lower-case; a mixed-case "can I have pets" would never match
    # and pets questions would get the default answer.
    "can i have pets": (
        "The document mentions a pet policy that allows cats and dogs with an additional "
        "deposit. However, I'd need to see the full pet clause to give you complete "
        "details about restrictions and fees."
    ),
    "how much notice": (
        "For lease termination, you need to provide written notice at least 60 days "
        "before the lease expiration date. This is due to the automatic renewal clause "
        "in your agreement."
    ),
    "security deposit": (
        "Your security deposit is $2,500, which equals one month's rent. The landlord "
        "can use this to cover damages beyond normal wear and tear, unpaid rent, or "
        "cleaning costs when you move out."
    ),
    "landlord entry": (
        "Your landlord can enter the property with 24-hour written notice for "
        "inspections, repairs, or showings. However, the agreement doesn't specify "
        "exact time windows, which could be problematic."
    ),
    "liability": (
        "There's a concerning liability limitation clause that makes the landlord not "
        "responsible for injuries or property damage unless they were grossly negligent. "
        "This is quite broad and you should consider renter's insurance."
    ),
    "maintenance": (
        "The landlord is responsible for major repairs like plumbing, electrical, "
        "heating, and structural issues. You're responsible for minor maintenance and "
        "keeping the property clean."
    ),
    "automatic renewal": (
        "Yes, your lease automatically renews for another year unless either you or the "
        "landlord gives 60 days written notice. Set a reminder 90 days before expiration "
        "to avoid being locked in unintentionally."
    ),
})

DEFAULT_CHAT_RESPONSE = (
    "I can help you understand your legal document. Try asking about specific topics "
    "like rent, security deposit, pet policy, notice requirements, or liability terms. "
    "You can also ask about any clause you'd like me to explain in simpler terms."
)

# Starter questions offered by the chat widget, in display order
SUGGESTED_QUESTIONS = (
    "What is the rent amount?",
    "Can I have pets?",
    "How much notice do I need to give?",
    "What about the security deposit?",
    "When can the landlord enter?",
    "What are my maintenance responsibilities?",
)
