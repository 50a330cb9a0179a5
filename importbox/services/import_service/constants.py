"""Constants for the CSV import service.

Pattern tables map each canonical field to an ordered tuple of regexes, most
specific first. A match at position ``i`` scores ``1 - i * 0.1``.
"""

import re
from types import MappingProxyType

from importbox.schemas.import_schemas import EntityType

MAX_CONTACTS_PER_LEAD = 5

CONFIDENCE_STEP = 0.1

CURRENCY_SYMBOLS = "$€£¥₹"

PRIMARY_SLOT_LABEL = "Primary Contact"

# Separator between words in a header: "first name", "first_name", "first-name"
HEADER_SEPARATOR = r"[\s_\-.]*"
_SEP = HEADER_SEPARATOR


def _patterns(*sources: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(source.replace("_SEP_", _SEP), re.IGNORECASE) for source in sources)


# =============================================================================
# Transactions
# =============================================================================

TRANSACTION_PATTERNS = MappingProxyType({
    "date": _patterns(
        r"^date$",
        r"^transaction_SEP_date$",
        r"^(posted|posting|post)_SEP_date$",
        r"^trans_SEP_date$",
        r"^(value|booking|effective)_SEP_date$",
        r"date",
    ),
    "amount": _patterns(
        r"^amount$",
        r"^(transaction|trans)_SEP_amount$",
        r"^total$",
        r"^(sum|value)$",
        r"^amount_SEP_\(?[a-z]{3}\)?$",
        r"^(?!.*(debit|credit)).*amount",
    ),
    "description": _patterns(
        r"^description$",
        r"^desc$",
        r"^(transaction|trans)_SEP_(description|details)$",
        r"^(merchant|payee|vendor)$",
        r"^(memo|narrative|details|particulars)$",
        r"^(merchant|payee)_SEP_name$",
        r"description|merchant|payee",
    ),
    "notes": _patterns(
        r"^notes?$",
        r"^(reference|ref)$",
        r"^comments?$",
        r"^remarks?$",
        r"^(reference|ref)_SEP_(no|number|#)$",
        r"note|comment|remark",
    ),
    "debit": _patterns(
        r"^debit$",
        r"^debits?_SEP_amount$",
        r"^(withdrawal|withdrawals)$",
        r"^(money|paid)_SEP_out$",
        r"debit|withdrawal",
    ),
    "credit": _patterns(
        r"^credit$",
        r"^credits?_SEP_amount$",
        r"^(deposit|deposits)$",
        r"^(money|paid)_SEP_in$",
        r"credit|deposit",
    ),
})

TRANSACTION_FIELDS = tuple(TRANSACTION_PATTERNS)

# =============================================================================
# Leads
# =============================================================================

LEAD_PATTERNS = MappingProxyType({
    "name": _patterns(
        r"^company$",
        r"^company_SEP_name$",
        r"^(organization|organisation|org)(_SEP_name)?$",
        r"^(account|business|lead)_SEP_name$",
        r"^name$",
        r"^(account|business|lead)$",
    ),
    "website": _patterns(
        r"^website$",
        r"^(url|domain)$",
        r"^(company|web)_SEP_(site|url|domain)$",
        r"^web$",
        r"website|homepage",
    ),
    "industry": _patterns(
        r"^industry$",
        r"^(sector|vertical)$",
        r"industry|sector",
    ),
    "status": _patterns(
        r"^status$",
        r"^lead_SEP_status$",
        r"^(stage|lead_SEP_stage)$",
    ),
    "notes": _patterns(
        r"^notes?$",
        r"^(description|comments?)$",
        r"note|comment",
    ),
    "address": _patterns(
        r"^address$",
        r"^(street|street_SEP_address|address_SEP_(line_SEP_)?1)$",
        r"^(company|billing|mailing)_SEP_address$",
    ),
    "city": _patterns(
        r"^city$",
        r"^(town|locality)$",
        r"city",
    ),
    "state": _patterns(
        r"^state$",
        r"^(province|region|state_SEP_/?_SEP_province)$",
        r"state|province",
    ),
    "country": _patterns(
        r"^country$",
        r"^country_SEP_(name|code)$",
        r"country",
    ),
    "postal_code": _patterns(
        r"^(postal_SEP_code|zip|zip_SEP_code)$",
        r"^(postcode|post_SEP_code)$",
        r"postal|zip",
    ),
    "source": _patterns(
        r"^source$",
        r"^lead_SEP_source$",
        r"^(channel|origin|referral)$",
        r"source",
    ),
})

LEAD_FIELDS = tuple(LEAD_PATTERNS)

# =============================================================================
# Contacts, opportunities, tasks
# =============================================================================

_LEAD_NAME_PATTERNS = _patterns(
    r"^company$",
    r"^company_SEP_name$",
    r"^lead(_SEP_name)?$",
    r"^(account|organization|organisation)(_SEP_name)?$",
    r"^business(_SEP_name)?$",
    r"company|organi[sz]ation",
)

CONTACT_PATTERNS = MappingProxyType({
    "lead_name": _LEAD_NAME_PATTERNS,
    "first_name": _patterns(
        r"^first_SEP_name$",
        r"^(first|given_SEP_name|fname|forename)$",
        r"^contact_SEP_first_SEP_name$",
        r"first_SEP_name",
    ),
    "last_name": _patterns(
        r"^last_SEP_name$",
        r"^(last|surname|family_SEP_name|lname)$",
        r"^contact_SEP_last_SEP_name$",
        r"last_SEP_name|surname",
    ),
    "email": _patterns(
        r"^e_SEP_mail$",
        r"^e_SEP_mail_SEP_address$",
        r"^(work|contact)_SEP_e_SEP_mail$",
        r"e_SEP_mail",
    ),
    "phone": _patterns(
        r"^phone$",
        r"^phone_SEP_(number|no)$",
        r"^(mobile|cell|telephone|tel)$",
        r"^(work|contact|mobile)_SEP_phone$",
        r"phone|mobile",
    ),
    "title": _patterns(
        r"^title$",
        r"^job_SEP_title$",
        r"^(position|role)$",
        r"title",
    ),
    "notes": _patterns(
        r"^notes?$",
        r"^comments?$",
        r"note|comment",
    ),
})

CONTACT_FIELDS = tuple(CONTACT_PATTERNS)

OPPORTUNITY_PATTERNS = MappingProxyType({
    "lead_name": _LEAD_NAME_PATTERNS,
    "name": _patterns(
        r"^(deal|opportunity)_SEP_name$",
        r"^(deal|opportunity)$",
        r"^name$",
        r"^(deal|opportunity)_SEP_title$",
        r"^title$",
    ),
    "value": _patterns(
        r"^value$",
        r"^(deal|opportunity)_SEP_(value|amount|size)$",
        r"^amount$",
        r"^(revenue|price)$",
        r"value|amount",
    ),
    "probability": _patterns(
        r"^probability$",
        r"^(win|close)_SEP_(probability|%|chance)$",
        r"^(likelihood|confidence)$",
        r"probability|%",
    ),
    "expected_close_date": _patterns(
        r"^(expected_SEP_)?close_SEP_date$",
        r"^closing_SEP_date$",
        r"^(expected_SEP_close|close)$",
        r"close",
    ),
    "status": _patterns(
        r"^status$",
        r"^(deal|opportunity)_SEP_status$",
        r"^stage$",
        r"status|stage",
    ),
    "notes": _patterns(
        r"^notes?$",
        r"^(description|comments?)$",
        r"note|comment",
    ),
})

OPPORTUNITY_FIELDS = tuple(OPPORTUNITY_PATTERNS)

TASK_PATTERNS = MappingProxyType({
    "lead_name": _LEAD_NAME_PATTERNS,
    "title": _patterns(
        r"^title$",
        r"^task$",
        r"^task_SEP_(title|name)$",
        r"^(subject|summary)$",
        r"^name$",
    ),
    "description": _patterns(
        r"^description$",
        r"^(details|body)$",
        r"^task_SEP_description$",
        r"description|details",
    ),
    "due_date": _patterns(
        r"^due_SEP_date$",
        r"^(due|deadline)$",
        r"^due_SEP_(on|by)$",
        r"due|deadline",
    ),
    "notes": _patterns(
        r"^notes?$",
        r"^comments?$",
        r"note|comment",
    ),
})

TASK_FIELDS = tuple(TASK_PATTERNS)

ENTITY_PATTERNS = MappingProxyType({
    EntityType.TRANSACTION: TRANSACTION_PATTERNS,
    EntityType.LEAD: LEAD_PATTERNS,
    EntityType.CONTACT: CONTACT_PATTERNS,
    EntityType.OPPORTUNITY: OPPORTUNITY_PATTERNS,
    EntityType.TASK: TASK_PATTERNS,
})

# Required fields and the message shown when each is unmapped.
# Transactions need an amount source as well, checked separately.
REQUIRED_FIELDS = MappingProxyType({
    EntityType.TRANSACTION: (
        ("date", "Date column is required"),
        ("description", "Description column is required"),
    ),
    EntityType.LEAD: (
        ("name", "Company name column is required"),
    ),
    EntityType.CONTACT: (
        ("lead_name", "Company/Lead Name column is required"),
        ("first_name", "First Name column is required"),
    ),
    EntityType.OPPORTUNITY: (
        ("lead_name", "Company/Lead Name column is required"),
        ("name", "Deal Name column is required"),
    ),
    EntityType.TASK: (
        ("lead_name", "Company/Lead Name column is required"),
        ("title", "Task Title column is required"),
    ),
})

TRANSACTION_AMOUNT_ERROR = "Amount column (or Debit/Credit columns) is required"

# =============================================================================
# Multi-contact slots (leads)
# =============================================================================

# Header fragments for each contact sub-field, without anchors
CONTACT_SLOT_FIELD_PATTERNS = MappingProxyType({
    "first_name": rf"(?:first{_SEP}name|fname|first|given{_SEP}name)",
    "last_name": rf"(?:last{_SEP}name|lname|last|surname|family{_SEP}name)",
    "email": rf"(?:e{_SEP}mail(?:{_SEP}address)?)",
    "phone": rf"(?:phone(?:{_SEP}(?:number|no))?|mobile|cell|tel|telephone)",
    "title": rf"(?:(?:job{_SEP})?title|position|role)",
})

CONTACT_SLOT_FIELDS = tuple(CONTACT_SLOT_FIELD_PATTERNS)

PRIMARY_SLOT_WORDS = r"(?:primary|main)"
SECONDARY_SLOT_WORDS = r"(?:secondary|other|alternate|alt)"

# Opportunity status words mapped onto the three pipeline states
OPPORTUNITY_STATUS_ALIASES = MappingProxyType({
    "won": "won",
    "closed won": "won",
    "closed-won": "won",
    "closed_won": "won",
    "win": "won",
    "lost": "lost",
    "closed lost": "lost",
    "closed-lost": "lost",
    "closed_lost": "lost",
    "loss": "lost",
    "active": "active",
    "open": "active",
    "in progress": "active",
    "pending": "active",
    "new": "active",
})
