"""Import service package for parsing CSV files into typed CRM and finance records."""

from .constants import (
    CONTACT_FIELDS,
    CONTACT_SLOT_FIELDS,
    ENTITY_PATTERNS,
    LEAD_FIELDS,
    MAX_CONTACTS_PER_LEAD,
    OPPORTUNITY_FIELDS,
    REQUIRED_FIELDS,
    TASK_FIELDS,
    TRANSACTION_FIELDS,
)
from .contacts import create_empty_contact_slot, detect_contact_slots, slot_label
from .converters import (
    normalize_email,
    normalize_opportunity_status,
    parse_amount,
    parse_date,
    parse_probability,
)
from .mapping import (
    create_empty_mapping,
    detect_column_mapping,
    detect_contact_mapping,
    detect_lead_mapping,
    detect_opportunity_mapping,
    detect_task_mapping,
    detect_transaction_mapping,
    score_header,
    validate_contact_mapping,
    validate_lead_mapping,
    validate_mapping,
    validate_opportunity_mapping,
    validate_task_mapping,
    validate_transaction_mapping,
)
from .parsers import decode_csv_bytes, parse_csv, parse_csv_text, split_csv_line
from .processor import preview_import
from .transformers import (
    transform_rows,
    transform_to_contacts,
    transform_to_leads,
    transform_to_opportunities,
    transform_to_tasks,
    transform_to_transactions,
)

__all__ = [
    # Constants
    "CONTACT_FIELDS",
    "CONTACT_SLOT_FIELDS",
    "ENTITY_PATTERNS",
    "LEAD_FIELDS",
    "MAX_CONTACTS_PER_LEAD",
    "OPPORTUNITY_FIELDS",
    "REQUIRED_FIELDS",
    "TASK_FIELDS",
    "TRANSACTION_FIELDS",
    # Parsers
    "decode_csv_bytes",
    "parse_csv",
    "parse_csv_text",
    "split_csv_line",
    # Converters
    "normalize_email",
    "normalize_opportunity_status",
    "parse_amount",
    "parse_date",
    "parse_probability",
    # Mapping
    "create_empty_mapping",
    "detect_column_mapping",
    "detect_transaction_mapping",
    "detect_lead_mapping",
    "detect_contact_mapping",
    "detect_opportunity_mapping",
    "detect_task_mapping",
    "score_header",
    "validate_mapping",
    "validate_transaction_mapping",
    "validate_lead_mapping",
    "validate_contact_mapping",
    "validate_opportunity_mapping",
    "validate_task_mapping",
    # Contact slots
    "create_empty_contact_slot",
    "detect_contact_slots",
    "slot_label",
    # Transformers
    "transform_rows",
    "transform_to_transactions",
    "transform_to_leads",
    "transform_to_contacts",
    "transform_to_opportunities",
    "transform_to_tasks",
    # Processor
    "preview_import",
]
