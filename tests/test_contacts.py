"""Unit tests for multi-contact slot detection."""

from importbox.services.import_service import (
    CONTACT_SLOT_FIELDS,
    MAX_CONTACTS_PER_LEAD,
    create_empty_contact_slot,
    detect_contact_slots,
)


def _by_index(headers: list[str]) -> dict[int, dict[str, str | None]]:
    return {slot.slot_index: slot.fields for slot in detect_contact_slots(headers)}


# =============================================================================
# Primary slot
# =============================================================================


def test_no_contact_headers_gives_empty_primary_slot() -> None:
    """Test a lone empty primary slot is emitted when nothing matches."""
    slots = detect_contact_slots(["Company", "Website"])
    assert len(slots) == 1
    assert slots[0].slot_index == 0
    assert slots[0].slot_label == "Primary Contact"
    assert slots[0].mapped_count == 0
    assert set(slots[0].fields) == set(CONTACT_SLOT_FIELDS)


def test_generic_headers_fill_primary_slot() -> None:
    """Test bare contact headers land in slot 0."""
    slots = _by_index(["Company", "First Name", "Last Name", "Email", "Phone Number", "Job Title"])
    assert slots[0] == {
        "first_name": "First Name",
        "last_name": "Last Name",
        "email": "Email",
        "phone": "Phone Number",
        "title": "Job Title",
    }


def test_contact_prefixed_generic_headers() -> None:
    """Test "Contact Email" style headers count as generic."""
    slots = _by_index(["Contact First Name", "Contact Email"])
    assert slots[0]["first_name"] == "Contact First Name"
    assert slots[0]["email"] == "Contact Email"


def test_explicit_primary_beats_generic_header() -> None:
    """Test an explicit primary header is kept over a bare one in either order."""
    assert _by_index(["Primary Email", "Email"])[0]["email"] == "Primary Email"
    assert _by_index(["Email", "Primary Email"])[0]["email"] == "Primary Email"


# =============================================================================
# Secondary and numbered slots
# =============================================================================


def test_primary_and_secondary_slots() -> None:
    """Test primary/main and secondary/other prefixes pick slots 0 and 1."""
    slots = detect_contact_slots(
        ["Company", "Primary First Name", "Primary Email", "Secondary First Name", "Other Phone"]
    )
    assert [slot.slot_index for slot in slots] == [0, 1]
    assert [slot.slot_label for slot in slots] == ["Primary Contact", "Contact 2"]
    assert slots[0].fields["first_name"] == "Primary First Name"
    assert slots[0].fields["email"] == "Primary Email"
    assert slots[1].fields["first_name"] == "Secondary First Name"
    assert slots[1].fields["phone"] == "Other Phone"


def test_numbered_slots() -> None:
    """Test contact_N_field and field_N headers map to slot N-1."""
    slots = _by_index(["contact_1_email", "contact_2_first_name", "contact_2_email", "email_3", "Phone 3"])
    assert slots[0]["email"] == "contact_1_email"
    assert slots[1]["first_name"] == "contact_2_first_name"
    assert slots[1]["email"] == "contact_2_email"
    assert slots[2]["email"] == "email_3"
    assert slots[2]["phone"] == "Phone 3"


def test_slot_numbers_are_clamped() -> None:
    """Test slot numbers beyond the maximum land in the last slot."""
    slots = detect_contact_slots(["email_9"])
    assert slots[-1].slot_index == MAX_CONTACTS_PER_LEAD - 1
    assert slots[-1].fields["email"] == "email_9"
    assert len(slots) <= MAX_CONTACTS_PER_LEAD


def test_slots_are_ordered() -> None:
    """Test slots come back sorted by index."""
    slots = detect_contact_slots(["email_3", "Secondary Email"])
    assert [slot.slot_index for slot in slots] == [0, 1, 2]
    assert slots[0].mapped_count == 0


def test_slot_gaps_are_filled_with_empty_slots() -> None:
    """Test each slot index equals its position in the list."""
    slots = detect_contact_slots(["Company", "contact_3_first_name", "contact_3_email"])
    assert [slot.slot_index for slot in slots] == [0, 1, 2]
    assert [slot.slot_label for slot in slots] == ["Primary Contact", "Contact 2", "Contact 3"]
    assert slots[1] == create_empty_contact_slot(1)
    assert slots[2].fields["first_name"] == "contact_3_first_name"
    assert slots[2].fields["email"] == "contact_3_email"
    assert all(slot.slot_index == position for position, slot in enumerate(slots))


def test_each_header_used_once() -> None:
    """Test a second header for an already filled slot field is ignored."""
    slots = _by_index(["Secondary Email", "Other Email"])
    assert slots[1]["email"] == "Secondary Email"
    assert "Other Email" not in slots[0].values()


# =============================================================================
# Helpers
# =============================================================================


def test_create_empty_contact_slot() -> None:
    """Test empty slots carry a label and all fields unmapped."""
    slot = create_empty_contact_slot(2)
    assert slot.slot_index == 2
    assert slot.slot_label == "Contact 3"
    assert slot.fields == {field: None for field in CONTACT_SLOT_FIELDS}
