from dataclasses import fields

import pytest

from src.integrations.contracts.interfaces import ContactSubmission
from src.intake.catalog import OptionCatalog
from src.intake.validation import FormValidationError, build_contact_submission, validate_selections


def _payload(**overrides):
    data = {
        "full_name": "Jane Q Public",
        "email": "jane@example.com",
        "area_of_expertise": [1, 2],
        "labels": [3],
        "segment_ids": ["seg_newsletter"],
        "employer": "  Acme  ",
    }
    data.update(overrides)
    return data


def test_valid_payload_builds_submission():
    submission = build_contact_submission(_payload())

    assert submission.full_name == "Jane Q Public"
    assert submission.employer == "Acme"
    assert submission.role == ""
    assert submission.area_of_expertise == [1, 2]
    assert submission.segment_ids == ["seg_newsletter"]


def test_camel_case_keys_are_accepted():
    submission = build_contact_submission(
        {
            "fullName": "Jane",
            "email": "jane@example.com",
            "areaOfExpertise": ["1"],
            "labels": [2, 2],
            "segmentIds": ["seg_a"],
            "linkedin": "https://linkedin.com/in/jane",
        }
    )

    assert submission.area_of_expertise == [1]
    assert submission.labels == [2]
    assert submission.linkedin == "https://linkedin.com/in/jane"


def test_missing_required_fields_are_all_reported():
    with pytest.raises(FormValidationError) as exc:
        build_contact_submission({"email": "not-an-email"})

    errors = exc.value.field_errors
    assert set(errors) == {"full_name", "email", "area_of_expertise", "labels", "segment_ids"}
    assert errors["email"] == "Email is not valid"


def test_empty_selection_is_rejected():
    with pytest.raises(FormValidationError) as exc:
        build_contact_submission(_payload(labels=[]))
    assert "labels" in exc.value.field_errors


def test_non_integer_dropdown_id_is_rejected():
    with pytest.raises(FormValidationError) as exc:
        build_contact_submission(_payload(area_of_expertise=["abc"]))
    assert "area_of_expertise" in exc.value.field_errors


def test_selections_checked_against_catalog():
    submission = build_contact_submission(_payload(labels=[3, 99]))
    catalog = OptionCatalog(expertise_ids={1, 2}, label_ids={3}, segment_ids={"seg_newsletter"})

    with pytest.raises(FormValidationError) as exc:
        validate_selections(submission, catalog)
    assert exc.value.field_errors == {"labels": "Unknown option id(s): 99"}


def test_unavailable_source_is_not_checked():
    submission = build_contact_submission(_payload(segment_ids=["seg_unknown"]))
    catalog = OptionCatalog(expertise_ids={1, 2}, label_ids={3}, segment_ids=None)

    validate_selections(submission, catalog)


def test_submission_carries_only_form_fields():
    assert [f.name for f in fields(ContactSubmission)] == [
        "full_name",
        "email",
        "area_of_expertise",
        "labels",
        "segment_ids",
        "employer",
        "role",
        "linkedin",
        "location",
        "notes",
    ]
