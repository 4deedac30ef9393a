from __future__ import annotations

import pytest

from INJECTABLES.server.utils.services.parser import (
    InjectionTemplateRecord,
    build_dedup_key,
    extract_dose,
    extract_route,
    normalize_injection_name,
    parse_injection_term,
)


def test_parse_simple_product_term():
    record = parse_injection_term("Amoxicillin 500mg injection", "372687004")
    assert record == InjectionTemplateRecord(
        template_name="Amoxicillin 500mg",
        injection_name="Amoxicillin",
        generic_name="Amoxicillin",
        dose="500mg",
        route="IV/IM",
        frequency="As directed",
        duration="As directed",
        source_code="372687004",
    )


def test_dose_whitespace_is_removed():
    record = parse_injection_term("Insulin injection 100 IU / mL", "1")
    assert record.dose == "100IU/mL"
    assert record.injection_name == "Insulin"
    assert record.template_name == "Insulin 100IU/mL"


@pytest.mark.parametrize(
    "term, expected",
    [
        ("Ondansetron 4 mg/2 mL solution for injection", "4mg/2mL"),
        ("Benzathine penicillin 1.2 million units injection", "1.2millionunits"),
        ("Lidocaine 2% injection", "2%"),
        ("Heparin sodium injection", None),
    ],
)
def test_extract_dose_patterns(term, expected):
    assert extract_dose(term) == expected


@pytest.mark.parametrize(
    "term, expected",
    [
        ("Triamcinolone 40 mg intra-articular injection for im use", "Intra-articular"),
        ("Methylprednisolone intraarticular injection /IM", "Intra-articular"),
        ("Diclofenac 75 mg intramuscular injection", "IM"),
        ("Paracetamol 1 g intravenous infusion", "IV"),
        ("Enoxaparin 40 mg subcutaneous injection", "SC"),
        ("Bupivacaine 0.5% epidural injection", "Epidural"),
        ("Dextrose 5% infusion", "IV Infusion"),
        ("Ranibizumab intravitreal injection 10 mg/mL", "Intravitreal"),
        ("Amoxicillin 500mg injection", "IV/IM"),
    ],
)
def test_route_precedence(term, expected):
    assert extract_route(term) == expected


def test_specific_route_wins_over_generic_keyword():
    record = parse_injection_term(
        "Triamcinolone 40 mg intra-articular injection for im use", "1"
    )
    assert record.route == "Intra-articular"


def test_name_strips_parentheses_suffixes_and_dose():
    record = parse_injection_term(
        "Ceftriaxone (as sodium) 1 g powder for injection", "1"
    )
    assert record.injection_name == "Ceftriaxone"
    assert record.dose == "1g"
    assert record.template_name == "Ceftriaxone 1g"


def test_million_unit_residue_is_stripped_from_name():
    record = parse_injection_term("Penicillin G 1 million units injection", "1")
    assert record.injection_name == "Penicillin G"
    assert record.dose == "1millionunits"


def test_long_names_are_truncated_to_200_characters():
    long_name = "A" + "b" * 299
    record = parse_injection_term(f"{long_name} injection", "1")
    assert len(record.injection_name) == 200
    assert record.template_name == record.injection_name


def test_truncation_does_not_leave_trailing_whitespace():
    name = normalize_injection_name(("Abcd " * 50) + "injection")
    assert len(name) <= 200
    assert name == name.rstrip()
    assert name.endswith("Abcd")


def test_template_name_is_capped_at_250_characters():
    record = parse_injection_term(("Abcdefghij" * 20) + "x 500mg injection", "1")
    assert record.dose == "500mg"
    assert len(record.injection_name) == 200
    assert len(record.template_name) <= 250
    assert record.template_name.endswith("500mg")


def test_empty_name_falls_back_to_raw_term():
    record = parse_injection_term("500 mg injection", "1")
    assert record.injection_name == "500 mg injection"
    assert record.dose == "500mg"
    assert record.template_name == "500 mg injection 500mg"


def test_parse_is_deterministic():
    term = "Ondansetron 4 mg/2 mL solution for injection"
    assert parse_injection_term(term, "9") == parse_injection_term(term, "9")


def test_dedup_key_lowercases_name_and_dose():
    record = parse_injection_term("Insulin injection 100 IU / mL", "1")
    assert record.dedup_key == "insulin-100iu/ml"
    assert build_dedup_key("Heparin", None) == "heparin-"


def test_to_row_marks_templates_active():
    row = parse_injection_term("Amoxicillin 500mg injection", "42").to_row()
    assert row["is_active"] is True
    assert row["source_code"] == "42"
    assert row["template_name"] == "Amoxicillin 500mg"


def test_only_ascii_digits_form_a_dose():
    assert extract_dose("Amoxicillin \u0665\u0660\u0660mg injection") is None
    record = parse_injection_term("Amoxicillin \u0665\u0660\u0660mg injection", "1")
    assert record.dose is None
    assert record.template_name == record.injection_name
