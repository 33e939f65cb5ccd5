"""Tests for derived catalog views and metadata."""

from __future__ import annotations

from unicatalog.config.policies import CatalogInfoPolicy, ListingPolicy
from unicatalog.entities.core import Degree, Faculty, University
from unicatalog.pipeline.statistics import compute_statistics
from unicatalog.pipeline.views import (
    build_metadata,
    filter_by_type,
    find_programs_by_aps,
    find_programs_by_faculty,
    get_university_programs,
    to_simplified_listing,
)


def sample_catalog() -> list[University]:
    return [
        University(
            id="uct",
            name="University of Cape Town",
            abbreviation="UCT",
            full_name="The University of Cape Town",
            type="Traditional University",
            logo="/logos/uct.svg",
            faculties=[
                Faculty(
                    name="Faculty of Commerce",
                    degrees=[
                        Degree(id="bcom", name="BCom", aps_requirement=35),
                        Degree(id="bbus", name="BBusSci", aps_requirement=42),
                    ],
                ),
                Faculty(name="Faculty of Law", degrees=[Degree(id="llb", aps_requirement=40)]),
            ],
        ),
        University(
            id="tut",
            name="Tshwane University of Technology",
            type="University of Technology",
            faculties=[
                Faculty(
                    name="Engineering",
                    degrees=[Degree(id="dip-eng", aps_requirement=24), Degree(id="no-aps")],
                )
            ],
        ),
        University(id="mystery", type="Specialized University"),
    ]


def test_filter_by_type_is_exact() -> None:
    catalog = sample_catalog()

    assert [u.id for u in filter_by_type(catalog, "Traditional University")] == ["uct"]
    assert filter_by_type(catalog, "traditional university") == []


def test_simplified_listing_uses_fallbacks() -> None:
    listing = to_simplified_listing(sample_catalog())

    uct, tut, mystery = listing
    assert uct.abbreviation == "UCT"
    assert uct.full_name == "The University of Cape Town"
    assert uct.logo == "/logos/uct.svg"
    assert tut.abbreviation == "TSH"
    assert tut.full_name == "Tshwane University of Technology"
    assert tut.logo == "/logos/universities/default.svg"
    assert mystery.name == "Unknown University"
    assert mystery.abbreviation == "UNK"
    assert mystery.full_name == "Unknown University"


def test_simplified_listing_respects_policy() -> None:
    policy = ListingPolicy(abbreviation_length=4, default_logo="/x.svg", unknown_name="?")

    listing = to_simplified_listing(sample_catalog(), policy)

    assert listing[1].abbreviation == "TSHW"
    assert listing[1].logo == "/x.svg"
    assert listing[2].name == "?"


def test_simplified_listing_payload_uses_camel_case() -> None:
    payload = to_simplified_listing(sample_catalog())[0].to_payload()

    assert payload == {
        "id": "uct",
        "name": "University of Cape Town",
        "abbreviation": "UCT",
        "fullName": "The University of Cape Town",
        "logo": "/logos/uct.svg",
    }


def test_metadata_breakdown_and_provenance() -> None:
    catalog = sample_catalog()
    policy = CatalogInfoPolicy(version="9.9.9", source_tag="unit-test", features=["APS"])

    metadata = build_metadata(catalog, compute_statistics(catalog), policy)

    assert metadata.total_universities == 3
    assert metadata.university_breakdown == {
        "Traditional University": 1,
        "University of Technology": 1,
        "Comprehensive University": 0,
        "Specialized University": 1,
    }
    assert metadata.program_statistics.total_programs == 5
    assert metadata.version == "9.9.9"
    assert metadata.source == "unit-test"
    assert metadata.features == ["APS"]
    assert metadata.last_updated.tzinfo is not None


def test_metadata_counts_unknown_types() -> None:
    catalog = [University(id="x", type="Private College")]

    metadata = build_metadata(catalog, compute_statistics(catalog))

    assert metadata.university_breakdown["Private College"] == 1


def test_get_university_programs() -> None:
    catalog = sample_catalog()

    assert [d.id for d in get_university_programs(catalog, "uct")] == ["bcom", "bbus", "llb"]
    assert get_university_programs(catalog, "missing") == []


def test_find_programs_by_aps_is_inclusive_and_skips_unknown() -> None:
    programs = find_programs_by_aps(sample_catalog(), 24, 40)

    assert [(p.id, p.university_id) for p in programs] == [
        ("bcom", "uct"),
        ("llb", "uct"),
        ("dip-eng", "tut"),
    ]
    assert programs[0].university == "University of Cape Town"


def test_find_programs_by_aps_defaults_upper_bound() -> None:
    programs = find_programs_by_aps(sample_catalog(), 41)

    assert [p.id for p in programs] == ["bbus"]


def test_find_programs_by_faculty_substring() -> None:
    programs = find_programs_by_faculty(sample_catalog(), "commerce")

    assert [p.id for p in programs] == ["bcom", "bbus"]
    assert all(p.university_id == "uct" for p in programs)
    assert find_programs_by_faculty(sample_catalog(), "Medicine") == []
