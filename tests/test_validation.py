"""Tests for the validation boundary that types raw catalog sources."""

from __future__ import annotations

import pytest

from unicatalog.entities.core import University
from unicatalog.pipeline.merger import merge_catalogs
from unicatalog.pipeline.validation import (
    INVALID_COLLECTION,
    INVALID_FIELD,
    MISSING_DEGREE_ID,
    MISSING_FACULTY_NAME,
    MISSING_UNIVERSITY_ID,
    NOT_A_MAPPING,
    CatalogSource,
    CatalogSourceError,
    validate_source,
    validate_sources,
)


def raw_university(**overrides) -> dict:
    payload = {
        "id": "ul",
        "name": "University of Limpopo",
        "abbreviation": "UL",
        "type": "Traditional University",
        "studentPopulation": 25000,
        "faculties": [
            {
                "id": "ul-humanities",
                "name": "Faculty of Humanities",
                "degrees": [
                    {
                        "id": "bed",
                        "name": "Bachelor of Education",
                        "apsRequirement": 24,
                        "careerProspects": ["Teacher"],
                        "subjects": [{"name": "English", "level": 4, "isRequired": True}],
                    }
                ],
            }
        ],
    }
    payload.update(overrides)
    return payload


def test_camel_case_records_are_typed() -> None:
    result = validate_sources([[raw_university()]])

    assert result.ok
    university = result.sources[0].universities[0]
    assert university.student_count == 25000
    degree = university.faculties[0].degrees[0]
    assert degree.aps_requirement == 24
    assert degree.career_prospects == ["Teacher"]
    assert degree.subjects[0].is_required is True


def test_missing_optional_collections_default_to_empty() -> None:
    result = validate_sources([[{"id": "bad"}, {"id": "sparse", "faculties": None}]])

    first, second = result.sources[0].universities
    assert first.faculties == []
    assert second.faculties == []
    assert result.skipped == []


def test_faculty_without_degrees_defaults_to_empty() -> None:
    result = validate_sources([[raw_university(faculties=[{"name": "Law"}])]])

    assert result.sources[0].universities[0].faculties[0].degrees == []


def test_university_without_id_is_skipped_with_diagnostic() -> None:
    source = CatalogSource(name="legacy", records=[{"name": "Nameless"}, raw_university()])

    result = validate_sources([source])

    assert [university.id for university in result.sources[0].universities] == ["ul"]
    assert len(result.skipped) == 1
    skipped = result.skipped[0]
    assert skipped.source == "legacy"
    assert skipped.reason == MISSING_UNIVERSITY_ID
    assert skipped.path == "[0]"
    assert skipped.details["name"] == "Nameless"


def test_blank_ids_count_as_missing() -> None:
    result = validate_sources([[{"id": "   "}]])

    assert result.sources[0].universities == ()
    assert result.skipped[0].reason == MISSING_UNIVERSITY_ID


def test_degree_without_id_is_skipped_but_siblings_survive() -> None:
    record = raw_university(
        faculties=[
            {
                "name": "Science",
                "degrees": [{"name": "No id"}, {"id": "bsc", "name": "BSc"}],
            }
        ]
    )

    result = validate_sources([[record]])

    faculty = result.sources[0].universities[0].faculties[0]
    assert [degree.id for degree in faculty.degrees] == ["bsc"]
    assert result.skipped[0].reason == MISSING_DEGREE_ID
    assert result.skipped[0].path == "[0].faculties[0].degrees[0]"


def test_faculty_without_name_is_skipped() -> None:
    record = raw_university(faculties=[{"id": "f1", "degrees": []}, {"name": "Law"}])

    result = validate_sources([[record]])

    assert [faculty.name for faculty in result.sources[0].universities[0].faculties] == ["Law"]
    assert result.skipped[0].reason == MISSING_FACULTY_NAME
    assert result.skipped[0].record_id == "f1"


def test_invalid_degree_field_resets_only_that_field() -> None:
    record = raw_university(
        faculties=[
            {
                "name": "Science",
                "degrees": [
                    {"id": "bad", "name": "BSc", "apsRequirement": "very high"},
                    {"id": "good"},
                ],
            }
        ]
    )

    result = validate_sources([[record]])

    degrees = result.sources[0].universities[0].faculties[0].degrees
    assert [d.id for d in degrees] == ["bad", "good"]
    assert degrees[0].name == "BSc"
    assert degrees[0].aps_requirement is None
    assert len(result.skipped) == 1
    diagnostic = result.skipped[0]
    assert diagnostic.reason == INVALID_FIELD
    assert diagnostic.record_id == "bad"
    assert diagnostic.path == "[0].faculties[0].degrees[0].aps_requirement"
    assert diagnostic.details["field"] == "aps_requirement"
    assert diagnostic.details["errors"]


def test_invalid_university_scalar_keeps_record_and_children() -> None:
    record = raw_university(
        studentCount="many",
        type=5,
        faculties=[{"name": "Law", "degrees": [{"id": "llb"}]}],
    )

    result = validate_sources([[record]])

    university = result.sources[0].universities[0]
    assert university.id == "ul"
    assert university.name == "University of Limpopo"
    assert university.student_count is None
    assert university.type == ""
    assert [f.name for f in university.faculties] == ["Law"]
    assert [d.id for d in university.faculties[0].degrees] == ["llb"]
    assert sorted(entry.details["field"] for entry in result.skipped) == ["student_count", "type"]
    assert {entry.reason for entry in result.skipped} == {INVALID_FIELD}


def test_out_of_range_numbers_are_accepted_as_given() -> None:
    record = raw_university(
        studentCount=-1,
        faculties=[
            {
                "name": "Law",
                "degrees": [{"id": "llb", "subjects": [{"name": "English", "level": 4.5}]}],
            }
        ],
    )

    result = validate_sources([[record]])

    assert result.ok
    university = result.sources[0].universities[0]
    assert university.student_count == -1
    assert university.faculties[0].degrees[0].subjects[0].level == 4.5


def test_invalid_faculty_field_keeps_faculty_and_degrees() -> None:
    record = raw_university(faculties=[{"name": "Law", "description": 7, "degrees": [{"id": "llb"}]}])

    result = validate_sources([[record]])

    faculty = result.sources[0].universities[0].faculties[0]
    assert faculty.description == ""
    assert [d.id for d in faculty.degrees] == ["llb"]
    assert result.skipped[0].reason == INVALID_FIELD
    assert result.skipped[0].path == "[0].faculties[0].description"


def test_field_reset_does_not_lose_data_after_merge() -> None:
    base = raw_university(faculties=[{"name": "Law", "degrees": [{"id": "llb"}]}])
    update = {
        "id": "ul",
        "studentCount": "unknown",
        "faculties": [{"name": "Law", "degrees": [{"id": "bcom"}]}],
    }

    result = validate_sources([[base], [update]])
    merged = merge_catalogs(result.universities)

    assert merged[0].student_count == 25000
    assert [d.id for d in merged[0].faculties[0].degrees] == ["llb", "bcom"]

def test_non_mapping_records_and_collections_are_reported() -> None:
    result = validate_sources([["not a record", raw_university(faculties="Science")]])

    reasons = [entry.reason for entry in result.skipped]
    assert reasons == [NOT_A_MAPPING, INVALID_COLLECTION]
    assert result.sources[0].universities[0].faculties == []


def test_typed_records_pass_through_as_copies() -> None:
    university = University(id="typed")

    result = validate_source([university])

    copied = result.sources[0].universities[0]
    assert copied == university
    assert copied is not university


def test_unnamed_sources_are_named_by_position() -> None:
    result = validate_sources([[], [{"faculties": []}]])

    assert [source.name for source in result.sources] == ["source[0]", "source[1]"]
    assert result.skipped[0].source == "source[1]"


@pytest.mark.parametrize("bad_source", [None, "universities", {"id": "x"}, 42])
def test_non_sequence_source_raises_with_source_name(bad_source) -> None:
    with pytest.raises(CatalogSourceError, match=r"'broken' \(position 1\)"):
        validate_sources([[], CatalogSource(name="broken", records=bad_source)])


def test_non_sequence_sources_argument_raises() -> None:
    with pytest.raises(CatalogSourceError):
        validate_sources(None)
