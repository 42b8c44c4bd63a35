import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from domain.schemas import ExpertRating, dedupe_ratings
from infrastructure.io import load_analyses, load_expert_ratings, load_extraction_validations, read_records

RATING = {
    "analysisId": "a1",
    "expertName": " Dana ",
    "leadScore": 80,
    "icpMatchPercentage": 75,
    "category": " Hot ",
    "componentScores": [{"name": "Industry Fit", "score": 85}],
    "blindRating": True,
}


def test_read_records_json_list_and_wrapper(tmp_path: Path) -> None:
    plain = tmp_path / "plain.json"
    plain.write_text(json.dumps([{"id": "a1"}]), encoding="utf-8")
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"records": [{"id": "a2"}]}), encoding="utf-8")

    assert read_records(plain) == [{"id": "a1"}]
    assert read_records(wrapped) == [{"id": "a2"}]


def test_read_records_jsonl_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "rows.jsonl"
    path.write_text('{"id": "a1"}\n\n{"id": "a2"}\n', encoding="utf-8")
    assert [r["id"] for r in read_records(path)] == ["a1", "a2"]


def test_read_records_rejects_unknown_suffix(tmp_path: Path) -> None:
    path = tmp_path / "rows.csv"
    path.write_text("id\na1\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported file format"):
        read_records(path)


def test_read_records_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_records(tmp_path / "missing.json")


def test_camel_case_rating_is_normalized(tmp_path: Path) -> None:
    path = tmp_path / "ratings.json"
    path.write_text(json.dumps([RATING]), encoding="utf-8")

    (rating,) = load_expert_ratings(path)
    assert rating.analysis_id == "a1"
    assert rating.expert_name == "Dana"
    assert rating.category == "hot"
    assert rating.blind_rating is True
    assert rating.component("Industry Fit").score == 85
    assert rating.component("Budget") is None


def test_rating_rejects_unknown_category_and_empty_components() -> None:
    with pytest.raises(ValidationError):
        ExpertRating.model_validate({**RATING, "category": "lukewarm"})
    with pytest.raises(ValidationError):
        ExpertRating.model_validate({**RATING, "componentScores": []})


def test_analyses_and_extraction_validations(tmp_path: Path) -> None:
    analyses = tmp_path / "analyses.json"
    analyses.write_text(
        json.dumps(
            [
                {
                    "id": "a1",
                    "leadScore": 72,
                    "icpMatchPercentage": 64,
                    "componentScores": [{"name": "Industry Fit", "score": 80, "weight": 0.3}],
                    "isArchived": True,
                }
            ]
        ),
        encoding="utf-8",
    )
    extraction = tmp_path / "extraction.jsonl"
    extraction.write_text(
        json.dumps(
            {
                "companyId": "c1",
                "expertName": "Dana",
                "fieldValidations": {"industry": {"status": "partial", "correctedValue": "SaaS"}},
            }
        )
        + "\n",
        encoding="utf-8",
    )

    (analysis,) = load_analyses(analyses)
    assert analysis.is_archived is True
    assert analysis.component("Industry Fit").weight == 0.3

    (validation,) = load_extraction_validations(extraction)
    assert validation.field_validations["industry"].status == "partial"
    assert validation.field_validations["industry"].corrected_value == "SaaS"


def test_dedupe_keeps_last_submission() -> None:
    first = ExpertRating.model_validate(RATING)
    other = ExpertRating.model_validate({**RATING, "analysisId": "a2"})
    resubmitted = ExpertRating.model_validate({**RATING, "leadScore": 55, "category": "warm"})

    deduped = dedupe_ratings([first, other, resubmitted])
    assert len(deduped) == 2
    assert deduped[0].lead_score == 55
    assert deduped[0].category == "warm"
    assert deduped[1].analysis_id == "a2"
