import pytest

from domain.evaluation.tables import (
    calculate_extraction_metrics,
    extraction_metrics_table,
    extraction_metrics_table_and_save,
)
from domain.schemas import ExtractionValidation


def test_one_of_each_status() -> None:
    validations = [
        {"field_validations": {"industry": {"status": "correct"}}},
        {"field_validations": {"industry": {"status": "partial"}}},
        {"field_validations": {"industry": {"status": "incorrect"}}},
    ]
    [industry] = calculate_extraction_metrics(validations)
    assert industry.field == "industry"
    assert (industry.correct, industry.partial, industry.incorrect) == (1, 1, 1)
    assert industry.total == 3
    assert industry.accuracy == pytest.approx(1 / 3)


def test_fields_are_discovered_from_data() -> None:
    validations = [
        ExtractionValidation(
            company_id="c1",
            expert_name="Dana",
            field_validations={"industry": {"status": "correct"}, "location": {"status": "correct"}},
        ),
        ExtractionValidation.model_validate(
            {
                "companyId": "c2",
                "expertName": "Dana",
                "fieldValidations": {"location": {"status": "incorrect"}, "techStack": {"status": "partial"}},
            }
        ),
    ]
    metrics = {m.field: m for m in calculate_extraction_metrics(validations)}
    assert set(metrics) == {"industry", "location", "techStack"}
    assert metrics["location"].accuracy == pytest.approx(0.5)
    assert metrics["techStack"].accuracy == 0


def test_camel_case_mapping_and_unknown_status() -> None:
    validations = [{"fieldValidations": {"domain": {"status": "unsure"}}}]
    [domain] = calculate_extraction_metrics(validations)
    assert domain.total == 0
    assert domain.accuracy == 0


def test_empty_input() -> None:
    assert calculate_extraction_metrics([]) == []
    assert list(extraction_metrics_table([]).columns) == [
        "Field",
        "Correct",
        "Incorrect",
        "Partial",
        "Total",
        "Accuracy (%)",
    ]


def test_table_lists_weakest_fields_first(tmp_path) -> None:
    validations = [
        {"field_validations": {"industry": {"status": "correct"}, "location": {"status": "incorrect"}}},
        {"field_validations": {"industry": {"status": "correct"}, "location": {"status": "correct"}}},
    ]
    metrics = calculate_extraction_metrics(validations)
    df = extraction_metrics_table(metrics)
    assert list(df["Field"]) == ["location", "industry"]
    assert list(df["Accuracy (%)"]) == [50.0, 100.0]

    out = extraction_metrics_table_and_save(metrics, tmp_path, "fields.csv")
    assert out == tmp_path / "fields.csv"
    assert out.read_text(encoding="utf-8").splitlines()[0] == "Field,Correct,Incorrect,Partial,Total,Accuracy (%)"
