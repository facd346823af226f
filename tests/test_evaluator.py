import pytest

from autothesis.evaluator import baseline_evaluation, parse_evaluator_output


def _sample():
    return {
        "improved": True,
        "score": 11.2,
        "rubric": {
            "evidence_coverage": 12.0,
            "source_quality": 9.0,
            "balance": 8.0,
            "specificity": -2.0,
            "decision_usefulness": 7.5,
        },
        "reasoning": "More balanced.",
        "continue": True,
    }


def test_parses_and_clamps_evaluator_output():
    output = parse_evaluator_output(_sample())
    assert output.score == 10.0
    assert output.rubric.evidence_coverage == 10.0
    assert output.rubric.specificity == 0.0
    assert output.rubric.decision_usefulness == 7.5
    assert output.should_continue


def test_to_dict_round_trip():
    output = parse_evaluator_output(_sample())
    again = parse_evaluator_output(output.to_dict())
    assert again == output
    assert output.to_dict()["continue"] is True


@pytest.mark.parametrize("missing", ["improved", "score", "rubric", "reasoning", "continue"])
def test_missing_field_rejected(missing):
    data = _sample()
    del data[missing]
    with pytest.raises(ValueError):
        parse_evaluator_output(data)


def test_non_number_score_rejected():
    data = _sample()
    data["score"] = "high"
    with pytest.raises(ValueError):
        parse_evaluator_output(data)


def test_baseline_evaluation():
    baseline = baseline_evaluation()
    assert baseline.score == 6.0
    assert baseline.improved and baseline.should_continue
    assert baseline.rubric.balance == 6.0