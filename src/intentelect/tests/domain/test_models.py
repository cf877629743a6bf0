import pickle

import pytest

from intentelect.domain.exceptions import InvalidInputError
from intentelect.domain.models import (
    NO_INTENT,
    NONE_LABEL,
    CandidatePrediction,
    ContextPrediction,
    ElectionResult,
    IntentScore,
    NoIntent,
    PredictionRecord,
    format_label,
    is_no_intent,
    parse_label,
)


class TestNoIntent:
    """Test the tagged no-intent label."""

    def test_is_a_singleton(self):
        assert NoIntent() is NO_INTENT
        assert pickle.loads(pickle.dumps(NO_INTENT)) is NO_INTENT

    def test_is_not_a_string(self):
        assert NO_INTENT != NONE_LABEL
        assert not isinstance(NO_INTENT, str)

    def test_boundary_mapping(self):
        assert parse_label("none") is NO_INTENT
        assert parse_label("book_flight") == "book_flight"
        assert format_label(NO_INTENT) == "none"
        assert format_label("book_flight") == "book_flight"
        assert is_no_intent(NO_INTENT)
        assert not is_no_intent("none")

    def test_non_string_label_is_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_label(42)


class TestPredictionRecord:
    """Test parsing of upstream records."""

    def test_from_dict(self):
        record = PredictionRecord.from_dict({
            "predictions": {
                "travel": {
                    "confidence": 0.7,
                    "intents": [
                        {"label": "book_flight", "confidence": 0.8, "slots": [{"name": "dest"}]},
                        {"label": "none", "confidence": 0.2},
                    ],
                    "oos": 0.1,
                },
            },
            "includedContexts": ["travel"],
        })

        pred = record.predictions["travel"]
        assert pred.confidence == 0.7
        assert pred.oos == 0.1
        assert pred.intents[0] == IntentScore("book_flight", 0.8, ({"name": "dest"},))
        assert pred.intents[1].label is NO_INTENT
        assert pred.intents[1].slots == ()
        assert record.included_contexts == frozenset({"travel"})

    def test_snake_case_included_contexts_alias(self):
        record = PredictionRecord.from_dict({
            "predictions": {"a": {"confidence": 1, "intents": []}},
            "included_contexts": ["a"],
        })

        assert record.is_included("a")
        assert record.predictions["a"].oos == 0.0

    def test_missing_confidence_is_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            PredictionRecord.from_dict({"predictions": {"a": {"intents": []}}})

        assert exc_info.value.context["field_name"] == "context.confidence"

    def test_string_included_contexts_are_rejected(self):
        with pytest.raises(InvalidInputError):
            PredictionRecord.from_dict({"predictions": {}, "includedContexts": "a"})

    @pytest.mark.parametrize("included", [[["a"]], ["a", 1], [{"a": 1}], 5])
    def test_malformed_included_contexts_are_rejected(self, included):
        with pytest.raises(InvalidInputError) as exc_info:
            PredictionRecord.from_dict({"predictions": {}, "includedContexts": included})

        assert exc_info.value.context["field_name"] == "includedContexts"

    def test_oos_for_unknown_context_is_none(self):
        record = PredictionRecord(predictions={"a": ContextPrediction(confidence=1.0, oos=0.3)})

        assert record.oos_for("a") == 0.3
        assert record.oos_for("global") is None

    def test_to_dict_round_trips(self):
        data = {
            "predictions": {
                "a": {
                    "confidence": 0.5,
                    "intents": [{"label": "x", "confidence": 0.5, "slots": []}],
                    "oos": 0.0,
                },
            },
            "includedContexts": ["a"],
        }

        assert PredictionRecord.from_dict(data).to_dict() == data


class TestElectionResult:
    """Test the downstream representation."""

    def test_to_dict_without_slots(self):
        cand = CandidatePrediction(NO_INTENT, "global", 1.0)
        result = ElectionResult(intent=cand, intents=(cand,))

        assert result.to_dict() == {
            "intent": {"name": "none", "context": "global", "confidence": 1.0},
            "intents": [{"name": "none", "context": "global", "confidence": 1.0}],
            "ambiguous": False,
        }
        assert result.elected_name == "none"

    def test_to_dict_with_slots(self):
        cand = CandidatePrediction("x", "a", 0.9)
        result = ElectionResult(intent=cand, intents=(cand,), slots=({"name": "dest"},))

        assert result.to_dict()["slots"] == [{"name": "dest"}]

    def test_is_immutable(self):
        result = ElectionResult(intent=None)

        with pytest.raises(AttributeError):
            result.ambiguous = True
        assert result.elected_name is None
