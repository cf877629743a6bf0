import pytest

from intentelect.config.settings import ElectionSettings, ZeroSumPolicy
from intentelect.domain.exceptions import DegenerateInputError
from intentelect.domain.models import PredictionRecord
from intentelect.election.normalizer import normalize_contexts


def _record(confidences, included):
    return PredictionRecord.from_dict({
        "predictions": {
            ctx: {"confidence": conf, "intents": [], "oos": 0.0}
            for ctx, conf in confidences.items()
        },
        "includedContexts": included,
    })


@pytest.fixture
def settings() -> ElectionSettings:
    return ElectionSettings()


class TestNormalizeContexts:
    """Test context confidence normalization."""

    def test_included_contexts_sum_to_one(self, settings):
        record = _record({"a": 0.2, "b": 0.3, "c": 0.1, "d": 0.5}, ["a", "b", "c"])

        scores = {s.context: s.confidence for s in normalize_contexts(record, settings)}

        assert sum(scores[c] for c in ("a", "b", "c")) == pytest.approx(1.0)
        assert scores["a"] == pytest.approx(0.2 / 0.6)
        assert scores["b"] == pytest.approx(0.5)

    def test_excluded_contexts_are_rescaled_too(self, settings):
        record = _record({"a": 0.2, "b": 0.3, "d": 0.5}, ["a", "b"])

        scores = {s.context: s.confidence for s in normalize_contexts(record, settings)}

        assert scores["d"] == pytest.approx(1.0)

    def test_divisor_is_capped_at_one(self, settings):
        record = _record({"a": 0.8, "b": 0.7}, ["a", "b"])

        scores = {s.context: s.confidence for s in normalize_contexts(record, settings)}

        assert scores == {"a": 0.8, "b": 0.7}

    def test_order_follows_predictions(self, settings):
        record = _record({"z": 0.5, "a": 0.5}, ["z", "a"])

        assert [s.context for s in normalize_contexts(record, settings)] == ["z", "a"]


class TestZeroSumPolicy:
    """Test the zero total confidence policies."""

    def test_zero_weight_policy_gives_every_context_zero(self, settings):
        record = _record({"a": 0.0, "b": 0.0, "c": 0.4}, ["a", "b"])

        scores = normalize_contexts(record, settings)

        assert [s.confidence for s in scores] == [0.0, 0.0, 0.0]

    def test_no_included_contexts_counts_as_zero_sum(self, settings):
        record = _record({"a": 0.7}, [])

        scores = normalize_contexts(record, settings)

        assert scores[0].confidence == 0.0

    def test_fail_policy_raises(self):
        settings = ElectionSettings(zero_sum_policy=ZeroSumPolicy.FAIL)
        record = _record({"a": 0.0}, ["a"])

        with pytest.raises(DegenerateInputError) as exc_info:
            normalize_contexts(record, settings)

        assert exc_info.value.error_code == "DEGENERATE_INPUT"
        assert exc_info.value.context["included_contexts"] == ["a"]
        assert exc_info.value.context["election_stage"] == "normalization"

    def test_fail_policy_does_not_affect_positive_sums(self):
        settings = ElectionSettings(zero_sum_policy=ZeroSumPolicy.FAIL)
        record = _record({"a": 0.5}, ["a"])

        assert normalize_contexts(record, settings)[0].confidence == pytest.approx(1.0)
