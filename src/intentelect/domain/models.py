"""Value types passed between the election stages."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple, Union, Mapping

from intentelect.domain.exceptions import InvalidInputError

NONE_LABEL = "none"  # reserved on the wire, never a real intent


class NoIntent:
    """Tagged "no intent / out of scope" label.

    There is a single instance, ``NO_INTENT``; it is only turned into the
    reserved string at the dict boundary.
    """

    _instance: Optional["NoIntent"] = None

    def __new__(cls) -> "NoIntent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_INTENT"

    def __str__(self) -> str:
        return NONE_LABEL

    def __reduce__(self):
        return (NoIntent, ())


NO_INTENT = NoIntent()

IntentLabel = Union[str, NoIntent]


def is_no_intent(label: IntentLabel) -> bool:
    return label is NO_INTENT


def parse_label(raw: Any) -> IntentLabel:
    """Map a wire label to an internal one."""
    if isinstance(raw, NoIntent):
        return raw
    if not isinstance(raw, str):
        raise InvalidInputError(
            f"intent label must be a string, got {type(raw).__name__}",
            field_name="label",
            field_value=raw,
        )
    return NO_INTENT if raw == NONE_LABEL else raw


def format_label(label: IntentLabel) -> str:
    """Map an internal label back to its wire form."""
    return NONE_LABEL if is_no_intent(label) else label


def _as_confidence(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(
            f"{field_name} must be a number",
            field_name=field_name,
            field_value=value,
        )
    return float(value)


@dataclass(frozen=True)
class IntentScore:
    """One raw intent entry emitted by a context classifier."""
    label: IntentLabel
    confidence: float
    slots: Tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IntentScore":
        slots = data.get("slots") or ()
        return cls(
            label=parse_label(data.get("label")),
            confidence=_as_confidence(data.get("confidence"), "intent.confidence"),
            slots=tuple(slots),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": format_label(self.label),
            "confidence": self.confidence,
            "slots": list(self.slots),
        }


@dataclass(frozen=True)
class ContextPrediction:
    """Raw prediction of one context classifier."""
    confidence: float
    intents: Tuple[IntentScore, ...] = ()
    oos: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ContextPrediction":
        return cls(
            confidence=_as_confidence(data.get("confidence"), "context.confidence"),
            intents=tuple(IntentScore.from_dict(i) for i in data.get("intents") or ()),
            oos=_as_confidence(data.get("oos", 0.0), "context.oos"),
        )

    def find_intent(self, label: IntentLabel) -> Optional[IntentScore]:
        for intent in self.intents:
            if intent.label == label:
                return intent
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "confidence": self.confidence,
            "intents": [i.to_dict() for i in self.intents],
            "oos": self.oos,
        }


@dataclass(frozen=True)
class PredictionRecord:
    """Everything the upstream stage emits for one utterance."""
    predictions: Mapping[str, ContextPrediction] = field(default_factory=dict)
    included_contexts: frozenset = frozenset()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PredictionRecord":
        """Parse ``{"predictions": {...}, "includedContexts": [...]}``."""
        raw_predictions = data.get("predictions") or {}
        if not isinstance(raw_predictions, Mapping):
            raise InvalidInputError(
                "predictions must be a mapping of context to prediction",
                field_name="predictions",
            )
        included = data.get("includedContexts", data.get("included_contexts")) or ()
        if isinstance(included, str) or not isinstance(included, (list, tuple, set, frozenset)):
            raise InvalidInputError(
                "includedContexts must be a list of context names",
                field_name="includedContexts",
                field_value=included,
            )
        for ctx in included:
            if not isinstance(ctx, str) or not ctx:
                raise InvalidInputError(
                    "includedContexts must hold non-empty context names",
                    field_name="includedContexts",
                    field_value=ctx,
                )
        return cls(
            predictions={
                ctx: ContextPrediction.from_dict(pred) for ctx, pred in raw_predictions.items()
            },
            included_contexts=frozenset(included),
        )

    def oos_for(self, context: str) -> Optional[float]:
        pred = self.predictions.get(context)
        return pred.oos if pred is not None else None

    def is_included(self, context: str) -> bool:
        return context in self.included_contexts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predictions": {ctx: p.to_dict() for ctx, p in self.predictions.items()},
            "includedContexts": sorted(self.included_contexts),
        }


@dataclass(frozen=True)
class ContextScore:
    """Normalized weight of a context."""
    context: str
    confidence: float


@dataclass(frozen=True)
class IntentCandidate:
    """A candidate inside a single context, before global weighting."""
    label: IntentLabel
    confidence: float


@dataclass(frozen=True)
class CandidatePrediction:
    """Globally comparable election candidate."""
    name: IntentLabel
    context: str
    confidence: float

    @property
    def is_no_intent(self) -> bool:
        return is_no_intent(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": format_label(self.name),
            "context": self.context,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ElectionResult:
    """Outcome of electing one prediction record."""
    intent: Optional[CandidatePrediction]
    intents: Tuple[CandidatePrediction, ...] = ()
    ambiguous: bool = False
    slots: Optional[Tuple[Any, ...]] = None

    @property
    def elected_name(self) -> Optional[str]:
        return format_label(self.intent.name) if self.intent else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the downstream mapping; ``slots`` only when resolved."""
        out: Dict[str, Any] = {
            "intent": self.intent.to_dict() if self.intent else None,
            "intents": [c.to_dict() for c in self.intents],
            "ambiguous": self.ambiguous,
        }
        if self.slots is not None:
            out["slots"] = list(self.slots)
        return out

