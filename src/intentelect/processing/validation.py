"""Validation of raw prediction records before they are parsed."""

import logging
import math
from typing import Any, Mapping

from intentelect.domain.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class InputValidator:
    """Validates upstream prediction records."""

    @staticmethod
    def validate_record(data: Any) -> None:
        """
        Check the shape and numeric ranges of one record.

        Raises:
            InvalidInputError: on the first problem found
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Prediction record must be an object, got {type(data).__name__}",
                field_name="record",
            )

        predictions = data.get("predictions")
        if predictions is None:
            raise InvalidInputError(
                "Prediction record has no 'predictions'",
                field_name="predictions",
            ).add_suggestion("Provide a mapping of context name to prediction")
        if not isinstance(predictions, Mapping):
            raise InvalidInputError(
                "'predictions' must map context names to predictions",
                field_name="predictions",
            )

        included = data.get("includedContexts", data.get("included_contexts", []))
        if isinstance(included, str) or not isinstance(included, (list, tuple, set, frozenset)):
            raise InvalidInputError(
                "'includedContexts' must be a list of context names",
                field_name="includedContexts",
                field_value=included,
            )

        for ctx in included:
            if not isinstance(ctx, str) or not ctx:
                raise InvalidInputError(
                    "'includedContexts' must hold non-empty context names",
                    field_name="includedContexts",
                    field_value=ctx,
                )

        for ctx, pred in predictions.items():
            InputValidator._validate_context(ctx, pred)

        unknown = sorted(set(included) - set(predictions))
        if unknown:
            logger.warning(f"Included contexts without predictions: {unknown}")

    @staticmethod
    def _validate_context(ctx: Any, pred: Any) -> None:
        if not isinstance(ctx, str) or not ctx:
            raise InvalidInputError(
                "Context names must be non-empty strings",
                field_name="context",
                field_value=ctx,
            )
        if not isinstance(pred, Mapping):
            raise InvalidInputError(
                f"Prediction of context '{ctx}' must be an object",
                field_name=f"predictions.{ctx}",
            )

        InputValidator._validate_probability(pred.get("confidence"), f"predictions.{ctx}.confidence")
        InputValidator._validate_probability(pred.get("oos", 0.0), f"predictions.{ctx}.oos")

        intents = pred.get("intents", [])
        if not isinstance(intents, (list, tuple)):
            raise InvalidInputError(
                f"Intents of context '{ctx}' must be a list",
                field_name=f"predictions.{ctx}.intents",
            )
        for i, intent in enumerate(intents):
            path = f"predictions.{ctx}.intents[{i}]"
            if not isinstance(intent, Mapping):
                raise InvalidInputError(f"{path} must be an object", field_name=path)
            label = intent.get("label")
            if not isinstance(label, str) or not label:
                raise InvalidInputError(
                    f"{path}.label must be a non-empty string",
                    field_name=f"{path}.label",
                    field_value=label,
                )
            InputValidator._validate_probability(intent.get("confidence"), f"{path}.confidence")
            slots = intent.get("slots", [])
            if slots is not None and not isinstance(slots, (list, tuple)):
                raise InvalidInputError(
                    f"{path}.slots must be a list",
                    field_name=f"{path}.slots",
                )

    @staticmethod
    def _validate_probability(value: Any, field_name: str) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(
                f"{field_name} must be a number",
                field_name=field_name,
                field_value=value,
            )
        if math.isnan(value) or not 0.0 <= value <= 1.0:
            raise InvalidInputError(
                f"{field_name} must lie in [0, 1]",
                field_name=field_name,
                field_value=value,
            )
