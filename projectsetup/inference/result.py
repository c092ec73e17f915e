from dataclasses import dataclass


@dataclass(frozen=True)
class TextResult:
    """The backend answered with non-empty text."""
    content: str


@dataclass(frozen=True)
class EmptyResult:
    """The backend answered, but with nothing usable.

    ``reason`` is ``"absent"`` for a missing or non-text payload and ``"blank"``
    for an empty string.
    """
    reason: str
    payload_type: str | None = None


@dataclass(frozen=True)
class TransportFailure:
    """The backend could not be reached or raised while answering."""
    cause: Exception
    model: str | None = None


InferenceResult = TextResult | EmptyResult | TransportFailure


def classify_payload(payload: object) -> TextResult | EmptyResult:
    if payload is None:
        return EmptyResult(reason="absent")
    if not isinstance(payload, str):
        return EmptyResult(reason="absent", payload_type=type(payload).__name__)
    if payload == "":
        return EmptyResult(reason="blank", payload_type="str")
    return TextResult(content=payload)
