from .context import InferenceContext
from .executor import InferenceExecutor
from .result import InferenceResult, TextResult, EmptyResult, TransportFailure, classify_payload
