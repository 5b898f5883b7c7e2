"""
Error taxonomy for the agent search service.

Sub-search failures (ProviderError) are recoverable and turned into data by the
execution stage. Refinement and synthesis failures are fatal and reach the API
layer wrapped in AgentPipelineError.
"""


class WizardSearchError(Exception):
    """Base class for all service errors."""


class ConfigurationError(WizardSearchError):
    """Required credentials or settings are missing or invalid."""


class QueryValidationError(WizardSearchError):
    """The inbound query is missing or blank. Raised before any external call."""


class ProviderError(WizardSearchError):
    """The search provider call failed (HTTP status, transport, or malformed body)."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ModelError(WizardSearchError):
    """The text generation model call failed or returned no text."""


class RefinementError(WizardSearchError):
    """The refinement stage could not produce refined queries."""


class RefinementParseError(RefinementError):
    """The model's refinement output is not the expected JSON shape."""

    def __init__(self, reason: str, raw: str = ""):
        super().__init__(f"Could not parse refinement output: {reason}")
        self.reason = reason
        self.raw = raw


class SynthesisError(WizardSearchError):
    """The synthesis stage failed to produce a summary."""


class AgentPipelineError(WizardSearchError):
    """A fatal stage failure, tagged with the stage it happened in."""

    def __init__(self, stage: str, cause: Exception):
        super().__init__(f"Agent search failed during {stage}: {cause}")
        self.stage = stage
        self.cause = cause
