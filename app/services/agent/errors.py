"""Errors raised by the reply providers."""


class VoiceRelayError(Exception):
    """Base class for call-handling errors."""


class CompletionError(VoiceRelayError):
    """The completion provider did not produce a reply."""


class CompletionTimeout(CompletionError):
    """The completion request exceeded its timeout."""


class CompletionProviderError(CompletionError):
    """The completion request failed or returned no candidates."""


class SynthesisError(VoiceRelayError):
    """Speech synthesis failed; there is no audio to play."""
