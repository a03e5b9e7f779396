class ValidationError(ValueError):
    """Caller supplied input that cannot be turned into a PromptPay payload."""


class PayloadFormatError(ValidationError):
    """A payload string that does not decode as EMV TLV."""
