# // ecg_synthesizer/exceptions.py
"""Exception hierarchy for the ECG synthesizer."""


class ECGSynthesisError(Exception):
    """Base exception for all synthesizer errors."""


class ConfigurationError(ECGSynthesisError, ValueError):
    """Raised when a configuration (or a change to one) fails validation."""


class UnknownLeadError(ECGSynthesisError, LookupError):
    """Raised when a lead identifier is not one of the 12 standard leads."""

    def __init__(self, lead, valid_leads) -> None:
        self.lead = lead
        self.valid_leads = tuple(valid_leads)
        super().__init__(
            f"Unknown lead '{lead}'. Expected one of: {', '.join(self.valid_leads)}"
        )


class UnknownPatternError(ECGSynthesisError, LookupError):
    """Raised when a clinical pattern name is not in the catalogue."""

    def __init__(self, pattern_name, valid_patterns) -> None:
        self.pattern_name = pattern_name
        self.valid_patterns = tuple(valid_patterns)
        super().__init__(
            f"Unknown clinical pattern '{pattern_name}'. "
            f"Expected one of: {', '.join(self.valid_patterns)}"
        )


class ExportFormatError(ECGSynthesisError, ValueError):
    """Raised when serialized ECG data cannot be parsed back."""
