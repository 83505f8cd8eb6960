class SwotError(Exception):
    """Base error. The message is shown to the user as-is."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(SwotError):
    pass


class ExtractionError(SwotError):
    pass


class AnalysisError(SwotError):
    pass


NO_INPUT_MESSAGE = "Please provide text or upload a document to analyze."
ANALYSIS_FAILED_MESSAGE = "Analysis failed. Ensure your GEMINI_API_KEY is set."
