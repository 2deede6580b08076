"""Error types raised by label tracker services."""


class LabelTrackerError(RuntimeError):
    """Base class for failures that abort a tracking run."""


class ServiceSubmissionError(LabelTrackerError):
    """The image could not be read or a vision service could not be reached."""


class RecognitionFailedError(LabelTrackerError):
    """The OCR operation finished in the failed state."""


class RecognitionTimeoutError(LabelTrackerError, TimeoutError):
    """The OCR operation did not finish within the polling budget."""


class PersistenceError(LabelTrackerError):
    """Reading or writing a nutrition record failed."""
