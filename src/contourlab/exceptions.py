"""Exception hierarchy for Contourlab."""


class ContourLabError(Exception):
    """Base exception for all Contourlab errors."""

    pass


class GeometryError(ContourLabError):
    """Errors in geometric calculations."""

    pass


class InvalidInputError(GeometryError):
    """Operation called on the wrong polyline kind or on degenerate input."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class IllConditionedInputError(GeometryError):
    """Conic input that is not a proper ellipse for the requested operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NumericFailure(ContourLabError):
    """The numeric backend failed to produce a solution."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Numeric failure in {operation}: {reason}")


class InputFileError(ContourLabError):
    """Errors related to reading or writing batch files."""

    pass


class PolylineLoadError(InputFileError):
    """Error loading a polyline batch file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load polylines from '{path}': {reason}")


class ResultSaveError(InputFileError):
    """Error saving descriptor results."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save results to '{path}': {reason}")


class ProcessingCancelledError(ContourLabError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
