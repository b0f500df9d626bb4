class FlowCurveException(Exception):
    """
    Base exception for all flow-curve errors.
    """


class ValidationError(FlowCurveException, ValueError):
    """
    Raised when an input value fails validation.
    """


class InvalidCoordinateException(ValidationError):
    """
    Raised when a latitude or longitude is out of range or not finite.
    """


class InvalidParameterException(ValidationError):
    """
    Raised for a bad interpolation or builder parameter (e.g. sample count < 2).
    """


class DegenerateInputException(FlowCurveException):
    """
    Raised when the great-circle path is undefined for the given endpoints:
    coincident points in strict mode, or antipodal points.
    """


class RecordProcessingException(FlowCurveException):
    """
    Raised when a trade-flow record fails; carries the record index.
    """

    def __init__(self, record_index: int, cause: FlowCurveException):
        super().__init__(f"Record {record_index}: {cause}")
        self.record_index = record_index
        self.cause = cause


class TradeDataException(FlowCurveException):
    """
    Raised when trade-flow input data is malformed.
    Do NOT retry - the file must be fixed.
    """
