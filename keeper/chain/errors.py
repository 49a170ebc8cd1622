from __future__ import annotations


class ConditionError(Exception):
    """Base class for every failure a condition check can report."""


class ChainConnectionError(ConditionError):
    pass


class AbiParseError(ConditionError):
    pass


class RpcError(ConditionError):
    def __init__(self, message: str, *, method: str = "", code: int | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.code = code


class DecodeError(ConditionError):
    pass


class EmptyResultError(ConditionError):
    pass


class JobNotReadyError(ConditionError):
    pass


class JobExpiredError(ConditionError):
    def __init__(self, message: str, *, age_seconds: float, time_frame_seconds: int) -> None:
        super().__init__(message)
        self.age_seconds = age_seconds
        self.time_frame_seconds = time_frame_seconds


class InvalidQuoteError(ConditionError, ZeroDivisionError):
    pass


class EncodeError(ConditionError):
    pass
