class Error(Exception):
    """Base class for exceptions for this module.
    It is used to recognize errors specific to this module"""

    pass


class APMError(Error):
    pass


class InvalidSignatureError(APMError):
    pass


class TruncatedError(APMError, EOFError):
    pass


class InvalidOperationError(Error):
    pass
