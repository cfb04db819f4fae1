def error_message_detail(error, error_detail=None) -> str:
    """
    Build a readable message pointing at the script and line that raised.
    Falls back to the plain message when there is no active traceback.
    """
    exc_tb = None
    if error_detail is not None:
        _, _, exc_tb = error_detail.exc_info()

    if exc_tb is None:
        return str(error)

    while exc_tb.tb_next is not None:
        exc_tb = exc_tb.tb_next
    file_name = exc_tb.tb_frame.f_code.co_filename
    return "Error occurred in script [{0}] at line [{1}]: {2}".format(
        file_name, exc_tb.tb_lineno, str(error)
    )


class CustomException(Exception):
    """Base error for the application. Pass `sys` to record where it happened."""

    def __init__(self, error, error_detail=None):
        self.error = error
        self.error_message = error_message_detail(error, error_detail)
        super().__init__(self.error_message)

    @property
    def message(self) -> str:
        """The underlying message without script/line decoration."""
        return str(self.error)

    def __str__(self):
        return self.error_message


class MissingInputError(CustomException):
    """The request did not carry an image."""


class ProviderInvocationError(CustomException):
    """A vision backend could not produce an answer (network, auth, status, empty text)."""

    def __init__(self, error, provider: str = None, error_detail=None):
        self.provider = provider
        super().__init__(error, error_detail)


class ProviderConfigurationError(ProviderInvocationError):
    """The requested provider is unknown or cannot be configured."""
