class RocketlaneException(Exception):
    """Base class for errors raised by the client library itself."""

    def __init__(self, message: str = "Rocketlane client error."):
        super().__init__(message)


class UnboundQueryException(RocketlaneException):
    """Exception raised when executing a query builder that has no backing resource."""

    def __init__(
        self,
        message: str = "Query is not bound to a resource; use resource.query_builder() or bind().",
    ):
        super().__init__(message)


class UnsupportedFormatException(RocketlaneException):
    """Exception raised when a query construct has no translation handler."""

    def __init__(self, message: str = "Unsupported query format."):
        super().__init__(message)


class ObjectNotFoundException(RocketlaneException):
    """Exception raised when an object with the specified identifier does not exist."""

    def __init__(self, message: str = "The requested object was not found."):
        super().__init__(message)
