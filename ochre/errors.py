class ExceptionWithMessage(Exception):
    """A base class for all errors with a message"""

    @property
    def message(self) -> str:
        """
        Returns the message for the exception.

        :return str: The message string.
        """
        return self.args[0] if len(self.args) > 0 else "<no message>"


class MissingContentError(ExceptionWithMessage):
    """Raised when a language-tagged field has no content item to select."""

    pass


class InvalidLinkError(ExceptionWithMessage):
    """Raised when a raw link carries none of the known target keys."""

    pass


class InvalidConfigurationError(ExceptionWithMessage):
    """Raised when a website presentation tree cannot be decoded."""

    pass


class UnknownComponentError(ExceptionWithMessage):
    """Raised when an element names a component that is not registered."""

    def __init__(self, component: str, element: str):
        super().__init__(
            f"Invalid or non-implemented component name “{component}” "
            f"for the following element: “{element}”"
        )
        self.component = component
        self.element = element


class MissingComponentDependencyError(ExceptionWithMessage):
    """Raised when a component is missing a property or link it requires."""

    def __init__(self, component: str, element: str, dependency: str):
        super().__init__(
            f"{dependency} not found for the following component: “{component}” "
            f"(element “{element}”)"
        )
        self.component = component
        self.element = element
        self.dependency = dependency


class FetchError(ExceptionWithMessage):
    """Raised when OCHRE data could not be fetched or is not an OCHRE envelope."""

    pass
