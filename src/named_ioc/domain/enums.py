from enum import Enum


class Lifetime(str, Enum):
    """Defines how a registration turns into a resolved value.

    Attributes:
        VALUE: The registered target is returned verbatim (e.g. a connection string).
        TYPE: The registered class is handed out verbatim, never instantiated.
        TRANSIENT: A new instance is constructed on each resolution.
        SINGLETON: A single instance is constructed once and shared for the process lifetime.
    """

    VALUE = "value"
    TYPE = "type"
    TRANSIENT = "transient"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value
