class EphemerisError(Exception):
    """
    Base exception for all ephemeris-related domain errors.
    """
    pass


class InvalidQueryError(EphemerisError):
    """
    Raised when a query parameter is missing or out of range.

    `field` names the offending parameter as the client sent it.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class ProviderConfigurationError(EphemerisError):
    """
    Raised at startup when the ephemeris provider integration is incompatible
    (missing body constants, undecodable results).
    """
    pass


class ProviderCalculationError(EphemerisError):
    """
    Raised when the provider fails to compute a single position.
    """
    pass


class HousesUnavailableError(EphemerisError):
    """
    Raised when house computation cannot run on this provider instance.
    """
    pass
