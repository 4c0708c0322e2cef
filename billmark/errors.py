# Errors raised by billmark. The CLI decides how each one ends the run.


class BillmarkError(Exception):
    """Base class for every billmark failure."""


class AuthError(BillmarkError):
    """Client secrets could not be loaded or no token could be obtained."""


class PayloadError(BillmarkError):
    """The format rule request could not be built or serialized."""


class DispatchError(BillmarkError):
    """The batch update request could not be sent."""
