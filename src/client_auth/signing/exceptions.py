"""Request signing exceptions."""

from client_auth.errors.exceptions import PermanentError


class SigningPreparationError(PermanentError):
    """The request could not be canonicalized (bad query, unserializable body)."""

    pass


class MalformedRequestError(SigningPreparationError):
    """The URI query string cannot be split into key=value pairs."""

    pass


class SigningError(PermanentError):
    """Credentials could not be resolved or the signature could not be computed."""

    pass


__all__ = ["SigningPreparationError", "MalformedRequestError", "SigningError"]
