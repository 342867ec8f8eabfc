"""Domain errors raised by services and translated to HTTP responses in main."""


class DomainError(Exception):
    """Base class for errors that map to a client-facing status code."""

    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EntityNotFoundError(DomainError):
    """Raised when an entity looked up by id, name, e-mail or token does not exist."""

    status_code = 404

    def __init__(self, entity: str, **search_params: object) -> None:
        self.entity = entity
        self.search_params = {k: str(v) for k, v in search_params.items()}
        params = ", ".join(f"{k}={v}" for k, v in self.search_params.items())
        super().__init__(f"No {entity} was found for parameters {{{params}}}")


class EntityCouldNotBeSavedError(DomainError):
    """Raised on uniqueness conflicts or failed domain preconditions."""

    def __init__(self, entity: str, reason: str) -> None:
        self.entity = entity
        self.reason = reason
        super().__init__(
            f"The {entity} could not be saved for the following reason: {reason}"
        )


class InvalidTokenError(DomainError):
    """Raised when a token is expired, already used, or belongs to someone else."""

    def __init__(self, entity: str, token: str) -> None:
        self.entity = entity
        self.token = token
        super().__init__(f"The {entity} is expired or invalid: token : {token}")
