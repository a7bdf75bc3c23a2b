# sentinela/errors.py


class ValidationError(Exception):
    """Malformed client input. ``errors`` maps field name -> message."""

    def __init__(self, errors, message="invalid input"):
        super().__init__(message)
        self.message = message
        self.errors = dict(errors)

    def to_dict(self):
        return {"message": self.message, "errors": self.errors}


class ConflictError(Exception):
    """Request collides with existing state (e.g. an email already registered)."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class AuthenticationError(Exception):
    def __init__(self, message="invalid credentials"):
        super().__init__(message)
        self.message = message


class NotFoundError(Exception):
    def __init__(self, message="not found"):
        super().__init__(message)
        self.message = message
