class AuthError(Exception):
    status_code = 401

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

class Unauthenticated(AuthError):
    status_code = 401

class IdentityNotFound(Unauthenticated):
    """The token is genuine but its subject no longer exists."""
    status_code = 404

class Forbidden(AuthError):
    status_code = 403

class RevocationStoreError(Exception):
    pass

class DuplicateEmailError(Exception):
    pass
