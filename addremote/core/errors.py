"""Exceptions raised by add-remote."""


class AddRemoteError(Exception):
    """Base class for all add-remote errors."""


class NotARepository(AddRemoteError):
    """A Git work tree is needed but none is available."""


class FetchError(AddRemoteError):
    """The fork list could not be retrieved from the hosting provider."""


class Unauthorized(FetchError):
    """The provider rejected the request for lack of a valid token."""


class NotFound(FetchError):
    """The provider does not know the repository."""


class NetworkFailure(FetchError):
    """Transport failure or unexpected response from the provider."""


class UnsupportedHost(FetchError):
    """No remote of this repository points at GitHub or GitLab."""


class SelectionError(AddRemoteError):
    """No fork could be offered."""


class NoCandidates(SelectionError):
    """Every fork is already a local remote. Not a failure."""


class AliasCollision(AddRemoteError):
    """The chosen alias is already the name of a local remote."""
    
    def __init__(self, alias: str):
        super().__init__(f"Remote '{alias}' already exists")
        self.alias = alias


class ApplyError(AddRemoteError):
    """The remote could not be written to the repository."""


class RemoteAlreadyExists(ApplyError):
    """A remote with the requested name is already configured."""


class WriteFailure(ApplyError):
    """Git failed while adding the remote or disabling its push URL."""
