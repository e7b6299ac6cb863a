"""
Request authentication hook.

Header generation is owned by an external collaborator (for example the
builder signing SDK); the client only needs this small interface.
"""
from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class BuilderAuthenticator(Protocol):
    """Decorates authenticated relayer requests with headers."""

    def is_valid(self) -> bool:
        """Return True if the authenticator is configured to produce headers"""
        ...

    def generate_builder_headers(
        self,
        method: str,
        path: str,
        body: Optional[str] = None,
    ) -> Optional[Dict[str, str]]:
        """
        Produce headers for a request.

        Returning None sends the request unauthenticated.
        """
        ...
