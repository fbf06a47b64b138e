"""aiohttp transport glue for signed requests."""

from client_auth.http.client import SignedResponse, create_session, send_signed

__all__ = ["SignedResponse", "send_signed", "create_session"]
