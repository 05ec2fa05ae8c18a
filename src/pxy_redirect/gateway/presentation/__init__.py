"""Presentation helpers shared by the HTTP gateway and the serverless action."""

from .pages import HOME_MESSAGE, render_page
from .responses import GatewayResponse, present, to_starlette

__all__ = ["HOME_MESSAGE", "GatewayResponse", "present", "render_page", "to_starlette"]
