"""TwiML rendering for call directives."""
from typing import Iterable

from app.services.agent.constants import SPEECH_HINTS
from app.services.agent.directives import Directive, Hangup, Listen, Play, Speak

SAY_VOICE = "alice"
SAY_LANGUAGE = "en-US"


def _escape_xml(text: str) -> str:
    """Escape XML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _render_directive(directive: Directive) -> str:
    if isinstance(directive, Speak):
        return (
            f'    <Say voice="{SAY_VOICE}" language="{SAY_LANGUAGE}">'
            f"{_escape_xml(directive.text)}</Say>"
        )
    if isinstance(directive, Play):
        return f"    <Play>{_escape_xml(directive.url)}</Play>"
    if isinstance(directive, Listen):
        return (
            f'    <Gather input="speech" timeout="5" speechTimeout="auto" '
            f'action="{_escape_xml(directive.action_url)}" method="POST" '
            f'language="{SAY_LANGUAGE}" speechModel="phone_call" '
            f'hints="{SPEECH_HINTS}" profanityFilter="false"/>'
        )
    if isinstance(directive, Hangup):
        return "    <Hangup/>"
    raise ValueError(f"Unknown directive: {directive!r}")


def render_twiml(directives: Iterable[Directive]) -> str:
    """
    Generate TwiML XML for a sequence of directives.

    Args:
        directives: Directives in playback order

    Returns:
        TwiML XML string
    """
    body = "\n".join(_render_directive(d) for d in directives)
    if body:
        body += "\n"
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<Response>
{body}</Response>"""
