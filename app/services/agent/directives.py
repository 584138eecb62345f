"""Call directives emitted by the dialog controller."""
from typing import Literal, Union

from pydantic import BaseModel


class Speak(BaseModel):
    """Read text aloud with the telephony voice."""

    kind: Literal["speak"] = "speak"
    text: str


class Play(BaseModel):
    """Play audio fetched from a URL."""

    kind: Literal["play"] = "play"
    url: str


class Listen(BaseModel):
    """Capture the caller's next utterance and post it to ``action_url``."""

    kind: Literal["listen"] = "listen"
    action_url: str


class Hangup(BaseModel):
    kind: Literal["hangup"] = "hangup"


Directive = Union[Speak, Play, Listen, Hangup]
