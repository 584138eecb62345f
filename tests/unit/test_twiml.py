"""Unit tests for TwiML rendering."""
import pytest

from app.services.agent.directives import Hangup, Listen, Play, Speak
from app.services.speech.twiml import render_twiml


class TestRenderTwiml:
    """Test directive to TwiML conversion."""

    def test_speak_and_listen(self):
        twiml = render_twiml([
            Speak(text="Hello!"),
            Listen(action_url="https://relay.example.com/webhooks/voice/gather"),
        ])

        assert twiml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert '<Say voice="alice" language="en-US">Hello!</Say>' in twiml
        assert 'action="https://relay.example.com/webhooks/voice/gather"' in twiml
        assert 'input="speech"' in twiml
        assert 'speechModel="phone_call"' in twiml
        assert twiml.index("<Say") < twiml.index("<Gather")

    def test_play(self):
        twiml = render_twiml([Play(url="https://relay.example.com/audio/audio_1_0")])

        assert "<Play>https://relay.example.com/audio/audio_1_0</Play>" in twiml

    def test_hangup(self):
        twiml = render_twiml([Speak(text="Goodbye!"), Hangup()])

        assert "<Hangup/>" in twiml
        assert "<Gather" not in twiml

    def test_escapes_text(self):
        twiml = render_twiml([Speak(text="Tom & Jerry <3 \"quotes\"")])

        assert "Tom &amp; Jerry &lt;3 &quot;quotes&quot;" in twiml

    def test_empty_response(self):
        twiml = render_twiml([])

        assert "<Response>\n</Response>" in twiml

    def test_unknown_directive(self):
        with pytest.raises(ValueError):
            render_twiml(["not a directive"])
