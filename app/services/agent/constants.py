"""Constants for the dialog flow."""

# Speech results below this recognizer confidence are never acted on
CONFIDENCE_THRESHOLD = 0.3

# Number of history entries sent with each completion request
HISTORY_WINDOW = 10

# Phrases that end the call when found anywhere in the transcript
GOODBYE_PHRASES = [
    "goodbye",
    "bye",
    "see you",
    "talk to you later",
    "hang up",
    "end call",
]

WELCOME_MESSAGE = (
    "Hello! You are now speaking with Grok, powered by xAI. "
    "How can I help you today?"
)

# Reprompt when a transcript was heard but with low confidence
UNSURE_REPROMPT = "I'm not sure I understood that correctly. Could you please repeat?"

# Reprompt when nothing usable was heard
NO_SPEECH_REPROMPT = "I didn't catch that. Could you please speak clearly and try again?"

FAREWELL_MESSAGE = "Goodbye! It was nice speaking with you. Have a great day!"

APOLOGY_MESSAGE = "I'm sorry, there was an error. Please try again."

UNEXPECTED_ERROR_MESSAGE = (
    "I'm sorry, there was an unexpected error. Please try calling again."
)

COMPLETION_TIMEOUT_FALLBACK = "I'm taking a bit longer to think. Can you say that again?"

COMPLETION_ERROR_FALLBACK = (
    "I'm sorry, I'm having trouble connecting right now. Please try again."
)

# Twilio speech recognition hints
SPEECH_HINTS = "hello,help,question,thanks,goodbye,yes,no"
