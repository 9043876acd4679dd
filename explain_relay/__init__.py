"""
Explain-code relay service.

Forwards code snippets to an OpenAI-compatible chat-completions provider
and returns the model's explanation.
"""
__version__ = "1.0.0"
