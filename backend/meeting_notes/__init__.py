"""Meeting-notes backend: transcript summarization, share links and e-mail delivery."""

__version__ = "0.1.0"
