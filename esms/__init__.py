"""Environmental, social and safety compliance registers."""

__version__ = "0.1.0"
