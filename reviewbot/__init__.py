"""Review bot: static analysis findings as inline pull request comments."""

__version__ = "0.1.0"
