"""Password-based AES-256-CBC file encryption and SHA-256 checksums, with a command-line tool."""

__version__ = "1.0.0"
__all__ = ["cli", "context", "options"]