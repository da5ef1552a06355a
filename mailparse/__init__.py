"""E-mail message model, quoted-printable decoding and mailbox readers."""

__version__ = "0.1.0"

__all__ = ["headers", "part", "message", "quoted_printable", "mailbox"]