"""Readers for Mbox streams and Maildir directory trees."""

__all__ = ["mbox", "maildir"]