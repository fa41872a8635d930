# termsnake/exceptions.py

"""
Errors raised by the terminal collaborator.

There is no recoverable category: a broken display or input stream ends the
process.
"""

from typing import Optional

class TermsnakeError(Exception):
    """Base exception for all termsnake errors."""

class DisplayError(TermsnakeError):
    """Raised when drawing to or configuring the terminal fails."""
    def __init__(self, message: Optional[str] = None, row: Optional[int] = None, col: Optional[int] = None):
        msg = message or "Terminal display failed"
        if row is not None and col is not None:
            msg = f"{msg} (at row {row}, col {col})"
        super().__init__(msg)
        self.row = row
        self.col = col

class InputError(TermsnakeError):
    """Raised when polling or reading a key event fails."""
    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Terminal input failed")
