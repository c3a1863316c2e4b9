"""Loading state - remote gallery fetch coordination."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class LoadingState:
    """State for the one-shot gallery fetch."""
    loading: bool = False
    error: Optional[str] = None

    def begin(self) -> None:
        self.loading = True
        self.error = None

    def finish(self, error: Optional[str] = None) -> None:
        """Clear the loading flag on either branch, keeping the error text if any."""
        self.loading = False
        self.error = error
