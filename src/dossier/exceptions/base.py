"""Base exception for Dossier.

Every failure that aborts a documentation run derives from DossierError.
Unresolvable references are not failures: they render as plain text and
never raise.

``details`` names the entities, paths or settings involved, keyed by role
(``existing``/``duplicate``, ``path``/``reason``). The CLI prints ``str(error)``,
so the details travel with the one-line message.
"""

from typing import Dict, Optional


class DossierError(Exception):
    """Base exception for all Dossier errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{role}={value}" for role, value in self.details.items())
        return f"{self.message} ({rendered})"
