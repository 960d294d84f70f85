from __future__ import annotations

from typing import Optional, Protocol

from .model import CompanySettings


class SettingsRepository(Protocol):
    def get(self) -> Optional[CompanySettings]:
        raise NotImplementedError

    def save(self, settings: CompanySettings) -> None:
        """Replace the singleton record."""

        raise NotImplementedError
