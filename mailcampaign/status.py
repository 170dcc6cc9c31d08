"""Collects SMTP delivery statuses and optionally appends them to a file."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional, TextIO

__all__ = ["StatusUpdater"]

_log = logging.getLogger(__name__)


class StatusUpdater:
    """Records the first status seen for each domain or recipient."""

    def __init__(self, status_file_name: Optional[str] = None) -> None:
        self._status: dict[str, int] = {}
        self._file: Optional[TextIO] = None
        if status_file_name:
            self._file = open(status_file_name, "a", encoding="utf-8")

    def __enter__(self) -> "StatusUpdater":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _record(self, key: str, status_code: int, text: Optional[str], line: str) -> None:
        _log.info("SMTP status for %s: %s (%s)", key, status_code, text or "")
        self._status.setdefault(key, status_code)
        if self._file is not None:
            self._file.write(line + "\n")
            self._file.flush()

    def update_recipients_status(
        self, domain_name: str, status_code: int, text: Optional[str]
    ) -> None:
        """Record a status for all recipients of a domain."""
        self._record(domain_name, status_code, text, f"{status_code},{domain_name}")

    def update_recipient_status(
        self,
        email_address: str,
        status_code: int,
        text: Optional[str],
        msg_id: str = "",
    ) -> None:
        """Record a status for a single recipient."""
        self._record(
            email_address, status_code, text, f"{status_code},{email_address},{msg_id}"
        )

    def status(self) -> Mapping[str, int]:
        """Return a read-only view of the accumulated statuses."""
        return MappingProxyType(self._status)

    def clear(self) -> None:
        """Forget accumulated statuses."""
        self._status.clear()

    def close(self) -> None:
        """Close the status file, if one is open."""
        if self._file is not None:
            self._file.close()
            self._file = None