"""Campaigns, recipients, message details and an in-memory campaign store."""

from __future__ import annotations

import copy
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

__all__ = [
    "ThreadArg",
    "RecipientType",
    "Campaign",
    "Recipient",
    "Attachment",
    "MessageDetails",
    "CampaignStore",
]


class RecipientType(Enum):
    """How a recipient is addressed."""

    AS_TO = 0
    AS_CC = 1
    AS_BCC = 2


@dataclass
class Campaign:
    """A mailing campaign."""

    id: str = ""
    name: str = ""
    status: str = ""
    timestamp: int = 0


@dataclass
class Recipient:
    """A campaign recipient and its delivery state."""

    id: str = ""
    name: str = ""
    email_address: str = ""
    status: str = ""
    status_code: str = ""
    time_sent: int = 0
    num_attempts: int = 0
    custom_fields: dict[str, str] = field(default_factory=dict)
    return_path_email_address: str = ""
    type: RecipientType = RecipientType.AS_TO


@dataclass
class Attachment:
    """A file attached to, or embedded in, a message."""

    file_path: str
    content_type: str = ""
    content_id: str = ""
    encoding: str = ""
    content: Optional[str] = None


@dataclass
class MessageDetails:
    """Headers, content pieces and attachments of a message."""

    subject: str = ""
    from_name: str = ""
    from_email_address: str = ""
    reply_to_name: str = ""
    reply_to_email_address: str = ""
    sender_email_address: str = ""
    unsubscribe_link: str = ""
    to: str = ""
    cc: str = ""
    report_type: str = ""
    user_agent: str = ""
    use_xmailer: bool = False
    charset: str = ""
    version: int = 0
    contents: dict[str, str] = field(default_factory=dict)
    content_encodings: dict[str, str] = field(default_factory=dict)
    attachments: list[Attachment] = field(default_factory=list)

    def set_content_piece(
        self, content_type: str, content: str, encoding: str = ""
    ) -> None:
        """Set the content of the given MIME type."""
        self.contents[content_type] = content
        self.content_encodings[content_type] = encoding

    def get_content(self, content_type: str) -> str:
        """Return content of an exactly matching type, or of the first type
        containing ``content_type`` (so "/html" finds "text/html"), or ''."""
        if content_type in self.contents:
            return self.contents[content_type]
        return next(
            (text for kind, text in self.contents.items() if content_type in kind),
            "",
        )

    def add_attachment(self, attachment: Attachment) -> None:
        """Attach a file."""
        self.attachments.append(attachment)

    def attachments_for(self, inline_parts: bool) -> list[Attachment]:
        """Return inline parts (those with a Content-Id) or plain attachments."""
        return [a for a in self.attachments if bool(a.content_id) == inline_parts]


@dataclass
class ThreadArg:
    """What a worker is given: a campaign and its message."""

    campaign_id: str
    details: Optional[MessageDetails] = None


class CampaignStore:
    """Keeps campaigns, their messages and recipients in memory.

    Objects handed in and out are copies, so callers may change them freely.
    """

    def __init__(self) -> None:
        self._campaigns: dict[str, Campaign] = {}
        self._messages: dict[str, MessageDetails] = {}
        self._recipients: dict[str, tuple[str, Recipient]] = {}
        self._recipient_changes: dict[str, float] = {}

    # Campaigns

    def create_campaign(
        self, campaign: Campaign, details: Optional[MessageDetails] = None
    ) -> bool:
        """Store a new campaign, giving it a fresh id and timestamp."""
        if not campaign.name:
            return False
        campaign.id = uuid.uuid4().hex
        campaign.timestamp = int(time.time())
        self._campaigns[campaign.id] = copy.deepcopy(campaign)
        if details is not None:
            self._messages[campaign.id] = copy.deepcopy(details)
        return True

    def get_campaign(self, campaign_id: str) -> Optional[Campaign]:
        stored = self._campaigns.get(campaign_id)
        return copy.deepcopy(stored) if stored is not None else None

    def set_campaign(self, campaign: Campaign) -> bool:
        """Update the non-empty name and status of a known campaign."""
        stored = self._campaigns.get(campaign.id)
        if stored is None:
            return False
        if campaign.name:
            stored.name = campaign.name
        if campaign.status:
            stored.status = campaign.status
        stored.timestamp = int(time.time())
        return True

    def delete_campaign(self, campaign_id: str) -> bool:
        """Delete a campaign with its message and recipients."""
        if self._campaigns.pop(campaign_id, None) is None:
            return False
        self._messages.pop(campaign_id, None)
        self.delete_recipients(campaign_id, "")
        return True

    def get_message(self, campaign_id: str) -> Optional[MessageDetails]:
        stored = self._messages.get(campaign_id)
        return copy.deepcopy(stored) if stored is not None else None

    def update_message(self, campaign_id: str, details: MessageDetails) -> bool:
        if campaign_id not in self._campaigns:
            return False
        self._messages[campaign_id] = copy.deepcopy(details)
        self._campaigns[campaign_id].timestamp = int(time.time())
        return True

    def get_campaigns(
        self,
        status: str = "",
        name: str = "",
        max_count: Optional[int] = None,
        start_offset: int = 0,
    ) -> tuple[int, list[Campaign]]:
        """Return the total of matching campaigns and one page of them.

        A status takes precedence over a name; with neither, all match.
        """
        if status:
            matches = [c for c in self._campaigns.values() if c.status == status]
        elif name:
            matches = [c for c in self._campaigns.values() if c.name == name]
        else:
            matches = list(self._campaigns.values())
        end = None if max_count is None else start_offset + max_count
        return len(matches), [copy.deepcopy(c) for c in matches[start_offset:end]]

    def changed_campaigns(self, since: float) -> list[str]:
        return [c.id for c in self._campaigns.values() if c.timestamp >= since]

    # Recipients

    def _campaign_recipients(self, campaign_id: str, status: str = ""):
        for recipient_id, (owner, recipient) in self._recipients.items():
            if owner == campaign_id and (not status or recipient.status == status):
                yield recipient_id, recipient

    def create_recipient(self, campaign_id: str, recipient: Recipient) -> bool:
        """Add a recipient to a campaign, giving it a fresh id."""
        if campaign_id not in self._campaigns or not recipient.email_address:
            return False
        recipient.id = uuid.uuid4().hex
        self._recipients[recipient.id] = (campaign_id, copy.deepcopy(recipient))
        self._recipient_changes[recipient.id] = time.time()
        return True

    def has_recipient(self, campaign_id: str, email_address: str) -> bool:
        return any(
            r.email_address == email_address
            for _, r in self._campaign_recipients(campaign_id)
        )

    def get_recipient(self, recipient_id: str) -> Optional[Recipient]:
        entry = self._recipients.get(recipient_id)
        return copy.deepcopy(entry[1]) if entry is not None else None

    def set_recipient(self, recipient: Recipient) -> bool:
        """Update the non-empty properties of a known recipient."""
        entry = self._recipients.get(recipient.id)
        if entry is None:
            return False
        stored = entry[1]
        for name in ("name", "email_address", "status", "return_path_email_address"):
            value = getattr(recipient, name)
            if value:
                setattr(stored, name, value)
        stored.custom_fields.update(recipient.custom_fields)
        self._recipient_changes[recipient.id] = time.time()
        return True

    def delete_recipient(self, recipient_id: str) -> bool:
        if self._recipients.pop(recipient_id, None) is None:
            return False
        self._recipient_changes.pop(recipient_id, None)
        return True

    def set_recipients_status(
        self, campaign_id: str, status: str, current_status: str = ""
    ) -> bool:
        """Set the status of a campaign's recipients that have
        ``current_status`` (all of them when it is empty)."""
        if campaign_id not in self._campaigns:
            return False
        now = time.time()
        for recipient_id, recipient in list(
            self._campaign_recipients(campaign_id, current_status)
        ):
            recipient.status = status
            self._recipient_changes[recipient_id] = now
        return True

    def delete_recipients(self, campaign_id: str, status: str = "") -> bool:
        """Delete a campaign's recipients with ``status`` (all when empty)."""
        for recipient_id, _ in list(self._campaign_recipients(campaign_id, status)):
            self.delete_recipient(recipient_id)
        return campaign_id in self._campaigns or not status

    def count_recipients(self, campaign_id: str, status: str = "") -> int:
        return sum(1 for _ in self._campaign_recipients(campaign_id, status))

    def get_recipients(
        self,
        campaign_id: str,
        status: str = "",
        max_count: Optional[int] = None,
        start_offset: int = 0,
    ) -> dict[str, Recipient]:
        """Return one page of a campaign's recipients, keyed by email address."""
        matches = [r for _, r in self._campaign_recipients(campaign_id, status)]
        end = None if max_count is None else start_offset + max_count
        return {r.email_address: copy.deepcopy(r) for r in matches[start_offset:end]}

    def changed_recipients(self, since: float) -> list[str]:
        return [rid for rid, when in self._recipient_changes.items() if when >= since]