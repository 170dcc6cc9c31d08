"""Loading of campaigns, messages, attachments and recipients from XML elements."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Iterator, Optional

from .records import Attachment, Campaign, MessageDetails, Recipient

__all__ = [
    "trim_spaces",
    "load_campaign",
    "load_message",
    "load_attachment",
    "load_recipient",
]

_SPACES = " \t\n\v\f\r"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def trim_spaces(text: str) -> str:
    """Remove leading and trailing ASCII whitespace."""
    return text.strip(_SPACES)


def _leading_unsigned(text: str) -> int:
    """Read the integer at the start of ``text`` as an unsigned 32-bit value."""
    match = _LEADING_INT.match(text)
    value = int(match.group(1)) if match else 0
    return value % (1 << 32)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element) -> Iterator[tuple[str, ET.Element]]:
    """Yield (name, child) for each child element, skipping comments and the like."""
    for child in element:
        if isinstance(child.tag, str):
            yield _local_name(child.tag), child


def _content(element: ET.Element) -> str:
    return "".join(element.itertext())


def load_campaign(element: ET.Element, campaign: Campaign) -> Optional[MessageDetails]:
    """Fill ``campaign`` from a Campaign element; return its Message, if any."""
    details: Optional[MessageDetails] = None
    for name, child in _children(element):
        content = _content(child)
        if name.startswith("Id"):
            campaign.id = content
        elif name.startswith("Name"):
            campaign.name = content
        elif name.startswith("Status"):
            campaign.status = content
        elif name.startswith("Message"):
            details = load_message(child)
    return details


def load_message(element: ET.Element) -> MessageDetails:
    """Build message details from a Message element."""
    details = MessageDetails()
    for name, child in _children(element):
        content = _content(child)
        if name.startswith("Subject"):
            details.subject = content
        elif name.startswith("FromName"):
            details.from_name = content
        elif name.startswith("FromEmailAddress"):
            details.from_email_address = trim_spaces(content)
        elif name.startswith("ReplyToName"):
            details.reply_to_name = content
        elif name.startswith("ReplyToEmailAddress"):
            details.reply_to_email_address = trim_spaces(content)
        elif name.startswith("SenderEmailAddress"):
            details.sender_email_address = trim_spaces(content)
        elif name.startswith("UnsubscribeLink"):
            details.unsubscribe_link = content
        elif name.startswith("PlainContent"):
            details.set_content_piece("text/plain", content, "")
        elif name.startswith("HtmlContent"):
            details.set_content_piece("text/html", content, "")
        elif name.startswith("EmailAttachment"):
            load_attachment(child, details)
    return details


def load_attachment(element: ET.Element, details: MessageDetails) -> None:
    """Add an attachment to ``details`` for each non-empty FilePath child.

    Content id and type are read per child and do not carry over to the
    file path, so attachments are added with the path alone.
    """
    for name, child in _children(element):
        if name.startswith("FilePath"):
            file_path = _content(child)
            if file_path:
                details.add_attachment(Attachment(file_path))


def load_recipient(element: ET.Element, recipient: Recipient) -> None:
    """Fill ``recipient`` from a Recipient element."""
    for name, child in _children(element):
        content = _content(child)
        if name.startswith("Id"):
            recipient.id = content
        elif name.startswith("Name"):
            recipient.name = content
        elif name == "Status":
            recipient.status = content
        elif name.startswith("EmailAddress"):
            recipient.email_address = trim_spaces(content)
        elif name.startswith("CustomField"):
            if len(name) > len("CustomField"):
                number = _leading_unsigned(name[len("CustomField"):])
                recipient.custom_fields[f"customfield{number}"] = content
        elif name.startswith("ReturnPath"):
            recipient.return_path_email_address = trim_spaces(content)