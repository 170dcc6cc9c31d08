"""Message details loaded from an XML description of an email."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Optional, Union

from .records import Attachment, MessageDetails

__all__ = ["XmlMessageDetails"]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_DECLARED_ENCODING = re.compile(
    r"""\A\s*<\?xml[^>]*?\bencoding\s*=\s*["']([A-Za-z0-9._:-]+)["']"""
)


def _leading_unsigned(text: str) -> int:
    """Read the integer at the start of ``text`` as an unsigned 32-bit value."""
    match = _LEADING_INT.match(text)
    value = int(match.group(1)) if match else 0
    return value % (1 << 32)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _text_of(element: ET.Element) -> str:
    return "".join(element.itertext())


def _declared_encoding(data: Union[bytes, str]) -> Optional[str]:
    head = data[:512]
    if isinstance(head, bytes):
        head = head.decode("latin-1")
    match = _DECLARED_ENCODING.match(head)
    return match.group(1) if match else None


@dataclass
class XmlMessageDetails(MessageDetails):
    """Headers and content of an email read from an XML document."""

    custom_fields: dict[str, str] = field(default_factory=dict)

    def parse_file(self, file_name: str) -> bool:
        """Load details from an XML file; return whether it could be parsed."""
        if not file_name:
            return False
        try:
            with open(file_name, "rb") as handle:
                data = handle.read()
        except OSError:
            return False
        return self._parse(data)

    def parse_bytes(self, data: Union[bytes, str, None]) -> bool:
        """Load details from XML held in memory; return whether it parsed."""
        if not data:
            return False
        return self._parse(data)

    def _parse(self, data: Union[bytes, str]) -> bool:
        try:
            root = ET.fromstring(data)
        except ET.ParseError:
            return False

        encoding = _declared_encoding(data)
        if encoding is not None:
            self.charset = encoding

        version = root.get("version")
        if version is not None:
            self.version = _leading_unsigned(version)

        for element in root:
            if not isinstance(element.tag, str):
                continue
            self._load_element(element)
        return True

    def _load_element(self, element: ET.Element) -> None:
        name = _local_name(element.tag)
        content = _text_of(element)

        if name.startswith("subject"):
            self.subject = content
        elif name.startswith("from") or name.startswith("replyto"):
            self._load_address(element, name.startswith("replyto"))
        elif name.startswith("sender"):
            self.sender_email_address = content
        elif name.startswith("to"):
            self.to = content
        elif name.startswith("cc"):
            self.cc = content
        elif name.startswith("reporttype"):
            self.report_type = content
        elif name.startswith("useragent"):
            self.user_agent = content
            self.use_xmailer = False
        elif name.startswith("xmailer"):
            self.user_agent = content
            self.use_xmailer = True
        elif name.startswith("plaintext"):
            self.set_content_piece("text/plain", content, element.get("encoding", ""))
        elif name.startswith("html"):
            self.set_content_piece("text/html", content, element.get("encoding", ""))
        elif name.startswith("attachment"):
            self._load_attachment(element)
        elif name.startswith("customfield"):
            self._load_custom_field(element, name, content)

    def _load_address(self, element: ET.Element, is_reply_to: bool) -> None:
        for child in element:
            if not isinstance(child.tag, str):
                continue
            child_name = _local_name(child.tag)
            value = _text_of(child)
            if child_name.startswith("name"):
                if is_reply_to:
                    self.reply_to_name = value
                else:
                    self.from_name = value
            elif child_name.startswith("emailaddress"):
                if is_reply_to:
                    self.reply_to_email_address = value
                else:
                    self.from_email_address = value

    def _load_attachment(self, element: ET.Element) -> None:
        content_type = element.get("type", "")
        content_id = element.get("id", "")
        encoding = element.get("encoding", "")
        check_html = element.get("checkhtml", "")
        file_path = ""
        attachment_content: Optional[str] = None

        for child in element:
            if not isinstance(child.tag, str):
                continue
            child_name = _local_name(child.tag)
            if child_name.startswith("filename"):
                file_path = _text_of(child)
            elif child_name.startswith("content"):
                attachment_content = _text_of(child)

        if not content_id:
            # Without an id there is nothing to look for in the HTML
            check_html = ""

        if not file_path:
            return
        if check_html != "YES" or content_id in self.get_content("/html"):
            self.add_attachment(
                Attachment(
                    file_path,
                    content_type,
                    content_id,
                    encoding,
                    attachment_content,
                )
            )

    def _load_custom_field(self, element: ET.Element, name: str, content: str) -> None:
        if len(name) == len("customfield"):
            field_name = element.get("name")
            if field_name is not None:
                self.custom_fields[field_name] = content
        else:
            number = _leading_unsigned(name[len("customfield"):])
            self.custom_fields[f"customfield{number}"] = content