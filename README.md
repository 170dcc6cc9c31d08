# mailcampaign

Building blocks for servers that send e-mail campaigns. The package needs
nothing outside the standard library.

## Modules

- `mailcampaign.records`: dataclasses for `Campaign`, `Recipient` (addressed
  as a `RecipientType`: `AS_TO`, `AS_CC` or `AS_BCC`), `Attachment` and
  `MessageDetails`, plus `ThreadArg`, which pairs a campaign id with its
  message. `MessageDetails.get_content` matches a content type exactly first
  and then by substring, so `"/html"` finds `"text/html"`.
  `MessageDetails.attachments_for(True)` returns the parts that have a
  Content-Id. `CampaignStore` keeps campaigns, their messages and their
  recipients in memory. It hands out copies, gives new objects fresh ids, and
  supports paging, filtering by status and listing what changed since a given
  time.
- `mailcampaign.xmlmessage`: `XmlMessageDetails` is a `MessageDetails` that is
  filled from an XML message template by `parse_file(file_name)` or
  `parse_bytes(data)`. Both return whether the XML parsed. A template can
  hold the subject, from, reply-to, sender, to, cc, report type, user agent or
  X-Mailer, plain text and HTML parts, attachments and custom fields. An
  attachment marked `checkhtml="YES"` is kept only if the HTML part mentions
  its id.
- `mailcampaign.loaders`: `load_campaign`, `load_message`, `load_attachment`
  and `load_recipient` read `Campaign`, `Message`, `EmailAttachment` and
  `Recipient` request elements from `xml.etree.ElementTree`. `trim_spaces`
  strips ASCII whitespace from both ends of a string.
- `mailcampaign.substituter`: `TemplateSubstituter` expands `{{Field}}`
  variables and shows the `{{#Field_section}}...{{/Field_section}}` sections
  of the fields it is given. It understands the modifiers `:h`, `:p`, `:j`,
  `:u` and `:none`. If the sections in a template do not balance, the
  template is returned unchanged. `template_has_field` is a quick check for
  whether a field appears in a template.
- `mailcampaign.status`: `StatusUpdater` keeps the first status code recorded
  for each domain or recipient. Given a file name, it also appends each status
  to that file. It can be used as a context manager.
- `mailcampaign.usage`: the abstract `UsageLogger`, and `MemoryUsageLogger`,
  which keeps `(call_name, status)` pairs in a list.
- `mailcampaign.timer`: `Timer`, which measures elapsed milliseconds.
- `mailcampaign.urlencoding`: `url_decode`, which decodes `%XX` escapes and
  leaves `+` as it is.

## Example

```python
import xml.etree.ElementTree as ET

from mailcampaign.loaders import load_campaign
from mailcampaign.records import Campaign, CampaignStore, Recipient
from mailcampaign.substituter import TemplateSubstituter
from mailcampaign.xmlmessage import XmlMessageDetails

details = XmlMessageDetails()
details.parse_bytes(
    b"<message version='1'><subject>Hello</subject>"
    b"<html>Dear {{Name}}</html></message>"
)
page = TemplateSubstituter("spring", details.get_content("/html"), False)
print(page.substitute({"Name": "Ann"}))          # Dear Ann

campaign = Campaign()
load_campaign(ET.fromstring("<Campaign><Name>Spring</Name></Campaign>"), campaign)
store = CampaignStore()
store.create_campaign(campaign, details)
store.create_recipient(campaign.id, Recipient(email_address="ann@example.com"))
print(store.count_recipients(campaign.id))       # 1
```

## What it does not do

The package sends no mail and does not look up mail servers. It has no
request dispatcher and does not write XML or CSV responses. It does not
convert between timestamps and date strings. It has no database backend:
`CampaignStore` lives in memory only. It provides no command-line program.

## Tests

```
pip install -e .[test]
pytest
```