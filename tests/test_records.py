from mailcampaign.records import (
    Attachment,
    Campaign,
    CampaignStore,
    MessageDetails,
    Recipient,
    RecipientType,
    ThreadArg,
)


def test_get_content_exact_and_suffix():
    details = MessageDetails()
    details.set_content_piece("text/plain", "plain body")
    details.set_content_piece("text/html", "<p>html</p>", "base64")
    assert details.get_content("text/plain") == "plain body"
    assert details.get_content("/html") == "<p>html</p>"
    assert details.content_encodings["text/html"] == "base64"


def test_get_content_missing_is_empty():
    assert MessageDetails().get_content("/html") == ""


def test_set_content_piece_replaces():
    details = MessageDetails()
    details.set_content_piece("text/plain", "one")
    details.set_content_piece("text/plain", "two")
    assert details.get_content("text/plain") == "two"


def test_attachments_split_by_inline():
    details = MessageDetails()
    plain = Attachment("report.pdf", content_type="application/pdf")
    inline = Attachment("logo.png", content_type="image/png", content_id="logo")
    details.add_attachment(plain)
    details.add_attachment(inline)
    assert details.attachments_for(False) == [plain]
    assert details.attachments_for(True) == [inline]


def test_thread_arg_holds_details():
    details = MessageDetails(subject="Hi")
    arg = ThreadArg("camp", details)
    assert arg.campaign_id == "camp" and arg.details.subject == "Hi"


def test_recipient_defaults():
    recipient = Recipient()
    assert recipient.type is RecipientType.AS_TO
    assert recipient.custom_fields == {}


def make_store():
    store = CampaignStore()
    campaign = Campaign(name="Spring")
    assert store.create_campaign(campaign, MessageDetails(subject="News"))
    return store, campaign


def test_create_campaign_assigns_id_and_copies():
    store, campaign = make_store()
    assert campaign.id
    fetched = store.get_campaign(campaign.id)
    assert fetched == campaign
    fetched.name = "changed"
    assert store.get_campaign(campaign.id).name == "Spring"
    assert store.get_message(campaign.id).subject == "News"


def test_create_campaign_requires_name():
    assert CampaignStore().create_campaign(Campaign()) is False


def test_set_campaign_updates_non_empty_fields():
    store, campaign = make_store()
    assert store.set_campaign(Campaign(id=campaign.id, status="Running"))
    stored = store.get_campaign(campaign.id)
    assert (stored.name, stored.status) == ("Spring", "Running")
    assert store.set_campaign(Campaign(id="unknown")) is False


def test_get_campaigns_filters_and_pages():
    store, first = make_store()
    second = Campaign(name="Summer")
    store.create_campaign(second)
    store.set_campaign(Campaign(id=second.id, status="Running"))
    total, page = store.get_campaigns(status="Running")
    assert total == 1 and [c.id for c in page] == [second.id]
    total, page = store.get_campaigns(max_count=1, start_offset=1)
    assert total == 2 and [c.id for c in page] == [second.id]


def test_recipients_lifecycle():
    store, campaign = make_store()
    alice = Recipient(name="Alice", email_address="alice@example.com", status="Waiting")
    bob = Recipient(name="Bob", email_address="bob@example.com", status="Sent")
    assert store.create_recipient(campaign.id, alice)
    assert store.create_recipient(campaign.id, bob)
    assert alice.id and bob.id and alice.id != bob.id
    assert store.has_recipient(campaign.id, "alice@example.com")
    assert not store.has_recipient(campaign.id, "carol@example.com")
    assert store.count_recipients(campaign.id) == 2
    assert store.count_recipients(campaign.id, "Sent") == 1
    assert list(store.get_recipients(campaign.id, "Waiting")) == ["alice@example.com"]


def test_create_recipient_needs_known_campaign():
    store = CampaignStore()
    assert store.create_recipient("nope", Recipient(email_address="a@example.com")) is False


def test_set_recipients_status_by_current_status():
    store, campaign = make_store()
    store.create_recipient(campaign.id, Recipient(email_address="a@example.com", status="Waiting"))
    store.create_recipient(campaign.id, Recipient(email_address="b@example.com", status="Sent"))
    assert store.set_recipients_status(campaign.id, "Cancelled", "Waiting")
    assert store.count_recipients(campaign.id, "Cancelled") == 1
    assert store.set_recipients_status(campaign.id, "Waiting")
    assert store.count_recipients(campaign.id, "Waiting") == 2


def test_delete_recipients_and_campaign():
    store, campaign = make_store()
    r = Recipient(email_address="a@example.com", status="Sent")
    store.create_recipient(campaign.id, r)
    store.create_recipient(campaign.id, Recipient(email_address="b@example.com"))
    store.delete_recipients(campaign.id, "Sent")
    assert store.get_recipient(r.id) is None
    assert store.count_recipients(campaign.id) == 1
    assert store.delete_campaign(campaign.id)
    assert store.count_recipients(campaign.id) == 0
    assert store.get_campaign(campaign.id) is None
    assert store.delete_campaign(campaign.id) is False


def test_set_recipient_merges():
    store, campaign = make_store()
    r = Recipient(name="Old", email_address="a@example.com")
    store.create_recipient(campaign.id, r)
    assert store.set_recipient(Recipient(id=r.id, name="New", custom_fields={"customfield1": "x"}))
    stored = store.get_recipient(r.id)
    assert (stored.name, stored.email_address) == ("New", "a@example.com")
    assert stored.custom_fields == {"customfield1": "x"}


def test_changed_since():
    store, campaign = make_store()
    r = Recipient(email_address="a@example.com")
    store.create_recipient(campaign.id, r)
    assert store.changed_campaigns(0) == [campaign.id]
    assert store.changed_recipients(0) == [r.id]
    future = campaign.timestamp + 10**6
    assert store.changed_campaigns(future) == []
    assert store.changed_recipients(future) == []