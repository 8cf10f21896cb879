from app.extractors.emails import extract_emails, is_blocked_email


def test_extracts_and_lowercases():
    assert extract_emails("Write to Sales@Company.SK today") == ["sales@company.sk"]


def test_dedup_after_lowercasing():
    emails = extract_emails("info@firma.hu, INFO@firma.hu; Info@Firma.hu and office@firma.hu")
    assert emails == ["info@firma.hu", "office@firma.hu"]


def test_filters_placeholder_domains():
    text = "you@example.com no-reply-12345678@tracking.example.com john@domain.com real@firma.cz"
    assert extract_emails(text) == ["real@firma.cz"]


def test_filters_service_domains():
    text = "abc@sentry.io x@sentry-next.wixpress.com office@hotel.sk"
    assert extract_emails(text) == ["office@hotel.sk"]


def test_filters_your_email_placeholder():
    assert extract_emails("yourname@email.com") == []
    assert extract_emails("yours@firm.sk") == ["yours@firm.sk"]


def test_filters_long_digit_runs():
    assert extract_emails("user1234567@shop.hu") == []
    assert extract_emails("user12345@shop.hu") == ["user12345@shop.hu"]


def test_filters_image_filenames():
    assert extract_emails("logo@2x.png icon@3x.svg photo@big.jpg") == []


def test_custom_denylist():
    assert is_blocked_email("a@partner.sk", ["partner.sk"])
    assert not is_blocked_email("a@example.com", ["partner.sk"])


def test_deterministic_order():
    text = "b@x.sk a@x.sk c@x.sk"
    assert extract_emails(text) == extract_emails(text) == ["b@x.sk", "a@x.sk", "c@x.sk"]
