from lead_scout.contacts import extract_contacts, extract_emails, extract_phone_numbers


def test_extracts_phone_and_email():
    contacts = extract_contacts("Call 0712345678 or email me@x.co")
    assert contacts.phones == ["0712345678"]
    assert contacts.emails == ["me@x.co"]


def test_international_and_new_prefix_numbers():
    phones = extract_phone_numbers("Reach +254712345678, 254722000111 or 0110123456")
    assert phones == ["+254712345678", "254722000111", "0110123456"]


def test_duplicates_collapse_in_first_occurrence_order():
    text = "0798765432 / 0712345678 / 0798765432 a@b.com A@b.com c@d.org a@b.com"
    contacts = extract_contacts(text)
    assert contacts.phones == ["0798765432", "0712345678"]
    assert contacts.emails == ["a@b.com", "c@d.org"]


def test_long_digit_runs_are_not_phone_numbers():
    assert extract_phone_numbers("order 07123456789012") == []
    assert extract_phone_numbers("call 0812345678") == []


def test_image_names_are_not_emails():
    assert extract_emails("logo@2x.png and team@agency.co.ke") == ["team@agency.co.ke"]


def test_empty_input():
    contacts = extract_contacts("")
    assert contacts.is_empty()
    assert extract_contacts(None).is_empty()
