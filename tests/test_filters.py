from lead_scout.filters import RelevanceFilter, is_relevant


def test_include_keyword_is_relevant():
    assert is_relevant("cybercafe services available") is True
    assert is_relevant("Need help with my KRA PIN today") is True


def test_exclusion_beats_inclusion():
    assert is_relevant("cybercafe with printing and photocopy") is False
    assert is_relevant("laptop repair shop") is False


def test_empty_or_missing_text():
    assert is_relevant("") is False
    assert is_relevant(None) is False


def test_no_keyword_match():
    assert is_relevant("fresh mangoes for sale") is False


def test_custom_keyword_sets_are_case_insensitive():
    f = RelevanceFilter(include=["Passport"], exclude=["SCAM"])
    assert f("passport renewals here") is True
    assert f("Passport renewals, not a scam") is False
    assert f("driving lessons") is False
