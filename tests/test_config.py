from config import parse_origins


def test_origins_are_trimmed():
    assert parse_origins("http://a.com, http://b.com ,http://c.com") == [
        "http://a.com", "http://b.com", "http://c.com",
    ]


def test_wildcard_and_blank_entries():
    assert parse_origins("*") == ["*"]
    assert parse_origins("http://a.com,, ") == ["http://a.com"]
