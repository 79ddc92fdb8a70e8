from invoice_extractor.core.logging import MAX_FIELD_CHARS, _redact_secrets, _truncate_long_values


def test_secrets_are_redacted() -> None:
    event = _redact_secrets(None, "info", {"event": "x", "api_key": "sk-123", "path": "a.png"})
    assert event == {"event": "x", "api_key": "***", "path": "a.png"}


def test_long_strings_are_truncated() -> None:
    reply = "x" * (MAX_FIELD_CHARS + 20)
    event = _truncate_long_values(None, "info", {"event": "model_call_ok", "reply": reply, "length": len(reply)})
    assert event["reply"].startswith("x" * MAX_FIELD_CHARS)
    assert event["reply"].endswith("...(+20 chars)")
    assert event["length"] == MAX_FIELD_CHARS + 20
