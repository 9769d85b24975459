from __future__ import annotations

from emotibit_data.tools.debug import debug_enabled, time_block


def test_time_block_silent_when_disabled(monkeypatch) -> None:
    monkeypatch.delenv("EMOTIBIT_DEBUG", raising=False)
    messages: list[str] = []

    with time_block("parse", emitter=messages.append):
        pass

    assert not debug_enabled()
    assert messages == []


def test_time_block_reports_when_enabled(monkeypatch) -> None:
    monkeypatch.setenv("EMOTIBIT_DEBUG", "1")
    messages: list[str] = []

    with time_block("parse", emitter=messages.append):
        pass

    assert debug_enabled()
    assert len(messages) == 1
    assert messages[0].startswith("parse took ")
