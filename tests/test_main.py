import json

from chatcache.main import main


def test_replay_dump(tmp_path, monkeypatch, caplog):
    monkeypatch.delenv("CHATCACHE_CACHE_POLICY", raising=False)
    monkeypatch.delenv("CHATCACHE_LOG_LEVEL", raising=False)
    dump = tmp_path / "events.jsonl"
    events = [
        {"t": "GUILD_CREATE", "d": {"id": "1", "roles": [{"id": "10"}]}},
        {"t": "MESSAGE_CREATE", "d": {"id": "500", "channel_id": "20", "author": {"id": "30"}}},
        {"t": "GUILD_CREATE", "d": {"name": "broken"}},
    ]
    dump.write_text("\n".join(json.dumps(e) for e in events) + "\n", encoding="utf-8")

    assert main([str(dump)]) == 0
    assert "replayed 3 events" in caplog.text


def test_missing_dump(tmp_path):
    assert main([str(tmp_path / "nope.jsonl")]) == 2


def test_invalid_dump(tmp_path):
    dump = tmp_path / "bad.jsonl"
    dump.write_text("{not json}\n", encoding="utf-8")
    assert main([str(dump)]) == 1
