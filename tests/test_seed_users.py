import json

import seed_users
from cost_manager.db.memory import MemoryDocumentStore

users = [
    {"id": "123123", "first_name": "mosh", "last_name": "israeli", "birthday": "1990-01-10", "marital_status": "single"},
    {"id": "456456", "first_name": "dana", "last_name": "levi", "birthday": "1988-03-02", "marital_status": "widowed"},
]


def test_seed_users_inserts_all(tmp_path, monkeypatch, capsys):
    store = MemoryDocumentStore()
    monkeypatch.setattr(seed_users, "build_store", lambda settings: store)
    users_file = tmp_path / "users.json"
    users_file.write_text(json.dumps(users))

    assert seed_users.main(["seed_users.py", str(users_file)]) == 0
    assert [user["id"] for user in store.find_many("users")] == ["123123", "456456"]
    assert "Inserted user 123123: mosh israeli" in capsys.readouterr().out


def test_seed_users_rejects_invalid_file(tmp_path, monkeypatch, capsys):
    store = MemoryDocumentStore()
    monkeypatch.setattr(seed_users, "build_store", lambda settings: store)
    users_file = tmp_path / "users.json"
    users_file.write_text(json.dumps([dict(users[0], marital_status="complicated")]))

    assert seed_users.main(["seed_users.py", str(users_file)]) == 1
    assert store.find_many("users") == []
    assert "ERROR" in capsys.readouterr().out


def test_seed_users_usage(capsys):
    assert seed_users.main(["seed_users.py"]) == 1
    assert "Usage" in capsys.readouterr().out
