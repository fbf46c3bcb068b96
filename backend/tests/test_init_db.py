import sys

import init_db
from conftest import engine, TestingSessionLocal
from models import User


def run(monkeypatch, *argv):
    monkeypatch.setattr(init_db, "engine", engine)
    monkeypatch.setattr(init_db, "SessionLocal", TestingSessionLocal)
    monkeypatch.setattr(sys, "argv", ["init_db.py", *argv])
    init_db.main()


def test_creates_user_and_prints_token(monkeypatch, capsys, db_session):
    run(monkeypatch, "--email", "new@example.com", "--name", "New User")

    output = capsys.readouterr().out
    assert "Created user new@example.com" in output
    assert "Access token: " in output
    assert db_session.query(User).filter(User.email == "new@example.com").count() == 1


def test_reuses_existing_user(monkeypatch, capsys, test_user):
    run(monkeypatch, "--email", test_user.email)

    output = capsys.readouterr().out
    assert "already exists" in output


def test_tables_only(monkeypatch, capsys, db_session):
    run(monkeypatch)
    assert "Access token" not in capsys.readouterr().out
