from fastapi.testclient import TestClient
from palindrome.main import app

client = TestClient(app)

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "checks_in_flight": 0}

def test_check_palindrome():
    r = client.post("/check", json={"text": "A man, a plan, a canal: Panama"})
    assert r.status_code == 200

    data = r.json()
    assert data["normalized"] == "amanaplanacanalpanama"
    assert data["is_palindrome"] is True
    assert data["message"] == "Це паліндром!"

def test_check_not_palindrome():
    r = client.post("/check", json={"text": "hello"})
    assert r.status_code == 200
    assert r.json()["is_palindrome"] is False
    assert r.json()["message"] == "Це не паліндром!"

def test_check_cyrillic():
    r = client.post("/check", json={"text": "Де помити мопед?"})
    assert r.status_code == 200
    assert r.json()["normalized"] == "депомитимопед"
    assert r.json()["is_palindrome"] is True

def test_check_cyrillic_not_palindrome():
    r = client.post("/check", json={"text": "Рівень"})
    assert r.status_code == 200
    assert r.json()["normalized"] == "рівень"
    assert r.json()["is_palindrome"] is False
    assert r.json()["message"] == "Це не паліндром!"

def test_check_empty_is_rejected():
    for text in ("", "   ", None):
        r = client.post("/check", json={"text": text})
        assert r.status_code == 422
        assert r.json()["detail"]["reason"] == "empty"
        assert r.json()["detail"]["message"].startswith("Введений рядок")

def test_check_too_short_is_rejected():
    r = client.post("/check", json={"text": "x"})
    assert r.status_code == 422
    assert r.json()["detail"] == {
        "reason": "tooShort",
        "message": "Рядок повинен містити щонайменше два символи.",
    }

def test_busy_released_after_checks():
    client.post("/check", json={"text": "racecar"})
    client.post("/check", json={"text": "x"})
    assert client.get("/health").json()["checks_in_flight"] == 0

def test_check_file_with_bom():
    raw = "Ротор\n".encode("utf-8-sig")

    files = {"file": ("word.txt", raw, "text/plain")}
    r = client.post("/check/file", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["encoding"] == "utf-8-sig"
    assert data["text"] == "Ротор"
    assert data["is_palindrome"] is True
    assert data["filename"] == "word.txt"

def test_check_file_plain_ascii():
    files = {"file": ("word.txt", b"Was it a car or a cat I saw?\r\n", "text/plain")}
    r = client.post("/check/file", files=files)
    assert r.status_code == 200
    assert r.json()["is_palindrome"] is True

def test_check_file_rejects_other_extensions():
    files = {"file": ("word.csv", b"racecar", "text/csv")}
    r = client.post("/check/file", files=files)
    assert r.status_code == 422

def test_check_file_too_large(monkeypatch):
    from palindrome import main
    from palindrome.config import Settings

    monkeypatch.setattr(main, "get_settings", lambda: Settings(max_upload_bytes=4))
    files = {"file": ("word.txt", b"racecar", "text/plain")}
    r = client.post("/check/file", files=files)
    assert r.status_code == 413

def test_check_file_blank_is_rejected():
    files = {"file": ("blank.txt", b"   \n", "text/plain")}
    r = client.post("/check/file", files=files)
    assert r.status_code == 422
    assert r.json()["detail"]["reason"] == "empty"

def test_check_file_latin1():
    raw = "Un été nu\n".encode("latin-1")

    files = {"file": ("phrase.txt", raw, "text/plain")}
    r = client.post("/check/file", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["encoding"] == "latin_1"
    assert data["text"] == "Un été nu"
    assert data["normalized"] == "unéténu"
    assert data["is_palindrome"] is True

def test_check_file_cp1251():
    raw = "Де помити мопед?\n".encode("cp1251")

    files = {"file": ("phrase.txt", raw, "text/plain")}
    r = client.post("/check/file", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["encoding"] == "cp1251"
    assert data["normalized"] == "депомитимопед"
    assert data["is_palindrome"] is True

def test_check_file_short_legacy_bytes_rejected():
    files = {"file": ("word.txt", "Рівень".encode("cp1251"), "text/plain")}
    r = client.post("/check/file", files=files)
    assert r.status_code == 422
    assert "UTF-8" in r.json()["detail"]

def test_shutdown_releases_worker_pool():
    from palindrome import checker

    with TestClient(app) as c:
        assert c.post("/check", json={"text": "racecar"}).status_code == 200
        assert checker._default_executor is not None
    assert checker._default_executor is None
