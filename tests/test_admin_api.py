from __future__ import annotations

import pytest

from tests.conftest import SESSION_SECRET, FakeBackend

COOKIE = {"admin_session": SESSION_SECRET}


@pytest.mark.asyncio
async def test_list_requires_session_cookie(use_backend, http):
    backend = use_backend(FakeBackend({"ok": True, "rows": []}))

    async with http as client:
        resp = await client.get("/api/admin/bookings")

    assert resp.status_code == 401
    assert resp.json() == {"ok": False, "error": "Non autorizzato."}
    assert resp.headers["pragma"] == "no-cache"
    assert backend.calls == []


@pytest.mark.asyncio
async def test_wrong_cookie_is_rejected_the_same_way(use_backend, http):
    backend = use_backend(FakeBackend({"ok": True, "rows": []}))

    async with http as client:
        client.cookies.set("admin_session", "guess")
        resp = await client.get("/api/admin/bookings")

    assert resp.status_code == 401
    assert resp.json() == {"ok": False, "error": "Non autorizzato."}
    assert backend.calls == []


@pytest.mark.asyncio
async def test_empty_configured_secret_never_matches(settings, use_backend, http):
    settings.admin_session_secret = ""
    backend = use_backend(FakeBackend({"ok": True, "rows": []}))

    async with http as client:
        client.cookies.set("admin_session", "")
        resp = await client.get("/api/admin/bookings")

    assert resp.status_code == 401
    assert backend.calls == []


@pytest.mark.asyncio
async def test_list_translates_status_and_clamps_limit(use_backend, http):
    rows = [
        {"id": 7, "name": "Marco", "phone": "333 1234567", "service": "Taglio", "date": "2025-03-10",
         "time": "10:00", "status": "NUOVA", "channel": "WEB", "notes": None, "sheetRow": 12},
        {"id": "8", "name": "Anna", "phone": "", "status": "CONFERMATA"},
        "garbage",
    ]
    backend = use_backend(FakeBackend({"ok": True, "rows": rows}))

    async with http as client:
        client.cookies.update(COOKIE)
        resp = await client.get("/api/admin/bookings", params={"limit": "5000"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["count"] == 2
    assert backend.calls[0]["limit"] == 1000
    assert backend.calls[0]["action"] == "admin_list"

    first, second = body["rows"]
    assert first["id"] == "7"
    assert first["status"] == "RICHIESTA"
    assert first["notes"] == ""
    assert first["sheetRow"] == 12
    assert first["whatsappConfirmUrl"].startswith("https://wa.me/3331234567?text=")
    assert "10%2F03%2F2025" in first["whatsappConfirmUrl"]
    assert first["whatsappHelloUrl"] == "https://wa.me/3331234567?text=Ciao%20Marco%21"
    assert second["status"] == "CONFERMATA"
    assert "whatsappConfirmUrl" not in second


@pytest.mark.asyncio
async def test_list_default_limit_and_backend_count(use_backend, http):
    backend = use_backend(FakeBackend({"ok": True, "rows": [], "count": 42}))

    async with http as client:
        client.cookies.update(COOKIE)
        resp = await client.get("/api/admin/bookings")

    assert resp.json() == {"ok": True, "rows": [], "count": 42}
    assert backend.calls[0]["limit"] == 300


@pytest.mark.asyncio
async def test_set_status_translates_both_ways(use_backend, http):
    backend = use_backend(FakeBackend({"ok": True, "status": "NUOVA"}))

    async with http as client:
        client.cookies.update(COOKIE)
        resp = await client.post("/api/admin/bookings", json={"id": "7", "status": "richiesta"})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "status": "RICHIESTA", "message": "Stato aggiornato."}
    assert backend.calls[0]["status"] == "NUOVA"
    assert backend.calls[0]["id"] == "7"


@pytest.mark.asyncio
async def test_set_status_rejects_unknown_status(use_backend, http):
    backend = use_backend(FakeBackend())

    async with http as client:
        client.cookies.update(COOKIE)
        resp = await client.post("/api/admin/bookings", json={"id": "7", "status": "SPOSTATA"})

    assert resp.status_code == 400
    assert backend.calls == []


@pytest.mark.asyncio
async def test_set_status_backend_error(use_backend, http):
    use_backend(FakeBackend({"ok": False, "_status": 404, "error": "ID non trovato"}))

    async with http as client:
        client.cookies.update(COOKIE)
        resp = await client.post("/api/admin/bookings", json={"id": "99", "status": "ANNULLATA"})

    assert resp.status_code == 404
    assert resp.json() == {"ok": False, "error": "ID non trovato"}


@pytest.mark.asyncio
async def test_login_sets_cookie_and_me_reports_it(overrides, http):
    async with http as client:
        bad = await client.post("/api/admin/login", json={"password": "nope"})
        assert bad.status_code == 401

        resp = await client.post("/api/admin/login", json={"password": "letmein"})
        assert resp.status_code == 200
        set_cookie = resp.headers["set-cookie"]
        assert f"admin_session={SESSION_SECRET}" in set_cookie
        assert "HttpOnly" in set_cookie
        assert "samesite=lax" in set_cookie.lower()
        assert "Secure" not in set_cookie

        me = await client.get("/api/admin/me")
        assert me.json() == {"ok": True, "loggedIn": True}


@pytest.mark.asyncio
async def test_cookie_is_secure_in_production(settings, overrides, http):
    settings.environment = "production"

    async with http as client:
        resp = await client.post("/api/admin/login", json={"password": "letmein"})

    assert "Secure" in resp.headers["set-cookie"]


@pytest.mark.asyncio
async def test_logout_post_clears_cookie(overrides, http):
    async with http as client:
        client.cookies.update(COOKIE)
        resp = await client.post("/api/admin/logout")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    set_cookie = resp.headers["set-cookie"]
    assert 'admin_session=""' in set_cookie
    assert "Max-Age=0" in set_cookie
    assert "1970" in set_cookie
    assert resp.headers["cache-control"].startswith("no-store")


@pytest.mark.asyncio
async def test_logout_get_redirects_to_login(overrides, http):
    async with http as client:
        resp = await client.get("/api/admin/logout")

    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"
    assert "Max-Age=0" in resp.headers["set-cookie"]
    assert resp.headers["pragma"] == "no-cache"
