async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "browser_ready": True,
        "modes": ["contact", "content"],
    }


async def test_contact_mode_is_default(client, renderer):
    renderer.pages["https://company.sk"] = "Call us at +421 910 123 456 or email sales@company.sk"

    resp = await client.post("/scrape", json={"urls": ["https://company.sk"]})

    assert resp.status_code == 200
    data = resp.json()
    assert data["mode"] == "contact"
    assert data["count"] == 1
    result = data["results"][0]
    assert result["url"] == "https://company.sk"
    assert result["success"] is True
    assert result["source"] == "main_page"
    assert result["depth"] == 0
    assert result["phones"] == "+421 910 123 456"
    assert result["emails"] == "sales@company.sk"
    assert result["phones_detailed"]["sk"] == [{"number": "+421 910 123 456", "country": "SK"}]


async def test_contact_mode_fallback_to_contact_page(client, renderer):
    renderer.pages["https://firma.cz"] = "[Kontakt](/kontakt)"
    renderer.pages["https://firma.cz/kontakt"] = "+420 123 456 789"

    resp = await client.post("/scrape", json={"urls": ["https://firma.cz"]}, headers={"x-mode": "contact"})

    result = resp.json()["results"][0]
    assert result["depth"] == 1
    assert result["source"] == "contact_page"
    assert result["phones"] == "+420 123 456 789"
    assert result["contact_page_url"] == "https://firma.cz/kontakt"


async def test_content_mode_via_header(client, renderer):
    renderer.pages["https://blog.sk"] = "# Hello"
    renderer.errors["https://down.sk"] = "net::ERR_CONNECTION_REFUSED"

    resp = await client.post(
        "/scrape",
        json={"urls": ["https://blog.sk", "https://down.sk"]},
        headers={"mode": "content"},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["mode"] == "content"
    assert data["count"] == 2
    assert data["results"][0] == {
        "url": "https://blog.sk",
        "success": True,
        "markdown": "# Hello",
        "content_length": 7,
        "error": None,
    }
    assert data["results"][1]["success"] is False
    assert data["results"][1]["error"] == "net::ERR_CONNECTION_REFUSED"


async def test_x_mode_header_takes_precedence(client, renderer):
    renderer.pages["https://blog.sk"] = "# Hello"

    resp = await client.post(
        "/scrape",
        json={"urls": ["https://blog.sk"]},
        headers={"x-mode": "content", "mode": "contact"},
    )

    assert resp.json()["mode"] == "content"


async def test_invalid_mode_rejected(client, renderer):
    resp = await client.post("/scrape", json={"urls": ["https://a.sk"]}, headers={"x-mode": "full"})

    assert resp.status_code == 400
    assert "Invalid mode" in resp.json()["detail"]
    assert renderer.calls == []


async def test_missing_urls_rejected(client, renderer):
    resp = await client.post("/scrape", json={})

    assert resp.status_code == 400
    assert "urls" in resp.json()["detail"]
    assert renderer.calls == []


async def test_empty_urls_rejected(client):
    resp = await client.post("/scrape", json={"urls": []})

    assert resp.status_code == 400


async def test_no_body_rejected(client):
    resp = await client.post("/scrape")

    assert resp.status_code == 400


async def test_urls_not_a_list_rejected(client, renderer):
    resp = await client.post("/scrape", json={"urls": "https://a.sk"})

    assert resp.status_code == 400
    assert "urls" in resp.json()["detail"]
    assert renderer.calls == []


async def test_non_string_url_rejected(client):
    resp = await client.post("/scrape", json={"urls": ["https://a.sk", 42]})

    assert resp.status_code == 400


async def test_malformed_json_rejected(client):
    resp = await client.post(
        "/scrape",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )

    assert resp.status_code == 400


async def test_unexpected_failure_returns_500(client, renderer, monkeypatch):
    async def _explode(url, full_page=False):
        raise RuntimeError("renderer crashed")

    monkeypatch.setattr(renderer, "render", _explode)

    resp = await client.post("/scrape", json={"urls": ["https://a.sk"]})

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}
