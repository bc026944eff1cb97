def _write(modules_dir, name, text):
    (modules_dir / name).write_text(text, encoding="utf-8")


def test_list_modules(client, modules_dir):
    _write(modules_dir, "mods.yaml", "modules:\n  - name: B\n  - name: A\n    public_dependencies: [B]\n")
    r = client.get("/api/v1/modules")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["modules"] == ["A", "B"]
    assert body["count"] == 2
    assert len(body["fingerprint"]) == 16
    assert body["warnings"] == []


def test_list_modules_reports_rejections(client, modules_dir):
    _write(modules_dir, "mods.yaml", "modules:\n  - name: A\n    public_dependencies: [A]\n")
    body = client.get("/api/v1/modules").json()
    assert body["count"] == 0
    assert body["warnings"][0]["code"] == "modules.rejected"


def test_get_module_with_findings(client, modules_dir):
    _write(
        modules_dir,
        "mods.yaml",
        "modules:\n"
        "  - name: Core\n"
        "  - name: Niagara\n"
        "  - name: Game\n"
        "    public_dependencies: [Core]\n"
        "    disabled_dependencies: [Niagara]\n",
    )
    r = client.get("/api/v1/modules/Game")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["descriptor"]["disabled_dependencies"] == ["Niagara"]
    assert body["findings"][0]["code"] == "module.disabled_available"


def test_get_unknown_module_404(client, modules_dir):
    r = client.get("/api/v1/modules/Nope")
    assert r.status_code == 404


def test_validate_returns_normalized_descriptor(client):
    r = client.post(
        "/api/v1/modules/validate",
        json={"name": " Game ", "language_standard": "Cpp20", "public_dependencies": [" Core"]},
    )
    assert r.status_code == 200, r.text
    d = r.json()["descriptor"]
    assert d["name"] == "Game"
    assert d["language_standard"] == "cpp20"
    assert d["public_dependencies"] == ["Core"]


def test_validate_duplicate_dependency_422(client):
    r = client.post(
        "/api/v1/modules/validate",
        json={"name": "Game", "public_dependencies": ["X"], "private_dependencies": ["X"]},
    )
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail["error"] == "config.duplicate_dependency"
    assert detail["name"] == "X"


def test_validate_unrecognized_option_lists_choices(client):
    r = client.post("/api/v1/modules/validate", json={"name": "Game", "pch_mode": "sometimes"})
    assert r.status_code == 422
    detail = r.json()["detail"]
    assert detail["error"] == "config.unrecognized_option"
    assert "explicit_or_shared" in detail["recognized"]


def test_request_id_echoed(client):
    r = client.get("/health/live", headers={"X-Request-Id": "rid-123"})
    assert r.headers["X-Request-Id"] == "rid-123"


def test_validate_rejection_carries_request_id(client):
    r = client.post(
        "/api/v1/modules/validate",
        json={"name": "Game", "language_standard": "c++98"},
        headers={"X-Request-Id": "rid-422"},
    )
    assert r.status_code == 422
    body = r.json()
    assert body["request_id"] == "rid-422"
    assert body["detail"]["option"] == "language_standard"
    assert "cpp20" in body["detail"]["recognized"]


def test_list_modules_skips_non_utf8_file(client, modules_dir):
    _write(modules_dir, "a.yaml", "name: A\n")
    (modules_dir / "b.yaml").write_bytes(b"name: \xff\xfeB\n")
    r = client.get("/api/v1/modules")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["modules"] == ["A"]
    assert [w["code"] for w in body["warnings"]] == ["modules.file_invalid"]
