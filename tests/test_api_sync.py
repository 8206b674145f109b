from tamapet import config

INTERVAL = 3600
OWNER = {"initData": "123"}
STRANGER = {"initData": "456"}


def mint(client, body=OWNER, **extra):
    res = client.post("/pets", json={**body, **extra})
    assert res.status_code == 201
    return res.json()


def test_mint_endpoint(client, fake_clock):
    pet = mint(client, metadata_uri="ipfs://cat")
    assert pet["id"] == 0
    assert pet["owner"] == "123"
    assert pet["metadata_uri"] == "ipfs://cat"
    assert (pet["hunger"], pet["happiness"], pet["experience"], pet["level"]) == (100, 100, 0, 0)
    assert pet["last_interaction"] == fake_clock.t


def test_state_endpoint_decays_without_saving(client, fake_clock, stub_service):
    pet = mint(client)
    start = fake_clock.t
    fake_clock.advance(3 * INTERVAL)

    res = client.get(f"/pets/{pet['id']}")
    assert res.status_code == 200
    body = res.json()
    assert (body["hunger"], body["happiness"]) == (97, 97)
    assert body["last_interaction"] == start
    assert stub_service.store.get(pet["id"]).hunger == 100


def test_state_unknown_pet(client):
    res = client.get("/pets/31337")
    assert res.status_code == 404


def test_feed_then_train(client, fake_clock):
    pet = mint(client)
    fake_clock.advance(3 * INTERVAL)

    r1 = client.post(f"/pets/{pet['id']}/feed", json=OWNER)
    assert r1.status_code == 200
    assert r1.json()["hunger"] == 100
    assert r1.json()["delta"] == 3
    assert r1.json()["pet"]["happiness"] == 97

    r2 = client.post(f"/pets/{pet['id']}/train", json=OWNER)
    assert r2.status_code == 200
    assert r2.json()["experience"] == 10
    assert r2.json()["level"] == 0
    assert r2.json()["pet"]["happiness"] == 92


def test_feed_by_stranger_is_forbidden(client):
    pet = mint(client)
    res = client.post(f"/pets/{pet['id']}/feed", json=STRANGER)
    assert res.status_code == 403
    assert client.get(f"/pets/{pet['id']}").json()["hunger"] == 100


def test_train_when_starving(client, fake_clock):
    pet = mint(client)
    fake_clock.advance(200 * INTERVAL)
    res = client.post(f"/pets/{pet['id']}/train", json=OWNER)
    assert res.status_code == 409
    assert client.get(f"/pets/{pet['id']}").json()["experience"] == 0


def test_admin_config(client, monkeypatch, stub_service):
    monkeypatch.setattr(config, "ADMIN_IDS", frozenset({"1"}))

    res = client.post("/admin/config", json={"initData": "123", "xp_per_level": 10})
    assert res.status_code == 403

    res = client.post(
        "/admin/config",
        json={"initData": "1", "xp_per_level": 10, "minting_allowed": False},
    )
    assert res.status_code == 200
    assert res.json() == {"xp_per_level": 10, "minting_allowed": False}
    assert stub_service.admin.xp_per_level == 10

    res = client.post("/pets", json=OWNER)
    assert res.status_code == 403


def test_admin_rejects_zero_xp_per_level(client, monkeypatch, stub_service):
    monkeypatch.setattr(config, "ADMIN_IDS", frozenset({"1"}))
    res = client.post("/admin/config", json={"initData": "1", "xp_per_level": 0})
    assert res.status_code == 422
    assert stub_service.admin.xp_per_level == 50


def test_missing_init_data_is_validation_error(client):
    res = client.post("/pets", json={})
    assert res.status_code == 422
