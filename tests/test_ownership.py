import pytest

from tamapet.errors import AlreadyExists, CreationDisabled, NotFound
from tamapet.events import Created
from tamapet.ownership import AdminSettings, OwnerRegistry


def test_registry_tracks_owner_and_uri():
    reg = OwnerRegistry()
    reg.register(0, "123", "ipfs://pet0")
    assert reg.owner_of(0) == "123"
    assert reg.metadata_uri(0) == "ipfs://pet0"
    assert reg.is_owner(0, "123")
    assert not reg.is_owner(0, "456")
    assert not reg.is_owner(1, "123")
    with pytest.raises(NotFound):
        reg.owner_of(1)


def test_admin_rejects_non_positive_xp_per_level():
    admin = AdminSettings(xp_per_level=50)
    with pytest.raises(ValueError):
        admin.xp_per_level = 0
    assert admin.xp_per_level == 50
    with pytest.raises(ValueError):
        AdminSettings(xp_per_level=-3)


def test_mint_assigns_sequential_ids(service, events):
    first, rec = service.mint("123", now=10, metadata_uri="ipfs://a")
    second, _ = service.mint("456", now=20)
    assert (first, second) == (0, 1)
    assert rec.hunger == rec.happiness == service.rules.max_stat
    assert rec.last_interaction == 10
    assert service.owners.owner_of(1) == "456"
    assert events == [Created(0), Created(1)]


def test_mint_blocked_when_disabled(service, events):
    service.admin.minting_allowed = False
    with pytest.raises(CreationDisabled):
        service.mint("123", now=0)
    assert len(service.store) == 0
    assert events == []


def test_mint_explicit_duplicate_id(service, events):
    service.mint("123", now=0, pet_id=5)
    with pytest.raises(AlreadyExists):
        service.mint("456", now=0, pet_id=5)
    assert service.owners.owner_of(5) == "123"
    assert events == [Created(5)]
