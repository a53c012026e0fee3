import pytest
from werkzeug.security import check_password_hash

from gym_checkin.core.exceptions import ValidationError
from gym_checkin.members.model import Identity
from gym_checkin.members.photo_store import FilesystemPhotoStore
from gym_checkin.members.service import MemberService
from tests.fakes import InMemoryIdentities, InMemoryPhotos
from tests.helpers import image_bytes

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8"


def identity(n: int, email: str) -> Identity:
    return Identity(identity_id=f"x{n:05d}", email=email, name=email, password_hash="h")


def test_first_member_gets_number_one():
    identities, photos = InMemoryIdentities(), InMemoryPhotos()
    service = MemberService(identities, photos)

    created = service.create_member(password="secret", name="Rana", photo=image_bytes())

    assert created.number == 1
    assert created.member_id == "000001"
    assert created.email == "000001@skygym.local"
    assert created.identity.name == "Rana"
    assert check_password_hash(created.identity.password_hash, "secret")
    assert photos.photos["000001"].startswith(JPEG_SIGNATURE)


def test_name_defaults_to_email():
    service = MemberService(InMemoryIdentities(), InMemoryPhotos())

    created = service.create_member(password="secret", name="  ", photo=image_bytes())

    assert created.identity.name == "000001@skygym.local"


def test_max_member_number_pages_through_all_identities():
    items = [identity(i, f"{i:06d}@skygym.local") for i in range(1, 251)]
    items.append(identity(999, "admin@skygym.local"))
    items.append(identity(998, "000900@elsewhere.test"))
    identities = InMemoryIdentities(items)
    service = MemberService(identities, InMemoryPhotos(), page_size=100)

    assert service.max_member_number() == 250
    assert identities.page_calls == 3


def test_max_member_number_ignores_foreign_domains():
    identities = InMemoryIdentities([identity(1, "000777@other.local"), identity(2, "000005@SkyGym.local")])
    service = MemberService(identities, InMemoryPhotos())

    assert service.max_member_number() == 5


def test_empty_directory_takes_one_page():
    identities = InMemoryIdentities()
    service = MemberService(identities, InMemoryPhotos())

    assert service.max_member_number() == 0
    assert identities.page_calls == 1


def test_next_number_follows_highest():
    identities = InMemoryIdentities([identity(1, "000041@skygym.local")])
    service = MemberService(identities, InMemoryPhotos())

    assert service.create_member(password="pw", name=None, photo=image_bytes()).member_id == "000042"


def test_stale_photo_is_replaced():
    photos = InMemoryPhotos(photos={"000001": b"old"})
    service = MemberService(InMemoryIdentities(), photos)

    service.create_member(password="pw", name=None, photo=image_bytes())

    assert photos.deleted == ["000001"]
    assert photos.photos["000001"] != b"old"


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"password": "", "photo": b"x"}, "password is required"),
        ({"password": "pw", "photo": None}, "photo is required"),
        ({"password": "pw", "photo": b"definitely not an image"}, "photo must be an image"),
    ],
)
def test_create_member_validation(kwargs, message):
    identities = InMemoryIdentities()
    service = MemberService(identities, InMemoryPhotos())

    with pytest.raises(ValidationError, match=message):
        service.create_member(name=None, **kwargs)
    assert identities.items == []


def test_badge_png():
    service = MemberService(InMemoryIdentities(), InMemoryPhotos())

    assert service.badge_png("000123").startswith(PNG_SIGNATURE)


def test_badge_png_rejects_bad_id():
    service = MemberService(InMemoryIdentities(), InMemoryPhotos())

    with pytest.raises(ValidationError):
        service.badge_png("12")


def test_filesystem_photo_store(tmp_path):
    store = FilesystemPhotoStore(tmp_path / "photos")

    assert store.reference("000123") is None
    assert store.delete("000123") is False

    store.upload("000123", b"jpeg")

    assert store.reference("000123") == "/photos/000123"
    assert store.path_for("000123").read_bytes() == b"jpeg"
    assert store.delete("000123") is True
    assert store.path_for("000123") is None


def test_filesystem_photo_store_rejects_path_keys(tmp_path):
    store = FilesystemPhotoStore(tmp_path)

    with pytest.raises(ValidationError):
        store.upload("../etc", b"x")
