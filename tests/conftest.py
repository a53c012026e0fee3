import pytest

from gym_checkin.members.photo_store import FilesystemPhotoStore
from tests.fakes import InMemoryAttendance, InMemoryIdentities, InMemoryMemberships
from tests.helpers import ADMIN_LOGIN, image_bytes, make_app


@pytest.fixture
def stores(tmp_path):
    return {
        "memberships_repo": InMemoryMemberships(),
        "attendance_repo": InMemoryAttendance(),
        "identities_repo": InMemoryIdentities(),
        "photo_store": FilesystemPhotoStore(tmp_path / "photos"),
    }


@pytest.fixture
def app(stores):
    return make_app(stores)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    resp = client.post("/login", json=ADMIN_LOGIN)
    assert resp.status_code == 200
    return client


@pytest.fixture
def png_bytes():
    return image_bytes()
