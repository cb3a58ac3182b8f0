import pytest
import responses

API = "http://donor-api.test/api"


def blood_payload(**overrides):
    data = {
        "_id": "b1",
        "name": "Ana Lee",
        "bloodType": "O-",
        "location": "Dublin",
        "phone": "0871234567",
        "email": "ana@example.com",
        "lastDonation": "2024-01-10T00:00:00.000Z",
        "isDonor": True,
    }
    data.update(overrides)
    return data


def organ_payload(**overrides):
    data = {
        "_id": "o1",
        "fullName": "Tom Byrne",
        "email": "tom@example.com",
        "phone": "0861234567",
        "address": "1 Main, Cork, Ireland",
        "organPreferences": ["kidneys", "liver"],
        "dateOfBirth": "1990-04-02",
        "emergencyContact": "Mary 0851234567",
        "consent": True,
    }
    data.update(overrides)
    return data


@pytest.fixture
def api(settings):
    settings.DONOR_API_BASE_URL = API
    settings.DONOR_API_TIMEOUT = None
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def logged_in_client(client, api):
    api.add(
        responses.POST,
        f"{API}/users/login",
        json={"token": "tok-123", "user": {"_id": "u1", "name": "Ana Lee", "email": "ana@example.com"}},
    )
    client.post("/accounts/login/", {"email": "ana@example.com", "password": "secret123"}, follow=True)
    return client
