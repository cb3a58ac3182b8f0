import re

import requests
import responses
from django.contrib.messages import get_messages
from django.urls import reverse
from responses import matchers

from conftest import API, blood_payload, organ_payload


def messages_of(response):
    return [str(m) for m in get_messages(response.wsgi_request)]


def organ_form_data(**overrides):
    data = {
        "full_name": "Tom Byrne",
        "date_of_birth": "1990-04-02",
        "phone": "0861234567",
        "email": "tom@example.com",
        "address": "1 Main, Cork, Ireland",
        "emergency_contact": "Mary 0851234567",
        "organ_preferences": ["all"],
        "consent": "on",
    }
    data.update(overrides)
    return data


def test_home(client):
    response = client.get(reverse("home"))
    assert response.status_code == 200
    assert len(response.context["blood_types"]) == 8
    assert b"Save Lives" in response.content


class TestSearchPage:
    def test_lists_everyone_without_params(self, client, api):
        api.add(responses.GET, f"{API}/users/donors", json=[blood_payload()])
        api.add(responses.GET, f"{API}/users/organ-donors", json=[organ_payload()])

        response = client.get(reverse("search"))

        assert response.status_code == 200
        assert all("?" not in call.request.url for call in api.calls)
        assert response.context["counts"] == {"blood": 1, "organ": 1, "total": 2}
        assert b"Ana Lee" in response.content
        assert b"Tom Byrne" in response.content
        assert b"Cork, Ireland" in response.content
        assert b"Showing all donors" in response.content

    def test_filters_sent_to_api_and_applied_locally(self, client, api):
        api.add(
            responses.GET,
            f"{API}/users/donors",
            json=[blood_payload(), blood_payload(_id="b2", name="Brian", bloodType="A+")],
            match=[matchers.query_param_matcher({"search": "a", "bloodType": "O-"})],
        )
        api.add(
            responses.GET,
            f"{API}/users/organ-donors",
            json=[organ_payload(address="9 High St, Cork"), organ_payload(_id="o2", fullName="Dana")],
            match=[matchers.query_param_matcher({"search": "a"})],
        )

        response = client.get(reverse("search"), {"search": "a", "blood_type": "O-", "location": "", "kind": "all"})

        results = response.context["results"]
        assert [r.donor.id for r in results] == ["b1", "o2"]
        assert b"Matching donors" in response.content

    def test_blood_kind_skips_organ_endpoint(self, client, api):
        api.add(responses.GET, f"{API}/users/donors", json=[blood_payload()])

        response = client.get(reverse("search"), {"kind": "blood", "blood_type": "all"})

        assert response.context["counts"]["organ"] == 0
        assert len(api.calls) == 1
        assert "bloodType" not in api.calls[0].request.url

    def test_ids_with_slashes_still_link_to_profiles(self, client, api):
        api.add(responses.GET, f"{API}/users/donors", json=[blood_payload(_id="a/b")])
        api.add(responses.GET, f"{API}/users/organ-donors", json=[organ_payload(_id="x/y")])

        response = client.get(reverse("search"))

        assert response.status_code == 200
        assert b'href="/blood/donors/a/b/"' in response.content
        assert b'href="/organ/donors/x/y/"' in response.content

    def test_blank_id_shows_banner(self, client, api):
        api.add(responses.GET, f"{API}/users/donors", json=[blood_payload(_id="")])
        api.add(responses.GET, f"{API}/users/organ-donors", json=[organ_payload()])

        response = client.get(reverse("search"))

        assert response.status_code == 200
        assert messages_of(response) == ["Failed to fetch donors. Please try again later."]
        assert response.context["results"] == []

    def test_initial_load_failure(self, client, api):
        api.add(responses.GET, f"{API}/users/donors", body=requests.ConnectionError("down"))

        response = client.get(reverse("search"))

        assert response.status_code == 200
        assert messages_of(response) == ["Failed to fetch donors. Please try again later."]
        assert response.context["results"] == []
        assert b"No donors found" in response.content

    def test_search_failure_clears_both_lists(self, client, api):
        api.add(responses.GET, f"{API}/users/donors", json=[blood_payload()])
        api.add(responses.GET, f"{API}/users/organ-donors", json={"message": "boom"}, status=500)

        response = client.get(reverse("search"), {"search": "ana"})

        assert messages_of(response) == ["Search failed. Please try again."]
        assert response.context["counts"]["total"] == 0

    def test_invalid_kind(self, client, api):
        api.add(responses.GET, f"{API}/users/donors", json=[])
        api.add(responses.GET, f"{API}/users/organ-donors", json=[])

        response = client.get(reverse("search"), {"kind": "plasma"})

        assert "Please fix the errors." in messages_of(response)
        assert response.context["form"].errors["kind"]


class TestBloodPages:
    def test_results_chips_and_passthrough(self, client, api):
        api.add(
            responses.GET,
            f"{API}/users/donors",
            json=[blood_payload()],
            match=[matchers.query_param_matcher({"bloodType": "O-", "location": "Dublin"})],
        )

        response = client.get(reverse("blood_search_results"), {"bloodType": "O-", "location": "Dublin", "search": " "})

        assert [c["label"] for c in response.context["filters"]] == ["Blood Type", "Location"]
        assert len(response.context["donors"]) == 1
        assert b"Blood Type: O-" in response.content

    def test_results_failure(self, client, api):
        api.add(responses.GET, f"{API}/users/donors", json={"message": "nope"}, status=503)
        response = client.get(reverse("blood_search_results"))
        assert messages_of(response) == ["Failed to fetch search results. Please try again."]
        assert response.context["donors"] == []

    def test_profile(self, client, api):
        api.add(responses.GET, f"{API}/users/b1", json=blood_payload())
        response = client.get(reverse("blood_donor_profile", args=["b1"]))
        assert response.context["donor"].name == "Ana Lee"
        assert b"Available" in response.content

    def test_profile_not_found(self, client, api):
        api.add(responses.GET, f"{API}/users/zz", json={"message": "User not found"}, status=404)
        response = client.get(reverse("blood_donor_profile", args=["zz"]))
        assert response.context["donor"] is None
        assert messages_of(response) == ["User not found"]

    def test_profile_with_slash_in_id(self, client, api):
        api.add(responses.GET, re.compile(r".*/users/a(%2F|/)b$"), json=blood_payload(_id="a/b"))

        response = client.get("/blood/donors/a/b/")

        assert response.status_code == 200
        assert response.context["donor"].id == "a/b"
        assert api.calls[0].request.url.endswith("/users/a%2Fb")

    def test_profile_malformed(self, client, api):
        api.add(responses.GET, f"{API}/users/b1", json={"_id": "b1"})
        response = client.get(reverse("blood_donor_profile", args=["b1"]))
        assert messages_of(response) == ["Donor not found"]


class TestOrganPages:
    def test_tabs(self, client):
        assert client.get(reverse("organ_donation")).context["active_tab"] == "about"
        assert client.get(reverse("organ_donation"), {"tab": "faq"}).context["active_tab"] == "faq"
        assert client.get(reverse("organ_donation"), {"tab": "nope"}).context["active_tab"] == "about"

    def test_register_success(self, client, api):
        api.add(responses.POST, f"{API}/users/registerOrganDonor", json={"_id": "o9"}, status=201)

        response = client.post(reverse("organ_donation"), organ_form_data())

        assert response.status_code == 302
        assert response["Location"] == reverse("organ_donation")
        assert messages_of(response) == ["Registration successful! Thank you for registering as an organ donor."]

    def test_register_api_failure_keeps_input(self, client, api):
        api.add(responses.POST, f"{API}/users/registerOrganDonor", json={"message": "dup"}, status=400)

        response = client.post(reverse("organ_donation"), organ_form_data())

        assert response.status_code == 200
        assert response.context["active_tab"] == "register"
        assert messages_of(response) == ["Registration failed. Please try again later."]
        assert response.context["form"].data["full_name"] == "Tom Byrne"

    def test_register_without_consent_never_calls_api(self, client, api):
        data = organ_form_data()
        del data["consent"]

        response = client.post(reverse("organ_donation"), data)

        assert response.status_code == 200
        assert response.context["form"].errors["consent"] == ["You must consent to organ donation."]
        assert len(api.calls) == 0

    def test_profile(self, client, api):
        api.add(responses.GET, f"{API}/users/o1", json=organ_payload(organPreferences=["all"]))
        response = client.get(reverse("organ_donor_profile", args=["o1"]))
        assert b"All organs" in response.content
        assert b"Cork, Ireland" in response.content


class TestAccounts:
    def test_register_success(self, client, api):
        api.add(responses.POST, f"{API}/users/register", json={"message": "created"}, status=201)

        response = client.post(reverse("register"), {
            "name": "Ana Lee",
            "email": "ana@example.com",
            "password": "secret123",
            "confirm_password": "secret123",
            "blood_type": "O-",
            "phone": "0871234567",
            "location": "Dublin",
        })

        assert response.status_code == 302
        assert response["Location"] == reverse("login")
        assert messages_of(response) == ["Account created successfully! Please login."]

    def test_register_server_message(self, client, api):
        api.add(responses.POST, f"{API}/users/register", json={"message": "User already exists"}, status=400)

        response = client.post(reverse("register"), {
            "name": "Ana Lee",
            "email": "ana@example.com",
            "password": "secret123",
            "confirm_password": "secret123",
            "blood_type": "O-",
            "phone": "0871234567",
            "location": "Dublin",
        })

        assert response.status_code == 200
        assert messages_of(response) == ["User already exists"]

    def test_login_and_logout(self, logged_in_client):
        response = logged_in_client.get(reverse("home"))
        assert response.context["is_logged_in"] is True
        assert b"Ana Lee" in response.content

        response = logged_in_client.post(reverse("logout"))
        assert response.status_code == 302
        assert messages_of(response) == ["You have been logged out."]

        assert logged_in_client.get(reverse("home")).context["is_logged_in"] is False

    def test_login_redirects_to_next(self, client, api):
        api.add(responses.POST, f"{API}/users/login", json={"token": "t", "user": {"_id": "u1", "name": "Ana"}})

        response = client.post(reverse("login"), {"email": "ana@example.com", "password": "x", "next": "/accounts/profile/"})

        assert response["Location"] == "/accounts/profile/"
        assert messages_of(response) == ["Welcome back, Ana!"]

    def test_login_ignores_offsite_next(self, client, api):
        api.add(responses.POST, f"{API}/users/login", json={"token": "t", "user": {"_id": "u1"}})
        response = client.post(reverse("login"), {"email": "ana@example.com", "password": "x", "next": "https://evil.test/"})
        assert response["Location"] == reverse("home")

    def test_login_rejected(self, client, api):
        api.add(responses.POST, f"{API}/users/login", json={"message": "Invalid credentials"}, status=401)

        response = client.post(reverse("login"), {"email": "ana@example.com", "password": "bad"})

        assert response.status_code == 200
        assert messages_of(response) == ["Invalid credentials"]
        assert response.context["is_logged_in"] is False

    def test_login_unreachable(self, client, api):
        api.add(responses.POST, f"{API}/users/login", body=requests.ConnectionError("down"))
        response = client.post(reverse("login"), {"email": "ana@example.com", "password": "x"})
        assert messages_of(response) == ["Login failed. Please try again later."]

    def test_profile_requires_login(self, client):
        response = client.get(reverse("profile"))
        assert response.status_code == 302
        assert response["Location"] == f"{reverse('login')}?next=%2Faccounts%2Fprofile%2F"

    def test_profile_loads_from_api(self, logged_in_client, api):
        api.add(responses.GET, f"{API}/users/u1", json={
            "_id": "u1",
            "name": "Ana Lee",
            "bloodType": "O-",
            "phone": "0871234567",
            "location": "Dublin",
            "lastDonation": "2024-01-10T00:00:00.000Z",
        })

        response = logged_in_client.get(reverse("profile"))

        assert response.status_code == 200
        assert response.context["form"].initial["blood_type"] == "O-"
        assert api.calls[-1].request.headers["Authorization"] == "Bearer tok-123"

    def test_profile_load_failure(self, logged_in_client, api):
        api.add(responses.GET, f"{API}/users/u1", json={}, status=500)
        response = logged_in_client.get(reverse("profile"))
        assert response.status_code == 200
        assert "Failed to load profile data." in messages_of(response)

    def test_profile_update(self, logged_in_client, api):
        api.add(
            responses.PUT,
            f"{API}/users/u1",
            json={"_id": "u1"},
            match=[matchers.json_params_matcher({
                "name": "Ana Byrne",
                "bloodType": "O-",
                "phone": "0871234567",
                "location": "Cork",
                "isDonor": True,
                "lastDonation": "",
            })],
        )

        response = logged_in_client.post(reverse("profile"), {
            "name": "Ana Byrne",
            "blood_type": "O-",
            "phone": "0871234567",
            "location": "Cork",
            "is_donor": "on",
            "last_donation": "",
        })

        assert response.status_code == 302
        assert response["Location"] == reverse("profile")
        assert messages_of(response) == ["Your profile has been updated successfully."]
        assert logged_in_client.get(reverse("home")).context["session_user"]["name"] == "Ana Byrne"

    def test_profile_update_failure(self, logged_in_client, api):
        api.add(responses.PUT, f"{API}/users/u1", json={"message": "Not allowed"}, status=403)

        response = logged_in_client.post(reverse("profile"), {
            "name": "Ana Byrne",
            "blood_type": "O-",
            "phone": "0871234567",
            "location": "Cork",
        })

        assert response.status_code == 200
        assert messages_of(response) == ["Not allowed"]
