import logging
from urllib.parse import quote

import requests
from django.conf import settings

from accounts.session import SessionContext
from blood.records import BloodDonorRecord
from organ.records import OrganDonorRecord
from core.utils.records import InvalidRecord

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://blood-donation-project-backend.onrender.com/api"


class ApiError(RuntimeError):
    """Anything that went wrong talking to the donor API."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def server_message(self):
        if isinstance(self.payload, dict):
            msg = self.payload.get("message") or self.payload.get("error")
            if msg:
                return str(msg)
        return None


class ApiConnectionError(ApiError):
    pass


class ApiHTTPError(ApiError):
    pass


class ApiResponseError(ApiError):
    pass


def _safe_json(resp):
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        txt = (resp.text or "")[:600]
        raise ApiResponseError(
            f"Non-JSON response. HTTP {resp.status_code}. Body: {txt}",
            status_code=resp.status_code,
        )


def _error_payload(resp):
    try:
        return resp.json()
    except ValueError:
        return {"body": (resp.text or "")[:600]}


def clean_params(params):
    """
    Drop blank values, and ``bloodType=all`` which the API would treat as a
    literal blood type.
    """
    cleaned = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        value = str(value).strip()
        if not value:
            continue
        if key == "bloodType" and value.lower() == "all":
            continue
        cleaned[key] = value
    return cleaned


class DonorApiClient:
    """
    Thin wrapper over the donor API.

    Every request sends the bearer token held by ``session_context`` when
    there is one; without a token the request goes out unauthenticated and the
    API decides whether to reject it.
    """

    def __init__(self, session_context=None, base_url=None, timeout=None, http=None):
        self.session_context = session_context
        self.base_url = (base_url or getattr(settings, "DONOR_API_BASE_URL", DEFAULT_API_BASE_URL)).rstrip("/")
        self.timeout = timeout if timeout is not None else getattr(settings, "DONOR_API_TIMEOUT", None)
        self.http = http or requests.Session()
        self.http.headers.update({"Content-Type": "application/json"})

    def _auth_headers(self):
        token = self.session_context.token if self.session_context is not None else None
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _request(self, method, path, params=None, payload=None):
        url = self.base_url + path
        try:
            resp = self.http.request(
                method,
                url,
                params=params or None,
                json=payload,
                headers=self._auth_headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Donor API %s %s failed: %s", method, path, exc)
            raise ApiConnectionError(f"Could not reach the donor API: {exc}") from exc

        if resp.status_code >= 400:
            logger.warning("Donor API %s %s returned HTTP %s", method, path, resp.status_code)
            raise ApiHTTPError(
                f"{method} {path} failed. HTTP {resp.status_code}.",
                status_code=resp.status_code,
                payload=_error_payload(resp),
            )

        logger.debug("Donor API %s %s -> HTTP %s", method, path, resp.status_code)
        return _safe_json(resp)

    def _parse_records(self, data, record_cls, path):
        if not isinstance(data, list):
            logger.warning("Donor API %s returned %s instead of a list", path, type(data).__name__)
            raise ApiResponseError(f"Expected a list from {path}.", payload=data)
        try:
            return [record_cls.from_api(item) for item in data]
        except InvalidRecord as exc:
            logger.warning("Donor API %s returned a malformed record: %s", path, exc)
            raise ApiResponseError(f"Malformed record from {path}: {exc}", payload=data) from exc

    # ---------------- Accounts ----------------
    def register_user(self, data):
        return self._request("POST", "/users/register", payload=data)

    def login(self, credentials):
        data = self._request("POST", "/users/login", payload=credentials)
        if isinstance(data, dict) and data.get("token") and self.session_context is not None:
            self.session_context.save(data["token"], data.get("user"))
        return data

    def logout(self):
        if self.session_context is not None:
            self.session_context.clear()

    def fetch_user_profile(self, user_id):
        return self._request("GET", f"/users/{quote(str(user_id), safe='')}")

    def update_user_profile(self, user_id, patch):
        return self._request("PUT", f"/users/{quote(str(user_id), safe='')}", payload=patch)

    # ---------------- Donors ----------------
    def fetch_blood_donors(self, params=None):
        path = "/users/donors"
        data = self._request("GET", path, params=clean_params(params))
        return self._parse_records(data, BloodDonorRecord, path)

    def fetch_organ_donors(self, params=None):
        path = "/users/organ-donors"
        data = self._request("GET", path, params=clean_params(params))
        return self._parse_records(data, OrganDonorRecord, path)

    def register_organ_donor(self, data):
        return self._request("POST", "/users/registerOrganDonor", payload=data)


def get_api_client(request):
    return DonorApiClient(session_context=SessionContext(request.session))


def fetch_directory(client, search_filter, send_params=True):
    """
    Fetch the donor lists the filter needs.

    Both kinds are one operation: if either request fails the ApiError
    propagates and the caller shows neither list.
    """
    blood_donors, organ_donors = [], []
    if search_filter.includes_blood:
        blood_donors = client.fetch_blood_donors(search_filter.blood_params() if send_params else None)
    if search_filter.includes_organ:
        organ_donors = client.fetch_organ_donors(search_filter.organ_params() if send_params else None)
    return blood_donors, organ_donors
