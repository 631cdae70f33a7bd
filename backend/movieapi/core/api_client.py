import logging
import threading
from typing import Any, Dict, Optional
import requests
from .interfaces import ApiClientInterface, ApiClientConfig, ApiResponse, ApiClientError

logger = logging.getLogger(__name__)

class MovieApiClient(ApiClientInterface):
    """HTTP client for the movie comments API.

    Holds the caller's access and refresh tokens. A request rejected with 401
    triggers one token refresh and a single retry. Concurrent callers that hit
    the same expired token share one refresh call: the first caller performs it
    under ``_refresh_lock`` and the rest, once they acquire the lock, see that
    the token has already changed and reuse it.
    """

    def __init__(self, config: ApiClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })
        self._refresh_lock = threading.Lock()
        self._access_token: Optional[str] = None
        self._refresh_token: Optional[str] = None
        self._user_id: Optional[str] = None

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def is_authenticated(self) -> bool:
        return self._access_token is not None

    def register(self, username: str, email: str, password: str) -> ApiResponse:
        return self.make_request("POST", "/api/auth/register", json={
            "username": username,
            "email": email,
            "password": password,
        })

    def login(self, identifier: str, password: str) -> ApiResponse:
        response = self.make_request("POST", "/api/auth/login", json={
            "loginIdentifier": identifier,
            "password": password,
        })
        if response.success:
            self._store_tokens(response.data)
        return response

    def logout(self) -> None:
        try:
            if self.is_authenticated:
                self.make_request("POST", "/api/auth/logout", authenticated=True)
        finally:
            self._clear_tokens()

    def get_comments(self, movie_id: int) -> ApiResponse:
        return self.make_request("GET", f"/api/movies/{movie_id}/comments")

    def add_comment(self, movie_id: int, text: str) -> ApiResponse:
        return self.make_request("POST", f"/api/movies/{movie_id}/comments",
                                 json={"text": text}, authenticated=True)

    def update_comment(self, movie_id: int, comment_id: int, text: str) -> ApiResponse:
        return self.make_request("PUT", f"/api/movies/{movie_id}/comments/{comment_id}",
                                 json={"text": text}, authenticated=True)

    def delete_comment(self, movie_id: int, comment_id: int) -> ApiResponse:
        return self.make_request("DELETE", f"/api/movies/{movie_id}/comments/{comment_id}",
                                 authenticated=True)

    def make_request(self, method: str, endpoint: str, json: Optional[Dict] = None,
                     authenticated: bool = False) -> ApiResponse:
        """Make HTTP request to the API, refreshing the access token once on 401"""
        if not authenticated:
            return self._wrap(self._send(method, endpoint, json=json))

        token = self._access_token
        if token is None:
            raise ApiClientError("Not logged in", 401)

        response = self._send(method, endpoint, json=json, token=token)
        if response.status_code == 401:
            if not self._refresh_access_token(token):
                raise ApiClientError("Session expired, please log in again", 401)
            response = self._send(method, endpoint, json=json, token=self._access_token)
        return self._wrap(response)

    def _refresh_access_token(self, stale_token: str) -> bool:
        with self._refresh_lock:
            if self._access_token != stale_token:
                # Someone else refreshed while we were waiting
                return self._access_token is not None

            if self._refresh_token is None or self._user_id is None:
                self._clear_tokens()
                return False

            logger.info(f"Refreshing access token for user {self._user_id}")
            response = self._send("POST", "/api/auth/refresh", json={
                "userId": self._user_id,
                "refreshToken": self._refresh_token,
            })
            if response.status_code != 200:
                logger.warning(f"Token refresh failed: {response.status_code}")
                self._clear_tokens()
                return False

            self._store_tokens(response.json())
            return True

    def _send(self, method: str, endpoint: str, json: Optional[Dict] = None,
              token: Optional[str] = None) -> requests.Response:
        url = f"{self.config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        try:
            logger.debug(f"Making {method} request to: {url}")
            return self.session.request(method, url, json=json, headers=headers,
                                        timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise ApiClientError(f"Request failed: {str(e)}")

    def _wrap(self, response: requests.Response) -> ApiResponse:
        data: Any = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = response.text
        success = 200 <= response.status_code < 300
        if not success:
            logger.error(f"API request failed: {response.status_code} - {data}")
        return ApiResponse(data, response.status_code, success)

    def _store_tokens(self, data: Dict[str, Any]) -> None:
        self._access_token = data["token"]
        self._refresh_token = data["refreshToken"]
        self._user_id = data["userId"]

    def _clear_tokens(self) -> None:
        self._access_token = None
        self._refresh_token = None
        self._user_id = None
