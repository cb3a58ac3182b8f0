TOKEN_KEY = "token"
USER_KEY = "user"


class SessionContext:
    """
    The signed-in identity kept between visits: the API bearer token and the
    user object returned by login.

    Works over any mutable mapping. Views pass ``request.session``; the
    management command passes a plain dict.
    """

    def __init__(self, store=None):
        self.store = store if store is not None else {}

    def load(self):
        return self.store.get(TOKEN_KEY), self.store.get(USER_KEY)

    def save(self, token, user=None):
        self.store[TOKEN_KEY] = token
        self.store[USER_KEY] = user

    def clear(self):
        self.store.pop(TOKEN_KEY, None)
        self.store.pop(USER_KEY, None)

    @property
    def token(self):
        return self.store.get(TOKEN_KEY)

    @property
    def user(self):
        return self.store.get(USER_KEY)

    @property
    def user_id(self):
        user = self.user or {}
        return user.get("_id") or user.get("id")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user)

    def update_user(self, values):
        user = dict(self.user or {})
        user.update(values)
        self.store[USER_KEY] = user
