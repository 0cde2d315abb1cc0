from pydantic import BaseModel

from login_app.models.user import PublicUser

# Keys in the shared, origin-scoped store
IS_LOGGED_IN_KEY = "isLoggedIn"
USER_KEY = "user"
LOGGED_IN_FLAG = "true"


class SessionState(BaseModel):
    user: PublicUser | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def username(self) -> str:
        return self.user.username if self.user else ""
