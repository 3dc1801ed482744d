from pydantic import BaseModel

from app.constants.enums import LoginState
from app.oauth.types import TokenSet, UserInfo


class SessionUser(BaseModel):
    provider: str
    tokens: TokenSet
    user_info: UserInfo


class SessionData(BaseModel):
    oauth_state: str | None = None
    code_verifier: str | None = None
    provider: str | None = None
    user: SessionUser | None = None

    @property
    def login_state(self) -> LoginState:
        if self.user is not None:
            return LoginState.AUTHENTICATED
        if self.oauth_state is not None:
            return LoginState.AWAITING_CALLBACK
        return LoginState.IDLE

    def clear_pending_authorization(self) -> None:
        self.oauth_state = None
        self.code_verifier = None
        self.provider = None
