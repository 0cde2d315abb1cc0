from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from login_app.models.user import PublicUser

LOGIN_SUCCESS_MESSAGE = "Login successful!"
INVALID_CREDENTIALS_MESSAGE = "Username or password is incorrect!"
INVALID_REQUEST_MESSAGE = "Invalid login request!"
# Shown for every failure that is not a verdict from the API
LOGIN_ERROR_MESSAGE = "An error occurred during login!"


class LoginRequest(BaseModel):
    """Credentials as posted to /api/login. Missing fields arrive as empty strings."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    username: str = Field(default="", alias="userName")
    password: str = ""


class LoginSuccess(BaseModel):
    success: Literal[True] = True
    message: str = LOGIN_SUCCESS_MESSAGE
    user: PublicUser


class LoginFailure(BaseModel):
    success: Literal[False] = False
    message: str


LoginResult = Union[LoginSuccess, LoginFailure]

LOGIN_RESULT_ADAPTER: TypeAdapter[LoginResult] = TypeAdapter(LoginResult)
