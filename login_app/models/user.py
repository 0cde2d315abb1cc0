from pydantic import BaseModel, ConfigDict, Field


class PublicUser(BaseModel):
    """The part of a user record that may be handed to a client."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    username: str = Field(alias="userName")


class UserRecord(BaseModel):
    """An authenticatable identity. Passwords are plaintext: demo roster only."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str

    def to_public(self) -> PublicUser:
        return PublicUser(username=self.username)
