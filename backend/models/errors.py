from enum import Enum

from pydantic import BaseModel, ConfigDict


class ErrorKind(str, Enum):
    CLIENT = "client"
    SERVER = "server"


class FetchError(BaseModel):
    """Uniform description of a failed collection fetch."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str

    @classmethod
    def client(cls, detail: str) -> "FetchError":
        return cls(kind=ErrorKind.CLIENT, message=f"Client Error: {detail}")

    @classmethod
    def server(cls, status_code: int, detail: str) -> "FetchError":
        return cls(kind=ErrorKind.SERVER, message=f"Server Error: {status_code} - {detail}")


class CountryFetchError(Exception):
    """Raised by the fetcher; carries the FetchError the store publishes."""

    def __init__(self, error: FetchError):
        super().__init__(error.message)
        self.error = error
