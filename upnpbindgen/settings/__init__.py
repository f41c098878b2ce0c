from __future__ import annotations

from enum import Enum
from pathlib import Path
from urllib.parse import urljoin

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrorPolicy(str, Enum):
    FAIL_FAST = "fail_fast"
    COLLECT = "collect"


class RootDocument(BaseModel):
    path: str
    prefix: str = ""

    @classmethod
    def parse(cls, value: str) -> RootDocument:
        """Build from ``path[:prefix]``, as given on the command line."""
        path, _, prefix = value.partition(":")
        return cls(path=path, prefix=prefix)

    @property
    def file_prefix(self) -> str:
        return f"{self.prefix}_" if self.prefix else ""

    def url(self, address: str) -> str:
        return urljoin(address.rstrip("/") + "/", self.path.lstrip("/"))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="UPNPBINDGEN_")

    address: str = "http://fritz.box:49000"
    documents: list[RootDocument] = [
        RootDocument(path="tr64desc.xml", prefix="tr064"),
        RootDocument(path="igddesc.xml", prefix="igd"),
    ]
    output_path: Path = Path("output")
    requests_output_folder: str = "requests"
    responses_output_folder: str = "responses"
    error_policy: ErrorPolicy = ErrorPolicy.FAIL_FAST
    verify_ssl: bool = False

    @field_validator("address")
    @classmethod
    def _address_scheme(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"address must be an http(s) url, got {value!r}")
        return value

    def responses_path(self, document: RootDocument) -> Path:
        return self.output_path / f"{document.file_prefix}{self.responses_output_folder}"

    def requests_path(self, document: RootDocument) -> Path:
        return self.output_path / f"{document.file_prefix}{self.requests_output_folder}"
