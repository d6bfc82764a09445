"""
KustoX Results - Virtual URIs.

Addresses inside the results space look like ``kustox-ai://results/latest-result.json``.
Bare paths ("/latest-result.json") are resolved against the configured scheme and authority.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from kustox.config import ResultsSettings, get_settings

ROOT_PATHS = ("", "/")


@dataclass(frozen=True)
class ResultUri:
    scheme: str
    authority: str
    path: str = "/"

    @classmethod
    def parse(cls, value: ResultUri | str, settings: ResultsSettings | None = None) -> ResultUri:
        if isinstance(value, ResultUri):
            return value
        settings = settings or get_settings().results
        parts = urlsplit(value)
        path = parts.path
        if path and not path.startswith("/"):
            path = f"/{path}"
        if not parts.scheme:
            return cls(settings.scheme, settings.authority, path)
        return cls(parts.scheme, parts.netloc, path)

    @property
    def is_root(self) -> bool:
        return self.path in ROOT_PATHS

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}{self.path}"


def latest_result_uri(settings: ResultsSettings | None = None) -> ResultUri:
    """Canonical URI of the single latest-result file."""
    settings = settings or get_settings().results
    return ResultUri(settings.scheme, settings.authority, settings.latest_file_path)
