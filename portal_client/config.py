from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
import sys
from urllib.parse import urlparse


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class AppSettings:
    base_url: str
    timeout_seconds: int
    retry_attempts: int
    retry_base_delay_ms: int
    get_max_age_seconds: int
    get_stale_while_revalidate_seconds: int
    page_size: int
    count_probe_limit: int
    token_header_scheme: str
    session_path: str
    log_level: str

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        base_url = os.getenv("PORTAL_API_URL", "http://localhost:5000/api").strip().rstrip("/")

        settings = AppSettings(
            base_url=base_url,
            timeout_seconds=_int_env("PORTAL_TIMEOUT_SECONDS", 10),
            retry_attempts=_int_env("PORTAL_RETRY_ATTEMPTS", 2),
            retry_base_delay_ms=_int_env("PORTAL_RETRY_BASE_DELAY_MS", 200),
            get_max_age_seconds=_int_env("PORTAL_GET_MAX_AGE_SECONDS", 60),
            get_stale_while_revalidate_seconds=_int_env("PORTAL_GET_STALE_WHILE_REVALIDATE_SECONDS", 300),
            page_size=_int_env("PORTAL_PAGE_SIZE", 10),
            count_probe_limit=_int_env("PORTAL_COUNT_PROBE_LIMIT", 1000),
            token_header_scheme=os.getenv("PORTAL_TOKEN_HEADER_SCHEME", "Trendora").strip(),
            session_path=os.getenv("PORTAL_SESSION_PATH", "").strip(),
            log_level=os.getenv("PORTAL_LOG_LEVEL", "INFO").strip().upper(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError("PORTAL_API_URL must be an absolute http(s) URL")

        problems = []
        if self.timeout_seconds <= 0:
            problems.append("PORTAL_TIMEOUT_SECONDS must be greater than 0")
        if self.retry_attempts < 0:
            problems.append("PORTAL_RETRY_ATTEMPTS must be 0 or greater")
        if self.retry_base_delay_ms < 0:
            problems.append("PORTAL_RETRY_BASE_DELAY_MS must be 0 or greater")
        if self.get_max_age_seconds < 0 or self.get_stale_while_revalidate_seconds < 0:
            problems.append("GET cache windows must be 0 or greater")
        if self.page_size < 1:
            problems.append("PORTAL_PAGE_SIZE must be 1 or greater")
        if self.count_probe_limit != 0 and self.count_probe_limit <= self.page_size:
            problems.append("PORTAL_COUNT_PROBE_LIMIT must be 0 (disabled) or larger than PORTAL_PAGE_SIZE")
        if not self.token_header_scheme:
            problems.append("PORTAL_TOKEN_HEADER_SCHEME must not be empty")
        if not isinstance(logging.getLevelName(self.log_level), int):
            problems.append("PORTAL_LOG_LEVEL must be one of: DEBUG, INFO, WARNING, ERROR, CRITICAL")

        if problems:
            raise ConfigurationError("Invalid settings: " + "; ".join(problems))

    @property
    def retry_base_delay_seconds(self) -> float:
        return self.retry_base_delay_ms / 1000.0


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    """Copy values from any .env files found into os.environ.

    Variables already set in the environment win, then earlier files.
    """
    for path in _candidate_env_files(file_name):
        for key, value in _read_env_file(path).items():
            os.environ.setdefault(key, value)


def _candidate_env_files(file_name: str) -> list[Path]:
    candidates: list[Path] = []
    explicit = os.getenv("PORTAL_ENV_FILE", "").strip()
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.append(Path.cwd() / file_name)
    if getattr(sys, "frozen", False):
        candidates.append(Path(sys.executable).resolve().parent / file_name)
    else:
        candidates.append(Path(__file__).resolve().parent.parent / file_name)

    unique: dict[str, Path] = {}
    for path in candidates:
        unique.setdefault(str(path.resolve()), path)
    return list(unique.values())


def _read_env_file(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return {}

    values: dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if key:
            values[key] = value.strip('"').strip("'")
    return values
