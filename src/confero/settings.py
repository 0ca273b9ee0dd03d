from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from confero.domain.errors import ConfigurationError
from confero.domain.schema import DEFAULT_GROUPS, DEFAULT_LATEST_LIMIT, MAX_TAGS

SITE_URL_ENV = "CONFERO_SITE_URL"


@dataclass(frozen=True)
class Paths:
    content_dir: Path
    spaces_file: Path
    out_dir: Path


@dataclass(frozen=True)
class Site:
    url: str
    title: str
    description: str
    language: str = "en-us"


@dataclass(frozen=True)
class Content:
    groups: tuple[str, ...] = DEFAULT_GROUPS
    max_tags: int = MAX_TAGS
    latest_limit: int = DEFAULT_LATEST_LIMIT
    include_drafts: bool = False
    read_workers: int = 4


@dataclass(frozen=True)
class Settings:
    paths: Paths
    site: Site
    content: Content = field(default_factory=Content)


def _expand(p: str, base: Path) -> Path:
    path = Path(os.path.expandvars(os.path.expanduser(p)))
    if not path.is_absolute():
        path = base / path
    return path.resolve()


def settings_from_mapping(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Build Settings from already-parsed TOML. Relative paths resolve against base_dir.
    """
    env = os.environ if env is None else env
    content_raw = raw.get("content", {})

    try:
        site_url = env.get(SITE_URL_ENV) or raw["site"]["url"]
        return Settings(
            paths=Paths(
                content_dir=_expand(raw["paths"]["content_dir"], base_dir),
                spaces_file=_expand(raw["paths"]["spaces_file"], base_dir),
                out_dir=_expand(raw["paths"].get("out_dir", "dist"), base_dir),
            ),
            site=Site(
                url=str(site_url),
                title=str(raw["site"]["title"]),
                description=str(raw["site"]["description"]),
                language=str(raw["site"].get("language", "en-us")),
            ),
            content=Content(
                groups=tuple(str(g) for g in content_raw.get("groups", DEFAULT_GROUPS)),
                max_tags=int(content_raw.get("max_tags", MAX_TAGS)),
                latest_limit=int(content_raw.get("latest_limit", DEFAULT_LATEST_LIMIT)),
                include_drafts=bool(content_raw.get("include_drafts", False)),
                read_workers=int(content_raw.get("read_workers", 4)),
            ),
        )
    except KeyError as e:
        raise ConfigurationError(f"Missing config key: {e}") from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid config value: {e}") from e


def load_settings(path: str | Path = "settings.toml", *, env: Optional[Mapping[str, str]] = None) -> Settings:
    path = Path(path)

    if not path.exists():
        raise ConfigurationError(f"Missing config file: {path}")

    try:
        with path.open("rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

    return settings_from_mapping(raw, base_dir=path.resolve().parent, env=env)
