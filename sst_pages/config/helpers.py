"""Utility helpers shared by the site configuration loader."""

from __future__ import annotations

import datetime as dt
import typing as typ

from .models import CollectionConfig, FrontMatterDefault, SiteConfigError

URL_SUFFIX = "_url"
REPO_SUFFIX = "_github_repo"


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(raw: typ.Mapping[str, typ.Any], key: str) -> str:
    """Return a non-empty string value for ``key`` or raise."""
    value = _optional_str(raw.get(key))
    if value is None:
        msg = f"Site configuration is missing required key '{key}'."
        raise SiteConfigError(msg)
    return value


def _normalize_url(value: str) -> str:
    """Validate an absolute http(s) base URL and drop its trailing slash."""
    if not value.startswith(("http://", "https://")):
        msg = f"Site 'url' must be an absolute http(s) URL, got {value!r}."
        raise SiteConfigError(msg)
    return value.rstrip("/")


def _normalize_baseurl(value: object | None) -> str:
    """Return ``baseurl`` as ``""`` or ``/sub/path`` without trailing slash."""
    text = _optional_str(value) or ""
    if text and not text.startswith("/"):
        msg = f"Site 'baseurl' must be empty or start with '/', got {text!r}."
        raise SiteConfigError(msg)
    return text.rstrip("/")


def _suffixed_keys(raw: typ.Mapping[str, typ.Any], suffix: str) -> dict[str, str]:
    """Collect every string value whose key ends with ``suffix``."""
    result: dict[str, str] = {}
    for key, value in raw.items():
        if isinstance(key, str) and key.endswith(suffix):
            text = _optional_str(value)
            if text:
                result[key[: -len(suffix)]] = text
    return result


def _stringify_stats(payload: object) -> dict[str, str | None]:
    """Return the stats mapping with every value coerced to a string."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        msg = "Site 'stats' must be a mapping of counter names to values."
        raise SiteConfigError(msg)
    return {str(key): _optional_str(value) for key, value in payload.items()}


def _build_collections(payload: object) -> dict[str, CollectionConfig]:
    """Build CollectionConfig entries from the ``collections`` mapping."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        msg = "Site 'collections' must be a mapping of collection names."
        raise SiteConfigError(msg)
    collections: dict[str, CollectionConfig] = {}
    for name, options in payload.items():
        match options:
            case None:
                collections[str(name)] = CollectionConfig(name=str(name))
            case dict():
                extra = {
                    key: value
                    for key, value in options.items()
                    if key not in ("output", "permalink")
                }
                collection = CollectionConfig(
                    name=str(name),
                    output=bool(options.get("output", False)),
                    extra=extra,
                )
                permalink = _optional_str(options.get("permalink"))
                if permalink:
                    collection.permalink = permalink
                collections[str(name)] = collection
            case _:
                msg = f"Collection '{name}' must be a mapping of options."
                raise SiteConfigError(msg)
    return collections


def _build_plugins(payload: object) -> list[str]:
    """Validate and return the plugin list."""
    if payload is None:
        return []
    if not isinstance(payload, list) or not all(
        isinstance(entry, str) for entry in payload
    ):
        msg = "Site 'plugins' must be a list of plugin names."
        raise SiteConfigError(msg)
    return list(payload)


def _build_defaults(payload: object) -> list[FrontMatterDefault]:
    """Build front-matter defaults from the ``defaults`` list."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        msg = "Site 'defaults' must be a list of scope/values entries."
        raise SiteConfigError(msg)
    defaults: list[FrontMatterDefault] = []
    for entry in payload:
        if not isinstance(entry, dict):
            msg = "Each front-matter default must be a scope/values mapping."
            raise SiteConfigError(msg)
        scope = entry.get("scope") or {}
        values = entry.get("values") or {}
        if not isinstance(scope, dict) or not isinstance(values, dict):
            msg = "Each front-matter default needs mapping 'scope' and 'values'."
            raise SiteConfigError(msg)
        defaults.append(
            FrontMatterDefault(
                values=dict(values),
                path=_optional_str(scope.get("path")) or "",
                type=_optional_str(scope.get("type")),
            )
        )
    return defaults


def _parse_timestamp(value: dt.datetime | dt.date | str | None) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case dt.date():
            parsed = dt.datetime(value.year, value.month, value.day)
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = [
    "REPO_SUFFIX",
    "URL_SUFFIX",
    "_build_collections",
    "_build_defaults",
    "_build_plugins",
    "_normalize_baseurl",
    "_normalize_url",
    "_optional_str",
    "_parse_timestamp",
    "_require_str",
    "_stringify_stats",
    "_suffixed_keys",
]
