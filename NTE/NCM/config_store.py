# =============================================================================
# config_store.py — Allow-Listed Configuration Load / Save
# =============================================================================
#
# Access rule
# -----------
#   The store owns one root directory, canonicalised once at construction.
#   A requested path is joined to the root when relative, canonicalised
#   (symlinks and ".." resolved), and accepted only if the canonical path
#   is the root itself or lies below it.
#
#   Containment is decided on canonical path components, never on substrings:
#   "/srv/brain-viz-evil/x.json" is NOT inside "/srv/brain-viz".
#
# Error mapping (status carried on the exception):
#   ConfigRequestError   400   missing / invalid request fields or path
#   ConfigAccessError    403   path outside the allowed root
#   ConfigNotFoundError  404   file does not exist
#   ConfigFormatError    500   file is not valid JSON
#
# Writes are verbatim and last-writer-wins: no atomic replace, no backup.
#
# Paths in response and error bodies are relative to the root; the root
# itself is never reported.
# =============================================================================

from __future__ import annotations
import json
import os
from datetime import datetime, timezone
from pathlib import Path

from NTE.NMM.constants import CONFIG_FILE


class ConfigError(Exception):
    status = 500

    def __init__(self, message: str, path=None) -> None:
        super().__init__(message)
        self.message = message
        self.path = None if path is None else str(path)

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.path is not None:
            body["path"] = self.path
        return body


class ConfigRequestError(ConfigError):
    status = 400


class ConfigAccessError(ConfigError):
    status = 403


class ConfigNotFoundError(ConfigError):
    status = 404


class ConfigFormatError(ConfigError):
    status = 500


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ConfigStore:
    """
    Configuration documents confined to one root directory.

    Example:
        store = ConfigStore("public/data")
        store.save("analyzer_config.json", '{"updateInterval": 1500}')
        store.load("analyzer_config.json")["config"]
        # -> {"updateInterval": 1500}
    """

    def __init__(self, root) -> None:
        self.root = Path(root).resolve()

    # ── Path checks ──────────────────────────────────────────────────────────

    def resolve(self, path) -> Path:
        """Canonical path of a request, or ConfigAccessError if outside root."""
        if path is None or (isinstance(path, str) and path.strip() == ""):
            path = CONFIG_FILE
        if not isinstance(path, (str, os.PathLike)):
            raise ConfigRequestError("File path must be a string")
        if "\x00" in os.fspath(path):
            raise ConfigRequestError("File path contains invalid characters")
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.root / candidate
        canonical = candidate.resolve()
        if canonical != self.root and self.root not in canonical.parents:
            raise ConfigAccessError(
                "Access denied: path is outside the configuration directory",
                path=path,
            )
        return canonical

    def display_path(self, target: Path) -> str:
        """Path of `target` relative to the root, as reported to clients."""
        return target.relative_to(self.root).as_posix()

    # ── Operations ───────────────────────────────────────────────────────────

    def load(self, path=None) -> dict:
        target = self.resolve(path)
        shown = self.display_path(target)
        if not target.is_file():
            raise ConfigNotFoundError("Configuration file not found", path=shown)
        try:
            with target.open("r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigFormatError(f"Configuration file is not valid JSON: {e.msg}", path=shown) from e
        return {
            "message":   "Configuration loaded successfully",
            "config":    config,
            "path":      shown,
            "timestamp": _now_iso(),
        }

    def save(self, path, content) -> dict:
        if not path or not isinstance(content, str) or content == "":
            raise ConfigRequestError("File path and content are required")
        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
        return {
            "message":   "Configuration saved successfully",
            "path":      self.display_path(target),
            "bytes":     len(content.encode("utf-8")),
            "timestamp": _now_iso(),
        }
