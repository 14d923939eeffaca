"""
Configuration Properties - single source of truth for server configuration.

Reads config.properties (Java-style ``key=value`` lines) once and exposes typed
accessors. ServerSettings gathers the values the server needs into one object
with the defaults applied.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict


class ConfigProperties:
    """
    Configuration loader and accessor.

    Quick usage::

        ConfigProperties.load()                        # auto-discover
        ConfigProperties.get_int("server.port", 3000)
        ConfigProperties.get("storage.data_file", "data.txt")
    """

    _instance: Optional["ConfigProperties"] = None
    _properties: Dict[str, str] = {}
    _loaded: bool = False

    def __init__(self) -> None:
        pass

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Optional[str] = None) -> "ConfigProperties":
        """
        Parse config.properties and return the singleton instance.

        Args:
            path: Explicit path to config.properties; auto-discovered if omitted.
        """
        if cls._instance and cls._loaded:
            return cls._instance

        cls._instance = cls()
        cls._properties = {}

        config_path = Path(path) if path else cls._find_config_file()

        if config_path and config_path.exists():
            cls._parse_file(config_path)

        cls._loaded = True
        return cls._instance

    @classmethod
    def reload(cls, path: Optional[str] = None) -> "ConfigProperties":
        """Force a fresh re-parse of config.properties."""
        cls._loaded = False
        cls._properties = {}
        cls._instance = None
        return cls.load(path)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @classmethod
    def get(cls, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for *key* from config.properties (or *default*)."""
        if not cls._loaded:
            cls.load()
        return cls._properties.get(key, default)

    @classmethod
    def get_int(cls, key: str, default: int = 0) -> int:
        """Return an integer value from config.properties."""
        val = cls.get(key)
        if val is None:
            return default
        try:
            return int(val)
        except ValueError:
            return default

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @classmethod
    def _find_config_file(cls) -> Optional[Path]:
        """Search for config.properties starting from the project root."""
        fixed = Path(__file__).parent.parent.parent / "config.properties"
        if fixed.exists():
            return fixed

        current = Path.cwd()
        for _ in range(4):
            candidate = current / "config.properties"
            if candidate.exists():
                return candidate
            if current.parent == current:
                break
            current = current.parent

        return None

    @classmethod
    def _parse_file(cls, path: Path) -> None:
        """Parse a Java-style .properties file into ``_properties``."""
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or line.startswith("!"):
                    continue
                # Split on whichever separator appears first
                positions = [line.find(sep) for sep in ("=", ":") if sep in line]
                if not positions:
                    continue
                idx = min(positions)
                cls._properties[line[:idx].strip()] = line[idx + 1:].strip()


@dataclass
class ServerSettings:
    """Resolved server settings with defaults applied."""
    host: str = "127.0.0.1"
    port: int = 3000
    storage_backend: str = "file"
    data_file: str = "data.txt"
    static_root: str = "."
    default_document: str = "app.html"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_max_bytes: int = 10 * 1024 * 1024
    log_backup_count: int = 5

    @classmethod
    def from_properties(cls, path: Optional[str] = None) -> "ServerSettings":
        """Build settings from config.properties, falling back to defaults."""
        if path:
            ConfigProperties.reload(path)
        else:
            ConfigProperties.load()

        defaults = cls()
        return cls(
            host=ConfigProperties.get("server.host", defaults.host),
            port=ConfigProperties.get_int("server.port", defaults.port),
            storage_backend=ConfigProperties.get("storage.backend", defaults.storage_backend),
            data_file=ConfigProperties.get("storage.data_file", defaults.data_file),
            static_root=ConfigProperties.get("static.root", defaults.static_root),
            default_document=ConfigProperties.get("static.default_document", defaults.default_document),
            log_level=ConfigProperties.get("logging.level", defaults.log_level),
            log_file=ConfigProperties.get("logging.file") or None,
            log_max_bytes=ConfigProperties.get_int("logging.max_bytes", defaults.log_max_bytes),
            log_backup_count=ConfigProperties.get_int("logging.backup_count", defaults.log_backup_count),
        )
