"""
Server configuration for storefront-mcp.

Supports configuration via:
1. Environment variables (highest priority)
2. TOML config file (storefront-mcp.toml)
3. Default values (lowest priority)

Environment variables:
- STOREFRONT_MCP_CONFIG_FILE: Path to TOML config file
- STOREFRONT_MCP_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- STOREFRONT_MCP_STRUCTURED_LOGGING: JSON log lines (true/false)
- STOREFRONT_MCP_ARTIFACT_MAX_SIZE: Soft ceiling per artifact, in characters
- STOREFRONT_MCP_SPLIT_THRESHOLD: Component count above which templates split
- STOREFRONT_MCP_PRIORITY_LEVELS: Number of progressive rendering tiers
- STOREFRONT_MCP_SKELETON_LOADING: Skeleton placeholders for deferred regions
- STOREFRONT_MCP_FEEDBACK_ENABLED: Emit the progress feedback widget
- STOREFRONT_MCP_LOGICAL_DIVISION: Prefer header/main/footer splitting
"""

import os
import logging
from dataclasses import dataclass, field
from importlib.metadata import version as get_package_version, PackageNotFoundError
from pathlib import Path
from typing import Optional, Dict, Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from storefront_mcp.core.artifacts.models import RenderOptions
from storefront_mcp.core.logging_config import configure_logging


logger = logging.getLogger(__name__)


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("storefront-mcp")
    except PackageNotFoundError:
        return "0.1.0"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "on")


@dataclass
class ArtifactConfig:
    """Defaults for the progressive artifact renderer.

    Attributes:
        priority_levels: Number of visual-priority tiers the renderer schedules
        skeleton_loading: Use skeleton placeholders for deferred regions
        feedback_enabled: Emit the inline progress feedback widget
        artifact_max_size: Soft ceiling per output artifact (characters)
        split_threshold: Component count above which splitting is preferred
        use_logical_division: Prefer header/main/footer boundaries when available
    """

    priority_levels: int = 5
    skeleton_loading: bool = True
    feedback_enabled: bool = True
    artifact_max_size: int = 500000
    split_threshold: int = 100
    use_logical_division: bool = True

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "ArtifactConfig":
        """Create config from TOML dict (typically [artifacts] section)."""
        return cls(
            priority_levels=int(data.get("priority_levels", 5)),
            skeleton_loading=_parse_bool(data.get("skeleton_loading", True)),
            feedback_enabled=_parse_bool(data.get("feedback_enabled", True)),
            artifact_max_size=int(data.get("artifact_max_size", 500000)),
            split_threshold=int(data.get("split_threshold", 100)),
            use_logical_division=_parse_bool(data.get("use_logical_division", True)),
        )

    def to_render_options(self) -> RenderOptions:
        return RenderOptions(
            priority_levels=self.priority_levels,
            skeleton_loading=self.skeleton_loading,
            feedback_enabled=self.feedback_enabled,
            artifact_max_size=self.artifact_max_size,
            split_threshold=self.split_threshold,
            use_logical_division=self.use_logical_division,
        )


@dataclass
class ServerConfig:
    """Server configuration with support for env vars and TOML overrides."""

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = True

    # Server configuration
    server_name: str = "storefront-mcp"
    server_version: str = field(default_factory=lambda: _PACKAGE_VERSION)

    # Artifact rendering configuration
    artifacts: ArtifactConfig = field(default_factory=ArtifactConfig)

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("STOREFRONT_MCP_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            for default_path in ["storefront-mcp.toml", ".storefront-mcp.toml"]:
                if Path(default_path).exists():
                    config._load_toml(Path(default_path))
                    break

        config._load_env()

        return config

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if "logging" in data:
                log = data["logging"]
                if "level" in log:
                    self.log_level = str(log["level"]).upper()
                if "structured" in log:
                    self.structured_logging = _parse_bool(log["structured"])

            if "server" in data:
                srv = data["server"]
                if "name" in srv:
                    self.server_name = srv["name"]
                if "version" in srv:
                    self.server_version = srv["version"]

            if "artifacts" in data:
                self.artifacts = ArtifactConfig.from_toml_dict(data["artifacts"])

        except Exception as e:
            logger.error(f"Error loading config file {path}: {e}")

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if level := os.environ.get("STOREFRONT_MCP_LOG_LEVEL"):
            self.log_level = level.upper()
        if structured := os.environ.get("STOREFRONT_MCP_STRUCTURED_LOGGING"):
            self.structured_logging = _parse_bool(structured)

        if max_size := os.environ.get("STOREFRONT_MCP_ARTIFACT_MAX_SIZE"):
            try:
                self.artifacts.artifact_max_size = int(max_size)
            except ValueError:
                pass
        if threshold := os.environ.get("STOREFRONT_MCP_SPLIT_THRESHOLD"):
            try:
                self.artifacts.split_threshold = int(threshold)
            except ValueError:
                pass
        if levels := os.environ.get("STOREFRONT_MCP_PRIORITY_LEVELS"):
            try:
                self.artifacts.priority_levels = int(levels)
            except ValueError:
                pass
        if skeleton := os.environ.get("STOREFRONT_MCP_SKELETON_LOADING"):
            self.artifacts.skeleton_loading = _parse_bool(skeleton)
        if feedback := os.environ.get("STOREFRONT_MCP_FEEDBACK_ENABLED"):
            self.artifacts.feedback_enabled = _parse_bool(feedback)
        if logical := os.environ.get("STOREFRONT_MCP_LOGICAL_DIVISION"):
            self.artifacts.use_logical_division = _parse_bool(logical)

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level, logging.INFO)
        configure_logging(
            level=level,
            format="structured" if self.structured_logging else "human",
        )


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config
