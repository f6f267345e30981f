"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bulkctl.toml only contains
overrides.  An empty or missing file gives console and file output with
``{`` / ``}`` block markers.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from bulkctl.domain.tokens import BlockMarkers


class ConsoleConfig(BaseModel):
    """[console] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class FileConfig(BaseModel):
    """[file] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    directory: Path = Path(".")
    prefix: str = "bulk"
    suffix: str = ".log"


class MarkersConfig(BaseModel):
    """[markers] section."""

    model_config = {"frozen": True}

    open: str = Field(default="{", min_length=1)
    close: str = Field(default="}", min_length=1)

    @model_validator(mode="after")
    def _distinct(self) -> MarkersConfig:
        if self.open == self.close:
            msg = f"open and close markers must differ (both are {self.open!r})"
            raise ValueError(msg)
        return self

    def to_markers(self) -> BlockMarkers:
        return BlockMarkers(open=self.open, close=self.close)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: Path = Path(".bulkctl") / "plugins"


class BulkConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    console: ConsoleConfig = Field(default_factory=ConsoleConfig)
    file: FileConfig = Field(default_factory=FileConfig)
    markers: MarkersConfig = Field(default_factory=MarkersConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
