"""Tests for configuration section models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from bulkctl.config.models import BulkConfig, MarkersConfig
from bulkctl.domain.tokens import BlockMarkers


class TestMarkersConfig:
    def test_to_markers(self) -> None:
        assert MarkersConfig(open="<", close=">").to_markers() == BlockMarkers("<", ">")

    def test_empty_marker_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MarkersConfig(open="")

    def test_identical_markers_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must differ"):
            MarkersConfig(open="#", close="#")


class TestBulkConfig:
    def test_validate_sparse_dict(self) -> None:
        cfg = BulkConfig.model_validate({"file": {"enabled": False}})
        assert cfg.file.enabled is False
        assert cfg.file.prefix == "bulk"
        assert cfg.console.enabled is True
