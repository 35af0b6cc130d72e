"""
Unit tests for admin config management.
"""

from unittest.mock import AsyncMock, patch

import pytest

from migration_api.modules.app_config.models import AppConfig
from migration_api.modules.app_config.service import (
    ensure_default_configs,
    get_all_configs,
    update_configs,
)

SERVICE = "migration_api.modules.app_config.service"


class TestEnsureDefaults:
    """Tests for ensure_default_configs function."""

    @pytest.mark.asyncio
    async def test_only_missing_defaults_are_created(self, mock_db):
        """Seed only the defaults that have no row yet."""
        existing = AppConfig(key="require_document_validation", value="false")

        async def get_by_key(db, key):
            return existing if key == existing.key else None

        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.get_by_key = AsyncMock(side_effect=get_by_key)
            mock_repo.create = AsyncMock()
            await ensure_default_configs(mock_db)

        mock_repo.create.assert_awaited_once()
        assert mock_repo.create.call_args.args[1:3] == ("admin_application_document", "true")


class TestGetAllConfigs:
    """Tests for get_all_configs function."""

    @pytest.mark.asyncio
    async def test_returns_booleans(self, mock_db):
        """Stored string values come back as booleans keyed by flag."""
        rows = [
            AppConfig(key="admin_application_document", value="true"),
            AppConfig(key="require_document_validation", value="false"),
        ]

        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.get_by_key = AsyncMock(side_effect=rows[::-1])
            mock_repo.get_all = AsyncMock(return_value=rows)
            result = await get_all_configs(mock_db)

        assert result.data == {
            "admin_application_document": True,
            "require_document_validation": False,
        }
        mock_db.commit.assert_awaited_once()


class TestUpdateConfigs:
    """Tests for update_configs function."""

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, mock_db):
        """Reject an update with no flags in it."""
        result = await update_configs(mock_db, {})

        assert result.status_code == 400
        assert result.message == "No configuration updates provided"

    @pytest.mark.asyncio
    async def test_update_evicts_cache(self, mock_db, mock_redis):
        """Successfully store the flag and drop its cache entry."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.set_value = AsyncMock()
            result = await update_configs(
                mock_db, {"require_document_validation": False}, redis=mock_redis
            )

        assert result.success is True
        mock_repo.set_value.assert_awaited_once_with(
            mock_db, "require_document_validation", "false"
        )
        mock_db.commit.assert_awaited_once()
        mock_redis.delete.assert_awaited_once_with("app_config:require_document_validation")

    @pytest.mark.asyncio
    async def test_cache_failure_does_not_fail_update(self, mock_db, mock_redis):
        """A Redis outage during eviction still reports success."""
        mock_redis.delete.side_effect = ConnectionError("redis down")

        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.set_value = AsyncMock()
            result = await update_configs(
                mock_db, {"admin_application_document": True}, redis=mock_redis
            )

        assert result.success is True

    @pytest.mark.asyncio
    async def test_write_failure_rolls_back(self, mock_db, mock_redis):
        """Roll back and leave the cache alone when the write fails."""
        with patch(f"{SERVICE}.repository") as mock_repo:
            mock_repo.set_value = AsyncMock(side_effect=RuntimeError("db down"))
            result = await update_configs(
                mock_db, {"admin_application_document": True}, redis=mock_redis
            )

        assert result.status_code == 500
        mock_db.rollback.assert_awaited_once()
        mock_redis.delete.assert_not_called()
