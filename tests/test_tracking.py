"""Tests for errkit.tracking module."""

import asyncio
import uuid

import pytest

from errkit.tracking import (
    get_tracking_id,
    new_tracking_id,
    reset_tracking_id,
    set_tracking_id,
    tracking_scope,
)


class TestTrackingContext:
    """Tests for tracking id context functions."""

    def test_empty_by_default(self):
        """Test that no tracking id is set outside a scope."""
        assert get_tracking_id() == ""

    def test_new_tracking_id_is_uuid(self):
        """Test that generated ids are UUIDs."""
        value = new_tracking_id()

        assert str(uuid.UUID(value)) == value
        assert new_tracking_id() != value

    def test_set_and_reset(self):
        """Test setting and resetting the tracking id."""
        token = set_tracking_id("abc")
        assert get_tracking_id() == "abc"

        reset_tracking_id(token)
        assert get_tracking_id() == ""

    def test_set_empty_generates_id(self):
        """Test that an empty value generates a new id."""
        token = set_tracking_id("")
        try:
            assert get_tracking_id() != ""
        finally:
            reset_tracking_id(token)

    def test_scope_restores_previous(self):
        """Test that nested scopes restore the previous id."""
        with tracking_scope("outer") as outer:
            assert outer == "outer"
            with tracking_scope("inner"):
                assert get_tracking_id() == "inner"
            assert get_tracking_id() == "outer"

        assert get_tracking_id() == ""

    def test_scope_generates_id(self):
        """Test that a scope without an id generates one."""
        with tracking_scope() as tracking_id:
            assert tracking_id
            assert get_tracking_id() == tracking_id

    def test_scope_restores_on_error(self):
        """Test that the id is restored when the block raises."""
        with pytest.raises(RuntimeError):
            with tracking_scope("failing"):
                raise RuntimeError("boom")

        assert get_tracking_id() == ""

    @pytest.mark.asyncio
    async def test_tasks_are_isolated(self):
        """Test that concurrent tasks keep their own tracking ids."""

        async def worker(tracking_id: str) -> str:
            with tracking_scope(tracking_id):
                await asyncio.sleep(0)
                return get_tracking_id()

        results = await asyncio.gather(worker("a"), worker("b"), worker("c"))

        assert results == ["a", "b", "c"]
