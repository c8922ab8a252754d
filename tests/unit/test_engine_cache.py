"""
Test suite for engine caching.

System role: Verification of engine reuse per connection string
"""

from debitor_store.boundary.db.connection import get_engine


class TestGetEngine:
    """Test suite for get_engine()."""

    def test_get_engine_should_reuse_engine_per_url(self, tmp_path) -> None:
        """Test the same URL yields the same engine and different URLs do not."""
        first_url = f"sqlite:///{tmp_path / 'a.db'}"
        try:
            assert get_engine(first_url) is get_engine(first_url)
            assert get_engine(first_url) is not get_engine(f"sqlite:///{tmp_path / 'b.db'}")
        finally:
            get_engine.cache_clear()

    def test_get_engine_should_never_evict_engines(self, tmp_path) -> None:
        """Test many URLs do not push earlier engines out without disposal."""
        # Arrange
        first_url = f"sqlite:///{tmp_path / 'first.db'}"
        try:
            first = get_engine(first_url)

            # Act
            for i in range(40):
                get_engine(f"sqlite:///{tmp_path / f'other_{i}.db'}")

            # Assert
            assert get_engine.cache_info().maxsize is None
            assert get_engine(first_url) is first
        finally:
            get_engine.cache_clear()
