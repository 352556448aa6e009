"""Tests for URL slugs"""
import pytest

from pglocks.export.slug import to_url_slug


class TestToUrlSlug:
    """Test the name -> slug transform"""

    @pytest.mark.parametrize(
        "name, slug",
        [
            ("SELECT FOR UPDATE", "select-for-update"),
            ("ALTER TABLE SET/DROP DEFAULT", "alter-table-set-drop-default"),
            ("UPDATE (NO KEYS)", "update-no-keys"),
            ("ACCESS EXCLUSIVE", "access-exclusive"),
            (
                "ALTER TABLE DETACH PARTITION CONCURRENTLY (TARGET/DEFAULT)",
                "alter-table-detach-partition-concurrently-target-default",
            ),
            (
                "ALTER TABLE ENABLE/DISABLE ROW LEVEL SECURITY",
                "alter-table-enable-disable-row-level-security",
            ),
            ("ALTER TABLE SET N_DISTINCT", "alter-table-set-n_distinct"),
        ],
    )
    def test_known_names(self, name, slug):
        assert to_url_slug(name) == slug

    def test_plus_sign(self):
        assert to_url_slug("C++ THING") == "cplusplus-thing"

    def test_punctuation_and_edges(self):
        assert to_url_slug("  Leading: trailing.  ") == "leading-trailing"
        assert to_url_slug("A -- B") == "a-b"
        assert to_url_slug("a, b") == "a-b"

    def test_deterministic(self):
        assert to_url_slug("SHARE ROW EXCLUSIVE") == to_url_slug("SHARE ROW EXCLUSIVE")

    def test_url_safe(self, catalog):
        for name in catalog.command_names() + catalog.lock_names():
            slug = to_url_slug(name)
            assert slug
            assert all(ch.isalnum() or ch in "-_" for ch in slug), slug
            assert "--" not in slug
            assert not slug.startswith("-") and not slug.endswith("-")

    def test_bundled_slugs_are_unique(self, catalog):
        command_slugs = [to_url_slug(name) for name in catalog.command_names()]
        lock_slugs = [to_url_slug(name) for name in catalog.lock_names()]
        assert len(set(command_slugs)) == len(command_slugs)
        assert len(set(lock_slugs)) == len(lock_slugs)
