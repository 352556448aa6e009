"""Tests for natural-language descriptions"""
import pytest

from pglocks.catalog import catalog_from_dict
from pglocks.engine import (
    CONFLICTS_LIST_LIMIT,
    USES_LIST_LIMIT,
    DescriptionGenerator,
    RelationshipEngine,
)
from pglocks.models import Description, DescriptionBuilder


def _hub_generator(user_count):
    """HUB is taken by `user_count` commands, EDGE declares a conflict with HUB"""
    document = {
        "version": 1,
        "locks": [
            {"name": "HUB", "type": "table", "description": "Hub lock."},
            {"name": "EDGE", "type": "table", "description": "Edge lock."},
        ],
        "commands": [
            {"name": f"C{i}", "description": "", "locks": ["HUB"]}
            for i in range(1, user_count + 1)
        ],
        "conflicts": {"EDGE": ["HUB"]},
    }
    return DescriptionGenerator(RelationshipEngine(catalog_from_dict(document)))


class TestDescriptionModel:
    """Test span rendering"""

    def test_builder_merges_plain_text(self):
        description = (
            DescriptionBuilder().strong("A").text(" and ").text("more ").strong("B").build("A")
        )
        assert [span.text for span in description.spans] == ["A", " and more ", "B"]
        assert description.to_markdown() == "**A** and more **B**"
        assert description.to_plain() == "A and more B"
        assert description.emphasized_terms() == ["A", "B"]
        assert str(description) == description.to_markdown()

    def test_empty_text_is_skipped(self):
        description = DescriptionBuilder().text("").strong("X").text("").build("X")
        assert len(description.spans) == 1

    def test_limits(self):
        assert USES_LIST_LIMIT == 3
        assert CONFLICTS_LIST_LIMIT == 4


class TestDescribeCommand:
    """Test command descriptions"""

    def test_single_lock(self, descriptions):
        description = descriptions.describe_command("SELECT")
        assert isinstance(description, Description)
        assert description.subject == "SELECT"
        assert description.to_markdown() == (
            "**SELECT** is a PostgreSQL command. "
            "Read data from table; acquires ACCESS SHARE table lock. "
            "This command requires the **ACCESS SHARE** lock. "
            "**ACCESS SHARE** is required because read-only table lock acquired by "
            "select and copy to; only conflicts with access exclusive."
        )

    def test_no_double_period(self, descriptions):
        """Lock descriptions ending in a period do not produce '..'"""
        for name in ("VACUUM FULL", "CREATE INDEX", "INSERT"):
            assert ".." not in descriptions.describe_command(name).to_markdown()

    def test_several_locks(self, tiny_engine):
        description = DescriptionGenerator(tiny_engine).describe_command("BOTH")
        assert description.to_markdown() == (
            "**BOTH** is a PostgreSQL command. Takes two locks. "
            "This command requires **ALPHA** and **GAMMA** locks. "
            "**ALPHA** is required because first test lock; "
            "**GAMMA** is required for this operation."
        )

    def test_no_locks(self, tiny_engine):
        """Both lock sentences are left out"""
        description = DescriptionGenerator(tiny_engine).describe_command("IDLE")
        assert description.to_markdown() == "**IDLE** is a PostgreSQL command. Takes nothing. "

    def test_unknown(self, descriptions):
        assert descriptions.describe_command("NOPE") is None
        assert descriptions.describe_command("ACCESS SHARE") is None


class TestDescribeLock:
    """Test lock descriptions"""

    def test_access_share(self, descriptions, engine):
        blocked = len(engine.commands_conflicting_with_lock("ACCESS SHARE"))
        description = descriptions.describe_lock("ACCESS SHARE")
        assert description.to_markdown() == (
            "**ACCESS SHARE** is a table lock. "
            "Read-only table lock acquired by SELECT and COPY TO; "
            "only conflicts with ACCESS EXCLUSIVE. "
            "The **SELECT** and **COPY TO** commands acquire this lock. "
            f"This lock conflicts with **{blocked}** commands, including "
            f"**DROP TABLE, TRUNCATE, REINDEX, CLUSTER** and {blocked - 4} others."
        )

    def test_access_exclusive(self, descriptions, engine, catalog):
        users = len(engine.commands_using_lock("ACCESS EXCLUSIVE"))
        markdown = descriptions.describe_lock("ACCESS EXCLUSIVE").to_markdown()
        assert (
            f"**{users}** commands acquire this lock, including "
            f"**DROP TABLE, TRUNCATE, REINDEX** and {users - 3} others. "
        ) in markdown
        # Every command takes a table lock, so all of them are blocked
        assert markdown.endswith(
            f"This lock conflicts with **{len(catalog.commands)}** commands, including "
            f"**SELECT, COPY TO, SELECT FOR UPDATE, SELECT FOR NO KEY UPDATE** and "
            f"{len(catalog.commands) - 4} others."
        )

    def test_single_user(self, descriptions):
        markdown = descriptions.describe_lock("SHARE").to_markdown()
        assert "The **CREATE INDEX** command acquires this lock. " in markdown

    def test_row_lock_without_commands(self, descriptions):
        markdown = descriptions.describe_lock("FOR UPDATE").to_markdown()
        assert markdown.startswith("**FOR UPDATE** is a row lock. ")
        assert markdown.endswith(
            "No commands acquire this lock. This lock doesn't conflict with any commands."
        )

    def test_lock_without_description(self, tiny_engine):
        description = DescriptionGenerator(tiny_engine).describe_lock("ROWLOCK")
        assert description.to_markdown() == (
            "**ROWLOCK** is a row lock. No commands acquire this lock. "
            "This lock doesn't conflict with any commands."
        )

    def test_single_conflict(self, tiny_engine):
        description = DescriptionGenerator(tiny_engine).describe_lock("ALPHA")
        assert description.to_markdown() == (
            "**ALPHA** is a table lock. First test lock. "
            "The **READ** and **BOTH** commands acquire this lock. "
            "This lock conflicts with the **WRITE** command."
        )

    def test_conflict_declared_on_other_side(self, tiny_engine):
        """ALPHA lists BETA, so READ and BOTH block BETA too"""
        description = DescriptionGenerator(tiny_engine).describe_lock("BETA")
        assert description.to_markdown() == (
            "**BETA** is a table lock. Second test lock. "
            "The **WRITE** command acquires this lock. "
            "This lock conflicts with the **WRITE, READ** and **BOTH** commands."
        )

    @pytest.mark.parametrize(
        "user_count, expected",
        [
            (3, "The **C1, C2** and **C3** commands acquire this lock. "),
            (4, "**4** commands acquire this lock, including **C1, C2, C3** and 1 others. "),
        ],
    )
    def test_uses_cutoff(self, user_count, expected):
        markdown = _hub_generator(user_count).describe_lock("HUB").to_markdown()
        assert expected in markdown

    @pytest.mark.parametrize(
        "user_count, expected",
        [
            (2, "This lock conflicts with the **C1** and **C2** commands."),
            (4, "This lock conflicts with the **C1, C2, C3** and **C4** commands."),
            (
                5,
                "This lock conflicts with **5** commands, including **C1, C2, C3, C4** "
                "and 1 others.",
            ),
        ],
    )
    def test_conflicts_cutoff(self, user_count, expected):
        markdown = _hub_generator(user_count).describe_lock("EDGE").to_markdown()
        assert markdown.endswith(expected)

    def test_emphasized_terms(self, descriptions):
        terms = descriptions.describe_lock("SHARE").emphasized_terms()
        assert terms[0] == "SHARE"
        assert "CREATE INDEX" in terms

    def test_unknown(self, descriptions):
        assert descriptions.describe_lock("NOPE") is None
        assert descriptions.describe_lock("SELECT") is None
