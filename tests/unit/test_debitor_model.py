"""
Test suite for the Debitor model.

Tests defensive row mapping and the search predicate.

System role: Verification of the debitor data contract
"""

from debitor_store.models.debitor import Debitor


class TestDebitorFromRow:
    """Test suite for Debitor.from_row()."""

    def test_from_row_should_map_all_columns(self) -> None:
        """Test a complete row maps field by field."""
        debitor = Debitor.from_row({"id": 7, "name": "Acme Corp", "email": "x@acme.com"})

        assert debitor == Debitor(id=7, name="Acme Corp", email="x@acme.com")

    def test_from_row_should_default_null_columns(self) -> None:
        """Test NULL id/name/email become 0 and empty strings."""
        debitor = Debitor.from_row({"id": None, "name": None, "email": None})

        assert debitor.id == 0
        assert debitor.name == ""
        assert debitor.email == ""

    def test_from_row_should_tolerate_missing_columns(self) -> None:
        """Test absent keys behave like NULLs."""
        assert Debitor.from_row({"name": "Beta"}) == Debitor(id=0, name="Beta", email="")

    def test_from_row_should_convert_numeric_ids(self) -> None:
        """Test Oracle NUMBER ids (e.g. Decimal-like) become int."""
        from decimal import Decimal

        assert Debitor.from_row({"id": Decimal("12"), "name": "n", "email": None}).id == 12


class TestDebitorMatches:
    """Test suite for Debitor.matches()."""

    def test_matches_should_ignore_case_on_name(self) -> None:
        assert Debitor(name="Acme Corp").matches("ACME")

    def test_matches_should_check_email(self) -> None:
        assert Debitor(name="Beta", email="b@Beta.com").matches("beta.COM")

    def test_matches_should_skip_empty_email(self) -> None:
        assert not Debitor(name="Gamma", email="").matches("@")

    def test_none_email_should_become_empty(self) -> None:
        assert Debitor(name="Delta", email=None).email == ""
