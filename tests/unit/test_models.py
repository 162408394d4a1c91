"""domain.category 单元测试：CategoryEntry、CategoryMatch。"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from domain.category import CategoryEntry, CategoryMatch


class TestCategoryEntry:
    def test_strip_and_keywords_tuple(self) -> None:
        e = CategoryEntry(id=" abcat0502000 ", name=" Laptops ", keywords=[" laptop ", "", "notebook"])
        assert e.id == "abcat0502000"
        assert e.name == "Laptops"
        assert e.keywords == ("laptop", "notebook")
        assert e.parent_name is None

    def test_display_name(self) -> None:
        child = CategoryEntry(id="1", name="Laptops", parent_name="Computers & Tablets")
        top = CategoryEntry(id="2", name="Appliances")
        assert child.display_name == "Computers & Tablets > Laptops"
        assert top.display_name == "Appliances"
        assert "Laptops" in str(child)

    def test_frozen(self) -> None:
        e = CategoryEntry(id="1", name="TVs")
        with pytest.raises(ValidationError):
            e.name = "Other"  # type: ignore[misc]


class TestCategoryMatch:
    def test_exact_flag(self) -> None:
        e = CategoryEntry(id="1", name="TVs")
        assert CategoryMatch(category=e, score=1.0).is_exact_match is True
        assert CategoryMatch(category=e, score=0.9).is_exact_match is False

    def test_shares_entry_instance(self) -> None:
        e = CategoryEntry(id="1", name="TVs")
        assert CategoryMatch(category=e, score=0.5).category is e

    def test_score_bounds(self) -> None:
        e = CategoryEntry(id="1", name="TVs")
        with pytest.raises(ValidationError):
            CategoryMatch(category=e, score=1.5)
        with pytest.raises(ValidationError):
            CategoryMatch(category=e, score=-0.1)
