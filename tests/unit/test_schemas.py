"""models.schemas 单元测试：配置各节、MatchResult、RunConfigSchema。"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from models.schemas import (
    AppConfigSchema,
    BestBuySection,
    FallbackSection,
    MatchResult,
    MatchingSection,
    RunConfigSchema,
)


class TestMatchingSection:
    def test_defaults(self) -> None:
        m = MatchingSection()
        assert m.find_threshold == 0.3
        assert m.list_threshold == 0.2
        assert m.list_limit == 10
        assert m.suggest_threshold == 0.4
        assert m.suggest_word_threshold == 0.5
        assert m.suggest_min_word_length == 3

    def test_bounds(self) -> None:
        with pytest.raises(ValidationError):
            MatchingSection(find_threshold=1.5)
        with pytest.raises(ValidationError):
            MatchingSection(list_limit=0)


class TestFallbackSection:
    def test_unbounded_by_default(self) -> None:
        f = FallbackSection()
        assert f.max_entries is None
        assert f.ttl_seconds is None

    def test_invalid(self) -> None:
        with pytest.raises(ValidationError):
            FallbackSection(max_entries=0)


class TestBestBuySection:
    def test_strip_and_slash(self) -> None:
        b = BestBuySection(base_url=" https://api.example.com/v1/ ", api_key=None)
        assert b.base_url == "https://api.example.com/v1"
        assert b.api_key == ""

    def test_resolve_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_BB_KEY", " env-key ")
        assert BestBuySection(api_key_env="MY_BB_KEY").resolve_api_key() == "env-key"
        assert BestBuySection(api_key="cfg-key", api_key_env="MY_BB_KEY").resolve_api_key() == "cfg-key"
        monkeypatch.delenv("MY_BB_KEY")
        assert BestBuySection(api_key_env="MY_BB_KEY").resolve_api_key() == ""


class TestAppConfigSchema:
    def test_none_sections(self) -> None:
        cfg = AppConfigSchema.model_validate({"matching": None, "app": None})
        assert cfg.matching == MatchingSection()
        assert cfg.app.result_sheet_title == "匹配结果"


class TestMatchResult:
    def test_matched_row(self) -> None:
        r = MatchResult(
            query=" laptop ",
            category_id="abcat0502000",
            category_name="Laptops",
            parent_name="Computers & Tablets",
            score=0.9,
            method="本地",
        )
        assert r.matched is True
        assert r.to_result_row() == ("laptop", "abcat0502000", "Laptops", "Computers & Tablets", "0.9000", "本地")

    def test_unmatched_row(self) -> None:
        r = MatchResult(query="widget", parent_name=None, method="未匹配")
        assert r.matched is False
        row = r.to_result_row()
        assert len(row) == 6
        assert row[4] == ""
        assert row[3] == ""

    def test_remote_row_has_no_score(self) -> None:
        r = MatchResult(query="drone", category_id="x", category_name="Drones", method="远端")
        assert r.to_result_row()[4] == ""


class TestRunConfigSchema:
    def test_defaults(self) -> None:
        c = RunConfigSchema(output_dir=Path("/out"), log_dir=Path("/log"))
        assert c.sheet_title == "匹配结果"
