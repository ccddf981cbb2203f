"""Tests for wren.routing.pattern — canonical patterns and matching."""

import pytest

from wren.routing.pattern import CompiledPattern, compile_pattern, split_path
from wren.routing.segments import parse_specification


def _compile(spec: str) -> CompiledPattern:
    return compile_pattern(parse_specification(spec))


class TestSplitPath:
    def test_root(self) -> None:
        assert split_path("/") == []
        assert split_path("") == []

    def test_trailing_and_repeated_slashes(self) -> None:
        assert split_path("/users//42/") == ["users", "42"]


class TestCanonicalPattern:
    @pytest.mark.parametrize(
        ("spec", "canonical"),
        [
            ("page.tsx", "/"),
            ("about/page.tsx", "/about"),
            ("api/v2/users/route.py", "/api/v2/users"),
            ("users/[id]", "/users/:id"),
            ("files/[...slug]", "/files/*slug"),
            ("(group)/dashboard", "/dashboard"),
            ("(pages)/page.tsx", "/"),
            ("(a)/shop/(b)/[sku]/page.py", "/shop/:sku"),
        ],
    )
    def test_rendering(self, spec: str, canonical: str) -> None:
        assert _compile(spec).canonical == canonical

    def test_no_trailing_separator(self) -> None:
        assert not _compile("users/").canonical.endswith("/")

    def test_param_names_in_order(self) -> None:
        pattern = _compile("orgs/[org]/repos/[repo]/blob/[...path]")
        assert pattern.param_names == ("org", "repo", "path")

    def test_groups_excluded_from_segments_kept_in_source(self) -> None:
        pattern = _compile("(admin)/settings")
        assert [s.value for s in pattern.segments] == ["settings"]
        assert [s.value for s in pattern.source] == ["admin", "settings"]

    def test_is_dynamic(self) -> None:
        assert _compile("users/[id]").is_dynamic is True
        assert _compile("users").is_dynamic is False

    def test_has_catch_all(self) -> None:
        assert _compile("files/[...slug]").has_catch_all is True
        assert _compile("files/[slug]").has_catch_all is False
        assert _compile("page").has_catch_all is False


class TestStaticMatch:
    @pytest.mark.parametrize("spec", ["about", "api/v2/users", "(g)/a/b/c"])
    def test_literal_join_matches_itself(self, spec: str) -> None:
        pattern = _compile(spec)
        assert pattern.match_path(pattern.canonical) == {}

    def test_root(self) -> None:
        assert _compile("page").match_path("/") == {}

    def test_root_does_not_match_subpath(self) -> None:
        assert _compile("page").match_path("/about") is None

    def test_case_sensitive(self) -> None:
        assert _compile("About").match_path("/about") is None

    def test_trailing_slash_ignored(self) -> None:
        assert _compile("users").match_path("/users/") == {}


class TestDynamicMatch:
    def test_binds_single_segment(self) -> None:
        assert _compile("users/[id]").match_path("/users/42") == {"id": "42"}

    def test_too_short(self) -> None:
        assert _compile("users/[id]").match_path("/users") is None

    def test_too_long(self) -> None:
        assert _compile("users/[id]").match_path("/users/42/extra") is None

    def test_static_mismatch(self) -> None:
        assert _compile("users/[id]").match_path("/posts/42") is None

    def test_multiple(self) -> None:
        pattern = _compile("users/[user_id]/posts/[post_id]")
        assert pattern.match_path("/users/1/posts/42") == {"user_id": "1", "post_id": "42"}


class TestCatchAllMatch:
    def test_captures_remaining_segments(self) -> None:
        pattern = _compile("files/[...slug]")
        assert pattern.match_path("/files/a/b/c") == {"slug": ("a", "b", "c")}

    def test_single_segment(self) -> None:
        assert _compile("files/[...slug]").match_path("/files/a") == {"slug": ("a",)}

    def test_requires_at_least_one_segment(self) -> None:
        assert _compile("files/[...slug]").match_path("/files") is None
        assert _compile("files/[...slug]").match_path("/files/") is None

    def test_with_dynamic_prefix(self) -> None:
        pattern = _compile("repos/[repo]/[...path]")
        assert pattern.match_path("/repos/wren/src/main.py") == {
            "repo": "wren",
            "path": ("src", "main.py"),
        }

    def test_static_prefix_must_match(self) -> None:
        assert _compile("files/[...slug]").match_path("/docs/a") is None

    def test_root_catch_all(self) -> None:
        pattern = _compile("[...rest]")
        assert pattern.canonical == "/*rest"
        assert pattern.match_path("/anything/at/all") == {"rest": ("anything", "at", "all")}
        assert pattern.match_path("/") is None
