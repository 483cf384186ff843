from __future__ import annotations

import pytest

from rules.languages import (
    PATTERN_LANGUAGES,
    PatternLanguage,
    TreeLanguage,
    is_supported_path,
    language_for_path,
    lookup_language,
    supported_extensions,
)


@pytest.mark.parametrize(
    ("extension", "grammar"),
    [("js", "javascript"), ("jsx", "javascript"), ("ts", "typescript"), ("tsx", "tsx")],
)
def test_tree_family_extensions(extension: str, grammar: str) -> None:
    language = lookup_language(extension)

    assert isinstance(language, TreeLanguage)
    assert language.grammar == grammar


def test_header_aliases_share_cpp_rules() -> None:
    header = lookup_language("h")
    source = lookup_language("cpp")

    assert isinstance(header, PatternLanguage)
    assert header is source
    assert header.complexity == "braces"
    assert "function" in header.patterns


def test_objc_aliases_resolve() -> None:
    assert lookup_language("m") is lookup_language("mm")
    assert lookup_language("m") is PATTERN_LANGUAGES["objc"]


def test_lookup_normalizes_case_and_dot() -> None:
    assert lookup_language(".PY") is PATTERN_LANGUAGES["py"]


def test_unknown_extension_is_excluded() -> None:
    assert lookup_language("md") is None
    assert not is_supported_path("docs/README.md")
    assert not is_supported_path("Makefile")


def test_language_for_path_uses_last_suffix() -> None:
    language = language_for_path("src/widget.test.tsx")

    assert isinstance(language, TreeLanguage)
    assert language.grammar == "tsx"


def test_python_uses_indentation_strategy() -> None:
    language = lookup_language("py")

    assert isinstance(language, PatternLanguage)
    assert language.complexity == "indentation"


def test_every_alias_target_exists() -> None:
    for extension, language in PATTERN_LANGUAGES.items():
        if language.alias is not None:
            assert language.alias in PATTERN_LANGUAGES, extension
            assert lookup_language(extension) is not None


def test_supported_extensions_lists_tree_family_first() -> None:
    extensions = supported_extensions()

    assert extensions[:6] == ["js", "jsx", "mjs", "cjs", "ts", "tsx"]
    for extension in ("py", "java", "c", "h", "go", "rs", "swift", "kt"):
        assert extension in extensions
