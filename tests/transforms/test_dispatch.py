"""Tests for kind dispatch and cross-kind properties of the transforms."""

from __future__ import annotations

import pytest

from fileminifier.models import FileKind
from fileminifier.transforms import TRANSFORMS, UnsupportedKindError, minify, resolve_kind

SAMPLES = {
    FileKind.GENERIC_SOURCE: "<?php\n// note\nclass A {\n    public function b($c) {\n        return $c;\n    }\n}\n",
    FileKind.STRUCTURED_QUERY: "-- note\nSELECT *\nFROM users\n/* block */\nWHERE id = 1;\n",
    FileKind.SCRIPT: "// note\nfunction add(a, b) {\n    if (a) {\n        return a + b;\n    }\n}\n",
    FileKind.STYLE: "/* note */\nbody {\n    color:   red;\n}\n",
    FileKind.COMPOSITE_MARKUP: "<template>\n  <p>x</p>\n</template>\n<script>\nvar a = 1; // note\n</script>\n",
}


def test_every_kind_has_a_transform() -> None:
    assert set(TRANSFORMS) == set(FileKind)


@pytest.mark.parametrize("kind", list(FileKind))
def test_empty_and_blank_input_minify_to_empty(kind: FileKind) -> None:
    assert minify(kind, "") == ""
    assert minify(kind, "  \n\t \n") == ""


@pytest.mark.parametrize("kind", list(FileKind))
def test_minify_is_idempotent(kind: FileKind) -> None:
    once = minify(kind, SAMPLES[kind])
    assert minify(kind, once) == once


@pytest.mark.parametrize("kind", list(FileKind))
def test_comments_are_removed(kind: FileKind) -> None:
    result = minify(kind, SAMPLES[kind])
    assert "note" not in result
    assert "block" not in result


@pytest.mark.parametrize(
    "kind", [FileKind.GENERIC_SOURCE, FileKind.SCRIPT, FileKind.STYLE]
)
def test_no_double_spaces_survive(kind: FileKind) -> None:
    assert "  " not in minify(kind, SAMPLES[kind])


def test_minify_accepts_kind_value_strings() -> None:
    assert minify("style", "a { b: c; }") == "a{b:c}"
    assert resolve_kind("composite-markup") is FileKind.COMPOSITE_MARKUP


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(UnsupportedKindError) as excinfo:
        minify("python", "x = 1")
    assert "generic-source" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)
