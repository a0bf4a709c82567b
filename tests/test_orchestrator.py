"""Tests for the run orchestration flows."""

from __future__ import annotations

from pathlib import Path

import pytest

from fileminifier.config import MinifyConfig, RuleOverride
from fileminifier.orchestrator import Orchestrator
from fileminifier.progress import NullProgress
from tests._fixtures.tree_builder import TreeBuilder

LARAVEL_TREE = {
    "app/Models/User.php": """
        <?php
        namespace App\\Models;

        class User extends Model
        {
            protected $fillable = ['name', 'email'];

            public function __construct()
            {
            }
        }
        """,
    "app/Services/MailService.php": """
        <?php
        namespace App\\Services;

        // Sends mail.
        class MailService
        {
        }
        """,
    "app/Http/Controllers/UserController.php": """
        <?php
        namespace App\\Http\\Controllers;

        class UserController extends Controller
        {
            public function index() { return view('users'); }
        }
        """,
    "app/Providers/AppServiceProvider.php": "<?php class AppServiceProvider {}\n",
    "app/Providers/RouteServiceProvider.php": "<?php class RouteServiceProvider {}\n",
    "app/Http/Middleware/Authenticate.php": "<?php class Authenticate {}\n",
    "config/app.php": "<?php return [];\n",
    "resources/js/app.js": "console.log('ignored');\n",
}


def _orchestrator(**kwargs: object) -> Orchestrator:
    return Orchestrator(progress=NullProgress(), **kwargs)


def test_process_single_file_writes_beside_source(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"app.js": "// entry\nfunction f(a, b) {\n  return a+b;\n}\n"})
    source = tree_builder.path("app.js")

    summary = _orchestrator().process(source)

    target = tree_builder.path("minified/app.js")
    assert summary.ok
    assert (summary.total, summary.succeeded, summary.failed) == (1, 1, 0)
    assert summary.output_path == target
    assert target.read_text(encoding="utf-8") == "function f(a,b){return a+b;}"
    assert summary.bytes_saved == source.stat().st_size - target.stat().st_size


def test_process_single_file_treats_output_as_directory(
    tree_builder: TreeBuilder, tmp_path: Path
) -> None:
    tree_builder.write({"site.css": "a { color: red; }\n"})

    summary = _orchestrator().process(tree_builder.path("site.css"), tmp_path / "dist")

    assert summary.ok
    assert (tmp_path / "dist" / "site.css").read_text(encoding="utf-8") == "a{color:red}"


def test_process_rejects_unsupported_file(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"notes.txt": "hello\n"})

    summary = _orchestrator().process(tree_builder.path("notes.txt"))

    assert not summary.ok
    assert summary.error == "Unsupported file type: txt"
    assert not tree_builder.path("minified").exists()


def test_process_reports_missing_source(tmp_path: Path) -> None:
    summary = _orchestrator().process(tmp_path / "missing.php")

    assert not summary.ok
    assert summary.total == 0
    assert summary.error is not None and "not found" in summary.error


def test_process_directory_mirrors_tree_into_sibling_output(
    tree_builder: TreeBuilder, tmp_path: Path
) -> None:
    tree_builder.write(
        {
            "index.php": "<?php\n// home\necho 'hi';\n",
            "css/site.css": "/* main */\nbody {\n  margin: 0;\n}\n",
            "db/schema.sql": "-- schema\nSELECT *\nFROM users;\n",
            "README.md": "# not minified\n",
        }
    )
    progress = NullProgress()

    summary = Orchestrator(progress=progress).process(tree_builder.path())

    output = tmp_path / "minified"
    assert summary.ok
    assert (summary.total, summary.succeeded) == (3, 3)
    assert summary.output_path == output
    assert (output / "index.php").read_text(encoding="utf-8") == "<?php echo 'hi';"
    assert (output / "css" / "site.css").read_text(encoding="utf-8") == "body{margin:0}"
    assert (output / "db" / "schema.sql").read_text(encoding="utf-8") == "SELECT * FROM users;"
    assert not (output / "README.md").exists()
    assert (progress.processed, progress.total) == (3, 3)


def test_process_directory_skips_output_inside_source(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"a.js": "a();\n"})
    output = tree_builder.path("build")

    first = _orchestrator().process(tree_builder.path(), output)
    second = _orchestrator().process(tree_builder.path(), output)

    assert first.total == second.total == 1
    assert (output / "a.js").exists()
    assert not (output / "build").exists()


def test_process_directory_honours_config_excludes(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            ".fileminifier.yml": "exclude_paths: ['vendor/']\n",
            "a.js": "a();\n",
            "vendor/lib.js": "lib();\n",
        }
    )

    summary = _orchestrator().process(tree_builder.path())

    assert summary.total == 1


def test_process_directory_without_supported_files(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"notes.txt": "hello\n"})

    summary = _orchestrator().process(tree_builder.path())

    assert not summary.ok
    assert summary.error == "No supported files found in directory."


def test_process_directory_counts_write_failures(
    tree_builder: TreeBuilder, tmp_path: Path
) -> None:
    tree_builder.write({"a.js": "a();\n", "b.css": "b{}\n"})
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    summary = _orchestrator().process(tree_builder.path(), blocker)

    assert not summary.ok
    assert (summary.total, summary.succeeded, summary.failed) == (2, 0, 2)


def test_process_directory_combined(tree_builder: TreeBuilder, tmp_path: Path) -> None:
    tree_builder.write(
        {
            "app.js": "// Main application file\nconst app = { init() {} };\napp.init();\n",
            "styles/site.css": "/* Main styles */\nbody { margin: 0; }\n",
            "utils.js": "// Utility functions\nfunction formatCurrency(v) {\n  return v;\n}\n",
        }
    )

    summary = _orchestrator().process(tree_builder.path(), combine=True)

    output_file = tmp_path / "minified" / "project.combined.min.js"
    assert summary.ok
    assert summary.output_path == output_file
    assert summary.group_counts == {"script": 2, "style": 1}
    text = output_file.read_text(encoding="utf-8")
    assert text == (
        "/* File: app.js */const app={init(){}};app.init();\n"
        "/* File: utils.js */function formatCurrency(v){return v;}\n"
        "/* File: styles/site.css */body{margin:0}"
    )
    assert summary.output_size == output_file.stat().st_size


def test_process_directory_combined_explicit_output(
    tree_builder: TreeBuilder, tmp_path: Path
) -> None:
    tree_builder.write({"a.js": "a();\n"})
    target = tmp_path / "dist" / "bundle.js"

    summary = _orchestrator().process(tree_builder.path(), target, combine=True)

    assert summary.ok
    assert target.read_text(encoding="utf-8") == "/* File: a.js */a();"


def test_process_laravel_directory(tree_builder: TreeBuilder, tmp_path: Path) -> None:
    tree_builder.write(LARAVEL_TREE)

    summary = _orchestrator().process(tree_builder.path(), framework="laravel")

    output = tmp_path / "minified"
    assert summary.ok
    assert (summary.total, summary.succeeded, summary.skipped) == (7, 4, 3)
    user = (output / "app" / "Models" / "User.php").read_text(encoding="utf-8")
    assert user == "<?php namespace App\\Models;class User extends Model{}"
    assert (output / "app" / "Providers" / "AppServiceProvider.php").exists()
    assert not (output / "app" / "Providers" / "RouteServiceProvider.php").exists()
    assert not (output / "app" / "Http" / "Middleware" / "Authenticate.php").exists()
    assert not (output / "config").exists()
    assert not (output / "resources").exists()


def test_process_laravel_combined(tree_builder: TreeBuilder, tmp_path: Path) -> None:
    tree_builder.write(LARAVEL_TREE)

    summary = _orchestrator().process(tree_builder.path(), combine=True, framework="laravel")

    output_file = tmp_path / "minified" / "combined.laravel.php"
    assert summary.ok
    assert summary.output_path == output_file
    assert summary.group_counts == {
        "models": 1,
        "services": 1,
        "events": 0,
        "listeners": 0,
        "controllers": 1,
        "other": 1,
    }
    text = output_file.read_text(encoding="utf-8")
    assert text.startswith("<?php\n/**\n * Combined Laravel files - Generated by FileMinifier")
    assert text.count("<?php") == 1
    assert text.index("// models") < text.index("// services") < text.index("// controllers")
    assert text.index("// controllers") < text.index("// other")
    assert "/* File: app/Models/User.php */\nnamespace App\\Models;class User extends Model{}" in text
    assert "class UserController extends Controller" in text
    assert "class Authenticate" not in text
    assert "class RouteServiceProvider" not in text
    assert "$fillable" not in text
    assert "__construct()" not in text


def test_process_framework_uses_configured_overrides(
    tree_builder: TreeBuilder, tmp_path: Path
) -> None:
    tree_builder.write(LARAVEL_TREE)
    config = MinifyConfig(
        root=tree_builder.path(),
        rules={"laravel": RuleOverride(include=[r"Models/"])},
    )

    summary = _orchestrator(config=config).process(tree_builder.path(), framework="laravel")

    assert (summary.succeeded, summary.skipped) == (1, 6)
    assert (tmp_path / "minified" / "app" / "Models" / "User.php").exists()


def test_process_framework_without_candidate_files(tree_builder: TreeBuilder) -> None:
    tree_builder.write({"app.js": "a();\n"})

    summary = _orchestrator().process(tree_builder.path(), framework="laravel")

    assert not summary.ok
    assert summary.total == 0


def test_process_directory_combined_output_inside_source_subdirectory(
    tree_builder: TreeBuilder,
) -> None:
    tree_builder.write({"a.js": "var a = 1;\n", "lib/b.js": "var b = 2;\n"})
    target = tree_builder.path("lib/all.js")
    target.write_text("/* File: stale.js */stale();", encoding="utf-8")

    summary = _orchestrator().process(tree_builder.path(), target, combine=True)

    assert summary.ok
    assert summary.total == 2
    assert target.read_text(encoding="utf-8") == (
        "/* File: a.js */var a=1;\n/* File: lib/b.js */var b=2;"
    )


def test_process_laravel_combined_output_inside_models_directory(
    tree_builder: TreeBuilder,
) -> None:
    tree_builder.write({"app/Models/User.php": "<?php\nclass User\n{\n}\n"})
    target = tree_builder.path("app/Models/bundle.php")

    summary = _orchestrator().process(
        tree_builder.path(), target, combine=True, framework="laravel"
    )

    assert summary.ok
    assert (summary.total, summary.succeeded) == (1, 1)
    assert summary.group_counts["models"] == 1
    assert "/* File: app/Models/User.php */" in target.read_text(encoding="utf-8")


def test_process_single_file_reports_read_failure(
    tree_builder: TreeBuilder, monkeypatch: pytest.MonkeyPatch
) -> None:
    tree_builder.write({"app.js": "a();\n"})
    source = tree_builder.path("app.js")

    def unreadable(self: Path) -> bytes:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_bytes", unreadable)
    summary = _orchestrator().process(source)

    assert not summary.ok
    assert (summary.total, summary.failed) == (1, 1)
    assert summary.error == f"Failed to read source file: {source}"
    assert not tree_builder.path("minified/app.js").exists()
