"""CLI tests for the sfgenerate entry point."""

import subprocess
import sys
from pathlib import Path

import pytest

from sfgen import __version__
from sfgen.frontend.generate import EXTENSIONS
from sfgen.frontend.localization import LocalizationOption
from sfgen.sfgenerate import main, parse_args

ROOT_DIR = Path(__file__).parent.parent


def run_main(argv: list[str], capsys) -> tuple[int, str, str]:
    """Run main() in-process. Returns (exit_code, stdout, stderr)."""
    try:
        code = main(argv)
    except SystemExit as e:
        code = e.code if isinstance(e.code, int) else 1
    captured = capsys.readouterr()
    return code, captured.out, captured.err


# ============================================================
# ARGUMENT PARSING
# ============================================================


def test_defaults():
    options, resources, output_file = parse_args([])
    assert options.access_modifier == "internal"
    assert options.enabled_extensions == EXTENSIONS
    assert options.export_semantic_symbols is True
    assert options.localization == LocalizationOption.NONE
    assert output_file is None
    assert resources.name == "Resources"


@pytest.mark.parametrize(
    "flag,expected",
    [
        ("-a", LocalizationOption.LANGUAGE_CODE | LocalizationOption.RIGHT_TO_LEFT),
        ("--export-all", LocalizationOption.LANGUAGE_CODE | LocalizationOption.RIGHT_TO_LEFT),
        ("--export-all-localizations", LocalizationOption.LANGUAGE_CODE | LocalizationOption.RIGHT_TO_LEFT),
        ("-l", LocalizationOption.LANGUAGE_CODE),
        ("--export-lang", LocalizationOption.LANGUAGE_CODE),
        ("--export-language-code", LocalizationOption.LANGUAGE_CODE),
        ("-r", LocalizationOption.RIGHT_TO_LEFT),
        ("--export-rtl", LocalizationOption.RIGHT_TO_LEFT),
        ("--export-right-to-left", LocalizationOption.RIGHT_TO_LEFT),
    ],
)
def test_localization_flags(flag: str, expected: LocalizationOption):
    options, _, _ = parse_args([flag])
    assert options.localization == expected


def test_localization_flags_combine():
    options, _, _ = parse_args(["-l", "-r"])
    assert options.localization == LocalizationOption.LANGUAGE_CODE | LocalizationOption.RIGHT_TO_LEFT


def test_semantic_flags_last_wins():
    options, _, _ = parse_args(["--no-export-semantic-symbols"])
    assert options.export_semantic_symbols is False
    options, _, _ = parse_args(["--no-export-semantic-symbols", "-s"])
    assert options.export_semantic_symbols is True
    options, _, _ = parse_args(["--export-semantic-symbols", "--no-export-semantic-symbols"])
    assert options.export_semantic_symbols is False


def test_enabled_extensions_repeatable():
    options, _, _ = parse_args(["--enabled-extensions", "UIKit", "--enabled-extensions", "SwiftUI"])
    assert options.enabled_extensions == ("UIKit", "SwiftUI")


def test_resources_and_output(tmp_path: Path):
    out = str(tmp_path / "Symbols.swift")
    options, resources, output_file = parse_args(["--resources", str(tmp_path), "-o", out, "--access-modifier", "public"])
    assert resources == tmp_path
    assert output_file == out
    assert options.access_modifier == "public"


# ============================================================
# USAGE ERRORS
# ============================================================


def test_help(capsys):
    code, out, _ = run_main(["--help"], capsys)
    assert code == 0
    assert out.startswith("sfgenerate [OPTIONS]")


def test_version(capsys):
    code, out, _ = run_main(["-v"], capsys)
    assert code == 0
    assert out.strip() == __version__


def test_unknown_flag(capsys):
    code, _, err = run_main(["--bogus"], capsys)
    assert code == 2
    assert err == "error: unknown flag '--bogus'\n"


def test_unexpected_argument(capsys):
    code, _, err = run_main(["extra"], capsys)
    assert code == 2
    assert err == "error: unexpected argument 'extra'\n"


def test_missing_value(capsys):
    code, _, err = run_main(["--resources"], capsys)
    assert code == 2
    assert err == "error: --resources requires an argument\n"


def test_unknown_extension(capsys):
    code, _, err = run_main(["--enabled-extensions", "WatchKit"], capsys)
    assert code == 2
    assert err == "error: unknown extension 'WatchKit'\n"


def test_unknown_access_modifier(capsys):
    code, _, err = run_main(["--access-modifier", "open"], capsys)
    assert code == 2
    assert err == "error: unknown access modifier 'open'\n"


# ============================================================
# GENERATION
# ============================================================


def test_generate_to_stdout(resources: Path, capsys):
    code, out, err = run_main(["--resources", str(resources), "--enabled-extensions", "UIKit"], capsys)
    assert code == 0
    assert err == ""
    assert out.startswith("import Foundation\n")
    assert "static var messageCircle: SFSymbolResource {" in out
    assert "static var messageCircle: UIKit.UIImage {" in out
    assert "recordCircleFillJa" not in out


def test_semantic_aliases_exported_unless_disabled(resources: Path, capsys):
    code, out, _ = run_main(["--resources", str(resources), "--enabled-extensions", "UIKit"], capsys)
    assert code == 0
    assert "static var chatBubble: SFSymbolResource {" in out
    assert "static var chatBubble: UIKit.UIImage {" in out
    code, out, _ = run_main(["--resources", str(resources), "--no-export-semantic-symbols"], capsys)
    assert code == 0
    assert "chatBubble" not in out


def test_generate_all_localizations(resources: Path, capsys):
    code, out, _ = run_main(["--resources", str(resources), "-a"], capsys)
    assert code == 0
    assert "static var recordCircleFillJa: SFSymbolResource {" in out
    assert "static var arrowLeftRtl: SFSymbolResource {" in out


def test_generate_to_file(resources: Path, tmp_path: Path, capsys):
    out_file = tmp_path / "Symbols.swift"
    code, out, _ = run_main(["--resources", str(resources), "-o", str(out_file)], capsys)
    assert code == 0
    assert out == ""
    assert out_file.read_text(encoding="utf-8").startswith("import Foundation\n")


def test_unwritable_output(resources: Path, tmp_path: Path, capsys):
    target = str(tmp_path / "missing" / "Symbols.swift")
    code, _, err = run_main(["--resources", str(resources), "-o", target], capsys)
    assert code == 1
    assert err == f"error: cannot write '{target}'\n"


def test_missing_resources(tmp_path: Path, capsys):
    code, out, err = run_main(["--resources", str(tmp_path / "nope")], capsys)
    assert code == 1
    assert out == ""
    assert err.startswith("error: ")
    assert "resource directory not found" in err


def test_missing_availability_reported(tmp_path: Path, capsys):
    from conftest import write_resources

    write_resources(tmp_path, symbols={"orphan": "1999"})
    code, _, err = run_main(["--resources", str(tmp_path)], capsys)
    assert code == 1
    assert "orphan" in err


def test_empty_selection_warns(tmp_path: Path, capsys):
    from conftest import write_resources

    write_resources(tmp_path, symbols={"a.book.ja": "2019"})
    code, out, err = run_main(["--resources", str(tmp_path)], capsys)
    assert code == 0
    assert err == "warning: no symbols selected for export\n"
    assert "extension SFSymbolResource {}" in out


def test_module_entry_point():
    result = subprocess.run(
        [sys.executable, "-m", "sfgen", "--version"],
        capture_output=True,
        text=True,
        cwd=ROOT_DIR,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == __version__
