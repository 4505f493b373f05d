"""CLI behavior tests.

Verifies how ``ddir.cli.main`` records descriptions and patterns, prints
lookups, and maps failures to exit codes without touching a bad store.
"""

from __future__ import annotations

import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from ddir import cli
from ddir.errors import ArgumentError
from ddir.store import EntryKind


def _run(argv: list[str]) -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    with (
        mock.patch.object(sys, "argv", ["ddir", *argv]),
        mock.patch("sys.stdout", stdout),
        mock.patch("sys.stderr", stderr),
    ):
        code = cli.main()
    return code, stdout.getvalue(), stderr.getvalue()


class CliLookupTests(unittest.TestCase):
    def test_description_and_pattern_scenario(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_dir = ["--config-dir", tmp]

            self.assertEqual(_run([*config_dir, "--add", "/d", "A dir."])[0], cli.EXIT_OK)
            self.assertEqual(_run([*config_dir, "--pattern", "/d", "* is a child of /d"])[0], cli.EXIT_OK)

            self.assertEqual(_run([*config_dir, "/d"]), (cli.EXIT_OK, "/d: A dir.\n", ""))
            self.assertEqual(_run([*config_dir, "/d/x"]), (cli.EXIT_OK, "/d/x: x is a child of /d\n", ""))

    def test_pattern_without_wildcard_is_printed_verbatim(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            _run(["--config-dir", tmp, "--pattern", "/d", "static text"])
            code, out, _err = _run(["--config-dir", tmp, "/d/anything"])
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(out, "/d/anything: static text\n")

    def test_missing_description_reports_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, out, err = _run(["--config-dir", tmp, "/nothing/here"])
        self.assertEqual(code, cli.EXIT_NOT_FOUND)
        self.assertEqual(out, "Err: no available description for /nothing/here\n")
        self.assertEqual(err, "")

    def test_lookup_displays_normalized_absolute_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            store_dir = root / "store"
            project = root / "project"
            project.mkdir()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                _run(["--config-dir", str(store_dir), "--add", "project/", "My project."])
                code, out, _err = _run(["--config-dir", str(store_dir), "./project/../project"])
            finally:
                os.chdir(previous_cwd)

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(out, f"{project}: My project.\n")

    def test_no_path_argument_describes_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                _run(["--config-dir", "store", "--add", ".", "Scratch space."])
                code, out, _err = _run(["--config-dir", "store"])
            finally:
                os.chdir(previous_cwd)

        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(out, f"{root}: Scratch space.\n")

    def test_environment_selects_store_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch.dict(os.environ, {"DDIR_CONFIG_DIR": tmp}):
                _run(["--add", "/srv", "Services."])
                code, out, _err = _run(["/srv"])
            self.assertTrue((Path(tmp) / "config.json").exists())
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(out, "/srv: Services.\n")


class CliMutationTests(unittest.TestCase):
    def test_add_writes_descriptions_section(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, out, _err = _run(["--config-dir", tmp, "--add", "/srv/www/", "Web root."])
            saved = json.loads((Path(tmp) / "config.json").read_text(encoding="utf-8"))
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(out, "")
        self.assertEqual(saved, {"descriptions": {"/srv/www": "Web root."}, "patterns": {}})

    def test_second_add_overwrites_first(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            _run(["--config-dir", tmp, "--add", "/d", "first"])
            _run(["--config-dir", tmp, "--add", "/d", "second"])
            code, out, _err = _run(["--config-dir", tmp, "/d"])
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(out, "/d: second\n")

    def test_dash_prefixed_description_is_stored_and_looked_up(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, _out, err = _run(["--config-dir", tmp, "--add", "/d", "-draft"])
            lookup = _run(["--config-dir", tmp, "/d"])
        self.assertEqual((code, err), (cli.EXIT_OK, ""))
        self.assertEqual(lookup, (cli.EXIT_OK, "/d: -draft\n", ""))

    def test_dash_prefixed_path_is_stored_and_looked_up(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                code = _run(["--config-dir", "store", "--pattern", "-scratch", "--* notes"])[0]
                lookup = _run(["--config-dir", "store", "--", "-scratch/today"])
            finally:
                os.chdir(previous_cwd)
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(lookup, (cli.EXIT_OK, f"{root / '-scratch' / 'today'}: --today notes\n", ""))

    def test_corrupt_store_is_reported_and_left_untouched(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store_file = Path(tmp) / "config.json"
            store_file.write_text('{"descriptions": ["oops"]}', encoding="utf-8")

            code, out, err = _run(["--config-dir", tmp, "--add", "/d", "A dir."])
            lookup_code, _out, _err = _run(["--config-dir", tmp, "/d"])

            self.assertEqual(store_file.read_text(encoding="utf-8"), '{"descriptions": ["oops"]}')
        self.assertEqual(code, cli.EXIT_ERROR)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("Err: "))
        self.assertIn("descriptions", err)
        self.assertEqual(lookup_code, cli.EXIT_ERROR)

    def test_bad_path_is_reported_without_saving(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, _out, err = _run(["--config-dir", tmp, "--add", "", "nothing"])
            self.assertFalse((Path(tmp) / "config.json").exists())
        self.assertEqual(code, cli.EXIT_ERROR)
        self.assertEqual(err, "Err: empty path\n")


class CliArgumentTests(unittest.TestCase):
    def test_positional_path_cannot_be_combined_with_add(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SystemExit) as exc_info:
                _run(["--config-dir", tmp, "/other", "--add", "/d", "A dir."])
            self.assertFalse((Path(tmp) / "config.json").exists())
        self.assertEqual(exc_info.exception.code, cli.EXIT_USAGE)

    def test_add_and_pattern_are_mutually_exclusive(self) -> None:
        with self.assertRaises(SystemExit) as exc_info:
            _run(["--add", "/d", "x", "--pattern", "/d", "y"])
        self.assertEqual(exc_info.exception.code, cli.EXIT_USAGE)

    def test_add_requires_path_and_description(self) -> None:
        with self.assertRaises(SystemExit) as exc_info:
            _run(["--add", "/d"])
        self.assertEqual(exc_info.exception.code, cli.EXIT_USAGE)

    def test_requested_mutation_names_conflicting_flag(self) -> None:
        rest, extracted = cli._extract_mutation(["/x", "--pattern", "/d", "y"])
        args = cli.build_parser().parse_args(rest)
        with self.assertRaisesRegex(ArgumentError, "--pattern"):
            cli._requested_mutation(args, extracted)

    def test_repeated_mode_flag_is_a_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as exc_info:
            _run(["--add", "/d", "x", "--add", "/e", "y"])
        self.assertEqual(exc_info.exception.code, cli.EXIT_USAGE)

    def test_extract_mutation_takes_values_by_position(self) -> None:
        rest, extracted = cli._extract_mutation(["--no-color", "--add", "-p", "--verbose", "-v"])
        self.assertEqual(rest, ["--no-color", "-v"])
        self.assertEqual(extracted, ("--add", EntryKind.DIRECT, "-p", "--verbose"))

    def test_extract_mutation_stops_at_separator(self) -> None:
        argv = ["--", "--add", "/d", "x"]
        self.assertEqual(cli._extract_mutation(argv), (argv, None))


if __name__ == "__main__":
    unittest.main()
