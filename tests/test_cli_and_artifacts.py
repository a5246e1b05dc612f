from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from changelog.artifacts import load_release_index_json, write_release_index_json
from changelog.cli import main
from changelog.data_access import DateIndexError, load_version_dates
from changelog.module import run_release_index
from contracts.releases import ReleaseIndexResult, VersionDate

AUG_1_2021 = 1627776000000

CHANGELOG = """# Changelog

## effector 21.8.0

Add attach.

## effector-react 21.3.0

Hooks update.
"""


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def _run(argv: list[str]) -> tuple[int, str]:
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        rc = main(argv)
    return rc, buf.getvalue()


class TestCli(unittest.TestCase):
    def test_writes_index_and_prints_summary(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            changelog = _write(root / "CHANGELOG.md", CHANGELOG)
            dates = _write(
                root / "dates.json",
                json.dumps([{"library": "effector", "version": "21.8.0", "date": AUG_1_2021}]),
            )
            out = root / "out" / "release_index.json"

            rc, stdout = _run(["--changelog", str(changelog), "--dates", str(dates), "--output", str(out)])
            self.assertEqual(rc, 0)

            summary = json.loads(stdout.strip().splitlines()[-1])
            self.assertEqual(summary, {"errors": 0, "groups": 3, "ok": True, "releases": 2, "unresolved_dates": 1})

            result = ReleaseIndexResult.from_dict(json.loads(out.read_text(encoding="utf-8")))
            self.assertTrue(result.ok)
            self.assertEqual(result.groups[0].releases[0].date, AUG_1_2021)
            self.assertEqual(result.source_changelog_relpath, changelog.as_posix())

    def test_rerun_writes_identical_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            changelog = _write(root / "CHANGELOG.md", CHANGELOG)
            out_a, out_b = root / "a.json", root / "b.json"
            _run(["--changelog", str(changelog), "--output", str(out_a)])
            _run(["--changelog", str(changelog), "--output", str(out_b)])
            self.assertEqual(out_a.read_bytes(), out_b.read_bytes())

    def test_skip_policy_exits_with_failure_code(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            changelog = _write(root / "CHANGELOG.md", CHANGELOG + "\n## effector-vue next\n")
            out = root / "index.json"
            rc, stdout = _run(["--changelog", str(changelog), "--output", str(out), "--on-error", "skip"])
            self.assertEqual(rc, 2)
            self.assertEqual(json.loads(stdout.strip().splitlines()[-1])["errors"], 1)
            payload = json.loads(out.read_text(encoding="utf-8"))
            self.assertEqual(payload["errors"][0]["code"], "CLASSIFICATION_FAILED")

    def test_outline_flag_prints_markdown(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            changelog = _write(root / "CHANGELOG.md", CHANGELOG)
            rc, stdout = _run(["--changelog", str(changelog), "--output", str(root / "i.json"), "--outline"])
            self.assertEqual(rc, 0)
            self.assertTrue(stdout.startswith("# Changelog\n"))
            self.assertIn("### [21.3.0](#effector-react-21-3-0)", stdout)

    def test_negative_thresholds_are_usage_errors(self) -> None:
        for flag in ("--many-lines", "--large-article"):
            with self.subTest(flag=flag):
                err = io.StringIO()
                with contextlib.redirect_stderr(err), self.assertRaises(SystemExit) as ctx:
                    main(["--changelog", "c.md", "--output", "o.json", flag, "-1"])
                self.assertEqual(ctx.exception.code, 2)
                self.assertIn("must be >= 0", err.getvalue())


class TestReleaseIndexArtifact(unittest.TestCase):
    def test_written_artifact_loads_back(self) -> None:
        result = run_release_index(CHANGELOG, [VersionDate(library="effector", version="21.8.0", date=AUG_1_2021)])
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / "nested" / "index.json"
            write_release_index_json(result=result, out_file=out)
            self.assertEqual(load_release_index_json(out), result)

    def test_non_object_artifact_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = _write(Path(td) / "index.json", "[]")
            with self.assertRaises(TypeError):
                load_release_index_json(p)


class TestLoadVersionDates(unittest.TestCase):
    def test_rows_in_order(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = _write(
                Path(td) / "d.json",
                json.dumps(
                    [
                        {"library": "effector-vue", "version": "21.1.0", "date": 2},
                        {"library": "effector", "version": "21.8.0", "date": 1},
                    ]
                ),
            )
            self.assertEqual(
                load_version_dates(p),
                [
                    VersionDate(library="effector-vue", version="21.1.0", date=2),
                    VersionDate(library="effector", version="21.8.0", date=1),
                ],
            )

    def test_malformed_inputs(self) -> None:
        cases = {
            "not json": "{",
            "not an array": json.dumps({"library": "effector"}),
            "row not an object": json.dumps([1]),
            "missing date": json.dumps([{"library": "effector", "version": "1.0.0"}]),
            "bad date": json.dumps([{"library": "effector", "version": "1.0.0", "date": "soon"}]),
        }
        with tempfile.TemporaryDirectory() as td:
            for name, text in cases.items():
                with self.subTest(name=name):
                    p = _write(Path(td) / "d.json", text)
                    with self.assertRaises(DateIndexError):
                        load_version_dates(p)


if __name__ == "__main__":
    unittest.main()
