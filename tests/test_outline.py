from __future__ import annotations

import unittest

from changelog.module import build_release_groups
from changelog.outline import (
    _RENDERERS,
    format_release_date,
    normalize_href,
    release_date_iso,
    render_outline,
    render_token,
    render_tokens,
)
from contracts.markdown import MdToken, TokenKind
from contracts.releases import UNRESOLVED_DATE, VersionDate
from markdown_ast import parse_to_ast

AUG_1_2021 = 1627776000000


class TestHrefsAndDates(unittest.TestCase):
    def test_normalize_href(self) -> None:
        self.assertEqual(normalize_href("api.md"), "#api")
        self.assertEqual(normalize_href("README.MD"), "#README")
        self.assertEqual(normalize_href("api.md#store"), "api#store")
        self.assertEqual(normalize_href("https://effector.dev"), "https://effector.dev")

    def test_release_dates(self) -> None:
        self.assertEqual(format_release_date(AUG_1_2021), "August 1, 2021")
        self.assertEqual(release_date_iso(AUG_1_2021), "2021-08-01T00:00:00.000Z")
        self.assertEqual(format_release_date(UNRESOLVED_DATE), "date unknown")
        self.assertIsNone(release_date_iso(UNRESOLVED_DATE))


class TestRenderTokens(unittest.TestCase):
    def test_every_kind_has_a_renderer(self) -> None:
        self.assertEqual(set(_RENDERERS), set(TokenKind))

    def test_unknown_token_leaves_marker(self) -> None:
        tok = MdToken(token_id="t000009", kind=TokenKind.UNKNOWN, raw_type="footnote_ref")
        with self.assertLogs("changelog.outline", level="WARNING"):
            self.assertEqual(render_token(tok), "[token footnote_ref]")

    def test_link_targets_are_normalized(self) -> None:
        para = [t for t in parse_to_ast("See [store](api.md#store).\n") if t.kind is TokenKind.PARAGRAPH]
        self.assertEqual(render_tokens(para), "See [store](api#store).\n\n")

    def test_link_title_is_reported(self) -> None:
        link = MdToken(
            token_id="t000001",
            kind=TokenKind.LINK,
            raw_type="link",
            attrs={"href": "x.md", "title": "X"},
            children=[MdToken(token_id="t000002", kind=TokenKind.TEXT, raw_type="text", value="x")],
        )
        with self.assertLogs("changelog.outline", level="WARNING") as logs:
            self.assertEqual(render_token(link), "[x](#x)")
        self.assertIn("link title", logs.output[0])

    def test_code_block(self) -> None:
        tok = MdToken(token_id="t1", kind=TokenKind.CODE, raw_type="block_code", value="a\n", attrs={"info": "js"})
        self.assertEqual(render_token(tok), "```js\na\n```\n\n")


class TestRenderOutline(unittest.TestCase):
    def test_outline_sections(self) -> None:
        doc = "# Changelog\n\n## effector 21.8.0\n\nAdd *attach*.\n\n## effector-vue 21.1.0\n\nVue.\n"
        dates = [VersionDate(library="effector", version="21.8.0", date=AUG_1_2021)]
        with self.assertLogs("changelog.versions", level="WARNING"):
            groups = build_release_groups(doc, dates)
        out = render_outline(groups)

        self.assertTrue(out.startswith("# Changelog\n\n- [effector](#effector)\n- [effector-react](#effector-react)\n"))
        self.assertIn("## [effector-vue](#effector-vue)", out)
        self.assertIn("### [21.8.0](#effector-21-8-0)\n\n_August 1, 2021 (2021-08-01T00:00:00.000Z)_\n\nAdd *attach*.", out)
        self.assertIn("### [21.1.0](#effector-vue-21-1-0)\n\n_date unknown_\n\nVue.", out)
        self.assertTrue(out.endswith("\n"))
        self.assertFalse(out.endswith("\n\n"))


if __name__ == "__main__":
    unittest.main()
