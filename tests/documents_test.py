import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from keymap_layers.documents import (
    KeymapLoadError,
    LayerLookupError,
    detect_default_layers,
    load_document_spec,
    load_keymap,
    load_overrides,
    load_preserve_list,
    locate_layer,
    parse_spec,
)


def write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


class TempDirTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()


class TestLocateLayer(unittest.TestCase):
    names = ["QWERTY", "Symbol", "Nav"]

    def test_by_index(self):
        self.assertEqual(locate_layer(self.names, "2"), (2, "Nav"))

    def test_by_name_case_insensitive(self):
        self.assertEqual(locate_layer(self.names, "symbol"), (1, "Symbol"))

    def test_index_out_of_range(self):
        with self.assertRaises(LayerLookupError):
            locate_layer(self.names, "3")

    def test_unknown_name(self):
        with self.assertRaisesRegex(LayerLookupError, "unknown layer: 'Gaming'"):
            locate_layer(self.names, "Gaming")

    def test_partial_name_does_not_match(self):
        with self.assertRaises(LayerLookupError):
            locate_layer(self.names, "Sym")


class TestParseSpec(TempDirTestCase):
    def test_plain_path(self):
        self.assertEqual(parse_spec("keymap.json"), (None, Path("keymap.json")))

    def test_revision_spec(self):
        self.assertEqual(parse_spec("HEAD~1:dir/keymap.json"), ("HEAD~1", Path("dir/keymap.json")))

    def test_existing_file_with_colon_is_a_path(self):
        path = write_json(self.root / "a:b.json", {})
        self.assertEqual(parse_spec(str(path)), (None, path))

    def test_revision_spec_uses_git(self):
        with mock.patch("keymap_layers.documents.git_show", return_value='{"ok": true}') as show:
            self.assertEqual(load_document_spec("abc123:keymap.json"), {"ok": True})
        show.assert_called_once_with("abc123:keymap.json")


class TestLoadKeymap(TempDirTestCase):
    def test_valid_document(self):
        path = write_json(
            self.root / "keymap.json",
            {
                "layer_names": ["QWERTY"],
                "layers": [[{"value": "&kp", "params": [{"value": "Q"}]}, None]],
                "locale": "en-US",
            },
        )
        keymap = load_keymap(path)
        self.assertEqual(keymap.layer_names, ["QWERTY"])
        self.assertEqual(keymap.layers[0][0].params[0].value, "Q")
        self.assertIsNone(keymap.layers[0][1])
        self.assertEqual(keymap.layer(5), [])

    def test_missing_file(self):
        with self.assertRaisesRegex(KeymapLoadError, "missing file"):
            load_keymap(self.root / "nope.json")

    def test_malformed_json(self):
        path = self.root / "keymap.json"
        path.write_text("{not json")
        with self.assertRaisesRegex(KeymapLoadError, "failed to parse"):
            load_keymap(path)

    def test_missing_keys(self):
        path = write_json(self.root / "keymap.json", {"layer_names": []})
        with self.assertRaisesRegex(KeymapLoadError, "layers"):
            load_keymap(path)

    def test_null_params_are_empty(self):
        path = write_json(
            self.root / "keymap.json",
            {"layer_names": ["QWERTY"], "layers": [[{"value": "&trans", "params": None}]]},
        )
        keymap = load_keymap(path)
        self.assertEqual(keymap.layers[0][0].params, [])
        self.assertTrue(keymap.layers[0][0].is_leaf)

    def test_invalid_utf8_is_load_error(self):
        path = self.root / "keymap.json"
        path.write_bytes(b'{"layer_names": ["\xff"], "layers": []}')
        with self.assertRaisesRegex(KeymapLoadError, "failed to parse"):
            load_keymap(path)


class TestLoadOverrides(TempDirTestCase):
    def test_missing_file_is_empty(self):
        self.assertEqual(load_overrides(self.root / "custom" / "layer-overrides.json"), {})

    def test_malformed_file_warns(self):
        path = self.root / "overrides.json"
        path.write_text("{oops")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            self.assertEqual(load_overrides(path), {})
        self.assertIn("warning: failed to parse overrides", stderr.getvalue())

    def test_layers_are_parsed(self):
        path = write_json(
            self.root / "overrides.json",
            {"layers": {"Symbol": [None, {"value": "&trans"}], "Odd": "not a layer"}},
        )
        overrides = load_overrides(path)
        self.assertEqual(overrides["Symbol"][1].value, "&trans")
        self.assertIsNone(overrides["Odd"])

    def test_invalid_utf8_warns(self):
        path = self.root / "overrides.json"
        path.write_bytes(b'{"layers": {"Symbol": ["\xff"]}}')
        with contextlib.redirect_stderr(io.StringIO()) as stderr:
            self.assertEqual(load_overrides(path), {})
        self.assertIn("warning: failed to parse overrides", stderr.getvalue())

    def test_strict_rejects_malformed_json(self):
        path = self.root / "overrides.json"
        path.write_text('{"layers": {"Symbol": [null],}}')
        with self.assertRaisesRegex(KeymapLoadError, "failed to parse overrides"):
            load_overrides(path, strict=True)

    def test_strict_rejects_invalid_nodes(self):
        path = write_json(self.root / "overrides.json", {"layers": {"Symbol": [{"params": []}]}})
        with self.assertRaises(KeymapLoadError):
            load_overrides(path, strict=True)

    def test_strict_rejects_invalid_utf8(self):
        path = self.root / "overrides.json"
        path.write_bytes(b'{"layers": {"Symbol": ["\xff"]}}')
        with self.assertRaises(KeymapLoadError):
            load_overrides(path, strict=True)

    def test_strict_missing_file_is_still_empty(self):
        self.assertEqual(load_overrides(self.root / "absent.json", strict=True), {})

    def test_missing_revision_is_empty(self):
        with mock.patch(
            "keymap_layers.documents.git_show", side_effect=KeymapLoadError("no such path")
        ):
            self.assertEqual(load_overrides(Path("custom/layer-overrides.json"), "HEAD"), {})


class TestPreserveList(TempDirTestCase):
    def test_valid_list(self):
        path = write_json(self.root / "preserve.json", ["QWERTY", "Symbol"])
        self.assertEqual(load_preserve_list(path), ["QWERTY", "Symbol"])

    def test_not_a_list(self):
        path = write_json(self.root / "preserve.json", {"layers": ["QWERTY"]})
        with self.assertRaises(KeymapLoadError):
            load_preserve_list(path)

    def test_missing(self):
        with self.assertRaises(KeymapLoadError):
            load_preserve_list(self.root / "preserve.json")


class TestDetectDefaultLayers(TempDirTestCase):
    names = ["Base", "symbol", "Nav"]

    def test_preserved_layers_present_in_keymap(self):
        path = write_json(self.root / "preserve.json", ["Gaming", "Nav", "Base"])
        self.assertEqual(detect_default_layers(self.names, path, ["QWERTY"]), ["Nav", "Base"])

    def test_fallback_when_no_preserve_list(self):
        result = detect_default_layers(self.names, self.root / "missing.json", ["QWERTY", "Symbol"])
        self.assertEqual(result, ["Symbol"])

    def test_malformed_preserve_list_warns_and_falls_back(self):
        path = self.root / "preserve.json"
        path.write_text("[broken")
        with contextlib.redirect_stderr(io.StringIO()) as stderr:
            result = detect_default_layers(self.names, path, ["Nav"])
        self.assertEqual(result, ["Nav"])
        self.assertIn("warning", stderr.getvalue())

    def test_first_layer_as_last_resort(self):
        result = detect_default_layers(self.names, self.root / "missing.json", ["QWERTY"])
        self.assertEqual(result, ["Base"])

    def test_empty_keymap(self):
        self.assertEqual(detect_default_layers([], self.root / "missing.json", ["QWERTY"]), [])


if __name__ == "__main__":
    unittest.main()
