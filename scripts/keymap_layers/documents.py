"""Loading keymap, override and preserve-list documents, and layer lookup."""

import json
import subprocess
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .nodes import KeymapDocument, Layer, parse_layer


class KeymapLoadError(Exception):
    """A required document is missing or cannot be parsed."""


class LayerLookupError(LookupError):
    """A requested layer name or index does not exist."""


def parse_spec(spec: str | Path) -> tuple[str | None, Path]:
    """Split a document spec into (revision, path).

    "REV:path/to/keymap.json" names a file in a git revision, unless a file
    with that literal name exists. Anything else is a plain path.
    """
    if isinstance(spec, str) and ":" in spec and not Path(spec).exists():
        revision, path = spec.split(":", 1)
        return revision, Path(path)
    return None, Path(spec)


def git_show(spec: str) -> str:
    """Return the contents of a git object such as "HEAD:keymap.json"."""
    try:
        result = subprocess.run(
            ["git", "show", spec],
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=False,
        )
    except (FileNotFoundError, UnicodeDecodeError) as e:
        raise KeymapLoadError(f"git show {spec} failed: {e}") from e
    if result.returncode != 0:
        raise KeymapLoadError(f"git show {spec} failed: {result.stderr.strip()}")
    return result.stdout


def load_json(path: Path) -> Any:
    """Load a required JSON file."""
    try:
        return json.loads(path.expanduser().read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise KeymapLoadError(f"missing file: {path}") from None
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise KeymapLoadError(f"failed to parse {path}: {e}") from e


def load_document_spec(spec: str | Path) -> Any:
    """Load a JSON document from a plain path or a REV:path spec."""
    revision, path = parse_spec(spec)
    if revision is None:
        return load_json(path)
    try:
        return json.loads(git_show(f"{revision}:{path.as_posix()}"))
    except json.JSONDecodeError as e:
        raise KeymapLoadError(f"failed to parse {spec}: {e}") from e


def load_keymap(spec: str | Path) -> KeymapDocument:
    """Load and validate a keymap document.

    Raises:
        KeymapLoadError: if the document is missing, unparsable, or lacks
            layer_names / layers
    """
    data = load_document_spec(spec)
    if not isinstance(data, dict):
        raise KeymapLoadError(f"{spec}: expected a JSON object")
    for key in ("layer_names", "layers"):
        if key not in data:
            raise KeymapLoadError(f"{spec}: missing key {key!r}")
    try:
        return KeymapDocument.model_validate(data)
    except ValidationError as e:
        raise KeymapLoadError(f"{spec}: invalid keymap: {e}") from e


def _reject_overrides(source: str, reason: Any, strict: bool) -> dict[str, Layer | None]:
    if strict:
        raise KeymapLoadError(f"failed to parse overrides at {source}: {reason}")
    print(f"warning: failed to parse overrides at {source}: {reason}", file=sys.stderr)
    return {}


def _parse_overrides(data: Any, source: str, strict: bool) -> dict[str, Layer | None]:
    layers = data.get("layers", {}) if isinstance(data, dict) else {}
    if not isinstance(layers, dict):
        return _reject_overrides(source, "'layers' is not an object", strict)
    try:
        return {name: parse_layer(layer) for name, layer in layers.items()}
    except ValidationError as e:
        return _reject_overrides(source, e, strict)


def load_overrides(
    path: Path,
    revision: str | None = None,
    strict: bool = False,
) -> dict[str, Layer | None]:
    """Load the override set.

    A missing file (or a revision without the file) is not an error.
    A malformed file prints a warning and yields an empty set, unless
    strict is set.

    Raises:
        KeymapLoadError: if strict and the file exists but cannot be parsed
    """
    if revision is None:
        if not path.is_file():
            return {}
        source = str(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            return _reject_overrides(source, e, strict)
    else:
        source = f"{revision}:{path.as_posix()}"
        try:
            text = git_show(source)
        except KeymapLoadError:
            return {}

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return _reject_overrides(source, e, strict)
    return _parse_overrides(data, source, strict)


def load_preserve_list(path: Path) -> list[str]:
    """Load the list of layer names to preserve.

    Raises:
        KeymapLoadError: if the file is missing, unparsable, or not a JSON
            array of strings
    """
    if not path.is_file():
        raise KeymapLoadError(f"missing {path}")
    data = load_json(path)
    if not isinstance(data, list) or not all(isinstance(name, str) for name in data):
        raise KeymapLoadError(f"{path} must contain a JSON array of layer names")
    return data


def _has_layer(layer_names: list[str], name: str) -> bool:
    return any(candidate.casefold() == name.casefold() for candidate in layer_names)


def detect_default_layers(
    layer_names: list[str],
    preserve_path: Path,
    fallback: list[str],
) -> list[str]:
    """Pick the layers to show when none were requested.

    Preserved layers present in the keymap win; otherwise the fallback names
    that exist; otherwise the first layer.
    """
    defaults: list[str] = []
    if preserve_path.is_file():
        try:
            defaults = [name for name in load_preserve_list(preserve_path) if _has_layer(layer_names, name)]
        except KeymapLoadError as e:
            print(f"warning: failed to parse default layer list: {e}", file=sys.stderr)

    if not defaults:
        defaults = [name for name in fallback if _has_layer(layer_names, name)]
    if not defaults and layer_names:
        defaults = [layer_names[0]]
    return defaults


def locate_layer(layer_names: list[str], identifier: str) -> tuple[int, str]:
    """Resolve a layer by index ("3") or case-insensitive name ("symbol").

    Raises:
        LayerLookupError: if no layer matches
    """
    if identifier.isascii() and identifier.isdigit():
        index = int(identifier)
        if index < len(layer_names):
            return index, layer_names[index]
    else:
        for index, name in enumerate(layer_names):
            if name.casefold() == identifier.casefold():
                return index, name

    raise LayerLookupError(f"unknown layer: {identifier!r}")
