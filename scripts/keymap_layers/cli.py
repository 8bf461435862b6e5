"""Command-line interface for the keymap layer tools."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config import ToolConfig, load_tool_config
from .diff import diff_labels, format_report
from .documents import (
    KeymapLoadError,
    LayerLookupError,
    detect_default_layers,
    load_json,
    load_keymap,
    load_overrides,
    load_preserve_list,
    locate_layer,
    parse_spec,
)
from .labels import layer_labels
from .nodes import KeymapDocument, Layer, dump_layer
from .overrides import capture_overrides, merge_with_override
from .render import render_table
from .translate import LOCALES, get_locale, translate_document, translate_layer, translate_zmk_text


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="keymap_layers",
        description="Show, compare, capture and translate keymap layers",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Tool configuration YAML (default: keymap_layers.yaml if present)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- show subcommand ---
    show_parser = subparsers.add_parser(
        "show",
        help="Render layers as a two-handed table",
    )
    show_parser.add_argument("layers", nargs="*", metavar="LAYER", help="Layer names or indexes")
    show_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Path to keymap JSON (default: keymap.json)",
    )
    show_parser.add_argument(
        "--layer",
        dest="extra_layers",
        action="append",
        default=[],
        metavar="NAME",
        help="Render the specified layer (can be repeated)",
    )
    mode = show_parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-m", "--mirror",
        dest="mode",
        action="store_const",
        const="mirrored",
        help="Display mirrored layout positions only",
    )
    mode.add_argument(
        "-b", "--both",
        dest="mode",
        action="store_const",
        const="both",
        help="Display both standard and mirrored layouts",
    )
    show_parser.add_argument("-w", "--width", type=int, help="Cell width (default: 7)")
    show_parser.add_argument(
        "-l", "--list",
        action="store_true",
        help="List available layers and exit",
    )
    show_parser.add_argument(
        "-p", "--positions",
        action="store_true",
        help="Show physical key positions instead of bindings",
    )
    show_parser.add_argument(
        "--keycodes",
        action="store_true",
        help="Show raw keycodes instead of friendly labels",
    )
    show_parser.add_argument(
        "--no-overrides",
        action="store_true",
        help="Show the captured layer without merging custom overrides",
    )
    show_parser.add_argument(
        "--locale",
        choices=sorted(LOCALES),
        help="Translate the layer to this locale before rendering",
    )

    # --- compare subcommand ---
    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare layers between two keymap files or git specs",
    )
    compare_parser.add_argument("--left", help="Left keymap file or REV:path spec")
    compare_parser.add_argument("--right", help="Right keymap file or REV:path spec")
    compare_parser.add_argument(
        "--layer",
        dest="layers",
        action="append",
        default=[],
        metavar="NAME",
        help="Layer to compare (can be repeated; defaults to QWERTY and Symbol)",
    )
    compare_parser.add_argument(
        "--raw",
        action="store_true",
        help="Compare raw keycodes instead of friendly labels",
    )
    locale = compare_parser.add_mutually_exclusive_group()
    locale.add_argument(
        "--locale",
        choices=sorted(LOCALES),
        help="Translate the left keymap to this locale before comparing (default: de)",
    )
    locale.add_argument(
        "--no-locale",
        action="store_true",
        help="Compare the left keymap untranslated",
    )

    # --- capture subcommand ---
    capture_parser = subparsers.add_parser(
        "capture",
        help="Capture preserved layers into the override file",
    )
    capture_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Path to keymap JSON (default: keymap.json)",
    )

    # --- translate subcommand ---
    translate_parser = subparsers.add_parser(
        "translate",
        help="Rewrite keymap files in place for another locale",
    )
    translate_parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="JSON or .zmk files to rewrite (default: from config)",
    )
    translate_parser.add_argument("--locale", choices=sorted(LOCALES), help="Target locale (default: de)")

    return parser


def _write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def _format_layer_list(layer_names: list[str]) -> list[str]:
    return [f"{index:2d}: {name}" for index, name in enumerate(layer_names)]


def cmd_show(args: argparse.Namespace, config: ToolConfig) -> int:
    """Execute show subcommand."""
    keymap_path = args.file or config.keymap
    keymap = load_keymap(keymap_path)

    # List layers mode
    if args.list:
        for line in _format_layer_list(keymap.layer_names):
            print(line)
        return 0

    overrides = {} if args.no_overrides else load_overrides(config.overrides_path(keymap_path))
    cell_width = max(args.width if args.width is not None else config.cell_width, 2)
    friendly = config.friendly and not args.keycodes
    tables = {"mirrored": [True], "both": [False, True]}.get(args.mode, [False])

    identifiers = args.extra_layers + args.layers
    if not identifiers:
        identifiers = detect_default_layers(
            keymap.layer_names, config.preserve_path(keymap_path), config.default_layers
        )

    for idx, identifier in enumerate(identifiers):
        layer_index, layer_name = locate_layer(keymap.layer_names, identifier)
        layer = merge_with_override(keymap.layer(layer_index), overrides.get(layer_name))
        if args.locale:
            layer = translate_layer(layer, get_locale(args.locale))

        if idx > 0:
            print()
        print(f"Layer #{layer_index}: {layer_name}")
        for table_idx, mirrored in enumerate(tables):
            if table_idx > 0:
                print()
            print(
                render_table(
                    layer,
                    mirrored=mirrored,
                    cell_width=cell_width,
                    show_positions=args.positions,
                    friendly=friendly,
                )
            )
    return 0


def _load_side(spec: str, config: ToolConfig) -> tuple[KeymapDocument, dict[str, Layer | None]]:
    revision, path = parse_spec(spec)
    keymap = load_keymap(spec)
    overrides = load_overrides(config.overrides_path(path), revision)
    return keymap, overrides


def cmd_compare(args: argparse.Namespace, config: ToolConfig) -> int:
    """Execute compare subcommand."""
    left_keymap, left_overrides = _load_side(args.left or config.compare.left, config)
    right_keymap, right_overrides = _load_side(args.right or config.compare.right, config)

    locale_name = None if args.no_locale else (args.locale or config.compare.locale)
    table = get_locale(locale_name) if locale_name else None
    friendly = config.friendly and not args.raw

    exit_status = 0
    for identifier in args.layers or config.compare.layers:
        left_index, left_name = locate_layer(left_keymap.layer_names, identifier)
        right_index, right_name = locate_layer(right_keymap.layer_names, identifier)

        left_layer = merge_with_override(left_keymap.layer(left_index), left_overrides.get(left_name))
        if table is not None:
            left_layer = translate_layer(left_layer, table)
        right_layer = merge_with_override(
            right_keymap.layer(right_index), right_overrides.get(right_name)
        )

        left_labels = layer_labels(left_layer, friendly)
        right_labels = layer_labels(right_layer, friendly)
        mismatches = diff_labels(left_labels, right_labels)
        if mismatches:
            exit_status = 1

        for line in format_report(left_name, right_name, left_labels, right_labels, mismatches):
            print(line)

    return exit_status


def cmd_capture(args: argparse.Namespace, config: ToolConfig) -> int:
    """Execute capture subcommand."""
    keymap_path = args.file or config.keymap
    overrides_path = config.overrides_path(keymap_path)

    keymap = load_keymap(keymap_path)
    names_to_preserve = load_preserve_list(config.preserve_path(keymap_path))

    # Hand edits that only live in the override file must survive re-capture,
    # so an unreadable override file aborts instead of being overwritten
    existing = load_overrides(overrides_path, strict=True)
    overrides, missing = capture_overrides(keymap, names_to_preserve, existing)

    overrides_path.parent.mkdir(parents=True, exist_ok=True)
    _write_json(overrides_path, {"layers": {name: dump_layer(layer) for name, layer in overrides.items()}})
    print(f"Captured {len(overrides)} layers into {overrides_path}")

    if missing:
        print(f"warning: skipped missing layers: {', '.join(missing)}", file=sys.stderr)
    return 0


def cmd_translate(args: argparse.Namespace, config: ToolConfig) -> int:
    """Execute translate subcommand."""
    table = get_locale(args.locale or config.translate.locale)
    if args.files:
        json_files = [path for path in args.files if path.suffix == ".json"]
        text_files = [path for path in args.files if path.suffix != ".json"]
    else:
        json_files = config.translate.json_files
        text_files = config.translate.text_files

    for path in json_files:
        if not path.is_file():
            continue
        _write_json(path, translate_document(load_json(path), table))
        print(f"Translated {path}")

    for path in text_files:
        if not path.is_file():
            continue
        path.write_text(translate_zmk_text(path.read_text(encoding="utf-8"), table), encoding="utf-8")
        print(f"Translated {path}")

    return 0


COMMANDS = {
    "show": cmd_show,
    "compare": cmd_compare,
    "capture": cmd_capture,
    "translate": cmd_translate,
}


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.config is not None and not args.config.exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)
    try:
        config = load_tool_config(args.config)
    except (ValidationError, yaml.YAMLError) as e:
        print(f"Error: invalid config {args.config or 'keymap_layers.yaml'}: {e}", file=sys.stderr)
        sys.exit(1)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(command(args, config))
    except (KeymapLoadError, LayerLookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
