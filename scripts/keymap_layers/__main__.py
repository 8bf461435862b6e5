"""CLI entry point for keymap_layers package.

Usage:
    python -m keymap_layers show --layer Symbol --mirror
    python -m keymap_layers compare --left HEAD:keymap.json --right keymap.json
    python -m keymap_layers capture
    python -m keymap_layers translate
"""

from .cli import main

if __name__ == "__main__":
    main()
