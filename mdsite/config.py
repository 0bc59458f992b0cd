from __future__ import annotations

import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path

import yaml

from .content import MARKDOWN_EXT


@dataclass
class BuildConfig:
    posts_dir: Path
    output_dir: Path
    templates_dir: Path
    site_name: str = "Blog"
    build_workers: int = 0
    guess_lang: bool = True
    heading_permalinks: bool = False
    extension: str = MARKDOWN_EXT

    @classmethod
    def from_args(cls, args: object) -> "BuildConfig":
        return cls(
            posts_dir=Path(args.posts),
            output_dir=Path(args.output),
            templates_dir=Path(args.templates),
            site_name=args.site_name,
            build_workers=args.build_workers,
            guess_lang=args.guess_lang,
            heading_permalinks=args.heading_permalinks,
        )


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        return data
    if suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
        if not isinstance(data, dict):
            print(f"YAML config must be a mapping: {path}", file=sys.stderr)
            sys.exit(1)
        return data
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(data, dict):
        print(f"JSON config must be an object: {path}", file=sys.stderr)
        sys.exit(1)
    return data
