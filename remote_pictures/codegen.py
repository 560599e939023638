"""Text emission for the generated JavaScript modules and type declarations."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Optional, Sequence

from .models import AssetRecord
from .utils import is_js_identifier, to_binding_name

TYPE_IMPORT = 'import type { ImageMetadata } from "astro";'


def relative_import_path(file_path: Path, modules_dir: Path) -> str:
    """Path to an asset as seen from the generated module, with forward slashes."""
    relative = os.path.relpath(file_path, modules_dir)
    relative = Path(relative).as_posix()
    if not relative.startswith("."):
        relative = "./" + relative
    return relative


def _string_literal(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _export_clause(binding: str, alias: Optional[str]) -> str:
    if alias is None:
        return f"{{ {binding} }}"
    name = alias if is_js_identifier(alias) else _string_literal(alias)
    return f"{{ {binding} as {name} }}"


def render_module(records: Sequence[AssetRecord], modules_dir: Path) -> str:
    """Generate the re-export module for one collection."""
    lines: List[str] = []
    for record in records:
        import_path = relative_import_path(record.file_path, modules_dir)
        lines.append(f"import {record.binding} from {_string_literal(import_path)}")
        lines.append(f"export {_export_clause(record.binding, record.alias)}")
    return "".join(line + "\n" for line in lines)


def render_type_declarations(records: Sequence[AssetRecord]) -> str:
    """Generate the .d.ts companion declaring every export as ImageMetadata."""
    lines = [TYPE_IMPORT]
    for record in records:
        lines.append(f"declare const {record.binding}: ImageMetadata;")
        lines.append(f"export {_export_clause(record.binding, record.alias)};")
    return "\n".join(lines) + "\n"


def render_banner(collection_id: str, module_specifier: str) -> List[str]:
    """Boxed usage hint printed once a collection is ready."""
    namespace = to_binding_name(collection_id)
    specifier = _string_literal(f"{module_specifier}/{collection_id}")
    import_line = f"│ import * as {namespace} from {specifier} │"
    width = len(import_line) - 2
    return [
        f"Collection {collection_id} ready to use:",
        f"╭{'─' * width}╮",
        import_line,
        f"╰{'─' * width}╯",
    ]
