"""High-level orchestration for mirroring remote pictures and generating modules."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import requests

from .codegen import render_banner, render_module, render_type_declarations
from .config import SyncConfig
from .images import download_picture, is_downloaded
from .models import AssetRecord, Collection, CollectionResult, RemotePicture
from .utils import create_remote_asset_id, to_binding_name, url_extension

logger = logging.getLogger("remote_pictures")


def build_asset_path(asset_dir: Path, collection_id: str, picture: RemotePicture) -> Path:
    """Deterministic on-disk location of a picture."""
    stem = create_remote_asset_id(collection_id, picture.id)
    extension = url_extension(picture.url)
    if extension:
        return asset_dir / f"{stem}.{extension}"
    return asset_dir / stem


def build_record(config: SyncConfig, collection_id: str, picture: RemotePicture) -> AssetRecord:
    return AssetRecord(
        collection_id=collection_id,
        picture=picture,
        file_path=build_asset_path(config.asset_dir, collection_id, picture),
        binding=to_binding_name(picture.id),
    )


def sync_collection(
    collection: Collection,
    config: SyncConfig,
    session: requests.Session,
) -> CollectionResult:
    """Download the pictures of one collection and write its generated files."""
    config.asset_dir.mkdir(parents=True, exist_ok=True)
    config.modules_dir.mkdir(parents=True, exist_ok=True)

    result = CollectionResult(
        collection_id=collection.id,
        module_path=config.modules_dir / f"{collection.id}.js",
        types_path=config.modules_dir / f"{collection.id}.d.ts",
    )
    records: List[AssetRecord] = []
    seen_bindings: Dict[str, str] = {}

    logger.info("Downloading pictures of %s:", collection.id)

    for picture in collection.pictures:
        record = build_record(config, collection.id, picture)
        records.append(record)

        previous = seen_bindings.setdefault(record.binding, picture.id)
        if previous != picture.id:
            logger.warning(
                "Pictures %r and %r of %s share the binding %s",
                previous,
                picture.id,
                collection.id,
                record.binding,
            )

        if is_downloaded(record.file_path) and not config.force_refresh:
            logger.info("Skipping %s", picture.id)
            result.skipped.append(picture.id)
            continue

        logger.info("Downloading %s", picture.id)
        if download_picture(session, picture.url, record.file_path, config.download_options):
            result.downloaded.append(picture.id)
        else:
            result.failed.append(picture.id)

    result.module_path.write_text(
        render_module(records, config.modules_dir), encoding="utf-8"
    )
    result.types_path.write_text(render_type_declarations(records), encoding="utf-8")
    logger.debug("Wrote %s and %s", result.module_path, result.types_path)

    if config.dev_mode:
        for line in render_banner(collection.id, config.module_specifier):
            logger.info(line)
    return result


def run_sync(
    config: SyncConfig,
    session: Optional[requests.Session] = None,
) -> List[CollectionResult]:
    """Process every collection sequentially with one shared HTTP session."""
    owns_session = session is None
    if session is None:
        session = requests.Session()
    try:
        return [
            sync_collection(collection, config, session)
            for collection in config.collections
        ]
    finally:
        if owns_session:
            session.close()
