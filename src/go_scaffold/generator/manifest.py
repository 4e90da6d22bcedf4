"""
Feature manifests

Each feature subtree may carry a feature.json listing the extra directories
and files it overlays onto the base tree.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Optional

from go_scaffold.wizard.exceptions import ManifestError
from go_scaffold.wizard.logging_config import get_logger


logger = get_logger("manifest")

MANIFEST_FILE = "feature.json"


@dataclass
class FeatureManifest:
    """Extra assets a feature contributes, relative to its own subtree."""
    feature_id: str
    directories_to_copy: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, feature_id: str, data: object) -> "FeatureManifest":
        if not isinstance(data, dict):
            raise ManifestError(
                f"Manifest for '{feature_id}' must be a JSON object",
                feature_id=feature_id
            )

        lists = {}
        for key in ("directories_to_copy", "files"):
            value = data.get(key, [])
            if value is None:
                value = []
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ManifestError(
                    f"Manifest for '{feature_id}': '{key}' must be a list of strings",
                    feature_id=feature_id
                )
            lists[key] = [entry for entry in value if _is_safe_relative(entry, feature_id)]

        # "directories" is an older key with no effect on the overlay
        return cls(feature_id=feature_id, **lists)


def _is_safe_relative(entry: str, feature_id: str) -> bool:
    path = PurePosixPath(entry)
    if not entry or path.is_absolute() or ".." in path.parts:
        logger.warning("Ignoring manifest entry %r in '%s': not a relative path", entry, feature_id)
        return False
    return True


def load_manifest(features_dir: Path, feature_id: str) -> FeatureManifest:
    """Read and validate features/<feature_id>/feature.json.

    Raises:
        ManifestError: If the manifest is missing or malformed
    """
    manifest_path = features_dir / feature_id / MANIFEST_FILE
    try:
        content = manifest_path.read_text()
    except OSError as e:
        raise ManifestError(
            f"No manifest for feature '{feature_id}'",
            feature_id=feature_id,
            details=str(e)
        )

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ManifestError(
            f"Manifest for feature '{feature_id}' is not valid JSON",
            feature_id=feature_id,
            details=str(e)
        )

    return FeatureManifest.from_dict(feature_id, data)


def try_load_manifest(features_dir: Path, feature_id: str) -> Optional[FeatureManifest]:
    """Like load_manifest, but a bad manifest just means no extra assets."""
    try:
        return load_manifest(features_dir, feature_id)
    except ManifestError as e:
        logger.info("Skipping extra assets for '%s': %s", feature_id, e.message)
        if e.details:
            logger.debug(e.details)
        return None
