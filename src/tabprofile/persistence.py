"""Persistence boundary for profile results.

The engine does not own a datastore. This module defines what crosses the
boundary: a JSON Schema for persisted payloads, conversion helpers that
round-trip a ProfileResult verbatim, YAML file helpers, and a small store
keyed by dataset identifier.
"""

from __future__ import annotations

import importlib.resources
import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol

import jsonschema
import yaml

from tabprofile.errors import ProfileValidationError
from tabprofile.models.profile import ProfileResult

logger = logging.getLogger(__name__)

PROFILE_SCHEMA_FILE = "profile_result.schema.json"


@lru_cache
def load_profile_schema() -> dict[str, Any]:
    """Load the ProfileResult JSON Schema bundled with the package."""
    with (
        importlib.resources.files("tabprofile.schemas")
        .joinpath(PROFILE_SCHEMA_FILE)
        .open(encoding="utf-8") as f
    ):
        return json.load(f)


def validate_profile_payload(payload: Any) -> None:
    """Validate a persisted profile payload against the schema.

    Raises:
        ProfileValidationError: Listing every schema violation

    """
    validator = jsonschema.Draft202012Validator(load_profile_schema())
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.path))
    if errors:
        messages = [
            f"{'/'.join(str(part) for part in error.path) or '<root>'}: {error.message}"
            for error in errors
        ]
        raise ProfileValidationError(messages)


def profile_to_payload(profile: ProfileResult) -> dict[str, Any]:
    """Convert a profile to plain JSON-compatible data."""
    return profile.model_dump(mode="json")


def profile_from_payload(payload: dict[str, Any]) -> ProfileResult:
    """Validate and load a profile retrieved from a store."""
    validate_profile_payload(payload)
    return ProfileResult.model_validate(payload)


def save_profile_to_yaml(profile: ProfileResult, yaml_path: str | Path) -> None:
    """Save a profile to a YAML file, creating parent directories.

    Args:
        profile: Profile to save
        yaml_path: Output YAML file path

    """
    yaml_file = Path(yaml_path)
    yaml_file.parent.mkdir(parents=True, exist_ok=True)

    with yaml_file.open("w", encoding="utf-8") as f:
        yaml.safe_dump(
            profile_to_payload(profile),
            f,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def load_profile_from_yaml(yaml_path: str | Path) -> ProfileResult:
    """Load and validate a profile from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ProfileValidationError: If the payload does not match the schema

    """
    yaml_file = Path(yaml_path)
    if not yaml_file.exists():
        msg = f"Profile file not found: {yaml_file}"
        raise FileNotFoundError(msg)

    with yaml_file.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return profile_from_payload(data)


class ProfileStore(Protocol):
    """Store of profile results keyed by dataset identifier."""

    def load(self, dataset_id: int | str) -> ProfileResult | None: ...

    def save(self, dataset_id: int | str, profile: ProfileResult) -> None: ...

    def delete(self, dataset_id: int | str) -> bool: ...


class YamlProfileStore:
    """Keeps one ``<dataset_id>.profile.yaml`` file per dataset."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, dataset_id: int | str) -> Path:
        """Return the file of a dataset's profile.

        Raises:
            ValueError: If the id would place the file outside the store directory

        """
        path = self.directory / f"{dataset_id}.profile.yaml"
        if path.resolve().parent != self.directory.resolve():
            msg = f"Invalid dataset id for profile store: {dataset_id!r}"
            raise ValueError(msg)
        return path

    def load(self, dataset_id: int | str) -> ProfileResult | None:
        path = self.path_for(dataset_id)
        if not path.exists():
            return None
        return load_profile_from_yaml(path)

    def save(self, dataset_id: int | str, profile: ProfileResult) -> None:
        path = self.path_for(dataset_id)
        save_profile_to_yaml(profile, path)
        logger.info(f"Saved profile for dataset {dataset_id} to {path}")

    def delete(self, dataset_id: int | str) -> bool:
        path = self.path_for(dataset_id)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted profile for dataset {dataset_id}")
        return True
