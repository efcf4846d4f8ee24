"""Test the persistence boundary: schema validation, YAML files and the store."""

import pytest
import yaml

from tabprofile.errors import ProfileValidationError
from tabprofile.persistence import (
    YamlProfileStore,
    load_profile_from_yaml,
    load_profile_schema,
    profile_from_payload,
    profile_to_payload,
    save_profile_to_yaml,
    validate_profile_payload,
)
from tabprofile.profiling.profiler import profile_dataset


@pytest.fixture
def profile(sales_records):
    return profile_dataset(sales_records)


class TestSchema:
    """Test the bundled JSON Schema."""

    def test_schema_loads(self):
        schema = load_profile_schema()
        assert schema["title"] == "ProfileResult"
        assert "numeric_summary" in schema["$defs"]

    def test_profile_payload_is_valid(self, profile):
        """Test a computed profile satisfies the schema."""
        validate_profile_payload(profile_to_payload(profile))

    def test_invalid_payload_lists_errors(self, profile):
        """Test every violation is reported."""
        payload = profile_to_payload(profile)
        payload["missing_values"]["units"] = -1
        payload["column_types"]["units"] = "integer"

        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_payload(payload)

        assert len(exc_info.value.errors) == 2
        assert exc_info.value.errors[0].startswith("column_types/units:")
        assert "2 errors" in str(exc_info.value)

    def test_root_errors(self):
        """Test errors at the document root are labelled."""
        with pytest.raises(ProfileValidationError) as exc_info:
            validate_profile_payload([])
        assert exc_info.value.errors[0].startswith("<root>:")

    def test_unknown_summary_shape_rejected(self, profile):
        """Test summaries must match exactly one summary kind."""
        payload = profile_to_payload(profile)
        payload["summary_stats"]["units"]["extra"] = 1
        with pytest.raises(ProfileValidationError):
            validate_profile_payload(payload)


class TestPayloadRoundTrip:
    """Test profiles cross the boundary unchanged."""

    def test_payload_is_plain_data(self, profile):
        payload = profile_to_payload(profile)
        assert payload["column_types"]["units"] == "numeric"
        assert payload["summary_stats"]["region"]["most_common"][0] == {
            "value": "north",
            "count": 2,
        }

    def test_from_payload(self, profile):
        assert profile_from_payload(profile_to_payload(profile)) == profile


class TestYamlFiles:
    """Test YAML save and load."""

    def test_save_and_load(self, profile, tmp_path):
        """Test a saved profile loads back verbatim."""
        path = tmp_path / "nested" / "sales.profile.yaml"
        save_profile_to_yaml(profile, path)

        assert path.exists()
        assert load_profile_from_yaml(path) == profile

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Profile file not found"):
            load_profile_from_yaml(tmp_path / "absent.yaml")

    def test_load_tampered_file(self, profile, tmp_path):
        """Test a file edited out of shape fails validation."""
        path = tmp_path / "p.yaml"
        save_profile_to_yaml(profile, path)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        del data["correlation_matrix"]
        path.write_text(yaml.safe_dump(data), encoding="utf-8")

        with pytest.raises(ProfileValidationError, match="correlation_matrix"):
            load_profile_from_yaml(path)


class TestYamlProfileStore:
    """Test the file-per-dataset store."""

    def test_save_load_delete(self, profile, tmp_path):
        store = YamlProfileStore(tmp_path)
        assert store.load(42) is None

        store.save(42, profile)
        assert store.path_for(42) == tmp_path / "42.profile.yaml"
        assert store.load(42) == profile

        assert store.delete(42) is True
        assert store.load(42) is None
        assert store.delete(42) is False

    @pytest.mark.parametrize("dataset_id", ["../escaped", "nested/42", "/tmp/absolute"])
    def test_rejects_ids_leaving_the_directory(self, profile, tmp_path, dataset_id):
        """Test ids cannot address files outside the store directory."""
        store = YamlProfileStore(tmp_path / "profiles")

        with pytest.raises(ValueError, match="Invalid dataset id"):
            store.save(dataset_id, profile)
        with pytest.raises(ValueError, match="Invalid dataset id"):
            store.load(dataset_id)
        assert not (tmp_path / "escaped.profile.yaml").exists()

    def test_string_ids_with_dots(self, profile, tmp_path):
        store = YamlProfileStore(tmp_path)
        store.save("sales.v2", profile)
        assert store.load("sales.v2") == profile
