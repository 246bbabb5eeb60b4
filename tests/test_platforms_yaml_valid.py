import pytest

from vl_sdk import load_platform_registry, validate_platform_registry
from vl_sdk.loader import DEFAULT_PLATFORMS_PATH, load_yaml
from vl_sdk.models import PlatformRegistry


def test_platforms_yaml_loads_and_validates() -> None:
    registry = load_platform_registry(DEFAULT_PLATFORMS_PATH)
    validate_platform_registry(registry)
    assert registry.version == "1.0.0"


def test_every_platform_has_models_and_endpoint() -> None:
    raw = load_yaml(DEFAULT_PLATFORMS_PATH)
    for item in raw["platforms"]:
        assert item["model_vision"]
        assert item["model_image"]
        assert item["endpoint_url"].startswith("https://")


def test_unknown_provider_family_is_rejected() -> None:
    with pytest.raises(ValueError):
        PlatformRegistry(
            version="x",
            platforms=[
                {
                    "id": "odd",
                    "display_name": "Odd",
                    "endpoint_url": "https://odd.example",
                    "model_vision": "v",
                    "model_image": "i",
                    "provider_family": "carrier-pigeon",
                }
            ],
        )


def test_validation_flags_bad_endpoint_and_case() -> None:
    registry = PlatformRegistry(
        version="x",
        platforms=[
            {
                "id": "Loud",
                "display_name": "Loud",
                "endpoint_url": "ftp://loud.example",
                "model_vision": "v",
                "model_image": "i",
                "provider_family": "vondy",
            }
        ],
    )
    with pytest.raises(ValueError) as excinfo:
        validate_platform_registry(registry)
    message = str(excinfo.value)
    assert "must be lowercase" in message
    assert "endpoint must be http(s)" in message


def test_empty_registry_is_invalid() -> None:
    with pytest.raises(ValueError):
        validate_platform_registry(PlatformRegistry(version="x"))
