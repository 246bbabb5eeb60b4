from vl_plan.config import DEFAULT_PLATFORM, PlanConfig, load_plan_config
from vl_plan.models import GenerationMode, QualityPreset, SafetyProfile


def _clear(monkeypatch) -> None:  # noqa: ANN001
    for name in (
        "VLIG_DEFAULT_MODE",
        "VLIG_DEFAULT_SAFETY",
        "VLIG_DEFAULT_QUALITY",
        "VLIG_DEFAULT_PLATFORM",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment(monkeypatch) -> None:  # noqa: ANN001
    _clear(monkeypatch)
    cfg = load_plan_config()
    assert cfg == PlanConfig()
    assert cfg.mode == GenerationMode.TextToImage
    assert cfg.safety_profile == SafetyProfile.Safe
    assert cfg.quality_preset == QualityPreset.Standard
    assert cfg.platform == DEFAULT_PLATFORM


def test_environment_overrides(monkeypatch) -> None:  # noqa: ANN001
    _clear(monkeypatch)
    monkeypatch.setenv("VLIG_DEFAULT_MODE", " Inpaint ")
    monkeypatch.setenv("VLIG_DEFAULT_SAFETY", "allow-nsfw")
    monkeypatch.setenv("VLIG_DEFAULT_QUALITY", "ULTRA")
    monkeypatch.setenv("VLIG_DEFAULT_PLATFORM", "Gemini")
    cfg = PlanConfig.from_env()
    assert cfg.mode == GenerationMode.Inpaint
    assert cfg.safety_profile == SafetyProfile.AllowNSFW
    assert cfg.quality_preset == QualityPreset.Ultra
    assert cfg.platform == "gemini"


def test_unknown_values_fall_back(monkeypatch) -> None:  # noqa: ANN001
    _clear(monkeypatch)
    monkeypatch.setenv("VLIG_DEFAULT_MODE", "sketch")
    monkeypatch.setenv("VLIG_DEFAULT_QUALITY", "")
    cfg = PlanConfig.from_env()
    assert cfg.mode == GenerationMode.TextToImage
    assert cfg.quality_preset == QualityPreset.Standard
