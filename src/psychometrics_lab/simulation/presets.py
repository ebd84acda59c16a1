"""
Preset simulation scenarios.

These presets give the CLI and the tests named, seeded starting points.
"""

from pathlib import Path

from omegaconf import OmegaConf

from psychometrics_lab.simulation.config import PresetConfig

PARAMS_DIR = Path(__file__).parent / "params"


def load_preset_config(yaml_path: Path) -> PresetConfig:
    """Load and validate a preset from YAML.

    Args:
        yaml_path: Path to YAML preset file

    Returns:
        Validated PresetConfig

    Raises:
        FileNotFoundError: If yaml_path doesn't exist
        InvalidInputError: If the slider values are out of range
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Preset file not found: {yaml_path}")

    schema = OmegaConf.structured(PresetConfig)
    user_config = OmegaConf.load(yaml_path)
    config = OmegaConf.merge(schema, user_config)

    result = OmegaConf.to_object(config)
    assert isinstance(result, PresetConfig)

    return result


def get_available_presets() -> list[str]:
    return sorted(x.stem for x in PARAMS_DIR.glob("*.yaml"))


def get_preset(name: str) -> PresetConfig:
    """Get a preset configuration by name."""
    config_path = PARAMS_DIR / f"{name}.yaml"
    if not config_path.exists():
        available_presets = get_available_presets()
        raise ValueError(
            f"Unknown preset: {name}. Available presets: {available_presets}"
        )
    return load_preset_config(config_path)
