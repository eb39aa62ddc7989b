"""Tests for BiologicalConfig, ActiveDendriteConfig and the cell-type presets."""

import dataclasses
import warnings

import pytest

from neurite.components.coincidence import NMDADetectorConfig
from neurite.components.dendrites import (
    ActiveDendriteConfig,
    BiologicalConfig,
    cortical_pyramidal_config,
    hippocampal_config,
    interneuron_config,
)
from neurite.errors import ConfigurationError


@pytest.mark.unit
class TestBiologicalConfig:
    """Validation and legacy fields."""

    def test_defaults_are_cortical(self):
        config = BiologicalConfig()
        assert config.membrane_time_constant_ms == 20.0
        assert config.resting_potential == -70.0
        assert config.noise_seed is None

    @pytest.mark.parametrize("field,value", [
        ("membrane_time_constant_ms", -1.0),
        ("membrane_time_constant_ms", float("inf")),
        ("resting_potential", -200.0),
        ("resting_potential", 10.0),
        ("membrane_noise", -0.1),
        ("temporal_jitter_ms", -0.5),
    ])
    def test_invalid_values_raise(self, field, value):
        with pytest.raises(ConfigurationError, match=field):
            BiologicalConfig(**{field: value})

    def test_all_errors_reported_together(self):
        with pytest.raises(ConfigurationError) as exc_info:
            BiologicalConfig(membrane_noise=-1.0, temporal_jitter_ms=-1.0)
        message = str(exc_info.value)
        assert "membrane_noise" in message
        assert "temporal_jitter_ms" in message

    @pytest.mark.parametrize("tau", [-5.0, "fast", True])
    def test_invalid_branch_time_constant_raises(self, tau):
        with pytest.raises(ConfigurationError, match="branch_time_constants"):
            BiologicalConfig(branch_time_constants={"apical": tau})

    def test_zero_time_constant_is_allowed(self):
        assert BiologicalConfig(membrane_time_constant_ms=0.0).membrane_time_constant_ms == 0.0

    def test_leak_conductance_warns(self):
        with pytest.warns(DeprecationWarning, match="leak_conductance"):
            BiologicalConfig(leak_conductance=0.95)

    def test_no_warning_by_default(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            BiologicalConfig()

    def test_replace_revalidates(self):
        with pytest.raises(ConfigurationError):
            dataclasses.replace(BiologicalConfig(), membrane_noise=-1.0)


@pytest.mark.unit
class TestPresets:
    """Cell-type presets."""

    def test_cortical_pyramidal(self):
        config = cortical_pyramidal_config()
        assert config.membrane_time_constant_ms == 20.0
        assert config.resting_potential == -70.0
        assert config.branch_time_constants == {
            "apical": 25.0, "basal": 15.0, "distal": 30.0, "proximal": 10.0,
        }
        assert config.spatial_decay_factor == 0.1
        assert config.membrane_noise == 0.01
        assert config.temporal_jitter_ms == 0.5

    def test_hippocampal(self):
        config = hippocampal_config()
        assert config.membrane_time_constant_ms == 35.0
        assert config.resting_potential == -65.0
        assert config.branch_time_constants["distal"] == 50.0
        assert config.membrane_noise == 0.005

    def test_interneuron(self):
        config = interneuron_config()
        assert config.membrane_time_constant_ms == 8.0
        assert config.resting_potential == -75.0
        assert config.branch_time_constants == {"dendrite": 8.0}
        assert config.temporal_jitter_ms == 1.0

    def test_presets_are_independent(self):
        a = cortical_pyramidal_config()
        a.branch_time_constants["apical"] = 99.0
        assert cortical_pyramidal_config().branch_time_constants["apical"] == 25.0


@pytest.mark.unit
class TestActiveDendriteConfig:
    """Defaults and fallback for non-positive values."""

    def test_defaults(self):
        config = ActiveDendriteConfig()
        assert config.max_synaptic_effect == 2.0
        assert config.shunting_strength == 0.5
        assert config.dendritic_spike_threshold == 1.5
        assert config.nmda_spike_amplitude == 1.0
        assert config.voltage_threshold == -40.0
        assert config.shunting_floor == 0.1
        assert config.coincidence_detector is None

    def test_with_defaults_keeps_positive_values(self):
        detector_config = NMDADetectorConfig()
        config = ActiveDendriteConfig(
            max_synaptic_effect=3.0, coincidence_detector=detector_config
        ).with_defaults()
        assert config.max_synaptic_effect == 3.0
        assert config.coincidence_detector is detector_config

    def test_with_defaults_clamps_floor(self):
        assert ActiveDendriteConfig(shunting_floor=2.0).with_defaults().shunting_floor == 1.0
        assert ActiveDendriteConfig(shunting_floor=-1.0).with_defaults().shunting_floor == 0.0
