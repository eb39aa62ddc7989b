"""Tests for ShuntingInhibitionMode and ActiveDendriteMode."""

import pytest

from neurite.components.channels import PotassiumChannel, SodiumChannel
from neurite.components.coincidence import (
    NMDACoincidenceDetector,
    NMDADetectorConfig,
    SimpleTemporalCoincidenceDetector,
    SimpleTemporalDetectorConfig,
)
from neurite.components.dendrites import (
    ActiveDendriteConfig,
    ActiveDendriteMode,
    MembraneSnapshot,
    ShuntingInhibitionMode,
    shunting_factor,
)
from neurite.core.contribution_keys import ContributionKeys as CK
from neurite.errors import ConfigurationError
from neurite.signals import LigandType, NeuralSignal


def excite(value, source="proximal"):
    return NeuralSignal(value=value, source_id=source, neurotransmitter=LigandType.GLUTAMATE)


def inhibit(value, source="proximal"):
    return NeuralSignal(value=-abs(value), source_id=source, neurotransmitter=LigandType.GABA)


class RecordingDetector(SimpleTemporalCoincidenceDetector):
    """Simple temporal detector that records every batch it is shown."""

    def __init__(self, config=None):
        super().__init__("recorder", config or SimpleTemporalDetectorConfig())
        self.seen = []
        self.close_calls = 0

    def detect(self, inputs, snapshot):
        self.seen.append(inputs)
        return super().detect(inputs, snapshot)

    def close(self):
        self.close_calls += 1
        super().close()


@pytest.mark.unit
class TestShuntingFactor:
    """Divisive factor helper."""

    @pytest.mark.parametrize("inhibition,strength,expected", [
        (0.0, 0.5, 1.0),
        (0.4, 0.5, 0.8),
        (1.0, 0.5, 0.5),
        (100.0, 0.5, 0.1),
        (1e9, 1.0, 0.1),
    ])
    def test_shunting_factor(self, inhibition, strength, expected):
        assert shunting_factor(inhibition, strength) == pytest.approx(expected)

    def test_custom_floor(self):
        assert shunting_factor(100.0, 0.5, floor=0.3) == 0.3


@pytest.mark.unit
class TestShuntingInhibitionMode:
    """Divisive inhibition on decayed inputs."""

    def test_inhibition_divides_excitation(self, clock, quiet_config):
        mode = ShuntingInhibitionMode(0.5, quiet_config, clock=clock)
        mode.handle(excite(1.0))
        mode.handle(inhibit(0.4))

        result = mode.process(MembraneSnapshot())

        assert result.net_current == pytest.approx(0.8)
        assert result.channel_contributions[CK.SHUNT_FACTOR] == pytest.approx(0.8)

    def test_floor_keeps_excitatory_path_open(self, clock, quiet_config):
        mode = ShuntingInhibitionMode(0.5, quiet_config, clock=clock)
        mode.handle(excite(2.0))
        mode.handle(inhibit(100.0))

        result = mode.process(MembraneSnapshot())

        assert result.net_current == pytest.approx(0.2)
        assert result.net_current > 0

    def test_inhibition_alone_yields_zero_net(self, clock, quiet_config):
        mode = ShuntingInhibitionMode(0.5, quiet_config, clock=clock)
        mode.handle(inhibit(1.0))

        result = mode.process(MembraneSnapshot())

        assert result is not None
        assert result.net_current == 0.0
        assert result.channel_contributions[CK.INHIBITION] == pytest.approx(1.0)

    def test_non_positive_strength_uses_default(self, quiet_config):
        assert ShuntingInhibitionMode(0.0, quiet_config).strength == 0.5
        assert ShuntingInhibitionMode(-3.0, quiet_config).strength == 0.5

    def test_negligible_input_returns_none(self, clock, quiet_config):
        mode = ShuntingInhibitionMode(0.5, quiet_config, clock=clock)
        mode.handle(excite(0.0005))
        assert mode.process(MembraneSnapshot()) is None

    def test_empty_returns_none(self, quiet_config):
        assert ShuntingInhibitionMode(0.5, quiet_config).process(MembraneSnapshot()) is None

    def test_delegates_buffering_and_channels(self, clock, quiet_config):
        channel = PotassiumChannel("kv", clock=clock)
        mode = ShuntingInhibitionMode(0.5, quiet_config, clock=clock)
        mode.add_channel(channel)
        mode.handle(excite(1.0))

        assert mode.buffer_size == 1
        assert mode.channels == [channel]
        assert mode.name == "ShuntingInhibition"

        mode.close()
        mode.close()
        assert channel.closed


@pytest.mark.unit
class TestActiveDendriteSaturationAndFallback:
    """Per-input saturation and the fixed fallback spike rule."""

    def test_config_defaults_for_non_positive_values(self, quiet_config):
        mode = ActiveDendriteMode(
            ActiveDendriteConfig(
                max_synaptic_effect=0.0,
                shunting_strength=-1.0,
                dendritic_spike_threshold=0.0,
                nmda_spike_amplitude=-2.0,
            ),
            quiet_config,
        )
        assert mode.config.max_synaptic_effect == 2.0
        assert mode.config.shunting_strength == 0.5
        assert mode.config.dendritic_spike_threshold == 1.5
        assert mode.config.nmda_spike_amplitude == 1.0

    def test_single_input_saturates(self, clock, quiet_config):
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config, clock=clock)
        mode.handle(excite(5.0))

        result = mode.process(MembraneSnapshot(accumulator=-70.0))

        assert result.net_current == pytest.approx(2.0)
        assert result.channel_contributions[CK.SATURATED_INPUTS] == 1.0
        assert not result.dendritic_spike

    def test_saturation_applies_to_inhibition(self, clock, quiet_config):
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config, clock=clock)
        mode.handle(excite(1.0))
        mode.handle(inhibit(50.0))

        result = mode.process(MembraneSnapshot())

        # Inhibition saturates at 2.0 → shunt = max(0.1, 1 - 2.0 × 0.5) = 0.1
        assert result.channel_contributions[CK.INHIBITION] == pytest.approx(2.0)
        assert result.net_current == pytest.approx(0.1)

    def test_fallback_spike_at_exact_threshold(self, clock, quiet_config):
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config, clock=clock)
        mode.handle(excite(1.5))

        result = mode.process(MembraneSnapshot(accumulator=-30.0))

        assert result.dendritic_spike
        assert result.net_current == pytest.approx(2.5)
        assert result.calcium_current == pytest.approx(0.5)
        assert result.nonlinear_amplification == 1.0
        assert result.channel_contributions[CK.NMDA_SPIKE] == 1.0

    def test_no_fallback_spike_below_threshold(self, clock, quiet_config):
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config, clock=clock)
        mode.handle(excite(1.4))

        result = mode.process(MembraneSnapshot(accumulator=-30.0))

        assert not result.dendritic_spike
        assert result.net_current == pytest.approx(1.4)

    def test_no_fallback_spike_without_depolarization(self, clock, quiet_config):
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config, clock=clock)
        mode.handle(excite(1.8))

        # Accumulator must exceed -40 mV strictly
        result = mode.process(MembraneSnapshot(accumulator=-40.0))

        assert not result.dendritic_spike
        assert CK.NMDA_SPIKE not in result.channel_contributions

    def test_custom_voltage_threshold(self, clock, quiet_config):
        mode = ActiveDendriteMode(
            ActiveDendriteConfig(voltage_threshold=-60.0), quiet_config, clock=clock
        )
        mode.handle(excite(1.8))
        assert mode.process(MembraneSnapshot(accumulator=-50.0)).dendritic_spike

    def test_empty_returns_none(self, quiet_config):
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config)
        assert mode.process(MembraneSnapshot(accumulator=-30.0)) is None

    def test_saturation_covers_potassium_channel_current(self, clock, quiet_config):
        kv = PotassiumChannel("kv", clock=clock)
        mode = ActiveDendriteMode(
            ActiveDendriteConfig(max_synaptic_effect=2.0), quiet_config, channels=[kv], clock=clock
        )
        snapshot = MembraneSnapshot(accumulator=-20.0)
        assert mode.process(snapshot) is None
        mode.handle(excite(1.0))

        result = mode.process(snapshot)

        contributions = result.channel_contributions
        # 1.0 plus roughly -32 of Kv current saturates to -2.0
        assert contributions["kv"] < -2.0
        assert contributions[CK.INHIBITION] == pytest.approx(2.0)
        assert contributions[CK.EXCITATION] == 0.0
        assert contributions[CK.SATURATED_INPUTS] == 1.0
        assert result.net_current == 0.0

    def test_saturation_covers_sodium_channel_current(self, clock, quiet_config):
        nav = SodiumChannel("nav", clock=clock)
        mode = ActiveDendriteMode(
            ActiveDendriteConfig(max_synaptic_effect=2.0), quiet_config, channels=[nav], clock=clock
        )
        snapshot = MembraneSnapshot(accumulator=-20.0)
        mode.process(snapshot)
        mode.handle(excite(0.5))

        result = mode.process(snapshot)

        contributions = result.channel_contributions
        assert contributions["nav"] > 2.0
        assert contributions[CK.EXCITATION] == pytest.approx(2.0)
        assert contributions[CK.INHIBITION] == 0.0
        # Saturated drive still reaches the fallback spike threshold
        assert result.dendritic_spike
        assert result.net_current == pytest.approx(3.0)


@pytest.mark.unit
class TestActiveDendriteDetector:
    """Coincidence detector path and detector ownership."""

    def test_detector_sees_exactly_the_processed_batch(self, clock, quiet_config):
        detector = RecordingDetector()
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config, clock=clock)
        mode.set_coincidence_detector(detector)
        for i in range(3):
            mode.handle(excite(0.4, source=f"basal_{i}"))

        result = mode.process(MembraneSnapshot())

        assert len(detector.seen) == 1
        assert [inp.signal.source_id for inp in detector.seen[0]] == ["basal_0", "basal_1", "basal_2"]
        assert mode.buffer_size == 0

        mode.handle(excite(0.4, source="basal_3"))
        mode.process(MembraneSnapshot())
        assert [inp.signal.source_id for inp in detector.seen[1]] == ["basal_3"]

        assert result.dendritic_spike
        assert result.nonlinear_amplification == pytest.approx(1.2)
        assert result.net_current == pytest.approx(1.2 * 1.2 + 1.0)
        assert result.calcium_current == pytest.approx(0.5)
        assert result.channel_contributions[CK.COINCIDENCE_CURRENT] == pytest.approx(1.0)

    def test_detector_and_fallback_are_exclusive(self, clock, quiet_config):
        mode = ActiveDendriteMode(
            ActiveDendriteConfig(coincidence_detector=NMDADetectorConfig()), quiet_config, clock=clock
        )
        # One input: the NMDA detector needs two, the fallback rule would fire
        mode.handle(excite(2.0))

        result = mode.process(MembraneSnapshot(accumulator=-30.0))

        assert not result.dendritic_spike
        assert result.net_current == pytest.approx(2.0)
        assert CK.NMDA_SPIKE not in result.channel_contributions
        assert CK.COINCIDENCE_CURRENT not in result.channel_contributions

    def test_detector_built_from_config(self, quiet_config):
        mode = ActiveDendriteMode(
            ActiveDendriteConfig(coincidence_detector=SimpleTemporalDetectorConfig()), quiet_config
        )
        assert isinstance(mode.coincidence_detector, SimpleTemporalCoincidenceDetector)

    def test_detector_instance_is_adopted(self, quiet_config):
        detector = NMDACoincidenceDetector("mine", NMDADetectorConfig())
        mode = ActiveDendriteMode(ActiveDendriteConfig(coincidence_detector=detector), quiet_config)
        assert mode.coincidence_detector is detector

    def test_invalid_detector_config_raises(self, quiet_config):
        with pytest.raises(ConfigurationError):
            ActiveDendriteMode(
                ActiveDendriteConfig(coincidence_detector=NMDADetectorConfig(voltage_threshold=0.0)),
                quiet_config,
            )

    def test_replacing_detector_closes_previous(self, quiet_config):
        first, second = RecordingDetector(), RecordingDetector()
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config)

        mode.set_coincidence_detector(first)
        mode.set_coincidence_detector(first)
        assert first.close_calls == 0

        mode.set_coincidence_detector(second)
        assert first.close_calls == 1
        assert mode.coincidence_detector is second

        mode.set_coincidence_detector(None)
        assert second.close_calls == 1
        assert mode.coincidence_detector is None

    def test_close_releases_detector_and_channels_once(self, clock, quiet_config):
        detector = RecordingDetector()
        channel = PotassiumChannel("kv", clock=clock)
        mode = ActiveDendriteMode(ActiveDendriteConfig(), quiet_config, channels=[channel], clock=clock)
        mode.set_coincidence_detector(detector)

        mode.close()
        mode.close()

        assert detector.close_calls == 1
        assert channel.closed
        assert mode.name == "ActiveDendrite"
