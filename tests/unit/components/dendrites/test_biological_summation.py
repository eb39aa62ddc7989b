"""
Tests for BiologicalTemporalSummationMode.

Covers exponential decay, the recent-input reference time, spatial weighting,
branch time constants, membrane noise, jitter, channels and lifecycle.
"""

import math

import pytest

from neurite.components.channels import GabaAChannel, PotassiumChannel, create_channel
from neurite.components.coincidence import create_coincidence_detector
from neurite.components.dendrites import (
    BiologicalConfig,
    BiologicalTemporalSummationMode,
    MembraneSnapshot,
)
from neurite.core.contribution_keys import ContributionKeys as CK
from neurite.signals import LigandType, NeuralSignal
from neurite.utils.rng import LCG_INCREMENT, LCG_MODULUS, LCG_MULTIPLIER, MembraneNoiseGenerator


def signal(value, source="proximal", ligand=LigandType.GLUTAMATE):
    return NeuralSignal(value=value, source_id=source, neurotransmitter=ligand)


class CountingPotassiumChannel(PotassiumChannel):
    """Potassium channel that counts close() calls."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.close_calls = 0

    def close(self):
        self.close_calls += 1
        super().close()


@pytest.mark.unit
class TestTemporalDecay:
    """Exponential decay with the membrane time constant."""

    @pytest.mark.parametrize("age_ms,expected", [
        (0.0, 1.0),
        (5.0, 0.779),
        (10.0, 0.607),
        (20.0, 0.368),
        (40.0, 0.135),
        (100.0, 0.0067),
    ])
    def test_decay_follows_membrane_time_constant(self, clock, quiet_config, age_ms, expected):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        mode.handle(signal(1.0))
        clock.advance_ms(age_ms)

        result = mode.process(MembraneSnapshot())

        assert result is not None
        assert result.net_current == pytest.approx(expected, abs=1e-3)

    def test_recent_inputs_age_relative_to_latest_arrival(self, clock, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        mode.handle(signal(1.0))
        clock.advance_ms(3.0)
        mode.handle(signal(1.0))
        clock.advance_ms(2.0)

        result = mode.process(MembraneSnapshot())

        # Tick within 5 ms of the latest arrival: ages are 3 ms and 0 ms
        assert result.net_current == pytest.approx(1.0 + math.exp(-3.0 / 20.0))

    def test_stale_inputs_age_relative_to_tick(self, clock, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        mode.handle(signal(1.0))
        clock.advance_ms(3.0)
        mode.handle(signal(1.0))
        clock.advance_ms(10.0)

        result = mode.process(MembraneSnapshot())

        assert result.net_current == pytest.approx(math.exp(-13.0 / 20.0) + math.exp(-10.0 / 20.0))

    def test_zero_time_constant_decays_everything(self, clock, make_quiet_config):
        mode = BiologicalTemporalSummationMode(
            make_quiet_config(membrane_time_constant_ms=0.0), clock=clock
        )
        mode.handle(signal(5.0))
        assert mode.process(MembraneSnapshot()) is None

    def test_branch_time_constants(self, clock, make_quiet_config):
        config = make_quiet_config(branch_time_constants={"distal": 40.0, "special_source": 5.0})
        mode = BiologicalTemporalSummationMode(config, clock=clock)

        assert mode.effective_time_constant("special_source") == 5.0
        assert mode.effective_time_constant("distal_2") == 40.0
        assert mode.effective_time_constant("distal") == 40.0
        assert mode.effective_time_constant("basal_1") == 20.0

        mode.handle(signal(1.0, source="distal_2"))
        clock.advance_ms(40.0)
        result = mode.process(MembraneSnapshot())
        assert result.net_current == pytest.approx(math.exp(-1.0))


@pytest.mark.unit
class TestSpatialWeighting:
    """Electrotonic attenuation by branch label."""

    @pytest.mark.parametrize("source,weight", [
        ("proximal", 1.0),
        ("proximal_3", 1.0),
        ("basal_1", 0.8),
        ("apical", 0.7),
        ("distal", 0.5),
        ("distal_12", 0.5),
        ("distalX", 0.7),
        ("neuron_42", 0.7),
        ("", 0.7),
    ])
    def test_label_weights(self, make_quiet_config, source, weight):
        mode = BiologicalTemporalSummationMode(make_quiet_config(spatial_decay_factor=0.1))
        assert mode.spatial_weight(source) == weight

    def test_disabled_spatial_weighting(self, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config)
        assert mode.spatial_weight("distal") == 1.0

    def test_proximal_to_distal_ratio(self, clock, make_quiet_config):
        config = make_quiet_config(spatial_decay_factor=0.1)
        proximal = BiologicalTemporalSummationMode(config, clock=clock)
        distal = BiologicalTemporalSummationMode(config, clock=clock)
        proximal.handle(signal(1.0, source="proximal"))
        distal.handle(signal(1.0, source="distal"))

        p = proximal.process(MembraneSnapshot()).net_current
        d = distal.process(MembraneSnapshot()).net_current

        assert p / d == pytest.approx(2.0)


@pytest.mark.unit
class TestSummation:
    """Excitation/inhibition split, clamping and the noise floor."""

    def test_empty_buffer_returns_none(self, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config)
        assert mode.process(MembraneSnapshot()) is None

    def test_excitation_and_inhibition(self, clock, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        mode.handle(signal(1.0))
        mode.handle(signal(-0.4, ligand=LigandType.GABA))

        result = mode.process(MembraneSnapshot())

        assert result.net_current == pytest.approx(0.6)
        contributions = result.channel_contributions
        assert contributions[CK.EXCITATION] == pytest.approx(1.0)
        assert contributions[CK.INHIBITION] == pytest.approx(0.4)
        assert contributions[CK.INPUT_COUNT] == 2.0

    def test_net_current_is_clamped(self, clock, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        mode.handle(signal(250.0))
        assert mode.process(MembraneSnapshot()).net_current == 100.0

        mode.handle(signal(-250.0))
        assert mode.process(MembraneSnapshot()).net_current == -100.0

    def test_sub_floor_result_is_none(self, clock, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        mode.handle(signal(0.0005))
        assert mode.process(MembraneSnapshot()) is None

    def test_buffer_is_cleared_by_process(self, clock, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        mode.handle(signal(1.0))
        mode.handle(signal(1.0))
        assert mode.buffer_size == 2

        mode.process(MembraneSnapshot())

        assert mode.buffer_size == 0
        assert mode.process(MembraneSnapshot()) is None

    def test_handle_returns_none(self, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config)
        assert mode.handle(signal(1.0)) is None

    def test_process_immediate_skips_decay(self, clock, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        mode.handle(signal(1.5))
        clock.advance_ms(100.0)

        result = mode.process_immediate()

        assert result.net_current == pytest.approx(1.5)
        assert mode.buffer_size == 0
        assert mode.process_immediate() is None


@pytest.mark.unit
class TestMembraneNoise:
    """Deterministic noise and jitter with a fixed seed."""

    def test_same_seed_same_result(self, clock, make_quiet_config):
        config = make_quiet_config(membrane_noise=0.01, noise_seed=1234)
        a = BiologicalTemporalSummationMode(config, clock=clock)
        b = BiologicalTemporalSummationMode(config, clock=clock)
        for mode in (a, b):
            mode.handle(signal(1.0))
            mode.handle(signal(0.5, source="basal_1"))
            mode.handle(signal(-0.2, source="distal_1", ligand=LigandType.GABA))

        assert a.process(MembraneSnapshot()).net_current == b.process(MembraneSnapshot()).net_current

    def test_seed_advances_once_per_input(self, clock, make_quiet_config):
        mode = BiologicalTemporalSummationMode(
            make_quiet_config(membrane_noise=0.01, noise_seed=1234), clock=clock
        )
        for _ in range(3):
            mode.handle(signal(1.0))
        mode.process(MembraneSnapshot())

        expected = 1234
        for _ in range(3):
            expected = (expected * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        assert mode.noise_seed == expected

    def test_noise_is_not_decayed(self, clock, make_quiet_config):
        mode = BiologicalTemporalSummationMode(
            make_quiet_config(membrane_noise=0.05, noise_seed=99), clock=clock
        )
        arrival = clock()
        mode.handle(signal(1.0))
        clock.advance_ms(40.0)

        result = mode.process(MembraneSnapshot())

        expected_noise = MembraneNoiseGenerator(0.05, 99).sample(arrival, 1)
        assert result.channel_contributions[CK.NOISE] == pytest.approx(expected_noise)
        assert result.net_current == pytest.approx(math.exp(-2.0) + expected_noise)

    def test_noise_is_bounded(self, clock, make_quiet_config):
        level = 0.02
        mode = BiologicalTemporalSummationMode(
            make_quiet_config(membrane_noise=level, noise_seed=5), clock=clock
        )
        for i in range(20):
            mode.handle(signal(1.0, source=f"basal_{i}"))
            clock.advance_ms(0.1)

        result = mode.process(MembraneSnapshot())

        assert abs(result.channel_contributions[CK.NOISE]) <= 20 * 2 * level

    def test_process_immediate_does_not_advance_seed(self, clock, make_quiet_config):
        mode = BiologicalTemporalSummationMode(
            make_quiet_config(membrane_noise=0.01, noise_seed=42), clock=clock
        )
        mode.handle(signal(1.0))
        mode.process_immediate()
        assert mode.noise_seed == 42

    def test_jitter_is_reproducible_with_seed(self, clock, make_quiet_config):
        config = make_quiet_config(temporal_jitter_ms=1.0, noise_seed=7)
        a = BiologicalTemporalSummationMode(config, clock=clock)
        b = BiologicalTemporalSummationMode(config, clock=clock)
        a.handle(signal(1.0))
        b.handle(signal(1.0))
        clock.advance_ms(10.0)

        ra = a.process(MembraneSnapshot())
        rb = b.process(MembraneSnapshot())

        assert ra.net_current == rb.net_current
        # A jittered arrival shifts the age away from exactly 10 ms
        assert ra.net_current != pytest.approx(math.exp(-0.5), abs=1e-9)


@pytest.mark.unit
class TestChannelsAndLifecycle:
    """Channel chain ownership and channel currents."""

    def test_channel_currents_are_reported(self, clock, quiet_config):
        # A low ceiling keeps 1.0 + I_K well inside the ±100 clamp
        kv = create_channel("kv", "kv", clock=clock, max_conductance=1.0)
        mode = BiologicalTemporalSummationMode(quiet_config, channels=[kv], clock=clock)
        # The chain sees the voltage of the most recent snapshot
        assert mode.process(MembraneSnapshot(accumulator=0.0)) is None
        mode.handle(signal(1.0))

        result = mode.process(MembraneSnapshot(accumulator=0.0))

        assert result.potassium_current < 0
        assert result.channel_contributions["kv"] == pytest.approx(result.potassium_current)
        assert result.net_current == pytest.approx(1.0 + result.potassium_current)

    def test_calcium_channel_current_reaches_calcium_current(self, clock, quiet_config):
        cav = create_channel("cav", "cav", clock=clock)
        mode = BiologicalTemporalSummationMode(quiet_config, channels=[cav], clock=clock)
        mode.process(MembraneSnapshot(accumulator=0.0))
        mode.handle(signal(1.0))

        result = mode.process(MembraneSnapshot(accumulator=0.0))

        assert result.calcium_current > 0
        assert result.calcium_current == pytest.approx(result.channel_contributions["cav"])

    def test_vetoed_signal_is_not_buffered(self, clock, quiet_config):
        config = GabaAChannel.default_config()
        config.block_threshold = 0.3
        mode = BiologicalTemporalSummationMode(
            quiet_config, channels=[GabaAChannel("gaba", config, clock=clock)], clock=clock
        )

        assert mode.handle(signal(-50.0, ligand=LigandType.GABA)) is None
        assert mode.buffer_size == 0
        assert mode.process(MembraneSnapshot()) is None

    def test_add_channel(self, clock, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config, clock=clock)
        channel = PotassiumChannel("kv", clock=clock)
        mode.add_channel(channel)
        assert mode.channels == [channel]

    def test_set_channels_closes_previous_chain(self, clock, quiet_config):
        old = CountingPotassiumChannel("old", clock=clock)
        new = CountingPotassiumChannel("new", clock=clock)
        mode = BiologicalTemporalSummationMode(quiet_config, channels=[old], clock=clock)

        mode.set_channels([new])

        assert old.close_calls == 1
        assert new.close_calls == 0
        assert mode.channels == [new]

    def test_close_is_idempotent(self, clock, quiet_config):
        channel = CountingPotassiumChannel("kv", clock=clock)
        mode = BiologicalTemporalSummationMode(quiet_config, channels=[channel], clock=clock)
        mode.handle(signal(1.0))

        mode.close()
        mode.close()

        assert channel.close_calls == 1
        assert mode.buffer_size == 0

    def test_unused_detector_is_closed(self, quiet_config):
        mode = BiologicalTemporalSummationMode(quiet_config)
        detector = create_coincidence_detector("nmda")
        mode.set_coincidence_detector(detector)
        assert detector.closed

    def test_name(self):
        mode = BiologicalTemporalSummationMode(BiologicalConfig(noise_seed=1))
        assert mode.name == "BiologicalTemporalSummation"
