"""
Biologically realistic temporal summation with exponential decay.

This is the core integration engine. The shunting and active-dendrite modes
compose it and reuse its buffering and decay machinery.

Biological basis:
- A postsynaptic potential decays with the membrane time constant:
      V(t) = V0 × exp(-t / τ),   τ = Rm × Cm
  so an input's contribution to a tick depends on how long ago it arrived
- Electrotonic distance attenuates inputs: distal tufts deliver about half
  the amplitude of perisomatic synapses
- Thermal and channel-gating noise perturb every contribution slightly
- Release and conduction variability jitter arrival times

Per tick:
1. Take the whole buffer and clear it in one critical section
2. Age every input against a reference time. When the tick runs within 5 ms
   of the most recent arrival, that arrival is the reference; otherwise the
   tick time is. This keeps scheduling delay between enqueue and tick from
   adding decay to inputs that arrived together.
3. decay = exp(-age / τ_branch), with τ_branch looked up by source id, then
   by branch label, then falling back to the membrane τ (τ = 0 → decay 0)
4. contribution = value × spatial_weight × decay + channel currents × decay
   + membrane noise
5. Positive contributions sum to excitation, negative ones to inhibition;
   net = excitation - inhibition, clamped to [-100, 100]; |net| < 0.001 → None

References:
- Rall (1967): Distinguishing theoretical synaptic potentials computed for
  different soma-dendritic distributions of synaptic input
- Magee (2000): Dendritic integration of excitatory synaptic input
- Faisal et al. (2008): Noise in the nervous system
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

import torch

from neurite.components.channels.base import IonChannel, IonType
from neurite.components.dendrites.biological_config import BiologicalConfig
from neurite.components.dendrites.channel_chain import ChannelChain
from neurite.components.dendrites.dendrite_constants import (
    CURRENT_NOISE_FLOOR,
    RECENT_INPUT_WINDOW_MS,
    SPATIAL_WEIGHT_APICAL,
    SPATIAL_WEIGHTS,
)
from neurite.components.dendrites.integration_mode import (
    DendriticIntegrationMode,
    clamp_current,
    resolve_branch_label,
)
from neurite.components.dendrites.integration_types import (
    IntegratedPotential,
    MembraneSnapshot,
    TimestampedInput,
)
from neurite.core.contribution_keys import ContributionKeys as CK
from neurite.signals import NeuralSignal
from neurite.units import NS_PER_MS, ms_to_ns
from neurite.utils.rng import MembraneNoiseGenerator, gaussian_sample, make_generator

logger = logging.getLogger(__name__)

InputProcessor = Callable[[float], float]
"""Transform applied to each input's value × weight + channel currents before decay."""


@dataclass
class DecayedBatch:
    """One tick's buffer after decay, before any mode-specific nonlinearity.

    Attributes:
        batch: The inputs drained from the buffer, in arrival order
        excitation: Sum of positive contributions
        inhibition: Magnitude of the sum of negative contributions
        noise: Total membrane noise added
        processed_inputs: Inputs whose contribution the input processor changed
        channel_currents: Decayed current per channel name
        ion_currents: Decayed channel current per ion
    """

    batch: List[TimestampedInput]
    excitation: float = 0.0
    inhibition: float = 0.0
    noise: float = 0.0
    processed_inputs: int = 0
    channel_currents: Dict[str, float] = field(default_factory=dict)
    ion_currents: Dict[IonType, float] = field(default_factory=dict)

    def to_potential(
        self,
        net_current: float,
        dendritic_spike: bool = False,
        nonlinear_amplification: float = 1.0,
        extra_calcium: float = 0.0,
        extra_contributions: Optional[Dict[str, float]] = None,
    ) -> IntegratedPotential:
        contributions = dict(self.channel_currents)
        contributions[CK.EXCITATION] = self.excitation
        contributions[CK.INHIBITION] = self.inhibition
        contributions[CK.NOISE] = self.noise
        contributions[CK.INPUT_COUNT] = float(len(self.batch))
        if extra_contributions:
            contributions.update(extra_contributions)

        return IntegratedPotential(
            net_current=net_current,
            sodium_current=self.ion_currents.get(IonType.SODIUM, 0.0),
            potassium_current=self.ion_currents.get(IonType.POTASSIUM, 0.0),
            calcium_current=self.ion_currents.get(IonType.CALCIUM, 0.0) + extra_calcium,
            chloride_current=self.ion_currents.get(IonType.CHLORIDE, 0.0),
            dendritic_spike=dendritic_spike,
            nonlinear_amplification=nonlinear_amplification,
            channel_contributions=contributions,
        )


class BiologicalTemporalSummationMode(DendriticIntegrationMode):
    """Buffered integration with exponential decay, spatial weights and noise.

    Args:
        config: Membrane parameters; defaults to ``BiologicalConfig()``
        channels: Initial channel chain (ownership passes to the mode)
        clock: Nanosecond clock for arrival and tick times
    """

    mode_name = "BiologicalTemporalSummation"

    def __init__(
        self,
        config: Optional[BiologicalConfig] = None,
        channels: Optional[Iterable[IonChannel]] = None,
        clock: Callable[[], int] = time.time_ns,
    ):
        self.config = config if config is not None else BiologicalConfig()
        self._clock = clock
        self._chain = ChannelChain(channels, resting_potential=self.config.resting_potential)

        self._buffer_lock = threading.Lock()
        self._buffer: List[TimestampedInput] = []

        self._noise = MembraneNoiseGenerator(self.config.membrane_noise, self.config.noise_seed)
        self._jitter_lock = threading.Lock()
        self._jitter_rng = make_generator(self.config.noise_seed)
        self._closed = False

    # -------------------------------------------------------------------------
    # Spatial and temporal parameters
    # -------------------------------------------------------------------------

    def spatial_weight(self, source_id: str) -> float:
        """Attenuation of an input from ``source_id``.

        proximal 1.0, basal 0.8, apical 0.7, distal 0.5; unlabeled sources get
        the apical weight. With ``spatial_decay_factor <= 0`` every weight is 1.0.
        """
        if self.config.spatial_decay_factor <= 0:
            return 1.0
        label = resolve_branch_label(source_id)
        if label is None:
            return SPATIAL_WEIGHT_APICAL
        return SPATIAL_WEIGHTS[label]

    def effective_time_constant(self, source_id: str) -> float:
        """Decay τ (ms) for inputs from ``source_id``."""
        branch_taus = self.config.branch_time_constants
        if source_id in branch_taus:
            return branch_taus[source_id]
        label = resolve_branch_label(source_id)
        if label is not None and label in branch_taus:
            return branch_taus[label]
        return self.config.membrane_time_constant_ms

    # -------------------------------------------------------------------------
    # Channels
    # -------------------------------------------------------------------------

    def set_channels(self, channels: Iterable[IonChannel]) -> None:
        """Replace the channel chain, closing the previous channels."""
        self._chain.set_channels(channels)

    def add_channel(self, channel: IonChannel) -> None:
        self._chain.add_channel(channel)

    @property
    def channels(self) -> List[IonChannel]:
        return self._chain.channels

    # -------------------------------------------------------------------------
    # Integration
    # -------------------------------------------------------------------------

    def handle(self, signal: NeuralSignal) -> Optional[IntegratedPotential]:
        arrival = self._clock()
        passed = self._chain.run(signal)
        if passed is None:
            return None
        signal, currents = passed

        if self.config.temporal_jitter_ms > 0:
            with self._jitter_lock:
                jitter_ms = gaussian_sample(self._jitter_rng, self.config.temporal_jitter_ms)
            arrival += ms_to_ns(jitter_ms)

        entry = TimestampedInput(
            signal=signal,
            arrival_time_ns=arrival,
            spatial_weight=self.spatial_weight(signal.source_id),
            channel_currents=currents,
        )
        with self._buffer_lock:
            self._buffer.append(entry)
        return None

    def process(self, snapshot: MembraneSnapshot) -> Optional[IntegratedPotential]:
        self.observe(snapshot)
        decayed = self.drain_and_decay()
        if decayed is None:
            return None

        net = clamp_current(decayed.excitation - decayed.inhibition)
        if abs(net) < CURRENT_NOISE_FLOOR:
            return None
        return decayed.to_potential(net)

    def process_immediate(self) -> Optional[IntegratedPotential]:
        """Sum the buffer with spatial weights and noise but no temporal decay.

        Noise samples taken here do not advance the noise seed.
        """
        with self._buffer_lock:
            batch, self._buffer = self._buffer, []
        if not batch:
            return None

        total = 0.0
        for inp in batch:
            total += inp.value * inp.spatial_weight + inp.total_channel_current
            total += self._noise.sample(inp.arrival_time_ns, 0, advance=False)

        net = clamp_current(total)
        if abs(net) < CURRENT_NOISE_FLOOR:
            return None
        return IntegratedPotential(
            net_current=net,
            channel_contributions={CK.INPUT_COUNT: float(len(batch))},
        )

    def observe(self, snapshot: MembraneSnapshot) -> None:
        """Record the membrane context the channel chain sees on later signals."""
        self._chain.observe(snapshot)

    def drain_and_decay(self, processor: Optional[InputProcessor] = None) -> Optional[DecayedBatch]:
        """Atomically take the buffer and compute its decayed components.

        Args:
            processor: Optional transform applied to each input's full contribution
                before decay

        Returns:
            The decayed batch, or None when the buffer was empty
        """
        now = self._clock()
        with self._buffer_lock:
            batch, self._buffer = self._buffer, []
        if not batch:
            return None
        return self._decay(batch, now, processor)

    def _decay(
        self,
        batch: List[TimestampedInput],
        now: int,
        processor: Optional[InputProcessor],
    ) -> DecayedBatch:
        t_ref = max(inp.arrival_time_ns for inp in batch)
        reference = t_ref if now - t_ref < ms_to_ns(RECENT_INPUT_WINDOW_MS) else now

        # Full pre-decay contribution of each input, channel currents included
        raw_totals = [inp.value * inp.spatial_weight + inp.total_channel_current for inp in batch]
        if processor is not None:
            totals = [processor(v) for v in raw_totals]
        else:
            totals = raw_totals
        processed = sum(1 for raw, v in zip(raw_totals, totals) if raw != v)

        dtype = torch.float64
        total_t = torch.tensor(totals, dtype=dtype)
        tau_t = torch.tensor(
            [self.effective_time_constant(inp.signal.source_id) for inp in batch], dtype=dtype
        )
        # The reference is never earlier than the latest arrival, so ages are >= 0
        age_t = torch.tensor(
            [(reference - inp.arrival_time_ns) / NS_PER_MS for inp in batch], dtype=dtype
        ).clamp_min(0.0)

        safe_tau = torch.where(tau_t > 0, tau_t, torch.ones_like(tau_t))
        decay_t = torch.where(tau_t > 0, torch.exp(-age_t / safe_tau), torch.zeros_like(tau_t))
        effective = total_t * decay_t

        noise_total = 0.0
        if self._noise.enabled:
            samples = [self._noise.sample(inp.arrival_time_ns, len(batch)) for inp in batch]
            noise_t = torch.tensor(samples, dtype=dtype)
            effective = effective + noise_t
            noise_total = float(noise_t.sum().item())

        excitation = float(effective.clamp_min(0.0).sum().item())
        inhibition = float((-effective).clamp_min(0.0).sum().item())

        channel_currents: Dict[str, float] = {}
        ion_currents: Dict[IonType, float] = {}
        for inp, decay in zip(batch, decay_t.tolist()):
            for channel_name, current in inp.channel_currents.items():
                decayed_current = current * decay
                channel_currents[channel_name] = channel_currents.get(channel_name, 0.0) + decayed_current
                ion = self._chain.ion_type_of(channel_name)
                if ion is not None:
                    ion_currents[ion] = ion_currents.get(ion, 0.0) + decayed_current

        return DecayedBatch(
            batch=batch,
            excitation=excitation,
            inhibition=inhibition,
            noise=noise_total,
            processed_inputs=processed,
            channel_currents=channel_currents,
            ion_currents=ion_currents,
        )

    # -------------------------------------------------------------------------
    # Introspection and lifecycle
    # -------------------------------------------------------------------------

    @property
    def buffer_size(self) -> int:
        with self._buffer_lock:
            return len(self._buffer)

    @property
    def noise_seed(self) -> int:
        """Current membrane-noise seed."""
        return self._noise.seed

    def close(self) -> None:
        """Close every channel once and discard buffered inputs."""
        if self._closed:
            return
        self._closed = True
        self._chain.close()
        with self._buffer_lock:
            dropped = len(self._buffer)
            self._buffer = []
        if dropped:
            logger.debug("%s closed with %d buffered inputs discarded", self.mode_name, dropped)
