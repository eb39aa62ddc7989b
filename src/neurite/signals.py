"""
Synaptic signal types delivered to dendritic integration modes.

A ``NeuralSignal`` is the unit of input a neuron's message-delivery path hands
to ``DendriticIntegrationMode.handle()``. It carries the post-synaptic value
(already scaled by the synapse), the time it was generated, the identity of
the sender and the neurotransmitter that carried it.

The ``source_id`` doubles as the branch label used for spatial attenuation
(``"proximal"``, ``"basal"``, ``"apical"``, ``"distal"``).

Biological basis:
- Glutamate is the primary excitatory transmitter (AMPA/NMDA receptors)
- GABA and glycine are inhibitory (Cl- permeable receptors)
- Monoamines are modulatory; their sign depends on receptor subtype

References:
- Kandel et al. (2013): Principles of Neural Science, Chapters 10-13
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LigandType(Enum):
    """Neurotransmitters and signaling molecules carried by synaptic signals."""

    NONE = "none"
    GLUTAMATE = "glutamate"  # Primary excitatory transmitter
    GABA = "gaba"  # Primary inhibitory transmitter
    DOPAMINE = "dopamine"  # Reward, motor control
    SEROTONIN = "serotonin"  # Mood, arousal
    ACETYLCHOLINE = "acetylcholine"  # Usually excitatory in CNS
    NOREPINEPHRINE = "norepinephrine"  # Attention, arousal
    HISTAMINE = "histamine"
    GLYCINE = "glycine"  # Inhibitory (spinal cord, brainstem)
    ADENOSINE = "adenosine"  # Sleep pressure, neuroprotection
    CALCIUM = "calcium"  # Intracellular second messenger

    @property
    def polarity(self) -> float:
        """Typical effect sign: +1 excitatory, -1 inhibitory, 0 modulatory."""
        return _POLARITY.get(self, 0.0)


_POLARITY = {
    LigandType.GLUTAMATE: 1.0,
    LigandType.ACETYLCHOLINE: 1.0,
    LigandType.GABA: -1.0,
    LigandType.GLYCINE: -1.0,
    LigandType.ADENOSINE: -0.5,
}


@dataclass(frozen=True)
class NeuralSignal:
    """A single synaptic input arriving at the dendritic tree.

    Attributes:
        value: Signal amplitude in current units. Positive values depolarize,
            negative values hyperpolarize.
        timestamp_ns: Generation time in nanoseconds (0 when unknown).
        source_id: Sender identity; also interpreted as the dendritic branch
            label for spatial weighting and branch time constants.
        target_id: Receiving neuron identity.
        synapse_id: Transmitting synapse, if any.
        neurotransmitter: Ligand carried by the signal.
        message_type: Optional free-form classification.
    """

    value: float
    timestamp_ns: int = 0
    source_id: str = ""
    target_id: str = ""
    synapse_id: str = ""
    neurotransmitter: LigandType = LigandType.NONE
    message_type: str = ""
