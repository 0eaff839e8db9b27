"""Stage-by-stage explanation texts shown in the "Physics Insight" box."""
from __future__ import annotations

from twinparadox.model.parameters import SimulationParameters
from twinparadox.model.stages import Stage

TRAVELER_NAME = "Alice"
STATIONARY_NAME = "Bob"

_TEXTS: dict[Stage, str] = {
    Stage.SETUP: (
        "Alice and Bob start at the same location (Earth) at t=0. Alice plans to travel "
        "to a distant star and return. According to Special Relativity, moving clocks "
        "tick slower relative to a stationary observer."
    ),
    Stage.OUTBOUND: (
        "Alice travels away at constant velocity. From Bob's perspective, Alice's clock "
        "is running slow (Time Dilation). However, from Alice's perspective, she is "
        "stationary and Bob is moving away, so she sees Bob's clock running slow. Look at "
        "the green 'Simultaneity' line pointing back to Bob's axis: it shows what Alice "
        "considers 'Now' on Earth."
    ),
    Stage.TURNAROUND: (
        "CRITICAL MOMENT: Alice changes direction (accelerates). She switches from an "
        "inertial frame moving away to one moving towards Earth. Her definition of 'Now' "
        "(the green line) swings drastically forward in time on Earth. This 'gap' in "
        "Bob's timeline accounts for the missing years. Acceleration breaks the symmetry. "
        "(The swing is drawn gradually here; physically it happens during the brief "
        "acceleration.)"
    ),
    Stage.INBOUND: (
        "Alice returns. Again, due to time dilation, her clock ticks slower than Bob's "
        "during this leg. But because of the frame switch at the star, she will return "
        "finding Bob much older."
    ),
    Stage.CONCLUSION: (
        "Reunion! Bob has aged {stationary_time:.2f} years, while Alice has only aged "
        "{traveler_time:.2f} years. Both agree on the final result, but they disagree on "
        "*when* the aging happened. Bob says it was gradual. Alice says Bob aged rapidly "
        "during her turnaround (the gap in simultaneity)."
    ),
}


def explanation_for(stage: Stage, params: SimulationParameters) -> str:
    """Return the narrative text for a stage, filled in with the trip totals."""
    return _TEXTS[stage].format(
        stationary_time=params.stationary_total_time,
        traveler_time=params.traveler_total_proper_time,
    )
