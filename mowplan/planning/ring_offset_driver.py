import logging
from typing import Dict, Iterator, List, Sequence, Type

import pyclipper

from mowplan.errors import ConfigurationError, GeometryEngineError, InvalidSpacingError
from mowplan.planning.quantizer import IntPoint

logger = logging.getLogger(__name__)

Ring = List[IntPoint]

DEFAULT_MITER_LIMIT = 2.0


class ClipperOffsetEngine:
    """Closed-polygon miter offsetting backed by pyclipper."""

    def __init__(self, miter_limit: float = DEFAULT_MITER_LIMIT):
        self.miter_limit = miter_limit

    def offset(self, rings: Sequence[Ring], delta: int) -> List[Ring]:
        pco = pyclipper.PyclipperOffset(self.miter_limit)
        try:
            pco.AddPaths([list(ring) for ring in rings], pyclipper.JT_MITER, pyclipper.ET_CLOSEDPOLYGON)
            solution = pco.Execute(delta)
        except pyclipper.ClipperException as e:
            raise GeometryEngineError(f"Offset engine failed: {e}", details={"delta": delta}) from e
        return [[(int(x), int(y)) for x, y in path] for path in solution]


class LastRingContinuation:
    """Keep offsetting only the last ring the engine reported.

    When a concave boundary splits, every sub-region but the last one gets a
    single pass and is then dropped.
    """

    name = "last"

    def select(self, rings: List[Ring]) -> List[Ring]:
        return [rings[-1]]


class LargestRingContinuation:
    """Keep offsetting only the ring enclosing the most area."""

    name = "largest"

    def select(self, rings: List[Ring]) -> List[Ring]:
        return [max(rings, key=lambda ring: abs(pyclipper.Area(ring)))]


CONTINUATION_STRATEGIES: Dict[str, Type] = {
    LastRingContinuation.name: LastRingContinuation,
    LargestRingContinuation.name: LargestRingContinuation,
}


def continuation_strategy(name: str):
    try:
        return CONTINUATION_STRATEGIES[name]()
    except KeyError:
        raise ConfigurationError(
            f"Unknown continuation strategy: {name}",
            details={"choices": sorted(CONTINUATION_STRATEGIES)},
        ) from None


class RingOffsetDriver:
    """
    Shrinks a boundary by a fixed spacing until nothing is left.

    Args:
        engine: Object with an ``offset(rings, delta)`` method.
        spacing (int): Distance between passes in quantized units, must be > 0.
        continuation: Picks which of an iteration's rings become the next boundary.
    """

    def __init__(self, engine, spacing: int, continuation=None):
        if spacing <= 0:
            raise InvalidSpacingError("Spacing must be greater than 0.", details={"spacing_units": spacing})
        self.engine = engine
        self.spacing = spacing
        self.continuation = continuation or LastRingContinuation()

    def rings(self, perimeter: Ring) -> Iterator[List[Ring]]:
        """Yields the non-empty rings of each offset step, outermost step first."""
        boundary = [list(perimeter)]
        boundary_area = abs(pyclipper.Area(boundary[0]))
        iteration = 0
        while True:
            produced = self.engine.offset(boundary, -self.spacing)
            rings = [ring for ring in produced if ring]
            if len(rings) != len(produced):
                logger.debug(f"Skipped {len(produced) - len(rings)} empty ring(s) at step {iteration + 1}")
            if not rings:
                break
            iteration += 1
            logger.debug(f"Step {iteration}: {len(rings)} ring(s), sizes {[len(r) for r in rings]}")
            yield rings

            boundary = self.continuation.select(rings)
            area = abs(pyclipper.Area(boundary[0]))
            if area >= boundary_area:
                raise GeometryEngineError(
                    "Offset did not shrink the boundary",
                    details={"step": iteration, "area": area, "previous_area": boundary_area},
                )
            boundary_area = area
        logger.debug(f"Boundary consumed after {iteration} step(s)")
