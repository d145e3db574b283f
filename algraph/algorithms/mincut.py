"""Randomized global minimum cut (Karger's contraction algorithm).

Each trial contracts uniformly random edges of a private copy of the graph
until two vertices remain; the edges left between them form a cut. The
smallest cut over ``round(n^2 * ln n)`` trials is the minimum cut with high
probability, never with certainty.

Edges are drawn uniformly over stored arcs, so a vertex pair joined by k
parallel edges is k times as likely to be contracted as a pair joined by one.
Undirected stores hold two arcs per edge, which keeps the draw uniform over
edges as well.

Trials may run in worker processes. Each worker receives a pickled copy of
the store and seeds its own random stream through `SeedManager`, so the
original store is never touched.
"""

from __future__ import annotations

import pickle
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from random import Random
from typing import Callable, List, Optional, Tuple

from algraph.config import MIN_CUT_CONFIG, MinCutConfig
from algraph.graph.store import GraphStore
from algraph.logging import get_logger
from algraph.seed_manager import SeedManager

logger = get_logger(__name__)

# Store shared with worker processes, set once per worker by _worker_init
_shared_store: Optional[GraphStore] = None


@dataclass(frozen=True)
class MinCutPlan:
    """What a min-cut run will cost, for a caller-side confirmation gate.

    Attributes:
        vertices: Number of vertices in the graph.
        trials: Number of contraction trials that will run.
        expected_seconds: Duration extrapolated from the configured benchmark.
    """

    vertices: int
    trials: int
    expected_seconds: float


@dataclass(frozen=True)
class MinCutResult:
    """Outcome of a min-cut run.

    Attributes:
        cut: Smallest cut observed, or None when the run was declined.
        trials_planned: Trials the plan called for.
        trials_run: Trials actually executed (fewer on a zero cut).
        declined: True when the confirmation gate rejected the plan.
    """

    cut: Optional[int]
    trials_planned: int
    trials_run: int
    declined: bool = False


def contract_random_edge(store: GraphStore, rng: Random) -> bool:
    """Contract one uniformly chosen arc of ``store`` in place.

    Returns:
        bool: False if the store has no arcs left to contract.
    """
    total = store.arc_count()
    if total == 0:
        return False

    pick = rng.randrange(total)
    for vertex in store.vertices():
        if pick < len(vertex.edges):
            edge = vertex.edges[pick]
            break
        pick -= len(vertex.edges)

    store.merge_vertices(vertex.id, edge.dest.id)
    return True


def karger_trial(store: GraphStore, rng: Random) -> int:
    """Run one contraction trial on a copy of ``store`` and return its cut size.

    The cut is the edge count between the last two super-vertices. On a
    directed store arcs in both directions are counted.
    """
    trial = store.copy()
    trial.remove_self_loops()
    while len(trial) > 2:
        if not contract_random_edge(trial, rng):
            # No edges left with more than two super-vertices: disconnected
            return 0
    return trial.edge_count()


def _run_trials(
    store: GraphStore,
    trials: int,
    rng: Random,
    progress: Optional[Callable[[int], None]] = None,
) -> Tuple[Optional[int], int]:
    """Run up to ``trials`` trials, stopping early on a zero cut.

    Returns:
        Tuple of (best_cut, trials_run).
    """
    best: Optional[int] = None
    for i in range(trials):
        cut = karger_trial(store, rng)
        if best is None or cut < best:
            best = cut
        if progress is not None:
            progress(i + 1)
        if best == 0:
            return best, i + 1
    return best, trials


def _worker_init(store_pickle: bytes) -> None:
    global _shared_store
    _shared_store = pickle.loads(store_pickle)


def _run_batch(args: Tuple[int, int, Optional[int]]) -> Tuple[Optional[int], int]:
    batch_index, batch_trials, master_seed = args
    assert _shared_store is not None, "worker not initialized"
    rng = SeedManager(master_seed).create_random_state("min_cut", "batch", batch_index)
    return _run_trials(_shared_store, batch_trials, rng)


class KargerMinCut:
    """Plans and runs a randomized minimum-cut estimate.

    Usage:
        estimator = KargerMinCut(store, seed=7)
        plan = estimator.plan()
        result = estimator.run(confirm=lambda p: p.expected_seconds < 60)
    """

    def __init__(
        self,
        store: GraphStore,
        config: Optional[MinCutConfig] = None,
        seed: Optional[int] = None,
        trials: Optional[int] = None,
    ) -> None:
        """Initialize the estimator.

        Args:
            store: Graph to cut. Never modified.
            config: Trial-count and ETA settings; defaults to ``MIN_CUT_CONFIG``.
            seed: Master seed for reproducible runs.
            trials: Explicit trial count overriding the configured formula.

        Raises:
            ValueError: If the store has fewer than two vertices or ``trials``
                is not positive.
        """
        if len(store) < 2:
            raise ValueError(
                f"Minimum cut needs at least two vertices, graph has {len(store)}."
            )
        if trials is not None and trials < 1:
            raise ValueError(f"trials must be positive, got {trials}")
        self.store = store
        self.config = config or MIN_CUT_CONFIG
        self.seeds = SeedManager(seed)
        self._trials = trials

    @property
    def trial_count(self) -> int:
        if self._trials is not None:
            return self._trials
        return self.config.trial_count(len(self.store))

    def plan(self) -> MinCutPlan:
        trials = self.trial_count
        return MinCutPlan(
            vertices=len(self.store),
            trials=trials,
            expected_seconds=self.config.estimate_seconds(trials),
        )

    def run(
        self,
        confirm: Optional[Callable[[MinCutPlan], bool]] = None,
        workers: int = 1,
    ) -> MinCutResult:
        """Estimate the minimum cut.

        Args:
            confirm: Optional gate called with the plan; returning False
                declines the run without doing any work.
            workers: Number of worker processes; 1 runs trials in this process.

        Returns:
            MinCutResult: The estimate, or a declined result.
        """
        plan = self.plan()
        if confirm is not None and not confirm(plan):
            logger.info(f"Minimum cut declined ({plan.trials} trials planned)")
            return MinCutResult(
                cut=None, trials_planned=plan.trials, trials_run=0, declined=True
            )

        logger.info(
            f"Estimating minimum cut of {plan.vertices} vertices "
            f"with {plan.trials} trials"
        )
        start_time = time.time()
        if workers > 1 and plan.trials > 1:
            best, trials_run = self._run_parallel(plan.trials, workers)
        else:
            best, trials_run = self._run_serial(plan.trials)

        elapsed = time.time() - start_time
        logger.info(
            f"Minimum cut estimate {best} after {trials_run} trials "
            f"in {elapsed:.2f} seconds"
        )
        return MinCutResult(
            cut=best, trials_planned=plan.trials, trials_run=trials_run
        )

    def _run_serial(self, trials: int) -> Tuple[Optional[int], int]:
        step = max(1, trials // 10)

        def progress(done: int) -> None:
            if trials >= 20 and done % step == 0:
                logger.info(f"Minimum cut progress: {done}/{trials} trials completed")

        rng = self.seeds.create_random_state("min_cut", "serial")
        return _run_trials(self.store, trials, rng, progress)

    def _run_parallel(self, trials: int, workers: int) -> Tuple[Optional[int], int]:
        workers = min(workers, trials)
        batch_count = min(trials, workers * 4)
        base, extra = divmod(trials, batch_count)
        batches: List[Tuple[int, int, Optional[int]]] = [
            (i, base + (1 if i < extra else 0), self.seeds.master_seed)
            for i in range(batch_count)
        ]
        logger.debug(
            f"Running {trials} trials in {batch_count} batches on {workers} workers"
        )

        store_pickle = pickle.dumps(self.store)
        best: Optional[int] = None
        trials_run = 0
        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=_worker_init,
            initargs=(store_pickle,),
        ) as pool:
            for done, (cut, ran) in enumerate(pool.map(_run_batch, batches), start=1):
                trials_run += ran
                if cut is not None and (best is None or cut < best):
                    best = cut
                logger.debug(f"Batch {done}/{batch_count} done, best cut so far {best}")
        return best, trials_run


def min_cut(
    store: GraphStore,
    trials: Optional[int] = None,
    seed: Optional[int] = None,
    config: Optional[MinCutConfig] = None,
    workers: int = 1,
    confirm: Optional[Callable[[MinCutPlan], bool]] = None,
) -> MinCutResult:
    """Estimate the global minimum cut of ``store``. See `KargerMinCut`."""
    return KargerMinCut(store, config=config, seed=seed, trials=trials).run(
        confirm=confirm, workers=workers
    )
