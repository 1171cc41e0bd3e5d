"""Application service running optimizations off the caller's thread."""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Iterable, Optional

from ...algorithms.steiner.pipe_optimizer import OptimizerConfiguration, PipeOptimizer
from ...domain.models.grid import Grid, GridCoordinate
from ...domain.models.solution import PipeSolution
from ...shared.configuration.settings import OptimizerSettings
from ...shared.exceptions import OptimizationInProgressError, OptimizationTimeoutError
from ...shared.utils.performance_utils import timing_context

logger = logging.getLogger(__name__)


class OptimizationService:
    """Runs one optimization at a time on a background worker.
    
    The optimizer cannot be interrupted. A caller that stops waiting gets
    :class:`OptimizationTimeoutError`; the abandoned run still finishes on the
    worker and its result is dropped.
    """
    
    def __init__(self, settings: Optional[OptimizerSettings] = None):
        """Initialize optimization service.
        
        Args:
            settings: Optimizer defaults (penalty, seed, timeout)
        """
        self.settings = settings or OptimizerSettings()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="piperoute-optimizer")
        self._lock = threading.Lock()
        self._current: Optional[Future] = None
    
    @property
    def is_optimizing(self) -> bool:
        with self._lock:
            return self._current is not None and not self._current.done()
    
    def submit(self, grid: Grid, source: GridCoordinate,
               consumers: Iterable[GridCoordinate],
               junction_penalty: Optional[float] = None) -> Future:
        """Schedule an optimization and return its future.
        
        Raises:
            OptimizationInProgressError: If a previous run has not finished
        """
        configuration = OptimizerConfiguration(
            junction_penalty=(self.settings.junction_penalty
                              if junction_penalty is None else junction_penalty),
            seed=self.settings.seed,
        )
        # Snapshot so later edits by the caller cannot reach the worker
        consumer_snapshot = frozenset(consumers)
        
        with self._lock:
            if self._current is not None and not self._current.done():
                raise OptimizationInProgressError(
                    "An optimization is already running", error_code="BUSY"
                )
            future = self._executor.submit(
                self._run, configuration, grid, source, consumer_snapshot
            )
            self._current = future
        
        logger.debug(f"Submitted optimization for {len(consumer_snapshot)} consumers")
        return future
    
    def optimize(self, grid: Grid, source: GridCoordinate,
                 consumers: Iterable[GridCoordinate],
                 junction_penalty: Optional[float] = None,
                 timeout: Optional[float] = None) -> PipeSolution:
        """Run an optimization and wait for its result.
        
        Args:
            timeout: Seconds to wait; falls back to the settings timeout
            
        Raises:
            OptimizationTimeoutError: If the result is not ready in time
        """
        wait = self.settings.timeout_seconds if timeout is None else timeout
        future = self.submit(grid, source, consumers, junction_penalty)
        try:
            return future.result(timeout=wait)
        except FutureTimeoutError as e:
            logger.warning(f"Optimization did not finish within {wait}s; result will be discarded")
            raise OptimizationTimeoutError(
                f"Optimization timed out after {wait} seconds",
                timeout=wait, error_code="TIMEOUT"
            ) from e
    
    @staticmethod
    def _run(configuration: OptimizerConfiguration, grid: Grid,
             source: GridCoordinate, consumers) -> PipeSolution:
        with timing_context("pipe optimization", logger):
            return PipeOptimizer(configuration).optimize(grid, source, consumers)
    
    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=cancel_futures)
    
    def __enter__(self) -> 'OptimizationService':
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # After a timeout the worker is still busy with a run nobody will read
        abandoned = exc_type is not None and issubclass(exc_type, OptimizationTimeoutError)
        self.shutdown(wait=not abandoned, cancel_futures=abandoned)
