"""
Batch Pipeline Orchestrator Module

Splits a row count into fixed-size batches, fans them out across generation
workers and streams every finished batch to one output sink.

Rows are not globally ordered when more than one worker runs: batches from
different workers interleave, while each worker's own batches stay in order.
"""

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .config import Config, ConfigValidator
from .exceptions import ConfigurationError, RowgenError, WorkerError
from .generators.row import generate_header, generate_rows
from .schema.model import Schema
from .sinks import OutputChannel, Sink, create_sink
from .utils import SeedManager


@dataclass
class RunSummary:
    """Result of a completed run"""
    rows: int
    batches: int
    elapsed: float


class BatchPipeline:
    """
    Runs one generation job from schema to sink

    Args:
        config: Run configuration
        schema: Immutable table schema, shared by all workers
        sink: Unopened output sink
        logger: Optional logger; defaults to this module's logger
    """

    def __init__(
        self,
        config: Config,
        schema: Schema,
        sink: Sink,
        logger: Optional[logging.Logger] = None
    ):
        self.config = config
        self.schema = schema
        self.sink = sink
        self.logger = logger or logging.getLogger(__name__)

        generation = config.generation
        self.num_rows = generation.num_rows
        self.batch_size = generation.batch_size
        self.num_threads = generation.num_threads
        self.display_header = generation.display_header
        self.seed_manager = SeedManager(generation.seed)
        self.channel_capacity = generation.channel_capacity or 2 * max(generation.num_threads, 1)

    def check_preconditions(self):
        """
        Reject configurations that cannot be split evenly across workers

        Raises:
            ConfigurationError: Before any work has started
        """
        is_valid, errors = ConfigValidator.validate(self.config)
        if not is_valid:
            for error in errors:
                self.logger.error(f"Invalid configuration: {error}")
            raise ConfigurationError("; ".join(errors))

    def generate_batch(self, rng: np.random.Generator, channel: OutputChannel):
        """Generate one batch of rows and hand it to the channel"""
        batch_start = time.perf_counter()
        rows = generate_rows(self.schema, rng, self.batch_size)
        channel.send(rows)
        self.logger.info(
            f"{self.batch_size} rows processed, {time.perf_counter() - batch_start:.4f} s elapsed"
        )

    def run(self) -> RunSummary:
        """
        Run the pipeline to completion

        Returns:
            RunSummary with the number of rows and batches generated

        Raises:
            ConfigurationError: Invalid configuration, nothing generated
            FieldGenerationError: A row could not be generated
            WorkerError: A worker failed for any other reason
            SinkError: The output could not be opened, written or finalized
        """
        self.check_preconditions()

        num_batches = self.num_rows // self.batch_size
        batches_per_thread = num_batches // self.num_threads
        start_time = time.perf_counter()

        self.logger.info(
            f"Generating {num_batches * self.batch_size} rows of '{self.schema.table_name}' "
            f"in {num_batches} batches across {self.num_threads} thread(s)"
        )

        self.sink.open()
        channel = OutputChannel(maxsize=self.channel_capacity)
        self.sink.start(channel)

        failure: Optional[BaseException] = None
        try:
            if self.display_header:
                channel.send(generate_header(self.schema))

            if self.num_threads > 1:
                failure = self._run_parallel(channel, batches_per_thread)
            else:
                failure = self._run_sequential(channel, num_batches)
        except BaseException as e:
            # Header send failed or the owner was interrupted
            failure = e

        if failure is None:
            channel.close()
        else:
            channel.abort()

        # Wait for the sink to drain and finalize (or abort)
        self.sink.join()

        if failure is not None:
            self._raise_failure(failure)

        elapsed = time.perf_counter() - start_time
        self.logger.info(f"Output thread completed. Generation finished in {elapsed:.2f}s")
        return RunSummary(rows=num_batches * self.batch_size, batches=num_batches, elapsed=elapsed)

    def _run_sequential(self, channel: OutputChannel, num_batches: int) -> Optional[BaseException]:
        """Generate every batch on the calling thread"""
        rng = self.seed_manager.spawn(1)[0]
        try:
            for _ in range(num_batches):
                self.generate_batch(rng, channel)
        except Exception as e:
            self.logger.error(f"Error generating batch: {e}")
            return e
        return None

    def _run_parallel(self, channel: OutputChannel, batches_per_thread: int) -> Optional[BaseException]:
        """Spawn one worker per thread and wait for all of them"""
        rngs = self.seed_manager.spawn(self.num_threads)

        def worker(rng: np.random.Generator):
            for _ in range(batches_per_thread):
                self.generate_batch(rng, channel)

        with ThreadPoolExecutor(max_workers=self.num_threads, thread_name_prefix="rowgen-worker") as executor:
            futures: List[Future] = [executor.submit(worker, rng) for rng in rngs]
            wait(futures)

        first_failure = None
        for worker_id, future in enumerate(futures):
            error = future.exception()
            if error is None:
                self.logger.info(f"Thread {worker_id} completed.")
                continue
            self.logger.error(f"Error in worker {worker_id}: {error}")
            if first_failure is None:
                first_failure = error if isinstance(error, RowgenError) else WorkerError(
                    f"Worker {worker_id} failed: {error!r}", worker_id=worker_id
                )
        return first_failure

    def _raise_failure(self, failure: BaseException):
        if isinstance(failure, RowgenError):
            raise failure
        if isinstance(failure, Exception):
            raise WorkerError(f"Generation failed: {failure!r}") from failure
        raise failure


def generate_data(config: Config, schema: Schema, sink: Optional[Sink] = None) -> RunSummary:
    """
    Generate data from a schema into the configured output

    Args:
        config: Run configuration
        schema: Table schema
        sink: Optional pre-built sink (defaults to the one for config.output)

    Returns:
        RunSummary of the completed run
    """
    if sink is None:
        sink = create_sink(config)
    return BatchPipeline(config, schema, sink).run()
