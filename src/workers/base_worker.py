import asyncio
import signal
import time
from abc import ABC, abstractmethod

import structlog

logger = structlog.get_logger(__name__)


class BaseWorker(ABC):
    """Base class for all background workers."""

    def __init__(self, worker_name: str, interval: int = 60):
        self.worker_name = worker_name
        self.interval = interval
        self.is_running = False
        self.shutdown_event = asyncio.Event()

    async def shutdown(self):
        """Graceful shutdown of worker."""
        self.is_running = False
        self.shutdown_event.set()
        logger.info(f"Worker {self.worker_name} shutting down")

    def setup_signal_handlers(self):
        """Setup signal handlers for graceful shutdown."""
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, self.shutdown_event.set)

    async def run(self, install_signal_handlers: bool = True):
        """Main worker loop: execute, then wait ``interval`` seconds or until shutdown."""
        if install_signal_handlers:
            self.setup_signal_handlers()
        self.is_running = True

        logger.info(f"Worker {self.worker_name} started with interval {self.interval}s")

        while self.is_running and not self.shutdown_event.is_set():
            start_time = time.monotonic()
            success = await self.execute()
            duration = time.monotonic() - start_time

            if success:
                logger.info(f"Worker {self.worker_name} completed successfully", duration=duration)
            else:
                logger.warning(f"Worker {self.worker_name} completed with errors", duration=duration)

            try:
                await asyncio.wait_for(self.shutdown_event.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                # Normal case - continue with next iteration
                pass

        self.is_running = False
        logger.info(f"Worker {self.worker_name} stopped")

    @abstractmethod
    async def execute(self) -> bool:
        """Execute the worker's main task. Must be implemented by subclasses."""
