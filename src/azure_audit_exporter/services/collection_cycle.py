"""Collection cycle: concurrent fan-out of fetch tasks and snapshot assembly."""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from ..context import AppContext
from ..exceptions import FetchError
from ..models.base import Account, Category, Record
from ..models.collection import CollectionRun
from .records import (
    advisor_records,
    compliance_records,
    resource_group_records,
    subscription_records,
)

# Closes the result stream once every producer has finished
_END_OF_STREAM = object()

CATEGORY_TITLES = {
    Category.SUBSCRIPTION: "Subscription",
    Category.RESOURCE_GROUP: "ResourceGroups",
    Category.COMPLIANCE: "SecurityCompliance",
    Category.ADVISOR: "AdvisorRecommendations",
}


@dataclass(frozen=True)
class FetchTask:
    """One (account, category[, region]) fetch of a cycle."""
    category: Category
    account: Account
    region: Optional[str] = None

    def __str__(self) -> str:
        title = CATEGORY_TITLES[self.category]
        if self.region:
            return f"{title} ({self.region})"
        return title


class CollectionCycle:
    """Runs one full audit pass and installs the resulting snapshot."""

    def __init__(self, context: AppContext) -> None:
        """Initialize collection cycle."""
        self.context = context
        # One slot per worker thread; held until the thread is free again
        self._slots = asyncio.Semaphore(context.config.parallel_workers)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def plan(self) -> List[FetchTask]:
        """List the fetch tasks of one cycle."""
        config = self.context.config
        tasks = []
        for account in self.context.accounts:
            for category in config.enabled_categories:
                if category is Category.COMPLIANCE:
                    tasks.extend(FetchTask(category, account, region) for region in config.locations)
                else:
                    tasks.append(FetchTask(category, account))
        return tasks

    def fetch(self, task: FetchTask) -> List[Record]:
        """Call the resource client for a task; runs on a worker thread."""
        client = self.context.client
        account = task.account

        if task.category is Category.SUBSCRIPTION:
            return subscription_records(account, client.fetch_subscription(account))
        if task.category is Category.RESOURCE_GROUP:
            return resource_group_records(account, client.fetch_resource_groups(account))
        if task.category is Category.COMPLIANCE:
            return compliance_records(account, client.fetch_compliance(account, task.region))
        if task.category is Category.ADVISOR:
            return advisor_records(account, client.fetch_recommendations(account))
        raise ValueError(f"Unsupported category: {task.category}")

    async def _produce(self, task: FetchTask, stream: asyncio.Queue) -> int:
        loop = asyncio.get_running_loop()
        timeout = self.context.config.task_timeout

        await self._slots.acquire()
        try:
            call = loop.run_in_executor(self.context.executor, self.fetch, task)
        except RuntimeError:
            self._slots.release()
            raise
        call.add_done_callback(self._release_slot)

        try:
            # The timeout starts once a worker thread is available
            records = await asyncio.wait_for(asyncio.shield(call), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise FetchError(
                task.category.value, task.account.subscription_id, task.region,
                cause=TimeoutError(f"no response after {timeout} seconds")
            ) from e
        except Exception as e:
            raise FetchError(task.category.value, task.account.subscription_id, task.region, cause=e) from e

        for record in records:
            await stream.put(record)

        self.logger.debug(f"subscription[{task.account}]: finished Azure {task} collection")
        return len(records)

    def _release_slot(self, call: asyncio.Future) -> None:
        if not call.cancelled():
            # Retrieve late failures of timed-out fetches
            call.exception()
        self._slots.release()

    @staticmethod
    async def _drain(stream: asyncio.Queue) -> List[Record]:
        records = []
        while True:
            item = await stream.get()
            if item is _END_OF_STREAM:
                return records
            records.append(item)

    async def run(self) -> CollectionRun:
        """Run one cycle.

        Fetch failures are logged and counted on the returned run; they
        never abort sibling tasks or the snapshot install.
        """
        run = CollectionRun()
        tasks = self.plan()
        run.tasks_launched = len(tasks)
        self.logger.info(f"run[{run.id}]: starting {len(tasks)} tasks for {len(self.context.accounts)} subscriptions")

        stream: asyncio.Queue = asyncio.Queue()
        consumer = asyncio.create_task(self._drain(stream))
        try:
            producers = [asyncio.create_task(self._produce(task, stream)) for task in tasks]
            results = await asyncio.gather(*producers, return_exceptions=True)

            for task, result in zip(tasks, results):
                if isinstance(result, BaseException):
                    self.logger.error(f"subscription[{task.account}]: {task} collection failed: {result}")
                    run.record_error(
                        result,
                        subscription_id=task.account.subscription_id,
                        category=task.category.value,
                        region=task.region
                    )

            await stream.put(_END_OF_STREAM)
            records = await consumer
        finally:
            if not consumer.done():
                consumer.cancel()

        registry = self.context.registry
        snapshot = registry.new_snapshot()
        for category in snapshot.categories:
            snapshot.reset(category)
        run.records_collected = snapshot.apply_all(records)
        registry.install(snapshot)

        run.mark_finished()
        self.logger.info(
            f"run[{run.id}]: finished in {run.duration_seconds:.2f}s, "
            f"{run.records_collected} records, {run.errors_count} failed tasks"
        )
        return run
