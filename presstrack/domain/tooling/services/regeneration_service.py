"""
Regeneration Service

State machine for a tool's refurbishment lifecycle:

    available -> active (press assigned) -> regenerating -> available
    dead is reachable from any non-active state and left via revive

Starting a regeneration anchors a record to the tool's last ledger entry;
cycle counts observed after that entry form a new lineage for the
partial-cycle calculator.
"""

import logging
import threading
import weakref
from collections.abc import Iterator
from contextlib import contextmanager

from ....shared.base import DomainService
from ....shared.exceptions import (
    BusinessRuleError,
    ConcurrencyError,
    DomainError,
    is_not_found,
)
from ..entities.regeneration import Regeneration
from ..entities.tool import Tool
from ..entities.user import User, require_actor
from ..repositories.cycle_repository import CycleRepository
from ..repositories.directories import ToolDirectory
from ..repositories.regeneration_repository import RegenerationRepository

logger = logging.getLogger(__name__)

# Process wide, shared by every service instance. An entry lives only while
# some caller holds or waits on its lock.
_tool_locks: "weakref.WeakValueDictionary[int, threading.Lock]" = (
    weakref.WeakValueDictionary()
)
_tool_locks_guard = threading.Lock()


class RegenerationService(DomainService):
    """
    Starts, stops and aborts tool regenerations and handles dead tools.

    Operations that read and then write a tool's regeneration state are
    serialized per tool id, so two concurrent starts cannot both succeed.
    """

    def __init__(
        self,
        cycle_repository: CycleRepository,
        regeneration_repository: RegenerationRepository,
        tool_directory: ToolDirectory,
    ) -> None:
        """
        Initialize the regeneration service.

        Args:
            cycle_repository: Ledger used to anchor regenerations
            regeneration_repository: Regeneration record storage
            tool_directory: Tool state, writer of the regenerating flag
        """
        self._cycles = cycle_repository
        self._regenerations = regeneration_repository
        self._tools = tool_directory

    @contextmanager
    def _tool_lock(self, tool_id: int) -> Iterator[None]:
        with _tool_locks_guard:
            lock = _tool_locks.get(tool_id)
            if lock is None:
                lock = threading.Lock()
                _tool_locks[tool_id] = lock
        with lock:
            yield

    def start_regeneration(self, tool_id: int, reason: str, actor: User | None) -> int:
        """
        Put a tool into regeneration.

        Args:
            tool_id: Tool to regenerate
            reason: Free text reason
            actor: Operator starting the regeneration

        Returns:
            Id of the new regeneration record

        Raises:
            ValidationError: If the actor is missing or invalid
            EntityNotFoundError: If the tool is unknown or has no ledger entries
            BusinessRuleError: If the tool is dead
            ConcurrencyError: If the tool is already regenerating
            RepositoryError: If the regeneration record cannot be stored
        """
        actor = require_actor(actor)

        with self._tool_lock(tool_id):
            tool = self._tools.get(tool_id)
            if tool.is_dead:
                raise BusinessRuleError(
                    f"Tool {tool_id} is dead and cannot be regenerated",
                    {"tool_id": tool_id},
                )
            if tool.regenerating:
                raise ConcurrencyError("tool", tool_id, "already regenerating")
            if tool.is_active:
                # Not forbidden, but the tool keeps its press assignment
                logger.warning(
                    "Starting regeneration of tool %d while mounted on press %s",
                    tool_id,
                    tool.press,
                )

            anchor = self._cycles.get_last_for_tool(tool_id)

            logger.debug(
                "Starting tool regeneration: tool=%d anchor_cycle=%s user=%s",
                tool_id,
                anchor.id,
                actor.name,
            )
            self._tools.update_regenerating(tool_id, True, actor)

            try:
                return self._regenerations.add(tool_id, anchor.id, reason, actor)
            except DomainError:
                self._rollback_regenerating_flag(tool_id, actor)
                raise

    def _rollback_regenerating_flag(self, tool_id: int, actor: User) -> None:
        try:
            self._tools.update_regenerating(tool_id, False, actor)
        except DomainError as undo_error:
            # Best effort, the tool stays flagged without a regeneration record
            logger.error(
                "Failed to undo regenerating flag of tool %d: %s",
                tool_id,
                undo_error,
            )

    def stop_regeneration(self, tool_id: int, actor: User | None) -> None:
        """Finish a regeneration normally. The regeneration record is kept."""
        actor = require_actor(actor)

        logger.debug("Stopping tool regeneration: tool=%d user=%s", tool_id, actor.name)
        with self._tool_lock(tool_id):
            self._tools.update_regenerating(tool_id, False, actor)

    def abort_regeneration(self, tool_id: int, actor: User | None) -> None:
        """
        Cancel a regeneration in progress.

        The latest regeneration record is deleted when the tool is still
        regenerating; without any record only the flag is cleared, so
        aborting twice is harmless.

        Raises:
            BusinessRuleError: If a record exists but the tool is not regenerating
        """
        actor = require_actor(actor)

        logger.debug("Aborting tool regeneration: tool=%d user=%s", tool_id, actor.name)
        with self._tool_lock(tool_id):
            try:
                last = self._regenerations.get_last_for_tool(tool_id)
            except DomainError as e:
                if not is_not_found(e):
                    raise
                logger.debug("No regeneration record to abort for tool %d", tool_id)
            else:
                tool = self._tools.get(tool_id)
                if not tool.regenerating:
                    raise BusinessRuleError(
                        f"Tool {tool_id} is not regenerating",
                        {"tool_id": tool_id, "regeneration_id": last.id},
                    )
                logger.debug(
                    "Deleting regeneration record %s of tool %d", last.id, tool_id
                )
                self._regenerations.delete(last.id)

            self._tools.update_regenerating(tool_id, False, actor)

    def mark_dead(self, tool_id: int, actor: User | None) -> Tool:
        """Retire a tool. Mounted tools must be unmounted first."""
        actor = require_actor(actor)

        with self._tool_lock(tool_id):
            tool = self._tools.get(tool_id)
            tool.mark_dead()
            logger.info("Marking tool %d as dead (user=%s)", tool_id, actor.name)
            return self._tools.update(tool, actor)

    def revive(self, tool_id: int, actor: User | None) -> Tool:
        actor = require_actor(actor)

        with self._tool_lock(tool_id):
            tool = self._tools.get(tool_id)
            tool.revive()
            logger.info("Reviving dead tool %d (user=%s)", tool_id, actor.name)
            return self._tools.update(tool, actor)

    def get_last_regeneration(self, tool_id: int) -> Regeneration:
        return self._regenerations.get_last_for_tool(tool_id)

    def get_regeneration_history(self, tool_id: int) -> list[Regeneration]:
        return self._regenerations.list_for_tool(tool_id)

    def has_regenerations_for_cycle(self, cycle_id: int) -> bool:
        """Whether a ledger entry anchors a regeneration (and must not be deleted)."""
        return self._regenerations.has_regenerations_for_cycle(cycle_id)
