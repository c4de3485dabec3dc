"""
Timer driven solver runner with pause/resume support.
"""

import logging
from enum import Enum, auto
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from .rule_table import CompiledRuleTable
from .search import SolverStatus
from .solver import StepResult, WFCSolver

logger = logging.getLogger(__name__)


class RunnerState(Enum):
    """Runner states."""
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    FINISHED = auto()
    NO_SOLUTION = auto()


class SolverRunner(QObject):
    """
    Advances a WFCSolver by one step per timer tick so a viewer can redraw
    between steps.

    Signals:
        step_completed(result): Emitted with the StepResult of every step
        state_changed(state): Emitted when the runner state changes
        finished(success): Emitted once the solver is solved or out of options
    """

    step_completed = Signal(object)
    state_changed = Signal(object)
    finished = Signal(bool)

    def __init__(self, solver: WFCSolver, step_delay: int = 1, parent=None):
        super().__init__(parent)

        self.solver = solver
        self._state = RunnerState.IDLE
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._step)
        self._step_delay = max(1, step_delay)

        if solver.is_done():
            self._finish()

    @property
    def state(self) -> RunnerState:
        return self._state

    @state.setter
    def state(self, value: RunnerState):
        if self._state != value:
            self._state = value
            self.state_changed.emit(value)

    def set_speed(self, delay_ms: int):
        """Set delay between steps in milliseconds."""
        self._step_delay = max(1, delay_ms)
        if self._timer.isActive():
            self._timer.setInterval(self._step_delay)

    def start(self):
        """Start or resume stepping."""
        if self.state in (RunnerState.FINISHED, RunnerState.NO_SOLUTION):
            return

        self.state = RunnerState.RUNNING
        self._timer.start(self._step_delay)

    def pause(self):
        """Pause stepping."""
        if self.state == RunnerState.RUNNING:
            self._timer.stop()
            self.state = RunnerState.PAUSED

    def step(self) -> Optional[StepResult]:
        """Perform a single step (manual stepping)."""
        if self.state in (RunnerState.FINISHED, RunnerState.NO_SOLUTION):
            return None
        return self._step()

    def reset(self, rules: Optional[CompiledRuleTable] = None):
        """Stop and restart the solver, optionally with new rules."""
        self._timer.stop()
        self.solver.reset(rules)
        self.state = RunnerState.IDLE
        if self.solver.is_done():
            self._finish()

    def _step(self) -> StepResult:
        result = self.solver.step()
        self.step_completed.emit(result)
        if result.done:
            self._finish()
        return result

    def _finish(self):
        self._timer.stop()
        solved = self.solver.status is SolverStatus.SOLVED
        self.state = RunnerState.FINISHED if solved else RunnerState.NO_SOLUTION
        logger.debug("Runner finished: %s", self.solver.status.name)
        self.finished.emit(solved)
