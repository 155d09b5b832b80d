# main.py
"""
Main entry point: runs a demo routine on the command scheduler.

Builds a small autonomous routine out of timer and one-shot commands,
registers a trigger on a simulated input, and drives everything with the
fixed-period control loop until the routine finishes or Ctrl+C.
"""

import logging
import sys
import traceback
from typing import Optional

from config.loader import CONFIG
from commands.instant import InstantCommand
from commands.parallel import ParallelCommand
from commands.sequence import CommandSequence
from commands.wait import WaitCommand
from scheduling.loop import ControlLoop
from scheduling.machine import CommandMachine
from scheduling.trigger import Trigger
from utils.clock import Clock
from utils.logger_config import setup_logging

logger = logging.getLogger(__name__)


def build_routine(log=logger.info, clock: Optional[Clock] = None) -> CommandSequence:
    """Drive out, run two mechanisms side by side, then settle."""
    return CommandSequence(
        InstantCommand(lambda: log("Routine: driving forward"), name="DriveForward"),
        WaitCommand(0.5, clock=clock),
        ParallelCommand(
            CommandSequence(
                InstantCommand(lambda: log("Routine: intake on"), name="IntakeOn"),
                WaitCommand(0.3, clock=clock),
                InstantCommand(lambda: log("Routine: intake off"), name="IntakeOff"),
            ),
            CommandSequence(
                WaitCommand(0.1, clock=clock),
                InstantCommand(lambda: log("Routine: lift raised"), name="RaiseLift"),
            ),
        ),
        WaitCommand(0.2, clock=clock),
        InstantCommand(lambda: log("Routine: complete"), name="Done"),
    )


def main() -> int:
    setup_logging()
    logger.info("--- Command scheduler demo ---")

    machine = CommandMachine()
    routine = build_routine()

    # Simulated button: pressed on cycles 10-14, released afterwards.
    button = {'pressed': False}
    machine.add_trigger(Trigger(
        lambda: button['pressed'],
        InstantCommand(lambda: logger.info("Button pressed: running action"), name="ButtonAction"),
    ))
    machine.schedule(routine)

    loop = ControlLoop(machine, period_s=CONFIG['loop']['period_s'])

    def finished() -> bool:
        button['pressed'] = 10 <= machine.cycle_count < 15
        return not machine.is_scheduled(routine)

    try:
        cycles = loop.run(until=finished)
        logger.info(f"Routine finished after {cycles} cycles: {machine.get_snapshot()}")
    except KeyboardInterrupt:
        logger.info("\nShutdown requested (Ctrl+C)...")
        loop.stop()
        machine.cancel_all()
    except Exception as e:
        logger.critical(f"FATAL: Unhandled exception in control loop: {e}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
