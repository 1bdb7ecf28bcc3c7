# Copyright 2022 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

from admanager2drive import error_to_trace


class Scheduler(object):
  """Fixed interval scheduler.

  Runs the job immediately and then once every `interval` seconds, measured
  from when the previous run was due rather than from when it ended. Runs
  never overlap: a tick arriving while the job is still running is skipped.
  If a run overruns the interval the next one starts straight away, and the
  ticks it missed are dropped.

  Pass in `stopping` to share the stop signal with the job, so a long
  running job can also give up when the scheduler is stopped.
  """
  def __init__(self,
               job: Callable[[], Any],
               interval: float,
               clock: Callable[[], float] = time.monotonic,
               stopping: Optional[threading.Event] = None) -> Scheduler:
    self._job = job
    self.interval = interval
    self._clock = clock
    self._running = threading.Lock()
    self._stopping = stopping or threading.Event()
    self.ticks = 0

  @property
  def stopped(self) -> bool:
    return self._stopping.is_set()

  def stop(self, *unused) -> None:
    """Asks the loop to exit after the current run.

    The extra arguments let this be installed directly as a signal handler.
    """
    logging.info('Scheduler stopping')
    self._stopping.set()

  def _wait(self, seconds: float) -> bool:
    """Sleeps until the next tick, waking early on stop()."""
    return self._stopping.wait(seconds)

  def tick(self) -> Any:
    """Runs the job once, unless it is already running.

    Returns:
        Any: the job's result, or None if it was skipped or raised.
    """
    if not self._running.acquire(blocking=False):
      logging.warning('Previous run still in progress, skipping this tick')
      return None

    try:
      return self._job()

    except Exception as e:
      logging.error(f'Scheduled run failed: {e}{error_to_trace(e)}')
      return None

    finally:
      self._running.release()

  def run(self, max_ticks: Optional[int] = None) -> int:
    """Runs the job forever, or until stopped.

    Args:
        max_ticks (int, optional): stop after this many ticks.

    Returns:
        int: the number of ticks run
    """
    logging.info(f'Scheduler started, interval {self.interval:0.0f}s')
    next_run = self._clock()

    while not self.stopped:
      self.tick()
      self.ticks += 1
      if self.stopped or (max_ticks is not None and self.ticks >= max_ticks):
        break

      next_run += self.interval
      now = self._clock()
      if now > next_run:
        logging.warning(f'Run overran the interval by {now - next_run:0.0f}s, '
                        'starting the next one now')
        next_run = now

      self._wait(next_run - now)

    logging.info(f'Scheduler finished after {self.ticks} tick(s)')
    return self.ticks
