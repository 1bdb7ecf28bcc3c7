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

import dataclasses
import enum
import logging
import threading
import uuid
from datetime import datetime
from typing import Callable, Optional

import dataclasses_json
import pytz

from admanager2drive import ReportFetcher, ReportPublisher
from admanager2drive import decorators, error_to_trace
from admanager2drive.ad_manager import AdManager
from admanager2drive.context import RefreshContext
from admanager2drive.drive import Drive


class CycleStatus(enum.Enum):
  SUCCEEDED = 'succeeded'
  FAILED = 'failed'


@dataclasses_json.dataclass_json
@dataclasses.dataclass
class CycleResult(object):
  cycle_id: str
  started: datetime
  status: Optional[CycleStatus] = None
  finished: Optional[datetime] = None
  file_id: Optional[str] = None
  error_kind: Optional[str] = None
  error: Optional[str] = None


class Report2Drive(object):
  """One refresh cycle: produce the report, then publish it."""

  def __init__(self,
               fetcher: ReportFetcher,
               publisher: ReportPublisher,
               now: Callable[[], datetime] = lambda: datetime.now(pytz.utc)
               ) -> Report2Drive:
    self.fetcher = fetcher
    self.publisher = publisher
    self._now = now

  @classmethod
  def from_context(cls,
                   context: RefreshContext,
                   stopping: Optional[threading.Event] = None
                   ) -> Report2Drive:
    """Builds the cycle from the process context.

    Args:
        context (RefreshContext): the session handles and settings.
        stopping (threading.Event, optional): cancels a report wait once set.

    Returns:
        Report2Drive: the refresh cycle
    """
    return cls(
      fetcher=AdManager(client=context.ad_manager_client,
                        config=context.config,
                        stopping=stopping),
      publisher=Drive(credentials=context.drive_credentials,
                      file_id=context.config.drive_file_id,
                      file_name=context.config.drive_file_name))

  @decorators.timeit
  def run(self) -> CycleResult:
    """Runs a cycle.

    Failures end the cycle and are returned in the result rather than
    raised, so a bad cycle doesn't stop the ones after it. Nothing is rolled
    back: if publishing fails the destination keeps its previous content.

    Returns:
        CycleResult: the outcome
    """
    result = CycleResult(cycle_id=uuid.uuid4().hex[:8], started=self._now())
    logging.info(f'cycle={result.cycle_id} at={result.started.isoformat()} '
                 'starting')

    try:
      payload = self.fetcher.produce_report()
      published = self.publisher.publish(payload)

    except Exception as e:
      result.status = CycleStatus.FAILED
      result.error_kind = e.__class__.__name__
      result.error = str(e)
      result.finished = self._now()
      logging.error(f'cycle={result.cycle_id} '
                    f'at={result.finished.isoformat()} '
                    f'kind={result.error_kind} error={result.error}'
                    f'{error_to_trace(e)}')

    else:
      result.status = CycleStatus.SUCCEEDED
      result.file_id = published.id
      result.finished = self._now()
      logging.info(f'cycle={result.cycle_id} '
                   f'at={result.finished.isoformat()} '
                   f'published file_id={result.file_id}')

    return result
