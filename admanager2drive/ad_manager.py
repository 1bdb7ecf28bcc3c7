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

import enum
import io
import logging
import threading
import time
from datetime import datetime
from typing import Any, Callable

import pytz
from googleads import ad_manager

from admanager2drive import ReportFetcher, decorators
from admanager2drive.config import RefreshConfig
from admanager2drive.exceptions import ReportCancelledError, ReportFailedError
from admanager2drive.exceptions import ReportTimeoutError
from admanager2drive.report_query import ReportSpecification
from admanager2drive.services import Service

EXPORT_FORMAT = 'CSV_DUMP'


class JobStatus(enum.Enum):
  COMPLETED = 'COMPLETED'
  IN_PROGRESS = 'IN_PROGRESS'
  FAILED = 'FAILED'
  UNKNOWN = 'UNKNOWN'

  @classmethod
  def _missing_(cls, value):
    """Anything the backend adds later is treated as not ready."""
    return cls.UNKNOWN


def load_client(googleads_yaml: str) -> ad_manager.AdManagerClient:
  """Creates the Ad Manager client from a googleads YAML file.

  The file holds the offline OAuth credentials, application name and network
  code, so the client is ready for the lifetime of the process.

  Args:
      googleads_yaml (str): path to the googleads configuration.

  Returns:
      ad_manager.AdManagerClient: the client
  """
  return ad_manager.AdManagerClient.LoadFromStorage(googleads_yaml)


class AdManager(ReportFetcher):
  """Ad Manager delivery report producer.

  Runs the delivery report job, waits for it to be ready and downloads the
  result as CSV text.
  """
  def __init__(self,
               client: ad_manager.AdManagerClient,
               config: RefreshConfig = None,
               now: Callable[[], datetime] = lambda: datetime.now(pytz.utc),
               clock: Callable[[], float] = time.monotonic,
               sleep: Callable[[float], Any] = time.sleep,
               stopping: threading.Event = None) -> AdManager:
    """Initialize the producer.

    Args:
        client (ad_manager.AdManagerClient): the authenticated client.
        config (RefreshConfig, optional): settings. Defaults to the defaults.
        now (Callable[[], datetime]): wall clock for the report end date.
        clock (Callable[[], float]): monotonic clock for the poll deadline.
        sleep (Callable[[float], Any]): waits between polls.
        stopping (threading.Event, optional): once set, abandons the wait
          for a report. Polls then wait on this event instead of sleeping.
    """
    config = config or RefreshConfig()
    self.client = client
    self.version = config.api_version
    self.start_date = config.start_date
    self.timezone = config.timezone
    self.poll_interval = config.poll_interval
    self.poll_backoff = config.poll_backoff
    self.max_poll_interval = config.max_poll_interval
    self.timeout = config.report_timeout

    self._now = now
    self._clock = clock
    self._sleep = sleep
    self._stopping = stopping

  @decorators.lazy_property
  def report_service(self) -> Any:
    return self.client.GetService(Service.AD_MANAGER.definition.name,
                                  version=self.version)

  @decorators.lazy_property
  def downloader(self) -> Any:
    return self.client.GetDataDownloader(version=self.version)

  def report_specification(self) -> ReportSpecification:
    """Builds the report specification, ending now.

    Returns:
        ReportSpecification: the delivery report specification
    """
    return ReportSpecification.delivery_report(start_date=self.start_date,
                                               timezone=self.timezone,
                                               now=self._now())

  def run_report(self, specification: ReportSpecification) -> int:
    """Submits the report job.

    Args:
        specification (ReportSpecification): what to report on.

    Returns:
        int: the report job id
    """
    report_job = \
      self.report_service.runReportJob(specification.to_report_job())
    job_id = report_job['id']
    logging.info(f'Report job {job_id} submitted for '
                 f'{specification.start.date()} to {specification.end.date()}')
    return job_id

  def report_state(self, job_id: int) -> JobStatus:
    state = self.report_service.getReportJobStatus(job_id)
    status = JobStatus(state)
    if status == JobStatus.UNKNOWN:
      logging.warning(f'Report job {job_id} returned unrecognized status '
                      f'{state!r}, treating it as not ready')
    return status

  def _pause(self, job_id: int, seconds: float) -> None:
    if self._stopping is None:
      self._sleep(seconds)

    elif self._stopping.wait(seconds):
      raise ReportCancelledError(message='stopped while waiting for report',
                                 job_id=job_id)

  def wait_for_report(self, job_id: int) -> None:
    """Blocks until the report job is ready.

    The job is polled with a growing delay, starting at the poll interval
    and multiplied by the backoff up to the maximum poll interval. With no
    timeout configured this waits for as long as the job stays pending.

    Args:
        job_id (int): the report job id

    Raises:
        ReportFailedError: if the backend reports the job as failed.
        ReportTimeoutError: if the job isn't ready within the timeout.
        ReportCancelledError: if stopped while waiting.
    """
    deadline = None if self.timeout is None else self._clock() + self.timeout
    delay = min(self.poll_interval, self.max_poll_interval)

    while (status := self.report_state(job_id)) != JobStatus.COMPLETED:
      if status == JobStatus.FAILED:
        raise ReportFailedError(message='report job failed', job_id=job_id)

      wait = delay
      if deadline is not None:
        remaining = deadline - self._clock()
        if remaining <= 0:
          raise ReportTimeoutError(
            message=f'not ready after {self.timeout:0.0f}s', job_id=job_id)
        wait = min(wait, remaining)

      logging.info(f'Report job {job_id} status: {status.value}, '
                   f'checking again in {wait:0.0f}s')
      self._pause(job_id, wait)
      delay = min(delay * self.poll_backoff, self.max_poll_interval)

    logging.info(f'Report job {job_id} is ready')

  def download_report(self, job_id: int) -> str:
    """Downloads the finished report as uncompressed CSV.

    Args:
        job_id (int): the report job id

    Returns:
        str: the report text
    """
    out_file = io.BytesIO()
    self.downloader.DownloadReportToFile(job_id, EXPORT_FORMAT, out_file,
                                         use_gzip_compression=False)
    data = out_file.getvalue()
    logging.info(f'Report job {job_id} downloaded, {len(data)} bytes')
    return data.decode('utf-8')

  def produce_report(self) -> str:
    """Runs the delivery report and returns it as CSV text.

    Returns:
        str: the report
    """
    job_id = self.run_report(self.report_specification())
    self.wait_for_report(job_id)
    return self.download_report(job_id)
