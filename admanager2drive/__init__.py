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

import traceback


class ReportFetcher(object):
  """The report producing half of a refresh cycle."""

  def produce_report(self) -> str:
    """Builds, runs and downloads the report.

    Returns:
        str: the report as CSV text
    """
    pass


class ReportPublisher(object):
  """The destination half of a refresh cycle."""

  def publish(self, payload: str):
    """Replaces the destination's content with the payload.

    Args:
        payload (str): the report CSV text.

    Returns:
        the publish confirmation
    """
    pass


def error_to_trace(error: Exception = None) -> str:
  """Pulls a python stack trace from an error.

  Args:
      error (Exception, optional): the exception. Defaults to None.

  Returns:
      str: the stack trace
  """
  trace = ''
  if error:
    tb = traceback.TracebackException.from_exception(error).format()
    if tb:
      trace = '\n\nTrace:\n\n' + ''.join(tb)

  return f'{trace}'
