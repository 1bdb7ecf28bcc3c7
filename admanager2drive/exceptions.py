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


class CredentialsError(Exception):
  def __init__(self, message: str = None,
               token_file: str = None) -> CredentialsError:
    self.message = message
    self.token_file = token_file

  def __repr__(self) -> str:
    response = ['Credentials error']

    if self.message:
      response.append(f'"{self.message}"')

    if self.token_file:
      response.append(f'handling {self.token_file}')

    return ' '.join(response)

  __str__=__repr__


class ConfigurationError(Exception):
  pass


class ReportError(Exception):
  """A report job did not produce a downloadable result."""
  def __init__(self, message: str = None, job_id: int = None) -> ReportError:
    super().__init__(message)
    self.message = message
    self.job_id = job_id

  def __repr__(self) -> str:
    response = [self.__class__.__name__]

    if self.job_id:
      response.append(f'(job {self.job_id})')

    if self.message:
      response.append(f'"{self.message}"')

    return ' '.join(response)

  __str__=__repr__


class ReportFailedError(ReportError):
  pass


class ReportTimeoutError(ReportError):
  pass


class ReportCancelledError(ReportError):
  pass
