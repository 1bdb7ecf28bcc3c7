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
import json
import os
from typing import Any, Callable, Dict, Mapping, Optional

import dataclasses_json
import pytz
from dateutil.parser import parse

from admanager2drive.exceptions import ConfigurationError
from admanager2drive.services import Service

ENVIRONMENT_PREFIX = 'ADMANAGER2DRIVE_'

# Casts for the non-string settings when they arrive as text.
_CONVERTERS: Dict[str, Callable[[str], Any]] = {
  'oauth_port': int,
  'interval': float,
  'poll_interval': float,
  'poll_backoff': float,
  'max_poll_interval': float,
  'report_timeout': float,
}


@dataclasses_json.dataclass_json
@dataclasses.dataclass
class RefreshConfig(object):
  googleads_yaml: str = 'googleads.yaml'
  api_version: str = Service.AD_MANAGER.definition.version
  client_secrets: str = 'client_secrets.json'
  token_file: str = 'tokens/drive_token.json'
  oauth_port: int = 8888
  drive_file_id: Optional[str] = None
  drive_file_name: str = 'delivery-report.csv'
  interval: float = 60 * 60
  poll_interval: float = 30
  poll_backoff: float = 1.0
  max_poll_interval: float = 300
  report_timeout: Optional[float] = None
  start_date: str = '2020-01-01T00:00:00'
  timezone: str = 'America/New_York'

  @classmethod
  def load(cls,
           config_file: Optional[str] = None,
           environ: Mapping[str, str] = os.environ,
           overrides: Optional[Mapping[str, Any]] = None) -> RefreshConfig:
    """Assembles the configuration.

    Sources are layered, later ones winning: the dataclass defaults, the
    JSON config file, `ADMANAGER2DRIVE_*` environment variables and finally
    the explicit overrides (the command line flags). `None` overrides are
    ignored so unset flags don't mask the other sources.

    Args:
        config_file (str, optional): JSON file of settings.
        environ (Mapping[str, str]): the environment.
        overrides (Mapping[str, Any], optional): highest precedence values.

    Returns:
        RefreshConfig: the merged configuration
    """
    names = [field.name for field in dataclasses.fields(cls)]
    settings = {}

    if config_file:
      with open(config_file, 'r') as f:
        settings.update(
          {k: v for k, v in json.load(f).items() if k in names})

    for name in names:
      if (value := environ.get(f'{ENVIRONMENT_PREFIX}{name.upper()}')) \
          is not None:
        settings[name] = value

    if overrides:
      settings.update(
        {k: v for k, v in overrides.items() if k in names and v is not None})

    for name, convert in _CONVERTERS.items():
      if isinstance(settings.get(name), str):
        try:
          settings[name] = convert(settings[name])
        except ValueError as e:
          raise ConfigurationError(f'Invalid value for {name}: {e}') from e

    return cls(**settings)

  def validate(self) -> RefreshConfig:
    """Checks the configuration can drive a refresh.

    Raises:
        ConfigurationError: for the first invalid setting found.

    Returns:
        RefreshConfig: self, to allow chaining.
    """
    if not self.drive_file_id:
      raise ConfigurationError('drive_file_id is required')

    for name in ['interval', 'poll_interval', 'max_poll_interval']:
      if getattr(self, name) <= 0:
        raise ConfigurationError(f'{name} must be positive')

    if self.poll_backoff < 1:
      raise ConfigurationError('poll_backoff must be at least 1')

    if self.report_timeout is not None and self.report_timeout <= 0:
      raise ConfigurationError('report_timeout must be positive')

    try:
      start = parse(self.start_date)
    except (ValueError, OverflowError) as e:
      raise ConfigurationError(f'Invalid start_date: {e}') from e

    # The report's time zone applies to the start date too.
    if start.tzinfo is not None:
      raise ConfigurationError(
        f'start_date {self.start_date} must not carry a UTC offset; '
        f'it is read in {self.timezone}')

    try:
      pytz.timezone(self.timezone)
    except pytz.UnknownTimeZoneError as e:
      raise ConfigurationError(f'Unknown timezone {self.timezone}') from e

    return self
