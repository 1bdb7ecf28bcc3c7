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
import logging
from typing import Any

from admanager2drive import ad_manager
from admanager2drive.config import RefreshConfig
from admanager2drive.credentials import Credentials


@dataclasses.dataclass(frozen=True)
class RefreshContext(object):
  """The process wide sessions, built once and shared by every cycle."""
  config: RefreshConfig
  ad_manager_client: Any
  drive_credentials: Credentials

  @classmethod
  def create(cls, config: RefreshConfig) -> RefreshContext:
    """Validates the configuration and opens the sessions.

    Any failure here is an initialization failure and is left to propagate.

    Args:
        config (RefreshConfig): the configuration.

    Returns:
        RefreshContext: the context
    """
    config.validate()
    client = ad_manager.load_client(config.googleads_yaml)
    logging.info(f'Ad Manager client loaded from {config.googleads_yaml}')

    drive_credentials = Credentials(client_secrets=config.client_secrets,
                                    token_file=config.token_file,
                                    port=config.oauth_port)
    return cls(config=config,
               ad_manager_client=client,
               drive_credentials=drive_credentials)
