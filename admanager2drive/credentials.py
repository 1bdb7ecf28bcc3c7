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

import json
import logging
import os
from typing import Any, Dict, Optional, Sequence

from google.auth.exceptions import RefreshError
from google.auth.transport import requests
from google.oauth2 import credentials
from google_auth_oauthlib import flow

from admanager2drive.exceptions import CredentialsError
from admanager2drive.services import Service


class Credentials(object):
  """File backed OAuth credentials handler.

  The user's token is cached as JSON in `token_file`. A cached token is
  refreshed when it has expired and written back. With no cached token the
  installed-app flow is run against a local server, unless the handler is
  non-interactive, in which case a CredentialsError is raised and the token
  has to be created out of band (see cli/create_token.py).
  """
  def __init__(self,
               client_secrets: str = 'client_secrets.json',
               token_file: str = 'tokens/drive_token.json',
               scopes: Sequence[str] = Service.DRIVE.definition.scopes,
               port: int = 8888,
               interactive: bool = True) -> Credentials:
    self._client_secrets = client_secrets
    self._token_file = token_file
    self._scopes = list(scopes)
    self._port = port
    self._interactive = interactive

  @property
  def token_details(self) -> Optional[Dict[str, Any]]:
    """The user's cached refresh and access token, if there is one."""
    try:
      with open(self._token_file, 'r') as token:
        if data := token.read():
          return json.loads(data)
    except FileNotFoundError:
      pass

    return None

  def _refresh_credentials(self, creds: credentials.Credentials) -> None:
    """Refreshes the Google OAuth credentials and stores the result.

    Args:
        creds (credentials.Credentials): the expired credentials.
    """
    try:
      creds.refresh(requests.Request())
    except RefreshError as e:
      raise CredentialsError(message=f'refresh failed: {e}',
                             token_file=self._token_file) from e
    self.store_credentials(creds)

  def authorize(self) -> credentials.Credentials:
    """Runs the installed-app consent flow and stores the token.

    Returns:
        credentials.Credentials: the newly authorized credentials
    """
    if not os.path.exists(self._client_secrets):
      raise CredentialsError(
        message=f'client secrets {self._client_secrets} not found',
        token_file=self._token_file)

    appflow = flow.InstalledAppFlow.from_client_secrets_file(
      self._client_secrets, scopes=self._scopes)
    creds = appflow.run_local_server(port=self._port)
    logging.info(f'Authorized, storing token in {self._token_file}')
    self.store_credentials(creds)
    return creds

  @property
  def credentials(self) -> credentials.Credentials:
    """Fetches the credentials.

    Returns:
       (google.oauth2.credentials.Credentials):  the credentials
    """
    if token := self.token_details:
      creds = credentials.Credentials.from_authorized_user_info(
        token, scopes=self._scopes)
      if not creds.valid:
        self._refresh_credentials(creds=creds)

    elif self._interactive:
      creds = self.authorize()

    else:
      raise CredentialsError(message='not found', token_file=self._token_file)

    return creds

  def store_credentials(self, creds: credentials.Credentials) -> None:
    """Stores the credentials in the token file.

    Args:
        creds (credentials.Credentials): the user credentials.
    """
    if directory := os.path.dirname(self._token_file):
      os.makedirs(directory, exist_ok=True)

    with open(self._token_file, 'w') as token:
      token.write(creds.to_json())
