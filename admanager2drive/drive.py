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
import os
import tempfile
from typing import Optional

import dataclasses_json
from googleapiclient import http

from admanager2drive import ReportPublisher, discovery
from admanager2drive.credentials import Credentials
from admanager2drive.services import Service

CSV_MIME_TYPE = 'text/csv'


@dataclasses_json.dataclass_json
@dataclasses.dataclass(frozen=True)
class PublishResult(object):
  id: str
  name: Optional[str] = None


class Drive(ReportPublisher):
  """Google Drive destination.

  Overwrites the content of one existing Drive file. The file keeps its id
  and name, so anything reading it (a Tableau data source, say)
  picks up the new data without being reconfigured.
  """
  def __init__(self, credentials: Credentials, file_id: str,
               file_name: str = 'delivery-report.csv') -> Drive:
    self.credentials = credentials
    self.file_id = file_id
    self.file_name = file_name

  def publish(self, payload: str) -> PublishResult:
    """Replaces the Drive file's content with the payload.

    The payload is staged in a temporary directory which is removed however
    the upload ends. An update call that fails leaves the Drive file as it
    was.

    Args:
        payload (str): the report CSV text.

    Returns:
        PublishResult: the updated file's id and name
    """
    service = discovery.get_service(Service.DRIVE, self.credentials)

    with tempfile.TemporaryDirectory(prefix='admanager2drive-') as staging:
      path = os.path.join(staging, self.file_name)
      with open(path, 'w', encoding='utf-8', newline='') as staged:
        staged.write(payload)

      with open(path, 'rb') as staged:
        media = http.MediaIoBaseUpload(staged, mimetype=CSV_MIME_TYPE)
        updated = service.files().update(fileId=self.file_id,
                                         body={'name': self.file_name},
                                         media_body=media,
                                         fields='id,name').execute()

    result = PublishResult(id=updated['id'], name=updated.get('name'))
    logging.info(f'Drive file {result.name} updated, file id {result.id}')
    return result
