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
import os
import unittest
from unittest import mock

from admanager2drive import drive
from admanager2drive.credentials import Credentials
from admanager2drive.exceptions import CredentialsError
from admanager2drive.services import Service

CLASS_UNDER_TEST = 'admanager2drive.drive'

FILE_ID = '1aBcD-eFgH'
PREVIOUS = b'date,impressions\n2024-05-31,10\n'
PAYLOAD = 'date,impressions\n2024-05-31,10\n2024-06-01,12\n'


class FakeDriveFiles(object):
  """A single Drive file, recording what is uploaded over it."""
  def __init__(self, file_id: str, content: bytes = b'',
               error: Exception = None):
    self.file_id = file_id
    self.name = 'delivery-report.csv'
    self.content = content
    self.error = error
    self.uploads = []
    self.staged = []

  def files(self):
    return self

  def update(self, fileId, body, media_body, fields):
    request = mock.Mock()

    def _execute():
      self.staged.append(media_body.stream().name)
      if self.error:
        raise self.error
      self.uploads.append((fileId, media_body.mimetype()))
      self.content = media_body.getbytes(0, media_body.size())
      self.name = body['name']
      return {'id': self.file_id, 'name': self.name}

    request.execute.side_effect = _execute
    return request


class DriveTest(unittest.TestCase):
  def setUp(self):
    self.credentials = mock.create_autospec(Credentials, instance=True)
    self.storage = FakeDriveFiles(FILE_ID, content=PREVIOUS)
    patcher = mock.patch(f'{CLASS_UNDER_TEST}.discovery.get_service',
                         return_value=self.storage)
    self.get_service = patcher.start()
    self.addCleanup(patcher.stop)

  def _drive(self):
    return drive.Drive(credentials=self.credentials, file_id=FILE_ID)

  def test_publish(self):
    result = self._drive().publish(PAYLOAD)

    self.assertEqual(drive.PublishResult(id=FILE_ID,
                                         name='delivery-report.csv'), result)
    self.assertEqual(PAYLOAD.encode('utf-8'), self.storage.content)
    self.assertEqual([(FILE_ID, 'text/csv')], self.storage.uploads)
    self.get_service.assert_called_once_with(Service.DRIVE, self.credentials)

  def test_publish_is_repeatable(self):
    publisher = self._drive()

    first = publisher.publish(PAYLOAD)
    second = publisher.publish(PAYLOAD)

    self.assertEqual(first.id, second.id)
    self.assertEqual(FILE_ID, second.id)
    self.assertEqual(PAYLOAD.encode('utf-8'), self.storage.content)
    self.assertEqual(2, len(self.storage.uploads))

  def test_publish_empty_payload(self):
    self._drive().publish('')

    self.assertEqual(b'', self.storage.content)

  def test_publish_keeps_line_endings(self):
    payload = 'a,b\r\n1,2\r\n'
    self._drive().publish(payload)

    self.assertEqual(payload.encode('utf-8'), self.storage.content)

  def test_staged_file_removed(self):
    self._drive().publish(PAYLOAD)

    staged = self.storage.staged[0]
    self.assertTrue(staged.endswith('delivery-report.csv'))
    self.assertFalse(os.path.exists(staged))
    self.assertFalse(os.path.exists(os.path.dirname(staged)))

  def test_upload_failure(self):
    self.storage.error = ConnectionError('offline')

    with self.assertRaises(ConnectionError):
      self._drive().publish(PAYLOAD)

    self.assertEqual(PREVIOUS, self.storage.content)
    self.assertFalse(os.path.exists(self.storage.staged[0]))

  def test_authorization_failure(self):
    self.get_service.side_effect = CredentialsError(message='not found')

    with self.assertRaises(CredentialsError):
      self._drive().publish(PAYLOAD)

    self.assertEqual(PREVIOUS, self.storage.content)

  def test_publish_result_dict(self):
    self.assertEqual({'id': FILE_ID, 'name': 'delivery-report.csv'},
                     drive.PublishResult(
                       id=FILE_ID, name='delivery-report.csv').to_dict())


if __name__ == '__main__':
  unittest.main()
