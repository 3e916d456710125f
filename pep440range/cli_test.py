# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Command line tests."""

import contextlib
import io
import json
import logging
import os
import tempfile
import unittest
from unittest import mock

from . import cli
from . import logs


class _CaptureHandler(logging.Handler):

  def __init__(self):
    super().__init__()
    self.records = []

  def emit(self, record):
    self.records.append(record)


class CliTest(unittest.TestCase):
  """Command line tests."""

  def setUp(self):
    logger = logging.getLogger('pep440range')
    self.addCleanup(logger.setLevel, logger.level)
    self.addCleanup(self._remove_handler)

  def _remove_handler(self):
    # pylint: disable=protected-access
    if logs._local_handler is not None:
      logging.getLogger('pep440range').removeHandler(logs._local_handler)
      logs._local_handler = None

  def _remove_error_reporting_filters(self):
    # pylint: disable=protected-access
    for handler in logging.getLogger().handlers:
      for f in list(handler.filters):
        if isinstance(f, logs._ErrorReportingFilter):
          handler.removeFilter(f)

  def _run(self, argv):
    stdout = io.StringIO()
    with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(
        io.StringIO()):
      status = cli.main(argv)
    return status, stdout.getvalue()

  def test_new_value(self):
    """Test new-value."""
    status, output = self._run([
        'new-value', '--current-value', '>=1.0,<2.0', '--strategy', 'replace',
        '--current-version', '1.5', '--new-version', '2.3'
    ])
    self.assertEqual(0, status)
    self.assertEqual('>=2.3,<3.0\n', output)

  def test_new_value_failure(self):
    """Test new-value exits with 1 when no range can be computed."""
    status, output = self._run(
        ['new-value', '--current-value', '===1.0', '--new-version', '2.0'])
    self.assertEqual(1, status)
    self.assertEqual('', output)

  def test_less_than_range(self):
    """Test less-than-range."""
    self.assertEqual((0, 'true\n'),
                     self._run(['less-than-range', '0.9.0', '>=1.0.0']))
    self.assertEqual((0, 'false\n'),
                     self._run(['less-than-range', '1.5.0', '>=1.0.0']))

  def test_batch(self):
    """Test batch."""
    with tempfile.TemporaryDirectory() as tmp_dir:
      path = os.path.join(tmp_dir, 'requests.json')
      with open(path, 'w') as f:
        json.dump([{
            'package': 'foo',
            'currentValue': '==1.2.*',
            'rangeStrategy': 'replace',
            'currentVersion': '1.2.3',
            'newVersion': '1.4.0',
        }], f)

      status, output = self._run(['--verbose', 'batch', path])

    self.assertEqual(0, status)
    self.assertListEqual([{
        'package': 'foo',
        'currentValue': '==1.2.*',
        'newVersion': '1.4.0',
        'newValue': '==1.4.*',
    }], json.loads(output))
    self.assertEqual(logging.DEBUG, logging.getLogger('pep440range').level)

  def test_gcp_service(self):
    """Test --gcp-service routes logs through Cloud Logging handlers."""
    root = logging.getLogger()
    self.addCleanup(root.setLevel, root.level)
    handler = _CaptureHandler()
    self.addCleanup(root.removeHandler, handler)
    self.addCleanup(self._remove_error_reporting_filters)

    with mock.patch.object(logs.google_logging, 'Client') as client:
      client.return_value.setup_logging.side_effect = (
          lambda: root.addHandler(handler))
      status, output = self._run([
          '--gcp-service', 'range-updater', 'new-value', '--current-value',
          '===1.0', '--new-version', '2.0'
      ])

    self.assertEqual(1, status)
    self.assertEqual('', output)
    client.return_value.setup_logging.assert_called_once_with()
    # pylint: disable=protected-access
    filters = [
        f for f in handler.filters if isinstance(f, logs._ErrorReportingFilter)
    ]
    self.assertEqual(1, len(filters))
    self.assertEqual('range-updater', filters[0].service_name)
    self.assertIsNone(logs._local_handler)
    self.assertEqual(logging.INFO, root.level)

    self.assertEqual(1, len(handler.records))
    record = handler.records[0]
    self.assertEqual('pep440range.range_update', record.name)
    self.assertEqual('===1.0', record.json_fields['current_value'])


if __name__ == '__main__':
  unittest.main()
