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
"""Logging helpers.

Range update diagnostics carry their context in a `json_fields` record
attribute, which Cloud Logging turns into a structured payload.
"""

import logging
import sys

from google.cloud import logging as google_logging
from google.cloud.logging.handlers import StructuredLogHandler

_PACKAGE_LOGGER = 'pep440range'

_local_handler: logging.Handler | None = None


class _ErrorReportingFilter:
  """
  A logging filter that adds necessary json fields to error logs so that they
  can be picked up by Error Reporting.

  https://cloud.google.com/error-reporting/docs/formatting-error-messages#log-text
  """

  def __init__(self, service_name: str) -> None:
    self.service_name = service_name

  def filter(self, record: logging.LogRecord) -> bool:
    """Add the error reporting fields to json_fields."""
    if not hasattr(record, 'json_fields'):
      record.json_fields = {}

    if record.levelno >= logging.ERROR and not record.exc_info:
      record.json_fields.update({
          '@type':
              'type.googleapis.com/google.devtools.clouderrorreporting.v1beta1.ReportedErrorEvent',  # pylint: disable=line-too-long
          'serviceContext': {
              'service': self.service_name,
          },
          'context': {
              'reportLocation': {
                  'filePath': record.pathname,
                  'lineNumber': record.lineno,
                  'functionName': record.funcName,
              }
          },
      })

    return True


def setup_gcp_logging(service_name: str):
  """Set up GCP logging and error reporting."""
  logging_client = google_logging.Client()
  logging_client.setup_logging()

  # Logger filters only see records created on that logger, so the filter goes
  # on the handlers to also cover records propagated from `pep440range.*`.
  root = logging.getLogger()
  error_reporting_filter = _ErrorReportingFilter(service_name)
  for handler in root.handlers:
    handler.addFilter(error_reporting_filter)
  root.setLevel(logging.INFO)


def setup_local_logging(level: int = logging.WARNING) -> logging.Handler:
  """Log range update diagnostics to stderr as structured JSON lines."""
  global _local_handler
  logger = logging.getLogger(_PACKAGE_LOGGER)
  if _local_handler is not None:
    logger.removeHandler(_local_handler)

  handler = StructuredLogHandler(stream=sys.stderr)
  logger.addHandler(handler)
  _local_handler = handler
  logger.setLevel(level)
  return handler
