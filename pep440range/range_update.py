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
"""PEP 440 range updates.

Given a range such as `>=1.0,<2.0`, a range strategy and a newly released
version, compute the range that should replace it.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from packaging.version import InvalidVersion

from . import config
from . import future_version
from . import versioning

logger = logging.getLogger(__name__)

_OPERATOR_PATTERN = re.compile(r'(===|~=|==|!=|<=|>=|<|>)')
_WHITESPACE_PATTERN = re.compile(r'\s*')

_SEPARATOR = ', '
_COMPACT_SEPARATOR = ','


class UnsupportedOperatorError(Exception):
  """Range clause that cannot be rewritten."""


def rewrite_clause(clause: versioning.Clause, new_version: str,
                   range_strategy: str,
                   clauses: Sequence[versioning.Clause]) -> str:
  """Rewrite a single clause so that it admits new_version.

  Args:
    clause: the clause to rewrite.
    new_version: the version the range must accept.
    range_strategy: the range strategy in use.
    clauses: every clause of the range, used to infer the precision of
      `>=x,<y` brackets.

  Returns:
    The rewritten clause.

  Raises:
    UnsupportedOperatorError: the clause can not express any update.
  """
  operator = clause.operator

  # Exclusions are kept as they are.
  if operator == '!=':
    return str(clause)

  # Lower bounds.
  if operator in ('>', '>='):
    if versioning.lte(new_version, clause.version):
      # Rollback below the current lower bound.
      return '>=' + new_version
    if range_strategy in ('replace', 'bump') and operator == '>=':
      return operator + new_version
    return str(clause)

  # Upper bounds.
  if operator == '<':
    if not versioning.gte(new_version, clause.version):
      return str(clause)

    precision = future_version.get_user_replace_precision(clauses)
    if range_strategy == 'replace' and precision is not None:
      return operator + future_version.get_future_replace_version(
          new_version, precision)
    return operator + future_version.get_future_version(
        clause.version, new_version, 1)

  if clause.prefix:
    prefix = future_version.get_future_version(clause.version, new_version, 0)
    return operator + prefix + versioning.WILDCARD_SUFFIX

  if operator in ('==', '~=', '<='):
    return operator + new_version

  # `===` compares strings, there is no way to move it to a new version.
  raise UnsupportedOperatorError(f'Unable to update clause {clause}')


def get_new_value(current_value: str, range_strategy: str,
                  current_version: str | None, new_version: str) -> str | None:
  """Compute the range that should replace current_value.

  Args:
    current_value: the current range, e.g. `>=1.0,<2.0`.
    range_strategy: one of `pin`, `auto`, `replace`, `bump`, `widen`. Other
      strategies are handled as `replace`.
    current_version: the version currently in use.
    new_version: the version the new range must accept.

  Returns:
    The new range, current_value when no change is needed, or None when no
    valid range could be computed.
  """
  if range_strategy == 'pin':
    return '==' + new_version

  # A bare version only accepts that specific version.
  if current_value == current_version:
    return new_version

  clauses = versioning.parse_range(current_value)
  if clauses is None:
    logger.warning(
        'Invalid PEP 440 range: %s',
        current_value,
        extra={'json_fields': {
            'current_value': current_value
        }})
    return None

  if not clauses:
    # An empty range accepts any version.
    logger.warning('Empty range: %r', current_value)
    return current_value

  if range_strategy in ('auto', 'replace'):
    if versioning.satisfies(new_version, current_value):
      return current_value

  if range_strategy not in config.SUPPORTED_STRATEGIES:
    logger.debug('Unsupported range strategy %s, using %s instead.',
                 range_strategy, config.FALLBACK_STRATEGY)
    return get_new_value(current_value, config.FALLBACK_STRATEGY,
                         current_version, new_version)

  if any(clause.operator == '===' for clause in clauses):
    logger.warning(
        'Arbitrary equality (===) is not supported: %s',
        current_value,
        extra={'json_fields': {
            'current_value': current_value
        }})
    return None

  try:
    rewritten = [
        rewrite_clause(clause, new_version, range_strategy, clauses)
        for clause in clauses
    ]
  except UnsupportedOperatorError as e:
    logger.error(
        'Failed to process range %s: %s',
        current_value,
        e,
        extra={
            'json_fields': {
                'current_value': current_value,
                'new_version': new_version,
            }
        })
    return None
  except InvalidVersion as e:
    logger.warning('Invalid version while updating %s: %s', current_value, e)
    return None

  separator = _SEPARATOR
  if _SEPARATOR not in current_value:
    separator = _COMPACT_SEPARATOR
  result = separator.join(rewritten)

  if not versioning.satisfies(new_version, result):
    logger.warning(
        'Failed to calculate new value for %s: %s does not accept %s',
        current_value,
        result,
        new_version,
        extra={
            'json_fields': {
                'result': result,
                'new_version': new_version,
                'current_value': current_value,
            }
        })
    return None

  return result


def _split_clause(clause: str) -> list[str]:
  """Split `>=1.0` into `['>=', '1.0']`."""
  clause = _WHITESPACE_PATTERN.sub('', clause)
  return _OPERATOR_PATTERN.split(clause)[1:]


def is_less_than_range(version: str, range_: str) -> bool:
  """Returns whether version sorts below the lower bound of range_.

  Clauses that only bound from above (`!=`, `<=`, `<`) do not place a lower
  bound. A range made only of such clauses has nothing to be below. Malformed
  input is never below a range.
  """
  try:
    restrictive = False
    results = []
    for clause in range_.split(','):
      parts = _split_clause(clause)
      if not parts:
        if clause.strip():
          # Bare version without an operator.
          restrictive = True
          results.append(False)
        continue

      operator, bound = parts[0], parts[1]

      if operator in ('!=', '<=', '<'):
        results.append(True)
        continue

      restrictive = True
      if operator in ('~=', '==', '>=', '==='):
        results.append(versioning.lt(version, bound))
      elif operator == '>':
        results.append(versioning.lte(version, bound))
      else:
        results.append(False)

    result = all(results)
    if not restrictive:
      return not result
    return result
  except (InvalidVersion, IndexError, TypeError, AttributeError):
    return False
