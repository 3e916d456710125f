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
"""PEP 440 version and specifier primitives.

Thin layer over `packaging` exposing the handful of operations the range
update logic needs: release tuples, ordering predicates, range satisfaction,
and splitting a range into its clauses while keeping their order.
"""

from __future__ import annotations

from attr import attrib, attrs
from packaging.specifiers import InvalidSpecifier, Specifier, SpecifierSet
from packaging.version import InvalidVersion, Version

from . import config

WILDCARD_SUFFIX = '.*'

# Longest first, so that `===` is not read as `==`.
OPERATORS = ('===', '~=', '==', '!=', '<=', '>=', '<', '>')


@attrs(frozen=True, slots=True)
class Clause:
  """One `operator version[.*]` unit of a range."""
  operator: str = attrib()
  version: str = attrib()
  # Whether the version carried a trailing `.*`, which is not part of
  # `version`.
  prefix: bool = attrib(default=False)

  def __str__(self) -> str:
    suffix = WILDCARD_SUFFIX if self.prefix else ''
    return f'{self.operator}{self.version}{suffix}'


def parse(version: str) -> Version:
  """Parse a version. Raises InvalidVersion."""
  return Version(version)


def is_version(version: str) -> bool:
  """Returns whether the string is a valid PEP 440 version."""
  try:
    parse(version)
  except (InvalidVersion, TypeError):
    return False

  return True


def release(version: str) -> tuple[int, ...]:
  """Release segment of a version, or an empty tuple if it is invalid."""
  try:
    return parse(version).release
  except InvalidVersion:
    return ()


def lt(a: str, b: str) -> bool:
  return parse(a) < parse(b)


def lte(a: str, b: str) -> bool:
  return parse(a) <= parse(b)


def gte(a: str, b: str) -> bool:
  return parse(a) >= parse(b)


def parse_range(range_: str) -> list[Clause] | None:
  """Split a range into its clauses, preserving their order.

  Returns None if any clause is invalid, and an empty list for an empty
  range (which accepts any version).
  """
  clauses = []
  for part in range_.split(','):
    part = part.strip()
    if not part:
      continue

    try:
      specifier = Specifier(part)
    except InvalidSpecifier:
      return None

    version = specifier.version
    prefix = version.endswith(WILDCARD_SUFFIX)
    if prefix:
      version = version[:-len(WILDCARD_SUFFIX)]

    clauses.append(Clause(specifier.operator, version, prefix))

  return clauses


def is_range(range_: str) -> bool:
  """Returns whether the string is a valid PEP 440 range."""
  return parse_range(range_) is not None


def satisfies(version: str, range_: str) -> bool:
  """Returns whether the version satisfies every clause of the range."""
  try:
    specifiers = SpecifierSet(range_)
    return specifiers.contains(version, prereleases=config.prereleases)
  except (InvalidSpecifier, InvalidVersion):
    return False
