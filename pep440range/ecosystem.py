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
"""Ecosystem helpers."""

from abc import ABC, abstractmethod
from typing import Any

from packaging.version import InvalidVersion, Version

from . import range_update
from . import versioning


class OrderedEcosystem(ABC):
  """Ecosystem helper that supports comparison between versions."""

  @property
  def name(self) -> str:
    """Get the name of the ecosystem."""
    return self.__class__.__name__

  @abstractmethod
  def sort_key(self, version: str) -> Any:
    """Comparable key for a version.

    If the version string is invalid, return a very large version.
    """

  def sort_versions(self, versions: list[str]):
    """Sort versions."""
    versions.sort(key=self.sort_key)


class PyPI(OrderedEcosystem):
  """PyPI ecosystem helpers."""

  _INVALID_VERSION = Version('999999')

  def sort_key(self, version):
    """Sort key."""
    try:
      return versioning.parse(version)
    except (InvalidVersion, TypeError):
      # Unparsable versions sort after everything else so that they never
      # match a range by accident.
      return self._INVALID_VERSION

  def is_version(self, version: str) -> bool:
    return versioning.is_version(version)

  def is_valid(self, value: str) -> bool:
    """Whether value is a version or a range."""
    return self.is_version(value) or versioning.is_range(value)

  def is_stable(self, version: str) -> bool:
    """Whether version is neither a pre-release nor a dev release."""
    try:
      return not versioning.parse(version).is_prerelease
    except InvalidVersion:
      return False

  def is_single_version(self, value: str) -> bool:
    """Whether value accepts exactly one version."""
    if self.is_version(value):
      return True

    clauses = versioning.parse_range(value)
    if not clauses or len(clauses) != 1:
      return False

    clause = clauses[0]
    return (clause.operator in ('==', '===') and not clause.prefix and
            self.is_version(clause.version))

  def matches(self, version: str, range_: str) -> bool:
    return versioning.satisfies(version, range_)

  def _satisfying(self, versions: list[str], range_: str) -> list[str]:
    found = [
        v for v in versions
        if self.is_version(v) and versioning.satisfies(v, range_)
    ]
    self.sort_versions(found)
    return found

  def get_satisfying_version(self, versions: list[str],
                             range_: str) -> str | None:
    """Highest version that satisfies range_."""
    found = self._satisfying(versions, range_)
    return found[-1] if found else None

  def min_satisfying_version(self, versions: list[str],
                             range_: str) -> str | None:
    """Lowest version that satisfies range_."""
    found = self._satisfying(versions, range_)
    return found[0] if found else None

  def _release_part(self, version: str, index: int) -> int | None:
    release = versioning.release(version)
    if not release:
      return None
    return release[index] if index < len(release) else 0

  def get_major(self, version: str) -> int | None:
    return self._release_part(version, 0)

  def get_minor(self, version: str) -> int | None:
    return self._release_part(version, 1)

  def get_patch(self, version: str) -> int | None:
    return self._release_part(version, 2)

  def get_new_value(self, current_value: str, range_strategy: str,
                    current_version: str | None,
                    new_version: str) -> str | None:
    return range_update.get_new_value(current_value, range_strategy,
                                      current_version, new_version)

  def is_less_than_range(self, version: str, range_: str) -> bool:
    return range_update.is_less_than_range(version, range_)


_ecosystems = {
    'PyPI': PyPI(),
}


def get(name: str) -> OrderedEcosystem | None:
  """Get ecosystem helpers for a given ecosystem."""
  return _ecosystems.get(name)
