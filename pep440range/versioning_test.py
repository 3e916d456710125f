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
"""PEP 440 primitive tests."""

import unittest

from . import config
from . import versioning
from .versioning import Clause


class ParseRangeTest(unittest.TestCase):
  """parse_range tests."""

  def test_order(self):
    """Test clauses keep their order."""
    self.assertListEqual([
        Clause('>=', '1.0'),
        Clause('!=', '1.5'),
        Clause('<', '2.0'),
    ], versioning.parse_range('>=1.0, !=1.5,<2.0'))
    self.assertListEqual([
        Clause('<', '2.0'),
        Clause('>=', '1.0'),
    ], versioning.parse_range('<2.0,>=1.0'))

  def test_wildcard(self):
    """Test the wildcard suffix is split from the version."""
    self.assertListEqual([Clause('==', '1.2', True)],
                         versioning.parse_range('==1.2.*'))
    self.assertListEqual([Clause('!=', '3', True)],
                         versioning.parse_range('!= 3.*'))
    self.assertEqual('==1.2.*', str(versioning.parse_range('==1.2.*')[0]))

  def test_operators(self):
    """Test every operator is recognized."""
    clauses = versioning.parse_range(
        '~=1.1, ==1.2, !=1.3, <=1.4, >=1.0, <2, >0.5, ===1.2')
    self.assertListEqual(['~=', '==', '!=', '<=', '>=', '<', '>', '==='],
                         [clause.operator for clause in clauses])

  def test_empty(self):
    """Test empty ranges."""
    self.assertListEqual([], versioning.parse_range(''))
    self.assertListEqual([], versioning.parse_range('  '))
    self.assertListEqual([Clause('>=', '1.0')],
                         versioning.parse_range('>=1.0,'))

  def test_invalid(self):
    """Test invalid ranges."""
    self.assertIsNone(versioning.parse_range('1.0.0==='))
    self.assertIsNone(versioning.parse_range('>=1.0,<two'))
    self.assertIsNone(versioning.parse_range('^1.0'))
    self.assertIsNone(versioning.parse_range('1.0'))
    self.assertFalse(versioning.is_range('foo'))
    self.assertTrue(versioning.is_range('>=1.0'))


class VersionTest(unittest.TestCase):
  """Version primitive tests."""

  def test_release(self):
    """Test release tuples."""
    self.assertEqual((2, 3), versioning.release('2.3'))
    self.assertEqual((1, 0, 5), versioning.release('1.0.5rc1'))
    self.assertEqual((2020, 1), versioning.release('1!2020.1.post2'))
    self.assertEqual((), versioning.release('not a version'))

  def test_compare(self):
    """Test ordering predicates."""
    self.assertTrue(versioning.lt('1.0', '1.0.1'))
    self.assertFalse(versioning.lt('1.0', '1.0.0'))
    self.assertTrue(versioning.lte('1.0', '1.0.0'))
    self.assertTrue(versioning.gte('2.0', '2.0rc1'))
    self.assertFalse(versioning.gte('1.9', '2.0'))

  def test_is_version(self):
    """Test is_version."""
    self.assertTrue(versioning.is_version('1.0'))
    self.assertTrue(versioning.is_version('v1.0.post1'))
    self.assertFalse(versioning.is_version('>=1.0'))
    self.assertFalse(versioning.is_version('latest'))


class SatisfiesTest(unittest.TestCase):
  """satisfies tests."""

  def test_satisfies(self):
    """Test range satisfaction."""
    self.assertTrue(versioning.satisfies('1.5', '>=1.0,<2.0'))
    self.assertFalse(versioning.satisfies('2.0', '>=1.0,<2.0'))
    self.assertTrue(versioning.satisfies('1.4.2', '==1.4.*'))
    self.assertTrue(versioning.satisfies('3.0', ''))
    self.assertTrue(versioning.satisfies('1.0', '===1.0'))

  def test_invalid(self):
    """Test invalid input never satisfies."""
    self.assertFalse(versioning.satisfies('not a version', '>=1.0'))
    self.assertFalse(versioning.satisfies('1.0', '>=1.0,<two'))

  def test_prereleases(self):
    """Test the prereleases setting."""
    self.assertTrue(versioning.satisfies('2.0rc1', '>=1.0'))

    self.addCleanup(config.set_prereleases, config.prereleases)
    config.set_prereleases(False)
    self.assertFalse(versioning.satisfies('2.0rc1', '>=1.0'))
    self.assertTrue(versioning.satisfies('2.0', '>=1.0'))


if __name__ == '__main__':
  unittest.main()
