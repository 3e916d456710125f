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
"""setup.py for pep440range."""
import setuptools

with open('README.md', 'r') as fh:
  long_description = fh.read()

setuptools.setup(
    name='pep440range',
    version='0.1.0',
    author='OSV authors',
    author_email='osv-discuss@googlegroups.com',
    description='PEP 440 version range updates',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages(include=['pep440range']),
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
    ],
    install_requires=[
        'google-cloud-logging',
        'PyYAML',
        'attrs',
        'jsonschema',
        'packaging>=22.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['pep440range=pep440range.cli:main'],
    },
    package_data={
        # Include any JSON schemas.
        '': ['schema/*.json'],
    },
    python_requires='>=3.10',
    zip_safe=False,
)
