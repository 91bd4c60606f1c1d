#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re
from pathlib import Path

from setuptools import find_packages, setup

# parsed rather than imported, setup.py runs before the dependencies are installed
_version_file = Path(__file__).parent / 'shadenbt' / 'version.py'
__version__ = re.search(r"^__version__ = '([^']+)'", _version_file.read_text(), re.MULTILINE).group(1)

install_requires = [
    'structlog',
    'pydantic>=2',
    'typing_extensions',
    'pyyaml',
    'mutf8',
]

setup(
    name='shadenbt',
    version=__version__,
    description='ShadeNBT tagged binary codec',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache-2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('shadenbt_tests', 'shadenbt_tests.*')),
    package_data={'shadenbt.conf': ['*.yml']},
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
)
