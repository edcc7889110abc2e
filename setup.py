# SPDX-License-Identifier: Apache-2.0
#
#!/usr/bin/env python
import io
import os
from setuptools import setup, find_packages

ROOT_DIR = os.path.dirname(__file__)
SOURCE_DIR = os.path.join(ROOT_DIR)

exec(open('foodtrace/version.py').read())

with open('./requirements.txt') as reqs_txt:
    requirements = [line for line in reqs_txt]

with open('./requirements-test.txt') as test_reqs_txt:
    test_requirements = [line for line in test_reqs_txt]

setup(
    name='foodtrace-gateway',
    version=VERSION,  # noqa: F821
    keywords=('Hyperledger Fabric', 'REST', 'Gateway', 'Provenance'),
    license='Apache License v2.0',
    description="REST gateway for the food provenance chaincode "
                "on Hyperledger Fabric.",
    long_description=io.open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=('test', 'test.*')),
    platforms='any',
    python_requires='>=3.8',
    install_requires=requirements,
    tests_require=test_requirements,
    extras_require={'test': test_requirements},
    entry_points={
        'console_scripts': [
            'foodtrace-gateway=foodtrace.server.cli:main',
        ],
    },
    zip_safe=False,
    test_suite='test',
    classifiers=[
            'Development Status :: 3 - Alpha',
            'Environment :: Web Environment',
            'Intended Audience :: Developers',
            'Operating System :: OS Independent',
            'Programming Language :: Python',
            'Programming Language :: Python :: 3',
            'Topic :: Utilities',
            'License :: OSI Approved :: Apache Software License',
    ],
    include_package_data=True,
)
